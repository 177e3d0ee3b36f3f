from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.deps import get_store
from app.core.exceptions import FetchError
from app.db.store import DocumentStore
from app.schemas.submissions import AwardNomination, NewsletterSubscriber
from app.services.newsletter import get_newsletter_subscribers
from app.services.nominations import get_nominations_by_award

router = APIRouter()


@router.get("/newsletter/subscribers", response_model=list[NewsletterSubscriber])
async def admin_list_subscribers(store: DocumentStore = Depends(get_store)):
    try:
        return await get_newsletter_subscribers(store)
    except FetchError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)


@router.get("/nominations", response_model=list[AwardNomination])
async def admin_list_nominations(
    award_id: str = Query(..., alias="awardId"),
    store: DocumentStore = Depends(get_store),
):
    """Nominations for one award, newest first."""
    try:
        return await get_nominations_by_award(store, award_id)
    except FetchError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
