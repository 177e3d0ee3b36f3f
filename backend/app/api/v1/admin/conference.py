"""
Conference administration: lifecycle changes and registrant lists.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_store
from app.core.exceptions import DocumentNotFoundError, FetchError, InvalidStatusTransitionError
from app.db.store import DocumentStore
from app.schemas.conference import Conference, ConferenceStatusUpdate, Registrant
from app.services.conference import (
    get_all_conferences,
    get_conference_registrants,
    transition_conference_status,
)

router = APIRouter()


@router.get("", response_model=list[Conference])
async def admin_list_conferences(store: DocumentStore = Depends(get_store)):
    """All conferences, newest year first."""
    try:
        return await get_all_conferences(store)
    except FetchError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)


@router.patch("/{conference_id}/status", response_model=Conference)
async def admin_update_conference_status(
    conference_id: str,
    update: ConferenceStatusUpdate,
    store: DocumentStore = Depends(get_store),
):
    try:
        return await transition_conference_status(store, conference_id, update.status)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/{conference_id}/registrants", response_model=list[Registrant])
async def admin_list_registrants(conference_id: str, store: DocumentStore = Depends(get_store)):
    try:
        return await get_conference_registrants(store, conference_id)
    except FetchError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
