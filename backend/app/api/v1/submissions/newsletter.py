"""
Newsletter signup and unsubscribe.

Both endpoints answer 200 with a ``success`` flag; the message is meant to
be shown to the visitor as is.
"""
from fastapi import APIRouter, Depends

from app.core.deps import get_store
from app.db.store import DocumentStore
from app.schemas.submissions import NewsletterRequest, NewsletterResult
from app.services.newsletter import add_newsletter_subscriber, unsubscribe_newsletter

router = APIRouter()


@router.post("/subscribe", response_model=NewsletterResult, response_model_exclude_none=True)
async def subscribe(payload: NewsletterRequest, store: DocumentStore = Depends(get_store)):
    return await add_newsletter_subscriber(store, payload.email)


@router.post("/unsubscribe", response_model=NewsletterResult, response_model_exclude_none=True)
async def unsubscribe(payload: NewsletterRequest, store: DocumentStore = Depends(get_store)):
    return await unsubscribe_newsletter(store, payload.email)
