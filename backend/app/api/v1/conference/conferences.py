"""
Conference details and registration availability.
"""
from fastapi import APIRouter, Depends

from app.core.deps import get_store
from app.data.defaults import DEFAULT_CONFERENCE
from app.db.store import DocumentStore
from app.schemas.common import SourcedItemResponse
from app.schemas.conference import Conference, RegistrationAvailability
from app.services.conference import get_current_conference, get_registration_availability
from app.services.fallback import fetch_with_fallback

router = APIRouter()


@router.get("/current", response_model=SourcedItemResponse[Conference])
async def read_current_conference(store: DocumentStore = Depends(get_store)):
    """
    This year's conference.

    ``item`` is null when nothing is published for the current year; the
    built-in conference is only served when the store cannot be read.
    """
    result = await fetch_with_fallback(lambda: get_current_conference(store), DEFAULT_CONFERENCE)
    return SourcedItemResponse[Conference](item=result.data, source=result.source)


@router.get("/{conference_id}/availability", response_model=RegistrationAvailability)
async def read_availability(conference_id: str, store: DocumentStore = Depends(get_store)):
    return await get_registration_availability(store, conference_id)
