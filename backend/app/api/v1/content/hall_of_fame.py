from fastapi import APIRouter, Depends

from app.core.deps import get_store
from app.data.defaults import DEFAULT_HALL_OF_FAME_MEMBERS
from app.db.store import DocumentStore
from app.schemas.common import SourcedListResponse
from app.schemas.content import HallOfFameMember
from app.services.fallback import fetch_with_fallback
from app.services.members import get_hall_of_fame_members

router = APIRouter()


@router.get("", response_model=SourcedListResponse[HallOfFameMember])
async def list_hall_of_fame(store: DocumentStore = Depends(get_store)):
    """Hall of fame inductees in display order."""
    result = await fetch_with_fallback(
        lambda: get_hall_of_fame_members(store), DEFAULT_HALL_OF_FAME_MEMBERS
    )
    return SourcedListResponse[HallOfFameMember](items=result.data, source=result.source)
