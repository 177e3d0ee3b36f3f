"""
Board of directors and past presidents.
"""
from fastapi import APIRouter, Depends

from app.core.deps import get_store
from app.data.defaults import DEFAULT_BOARD_MEMBERS, DEFAULT_PAST_PRESIDENTS
from app.db.store import DocumentStore
from app.schemas.common import SourcedListResponse
from app.schemas.content import BoardMember, PastPresident
from app.services.board import get_current_board_members, get_past_presidents
from app.services.fallback import fetch_with_fallback

router = APIRouter()


@router.get("/members", response_model=SourcedListResponse[BoardMember])
async def list_board_members(store: DocumentStore = Depends(get_store)):
    """Current board, from flagged members or the legacy board collection."""
    result = await fetch_with_fallback(
        lambda: get_current_board_members(store), DEFAULT_BOARD_MEMBERS
    )
    return SourcedListResponse[BoardMember](items=result.data, source=result.source)


@router.get("/past-presidents", response_model=SourcedListResponse[PastPresident])
async def list_past_presidents(store: DocumentStore = Depends(get_store)):
    """Past presidents, most recent first."""
    result = await fetch_with_fallback(
        lambda: get_past_presidents(store), DEFAULT_PAST_PRESIDENTS
    )
    return SourcedListResponse[PastPresident](items=result.data, source=result.source)
