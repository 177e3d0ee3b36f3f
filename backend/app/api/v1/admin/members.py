"""
Member administration.

Includes the one-shot maintenance endpoints that rewrite legacy member
documents into the flat shape and move the old ``boardMembers`` records
into ``members``.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_store
from app.core.exceptions import DocumentNotFoundError, FetchError
from app.db.store import DocumentStore
from app.schemas.common import CountResponse
from app.schemas.members import Member, Organization
from app.services.board import get_board_members
from app.services.legacy import (
    convert_legacy_board_member,
    fix_all_legacy_members,
    fix_legacy_member,
)
from app.services.members import (
    create_member,
    deactivate_member,
    get_member,
    get_organizations,
    list_members,
    update_member,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _unavailable(exc: FetchError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)


@router.get("/members", response_model=list[Member])
async def admin_list_members(store: DocumentStore = Depends(get_store)):
    try:
        return await list_members(store)
    except FetchError as exc:
        raise _unavailable(exc)


@router.post("/members", response_model=Member, status_code=status.HTTP_201_CREATED)
async def admin_create_member(member: Member, store: DocumentStore = Depends(get_store)):
    member_id = await create_member(store, member)
    return await get_member(store, member_id)


@router.get("/members/{member_id}", response_model=Member)
async def admin_get_member(member_id: str, store: DocumentStore = Depends(get_store)):
    member = await get_member(store, member_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return member


@router.put("/members/{member_id}", response_model=Member)
async def admin_update_member(
    member_id: str,
    member: Member,
    store: DocumentStore = Depends(get_store),
):
    try:
        return await update_member(store, member_id, member)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)


@router.post("/members/{member_id}/deactivate", status_code=status.HTTP_204_NO_CONTENT)
async def admin_deactivate_member(member_id: str, store: DocumentStore = Depends(get_store)):
    """Soft delete: the member is kept and marked inactive."""
    try:
        await deactivate_member(store, member_id)
    except DocumentNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")


@router.post("/members/normalize", response_model=CountResponse)
async def admin_normalize_all_members(store: DocumentStore = Depends(get_store)):
    fixed = await fix_all_legacy_members(store)
    return CountResponse(count=fixed, message=f"Converted {fixed} legacy member(s)")


@router.post("/members/{member_id}/normalize", response_model=dict[str, Any])
async def admin_normalize_member(member_id: str, store: DocumentStore = Depends(get_store)):
    """Rewrite one member into the flat shape and return the stored document."""
    try:
        data = await fix_legacy_member(store, member_id)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    return {"id": member_id, **data}


@router.post("/board/migrate", response_model=CountResponse)
async def admin_migrate_board_members(store: DocumentStore = Depends(get_store)):
    """Copy ``boardMembers`` records into ``members`` as flagged board members."""
    try:
        board = await get_board_members(store)
    except FetchError as exc:
        raise _unavailable(exc)

    existing = {m.full_name.lower() for m in await list_members(store) if m.is_board_member}
    migrated = 0
    for board_member in board:
        if board_member.name.lower() in existing:
            logger.info(f"Skipping {board_member.name}: already a flagged member")
            continue
        await create_member(store, Member.model_validate(convert_legacy_board_member(board_member)))
        migrated += 1

    return CountResponse(count=migrated, message=f"Migrated {migrated} board member(s)")


@router.get("/organizations", response_model=list[Organization])
async def admin_list_organizations(store: DocumentStore = Depends(get_store)):
    try:
        return await get_organizations(store)
    except FetchError as exc:
        raise _unavailable(exc)
