"""
Board of directors accessors.

Board members can come from two places: members flagged ``isBoardMember``
in the flat schema, or the older standalone ``boardMembers`` collection.
"""
import logging

from app.db.store import DocumentStore
from app.schemas.content import BoardMember, PastPresident
from app.schemas.members import MemberStatus
from app.services.documents import load_collection
from app.services.legacy import member_to_board_member
from app.services.media import resolve_image_url
from app.services.members import list_members

logger = logging.getLogger(__name__)

BOARD_MEMBERS_COLLECTION = "boardMembers"
PAST_PRESIDENTS_COLLECTION = "pastPresidents"


async def get_board_members(store: DocumentStore) -> list[BoardMember]:
    """Board members from the ``boardMembers`` collection, by ascending order."""
    members = await load_collection(
        store, BOARD_MEMBERS_COLLECTION, BoardMember, "board members", order_by="order"
    )
    for member in members:
        member.image_url = resolve_image_url(member.image_url)
    return members


async def get_past_presidents(store: DocumentStore) -> list[PastPresident]:
    """
    Past presidents, most recent first.

    ``order`` counts back from the latest term (1 is the most recent), so
    ascending ``order`` is newest-first.
    """
    return await load_collection(
        store,
        PAST_PRESIDENTS_COLLECTION,
        PastPresident,
        "past presidents",
        order_by="order",
    )


async def get_current_board_members(store: DocumentStore) -> list[BoardMember]:
    """
    Current board, preferring active members flagged as board members.

    Falls back to the ``boardMembers`` collection when no member carries the
    flag. Both branches are logged so a half-migrated store shows up.
    """
    members = await list_members(store)
    board = [
        m for m in members
        if m.is_board_member and m.status == MemberStatus.ACTIVE
    ]
    if board:
        board.sort(key=lambda m: (m.board_order is None, m.board_order or 0))
        logger.info(f"Serving {len(board)} board member(s) from members")
        return [member_to_board_member(m) for m in board]

    logger.info("No flagged board members found, reading boardMembers collection")
    return await get_board_members(store)
