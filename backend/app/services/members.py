"""
Member and organization accessors.

Every member document passes through ``normalize_member`` on the way out,
so callers get the flat schema regardless of how the document is stored.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.exceptions import DocumentNotFoundError, FetchError, WriteError
from app.db.store import DocumentStore, StoredDocument, where
from app.schemas.content import HallOfFameMember
from app.schemas.members import Member, MemberStatus, Organization
from app.services.documents import load_collection, parse_document, parse_documents
from app.services.legacy import (
    MEMBERS_COLLECTION,
    generate_member_number,
    next_member_sequence,
    normalize_member,
)
from app.services.media import resolve_image_url

logger = logging.getLogger(__name__)

ORGANIZATIONS_COLLECTION = "organizations"


def _normalized(doc: StoredDocument) -> StoredDocument:
    return StoredDocument(id=doc.id, data=normalize_member(doc.data))


async def _load_members(store: DocumentStore, what: str, **query) -> list[Member]:
    try:
        docs = await store.list(MEMBERS_COLLECTION, **query)
    except Exception as exc:
        logger.error(f"Error fetching {what}: {exc}")
        raise FetchError(f"Failed to fetch {what}") from exc
    return parse_documents(Member, [_normalized(doc) for doc in docs])


async def list_members(store: DocumentStore) -> list[Member]:
    """All members, normalized, ordered by last name."""
    # Legacy documents only carry lastName once normalized.
    members = await _load_members(store, "members")
    return sorted(members, key=lambda m: m.last_name)


async def get_active_members(store: DocumentStore) -> list[Member]:
    members = await list_members(store)
    return [m for m in members if m.status == MemberStatus.ACTIVE]


async def get_member(store: DocumentStore, member_id: str) -> Optional[Member]:
    try:
        doc = await store.get(MEMBERS_COLLECTION, member_id)
    except Exception as exc:
        logger.error(f"Error fetching member {member_id}: {exc}")
        raise FetchError("Failed to fetch member") from exc
    if doc is None:
        return None
    return parse_document(Member, _normalized(doc))


async def create_member(store: DocumentStore, member: Member) -> str:
    """Store a new member, assigning a member number if it has none."""
    now = datetime.now(timezone.utc)
    data = member.to_document()
    try:
        if not data.get("memberNumber"):
            data["memberNumber"] = generate_member_number(
                await next_member_sequence(store, now), now
            )
        data["createdAt"] = now
        data["updatedAt"] = now
        member_id = await store.add(MEMBERS_COLLECTION, data)
    except Exception as exc:
        logger.error(f"Error creating member: {exc}")
        raise WriteError("Failed to create member") from exc

    logger.info(f"Created member {member_id} ({data['memberNumber']})")
    return member_id


async def create_member_from_application(store: DocumentStore, form: dict[str, Any]) -> str:
    """
    Record a professional membership application as a pending member.

    The member becomes active once the payment webhook confirms payment.
    """
    now = datetime.now(timezone.utc)
    preferences = form.get("communicationPreferences", {})
    member = Member(
        first_name=form["firstName"],
        last_name=form["lastName"],
        email=form["email"],
        phone=form.get("phone"),
        position=form.get("position", ""),
        years_experience=form.get("yearsExperience", 0),
        address=form.get("address", ""),
        city=form.get("city", ""),
        state=form.get("state", ""),
        zip_code=form.get("zipCode", ""),
        member_number=form.get("previousMemberNumber"),
        membership_type="professional",
        status=MemberStatus.PENDING,
        join_date=now,
        communication_preferences={
            "newsletter": preferences.get("newsletter", False),
            "updates": preferences.get("updates", False),
            "events": preferences.get("events", True),
            "mailings": False,
        },
        notes=f"Institution: {form.get('institution', '')}",
    )
    return await create_member(store, member)


async def update_member(store: DocumentStore, member_id: str, member: Member) -> Member:
    """
    Replace a member document with ``member``.

    Raises DocumentNotFoundError if the member does not exist.
    """
    existing = await store.get(MEMBERS_COLLECTION, member_id)
    if existing is None:
        raise DocumentNotFoundError(MEMBERS_COLLECTION, member_id, "Member not found")

    data = member.to_document()
    data["createdAt"] = existing.data.get("createdAt", data.get("createdAt"))
    data["updatedAt"] = datetime.now(timezone.utc)
    await store.set(MEMBERS_COLLECTION, member_id, data)
    return member.model_copy(update={"id": member_id})


async def deactivate_member(store: DocumentStore, member_id: str) -> None:
    """Soft delete: members keep their history and are marked inactive."""
    await store.update(
        MEMBERS_COLLECTION,
        member_id,
        {"status": MemberStatus.INACTIVE.value, "updatedAt": datetime.now(timezone.utc)},
    )
    logger.info(f"Deactivated member {member_id}")


async def activate_member_payment(
    store: DocumentStore,
    member_id: str,
    payment: dict[str, Any],
) -> bool:
    """
    Mark a pending member active after a completed payment.

    Returns False when no such member exists.
    """
    doc = await store.get(MEMBERS_COLLECTION, member_id)
    if doc is None:
        return False

    history = list(doc.data.get("paymentHistory") or [])
    if any(entry.get("paymentId") == payment.get("paymentId") for entry in history):
        logger.info(f"Payment {payment.get('paymentId')} already recorded for {member_id}")
        return True
    history.append(payment)

    await store.update(
        MEMBERS_COLLECTION,
        member_id,
        {
            "status": MemberStatus.ACTIVE.value,
            "paymentHistory": history,
            "updatedAt": datetime.now(timezone.utc),
        },
    )
    logger.info(f"Activated member {member_id} after payment")
    return True


async def get_hall_of_fame_members(store: DocumentStore) -> list[HallOfFameMember]:
    """Hall of fame inductees, derived from members flagged ``isHallOfFame``."""
    members = await _load_members(
        store,
        "hall of fame members",
        filters=[where("isHallOfFame", "==", True)],
        order_by="hallOfFameOrder",
    )
    current_year = datetime.now(timezone.utc).year
    return [
        HallOfFameMember(
            id=member.id,
            member_id=member.id,
            name=member.full_name,
            year=member.hall_of_fame_year or current_year,
            award_type=member.hall_of_fame_award_type or "other",
            bio=member.bio,
            image_url=resolve_image_url(member.image_url),
            achievements=member.achievements,
            order=member.hall_of_fame_order if member.hall_of_fame_order is not None else 999,
        )
        for member in members
    ]


async def get_organizations(store: DocumentStore) -> list[Organization]:
    return await load_collection(
        store,
        ORGANIZATIONS_COLLECTION,
        Organization,
        "organizations",
        filters=[where("isActive", "==", True)],
        order_by="name",
    )
