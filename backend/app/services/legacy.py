"""
Legacy member document conversion.

Older member documents nest their fields under ``personalInfo``,
``membership``, ``profile``, ``preferences`` and ``organization``. The
current schema is flat. Everything that reads members goes through
``normalize_member`` so the rest of the code only ever sees the flat shape.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from app.core.config import settings
from app.core.exceptions import DocumentNotFoundError
from app.db.store import DocumentStore
from app.schemas.content import BoardMember
from app.schemas.members import BOARD_POSITIONS_BY_ORDER, Member
from app.services.media import resolve_image_url

logger = logging.getLogger(__name__)

MEMBERS_COLLECTION = "members"

LEGACY_KEYS = ("personalInfo", "membership", "profile", "preferences", "organization")

MEMBERSHIP_TERM = timedelta(days=365)

_DATETIME = TypeAdapter(datetime)

# legacy sub-object -> [(legacy field, flat field)]
FIELD_MAP: dict[str, list[tuple[str, str]]] = {
    "personalInfo": [
        ("firstName", "firstName"),
        ("lastName", "lastName"),
        ("email", "email"),
        ("phone", "phone"),
    ],
    "membership": [
        ("status", "status"),
        ("type", "membershipType"),
        ("joinDate", "joinDate"),
        ("renewalDate", "renewalDate"),
    ],
    "profile": [
        ("activeBoardMember", "isBoardMember"),
        ("boardPosition", "boardPosition"),
        ("boardOrder", "boardOrder"),
        ("bio", "bio"),
        ("imageURL", "imageUrl"),
    ],
    "organization": [
        ("title", "position"),
    ],
}

FLAT_DEFAULTS: dict[str, Any] = {
    "firstName": "",
    "lastName": "",
    "status": "active",
    "membershipType": "professional",
    "isBoardMember": False,
    "bio": "",
    "position": "",
    "yearsExperience": 0,
    "address": "",
    "city": "",
    "zipCode": "",
    "notes": "",
}


def is_legacy_member(doc: dict[str, Any]) -> bool:
    return any(doc.get(key) is not None for key in LEGACY_KEYS)


def board_position_for_order(order: Any) -> str:
    try:
        return BOARD_POSITIONS_BY_ORDER.get(int(order), "Board Member")
    except (TypeError, ValueError):
        return "Board Member"


def organization_id_from_reference(reference: str) -> str:
    """``organizations/hzLJH8GFPglBkzhHUH21`` -> ``hzLJH8GFPglBkzhHUH21``"""
    return reference.rstrip("/").split("/")[-1]


def generate_member_number(sequence: int, now: datetime) -> str:
    return f"{settings.MEMBER_NUMBER_PREFIX}-{now.year}-{sequence:04d}"


async def next_member_sequence(store: DocumentStore, now: datetime) -> int:
    """One past both the member count and the highest number issued this year."""
    prefix = f"{settings.MEMBER_NUMBER_PREFIX}-{now.year}-"
    highest = await store.count(MEMBERS_COLLECTION)
    for stored in await store.list(MEMBERS_COLLECTION):
        number = stored.data.get("memberNumber")
        if isinstance(number, str) and number.startswith(prefix) and number[len(prefix):].isdigit():
            highest = max(highest, int(number[len(prefix):]))
    return highest + 1


def default_join_date(renewal_date: Any, now: datetime) -> datetime:
    """Join date for records that never stored one, kept a term before the renewal."""
    if renewal_date is None:
        return now
    try:
        renewal = _DATETIME.validate_python(renewal_date)
    except ValidationError:
        return now
    if renewal.tzinfo is None:
        renewal = renewal.replace(tzinfo=timezone.utc)
    return min(now, renewal - MEMBERSHIP_TERM)


def build_flat_member_patch(
    doc: dict[str, Any],
    sequence: Optional[int] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Build the update patch that moves a legacy document to the flat shape.

    Each legacy sub-object found is copied through FIELD_MAP and then set
    to None in the patch so the store removes it. Required flat fields
    missing from both shapes get type-appropriate empty values. A member
    number is only assigned when ``sequence`` is given.
    """
    now = now or datetime.now(timezone.utc)
    patch: dict[str, Any] = {}

    for legacy_key, mapping in FIELD_MAP.items():
        section = doc.get(legacy_key)
        if not isinstance(section, dict):
            continue
        for legacy_field, flat_field in mapping:
            value = section.get(legacy_field)
            if value not in (None, ""):
                patch[flat_field] = value

    membership = doc.get("membership")
    if isinstance(membership, dict):
        patch.setdefault("renewalDate", now + MEMBERSHIP_TERM)
        patch["expirationDate"] = patch["renewalDate"]

    profile = doc.get("profile")
    if isinstance(profile, dict):
        patch["isBoardMember"] = bool(profile.get("activeBoardMember"))
        if profile.get("boardOrder"):
            patch["boardPosition"] = board_position_for_order(profile["boardOrder"])
        if patch["isBoardMember"]:
            patch.setdefault("boardPosition", "Board Member")
            patch["boardStartDate"] = now
        patch["notes"] = profile.get("bio") or ""

    preferences = doc.get("preferences")
    if isinstance(preferences, dict):
        patch["communicationPreferences"] = {
            "newsletter": bool(preferences.get("newsletterSubscription")),
            "updates": bool(preferences.get("emailNotifications")),
            "events": True,
            "mailings": bool(preferences.get("directoryListing")),
        }

    organization = doc.get("organization")
    if isinstance(organization, dict):
        reference = organization.get("address")
        if isinstance(reference, str) and reference:
            patch["organizationId"] = organization_id_from_reference(reference)

    for key in LEGACY_KEYS:
        if key in doc:
            patch[key] = None

    merged = {**doc, **patch}
    for field, default in FLAT_DEFAULTS.items():
        if merged.get(field) is None:
            patch[field] = default
    if merged.get("joinDate") is None:
        patch["joinDate"] = default_join_date(merged.get("renewalDate"), now)
    if not merged.get("state"):
        patch["state"] = settings.DEFAULT_STATE
    if sequence is not None and not merged.get("memberNumber"):
        patch["memberNumber"] = generate_member_number(sequence, now)
    if merged.get("paymentHistory") is None:
        patch["paymentHistory"] = []
    patch["updatedAt"] = now

    return patch


def apply_patch(doc: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """Shallow merge with the store's semantics: None removes the key."""
    result = dict(doc)
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = value
    return result


def normalize_member(doc: dict[str, Any], now: Optional[datetime] = None) -> dict[str, Any]:
    """Return a flat-shape copy of a member document (unchanged if already flat)."""
    if not is_legacy_member(doc):
        return doc
    return apply_patch(doc, build_flat_member_patch(doc, now=now))


async def fix_legacy_member(
    store: DocumentStore,
    member_id: str,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Rewrite one stored member into the flat shape, numbering it if needed.

    Raises DocumentNotFoundError if the member does not exist.
    """
    stored = await store.get(MEMBERS_COLLECTION, member_id)
    if stored is None:
        raise DocumentNotFoundError(MEMBERS_COLLECTION, member_id, "Member not found")

    if not is_legacy_member(stored.data):
        logger.info(f"Member {member_id} already uses the flat structure")
        return stored.data

    now = now or datetime.now(timezone.utc)
    sequence = await next_member_sequence(store, now)
    patch = build_flat_member_patch(stored.data, sequence=sequence, now=now)
    updated = await store.update(MEMBERS_COLLECTION, member_id, patch)
    logger.info(f"Converted legacy member {member_id} to flat structure")
    return updated


async def fix_all_legacy_members(store: DocumentStore, now: Optional[datetime] = None) -> int:
    """Convert every legacy member document. Returns how many were fixed."""
    now = now or datetime.now(timezone.utc)
    sequence = await next_member_sequence(store, now)
    fixed = 0
    for stored in await store.list(MEMBERS_COLLECTION):
        if not is_legacy_member(stored.data):
            continue
        patch = build_flat_member_patch(stored.data, sequence=sequence, now=now)
        if "memberNumber" in patch:
            sequence += 1
        await store.update(MEMBERS_COLLECTION, stored.id, patch)
        fixed += 1
    logger.info(f"Fixed {fixed} legacy member(s)")
    return fixed


def convert_legacy_board_member(board_member: BoardMember, now: Optional[datetime] = None) -> dict[str, Any]:
    """Flat member data for a record from the legacy ``boardMembers`` collection."""
    now = now or datetime.now(timezone.utc)
    first_name, _, last_name = board_member.name.partition(" ")
    return {
        "firstName": first_name,
        "lastName": last_name,
        "email": f"{first_name.lower()}.{last_name.lower().replace(' ', '')}@nhbea.org",
        "status": "active",
        "membershipType": "individual",
        "joinDate": now,
        "renewalDate": now + MEMBERSHIP_TERM,
        "expirationDate": now + MEMBERSHIP_TERM,
        "position": board_member.title,
        "isBoardMember": True,
        "boardPosition": board_member.title,
        "boardOrder": board_member.order or 999,
        "boardStartDate": now,
        "bio": board_member.bio,
        "imageUrl": board_member.image_url,
        "communicationPreferences": {
            "newsletter": True,
            "updates": True,
            "events": True,
            "mailings": True,
        },
    }


def member_to_board_member(member: Member) -> BoardMember:
    """Display shape used by the board section of the about page."""
    return BoardMember(
        id=member.id,
        name=member.full_name,
        title=member.board_position or member.position,
        bio=member.bio,
        image_url=resolve_image_url(member.image_url),
        order=member.board_order,
    )
