"""
Conference and registrant accessors.

Registration counts are kept on the conference document itself and written
back as a whole document on each registration or cancellation.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.exceptions import (
    DocumentNotFoundError,
    FetchError,
    InvalidStatusTransitionError,
    RegistrationUnavailableError,
    WriteError,
)
from app.db.store import DocumentStore, where
from app.schemas.conference import (
    AvailabilityStatus,
    Conference,
    ConferenceStatus,
    Participant,
    PaymentStatus,
    Registrant,
    RegistrantPreferences,
    RegistrantStatus,
    RegistrationAvailability,
    RegistrationDetails,
    RegistrationType,
    VALID_STATUS_TRANSITIONS,
)
from app.services.documents import load_collection, parse_document
from app.services.validation import calculate_registration_fee, determine_registration_type

logger = logging.getLogger(__name__)

CONFERENCE_COLLECTION = "conference"
REGISTRANTS_COLLECTION = "registrants"

PUBLIC_STATUSES = [ConferenceStatus.PUBLISHED.value, ConferenceStatus.REGISTRATION_OPEN.value]


def _utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _now(now: Optional[datetime]) -> datetime:
    return _utc(now) if now else datetime.now(timezone.utc)


async def get_current_conference(
    store: DocumentStore,
    now: Optional[datetime] = None,
) -> Optional[Conference]:
    """This year's published conference, or None."""
    now = _now(now)
    conferences = await load_collection(
        store,
        CONFERENCE_COLLECTION,
        Conference,
        "conference",
        filters=[where("year", "==", now.year), where("status", "in", PUBLIC_STATUSES)],
    )
    return conferences[0] if conferences else None


async def get_all_conferences(store: DocumentStore) -> list[Conference]:
    return await load_collection(
        store, CONFERENCE_COLLECTION, Conference, "conferences",
        order_by="year", descending=True,
    )


async def get_conference(store: DocumentStore, conference_id: str) -> Optional[Conference]:
    try:
        doc = await store.get(CONFERENCE_COLLECTION, conference_id)
    except Exception as exc:
        logger.error(f"Error fetching conference {conference_id}: {exc}")
        raise FetchError("Failed to fetch conference") from exc
    if doc is None:
        return None
    return parse_document(Conference, doc)


def check_registration_availability(
    conference: Conference,
    now: Optional[datetime] = None,
) -> RegistrationAvailability:
    """Where a conference stands for new registrations at ``now``."""
    now = _now(now)
    registration = conference.registration
    spots_remaining = registration.capacity - registration.current_count

    if now < _utc(registration.open_date):
        return RegistrationAvailability(
            is_available=False,
            spots_remaining=spots_remaining,
            registration_status=AvailabilityStatus.NOT_STARTED,
        )

    if now > _utc(registration.close_date) or not registration.is_open:
        return RegistrationAvailability(
            is_available=False,
            spots_remaining=spots_remaining,
            registration_status=AvailabilityStatus.CLOSED,
        )

    if spots_remaining <= 0:
        return RegistrationAvailability(
            is_available=registration.waitlist_enabled,
            spots_remaining=0,
            registration_status=AvailabilityStatus.FULL,
        )

    return RegistrationAvailability(
        is_available=True,
        spots_remaining=spots_remaining,
        registration_status=AvailabilityStatus.OPEN,
    )


async def get_registration_availability(
    store: DocumentStore,
    conference_id: str,
    now: Optional[datetime] = None,
) -> RegistrationAvailability:
    """Availability by conference id; unknown or unreadable conferences read as closed."""
    closed = RegistrationAvailability(
        is_available=False,
        spots_remaining=0,
        registration_status=AvailabilityStatus.CLOSED,
    )
    try:
        conference = await get_conference(store, conference_id)
    except FetchError as exc:
        logger.warning(f"Availability check for {conference_id} failed: {exc.message}")
        return closed
    if conference is None:
        return closed
    return check_registration_availability(conference, now)


async def _save_conference(store: DocumentStore, conference: Conference) -> None:
    await store.set(CONFERENCE_COLLECTION, conference.id, conference.to_document())


async def register_for_conference(
    store: DocumentStore,
    conference: Conference,
    form: dict[str, Any],
    now: Optional[datetime] = None,
) -> Registrant:
    """
    Register a participant from validated, sanitized form data.

    A full conference with a waitlist produces a ``waitlisted`` registrant
    that does not count against capacity. Raises
    RegistrationUnavailableError when registration is not possible.
    """
    now = _now(now)
    availability = check_registration_availability(conference, now)
    if not availability.is_available:
        raise RegistrationUnavailableError(
            conference.id, availability.registration_status.value
        )

    membership_status = form["membershipStatus"]
    fees = conference.registration.fees
    if form.get("registrationType") == RegistrationType.SPEAKER.value:
        registration_type = RegistrationType.SPEAKER
    else:
        registration_type = determine_registration_type(
            membership_status,
            fees.early_bird.deadline if fees.early_bird else None,
            now,
        )

    if availability.registration_status == AvailabilityStatus.FULL:
        status = RegistrantStatus.WAITLISTED
    else:
        status = RegistrantStatus.REGISTERED

    registrant = Registrant(
        conference_id=conference.id,
        conference_title=conference.title,
        conference_year=conference.year,
        participant=Participant(
            full_name=form["fullName"],
            email=form["email"],
            phone=form.get("phone"),
            institution=form["institution"],
            membership_id=form.get("membershipId"),
            membership_status=membership_status,
        ),
        registration=RegistrationDetails(
            registration_date=now,
            registration_type=registration_type,
            total_amount=calculate_registration_fee(registration_type, membership_status, fees),
        ),
        preferences=RegistrantPreferences(
            dietary_restrictions=form.get("dietaryRestrictions"),
            accessibility_needs=form.get("accessibilityNeeds"),
            session_preferences=form.get("sessionPreferences", []),
            networking_opt_in=form.get("networkingOptIn", False),
        ),
        status=status,
    )

    try:
        registrant_id = await store.add(REGISTRANTS_COLLECTION, registrant.to_document())
        if status == RegistrantStatus.REGISTERED:
            conference.registration.current_count += 1
            await _save_conference(store, conference)
    except Exception as exc:
        logger.error(f"Error registering for conference {conference.id}: {exc}")
        raise WriteError("Failed to register for conference") from exc

    logger.info(f"Registrant {registrant_id} {status.value} for {conference.id}")
    return registrant.model_copy(update={"id": registrant_id})


async def get_registrant(store: DocumentStore, registrant_id: str) -> Optional[Registrant]:
    doc = await store.get(REGISTRANTS_COLLECTION, registrant_id)
    if doc is None:
        return None
    return parse_document(Registrant, doc)


async def cancel_registration(store: DocumentStore, registrant_id: str) -> Registrant:
    """
    Cancel a registration and release its spot.

    Raises DocumentNotFoundError for an unknown registrant. Cancelling an
    already cancelled registration changes nothing.
    """
    registrant = await get_registrant(store, registrant_id)
    if registrant is None:
        raise DocumentNotFoundError(REGISTRANTS_COLLECTION, registrant_id, "Registrant not found")
    if registrant.status == RegistrantStatus.CANCELLED:
        return registrant

    held_spot = registrant.status == RegistrantStatus.REGISTERED
    await store.update(
        REGISTRANTS_COLLECTION, registrant_id, {"status": RegistrantStatus.CANCELLED.value}
    )

    if held_spot:
        conference = await get_conference(store, registrant.conference_id)
        if conference is not None:
            conference.registration.current_count = max(
                0, conference.registration.current_count - 1
            )
            await _save_conference(store, conference)

    logger.info(f"Cancelled registration {registrant_id}")
    return registrant.model_copy(update={"status": RegistrantStatus.CANCELLED})


async def mark_registrant_paid(store: DocumentStore, registrant_id: str) -> bool:
    """Record a completed payment. Returns False for an unknown registrant."""
    registrant = await get_registrant(store, registrant_id)
    if registrant is None:
        return False
    registrant.registration.payment_status = PaymentStatus.PAID
    await store.update(
        REGISTRANTS_COLLECTION,
        registrant_id,
        {"registration": registrant.registration.model_dump(by_alias=True, exclude_none=True)},
    )
    logger.info(f"Registrant {registrant_id} marked paid")
    return True


async def get_conference_registrants(store: DocumentStore, conference_id: str) -> list[Registrant]:
    """Registrants for a conference, newest registration first."""
    return await load_collection(
        store,
        REGISTRANTS_COLLECTION,
        Registrant,
        "registrants",
        filters=[where("conferenceId", "==", conference_id)],
        order_by="registration.registrationDate",
        descending=True,
    )


async def transition_conference_status(
    store: DocumentStore,
    conference_id: str,
    new_status: ConferenceStatus,
) -> Conference:
    """
    Move a conference along its lifecycle.

    Opening or closing registration keeps ``registration.isOpen`` in step.
    """
    conference = await get_conference(store, conference_id)
    if conference is None:
        raise DocumentNotFoundError(CONFERENCE_COLLECTION, conference_id, "Conference not found")

    if new_status not in VALID_STATUS_TRANSITIONS[conference.status]:
        raise InvalidStatusTransitionError(conference.status.value, new_status.value)

    conference.status = new_status
    if new_status == ConferenceStatus.REGISTRATION_OPEN:
        conference.registration.is_open = True
    elif new_status in (ConferenceStatus.REGISTRATION_CLOSED, ConferenceStatus.CANCELLED):
        conference.registration.is_open = False

    await _save_conference(store, conference)
    logger.info(f"Conference {conference_id} moved to {new_status.value}")
    return conference
