"""
Tests for conference availability, registration and lifecycle.
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient

from app.core.exceptions import (
    DocumentNotFoundError,
    InvalidStatusTransitionError,
    RegistrationUnavailableError,
)
from app.db.store import DocumentStore
from app.schemas.conference import (
    AvailabilityStatus,
    Conference,
    ConferenceStatus,
    RegistrantStatus,
    RegistrationType,
)
from app.services.conference import (
    cancel_registration,
    check_registration_availability,
    get_all_conferences,
    get_conference,
    get_conference_registrants,
    get_current_conference,
    get_registration_availability,
    register_for_conference,
    transition_conference_status,
)


async def stored_conference(store: DocumentStore, doc: dict, conference_id: str = "c1") -> Conference:
    await store.set("conference", conference_id, doc)
    return await get_conference(store, conference_id)


class TestCurrentConference:

    @pytest.mark.asyncio
    async def test_published_conference_for_this_year(self, store: DocumentStore, now, make_conference):
        await store.set("conference", "c1", make_conference(now))

        conference = await get_current_conference(store, now)

        assert conference is not None
        assert conference.id == "c1"
        assert conference.registration.fees.non_member == 150

    @pytest.mark.asyncio
    async def test_ignores_drafts_and_other_years(self, store: DocumentStore, now, make_conference):
        await store.set("conference", "draft", make_conference(now, status="draft"))
        await store.set("conference", "old", make_conference(now, year=now.year - 1))

        assert await get_current_conference(store, now) is None

    @pytest.mark.asyncio
    async def test_all_conferences_newest_first(self, store: DocumentStore, now, make_conference):
        await store.set("conference", "old", make_conference(now, year=now.year - 1, status="completed"))
        await store.set("conference", "new", make_conference(now))

        conferences = await get_all_conferences(store)
        assert [c.id for c in conferences] == ["new", "old"]


class TestAvailability:
    """Test registration availability rules."""

    @pytest.mark.asyncio
    async def test_open(self, store: DocumentStore, now, make_conference):
        conference = await stored_conference(store, make_conference(now))

        availability = check_registration_availability(conference, now)

        assert availability.is_available
        assert availability.spots_remaining == 100
        assert availability.registration_status == AvailabilityStatus.OPEN

    @pytest.mark.asyncio
    async def test_not_started(self, store: DocumentStore, now, make_conference):
        conference = await stored_conference(store, make_conference(now))

        availability = check_registration_availability(conference, now - timedelta(days=31))

        assert not availability.is_available
        assert availability.registration_status == AvailabilityStatus.NOT_STARTED

    @pytest.mark.asyncio
    async def test_closed_after_close_date(self, store: DocumentStore, now, make_conference):
        conference = await stored_conference(store, make_conference(now))

        availability = check_registration_availability(conference, now + timedelta(days=31))
        assert availability.registration_status == AvailabilityStatus.CLOSED

    @pytest.mark.asyncio
    async def test_closed_flag(self, store: DocumentStore, now, make_conference):
        doc = make_conference(now)
        doc["registration"]["isOpen"] = False
        conference = await stored_conference(store, doc)

        availability = check_registration_availability(conference, now)
        assert not availability.is_available
        assert availability.registration_status == AvailabilityStatus.CLOSED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("waitlist", [True, False])
    async def test_full(self, store: DocumentStore, now, make_conference, waitlist):
        doc = make_conference(now)
        doc["registration"].update({"capacity": 10, "currentCount": 10, "waitlistEnabled": waitlist})
        conference = await stored_conference(store, doc)

        availability = check_registration_availability(conference, now)

        assert availability.registration_status == AvailabilityStatus.FULL
        assert availability.spots_remaining == 0
        assert availability.is_available is waitlist

    @pytest.mark.asyncio
    async def test_unknown_conference_reads_closed(self, store: DocumentStore):
        availability = await get_registration_availability(store, "missing")
        assert not availability.is_available
        assert availability.registration_status == AvailabilityStatus.CLOSED

    @pytest.mark.asyncio
    async def test_unreadable_store_reads_closed(self, broken_store: DocumentStore):
        availability = await get_registration_availability(broken_store, "c1")
        assert availability.registration_status == AvailabilityStatus.CLOSED
        assert availability.spots_remaining == 0


class TestRegistration:
    """Test registering and cancelling."""

    @pytest.mark.asyncio
    async def test_register_member(self, store: DocumentStore, now, make_conference, registration_form):
        conference = await stored_conference(store, make_conference(now))

        registrant = await register_for_conference(store, conference, registration_form, now)

        assert registrant.id is not None
        assert registrant.status == RegistrantStatus.REGISTERED
        assert registrant.registration.registration_type == RegistrationType.REGULAR
        assert registrant.registration.total_amount == 100
        assert registrant.participant.membership_id == "NHBEA-2024-0001"
        assert registrant.preferences.session_preferences == ["Digital Marketing", "Entrepreneurship"]

        stored = await get_conference(store, "c1")
        assert stored.registration.current_count == 1

    @pytest.mark.asyncio
    async def test_early_bird_pricing(self, store: DocumentStore, now, make_conference, registration_form):
        doc = make_conference(now)
        doc["registration"]["fees"]["earlyBird"] = {"amount": 75, "deadline": now + timedelta(days=10)}
        conference = await stored_conference(store, doc)

        registrant = await register_for_conference(store, conference, registration_form, now)

        assert registrant.registration.registration_type == RegistrationType.EARLY_BIRD
        assert registrant.registration.total_amount == 75

    @pytest.mark.asyncio
    async def test_student_pricing(self, store: DocumentStore, now, make_conference, registration_form):
        conference = await stored_conference(store, make_conference(now))
        registration_form.update({"membershipStatus": "student", "membershipId": None})

        registrant = await register_for_conference(store, conference, registration_form, now)

        assert registrant.registration.registration_type == RegistrationType.STUDENT
        assert registrant.registration.total_amount == 50

    @pytest.mark.asyncio
    async def test_speaker_type_kept(self, store: DocumentStore, now, make_conference, registration_form):
        conference = await stored_conference(store, make_conference(now))
        registration_form["registrationType"] = "speaker"

        registrant = await register_for_conference(store, conference, registration_form, now)
        assert registrant.registration.registration_type == RegistrationType.SPEAKER

    @pytest.mark.asyncio
    async def test_full_conference_waitlists(self, store: DocumentStore, now, make_conference, registration_form):
        doc = make_conference(now)
        doc["registration"].update({"capacity": 1, "currentCount": 1})
        conference = await stored_conference(store, doc)

        registrant = await register_for_conference(store, conference, registration_form, now)

        assert registrant.status == RegistrantStatus.WAITLISTED
        assert (await get_conference(store, "c1")).registration.current_count == 1

    @pytest.mark.asyncio
    async def test_unavailable(self, store: DocumentStore, now, make_conference, registration_form):
        doc = make_conference(now)
        doc["registration"]["isOpen"] = False
        conference = await stored_conference(store, doc)

        with pytest.raises(RegistrationUnavailableError) as exc_info:
            await register_for_conference(store, conference, registration_form, now)

        assert exc_info.value.registration_status == "closed"
        assert await store.count("registrants") == 0

    @pytest.mark.asyncio
    async def test_cancel_releases_spot(self, store: DocumentStore, now, make_conference, registration_form):
        conference = await stored_conference(store, make_conference(now))
        registrant = await register_for_conference(store, conference, registration_form, now)

        cancelled = await cancel_registration(store, registrant.id)

        assert cancelled.status == RegistrantStatus.CANCELLED
        assert (await get_conference(store, "c1")).registration.current_count == 0

        again = await cancel_registration(store, registrant.id)
        assert again.status == RegistrantStatus.CANCELLED
        assert (await get_conference(store, "c1")).registration.current_count == 0

    @pytest.mark.asyncio
    async def test_cancel_waitlisted_keeps_count(
        self, store: DocumentStore, now, make_conference, registration_form
    ):
        doc = make_conference(now)
        doc["registration"].update({"capacity": 1, "currentCount": 1})
        conference = await stored_conference(store, doc)
        registrant = await register_for_conference(store, conference, registration_form, now)

        await cancel_registration(store, registrant.id)

        assert (await get_conference(store, "c1")).registration.current_count == 1

    @pytest.mark.asyncio
    async def test_cancel_unknown(self, store: DocumentStore):
        with pytest.raises(DocumentNotFoundError, match="Registrant not found"):
            await cancel_registration(store, "missing")

    @pytest.mark.asyncio
    async def test_registrants_newest_first(self, store: DocumentStore, now, make_conference, registration_form):
        conference = await stored_conference(store, make_conference(now))
        first = await register_for_conference(store, conference, registration_form, now - timedelta(days=2))
        second = await register_for_conference(store, conference, registration_form, now)

        registrants = await get_conference_registrants(store, "c1")
        assert [r.id for r in registrants] == [second.id, first.id]


class TestStatusTransitions:

    @pytest.mark.asyncio
    async def test_forward_transitions(self, store: DocumentStore, now, make_conference):
        doc = make_conference(now, status="published")
        doc["registration"]["isOpen"] = False
        await store.set("conference", "c1", doc)

        opened = await transition_conference_status(store, "c1", ConferenceStatus.REGISTRATION_OPEN)
        assert opened.registration.is_open

        closed = await transition_conference_status(store, "c1", ConferenceStatus.REGISTRATION_CLOSED)
        assert not closed.registration.is_open

        stored = await get_conference(store, "c1")
        assert stored.status == ConferenceStatus.REGISTRATION_CLOSED
        assert not stored.registration.is_open

    @pytest.mark.asyncio
    async def test_invalid_transition(self, store: DocumentStore, now, make_conference):
        await store.set("conference", "c1", make_conference(now, status="completed"))

        with pytest.raises(InvalidStatusTransitionError):
            await transition_conference_status(store, "c1", ConferenceStatus.REGISTRATION_OPEN)

    @pytest.mark.asyncio
    async def test_unknown_conference(self, store: DocumentStore):
        with pytest.raises(DocumentNotFoundError):
            await transition_conference_status(store, "missing", ConferenceStatus.PUBLISHED)


class TestConferenceRoutes:
    """Test public conference endpoints."""

    @pytest.mark.asyncio
    async def test_current(self, client: AsyncClient, store: DocumentStore, now, make_conference):
        await store.set("conference", "c1", make_conference(now))

        body = (await client.get("/api/v1/conference/current")).json()

        assert body["source"] == "store"
        assert body["item"]["id"] == "c1"
        assert body["item"]["registration"]["fees"]["nonMember"] == 150

    @pytest.mark.asyncio
    async def test_availability(self, client: AsyncClient, store: DocumentStore, now, make_conference):
        await store.set("conference", "c1", make_conference(now))

        response = await client.get("/api/v1/conference/c1/availability")

        assert response.status_code == 200
        assert response.json() == {
            "isAvailable": True,
            "spotsRemaining": 100,
            "registrationStatus": "open",
        }

    @pytest.mark.asyncio
    async def test_register(
        self, client: AsyncClient, store: DocumentStore, now, make_conference, registration_form
    ):
        await store.set("conference", "c1", make_conference(now))

        response = await client.post("/api/v1/conference/c1/registrations", json=registration_form)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["status"] == "registered"
        assert body["totalAmount"] == 100
        assert body["registrantId"]

    @pytest.mark.asyncio
    async def test_register_sanitizes_input(
        self, client: AsyncClient, store: DocumentStore, now, make_conference, registration_form
    ):
        await store.set("conference", "c1", make_conference(now))
        registration_form["institution"] = "Test University<script>alert(1)</script>"

        body = (await client.post("/api/v1/conference/c1/registrations", json=registration_form)).json()

        stored = (await store.get("registrants", body["registrantId"])).data
        assert stored["participant"]["institution"] == "Test University"

    @pytest.mark.asyncio
    async def test_register_invalid_form(
        self, client: AsyncClient, store: DocumentStore, now, make_conference, registration_form
    ):
        await store.set("conference", "c1", make_conference(now))
        registration_form["email"] = "invalid-email"

        response = await client.post("/api/v1/conference/c1/registrations", json=registration_form)

        assert response.status_code == 400
        assert any("email" in error for error in response.json()["errors"])

    @pytest.mark.asyncio
    async def test_register_unknown_conference(self, client: AsyncClient, registration_form):
        response = await client.post("/api/v1/conference/missing/registrations", json=registration_form)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_register_closed(
        self, client: AsyncClient, store: DocumentStore, now, make_conference, registration_form
    ):
        doc = make_conference(now)
        doc["registration"]["isOpen"] = False
        await store.set("conference", "c1", doc)

        response = await client.post("/api/v1/conference/c1/registrations", json=registration_form)

        assert response.status_code == 409
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_register_store_unavailable(self, broken_client: AsyncClient, registration_form):
        response = await broken_client.post("/api/v1/conference/c1/registrations", json=registration_form)

        assert response.status_code == 503
        assert response.json()["message"] == "Failed to fetch conference"

    @pytest.mark.asyncio
    async def test_cancel(
        self, client: AsyncClient, store: DocumentStore, now, make_conference, registration_form
    ):
        await store.set("conference", "c1", make_conference(now))
        registrant_id = (
            await client.post("/api/v1/conference/c1/registrations", json=registration_form)
        ).json()["registrantId"]

        response = await client.post(f"/api/v1/conference/registrations/{registrant_id}/cancel")

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

    @pytest.mark.asyncio
    async def test_cancel_unknown(self, client: AsyncClient):
        response = await client.post("/api/v1/conference/registrations/missing/cancel")
        assert response.status_code == 404
