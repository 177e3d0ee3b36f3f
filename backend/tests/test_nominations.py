"""
Tests for award nominations and student membership applications.
"""
from datetime import datetime

import pytest
from httpx import AsyncClient

import app.api.v1.submissions.nominations as nominations_module
from app.core.exceptions import WriteError
from app.db.store import DocumentStore
from app.services.nominations import (
    create_nomination,
    create_student_application,
    get_nominations_by_award,
)
from app.services.validation import normalize_nomination

NOMINATIONS_URL = "/api/v1/nominations"
STUDENT_URL = "/api/v1/membership/student"


@pytest.fixture
def student_form() -> dict:
    return {
        "personalInfo": {
            "firstName": "Emily",
            "lastName": "Carter",
            "email": "emily.carter@student.edu",
        },
        "academicInfo": {
            "institution": "Plymouth State University",
            "major": "Business Education",
            "graduationYear": datetime.now().year + 1,
            "gpa": 3.5,
        },
        "essay": "Business education gave me direction and I want to pass that on. " * 3,
        "references": [
            {"name": "Dr. Alan Reed", "email": "areed@plymouth.edu", "relationship": "Professor"},
            {"name": "Maria Lopez", "email": "mlopez@school.org", "relationship": "Mentor"},
        ],
    }


class TestNominationService:

    @pytest.mark.asyncio
    async def test_create_nomination(self, store: DocumentStore, nomination_form):
        nomination_id = await create_nomination(store, normalize_nomination(nomination_form))

        stored = (await store.get("awardNominations", nomination_id)).data
        assert stored["awardId"] == "award123"
        assert stored["status"] == "pending"
        assert "submissionDate" in stored
        assert "agreedToTerms" not in stored
        assert [doc.id for doc in await store.list("awardNominations")] == [nomination_id]

    @pytest.mark.asyncio
    async def test_store_failure(self, broken_store: DocumentStore, nomination_form):
        with pytest.raises(WriteError, match="Failed to submit nomination"):
            await create_nomination(broken_store, normalize_nomination(nomination_form))

    @pytest.mark.asyncio
    async def test_nominations_by_award(self, store: DocumentStore, nomination_form):
        await create_nomination(store, normalize_nomination(nomination_form))
        nomination_form["awardId"] = "award456"
        await create_nomination(store, normalize_nomination(nomination_form))

        nominations = await get_nominations_by_award(store, "award123")

        assert len(nominations) == 1
        assert nominations[0].nominee_info.name == "John Doe"
        assert nominations[0].submission_date is not None


class TestNominationRoute:
    """Test the nomination endpoint's response contract."""

    @pytest.mark.asyncio
    async def test_success(self, client: AsyncClient, store: DocumentStore, nomination_form):
        response = await client.post(NOMINATIONS_URL, json=nomination_form)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == (
            "Nomination submitted successfully! "
            "Thank you for recognizing excellence in business education."
        )
        assert await store.get("awardNominations", body["nominationId"]) is not None

    @pytest.mark.asyncio
    async def test_validation_failure(self, client: AsyncClient, nomination_form):
        nomination_form["nomineeInfo"]["email"] = "invalid-email"

        response = await client.post(NOMINATIONS_URL, json=nomination_form)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Form validation failed"
        assert "nomineeInfo.email" in body["error"]
        assert "nominationId" not in body

    @pytest.mark.asyncio
    async def test_database_error(self, broken_client: AsyncClient, nomination_form):
        response = await broken_client.post(NOMINATIONS_URL, json=nomination_form)

        assert response.status_code == 503
        assert response.json() == {
            "success": False,
            "message": "Unable to submit nomination at this time. Please try again later.",
            "error": "Database error",
        }

    @pytest.mark.asyncio
    async def test_unexpected_error(self, client: AsyncClient, nomination_form, monkeypatch):
        async def explode(store, nomination):
            raise RuntimeError("Unexpected error")

        monkeypatch.setattr(nominations_module, "create_nomination", explode)

        response = await client.post(NOMINATIONS_URL, json=nomination_form)

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "An unexpected error occurred. Please try again."
        assert body["error"] == "Unexpected error"

    @pytest.mark.asyncio
    async def test_unparseable_body(self, client: AsyncClient):
        response = await client.post(
            NOMINATIONS_URL, content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 500
        assert response.json()["success"] is False


class TestStudentApplications:

    @pytest.mark.asyncio
    async def test_create_application(self, store: DocumentStore, student_form):
        application_id = await create_student_application(store, student_form)

        stored = (await store.get("studentApplicants", application_id)).data
        assert stored["status"] == "pending"
        assert stored["personalInfo"]["firstName"] == "Emily"
        assert len(stored["references"]) == 2

    @pytest.mark.asyncio
    async def test_route_success(self, client: AsyncClient, student_form):
        response = await client.post(STUDENT_URL, json=student_form)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["id"]

    @pytest.mark.asyncio
    async def test_route_validation_failure(self, client: AsyncClient, student_form):
        student_form["academicInfo"]["gpa"] = 4.5

        response = await client.post(STUDENT_URL, json=student_form)

        assert response.status_code == 400
        assert any("gpa" in error for error in response.json()["errors"])

    @pytest.mark.asyncio
    async def test_route_store_failure(self, broken_client: AsyncClient, student_form):
        response = await broken_client.post(STUDENT_URL, json=student_form)

        assert response.status_code == 503
        assert response.json()["error"] == "Failed to submit application"
