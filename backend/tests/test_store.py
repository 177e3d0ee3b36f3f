"""
Tests for the document store.
"""
from datetime import datetime, timezone

import pytest

from app.core.exceptions import DocumentNotFoundError
from app.db.store import DocumentStore, get_field, where


class TestDocumentStore:
    """Test addressed reads, queries and writes."""

    @pytest.mark.asyncio
    async def test_add_and_get(self, store: DocumentStore):
        doc_id = await store.add("sponsors", {"name": "Acme", "order": 1})

        doc = await store.get("sponsors", doc_id)
        assert doc is not None
        assert doc.id == doc_id
        assert doc.data == {"name": "Acme", "order": 1}
        assert doc.to_dict() == {"id": doc_id, "name": "Acme", "order": 1}

    @pytest.mark.asyncio
    async def test_get_missing(self, store: DocumentStore):
        assert await store.get("sponsors", "nope") is None

    @pytest.mark.asyncio
    async def test_collections_are_separate(self, store: DocumentStore):
        await store.set("sponsors", "shared", {"name": "Sponsor"})
        await store.set("boardMembers", "shared", {"name": "Board"})

        assert (await store.get("sponsors", "shared")).data["name"] == "Sponsor"
        assert (await store.get("boardMembers", "shared")).data["name"] == "Board"

    @pytest.mark.asyncio
    async def test_set_replaces_whole_document(self, store: DocumentStore):
        await store.set("content", "homepage", {"heroTitle": "Old", "aboutTitle": "About"})
        await store.set("content", "homepage", {"heroTitle": "New"})

        doc = await store.get("content", "homepage")
        assert doc.data == {"heroTitle": "New"}

    @pytest.mark.asyncio
    async def test_datetimes_are_stored_as_strings(self, store: DocumentStore):
        when = datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)
        await store.set("newsletterSubscribers", "a@example.com", {"timestamp": when})

        doc = await store.get("newsletterSubscribers", "a@example.com")
        assert isinstance(doc.data["timestamp"], str)
        assert doc.data["timestamp"].startswith("2024-09-01T12:00:00")

    @pytest.mark.asyncio
    async def test_update_merges_and_removes(self, store: DocumentStore):
        await store.set("members", "m1", {
            "firstName": "Ada",
            "personalInfo": {"firstName": "Ada"},
        })

        merged = await store.update("members", "m1", {"lastName": "Lovelace", "personalInfo": None})

        assert merged == {"firstName": "Ada", "lastName": "Lovelace"}
        assert (await store.get("members", "m1")).data == merged

    @pytest.mark.asyncio
    async def test_update_missing_document(self, store: DocumentStore):
        with pytest.raises(DocumentNotFoundError):
            await store.update("members", "ghost", {"status": "active"})


class TestDocumentQueries:
    """Test filtered and ordered collection queries."""

    @pytest.mark.asyncio
    async def test_order_ascending_and_descending(self, store: DocumentStore):
        for order in (3, 1, 2):
            await store.add("pastPresidents", {"name": f"President {order}", "order": order})

        ascending = await store.list("pastPresidents", order_by="order")
        assert [d.data["order"] for d in ascending] == [1, 2, 3]

        descending = await store.list("pastPresidents", order_by="order", descending=True)
        assert [d.data["order"] for d in descending] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_missing_order_sorts_last(self, store: DocumentStore):
        await store.set("sponsors", "a", {"name": "No order"})
        await store.set("sponsors", "b", {"name": "Second", "order": 2})
        await store.set("sponsors", "c", {"name": "First", "order": 1})

        for descending in (False, True):
            docs = await store.list("sponsors", order_by="order", descending=descending)
            assert docs[-1].id == "a"

    @pytest.mark.asyncio
    async def test_filters(self, store: DocumentStore):
        await store.set("conference", "c2024", {"year": 2024, "status": "completed"})
        await store.set("conference", "c2025", {"year": 2025, "status": "registration_open"})
        await store.set("conference", "draft", {"year": 2025, "status": "draft"})

        docs = await store.list("conference", filters=[
            where("year", "==", 2025),
            where("status", "in", ["published", "registration_open"]),
        ])
        assert [d.id for d in docs] == ["c2025"]

        not_draft = await store.list("conference", filters=[where("status", "!=", "draft")])
        assert {d.id for d in not_draft} == {"c2024", "c2025"}

    @pytest.mark.asyncio
    async def test_dotted_paths(self, store: DocumentStore):
        await store.set("registrants", "r1", {
            "conferenceId": "c1",
            "registration": {"registrationDate": "2025-01-02T00:00:00Z"},
        })
        await store.set("registrants", "r2", {
            "conferenceId": "c1",
            "registration": {"registrationDate": "2025-01-05T00:00:00Z"},
        })

        docs = await store.list(
            "registrants",
            filters=[where("conferenceId", "==", "c1")],
            order_by="registration.registrationDate",
            descending=True,
        )
        assert [d.id for d in docs] == ["r2", "r1"]

    @pytest.mark.asyncio
    async def test_count(self, store: DocumentStore):
        for i in range(5):
            await store.add("nominations", {"awardId": "a1" if i < 3 else "a2"})

        assert await store.count("nominations") == 5
        assert await store.count("nominations", [where("awardId", "==", "a1")]) == 3

    def test_unsupported_operator(self):
        with pytest.raises(ValueError):
            where("year", ">", 2020).matches({"year": 2024})

    def test_get_field(self):
        data = {"registration": {"fees": {"member": 100}}}
        assert get_field(data, "registration.fees.member") == 100
        assert get_field(data, "registration") == {"fees": {"member": 100}}
        assert not where("registration.fees.student", "==", None).matches(data)
