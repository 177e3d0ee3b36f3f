"""
Document store facade over the ``documents`` table.

Mirrors the small surface of a hosted document database that the site
needs: addressed reads, filtered/ordered collection queries, and
whole-document writes. Each write touches exactly one document.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from pydantic_core import to_jsonable_python
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DocumentNotFoundError
from app.models.base import generate_id, utcnow
from app.models.document import Document

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class Filter:
    """A single ``where`` clause on a dotted field path."""
    field: str
    op: str
    value: Any

    def matches(self, data: dict[str, Any]) -> bool:
        actual = get_field(data, self.field)
        if actual is _MISSING:
            return False
        if self.op == "==":
            return actual == self.value
        if self.op == "!=":
            return actual != self.value
        if self.op == "in":
            return actual in self.value
        raise ValueError(f"Unsupported filter operator: {self.op}")


def where(field: str, op: str, value: Any) -> Filter:
    return Filter(field, op, value)


def get_field(data: dict[str, Any], path: str) -> Any:
    """Resolve ``a.b.c`` inside nested dicts; returns a sentinel when absent."""
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def encode_document(data: dict[str, Any]) -> dict[str, Any]:
    """Convert dates, enums and models into JSON-safe values."""
    return to_jsonable_python(data)


def _sort_key(value: Any) -> tuple:
    # Missing/None values sort after everything else regardless of direction
    if value is _MISSING or value is None:
        return (1, 0, "")
    if isinstance(value, bool):
        return (0, 0, int(value))
    if isinstance(value, (int, float)):
        return (0, 0, value)
    return (0, 1, str(value))


@dataclass
class StoredDocument:
    """A document id paired with its body."""
    id: str
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.data}


class DocumentStore:
    """Async document store bound to a single SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _load(self, collection: str, document_id: str) -> Optional[Document]:
        result = await self.session.execute(
            select(Document).where(
                Document.collection == collection,
                Document.id == document_id,
            )
        )
        return result.scalar_one_or_none()

    async def get(self, collection: str, document_id: str) -> Optional[StoredDocument]:
        """Fetch one document by key, or None."""
        doc = await self._load(collection, document_id)
        if doc is None:
            return None
        return StoredDocument(id=doc.id, data=dict(doc.data or {}))

    async def list(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[StoredDocument]:
        """
        Query a collection.

        Filters are conjunctive. Ordering is by a single (possibly dotted)
        field; documents lacking the field sort last.
        """
        result = await self.session.execute(
            select(Document)
            .where(Document.collection == collection)
            .order_by(Document.id.asc())
        )
        filters = list(filters)
        docs = [
            StoredDocument(id=row.id, data=dict(row.data or {}))
            for row in result.scalars().all()
        ]
        docs = [d for d in docs if all(f.matches(d.data) for f in filters)]

        if order_by:
            present = [d for d in docs if get_field(d.data, order_by) not in (_MISSING, None)]
            absent = [d for d in docs if get_field(d.data, order_by) in (_MISSING, None)]
            present.sort(
                key=lambda d: _sort_key(get_field(d.data, order_by)),
                reverse=descending,
            )
            docs = present + absent

        return docs

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""
        document_id = generate_id()
        await self.set(collection, document_id, data)
        return document_id

    async def set(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """Create or fully replace a document."""
        body = encode_document(data)
        doc = await self._load(collection, document_id)
        if doc is None:
            self.session.add(Document(collection=collection, id=document_id, data=body))
        else:
            doc.data = body
            doc.updated = utcnow()
        await self.session.flush()
        logger.debug(f"Wrote {collection}/{document_id}")

    async def update(
        self,
        collection: str,
        document_id: str,
        patch: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Shallow-merge ``patch`` into an existing document.

        A ``None`` value removes that key. The merged body is written back
        as a whole document. Raises DocumentNotFoundError if absent.
        """
        doc = await self._load(collection, document_id)
        if doc is None:
            raise DocumentNotFoundError(collection, document_id)

        merged = dict(doc.data or {})
        for key, value in encode_document(patch).items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value

        doc.data = merged
        doc.updated = utcnow()
        await self.session.flush()
        return merged

    async def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        return len(await self.list(collection, filters))
