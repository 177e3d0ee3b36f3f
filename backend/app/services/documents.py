"""
Helpers for turning raw store documents into schema objects.
"""
import logging
from typing import Iterable, Optional, TypeVar
from pydantic import BaseModel, ValidationError

from app.core.exceptions import FetchError
from app.db.store import DocumentStore, Filter, StoredDocument

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_document(model: type[ModelT], doc: StoredDocument) -> Optional[ModelT]:
    """Validate one document; malformed documents are logged and skipped."""
    try:
        return model.model_validate(doc.to_dict())
    except ValidationError as exc:
        logger.warning(
            f"Skipping malformed {model.__name__} document {doc.id}: "
            f"{exc.error_count()} validation error(s)"
        )
        return None


def parse_documents(model: type[ModelT], docs: Iterable[StoredDocument]) -> list[ModelT]:
    parsed = (parse_document(model, doc) for doc in docs)
    return [item for item in parsed if item is not None]


async def load_collection(
    store: DocumentStore,
    collection: str,
    model: type[ModelT],
    what: str,
    filters: Iterable[Filter] = (),
    order_by: Optional[str] = None,
    descending: bool = False,
) -> list[ModelT]:
    """
    Query a collection and parse it, wrapping store failures.

    Raises FetchError("Failed to fetch <what>") with the original exception
    chained; the raw cause is only logged.
    """
    try:
        docs = await store.list(
            collection, filters=filters, order_by=order_by, descending=descending
        )
    except Exception as exc:
        logger.error(f"Error fetching {collection}: {exc}")
        raise FetchError(f"Failed to fetch {what}") from exc
    return parse_documents(model, docs)
