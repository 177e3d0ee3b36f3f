"""
Editable site copy stored in the ``content`` collection.

``content/homepage`` is a singleton; every other document in the collection
is an ordered section.
"""
import logging
from typing import Optional

from app.core.exceptions import FetchError
from app.db.store import DocumentStore
from app.schemas.content import ContentSection, HomepageContent
from app.services.documents import parse_document, parse_documents
from app.services.media import resolve_image_url

logger = logging.getLogger(__name__)

CONTENT_COLLECTION = "content"
HOMEPAGE_DOCUMENT_ID = "homepage"


async def get_homepage_content(store: DocumentStore) -> Optional[HomepageContent]:
    try:
        doc = await store.get(CONTENT_COLLECTION, HOMEPAGE_DOCUMENT_ID)
    except Exception as exc:
        logger.error(f"Error fetching homepage content: {exc}")
        raise FetchError("Failed to fetch homepage content") from exc

    if doc is None:
        return None
    content = parse_document(HomepageContent, doc)
    if content is not None:
        content.hero_image_url = resolve_image_url(content.hero_image_url)
    return content


async def get_content_sections(store: DocumentStore) -> list[ContentSection]:
    try:
        docs = await store.list(CONTENT_COLLECTION, order_by="order")
    except Exception as exc:
        logger.error(f"Error fetching content sections: {exc}")
        raise FetchError("Failed to fetch content sections") from exc
    return parse_documents(
        ContentSection, [doc for doc in docs if doc.id != HOMEPAGE_DOCUMENT_ID]
    )
