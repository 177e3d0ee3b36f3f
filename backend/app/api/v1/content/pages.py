"""
Homepage copy and content sections.
"""
from fastapi import APIRouter, Depends

from app.core.deps import get_store
from app.data.defaults import DEFAULT_HOMEPAGE_CONTENT
from app.db.store import DocumentStore
from app.schemas.common import SourcedItemResponse, SourcedListResponse
from app.schemas.content import ContentSection, HomepageContent
from app.services.content import get_content_sections, get_homepage_content
from app.services.fallback import fetch_with_fallback

router = APIRouter()


@router.get("/homepage", response_model=SourcedItemResponse[HomepageContent])
async def read_homepage(store: DocumentStore = Depends(get_store)):
    """Homepage copy; the built-in text is served when none is stored."""
    result = await fetch_with_fallback(
        lambda: get_homepage_content(store),
        DEFAULT_HOMEPAGE_CONTENT,
        fallback_on_empty=True,
    )
    return SourcedItemResponse[HomepageContent](item=result.data, source=result.source)


@router.get("/sections", response_model=SourcedListResponse[ContentSection])
async def list_sections(store: DocumentStore = Depends(get_store)):
    result = await fetch_with_fallback(lambda: get_content_sections(store), [])
    return SourcedListResponse[ContentSection](items=result.data, source=result.source)
