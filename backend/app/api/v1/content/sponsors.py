from fastapi import APIRouter, Depends

from app.core.deps import get_store
from app.data.defaults import DEFAULT_SPONSORS
from app.db.store import DocumentStore
from app.schemas.common import SourcedListResponse
from app.schemas.content import Sponsor
from app.services.fallback import fetch_with_fallback
from app.services.sponsors import get_sponsors

router = APIRouter()


@router.get("", response_model=SourcedListResponse[Sponsor])
async def list_sponsors(store: DocumentStore = Depends(get_store)):
    result = await fetch_with_fallback(lambda: get_sponsors(store), DEFAULT_SPONSORS)
    return SourcedListResponse[Sponsor](items=result.data, source=result.source)
