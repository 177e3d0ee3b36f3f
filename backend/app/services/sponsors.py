"""
Sponsor accessors.
"""
import logging

from app.db.store import DocumentStore
from app.schemas.content import Sponsor
from app.services.documents import load_collection
from app.services.media import resolve_image_url

logger = logging.getLogger(__name__)

SPONSORS_COLLECTION = "sponsors"


async def get_sponsors(store: DocumentStore) -> list[Sponsor]:
    """Sponsors by ascending order, with storage logo paths resolved."""
    sponsors = await load_collection(
        store, SPONSORS_COLLECTION, Sponsor, "sponsors", order_by="order"
    )
    for sponsor in sponsors:
        sponsor.logo_url = resolve_image_url(sponsor.logo_url)
    return sponsors
