"""
Object storage URL helpers.

Images live in the storage bucket under ``public/`` and ``private/``
prefixes. Public objects are served through the direct media URL
``<base>/v0/b/<bucket>/o/<url-encoded path>?alt=media``.
"""
import logging
from typing import Optional
from urllib.parse import quote

from app.core.config import settings

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "public/"
PRIVATE_PREFIX = "private/"


def build_media_url(path: str, bucket: Optional[str] = None) -> str:
    """Direct download URL for an object path such as ``public/sponsors/acme.png``."""
    bucket = bucket or settings.STORAGE_BUCKET
    encoded = quote(path.lstrip("/"), safe="")
    return f"{settings.STORAGE_BASE_URL}/v0/b/{bucket}/o/{encoded}?alt=media"


def resolve_image_url(value: Optional[str]) -> Optional[str]:
    """
    Turn a stored image reference into something a browser can load.

    Absolute URLs and site-relative paths pass through. ``public/`` storage
    paths become media URLs. ``private/`` paths are never exposed.
    """
    if not value:
        return value
    if value.startswith(("http://", "https://", "/", "data:")):
        return value
    if value.startswith(PRIVATE_PREFIX):
        logger.debug(f"Withholding private storage path {value}")
        return None
    if value.startswith(PUBLIC_PREFIX):
        return build_media_url(value)
    return value
