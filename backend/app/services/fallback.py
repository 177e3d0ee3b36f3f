"""
Read-with-fallback helper.

Public pages prefer stale but plausible content over an error page: when an
accessor raises a store error, the caller-supplied default is returned
instead and the result is flagged so the response can say so.
"""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar
from pydantic import BaseModel

from app.core.exceptions import StoreError
from app.schemas.common import DataSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class FallbackResult(Generic[T]):
    data: T
    from_fallback: bool = False
    error: Optional[str] = None

    @property
    def source(self) -> DataSource:
        return DataSource.FALLBACK if self.from_fallback else DataSource.STORE


def _copy_default(default):
    if isinstance(default, BaseModel):
        return default.model_copy(deep=True)
    if isinstance(default, (list, tuple)):
        return [_copy_default(item) for item in default]
    return default


async def fetch_with_fallback(
    fetch: Callable[[], Awaitable[T]],
    default,
    fallback_on_empty: bool = False,
) -> FallbackResult[T]:
    """
    Run an accessor, substituting ``default`` if it raises a StoreError.

    With ``fallback_on_empty`` an empty result is also replaced, for pages
    that must never render an empty section.
    """
    try:
        data = await fetch()
    except StoreError as exc:
        logger.warning(f"Serving fallback data: {exc.message}")
        return FallbackResult(data=_copy_default(default), from_fallback=True, error=exc.message)

    if fallback_on_empty and not data:
        logger.info("Store returned no data, serving fallback data")
        return FallbackResult(data=_copy_default(default), from_fallback=True)

    return FallbackResult(data=data)
