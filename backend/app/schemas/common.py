"""
Common schemas used across the application.
"""
from enum import Enum
from typing import Generic, TypeVar, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for stored documents: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self) -> dict:
        """Dump in stored form (camelCase keys, no id, None fields dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})


class DataSource(str, Enum):
    """Where a read endpoint's payload came from."""
    STORE = "store"
    FALLBACK = "fallback"


class SourcedListResponse(BaseModel, Generic[T]):
    """List payload tagged with its source so the UI can tell stale defaults apart."""
    items: list[T]
    source: DataSource = DataSource.STORE


class SourcedItemResponse(BaseModel, Generic[T]):
    """Single-document payload tagged with its source."""
    item: Optional[T] = None
    source: DataSource = DataSource.STORE


class MessageResponse(BaseModel):
    """Simple message response."""
    message: str


class SubmissionResponse(BaseModel):
    """Result of a public form submission."""
    success: bool
    message: str
    error: Optional[str] = None
    errors: Optional[list[str]] = None
    id: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    code: int = 200
    message: str = "API is healthy."


class CountResponse(BaseModel):
    """Result of a bulk maintenance operation."""
    count: int
    message: str
