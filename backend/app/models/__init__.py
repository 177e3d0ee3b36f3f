"""
SQLAlchemy models for the NHBEA backend.

All entities are stored as JSON documents in a single table; their shapes
are described by the pydantic schemas in ``app.schemas``.
"""
from app.models.document import Document

__all__ = [
    "Document",
]
