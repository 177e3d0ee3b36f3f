"""
Document model - one row per document in a named collection.
"""
from typing import Any
from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.base import TimestampMixin, generate_id


class Document(Base, TimestampMixin):
    """
    A schemaless record addressed by (collection, id).

    ``data`` holds the whole JSON body; writes always replace it wholesale.
    """
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(100), primary_key=True)
    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=generate_id)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<Document {self.collection}/{self.id}>"
