# region Docstring
"""
clipstore.models.record
Persistence and domain models for clipboard history records.
Overview:
- Provides the SQLAlchemy entity persisting one clipboard entry per distinct content hash.
- Provides Pydantic models mirroring the persisted entity for safe I/O, the search request,
    and the search result projection.
Contents:
- SQLAlchemy entities:
    - RecordEntity:
        Stores content, its data type, the content hash used for deduplication, the
        millisecond timestamp of the most recent insert or touch, and the favorite flag.
        Includes helpers for equality, hashing, and conversion to a Record Pydantic model
        via the .model property.
- Pydantic models:
    - Record:
        A domain model representing a single stored entry.
    - SearchQuery:
        Optional text filter, result limit and favorite filter of a search.
    - SearchHit:
        A Record paired with its highlighted content. Highlights are computed per query
        and are never persisted.
Design notes:
- The hash column carries a UNIQUE constraint so that insert-or-touch can be a single
    upsert rather than a lookup followed by a write.
- sqlite_autoincrement guarantees ids are never reused after eviction or clear.
- created_at is an integer of milliseconds since the epoch; Record.created_datetime gives
    the timezone-aware datetime.
- Record.data_type is kept as the stored string. The column defaults to an empty string,
    so rows written by other tools need not hold a DataType value.
"""
# endregion
# region Imports
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from clipstore.constants import RECORD_TABLE, DataType
from clipstore.database import Base
from clipstore.utils import millis_to_datetime


# endregion
# region SQLAlchemy Model
class RecordEntity(Base):
    """
    Model representing stored clipboard records.
    Attributes:
        id (int): Primary key, never reused.
        content (str): The clipboard content or image reference.
        data_type (str): Type of the content (text, image).
        content_hash (str): Hash of the content for deduplication, stored in the "hash" column.
        created_at (int): Milliseconds since epoch of the latest insert or touch.
        is_favorite (bool): Whether the entry is marked as favorite.
    """

    __tablename__ = RECORD_TABLE
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    data_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="", server_default=""
    )
    content_hash: Mapped[str] = mapped_column(
        "hash", String(200), nullable=False, default="", server_default="", unique=True
    )
    created_at: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    is_favorite: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )

    def __repr__(self) -> str:
        return f"<Record(id={self.id}, data_type='{self.data_type}', created_at={self.created_at})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordEntity):
            return NotImplemented
        return self.id == other.id and self.content_hash == other.content_hash

    def __hash__(self) -> int:
        return hash((self.id, self.content_hash))

    @property
    def model(self) -> "Record":
        return Record(
            id=self.id,
            content=self.content,
            data_type=self.data_type,
            content_hash=self.content_hash,
            created_at=self.created_at,
            is_favorite=self.is_favorite,
        )


# endregion
# region Pydantic Models
class Record(BaseModel):
    id: int = Field(..., description="The unique ID of the record")
    content: str = Field(..., description="The content of the clipboard entry")
    data_type: str = Field(
        DataType.TEXT.value,
        description="The stored content type; \"text\" or \"image\" for records written by this store",
    )
    content_hash: str = Field(..., description="The hash of the clipboard content")
    created_at: int = Field(
        ..., description="Milliseconds since epoch of the latest insert or touch"
    )
    is_favorite: bool = Field(
        False, description="Indicates if the entry is marked as favorite"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": 1,
                    "content": "Sample clipboard text",
                    "data_type": "text",
                    "content_hash": "0cc175b9c0f1b6a831c399e269772661",
                    "created_at": 1704110400000,
                    "is_favorite": True,
                }
            ]
        },
        from_attributes=True,
    )

    @property
    def created_datetime(self) -> datetime:
        """created_at as a timezone-aware UTC datetime."""
        return millis_to_datetime(self.created_at)

    @property
    def is_text(self) -> bool:
        return self.data_type == DataType.TEXT

    @property
    def is_image(self) -> bool:
        return self.data_type == DataType.IMAGE


class SearchQuery(BaseModel):
    key: Optional[str] = Field(
        None, description="Substring the content must contain"
    )
    limit: Optional[int] = Field(
        None, ge=0, description="Maximum number of hits; the store default when unset"
    )
    is_favorite: Optional[bool] = Field(
        None, description="Only return records with this favorite flag"
    )

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"key": "ab", "limit": 50, "is_favorite": None}]}
    )


class SearchHit(BaseModel):
    """A search result: the stored record plus its query-specific highlight."""

    record: Record = Field(..., description="The matching record")
    content_highlight: Optional[str] = Field(
        None, description="Content with the search key marked; None without a key"
    )

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def content(self) -> str:
        return self.record.content


# endregion

__all__ = ["RecordEntity", "Record", "SearchQuery", "SearchHit"]
