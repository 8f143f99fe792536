"""
clipstore.models
Package initialization for record persistence and domain models.
Contents:
- Entity Models:
    - RecordEntity: SQLAlchemy entity for the record table.
- Domain Models:
    - Record: Pydantic mirror of a stored record.
    - SearchQuery: Filters of a search request.
    - SearchHit: A record with its search highlight.
"""

from .record import Record, RecordEntity, SearchHit, SearchQuery  # noqa: F401


__entities__ = ["RecordEntity"]
__models__ = ["Record", "SearchQuery", "SearchHit"]
__all__ = [*__entities__, *__models__]
