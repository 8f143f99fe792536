# region Docstring
"""
clipstore.services.record_store
Durable storage, deduplication, retention and search for clipboard records.
Overview:
    - Owns one SQLite file holding a single record table and exposes the operations the
      application's command handlers call: insert-or-touch, favorite toggling,
      enumeration, search with highlighting, eviction and bulk clear.
    - A RecordStore is an explicitly owned handle. initialize() opens it, close() releases
      it, and it can be used as a context manager.
Contents:
    - Services:
        - RecordStore:
            Methods:
                - initialize() -> Path:
                    Creates the file and schema if missing; idempotent.
                - insert_or_touch(content, data_type, is_favorite) -> Record:
                    Inserts new content or refreshes created_at of the existing record.
                - insert_record(content, data_type, is_favorite) -> int:
                    Plain insert returning the new id.
                - toggle_favorite(record_id) -> Record
                - find_by_id(record_id) -> Record
                - find_by_hash(digest) -> Record
                - exists_by_hash(digest) -> bool
                - count() -> int
                - list_all() -> list[Record]
                - search(query) -> list[SearchHit]
                - evict_over_limit(limit) -> int
                - clear_all() -> int
                - close() -> None
Design Notes:
    - insert_or_touch is a single INSERT ... ON CONFLICT(hash) DO UPDATE statement against
      the UNIQUE hash column, so concurrent inserts of identical content cannot create
      two rows.
    - Eviction keeps the highest ids, i.e. the most recently created identities. A touch
      refreshes created_at but does not move a record's id, so an old record that was
      copied again can still be evicted.
    - Engine exceptions are logged with full stack traces before being re-raised as
      StoreInitError, StoreReadError or StoreWriteError. NotFound is an expected outcome
      and is not logged as an error.
"""

# endregion
# region Imports
import logging
from logging import Logger as T_Logger
from pathlib import Path
from typing import Callable, Optional, Union

from sqlalchemy import delete, exists, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from clipstore.config import StoreSettings, get_settings
from clipstore.constants import APP_NAME, RECORD_TABLE, DataType
from clipstore.database import DatabaseSessionGenerator as DBSession
from clipstore.errors import NotFound, StoreInitError, StoreReadError, StoreWriteError
from clipstore.models import Record, RecordEntity, SearchHit, SearchQuery
from clipstore.utils import content_hash, get_table_columns, highlight, now_millis

# endregion
# region Record Store Service


class RecordStore:
    __settings: StoreSettings
    __logger: T_Logger
    __clock: Callable[[], int]
    __db_session: Optional[DBSession]
    __path: Optional[Path]

    def __init__(
        self,
        settings: Optional[StoreSettings] = None,
        logger: Optional[T_Logger] = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.__settings = settings or get_settings(StoreSettings)
        self.__logger = (logger or logging.getLogger(APP_NAME)).getChild(
            self.__class__.__name__
        )
        self.__clock = clock
        self.__db_session = None
        self.__path = None

    def __enter__(self) -> "RecordStore":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def settings(self) -> StoreSettings:
        return self.__settings

    @property
    def path(self) -> Optional[Path]:
        """Path of the SQLite file, once initialized."""
        return self.__path

    @property
    def is_initialized(self) -> bool:
        return self.__db_session is not None

    # region Lifecycle
    def initialize(self) -> Path:
        """
        Ensure the store file and the record table exist, and open the store.

        Returns:
            Path: The SQLite file backing this store.

        Raises:
            StoreInitError: If the data directory cannot be resolved, the file cannot be
                created, the schema cannot be applied, or an existing record table
                lacks columns the store needs.
        """
        try:
            path = self.__settings.database_path
            path.parent.mkdir(parents=True, exist_ok=True)
            if not path.exists():
                self.__logger.info("Creating store file %s", path)
                path.touch()
        except (OSError, RuntimeError) as e:
            self.__logger.exception("Failed to prepare store file: %s", e)
            raise StoreInitError(f"Cannot create store file: {e}") from e

        db_session = self.__db_session or DBSession(self.__settings)
        try:
            db_session.init_db()
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to apply schema to %s", path)
            self._discard(db_session)
            raise StoreInitError(f"Cannot apply schema to {path}") from e

        try:
            missing = self._missing_columns(path)
        except ValueError as e:
            self.__logger.exception("Failed to inspect schema of %s", path)
            self._discard(db_session)
            raise StoreInitError(f"Cannot inspect schema of {path}") from e
        if missing:
            self.__logger.error(
                "Existing %s table in %s lacks columns %s", RECORD_TABLE, path, missing
            )
            self._discard(db_session)
            raise StoreInitError(
                f"Existing {RECORD_TABLE} table in {path} lacks columns: {', '.join(missing)}"
            )

        self.__db_session = db_session
        self.__path = path
        self.__logger.info("Record store ready at %s", path)
        return path

    def _discard(self, db_session: DBSession) -> None:
        db_session.dispose()
        self.__db_session = None

    def _missing_columns(self, path: Path) -> list[str]:
        """Columns of the record schema absent from the table already in *path*."""
        present = get_table_columns(path, RECORD_TABLE)
        return [
            column.name
            for column in RecordEntity.__table__.columns
            if column.name not in present
        ]

    def close(self) -> None:
        """Release the database handle. Safe to call more than once."""
        if self.__db_session is not None:
            self.__db_session.dispose()
            self.__db_session = None
            self.__logger.debug("Record store at %s closed", self.__path)

    def _sessions(self) -> DBSession:
        if self.__db_session is None:
            raise StoreInitError("Record store is not initialized; call initialize() first")
        return self.__db_session

    # endregion
    # region Writes
    def insert_or_touch(
        self,
        content: str,
        data_type: Union[DataType, str] = DataType.TEXT,
        is_favorite: bool = False,
    ) -> Record:
        """
        Store *content*, or refresh the timestamp of the record already holding it.

        Arguments:
            content (str): Text, or an image reference encoded as a string.
            data_type (DataType | str): "text" or "image"; only used for new records.
            is_favorite (bool): Favorite flag; only used for new records.

        Returns:
            Record: The inserted or touched record.

        Raises:
            ValueError: If data_type is not a known DataType.
            StoreWriteError: If the upsert fails. Nothing is applied in that case.
        """
        db_session = self._sessions()
        kind = DataType(data_type)
        digest = content_hash(content)
        now = self.__clock()

        stmt = sqlite_insert(RecordEntity).values(
            {
                RecordEntity.content: content,
                RecordEntity.data_type: kind.value,
                RecordEntity.content_hash: digest,
                RecordEntity.created_at: now,
                RecordEntity.is_favorite: is_favorite,
            }
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[RecordEntity.content_hash],
            set_={"created_at": stmt.excluded.created_at},
        ).returning(RecordEntity)
        try:
            with db_session.get_session() as session:
                record = session.scalars(stmt).one().model
                session.commit()
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to insert or touch record %s", digest)
            raise StoreWriteError("Failed to store record") from e

        self.__logger.debug(
            "Stored record id=%s hash=%s created_at=%s", record.id, digest, now
        )
        return record

    def insert_record(
        self,
        content: str,
        data_type: Union[DataType, str] = DataType.TEXT,
        is_favorite: bool = False,
    ) -> int:
        """
        Insert a new record without the deduplication branch.

        Returns:
            int: The id assigned to the new record.

        Raises:
            StoreWriteError: If the insert fails, including when the content already exists.
        """
        db_session = self._sessions()
        digest = content_hash(content)
        entity = RecordEntity(
            content=content,
            data_type=DataType(data_type).value,
            content_hash=digest,
            created_at=self.__clock(),
            is_favorite=is_favorite,
        )
        try:
            with db_session.get_session() as session:
                session.add(entity)
                session.commit()
                record_id = entity.id
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to insert record %s", digest)
            raise StoreWriteError("Failed to insert record") from e
        self.__logger.debug("Inserted record id=%s", record_id)
        return record_id

    def toggle_favorite(self, record_id: int) -> Record:
        """
        Flip the favorite flag of a record.

        Returns:
            Record: The record with its new flag.

        Raises:
            NotFound: If no record has this id.
            StoreWriteError: If the update fails.
        """
        db_session = self._sessions()
        try:
            with db_session.get_session() as session:
                entity = session.get(RecordEntity, record_id)
                if entity is None:
                    raise NotFound(f"No record with id {record_id}")
                entity.is_favorite = not entity.is_favorite
                session.commit()
                record = entity.model
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to toggle favorite on record %s", record_id)
            raise StoreWriteError(f"Failed to update record {record_id}") from e
        self.__logger.debug(
            "Record id=%s is_favorite=%s", record_id, record.is_favorite
        )
        return record

    def evict_over_limit(self, limit: Optional[int] = None) -> int:
        """
        Delete the oldest records once the store outgrows *limit* by the eviction slack.

        Nothing is deleted while the excess over *limit* is smaller than the configured
        slack. Otherwise only the *limit* records with the highest ids survive.

        Arguments:
            limit (int | None): Number of records to keep; settings.retention_limit if None.

        Returns:
            int: Number of deleted records.

        Raises:
            ValueError: If limit is negative.
            StoreWriteError: If counting or deleting fails.
        """
        limit = self.__settings.retention_limit if limit is None else limit
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        db_session = self._sessions()
        slack = self.__settings.eviction_slack
        try:
            with db_session.get_session() as session:
                total = session.scalar(select(func.count()).select_from(RecordEntity))
                if total - limit < slack:
                    self.__logger.debug(
                        "Eviction skipped: %s records, limit %s, slack %s",
                        total,
                        limit,
                        slack,
                    )
                    return 0
                survivors = (
                    select(RecordEntity.id).order_by(RecordEntity.id.desc()).limit(limit)
                )
                result = session.execute(
                    delete(RecordEntity)
                    .where(RecordEntity.id.not_in(survivors))
                    .execution_options(synchronize_session=False)
                )
                deleted = result.rowcount
                session.commit()
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to evict records over limit %s", limit)
            raise StoreWriteError("Failed to evict records") from e
        self.__logger.info(
            "Evicted %s of %s records (limit %s)", deleted, total, limit
        )
        return deleted

    def clear_all(self) -> int:
        """
        Delete every record. Irreversible.

        Returns:
            int: Number of deleted records.
        """
        db_session = self._sessions()
        try:
            with db_session.get_session() as session:
                result = session.execute(
                    delete(RecordEntity).execution_options(synchronize_session=False)
                )
                deleted = result.rowcount
                session.commit()
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to clear records")
            raise StoreWriteError("Failed to clear records") from e
        self.__logger.info("Cleared %s records", deleted)
        return deleted

    # endregion
    # region Reads
    def find_by_id(self, record_id: int) -> Record:
        """Return the record with *record_id* or raise NotFound."""
        db_session = self._sessions()
        try:
            with db_session.get_session() as session:
                entity = session.get(RecordEntity, record_id)
                record = entity.model if entity is not None else None
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to load record %s", record_id)
            raise StoreReadError(f"Failed to load record {record_id}") from e
        if record is None:
            raise NotFound(f"No record with id {record_id}")
        return record

    def find_by_hash(self, digest: str) -> Record:
        """Return the record whose content hash is *digest* or raise NotFound."""
        db_session = self._sessions()
        try:
            with db_session.get_session() as session:
                entity = session.scalars(
                    select(RecordEntity).where(RecordEntity.content_hash == digest)
                ).first()
                record = entity.model if entity is not None else None
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to look up hash %s", digest)
            raise StoreReadError("Failed to look up record by hash") from e
        if record is None:
            raise NotFound(f"No record with hash {digest}")
        return record

    def exists_by_hash(self, digest: str) -> bool:
        db_session = self._sessions()
        try:
            with db_session.get_session() as session:
                return bool(
                    session.scalar(
                        select(exists().where(RecordEntity.content_hash == digest))
                    )
                )
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to check hash %s", digest)
            raise StoreReadError("Failed to check record hash") from e

    def count(self) -> int:
        db_session = self._sessions()
        try:
            with db_session.get_session() as session:
                return session.scalar(select(func.count()).select_from(RecordEntity))
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to count records")
            raise StoreReadError("Failed to count records") from e

    def list_all(self) -> list[Record]:
        """All records of every data type, most recently created or touched first."""
        db_session = self._sessions()
        try:
            with db_session.get_session() as session:
                entities = session.scalars(
                    select(RecordEntity).order_by(
                        RecordEntity.created_at.desc(), RecordEntity.id.desc()
                    )
                ).all()
                return [entity.model for entity in entities]
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to list records")
            raise StoreReadError("Failed to list records") from e

    def search(self, query: Optional[SearchQuery] = None) -> list[SearchHit]:
        """
        Search text records, most recent first.

        The key is matched literally as a substring (SQL LIKE, ASCII case-insensitive).
        When a key is given each hit carries the content with the key highlighted.
        Image records are never returned.

        Arguments:
            query (SearchQuery | None): Filters; everything up to the default limit if None.

        Returns:
            list[SearchHit]: At most query.limit (or settings.search_limit) hits.
        """
        db_session = self._sessions()
        query = query or SearchQuery()
        limit = query.limit if query.limit is not None else self.__settings.search_limit

        stmt = select(RecordEntity).where(RecordEntity.data_type == DataType.TEXT.value)
        if query.key is not None:
            stmt = stmt.where(RecordEntity.content.contains(query.key, autoescape=True))
        if query.is_favorite is not None:
            stmt = stmt.where(RecordEntity.is_favorite == query.is_favorite)
        stmt = stmt.order_by(
            RecordEntity.created_at.desc(), RecordEntity.id.desc()
        ).limit(limit)

        try:
            with db_session.get_session() as session:
                records = [entity.model for entity in session.scalars(stmt).all()]
        except SQLAlchemyError as e:
            self.__logger.exception("Search failed for %r", query)
            raise StoreReadError("Search failed") from e

        self.__logger.debug("Search %r returned %s hits", query, len(records))
        if query.key is None:
            return [SearchHit(record=record) for record in records]
        return [
            SearchHit(
                record=record,
                content_highlight=highlight(
                    query.key,
                    record.content,
                    self.__settings.highlight_open,
                    self.__settings.highlight_close,
                ),
            )
            for record in records
        ]

    # endregion


# endregion

__all__ = ["RecordStore"]
