"""
clipstore.database

Shared SQLAlchemy declarative base and session management for the record store.

Overview:
- Provides a single `declarative_base()` instance (`Base`) inherited by the
    SQLAlchemy ORM entity classes of the package.
- Includes a utility class that owns the engine of one SQLite file and hands out
    sessions bound to it.

Contents:
- Base:
    Singleton `declarative_base` instance. RecordEntity inherits from it to
    participate in the shared ORM registry and metadata.

- DatabaseSessionGenerator:
    Utility class to generate SQLAlchemy sessions bound to a specific engine.
    - __init__(settings: StoreSettings):
        Creates the engine for the configured SQLite file.
    - get_session() -> Session:
        Creates a new synchronous SQLAlchemy session.
    - init_db():
        Creates all tables defined in the ORM models that do not exist yet.
    - dispose():
        Closes the underlying connection.

Design Notes:
- The engine uses a StaticPool, so every session of one generator shares a single
    SQLite connection: one open handle per store instance.
- check_same_thread is disabled; serializing access across threads is left to the caller.
"""

from sqlalchemy import engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from clipstore.config import StoreSettings


Base = declarative_base()
"""Singleton `declarative_base` instance for ORM models."""


class DatabaseSessionGenerator:
    """
    Utility class to generate SQLAlchemy sessions bound to a specific engine.

    Attributes:
        engine (sqlalchemy.engine.Engine): The SQLAlchemy engine to bind sessions to.
    """

    def __init__(self, settings: StoreSettings):
        self.engine = engine.create_engine(
            settings.database_url,
            echo=settings.echo_sql,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    def get_session(self) -> Session:
        """
        Creates a new SQLAlchemy session bound to the configured engine.

        Returns:
            sqlalchemy.orm.Session: A new session instance.
        """
        return self._session_factory()

    def init_db(self) -> None:
        """
        Initializes the database by creating all tables defined in the ORM models.
        """
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        """Release the pooled connection."""
        self.engine.dispose()
