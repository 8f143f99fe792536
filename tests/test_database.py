from sqlalchemy import inspect, text
from sqlalchemy.pool import StaticPool

from clipstore.config import StoreSettings
from clipstore.database import DatabaseSessionGenerator
from clipstore.models import RecordEntity  # noqa: F401  registers the table on Base


def test_engine_uses_single_static_connection(settings: StoreSettings):
    settings.database_path.parent.mkdir(parents=True)
    generator = DatabaseSessionGenerator(settings)
    try:
        assert isinstance(generator.engine.pool, StaticPool)
        assert generator.engine.url.database == settings.database_path.as_posix()
    finally:
        generator.dispose()


def test_init_db_creates_record_table(settings: StoreSettings):
    settings.database_path.parent.mkdir(parents=True)
    generator = DatabaseSessionGenerator(settings)
    try:
        generator.init_db()
        generator.init_db()
        inspector = inspect(generator.engine)
        assert inspector.has_table("record")
        unique = inspector.get_unique_constraints("record")
        assert [c["column_names"] for c in unique] == [["hash"]]
    finally:
        generator.dispose()


def test_table_uses_autoincrement(settings: StoreSettings):
    settings.database_path.parent.mkdir(parents=True)
    generator = DatabaseSessionGenerator(settings)
    try:
        generator.init_db()
        with generator.get_session() as session:
            ddl = session.execute(
                text("SELECT sql FROM sqlite_master WHERE name = 'record'")
            ).scalar_one()
        assert "AUTOINCREMENT" in ddl.upper()
    finally:
        generator.dispose()


def test_echo_flag(data_dir):
    data_dir.mkdir(parents=True)
    generator = DatabaseSessionGenerator(StoreSettings(data_dir=data_dir, echo_sql=True))
    try:
        assert generator.engine.echo is True
    finally:
        generator.dispose()
