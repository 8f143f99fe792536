from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from clipstore.constants import DataType
from clipstore.models import Record, RecordEntity, SearchHit, SearchQuery
from clipstore.utils import content_hash


@pytest.fixture
def sample_entity() -> RecordEntity:
    return RecordEntity(
        id=7,
        content="Sample clipboard text",
        data_type="text",
        content_hash=content_hash("Sample clipboard text"),
        created_at=1_704_110_400_000,
        is_favorite=True,
    )


def test_entity_model_conversion(sample_entity: RecordEntity):
    record = sample_entity.model
    assert isinstance(record, Record)
    assert record.id == 7
    assert record.data_type == DataType.TEXT
    assert record.content_hash == sample_entity.content_hash
    assert record.is_favorite is True
    assert record.is_text and not record.is_image


def test_entity_equality_uses_id_and_hash(sample_entity: RecordEntity):
    twin = RecordEntity(id=7, content="other", content_hash=sample_entity.content_hash)
    stranger = RecordEntity(id=8, content="other", content_hash=sample_entity.content_hash)
    assert sample_entity == twin
    assert hash(sample_entity) == hash(twin)
    assert sample_entity != stranger


def test_entity_maps_hash_column():
    assert RecordEntity.__table__.name == "record"
    assert "hash" in {c.name for c in RecordEntity.__table__.columns}


def test_record_created_datetime():
    record = Record(id=1, content="x", content_hash="h", created_at=1_704_110_400_000)
    assert record.created_datetime == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_record_from_attributes(sample_entity: RecordEntity):
    assert Record.model_validate(sample_entity) == sample_entity.model


def test_record_keeps_stored_data_type():
    legacy = Record(id=1, content="x", content_hash="h", created_at=0, data_type="")
    assert legacy.data_type == ""
    assert not legacy.is_text and not legacy.is_image

    image = Record(id=2, content="x.png", content_hash="i", created_at=0, data_type="image")
    assert image.is_image


def test_search_query_defaults_and_validation():
    query = SearchQuery()
    assert query.key is None and query.limit is None and query.is_favorite is None
    with pytest.raises(ValidationError):
        SearchQuery(limit=-5)


def test_search_hit_exposes_record_fields():
    record = Record(id=3, content="abc", content_hash="h", created_at=0)
    hit = SearchHit(record=record, content_highlight="<mark>ab</mark>c")
    assert hit.id == 3
    assert hit.content == "abc"
    assert "content_highlight" not in record.model_dump()
