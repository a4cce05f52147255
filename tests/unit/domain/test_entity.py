"""Tests for pgrepo/domain/models/entity.py."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from pgrepo.domain.models import DB_TAG, NIL_ID, Entity, db_field
from pgrepo.testing import Model


def test_nil_id_is_all_zero():
    assert NIL_ID.int == 0


def test_entity_defaults_to_nil_id():
    assert Entity().id == NIL_ID


def test_entity_id_returns_id():
    uid = uuid4()
    assert Model(id=uid).entity_id() == uid


def test_entity_is_frozen():
    m = Model(id=uuid4(), content="a")
    with pytest.raises(ValidationError):
        m.content = "b"  # type: ignore[misc]


def test_db_field_records_column_name():
    assert Model.model_fields["created_at"].json_schema_extra == {DB_TAG: "created_at"}


def test_db_field_without_default_is_required():
    class _Tagged(Entity):
        name: str = db_field("display_name")

    with pytest.raises(ValidationError):
        _Tagged()


def test_models_with_same_fields_are_equal():
    uid = uuid4()
    assert Model(id=uid, content="x") == Model(id=uid, content="x")
