"""Entity <-> column mapping.

describe() inspects an Entity subclass once and caches an EntityDescriptor:
the ordered persisted columns with their SQLAlchemy types.  The descriptor
turns an entity into bind values for an upsert and turns a result row back
into a fresh entity, so one repository serves any entity shape.

Column names come from the field name, or from db_field("column") when
tagged; fields tagged "-" are not persisted.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    MetaData,
    Numeric,
    Table,
    Text,
    TypeDecorator,
    Uuid,
)
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.types import TypeEngine

from pgrepo.domain.models import DB_TAG, SKIP, Entity
from pgrepo.infrastructure.database import validate_identifier

KEY_COLUMN = "id"


class TZDateTime(TypeDecorator):
    """Timezone-aware timestamp stored in UTC on every dialect.

    SQLite has no timezone support and hands back naive values; those are
    read as UTC so an aware datetime round-trips to an equal value.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    @staticmethod
    def _as_utc(value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        return self._as_utc(value)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        return self._as_utc(value)


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def sql_type_for(annotation: Any) -> TypeEngine:
    """Map a Python field annotation to the SQLAlchemy column type."""
    annotation = _unwrap_optional(annotation)
    if typing.get_origin(annotation) is not None or not isinstance(annotation, type):
        return JSON()
    # Order matters: bool is an int, datetime is a date.
    if issubclass(annotation, UUID):
        return Uuid()
    if issubclass(annotation, datetime):
        return TZDateTime()
    if issubclass(annotation, date):
        return Date()
    if issubclass(annotation, Enum):
        return SqlEnum(
            annotation,
            native_enum=False,
            values_callable=lambda e: [str(m.value) for m in e],
        )
    if issubclass(annotation, bool):
        return Boolean()
    if issubclass(annotation, int):
        return Integer()
    if issubclass(annotation, float):
        return Float()
    if issubclass(annotation, Decimal):
        return Numeric()
    if issubclass(annotation, str):
        return Text()
    return JSON()


@dataclass(frozen=True)
class ColumnDescriptor:
    field: str
    column: str
    sql_type: TypeEngine = dataclasses.field(compare=False)
    primary_key: bool = False


@dataclass(frozen=True)
class FieldMap:
    """Ordered columns of one entity and the values to bind for them."""

    columns: tuple[ColumnDescriptor, ...]
    values: dict[str, Any]

    @property
    def names(self) -> list[str]:
        return [c.column for c in self.columns]


def _split_table_name(name: str) -> tuple[str | None, str]:
    schema, _, table = validate_identifier(name).rpartition(".")
    return schema or None, table


def build_table(
    name: str,
    columns: tuple[ColumnDescriptor, ...],
    metadata: MetaData | None = None,
) -> Table:
    """Build a Core Table for *columns* named *name* (optionally schema.name)."""
    schema, table = _split_table_name(name)
    return Table(
        table,
        metadata if metadata is not None else MetaData(),
        *(Column(c.column, c.sql_type, primary_key=c.primary_key) for c in columns),
        schema=schema,
    )


class EntityDescriptor:
    """Persisted layout of one Entity subclass."""

    def __init__(self, entity_type: type[Entity], columns: tuple[ColumnDescriptor, ...]) -> None:
        self.entity_type = entity_type
        self.columns = columns

    def __repr__(self) -> str:
        return f"EntityDescriptor({self.entity_type.__name__}, {[c.column for c in self.columns]})"

    def field_map(self, entity: Entity) -> FieldMap:
        dumped = entity.model_dump(mode="python")
        return FieldMap(
            columns=self.columns,
            values={c.column: dumped[c.field] for c in self.columns},
        )

    def load(self, template: Entity, row: Mapping[str, Any]) -> Entity:
        """Build a new entity of template's type from a result row.

        Fields that are not persisted keep the template's values.
        """
        data = dict(template)
        data.update({c.field: row[c.column] for c in self.columns if c.column in row})
        return type(template).model_validate(data)

    def table(self, name: str, metadata: MetaData | None = None) -> Table:
        return build_table(name, self.columns, metadata)


@lru_cache(maxsize=None)
def describe(entity_type: type[Entity]) -> EntityDescriptor:
    """Return the (cached) descriptor for an Entity subclass.

    Raises ValueError when a column name is not a plain identifier, when two
    fields share a column, or when no field is stored as the "id" key column.
    """
    columns: list[ColumnDescriptor] = []
    seen: set[str] = set()
    for name, info in entity_type.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        column = extra.get(DB_TAG, name)
        if column == SKIP:
            continue
        if "." in column:
            raise ValueError(f"{entity_type.__name__}.{name}: invalid column name {column!r}")
        validate_identifier(column)
        if column in seen:
            raise ValueError(f"{entity_type.__name__}: duplicate column {column!r}")
        seen.add(column)
        columns.append(
            ColumnDescriptor(
                field=name,
                column=column,
                sql_type=sql_type_for(info.annotation),
                primary_key=column == KEY_COLUMN,
            )
        )
    if KEY_COLUMN not in seen:
        raise ValueError(f"{entity_type.__name__} has no {KEY_COLUMN!r} column")
    return EntityDescriptor(entity_type, tuple(columns))
