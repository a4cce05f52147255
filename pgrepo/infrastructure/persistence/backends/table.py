"""Backend built on SQLAlchemy Core Table expressions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Table, Uuid, delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import CompileError

from pgrepo.infrastructure.persistence.field_mapper import (
    KEY_COLUMN,
    ColumnDescriptor,
    FieldMap,
    build_table,
)

from .base import Backend, Row

logger = logging.getLogger(__name__)

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}

# Enough of a table to address rows by key.
_KEY_ONLY = (ColumnDescriptor(KEY_COLUMN, KEY_COLUMN, Uuid(), primary_key=True),)


class TableBackend(Backend):
    """Statements compiled by the dialect from Table objects.

    Upsert uses the dialect's insert().on_conflict_do_update(), so only
    PostgreSQL and SQLite are supported.
    """

    def _table(self, name: str, columns: Sequence[ColumnDescriptor] = _KEY_ONLY) -> Table:
        return build_table(name, tuple(columns))

    def _insert(self, table: Table):
        dialect = self._engine.dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            raise CompileError(f"upsert is not supported on {dialect}")
        return insert(table)

    async def select_by_id(
        self, table: str, columns: Sequence[ColumnDescriptor], id: UUID
    ) -> Row | None:
        t = self._table(table, columns)
        stmt = select(t).where(t.c[KEY_COLUMN] == id)
        async with self._engine.connect() as conn:
            result = await conn.execute(stmt)
            return result.mappings().first()

    async def scan_all(self, table: str, columns: Sequence[ColumnDescriptor]) -> list[Row]:
        stmt = select(self._table(table, columns))
        async with self._engine.connect() as conn:
            result = await conn.execute(stmt)
            return list(result.mappings().all())

    async def upsert(self, table: str, fields: FieldMap) -> int:
        t = self._table(table, fields.columns)
        stmt = self._insert(t).values(**fields.values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[KEY_COLUMN],
            set_={name: stmt.excluded[name] for name in fields.names},
        )
        logger.debug("%s", stmt)
        async with self._engine.begin() as conn:
            result = await conn.execute(stmt)
            return result.rowcount

    async def delete_by_id(self, table: str, id: UUID) -> int:
        t = self._table(table)
        async with self._engine.begin() as conn:
            result = await conn.execute(delete(t).where(t.c[KEY_COLUMN] == id))
            return result.rowcount

    async def delete_all(self, table: str) -> None:
        async with self._engine.begin() as conn:
            await conn.execute(delete(self._table(table)))
