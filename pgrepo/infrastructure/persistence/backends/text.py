"""Backend issuing literal SQL text with typed bind parameters."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Uuid, bindparam, column, text

from pgrepo.infrastructure.persistence.field_mapper import KEY_COLUMN, ColumnDescriptor, FieldMap

from .base import Backend, Row

logger = logging.getLogger(__name__)


def build_upsert_sql(table: str, names: Sequence[str]) -> str:
    """INSERT ... ON CONFLICT (id) DO UPDATE SET every column to the incoming value.

    Identifiers must already be validated; values are bound as :name.
    """
    joined = ", ".join(names)
    binds = ", ".join(f":{n}" for n in names)
    excluded = ", ".join(f"{n} = EXCLUDED.{n}" for n in names)
    return (
        f"INSERT INTO {table} ({joined}) VALUES ({binds}) "
        f"ON CONFLICT ({KEY_COLUMN}) DO UPDATE SET {excluded}"
    )


def build_select_sql(table: str, names: Sequence[str], by_id: bool = False) -> str:
    sql = f"SELECT {', '.join(names)} FROM {table}"
    if by_id:
        sql += f" WHERE {KEY_COLUMN} = :{KEY_COLUMN}"
    return sql


class TextSqlBackend(Backend):
    """Plain SQL statements; column types come from the entity descriptor."""

    @staticmethod
    def _select(table: str, columns: Sequence[ColumnDescriptor], by_id: bool = False):
        stmt = text(build_select_sql(table, [c.column for c in columns], by_id))
        if by_id:
            stmt = stmt.bindparams(bindparam(KEY_COLUMN, type_=Uuid()))
        return stmt.columns(*(column(c.column, c.sql_type) for c in columns))

    async def select_by_id(
        self, table: str, columns: Sequence[ColumnDescriptor], id: UUID
    ) -> Row | None:
        stmt = self._select(table, columns, by_id=True)
        async with self._engine.connect() as conn:
            result = await conn.execute(stmt, {KEY_COLUMN: id})
            return result.mappings().first()

    async def scan_all(self, table: str, columns: Sequence[ColumnDescriptor]) -> list[Row]:
        async with self._engine.connect() as conn:
            result = await conn.execute(self._select(table, columns))
            return list(result.mappings().all())

    async def upsert(self, table: str, fields: FieldMap) -> int:
        sql = build_upsert_sql(table, fields.names)
        logger.debug(sql)
        stmt = text(sql).bindparams(
            *(bindparam(c.column, type_=c.sql_type) for c in fields.columns)
        )
        async with self._engine.begin() as conn:
            result = await conn.execute(stmt, fields.values)
            return result.rowcount

    async def delete_by_id(self, table: str, id: UUID) -> int:
        stmt = text(f"DELETE FROM {table} WHERE {KEY_COLUMN} = :{KEY_COLUMN}").bindparams(
            bindparam(KEY_COLUMN, type_=Uuid())
        )
        async with self._engine.begin() as conn:
            result = await conn.execute(stmt, {KEY_COLUMN: id})
            return result.rowcount

    async def delete_all(self, table: str) -> None:
        async with self._engine.begin() as conn:
            await conn.execute(text(f"DELETE FROM {table}"))
