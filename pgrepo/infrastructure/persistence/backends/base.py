"""Backend interface."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from pgrepo.domain.errors import ErrorKind, RepoError
from pgrepo.infrastructure.database import Settings, create_engine
from pgrepo.infrastructure.persistence.field_mapper import ColumnDescriptor, FieldMap

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


class Backend(ABC):
    """Driver operations against a single table, keyed by the "id" column.

    Driver failures propagate as SQLAlchemyError; translating them into
    RepoError kinds is the repository's job.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @classmethod
    async def connect(cls, settings: Settings | None = None) -> Backend:
        """Create an engine from *settings* and check that it can connect.

        Raises RepoError(DIAL_FAILURE) if the settings are invalid or the
        database is unreachable.
        """
        engine: AsyncEngine | None = None
        try:
            settings = settings if settings is not None else Settings()
            engine = create_engine(settings.url())
            async with engine.connect():
                pass
        except (SQLAlchemyError, OSError, ValueError, asyncio.TimeoutError) as e:
            logger.error("could not connect to database: %s", e)
            if engine is not None:
                await engine.dispose()
            raise RepoError(ErrorKind.DIAL_FAILURE, base_err=e) from e
        return cls(engine)

    @abstractmethod
    async def select_by_id(
        self, table: str, columns: Sequence[ColumnDescriptor], id: UUID
    ) -> Row | None:
        """Return the row with the given id, or None."""

    @abstractmethod
    async def scan_all(self, table: str, columns: Sequence[ColumnDescriptor]) -> list[Row]:
        """Return every row in backend-native order."""

    @abstractmethod
    async def upsert(self, table: str, fields: FieldMap) -> int:
        """Insert the row, or overwrite every field on id conflict.

        Returns the number of rows affected.
        """

    @abstractmethod
    async def delete_by_id(self, table: str, id: UUID) -> int:
        """Delete the row with the given id.  Returns rows affected."""

    @abstractmethod
    async def delete_all(self, table: str) -> None:
        """Delete every row inside a single transaction."""

    async def close(self) -> None:
        await self._engine.dispose()
