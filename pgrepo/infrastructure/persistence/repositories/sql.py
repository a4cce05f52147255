"""SQL implementation of ReadWriteRepo for any Entity type.

One Repo serves one table for its whole lifetime.  The entity type is fixed
by the factory set with set_entity_factory(); writes take their layout from
the saved entity's own type.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from pgrepo.domain.errors import ErrorKind, RepoError
from pgrepo.domain.models import NIL_ID, Entity, EntityFactory
from pgrepo.domain.repositories import IndexInput, ReadRepo, ReadWriteRepo
from pgrepo.infrastructure.database import Settings, validate_identifier
from pgrepo.infrastructure.persistence.backends import Backend, TextSqlBackend
from pgrepo.infrastructure.persistence.field_mapper import EntityDescriptor, describe

logger = logging.getLogger(__name__)


class Repo(ReadWriteRepo[Entity]):
    def __init__(self, backend: Backend | None, table_name: str) -> None:
        if backend is None:
            raise RepoError(ErrorKind.NO_BACKEND_CONNECTION)
        self._backend = backend
        self._table_name = validate_identifier(table_name)
        self._factory: EntityFactory | None = None

    @classmethod
    async def connect(
        cls,
        table_name: str,
        settings: Settings | None = None,
        backend_cls: type[Backend] = TextSqlBackend,
    ) -> Repo:
        """Dial the database described by *settings* and bind *table_name*.

        Raises RepoError(DIAL_FAILURE) when the database is unreachable.
        """
        validate_identifier(table_name)
        backend = await backend_cls.connect(settings)
        return cls(backend, table_name)

    @property
    def backend(self) -> Backend:
        return self._backend

    def resolve_table(self) -> str:
        """Table used by every query.  The namespace does not affect it."""
        return self._table_name

    def set_entity_factory(self, factory: EntityFactory) -> None:
        """Set the function that creates empty entities for reads."""
        self._factory = factory

    def parent(self) -> ReadRepo | None:
        return None

    def _require_factory(self) -> EntityFactory:
        if self._factory is None:
            raise RepoError(ErrorKind.MODEL_NOT_SET)
        return self._factory

    def _read_descriptor(self) -> tuple[EntityFactory, EntityDescriptor]:
        factory = self._require_factory()
        return factory, describe(type(factory()))

    async def find(self, id: UUID) -> Entity:
        factory, descriptor = self._read_descriptor()
        try:
            row = await self._backend.select_by_id(self.resolve_table(), descriptor.columns, id)
        except SQLAlchemyError as e:
            raise RepoError(ErrorKind.ENTITY_NOT_FOUND, base_err=e) from e
        if row is None:
            raise RepoError(ErrorKind.ENTITY_NOT_FOUND)
        return descriptor.load(factory(), row)

    async def find_all(self) -> list[Entity]:
        factory, descriptor = self._read_descriptor()
        try:
            rows = await self._backend.scan_all(self.resolve_table(), descriptor.columns)
        except SQLAlchemyError as e:
            raise RepoError(ErrorKind.ENTITY_NOT_FOUND, base_err=e) from e
        return [descriptor.load(factory(), row) for row in rows]

    async def find_with_filter(self, expr: str, *args: Any) -> list[Entity]:
        """Filtered query.  Not supported yet: always returns no entities."""
        self._require_factory()
        return []

    async def find_with_filter_using_index(
        self, index_input: IndexInput, filter_query: str, *filter_args: Any
    ) -> list[Entity]:
        """Index-backed filtered query.  Not supported yet: always returns no entities."""
        self._require_factory()
        return []

    async def save(self, entity: Entity) -> None:
        if entity.entity_id() == NIL_ID:
            raise RepoError(
                ErrorKind.COULD_NOT_SAVE_ENTITY,
                base_err=RepoError(ErrorKind.MISSING_ENTITY_ID),
            )
        fields = describe(type(entity)).field_map(entity)
        try:
            affected = await self._backend.upsert(self.resolve_table(), fields)
        except SQLAlchemyError as e:
            raise RepoError(ErrorKind.COULD_NOT_SAVE_ENTITY, base_err=e) from e
        if affected != 1:
            logger.warning(
                "upsert of %s into %s affected %d rows", entity.entity_id(), self._table_name, affected
            )
            raise RepoError(ErrorKind.COULD_NOT_SAVE_ENTITY)

    async def remove(self, id: UUID) -> None:
        try:
            affected = await self._backend.delete_by_id(self.resolve_table(), id)
        except SQLAlchemyError as e:
            raise RepoError(ErrorKind.COULD_NOT_REMOVE_ENTITY, base_err=e) from e
        if affected != 1:
            raise RepoError(ErrorKind.ENTITY_NOT_FOUND)

    async def clear(self) -> None:
        """Delete every entity in the table.  Meant for tests and teardown."""
        try:
            await self._backend.delete_all(self.resolve_table())
        except SQLAlchemyError as e:
            raise RepoError(ErrorKind.COULD_NOT_CLEAR_DB, base_err=e) from e

    async def close(self) -> None:
        try:
            await self._backend.close()
        except (SQLAlchemyError, OSError) as e:
            logger.error("cannot close db: %s", e)
            raise RepoError(ErrorKind.COULD_NOT_CLOSE_DB, base_err=e) from e


def repository(repo: ReadRepo | None) -> Repo | None:
    """Walk the parent() chain of *repo* and return the first Repo, if any."""
    while repo is not None:
        if isinstance(repo, Repo):
            return repo
        repo = repo.parent()
    return None
