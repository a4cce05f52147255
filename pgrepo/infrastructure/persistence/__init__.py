"""Persistence package: field mapping, storage backends and the SQL repository."""

from pgrepo.infrastructure.persistence.backends import Backend, TableBackend, TextSqlBackend
from pgrepo.infrastructure.persistence.field_mapper import (
    ColumnDescriptor,
    EntityDescriptor,
    FieldMap,
    TZDateTime,
    describe,
)
from pgrepo.infrastructure.persistence.repositories import IndexInput, Repo, repository

__all__ = [
    "Backend",
    "TableBackend",
    "TextSqlBackend",
    "ColumnDescriptor",
    "EntityDescriptor",
    "FieldMap",
    "TZDateTime",
    "describe",
    "IndexInput",
    "Repo",
    "repository",
]
