"""Generic repository interfaces.

ReadRepo / WriteRepo / ReadWriteRepo are the root abstractions every storage
adapter implements.  Repositories may be stacked as decorators: each one
exposes the repository it wraps through parent(), and the innermost storage
repository returns None.

Design notes:
  - All methods are async to accommodate async database drivers.
  - T is the domain entity type (never an ORM row or DTO).
  - Failures are raised as RepoError; "not found" is an error, not None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from uuid import UUID

from pgrepo.domain.models import Entity

T = TypeVar("T", bound=Entity)


@dataclass(frozen=True)
class IndexInput:
    """Parameters for a query served by a secondary index."""

    index_name: str
    partition_key: str
    partition_key_value: Any
    sort_key: str = ""
    sort_key_value: Any = None


class ReadRepo(ABC, Generic[T]):
    """Read side of a repository."""

    @abstractmethod
    def parent(self) -> ReadRepo | None:
        """Return the wrapped repository, or None for a storage leaf."""

    @abstractmethod
    async def find(self, id: UUID) -> T:
        """Return the entity with the given id.  Raises ENTITY_NOT_FOUND."""

    @abstractmethod
    async def find_all(self) -> list[T]:
        """Return every stored entity, in no particular order."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""


class WriteRepo(ABC, Generic[T]):
    """Write side of a repository."""

    @abstractmethod
    async def save(self, entity: T) -> None:
        """Insert or fully replace the entity keyed by its id."""

    @abstractmethod
    async def remove(self, id: UUID) -> None:
        """Delete the entity with the given id.  Raises ENTITY_NOT_FOUND."""


class ReadWriteRepo(ReadRepo[T], WriteRepo[T]):
    """Combined interface checked by the acceptance suite."""
