"""Base entity model.

Every persisted type subclasses Entity.  Entities are immutable value objects:
the repository only reads them on write and builds fresh instances on read.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

NIL_ID = UUID(int=0)

# Key under json_schema_extra that carries the storage column name.
DB_TAG = "db"
# Column tag marking a field as not persisted.
SKIP = "-"


def db_field(column: str, default: Any = ..., **kwargs: Any) -> Any:
    """Declare a model field stored under an explicit column name.

    db_field("-") keeps the field on the model but out of the table.
    """
    return Field(default, json_schema_extra={DB_TAG: column}, **kwargs)


class Entity(BaseModel):
    """A uniquely identified record.

    id is NIL_ID until the caller assigns one; saving an entity with the nil
    id is rejected by the repository.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = db_field("id", default=NIL_ID)

    def entity_id(self) -> UUID:
        return self.id


EntityFactory = Callable[[], Entity]
