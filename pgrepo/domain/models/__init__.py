"""Domain model package.

Entities are pydantic models with no ORM or driver dependencies.  Import
from this package rather than individual modules.
"""

from .entity import DB_TAG, NIL_ID, SKIP, Entity, EntityFactory, db_field

__all__ = [
    "DB_TAG",
    "NIL_ID",
    "SKIP",
    "Entity",
    "EntityFactory",
    "db_field",
]
