"""Storage backends.

A Backend is the driver capability the repository delegates to.  Both
adapters implement the same interface over an AsyncEngine and are
interchangeable behind Repo.
"""

from .base import Backend
from .table import TableBackend
from .text import TextSqlBackend

__all__ = [
    "Backend",
    "TableBackend",
    "TextSqlBackend",
]
