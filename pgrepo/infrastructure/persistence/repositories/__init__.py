"""Concrete SQL repository implementation."""

from __future__ import annotations

from pgrepo.domain.repositories import IndexInput

from .sql import Repo, repository

__all__ = [
    "IndexInput",
    "Repo",
    "repository",
]
