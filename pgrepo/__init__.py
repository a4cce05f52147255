"""pgrepo: generic repository for versioned entities on a relational store.

The domain layer (pgrepo.domain) defines the entity model, error envelope and
repository interfaces.  Storage adapters live in pgrepo.infrastructure and the
reusable conformance suite lives in pgrepo.testing.
"""

from pgrepo.domain.errors import ErrorKind, RepoError
from pgrepo.domain.models import NIL_ID, Entity, EntityFactory, db_field
from pgrepo.domain.namespace import context_with_namespace, namespace_from_context
from pgrepo.infrastructure.persistence.repositories import IndexInput, Repo, repository

__all__ = [
    "NIL_ID",
    "Entity",
    "EntityFactory",
    "ErrorKind",
    "IndexInput",
    "Repo",
    "RepoError",
    "context_with_namespace",
    "db_field",
    "namespace_from_context",
    "repository",
]
