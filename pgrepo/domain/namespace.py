"""Namespace carried through the calling context.

The namespace is a logical partition key.  Repositories attach it to every
RepoError they raise; it does not select a physical table.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

DEFAULT_NAMESPACE = ""

_namespace: ContextVar[str] = ContextVar("pgrepo_namespace", default=DEFAULT_NAMESPACE)


def namespace_from_context() -> str:
    """Return the namespace active in the current context ("" if none)."""
    return _namespace.get()


@contextmanager
def context_with_namespace(namespace: str) -> Iterator[str]:
    """Run the enclosed block (and any tasks it spawns) under *namespace*."""
    token = _namespace.set(namespace)
    try:
        yield namespace
    finally:
        _namespace.reset(token)
