"""Tests for pgrepo/domain/namespace.py."""

import asyncio

from pgrepo.domain.namespace import (
    DEFAULT_NAMESPACE,
    context_with_namespace,
    namespace_from_context,
)


def test_default_namespace_is_empty():
    assert namespace_from_context() == DEFAULT_NAMESPACE == ""


def test_context_with_namespace_sets_and_restores():
    with context_with_namespace("ns") as ns:
        assert ns == "ns"
        assert namespace_from_context() == "ns"
    assert namespace_from_context() == ""


def test_nested_namespaces_restore_outer():
    with context_with_namespace("outer"):
        with context_with_namespace("inner"):
            assert namespace_from_context() == "inner"
        assert namespace_from_context() == "outer"


async def test_tasks_inherit_namespace():
    async def _read():
        return namespace_from_context()

    with context_with_namespace("tenant"):
        task = asyncio.create_task(_read())
    assert await task == "tenant"
