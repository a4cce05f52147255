"""Acceptance test that all ReadWriteRepo implementations should pass.

Call it from a test in each implementation, on an empty store whose entity
factory produces Model:

    async def test_repo(repo):
        await acceptance_test(repo)

Run it inside context_with_namespace() to cover a custom namespace.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pgrepo.domain.errors import ErrorKind, RepoError
from pgrepo.domain.repositories import ReadWriteRepo

from .mocks import Model

CREATED_AT = datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)


async def _expect_error(awaitable, kind: ErrorKind, what: str) -> RepoError:
    try:
        result = await awaitable
    except RepoError as e:
        assert e.has_kind(kind), f"{what}: there should be a {kind.name} error: {e!r}"
        return e
    raise AssertionError(f"{what}: there should be a {kind.name} error, got {result!r}")


async def acceptance_test(repo: ReadWriteRepo) -> None:
    # Find non-existing item.
    await _expect_error(repo.find(uuid4()), ErrorKind.ENTITY_NOT_FOUND, "find missing")

    # FindAll with no items.
    result = await repo.find_all()
    assert len(result) == 0, f"there should be no items: {result!r}"

    # Save model without ID.
    missing_id = Model(content="entity1", created_at=CREATED_AT)
    err = await _expect_error(
        repo.save(missing_id), ErrorKind.MISSING_ENTITY_ID, "save without id"
    )
    assert err.kind is ErrorKind.COULD_NOT_SAVE_ENTITY, f"wrong outer error: {err!r}"
    assert await repo.find_all() == [], "nothing should be saved without an id"

    # Save and find one item.
    entity1 = Model(id=uuid4(), content="entity1", created_at=CREATED_AT)
    await repo.save(entity1)
    found = await repo.find(entity1.id)
    assert found == entity1, f"the item should be correct: {found!r}"

    # FindAll with one item.
    result = await repo.find_all()
    assert result == [entity1], f"the items should be correct: {result!r}"

    # Save and overwrite with same ID.
    entity1_alt = Model(id=entity1.id, content="entity1Alt", created_at=CREATED_AT)
    await repo.save(entity1_alt)
    found = await repo.find(entity1_alt.id)
    assert found == entity1_alt, f"the item should be correct: {found!r}"

    # Save with another ID.
    entity2 = Model(id=uuid4(), content="entity2", created_at=CREATED_AT)
    await repo.save(entity2)
    found = await repo.find(entity2.id)
    assert found == entity2, f"the item should be correct: {found!r}"

    # FindAll with two items, retrieval in any order is accepted.
    result = await repo.find_all()
    assert len(result) == 2, f"there should be two items: {result!r}"
    by_id = {e.entity_id(): e for e in result}
    assert by_id == {entity1_alt.id: entity1_alt, entity2.id: entity2}, (
        f"the items should be correct: {result!r}"
    )

    # Remove item.
    await repo.remove(entity1_alt.id)
    await _expect_error(repo.find(entity1_alt.id), ErrorKind.ENTITY_NOT_FOUND, "find removed")

    # Remove non-existing item.
    await _expect_error(
        repo.remove(entity1_alt.id), ErrorKind.ENTITY_NOT_FOUND, "remove missing"
    )
