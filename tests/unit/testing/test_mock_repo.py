"""The acceptance suite against the in-memory MockRepo."""

import pytest

from pgrepo.domain.errors import ErrorKind, RepoError
from pgrepo.domain.namespace import context_with_namespace
from pgrepo.testing import MockRepo, Model, acceptance_test


async def test_mock_repo_passes_acceptance():
    await acceptance_test(MockRepo())


async def test_mock_repo_passes_acceptance_in_namespace():
    with context_with_namespace("ns"):
        await acceptance_test(MockRepo())


async def test_acceptance_detects_silent_double_remove():
    class _LenientRemove(MockRepo):
        async def remove(self, id):
            self.entities.pop(id, None)

    with pytest.raises(AssertionError, match="remove missing"):
        await acceptance_test(_LenientRemove())


async def test_acceptance_detects_merge_on_overwrite():
    class _Merging(MockRepo):
        async def save(self, entity):
            old = self.entities.get(entity.entity_id())
            if old is not None:
                entity = entity.model_copy(update={"content": old.content})
            await super().save(entity)

    with pytest.raises(AssertionError, match="the item should be correct"):
        await acceptance_test(_Merging())


async def test_mock_repo_close_marks_closed():
    repo = MockRepo()
    await repo.close()
    assert repo.closed


async def test_mock_repo_find_missing_raises():
    with pytest.raises(RepoError) as exc_info:
        await MockRepo().find(Model().id)
    assert exc_info.value.kind is ErrorKind.ENTITY_NOT_FOUND
