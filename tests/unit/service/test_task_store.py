"""
Tests for the Redis-backed Record Store.

These tests demonstrate:
- Isolating persistence with an in-memory Redis double (tests/fakes.py)
- Testing store rules: validation messages, trimming, identity errors
- Testing that a rejected write leaves storage untouched
- Round-trip behaviour of toggle_completion
"""

import pytest

from tasklist.domain.domain_value import StoredTask, TaskId
from tasklist.errors import CastError, TaskNotFoundError, TaskValidationError
from tasklist.service.task_store import TaskStore, matches

from tests.fakes import FakeRedis

# =============================================================================
# create
# =============================================================================


@pytest.mark.asyncio
async def test_create_assigns_identity_and_timestamps(task_store: TaskStore):
    task = await task_store.create({"name": "Write tests"})

    assert isinstance(task.id, TaskId)
    assert task.completed is False
    assert task.created_at == task.updated_at
    assert await task_store.find_by_id(task.id) == task


@pytest.mark.asyncio
async def test_create_persists_trimmed_name(task_store: TaskStore):
    task = await task_store.create({"name": "  Trim me  "})

    stored = await task_store.find_by_id(str(task.id))
    assert stored.name == "Trim me"


@pytest.mark.asyncio
@pytest.mark.parametrize("fields", [{}, {"name": ""}, {"name": "   "}, {"name": None, "completed": True}])
async def test_create_requires_name(task_store: TaskStore, fake_redis: FakeRedis, fields):
    with pytest.raises(TaskValidationError, match="Task name is required."):
        await task_store.create(fields)

    assert fake_redis.strings == {}


@pytest.mark.asyncio
async def test_create_rejects_201_character_name(task_store: TaskStore, fake_redis: FakeRedis):
    with pytest.raises(TaskValidationError, match="cannot exceed 200 characters.") as exc_info:
        await task_store.create({"name": "a" * 201})

    assert exc_info.value.messages == ("Task name cannot exceed 200 characters.",)
    assert fake_redis.strings == {}


@pytest.mark.asyncio
async def test_create_ignores_caller_supplied_identity(task_store: TaskStore):
    forced = TaskId()

    task = await task_store.create({"id": str(forced.root), "name": "Mine"})

    assert task.id != forced


# =============================================================================
# find_by_id / find / find_one
# =============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["invalid-id", "123", ""])
async def test_find_by_id_with_malformed_token_raises_cast_error(task_store: TaskStore, token):
    with pytest.raises(CastError):
        await task_store.find_by_id(token)


@pytest.mark.asyncio
async def test_find_by_id_with_unknown_token_returns_none(task_store: TaskStore):
    assert await task_store.find_by_id(TaskId()) is None


@pytest.mark.asyncio
async def test_find_returns_matches_oldest_first(task_store: TaskStore):
    first = await task_store.create({"name": "First"})
    await task_store.create({"name": "Second", "completed": True})
    third = await task_store.create({"name": "Third"})

    pending = await task_store.find({"completed": False})

    assert [t.id for t in pending] == [first.id, third.id]


@pytest.mark.asyncio
async def test_find_without_predicate_returns_everything(task_store: TaskStore):
    for name in ("A", "B", "C"):
        await task_store.create({"name": name})

    assert [t.name for t in await task_store.find()] == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_find_one_returns_none_when_nothing_matches(task_store: TaskStore):
    await task_store.create({"name": "Only"})

    assert await task_store.find_one({"name": "Missing"}) is None
    assert (await task_store.find_one({"name": "Only"})).name == "Only"


@pytest.mark.asyncio
async def test_find_completed_and_pending(task_store: TaskStore):
    await task_store.create({"name": "Done", "completed": True})
    await task_store.create({"name": "Todo"})

    assert [t.name for t in await task_store.find_completed()] == ["Done"]
    assert [t.name for t in await task_store.find_pending()] == ["Todo"]


@pytest.mark.asyncio
async def test_unknown_predicate_field_is_rejected(task_store: TaskStore):
    await task_store.create({"name": "Any"})

    with pytest.raises(ValueError, match="Unknown task field: title"):
        await task_store.find({"title": "Any"})


def test_matches_by_id_accepts_string_tokens():
    task = StoredTask(name="By id")

    assert matches(task, {"id": str(task.id)}) is True
    assert matches(task, {"id": str(TaskId())}) is False


# =============================================================================
# save / toggle_completion
# =============================================================================


@pytest.mark.asyncio
async def test_save_revalidates_and_refreshes_document(task_store: TaskStore):
    task = await task_store.create({"name": "Original"})
    task.name = "  Renamed  "

    saved = await task_store.save(task)

    assert saved is task
    assert task.name == "Renamed"
    assert (await task_store.find_by_id(task.id)).name == "Renamed"


@pytest.mark.asyncio
async def test_save_with_invalid_name_writes_nothing(task_store: TaskStore):
    task = await task_store.create({"name": "Keep me"})
    task.name = ""

    with pytest.raises(TaskValidationError, match="Task name is required."):
        await task_store.save(task)

    assert (await task_store.find_by_id(task.id)).name == "Keep me"


@pytest.mark.asyncio
async def test_toggle_twice_restores_state_and_advances_updated_at(task_store: TaskStore):
    """
    Demonstrates: Round-trip property of an instance operation.

    Two toggles return to the original flag; every toggle moves updated_at
    strictly forward, even within the same clock tick.
    """
    task = await task_store.create({"name": "Toggle me"})
    original = task.completed
    stamps = [task.updated_at]

    await task_store.toggle_completion(task)
    assert task.completed is (not original)
    stamps.append(task.updated_at)

    await task_store.toggle_completion(task)
    assert task.completed is original
    stamps.append(task.updated_at)

    assert stamps[0] < stamps[1] < stamps[2]
    assert (await task_store.find_by_id(task.id)).completed is original


@pytest.mark.asyncio
async def test_created_at_never_changes_on_save(task_store: TaskStore):
    task = await task_store.create({"name": "Stable"})
    created = task.created_at

    await task_store.toggle_completion(task)

    assert task.created_at == created


# =============================================================================
# delete
# =============================================================================


@pytest.mark.asyncio
async def test_delete_by_id_then_lookup_returns_none(task_store: TaskStore):
    task = await task_store.create({"name": "Short lived"})

    assert await task_store.delete_by_id(task.id) is True
    assert await task_store.find_by_id(task.id) is None
    assert await task_store.delete_by_id(task.id) is False


@pytest.mark.asyncio
async def test_delete_by_id_with_malformed_token_raises_cast_error(task_store: TaskStore):
    with pytest.raises(CastError):
        await task_store.delete_by_id("nope")


@pytest.mark.asyncio
async def test_delete_one_removes_only_first_match(task_store: TaskStore):
    await task_store.create({"name": "Dup"})
    await task_store.create({"name": "Dup"})

    assert await task_store.delete_one({"name": "Dup"}) == 1
    assert len(await task_store.find({"name": "Dup"})) == 1
    assert await task_store.delete_one({"name": "Absent"}) == 0


@pytest.mark.asyncio
async def test_delete_many_removes_every_match(task_store: TaskStore, fake_redis: FakeRedis):
    await task_store.create({"name": "Done 1", "completed": True})
    await task_store.create({"name": "Done 2", "completed": True})
    keep = await task_store.create({"name": "Todo"})

    assert await task_store.delete_many({"completed": True}) == 2
    assert [t.id for t in await task_store.find()] == [keep.id]
    assert list(fake_redis.zsets["test-task:index"]) == [str(keep.id).encode()]


@pytest.mark.asyncio
async def test_empty_predicate_delete_many_clears_store(task_store: TaskStore):
    await task_store.create({"name": "A"})
    await task_store.create({"name": "B"})

    assert await task_store.delete_many({}) == 2
    assert await task_store.find() == []


@pytest.mark.asyncio
async def test_save_after_delete_does_not_resurrect_task(task_store: TaskStore, fake_redis: FakeRedis):
    """
    Demonstrates: A stale in-memory document cannot undo a delete.

    Saving or toggling a deleted task fails and writes nothing.
    """
    task = await task_store.create({"name": "Gone"})
    await task_store.delete_by_id(task.id)

    with pytest.raises(TaskNotFoundError):
        await task_store.save(task)
    with pytest.raises(TaskNotFoundError):
        await task_store.toggle_completion(task)

    assert await task_store.find_by_id(task.id) is None
    assert await task_store.find() == []
    assert f"test-task:{task.id}" not in fake_redis.strings
    assert fake_redis.zsets["test-task:index"] == {}


@pytest.mark.asyncio
async def test_save_after_delete_many_raises_not_found(task_store: TaskStore):
    task = await task_store.create({"name": "Swept", "completed": True})
    await task_store.delete_many({"completed": True})
    task.name = "Back again"

    with pytest.raises(TaskNotFoundError):
        await task_store.save(task)

    assert await task_store.find_one({"name": "Back again"}) is None
