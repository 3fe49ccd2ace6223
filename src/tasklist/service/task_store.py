"""Record Store - Persisted Tasks in Redis.

Layout (prefix defaults to "task"):
    task:<uuid>   -> StoredTask JSON document
    task:index    -> sorted set of task ids, scored by insertion order
    task:seq      -> insertion counter feeding the index scores

The domain model owns serialization (model_dump_json / model_validate_json);
this service owns keys and the client. Every write revalidates the whole
document first, so an invalid name never reaches Redis.

Predicates are plain mappings of field name to required value:

    >>> await store.find({"completed": True})
    >>> await store.delete_many({})  # empty predicate matches everything

There is no locking; concurrent writers to the same task race and the last
write wins.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any
from uuid import UUID

from pydantic import ValidationError

from ..domain.domain_value import StoredTask, TaskId, utc_now
from ..errors import TaskNotFoundError, TaskValidationError

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

TaskPredicate = Mapping[str, Any]


def _decode(value: bytes | str) -> str:
    return value.decode() if isinstance(value, bytes) else value


def _next_timestamp(previous: datetime | None) -> datetime:
    """Current time, nudged forward so updated_at strictly increases."""
    now = utc_now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def validate_task(data: Mapping[str, Any]) -> StoredTask:
    """Build a StoredTask, translating pydantic errors into TaskValidationError."""
    try:
        return StoredTask.model_validate(dict(data))
    except ValidationError as exc:
        raise TaskValidationError([err["msg"] for err in exc.errors()]) from exc


def matches(task: StoredTask, predicate: TaskPredicate) -> bool:
    """True when every predicate field equals the task's value.

    Raises:
        ValueError: For field names StoredTask does not have.
        CastError: For an "id" value that is not a well-formed token.
    """
    for field, expected in predicate.items():
        if field not in StoredTask.model_fields:
            raise ValueError(f"Unknown task field: {field}")
        if field == "id":
            expected = TaskId.parse(expected)
        if getattr(task, field) != expected:
            return False
    return True


class TaskStore:
    """
    Redis-backed store of StoredTask documents.

    Thread-safety:
    - none; one event loop, last writer wins
    """

    def __init__(self, redis: Redis, *, prefix: str = "task") -> None:
        self._redis = redis
        self._prefix = prefix

    # ---- keys ----

    def _key(self, task_id: TaskId) -> str:
        return f"{self._prefix}:{task_id.root}"

    @property
    def _index_key(self) -> str:
        return f"{self._prefix}:index"

    @property
    def _seq_key(self) -> str:
        return f"{self._prefix}:seq"

    # ---- low-level helpers ----

    async def _insert(self, task: StoredTask) -> None:
        seq = await self._redis.incr(self._seq_key)
        await self._redis.set(self._key(task.id), task.model_dump_json())
        await self._redis.zadd(self._index_key, {str(task.id.root): seq})

    async def _exists(self, task_id: TaskId) -> bool:
        return await self._redis.zscore(self._index_key, str(task_id.root)) is not None

    async def _remove(self, task: StoredTask) -> None:
        await self._redis.delete(self._key(task.id))
        await self._redis.zrem(self._index_key, str(task.id.root))

    async def _all(self) -> list[StoredTask]:
        members = await self._redis.zrange(self._index_key, 0, -1)
        if not members:
            return []
        keys = [self._key(TaskId(UUID(_decode(m)))) for m in members]
        docs = await self._redis.mget(keys)
        return [StoredTask.model_validate_json(doc) for doc in docs if doc is not None]

    # ---- writes ----

    async def create(self, fields: Mapping[str, Any]) -> StoredTask:
        """
        Validate and persist a new task.

        Identity and both timestamps are assigned here; an "id" in fields is
        ignored.

        Raises:
            TaskValidationError: "Task name is required." or
                "Task name cannot exceed 200 characters."
        """
        now = utc_now()
        data = {k: v for k, v in fields.items() if k not in ("id", "created_at", "updated_at")}
        task = validate_task({**data, "id": TaskId(), "created_at": now, "updated_at": now})
        await self._insert(task)
        logger.debug("Task created id=%s completed=%s", task.id, task.completed)
        return task

    async def save(self, task: StoredTask) -> StoredTask:
        """
        Revalidate a (possibly modified) task and persist it.

        On success the passed document is refreshed in place (trimmed name,
        new updated_at) and returned. On failure nothing is written.

        Raises:
            TaskNotFoundError: If the task was deleted; it is not recreated.
            TaskValidationError: If the modified fields break a constraint.
        """
        if not await self._exists(task.id):
            raise TaskNotFoundError(task.id)
        data = task.model_dump()
        data["updated_at"] = _next_timestamp(task.updated_at)
        saved = validate_task(data)
        await self._redis.set(self._key(saved.id), saved.model_dump_json())
        for field in StoredTask.model_fields:
            setattr(task, field, getattr(saved, field))
        return task

    async def toggle_completion(self, task: StoredTask) -> StoredTask:
        """Flip completed and persist."""
        task.completed = not task.completed
        return await self.save(task)

    # ---- reads ----

    async def find_by_id(self, task_id: TaskId | UUID | str) -> StoredTask | None:
        """
        Point lookup.

        Returns:
            The task, or None when the id is well-formed but unknown.

        Raises:
            CastError: If task_id is not a well-formed identity token.
        """
        parsed = TaskId.parse(task_id)
        doc = await self._redis.get(self._key(parsed))
        if doc is None:
            return None
        return StoredTask.model_validate_json(doc)

    async def find(self, predicate: TaskPredicate | None = None) -> list[StoredTask]:
        """All tasks matching predicate, in creation order."""
        predicate = predicate or {}
        return [task for task in await self._all() if matches(task, predicate)]

    async def find_one(self, predicate: TaskPredicate | None = None) -> StoredTask | None:
        found = await self.find(predicate)
        return found[0] if found else None

    async def find_completed(self) -> list[StoredTask]:
        return await self.find({"completed": True})

    async def find_pending(self) -> list[StoredTask]:
        return await self.find({"completed": False})

    # ---- deletes ----

    async def delete_by_id(self, task_id: TaskId | UUID | str) -> bool:
        """
        Delete one task by identity.

        Returns:
            True if a task was deleted.

        Raises:
            CastError: If task_id is not a well-formed identity token.
        """
        parsed = TaskId.parse(task_id)
        deleted = await self._redis.delete(self._key(parsed))
        await self._redis.zrem(self._index_key, str(parsed.root))
        return bool(deleted)

    async def delete_one(self, predicate: TaskPredicate) -> int:
        """Delete the first matching task. Returns the number deleted (0 or 1)."""
        task = await self.find_one(predicate)
        if task is None:
            return 0
        await self._remove(task)
        return 1

    async def delete_many(self, predicate: TaskPredicate) -> int:
        """Delete every matching task. Returns the number deleted."""
        tasks = await self.find(predicate)
        for task in tasks:
            await self._remove(task)
        if tasks:
            logger.debug("Deleted %d task(s) matching %s", len(tasks), dict(predicate))
        return len(tasks)


__all__ = ["TaskPredicate", "TaskStore", "matches", "validate_task"]
