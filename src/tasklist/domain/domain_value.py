"""Value Layer - Wire Records, Presentation Tasks and Stored Tasks.

This module holds the three shapes a task takes on its way through the system:

Architecture:
    - RawRecord: what the remote API sends ({id, name, completed})
    - PresentationTask: what the UI renders ({id, display, status})
    - StoredTask: what the Record Store persists (identity + timestamps)

RawRecord and PresentationTask are frozen values built fresh on every load.
StoredTask is a mutable document: callers assign fields and hand it back to
the store, which revalidates before writing.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from ..errors import CastError
from .domain_type import TaskStatus

DONE_SUFFIX = " (DONE)"
MAX_NAME_LENGTH = 200


def utc_now() -> datetime:
    return datetime.now(UTC)


class TaskId(RootModel[UUID]):
    """Opaque Identity Token for Stored Tasks.

    Uses Pydantic's RootModel pattern to create a strongly-typed UUID wrapper,
    assigned by the Record Store at creation time.

    Usage:
        >>> task_id = TaskId()  # Auto-generates UUID
        >>> TaskId.parse(str(task_id))  # Round-trips through its string form
        >>> TaskId.parse("not-an-id")  # Raises CastError

    Note:
        Frozen for use as dictionary keys and in redis key construction
    """

    root: UUID = Field(default_factory=uuid4)
    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)

    @classmethod
    def parse(cls, value: TaskId | UUID | str) -> TaskId:
        """Coerce a raw token into a TaskId.

        Raises:
            CastError: If value is not a well-formed identity token. This is
                distinct from a valid token that matches nothing.
        """
        if isinstance(value, TaskId):
            return value
        if not isinstance(value, (UUID, str)):
            raise CastError(value)
        try:
            return cls.model_validate(value)
        except ValidationError as exc:
            raise CastError(value) from exc


class RawRecord(BaseModel):
    """Task Record as Received from the Remote API.

    Strict mode: "1" is not an id and "yes" is not a boolean. Anything that
    does not validate here makes the whole payload an invalid format.
    Unknown keys are ignored.
    """

    id: int
    name: str
    completed: bool

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")


class RawRecordBatch(RootModel[tuple[RawRecord, ...]]):
    """Validated payload of a fetch: an ordered tuple of RawRecord."""

    model_config = ConfigDict(frozen=True)


class RawPayload(RootModel[Any]):
    """Decoded JSON body exactly as the transport returned it (unvalidated)."""

    model_config = ConfigDict(frozen=True)


class PresentationTask(BaseModel):
    """Presentation-Ready Task.

    Invariants:
        - status is SUCCESS iff the source record was completed
        - display is the name with " (DONE)" appended when completed
        - id is copied verbatim from the source record

    Example:
        >>> raw = RawRecord(id=1, name="Finish mocking guide", completed=True)
        >>> PresentationTask.from_raw(raw).display
        'Finish mocking guide (DONE)'
    """

    id: int
    display: str
    status: TaskStatus

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_raw(cls, record: RawRecord) -> PresentationTask:
        return cls(
            id=record.id,
            display=record.name + (DONE_SUFFIX if record.completed else ""),
            status=TaskStatus.from_completed(record.completed),
        )

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.SUCCESS


class PresentationBatch(RootModel[tuple[PresentationTask, ...]]):
    """Ordered output of the mapping stage."""

    model_config = ConfigDict(frozen=True)


class TaskListResult(BaseModel):
    """Outcome of one load: either tasks and no error, or no tasks and an error.

    Attributes:
        tasks: Presentation tasks in source order (empty on failure)
        error: User-facing message, None on success
    """

    tasks: tuple[PresentationTask, ...] = ()
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str) -> TaskListResult:
        return cls(tasks=(), error=message)


class StoredTask(BaseModel):
    """Persisted Task Document.

    Attributes:
        id: Identity assigned at creation
        name: Trimmed, 1..200 characters
        completed: Completion flag (default False)
        created_at: Set once at creation
        updated_at: Set at creation and on every save

    Design Notes:
        - Not frozen: callers assign fields, then TaskStore.save() revalidates
          the whole document before anything is written
        - Assignment is not validated, so an invalid name only fails at save
    """

    id: TaskId = Field(default_factory=TaskId)
    name: str = Field(default="", validate_default=True)
    completed: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", mode="before")
    @classmethod
    def trim_and_check_name(cls, value: Any) -> str:
        """Trim the name, then check presence and length independently."""
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise PydanticCustomError("task_name_type", "Task name must be a string.")
        value = value.strip()
        if not value:
            raise PydanticCustomError("task_name_required", "Task name is required.")
        if len(value) > MAX_NAME_LENGTH:
            raise PydanticCustomError(
                "task_name_too_long",
                "Task name cannot exceed {max_length} characters.",
                {"max_length": MAX_NAME_LENGTH},
            )
        return value

    def is_overdue(self, due_date: datetime, now: datetime | None = None) -> bool:
        """True when the task is incomplete and its due date is already past.

        A completed task is never overdue. Naive datetimes are read as UTC.

        Args:
            due_date: When the task was due
            now: Reference instant (defaults to the current time)
        """
        if self.completed:
            return False
        if due_date.tzinfo is None:
            due_date = due_date.replace(tzinfo=UTC)
        return (now or utc_now()) > due_date


__all__ = [
    "DONE_SUFFIX",
    "MAX_NAME_LENGTH",
    "PresentationBatch",
    "PresentationTask",
    "RawPayload",
    "RawRecord",
    "RawRecordBatch",
    "StoredTask",
    "TaskId",
    "TaskListResult",
    "utc_now",
]
