"""Error Taxonomy - Typed Failures Raised Across Layers.

Every failure the project raises derives from TaskListError so callers can
catch the whole family at once, while each layer keeps its own type:

    - TransportError: remote endpoint unreachable or unintelligible
    - TaskValidationError: Record Store rejected a write
    - CastError: Record Store rejected a malformed identity token
    - TaskNotFoundError: Record Store asked to save a deleted task
    - FormatError: successful fetch, but payload shape is wrong

Named TaskValidationError (not ValidationError) so it never shadows
pydantic.ValidationError in modules that use both.
"""

from __future__ import annotations


class TaskListError(Exception):
    """Base class for all tasklist errors."""


class TransportError(TaskListError):
    """Raised when a call to the task endpoint fails for any reason.

    The message always reads "Failed to <action>: <cause>", whatever the
    cause was (network, HTTP status, body parsing).
    """

    def __init__(self, action: str, cause: str) -> None:
        super().__init__(f"Failed to {action}: {cause}")
        self.action = action
        self.cause = cause


class TaskValidationError(TaskListError):
    """Raised when a stored task violates its field constraints."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__(" ".join(messages))
        self.messages = tuple(messages)


class CastError(TaskListError):
    """Raised when an identity token is not a well-formed task id."""

    def __init__(self, value: object) -> None:
        super().__init__(f'Cast to TaskId failed for value "{value}"')
        self.value = value


class TaskNotFoundError(TaskListError):
    """Raised when saving a task that is no longer in the Record Store."""

    def __init__(self, task_id: object) -> None:
        super().__init__(f"Task {task_id} does not exist")
        self.task_id = task_id


class FormatError(TaskListError):
    """Raised when a fetched payload is not a sequence of task records."""


__all__ = [
    "CastError",
    "FormatError",
    "TaskListError",
    "TaskNotFoundError",
    "TaskValidationError",
    "TransportError",
]
