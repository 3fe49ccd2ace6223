"""Domain Type System - Core Enumerations.

Defines type-safe constants using Python's StrEnum for domain concepts.
Using StrEnum instead of plain Enum provides automatic string coercion
and better JSON serialization without custom encoders.
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Presentation Status of a Task.

    The wire record carries a boolean; the presentation layer shows one of
    these labels instead.

    States:
        SUCCESS: Source record was completed
        PENDING: Source record was not completed
    """

    SUCCESS = "Success"
    PENDING = "Pending"

    @classmethod
    def from_completed(cls, completed: bool) -> "TaskStatus":
        return cls.SUCCESS if completed else cls.PENDING


class StageStatus(StrEnum):
    """Outcome of any loading stage."""

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


class ErrorCategory(StrEnum):
    """Classification of loading errors.

    Decides which user-facing message a failed load collapses to.
    """

    VALIDATION = "validation"
    EXTERNAL_SERVICE = "external"
    UNKNOWN = "unknown"


class SkipReason(StrEnum):
    """Standard reasons for skipping a loading stage."""

    DEPENDENCY_FAILED = "dependency_failed"


class StageCategory(StrEnum):
    """Functional classification of loading stages, in execution order."""

    INGESTION = "ingestion"
    VALIDATION = "validation"
    TRANSFORMATION = "transformation"


__all__ = [
    "ErrorCategory",
    "SkipReason",
    "StageCategory",
    "StageStatus",
    "TaskStatus",
]
