"""Pipeline Domain Models - Type-Safe Stage Tracking for Task Loading.

A task load runs three stages (fetch, validate, map). Each stage ends in
exactly one outcome, recorded as a member of the Stage discriminated union.
The accumulated Pipeline tells the caller what happened without re-raising
anything, and exports flat attributes for log records.

Key Concepts:
    - Discriminated unions for type-safe stage outcomes (Success/Failed/Skipped)
    - Immutable transformations with explicit state progression
    - Semantic types via RootModel wrappers (StageName, ErrorMessage)

Example Usage:
    >>> pipeline = Pipeline()
    >>> pipeline = pipeline.append(
    ...     SuccessStage(
    ...         status=StageStatus.SUCCESS,
    ...         category=StageCategory.INGESTION,
    ...         name=StageName("fetch"),
    ...         data=RawPayload([]),
    ...         start_time=start,
    ...         end_time=end,
    ...     )
    ... )
    >>> pipeline.succeeded
    True
"""

from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, RootModel, computed_field

from .domain_type import ErrorCategory, SkipReason, StageCategory, StageStatus


class StageName(RootModel[str]):
    """Stage identifier with validation.

    Validation Rules:
        - Non-empty, max 100 characters
        - Alphanumeric, hyphens, underscores only (safe for log attributes)

    Example:
        >>> StageName("fetch").root
        'fetch'
        >>> StageName("bad name!")  # Raises ValidationError
    """

    root: str = Field(min_length=1, max_length=100, pattern=r"^[a-zA-Z0-9_-]+$")
    model_config = ConfigDict(frozen=True)


class ErrorMessage(RootModel[str]):
    """Diagnostic message from a failed stage.

    Every failure must explain itself, so empty messages are rejected.
    This is the internal cause; the user-facing text is decided by category.
    """

    root: str = Field(min_length=1, max_length=1000)
    model_config = ConfigDict(frozen=True)


class ErrorSummary(RootModel[dict[ErrorCategory, int]]):
    """Error count distribution by category.

    Computed Properties:
        total_errors: Sum of all error counts across categories
    """

    root: dict[ErrorCategory, int] = Field(default_factory=dict)
    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def total_errors(self) -> int:
        return sum(self.root.values())


class LogAttributes(RootModel[dict[str, Any]]):
    """Pipeline state flattened for structured log records.

    Keys always present:
        - pipeline.total_stages, pipeline.succeeded, pipeline.failed
        - pipeline.total_duration_ms
        - pipeline.stage_flow (category values in order)
        - pipeline.error_summary (category -> count)

    Example:
        >>> logger.debug("task load finished", extra=attrs.root)
    """

    root: dict[str, Any]
    model_config = ConfigDict(frozen=True)


class SuccessStage(BaseModel):
    """Successful stage with validated output data.

    Part of Stage discriminated union (Success | Failed | Skipped).
    Pydantic dispatches on 'status' field to determine concrete type.

    Attributes:
        status: Always SUCCESS (discriminator field)
        category: What kind of stage ran
        name: Stage identifier
        data: Output model handed to the next stage
        start_time: When the stage began
        end_time: When the stage completed
    """

    status: Literal[StageStatus.SUCCESS]  # Discriminator for union type
    category: StageCategory
    name: StageName
    data: BaseModel  # Output data (must be Pydantic model)
    start_time: datetime
    end_time: datetime

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def duration_ms(self) -> float:
        delta = self.end_time - self.start_time
        return delta.total_seconds() * 1000


class FailedStage(BaseModel):
    """Failed stage with categorized error.

    Two categories on purpose:
        category: What was being attempted (ingestion, validation, ...)
        error_category: Why it failed (external service, validation, ...)

    Example:
        >>> stage = FailedStage(
        ...     status=StageStatus.FAILED,
        ...     category=StageCategory.INGESTION,
        ...     error_category=ErrorCategory.EXTERNAL_SERVICE,
        ...     name=StageName("fetch"),
        ...     error=ErrorMessage("Failed to fetch tasks: HTTP 500: Internal Server Error"),
        ...     start_time=start,
        ...     end_time=end,
        ... )
    """

    status: Literal[StageStatus.FAILED]  # Discriminator for union type
    category: StageCategory
    error_category: ErrorCategory
    name: StageName
    error: ErrorMessage
    start_time: datetime
    end_time: datetime

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def duration_ms(self) -> float:
        delta = self.end_time - self.start_time
        return delta.total_seconds() * 1000


class SkippedStage(BaseModel):
    """Stage intentionally not run (e.g. mapping after a failed validation)."""

    status: Literal[StageStatus.SKIPPED]  # Discriminator for union type
    category: StageCategory
    name: StageName
    skip_reason: SkipReason
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(frozen=True)


# Discriminated Union: Type-Safe Stage Dispatch
# -----------------------------------------------
# Pydantic dispatches on the 'status' field. isinstance(stage, FailedStage)
# narrows to a stage that has .error and .error_category; only SuccessStage
# has .data.
Stage = SuccessStage | FailedStage | SkippedStage


class Pipeline(BaseModel):
    """Immutable record of the stages a task load went through.

    Attributes:
        stages: Tuple of Stage outcomes in execution order

    Computed Properties:
        succeeded: At least one stage, and every stage succeeded
        failed: Any stage failed
        error_summary: ErrorCategory distribution
        stage_categories: Execution flow
        total_duration_ms: Time spent in executed stages

    Regular Properties:
        latest_success, latest_data, first_failure
    """

    stages: tuple[Stage, ...] = ()

    model_config = ConfigDict(frozen=True)

    def append(self, stage: Stage) -> Pipeline:
        """Append stage immutably, returning a new Pipeline instance."""
        return self.model_copy(update={"stages": (*self.stages, stage)})

    @computed_field
    @property
    def succeeded(self) -> bool:
        if not self.stages:
            return False
        return all(isinstance(stage, SuccessStage) for stage in self.stages)

    @computed_field
    @property
    def failed(self) -> bool:
        return any(isinstance(stage, FailedStage) for stage in self.stages)

    @computed_field
    @property
    def error_summary(self) -> ErrorSummary:
        errors = [stage.error_category for stage in self.stages if isinstance(stage, FailedStage)]
        return ErrorSummary(dict(Counter(errors)))

    @computed_field
    @property
    def stage_categories(self) -> tuple[StageCategory, ...]:
        return tuple(stage.category for stage in self.stages)

    @computed_field
    @property
    def total_duration_ms(self) -> float:
        """Sum of executed stage durations; skipped stages count as zero."""
        total = 0.0
        for stage in self.stages:
            if isinstance(stage, (SuccessStage, FailedStage)):
                total += stage.duration_ms
        return total

    @property
    def latest_success(self) -> SuccessStage | None:
        for stage in reversed(self.stages):
            if isinstance(stage, SuccessStage):
                return stage
        return None

    @property
    def first_failure(self) -> FailedStage | None:
        for stage in self.stages:
            if isinstance(stage, FailedStage):
                return stage
        return None

    @property
    def latest_data(self) -> BaseModel:
        """Data from the most recent successful stage.

        Raises:
            ValueError: If no successful stages exist in pipeline.
        """
        success = self.latest_success
        if success is None:
            raise ValueError("No successful stages in pipeline")
        return success.data

    def to_log_attributes(self) -> LogAttributes:
        """Export pipeline state as JSON-friendly attributes for log records."""
        return LogAttributes(
            {
                "pipeline.total_stages": len(self.stages),
                "pipeline.succeeded": self.succeeded,
                "pipeline.failed": self.failed,
                "pipeline.total_duration_ms": self.total_duration_ms,
                "pipeline.stage_flow": [cat.value for cat in self.stage_categories],
                "pipeline.error_summary": {k.value: v for k, v in self.error_summary.root.items()},
            }
        )


__all__ = [
    "ErrorMessage",
    "ErrorSummary",
    "FailedStage",
    "LogAttributes",
    "Pipeline",
    "SkippedStage",
    "Stage",
    "StageName",
    "SuccessStage",
]
