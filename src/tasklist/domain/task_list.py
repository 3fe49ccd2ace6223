"""Task Presentation Pipeline - Fetch, Validate, Map, Filter.

load_tasks() is the boundary between the transport layer and the UI. It runs
three stages and records each outcome on a Pipeline:

    fetch (INGESTION)  ->  validate (VALIDATION)  ->  map (TRANSFORMATION)

Whatever goes wrong, the caller gets a TaskListResult, never an exception.
Every transport failure collapses to one generic message; the cause is logged
instead of surfaced. A payload that arrives fine but has the wrong shape gets
its own message.

filter_tasks_by_status() is a pure helper over the presentation form.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any, Protocol

from pydantic import ValidationError

from ..errors import FormatError, TransportError
from .domain_type import ErrorCategory, SkipReason, StageCategory, StageStatus, TaskStatus
from .domain_value import (
    PresentationBatch,
    PresentationTask,
    RawPayload,
    RawRecordBatch,
    TaskListResult,
    utc_now,
)
from .pipeline import ErrorMessage, FailedStage, Pipeline, SkippedStage, StageName, SuccessStage

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load tasks from server."
INVALID_FORMAT_MESSAGE = "Invalid response format: expected array of tasks."

FETCH = StageName("fetch")
VALIDATE = StageName("validate")
MAP = StageName("map")


class TaskSource(Protocol):
    """Anything that can fetch the raw task payload (TaskApiClient in production)."""

    async def fetch_all(self) -> Any: ...


def parse_payload(payload: Any) -> RawRecordBatch:
    """Check the decoded body is a sequence of {id, name, completed} records.

    Raises:
        FormatError: For non-sequences (None, dict, number, string) and for
            sequences whose elements are not task records.
    """
    if not isinstance(payload, (list, tuple)):
        raise FormatError(f"expected array of tasks, got {type(payload).__name__}")
    try:
        return RawRecordBatch.model_validate(payload)
    except ValidationError as exc:
        raise FormatError(f"malformed task record: {exc.error_count()} validation error(s)") from exc


def present(batch: RawRecordBatch) -> PresentationBatch:
    """Map raw records to presentation tasks, preserving order and ids."""
    return PresentationBatch(tuple(PresentationTask.from_raw(record) for record in batch.root))


async def _fetch(source: TaskSource) -> SuccessStage | FailedStage:
    start = utc_now()
    try:
        payload = await source.fetch_all()
    except TransportError as exc:
        return _failed(FETCH, StageCategory.INGESTION, ErrorCategory.EXTERNAL_SERVICE, str(exc), start)
    except Exception as exc:
        logger.exception("Task source raised an unexpected error")
        return _failed(FETCH, StageCategory.INGESTION, ErrorCategory.UNKNOWN, repr(exc), start)
    return SuccessStage(
        status=StageStatus.SUCCESS,
        category=StageCategory.INGESTION,
        name=FETCH,
        data=RawPayload(payload),
        start_time=start,
        end_time=utc_now(),
    )


def _validate(payload: RawPayload) -> SuccessStage | FailedStage:
    start = utc_now()
    try:
        batch = parse_payload(payload.root)
    except FormatError as exc:
        return _failed(VALIDATE, StageCategory.VALIDATION, ErrorCategory.VALIDATION, str(exc), start)
    return SuccessStage(
        status=StageStatus.SUCCESS,
        category=StageCategory.VALIDATION,
        name=VALIDATE,
        data=batch,
        start_time=start,
        end_time=utc_now(),
    )


def _map(batch: RawRecordBatch) -> SuccessStage:
    start = utc_now()
    return SuccessStage(
        status=StageStatus.SUCCESS,
        category=StageCategory.TRANSFORMATION,
        name=MAP,
        data=present(batch),
        start_time=start,
        end_time=utc_now(),
    )


def _failed(
    name: StageName,
    category: StageCategory,
    error_category: ErrorCategory,
    message: str,
    start: datetime,
) -> FailedStage:
    return FailedStage(
        status=StageStatus.FAILED,
        category=category,
        error_category=error_category,
        name=name,
        error=ErrorMessage(message[:1000] or "unknown error"),
        start_time=start,
        end_time=utc_now(),
    )


def _skipped(name: StageName, category: StageCategory) -> SkippedStage:
    return SkippedStage(
        status=StageStatus.SKIPPED,
        category=category,
        name=name,
        skip_reason=SkipReason.DEPENDENCY_FAILED,
    )


async def run_pipeline(source: TaskSource) -> Pipeline:
    """Run fetch, validate and map, skipping whatever follows a failure."""
    pipeline = Pipeline()

    fetched = await _fetch(source)
    pipeline = pipeline.append(fetched)
    if isinstance(fetched, FailedStage):
        return pipeline.append(_skipped(VALIDATE, StageCategory.VALIDATION)).append(
            _skipped(MAP, StageCategory.TRANSFORMATION)
        )

    validated = _validate(fetched.data)
    pipeline = pipeline.append(validated)
    if isinstance(validated, FailedStage):
        return pipeline.append(_skipped(MAP, StageCategory.TRANSFORMATION))

    return pipeline.append(_map(validated.data))


def to_result(pipeline: Pipeline) -> TaskListResult:
    """Collapse a finished pipeline into what the UI sees."""
    failure = pipeline.first_failure
    if failure is None:
        batch = pipeline.latest_data
        if not isinstance(batch, PresentationBatch):
            raise TypeError(f"Pipeline finished without a presentation batch: {type(batch).__name__}")
        return TaskListResult(tasks=batch.root, error=None)
    if failure.error_category is ErrorCategory.VALIDATION:
        return TaskListResult.failure(INVALID_FORMAT_MESSAGE)
    return TaskListResult.failure(LOAD_FAILED_MESSAGE)


async def load_tasks(source: TaskSource) -> TaskListResult:
    """Fetch tasks and turn them into presentation form.

    Returns:
        TaskListResult with tasks and error=None on success; otherwise empty
        tasks and one of LOAD_FAILED_MESSAGE / INVALID_FORMAT_MESSAGE.

    Example:
        >>> result = await load_tasks(TaskApiClient.from_settings(settings))
        >>> if result.error:
        ...     show_banner(result.error)
    """
    pipeline = await run_pipeline(source)
    logger.debug("Task load finished", extra=pipeline.to_log_attributes().root)

    failure = pipeline.first_failure
    if failure is not None:
        logger.warning("Task load failed at %s: %s", failure.name.root, failure.error.root)
    return to_result(pipeline)


def filter_tasks_by_status(tasks: Iterable[PresentationTask], want_completed: bool) -> list[PresentationTask]:
    """Return a new list holding only tasks with the requested status.

    True selects "Success", False selects "Pending". The input is never
    modified.
    """
    wanted = TaskStatus.from_completed(want_completed)
    return [task for task in tasks if task.status == wanted]


__all__ = [
    "INVALID_FORMAT_MESSAGE",
    "LOAD_FAILED_MESSAGE",
    "TaskSource",
    "filter_tasks_by_status",
    "load_tasks",
    "parse_payload",
    "present",
    "run_pipeline",
    "to_result",
]
