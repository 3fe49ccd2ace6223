"""Domain Layer - Task Shapes and the Presentation Pipeline.

Key Components:
    - RawRecord: Wire shape as received from the remote API
    - PresentationTask / TaskListResult: What the UI renders
    - StoredTask / TaskId: Persisted document and its identity
    - Pipeline: Stage-by-stage record of one task load
    - load_tasks / filter_tasks_by_status: The fetch-validate-map-filter flow

Design Principles:
    - Immutable by Default: wire and presentation values use frozen=True
    - Explicit Dependencies: the task source is passed in, never imported
    - Type-Safe Throughout: Pydantic validation at every boundary
"""

from .domain_type import ErrorCategory, SkipReason, StageCategory, StageStatus, TaskStatus
from .domain_value import (
    PresentationBatch,
    PresentationTask,
    RawPayload,
    RawRecord,
    RawRecordBatch,
    StoredTask,
    TaskId,
    TaskListResult,
)
from .pipeline import FailedStage, Pipeline, SkippedStage, Stage, StageName, SuccessStage
from .task_list import (
    INVALID_FORMAT_MESSAGE,
    LOAD_FAILED_MESSAGE,
    TaskSource,
    filter_tasks_by_status,
    load_tasks,
)

__all__ = [
    "INVALID_FORMAT_MESSAGE",
    "LOAD_FAILED_MESSAGE",
    "ErrorCategory",
    "FailedStage",
    "Pipeline",
    "PresentationBatch",
    "PresentationTask",
    "RawPayload",
    "RawRecord",
    "RawRecordBatch",
    "SkipReason",
    "SkippedStage",
    "Stage",
    "StageCategory",
    "StageName",
    "StageStatus",
    "StoredTask",
    "SuccessStage",
    "TaskId",
    "TaskListResult",
    "TaskSource",
    "TaskStatus",
    "filter_tasks_by_status",
    "load_tasks",
]
