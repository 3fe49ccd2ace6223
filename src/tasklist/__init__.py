"""tasklist package exports."""

from .config import Settings, settings
from .domain import PresentationTask, StoredTask, TaskListResult, filter_tasks_by_status, load_tasks
from .errors import CastError, FormatError, TaskListError, TaskNotFoundError, TaskValidationError, TransportError
from .service import TaskApiClient, TaskStore

__all__ = [
    "CastError",
    "FormatError",
    "PresentationTask",
    "Settings",
    "StoredTask",
    "TaskApiClient",
    "TaskListError",
    "TaskListResult",
    "TaskNotFoundError",
    "TaskStore",
    "TaskValidationError",
    "TransportError",
    "filter_tasks_by_status",
    "load_tasks",
    "settings",
]
