"""Service layer - transport client and storage orchestration."""

from .storage import MemoryStoreConfig, StorageService, create_storage_service
from .task_store import TaskPredicate, TaskStore
from .transport import TaskApiClient

__all__ = [
    "MemoryStoreConfig",
    "StorageService",
    "TaskApiClient",
    "TaskPredicate",
    "TaskStore",
    "create_storage_service",
]
