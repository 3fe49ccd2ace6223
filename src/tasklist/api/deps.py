"""API dependency wiring - cached singletons built from settings."""

from functools import lru_cache

from ..config import settings
from ..service import TaskApiClient, TaskStore
from ..service.storage import MemoryStoreConfig, StorageService, create_storage_service


@lru_cache(maxsize=1)
def get_task_api_client() -> TaskApiClient:
    """Create the remote task API client from config (cached singleton)."""
    return TaskApiClient.from_settings(settings)


@lru_cache(maxsize=1)
def get_storage_service() -> StorageService:
    """Create storage service from config (cached singleton)."""
    return create_storage_service(
        memory_config=MemoryStoreConfig(
            url=settings.redis_url,
            key_prefix=settings.task_key_prefix,
        ),
    )


def get_task_store() -> TaskStore:
    """Record Store bound to the shared Redis client."""
    return get_storage_service().get_task_store()
