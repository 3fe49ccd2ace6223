"""Storage service - thin orchestrator for the Redis client behind the Record Store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from .task_store import TaskStore

if TYPE_CHECKING:
    from redis.asyncio import Redis


class MemoryStoreConfig(BaseModel):
    """Redis connection configuration."""

    url: str
    key_prefix: str = "task"

    model_config = ConfigDict(frozen=True)


class StorageService:
    """
    Thin orchestrator - lazy-loads the Redis client from config.

    Responsibilities:
    - Provide the Redis client for task documents
    - Hand out TaskStore instances bound to that client
    - Lazy initialization for faster startup
    """

    def __init__(self, memory_config: MemoryStoreConfig):
        self.memory_config = memory_config
        self._memory_client: Redis | None = None

    def get_memory_client(self) -> Redis:
        """Get or create Redis client (lazy)."""
        if self._memory_client is None:
            from redis.asyncio import Redis

            self._memory_client = Redis.from_url(self.memory_config.url)
        return self._memory_client

    def get_task_store(self) -> TaskStore:
        return TaskStore(self.get_memory_client(), prefix=self.memory_config.key_prefix)

    async def aclose(self) -> None:
        if self._memory_client is not None:
            await self._memory_client.aclose()
            self._memory_client = None


def create_storage_service(memory_config: MemoryStoreConfig) -> StorageService:
    """Factory from infrastructure configs."""
    return StorageService(memory_config)


__all__ = ["MemoryStoreConfig", "StorageService", "create_storage_service"]
