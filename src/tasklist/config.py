"""Application Configuration

Type-safe configuration using Pydantic Settings for environment variable handling.
Every value has a development default, so the package imports cleanly without
an .env file; tests load .env.test before importing (see tests/conftest.py).

Patterns Demonstrated:
- Type-safe environment variable parsing with validation
- Sensible defaults for development
- Endpoint path templates kept next to the base URL they extend
- No magic strings in the codebase
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class Endpoints(BaseModel):
    """Per-resource path templates relative to the API base URL.

    Item templates use "{id}" placeholders and are formatted through the
    helper methods rather than by callers.

    Usage:
        >>> Endpoints().task_by_id(42)
        '/tasks/42'
    """

    tasks: str = "/tasks"
    create_task: str = "/tasks"
    task_by_id_template: str = "/tasks/{id}"
    update_task_template: str = "/tasks/{id}"
    delete_task_template: str = "/tasks/{id}"

    model_config = ConfigDict(frozen=True)

    def task_by_id(self, task_id: object) -> str:
        return self.task_by_id_template.format(id=task_id)

    def update_task(self, task_id: object) -> str:
        return self.update_task_template.format(id=task_id)

    def delete_task(self, task_id: object) -> str:
        return self.delete_task_template.format(id=task_id)


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # =============================================================================
    # APPLICATION
    # =============================================================================

    app_name: str = Field(default="tasklist", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    app_description: str = Field(
        default="Task loading, presentation and storage with a testing-first layout",
        alias="APP_DESCRIPTION",
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # =============================================================================
    # REMOTE TASK API
    # =============================================================================

    api_base_url: str = Field(default="http://api.myapp.com/tasks", alias="API_BASE_URL")
    # Milliseconds, matching the other timing fields
    api_timeout: int = Field(default=5000, gt=0, alias="API_TIMEOUT")
    # Consumed as httpx connect retries; not a general retry policy
    api_retry_attempts: int = Field(default=3, ge=0, alias="API_RETRY_ATTEMPTS")
    # Declared for parity with the endpoint contract, not consumed (httpx has no delay knob)
    api_retry_delay: int = Field(default=1000, ge=0, alias="API_RETRY_DELAY")
    endpoints: Endpoints = Field(default_factory=Endpoints)

    # =============================================================================
    # RECORD STORE
    # =============================================================================

    # Redis - Task documents
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    task_key_prefix: str = Field(default="task", alias="TASK_KEY_PREFIX")

    model_config = {"env_file": ".env", "case_sensitive": False, "extra": "ignore"}

    @property
    def api_timeout_seconds(self) -> float:
        return self.api_timeout / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.model_validate({})


settings = get_settings()
