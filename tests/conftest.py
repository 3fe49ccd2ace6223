"""
Shared test fixtures and configuration.

Environment strategy:
- Unit tests: Use .env.test (isolated, no real infra needed)
- Integration tests: Use .env when present (real stack), else .env.test
"""

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.testclient import TestClient

ROOT = Path(__file__).parent.parent

# Environment must be loaded before tasklist.config builds its settings
if "integration" in " ".join(sys.argv) and (ROOT / ".env").exists():
    ENV_FILE = ROOT / ".env"
else:
    ENV_FILE = ROOT / ".env.test"

load_dotenv(ENV_FILE, override=True)

from tasklist.api.deps import get_task_api_client, get_task_store
from tasklist.domain.domain_value import PresentationTask, RawRecord
from tasklist.logging_setup import suppress_unmocked_call_notice
from tasklist.service.task_store import TaskStore
from tasklist.service.transport import TaskApiClient

from .fakes import BASE_URL, MOCK_TASKS, FakeRedis, Handler


@pytest.fixture
def quiet_logger() -> Iterator[logging.Logger]:
    """Transport logger with the unmocked-call notice filtered out."""
    logger = logging.getLogger("tests.transport.quiet")
    notice_filter = suppress_unmocked_call_notice(logger)
    yield logger
    logger.removeFilter(notice_filter)


@pytest.fixture
def make_api_client(quiet_logger: logging.Logger):
    """Factory: TaskApiClient whose HTTP layer is an httpx.MockTransport."""

    def factory(handler: Handler, logger: logging.Logger | None = None) -> TaskApiClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return TaskApiClient(BASE_URL, client=http, logger=logger or quiet_logger)

    return factory


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def task_store(fake_redis: FakeRedis) -> TaskStore:
    """Record Store over an in-memory Redis double."""
    return TaskStore(fake_redis, prefix="test-task")


@pytest.fixture
def standard_records() -> list[RawRecord]:
    return [RawRecord.model_validate(t) for t in MOCK_TASKS["standard"]]


@pytest.fixture
def presentation_tasks(standard_records: list[RawRecord]) -> list[PresentationTask]:
    """Standard mock list in presentation form (1 done, 2 pending)."""
    return [PresentationTask.from_raw(r) for r in standard_records]


@pytest.fixture
def app() -> Iterator[FastAPI]:
    """The API app; dependency overrides are cleared afterwards."""
    from tasklist.main import app

    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def records_client(app: FastAPI, task_store: TaskStore) -> TestClient:
    """TestClient whose Record Store is backed by FakeRedis."""
    app.dependency_overrides[get_task_store] = lambda: task_store
    return TestClient(app)


@pytest.fixture
def tasks_client(app: FastAPI, make_api_client):
    """Factory: TestClient whose remote task API answers through handler."""

    def factory(handler: Handler) -> TestClient:
        api_client = make_api_client(handler)
        app.dependency_overrides[get_task_api_client] = lambda: api_client
        return TestClient(app)

    return factory
