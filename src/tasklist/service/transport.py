"""Transport client - the only code that talks to the remote task API.

Every failure mode (network, HTTP status, unparsable body) funnels through a
single wrapping rule, so callers match one error type:

    TransportError("Failed to fetch tasks: HTTP 503: Service Unavailable")

Each real call is announced on the injected logger first, so an unmocked
request inside a unit test shows up in the output. Silence it with
tasklist.logging_setup.suppress_unmocked_call_notice().
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..config import Settings
from ..errors import TransportError
from ..logging_setup import UNMOCKED_CALL_NOTICE

FETCH_ACTION = "fetch tasks"
CREATE_ACTION = "create task"


class TaskApiClient:
    """
    Async client for the task collection endpoint.

    Responsibilities:
    - GET the collection (fetch_all) and POST a new task (create_one)
    - Follow redirects; only the final response decides success
    - Translate httpx errors, non-2xx statuses and bad JSON into TransportError
    - Announce every real call on its logger

    An httpx.AsyncClient may be injected (tests pass one built on
    httpx.MockTransport); an injected client is left open on aclose().
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        retries: int = 0,
        client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ):
        self.base_url = base_url
        self.logger = logger or logging.getLogger(__name__)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=httpx.AsyncHTTPTransport(retries=retries),
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> TaskApiClient:
        """Build a client from configuration (base URL, timeout, connect retries)."""
        return cls(
            settings.api_base_url,
            timeout=settings.api_timeout_seconds,
            retries=settings.api_retry_attempts,
            client=client,
            logger=logger,
        )

    async def fetch_all(self) -> Any:
        """
        Fetch the raw task collection.

        Returns:
            The decoded JSON body, unvalidated. Shape checking is the
            caller's job (see tasklist.domain.task_list).

        Raises:
            TransportError: "Failed to fetch tasks: <cause>"
        """
        return await self._request("GET", FETCH_ACTION)

    async def create_one(self, data: Mapping[str, Any]) -> Any:
        """
        Create one task on the remote API.

        Args:
            data: JSON-serialisable task fields, sent as the request body

        Raises:
            TransportError: "Failed to create task: <cause>"
        """
        return await self._request(
            "POST",
            CREATE_ACTION,
            json=dict(data),
            headers={"Content-Type": "application/json"},
        )

    async def _request(self, method: str, action: str, **kwargs: Any) -> Any:
        self.logger.warning(UNMOCKED_CALL_NOTICE)
        try:
            response = await self._client.request(method, self.base_url, follow_redirects=True, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(action, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise TransportError(action, f"HTTP {response.status_code}: {response.reason_phrase}")

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(action, str(exc)) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["CREATE_ACTION", "FETCH_ACTION", "TaskApiClient"]
