"""Task API Router - presentation list over the remote task API."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from ...domain import TaskListResult, filter_tasks_by_status, load_tasks
from ...errors import TransportError
from ...service import TaskApiClient
from ..contracts import CreateTaskRequest
from ..deps import get_task_api_client

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResult)
async def list_tasks(
    client: Annotated[TaskApiClient, Depends(get_task_api_client)],
    completed: bool | None = None,
) -> TaskListResult:
    """
    Load tasks in presentation form.

    Load failures are reported in the body's error field with status 200,
    the same result a UI would render. Pass ?completed=true|false to filter.
    """
    result = await load_tasks(client)
    if completed is None or not result.ok:
        return result
    return TaskListResult(tasks=tuple(filter_tasks_by_status(result.tasks, completed)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    request: CreateTaskRequest,
    client: Annotated[TaskApiClient, Depends(get_task_api_client)],
) -> Any:
    """Forward a new task to the remote API and relay its response body."""
    try:
        return await client.create_one(request.model_dump())
    except TransportError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
