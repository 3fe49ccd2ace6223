"""Record API Router - thin HTTP layer over the Record Store.

Error mapping:
- TaskValidationError -> 422 with the store's message
- CastError (malformed id) -> 400
- well-formed id with no task, or a task deleted mid-request -> 404
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...domain import StoredTask
from ...errors import CastError, TaskNotFoundError, TaskValidationError
from ...service import TaskStore
from ..contracts import CreateRecordRequest, UpdateRecordRequest
from ..deps import get_task_store

router = APIRouter(prefix="/records", tags=["records"])

Store = Annotated[TaskStore, Depends(get_task_store)]


async def _load(store: TaskStore, task_id: str) -> StoredTask:
    try:
        task = await store.find_by_id(task_id)
    except CastError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.post("", response_model=StoredTask, status_code=status.HTTP_201_CREATED)
async def create_record(request: CreateRecordRequest, store: Store) -> StoredTask:
    try:
        return await store.create(request.model_dump(exclude_none=True))
    except TaskValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("", response_model=list[StoredTask])
async def list_records(store: Store, completed: bool | None = None) -> list[StoredTask]:
    if completed is None:
        return await store.find()
    return await (store.find_completed() if completed else store.find_pending())


@router.get("/{task_id}", response_model=StoredTask)
async def get_record(task_id: str, store: Store) -> StoredTask:
    return await _load(store, task_id)


@router.patch("/{task_id}", response_model=StoredTask)
async def update_record(task_id: str, request: UpdateRecordRequest, store: Store) -> StoredTask:
    task = await _load(store, task_id)
    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(task, field, value)
    try:
        return await store.save(task)
    except TaskNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found") from exc
    except TaskValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/{task_id}/toggle", response_model=StoredTask)
async def toggle_record(task_id: str, store: Store) -> StoredTask:
    task = await _load(store, task_id)
    try:
        return await store.toggle_completion(task)
    except TaskNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found") from exc


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(task_id: str, store: Store) -> Response:
    try:
        deleted = await store.delete_by_id(task_id)
    except CastError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
