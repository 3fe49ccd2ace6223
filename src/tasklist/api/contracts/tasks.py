# src/tasklist/api/contracts/tasks.py
"""Task API contracts - requests only; responses use domain types directly."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateTaskRequest(BaseModel):
    """Task forwarded to the remote API."""

    name: str = Field(
        min_length=1,
        description="Task name as the remote API expects it",
        examples=["Write documentation"],
    )
    completed: bool = Field(
        default=False,
        description="Initial completion flag",
        examples=[False],
    )


class CreateRecordRequest(BaseModel):
    """Task to persist in the Record Store.

    Name constraints are enforced by the store, not here, so the API reports
    the same messages the store raises.
    """

    name: str | None = Field(
        default=None,
        description="Task name, trimmed; 1..200 characters",
        examples=["Finish mocking guide"],
    )
    completed: bool = Field(default=False, examples=[False])


class UpdateRecordRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, examples=["Review PR"])
    completed: bool | None = Field(default=None, examples=[True])
