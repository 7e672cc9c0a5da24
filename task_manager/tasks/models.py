"""Task models."""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(IntEnum):
    """Task completion status, serialized as its integer value."""

    INCOMPLETE = 0
    COMPLETE = 1


class Task(BaseModel):
    """A task owned by a store.

    ``id`` stays empty until a store assigns one on create.
    """

    id: str = Field(default="")
    name: str = Field(..., min_length=1)
    status: TaskStatus = Field(default=TaskStatus.INCOMPLETE)


class TaskPayload(BaseModel):
    """Request body for creating or replacing a task.

    Validated from raw JSON in strict mode: ``name`` must be a JSON string
    and ``status`` a JSON integer. Unknown keys, ``id`` included, are dropped.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    name: str = Field(..., min_length=1)
    status: TaskStatus = Field(default=TaskStatus.INCOMPLETE)

    @field_validator("status", mode="before")
    @classmethod
    def require_integer_status(cls, value: Any) -> TaskStatus:
        """Reject floats and booleans that strict enum parsing lets through."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("status must be an integer")
        return TaskStatus(value)

    @classmethod
    def from_json(cls, body: bytes | None) -> "TaskPayload":
        """Parse and validate a request body. Raises ``ValidationError``.

        A None body, one that could not be read, fails like an empty one.
        """
        return cls.model_validate_json(body if body is not None else b"")

    def to_task(self, task_id: str = "") -> Task:
        """Build a task from this payload."""
        return Task(id=task_id, name=self.name, status=self.status)
