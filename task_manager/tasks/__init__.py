"""Task definitions and storage."""

from .models import Task, TaskPayload, TaskStatus
from .store import MemStore, StoreError, TaskNotFoundError, TaskStore

__all__ = [
    "Task",
    "TaskPayload",
    "TaskStatus",
    "MemStore",
    "StoreError",
    "TaskNotFoundError",
    "TaskStore",
]
