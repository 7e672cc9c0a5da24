"""Task storage interface and in-memory implementation."""

import threading
import uuid
from abc import ABC, abstractmethod

from .models import Task


class StoreError(Exception):
    """Generic store failure."""


class TaskNotFoundError(StoreError):
    """Raised when an operation references an unknown task id."""

    def __init__(self, task_id: str):
        super().__init__(f"task not found: {task_id}")
        self.task_id = task_id


class TaskStore(ABC):
    """Base class for task stores."""

    @abstractmethod
    def list(self) -> list[Task]:
        """Return all tasks, in no particular order."""
        pass

    @abstractmethod
    def create(self, task: Task) -> Task:
        """Insert a task under a freshly generated id and return it."""
        pass

    @abstractmethod
    def update(self, task_id: str, task: Task) -> Task:
        """Replace the task stored under ``task_id`` and return it."""
        pass

    @abstractmethod
    def delete(self, task_id: str) -> None:
        """Remove the task stored under ``task_id``."""
        pass


class MemStore(TaskStore):
    """Dict-backed store. Every operation holds a lock, so request threads
    can share one instance.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks

    def get(self, task_id: str) -> Task:
        with self._lock:
            try:
                return self._tasks[task_id].model_copy()
            except KeyError:
                raise TaskNotFoundError(task_id) from None

    def list(self) -> list[Task]:
        with self._lock:
            return [task.model_copy() for task in self._tasks.values()]

    def create(self, task: Task) -> Task:
        created = task.model_copy(update={"id": str(uuid.uuid4())})
        with self._lock:
            self._tasks[created.id] = created
        return created.model_copy()

    def update(self, task_id: str, task: Task) -> Task:
        updated = task.model_copy(update={"id": task_id})
        with self._lock:
            if task_id not in self._tasks:
                raise TaskNotFoundError(task_id)
            self._tasks[task_id] = updated
        return updated.model_copy()

    def delete(self, task_id: str) -> None:
        with self._lock:
            if task_id not in self._tasks:
                raise TaskNotFoundError(task_id)
            del self._tasks[task_id]
