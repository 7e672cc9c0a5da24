# tests/fakes.py

from __future__ import annotations

from task_manager.tasks.models import Task
from task_manager.tasks.store import StoreError, TaskStore

SAMPLE_TASK_ID = "7494d1aa-21f1-4003-8504-70602e167839"


class FailingStore(TaskStore):
    """
    Store whose every operation fails with a generic error.

    Used to exercise the 500 path of the request handler.
    """

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or StoreError("disk on fire")
        self.calls: list[str] = []

    def _fail(self, op: str):
        self.calls.append(op)
        raise self.exc

    def list(self) -> list[Task]:
        return self._fail("list")

    def create(self, task: Task) -> Task:
        return self._fail("create")

    def update(self, task_id: str, task: Task) -> Task:
        return self._fail("update")

    def delete(self, task_id: str) -> None:
        self._fail("delete")
