# tests/conftest.py

from __future__ import annotations

import threading
from collections.abc import Iterator

import pytest

from task_manager.server import TaskServer
from task_manager.tasks.store import MemStore


@pytest.fixture()
def store() -> MemStore:
    return MemStore()

@pytest.fixture()
def live_server(store: MemStore) -> Iterator[TaskServer]:
    """
    Real threaded server on an ephemeral localhost port, backed by `store`.
    """
    server = TaskServer(("127.0.0.1", 0), store)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)

@pytest.fixture()
def base_url(live_server: TaskServer) -> str:
    host, port = live_server.server_address[:2]
    return f"http://{host}:{port}"
