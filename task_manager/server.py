"""HTTP API for tasks.

Routes:
    GET    /v1/tasks          list all tasks
    POST   /v1/tasks          create a task
    PUT    /v1/tasks/{uuid}   replace a task
    DELETE /v1/tasks/{uuid}   delete a task
    GET    /health            liveness check

Anything else is answered with the JSON not-found error.
"""

import logging
import re
from collections.abc import Callable
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

import structlog
from pydantic import ValidationError

from .config import Settings, get_settings
from .responses import (
    JSON_CONTENT_TYPE,
    Response,
    bad_request,
    internal_error,
    not_found,
)
from .tasks.models import TaskPayload
from .tasks.store import MemStore, TaskNotFoundError, TaskStore

TASKS_PATH = re.compile(r"/v1/tasks")
TASK_PATH = re.compile(
    r"/v1/tasks/([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})"
)

# Operation: (store, task_id, body) -> Response
Operation = Callable[[TaskStore, str, bytes | None], Response]

logger = structlog.get_logger("server")


def list_tasks(store: TaskStore, task_id: str, body: bytes | None) -> Response:
    tasks = store.list()
    return Response(HTTPStatus.OK, [task.model_dump(mode="json") for task in tasks])


def create_task(store: TaskStore, task_id: str, body: bytes | None) -> Response:
    payload = TaskPayload.from_json(body)
    task = store.create(payload.to_task())
    logger.info("task_created", task_id=task.id)
    return Response(HTTPStatus.CREATED, task.model_dump(mode="json"))


def update_task(store: TaskStore, task_id: str, body: bytes | None) -> Response:
    payload = TaskPayload.from_json(body)
    task = store.update(task_id, payload.to_task(task_id))
    logger.info("task_updated", task_id=task.id, status=task.status.value)
    return Response(HTTPStatus.OK, task.model_dump(mode="json"))


def delete_task(store: TaskStore, task_id: str, body: bytes | None) -> Response:
    store.delete(task_id)
    logger.info("task_deleted", task_id=task_id)
    return Response(HTTPStatus.NO_CONTENT)


def health(store: TaskStore, task_id: str, body: bytes | None) -> Response:
    return Response(HTTPStatus.OK, {"status": "ok", "tasks": len(store.list())})


def match_route(method: str, path: str) -> tuple[Operation, str] | None:
    """Map method + path to an operation and the task id it targets.

    The id is empty for collection routes. Returns None when nothing matches.
    """
    if TASKS_PATH.fullmatch(path):
        if method == "GET":
            return list_tasks, ""
        if method == "POST":
            return create_task, ""
        return None

    match = TASK_PATH.fullmatch(path)
    if match:
        if method == "PUT":
            return update_task, match.group(1)
        if method == "DELETE":
            return delete_task, match.group(1)
        return None

    if method == "GET" and path == "/health":
        return health, ""

    return None


def dispatch(
    store: TaskStore, method: str, target: str, body: bytes | None = b""
) -> Response:
    """Route a request and run it against the store.

    A None body means the request body could not be read; it only matters
    to routes that decode one. Invalid payloads give 400, unknown routes or
    task ids 404, and any other failure 500.
    """
    path = urlsplit(target).path
    route = match_route(method, path)
    if route is None:
        return not_found(method, path)

    operation, task_id = route
    try:
        return operation(store, task_id, body)
    except ValidationError:
        return bad_request(method, path)
    except TaskNotFoundError:
        return not_found(method, path)
    except Exception as e:
        return internal_error(method, path, e)


class TaskServer(ThreadingHTTPServer):
    """Threaded HTTP server bound to one task store."""

    daemon_threads = True

    def __init__(self, server_address: tuple[str, int], store: TaskStore):
        super().__init__(server_address, TaskRequestHandler)
        self.store = store


class TaskRequestHandler(BaseHTTPRequestHandler):
    """Handle task API requests."""

    server: TaskServer

    def log_message(self, format, *args):
        """Send access logs through structlog instead of stderr."""
        logger.debug("http_request", client=self.client_address[0], line=format % args)

    def do_GET(self):
        self._handle()

    def do_POST(self):
        self._handle()

    def do_PUT(self):
        self._handle()

    def do_DELETE(self):
        self._handle()

    def do_PATCH(self):
        self._handle()

    def send_error(self, code, message=None, explain=None):
        """Answer methods without a ``do_*`` handler with the JSON 404."""
        if code == HTTPStatus.NOT_IMPLEMENTED and self.command:
            self._handle()
            return
        super().send_error(code, message, explain)

    def _read_body(self) -> bytes | None:
        """Read the request body, or None when Content-Length is unusable."""
        try:
            content_length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            return None
        if content_length <= 0:
            return b""
        return self.rfile.read(content_length)

    def _handle(self):
        body = self._read_body()
        self._send(dispatch(self.server.store, self.command, self.path, body))

    def _send(self, response: Response):
        body = response.body
        self.send_response(response.status)
        self.send_header("Content-Type", JSON_CONTENT_TYPE)
        if response.status != HTTPStatus.NO_CONTENT:
            self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if body and self.command != "HEAD":
            self.wfile.write(body)


def configure_logging(settings: Settings):
    """Configure stdlib logging and structlog from settings."""
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
            if settings.log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def main():
    """Entry point for the task-manager command."""
    settings = get_settings()
    configure_logging(settings)

    server = TaskServer((settings.host, settings.port), MemStore())
    logger.info("server_started", host=settings.host, port=server.server_address[1])

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("server_interrupted")
    finally:
        server.server_close()
        logger.info("server_stopped")


if __name__ == "__main__":
    main()
