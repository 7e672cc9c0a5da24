"""Async client for the task HTTP API."""

from http import HTTPStatus

import httpx

from .tasks.models import Task, TaskStatus


class TasksAPIError(Exception):
    """Error response from the task API."""

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(f"{status_code} {error}: {message}")
        self.status_code = status_code
        self.error = error
        self.message = message

    @classmethod
    def from_response(cls, response: httpx.Response) -> "TasksAPIError":
        """Build the error from a JSON error body, tolerating other bodies."""
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        error_cls = TaskNotFoundAPIError if response.status_code == HTTPStatus.NOT_FOUND else cls
        return error_cls(
            response.status_code,
            data.get("error", "unknown_error"),
            data.get("message", response.text),
        )


class TaskNotFoundAPIError(TasksAPIError):
    """The route or task id was not found."""


class TasksClient:
    """Client for the ``/v1/tasks`` API."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TasksClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        client = await self._get_client()
        response = await client.request(method, url, **kwargs)
        if response.is_error:
            raise TasksAPIError.from_response(response)
        return response

    async def list(self) -> list[Task]:
        """List all tasks."""
        response = await self._request("GET", "/v1/tasks")
        return [Task.model_validate(item) for item in response.json()]

    async def create(self, name: str, status: TaskStatus = TaskStatus.INCOMPLETE) -> Task:
        """Create a task and return it with its assigned id."""
        response = await self._request(
            "POST",
            "/v1/tasks",
            json={"name": name, "status": int(status)},
        )
        return Task.model_validate(response.json())

    async def update(self, task_id: str, name: str, status: TaskStatus) -> Task:
        """Replace the name and status of an existing task."""
        response = await self._request(
            "PUT",
            f"/v1/tasks/{task_id}",
            json={"name": name, "status": int(status)},
        )
        return Task.model_validate(response.json())

    async def delete(self, task_id: str) -> None:
        """Delete a task."""
        await self._request("DELETE", f"/v1/tasks/{task_id}")

    async def health(self) -> dict:
        """Check the service is up."""
        response = await self._request("GET", "/health")
        return response.json()

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
