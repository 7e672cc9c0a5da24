"""HTTP responses and the standard JSON error bodies."""

import json
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

import structlog
from pydantic import BaseModel

JSON_CONTENT_TYPE = "application/json"

logger = structlog.get_logger("responses")


@dataclass
class Response:
    """A status code plus an optional JSON-serializable payload."""

    status: int
    payload: Any = None

    @property
    def body(self) -> bytes:
        if self.payload is None:
            return b""
        return json.dumps(self.payload).encode()


class ErrorResponse(BaseModel):
    """Error body: a machine-readable code and a human message."""

    error: str
    message: str


def bad_request(method: str, path: str) -> Response:
    logger.warning("bad_request", method=method, path=path)
    return Response(
        HTTPStatus.BAD_REQUEST,
        ErrorResponse(
            error="bad_request_error",
            message="The request could not be read properly",
        ).model_dump(),
    )


def not_found(method: str, path: str) -> Response:
    logger.warning("not_found", method=method, path=path)
    return Response(
        HTTPStatus.NOT_FOUND,
        ErrorResponse(
            error="not_found_error",
            message="The requested resource was not found.",
        ).model_dump(),
    )


def internal_error(method: str, path: str, exc: BaseException) -> Response:
    """500 response. The exception is logged, never returned to the client."""
    logger.error(
        "internal_error",
        method=method,
        path=path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return Response(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred. Please try again later.",
        ).model_dump(),
    )
