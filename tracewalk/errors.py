"""Error taxonomy for span traversal, and its mapping onto HTTP responses."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("tracewalk")


class TracewalkError(Exception):
    """Base exception for all tracewalk errors.

    Attributes:
        status_code: HTTP status code returned when raised inside a request.
        error_code: Machine-readable identifier for clients.
        context: Extra key-value pairs describing the failure.
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, /, **context: Any) -> None:
        super().__init__(message)
        self.context = context


class ClientInputError(TracewalkError):
    """Missing or invalid request parameters."""

    status_code = 400
    error_code = "CLIENT_INPUT_ERROR"


class NotFoundError(TracewalkError):
    """The requested span does not exist within the trace."""

    status_code = 404
    error_code = "NOT_FOUND"


class BackendError(TracewalkError):
    """The span store could not be reached or rejected the query."""

    status_code = 502
    error_code = "BACKEND_ERROR"


class DecodeError(TracewalkError):
    """The span store answered with a response of unexpected shape."""

    status_code = 500
    error_code = "DECODE_ERROR"


def register_error_handlers(app: FastAPI) -> None:
    """Register a handler turning :class:`TracewalkError` into JSON responses."""

    @app.exception_handler(TracewalkError)
    async def handle_tracewalk_error(request: Request, exc: TracewalkError) -> JSONResponse:
        log = logger.warning if exc.status_code < 500 else logger.error
        log("%s on %s: %s", exc.error_code, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error_code": exc.error_code,
                "message": str(exc),
                "context": exc.context,
            },
        )
