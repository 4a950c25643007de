"""
Exception types and the handlers that turn them into JSON error responses.

Every error body has the shape ``{"error": "<message>"}``.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ExerciseTrackerError(Exception):
    """Base exception; carries the HTTP status and a client-safe message."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.message}


class UserNotFoundError(ExerciseTrackerError):
    """Raised when a user id doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__("User not found", status_code=404)
        self.user_id = user_id


class InvalidInputError(ExerciseTrackerError):
    """Raised for malformed request input."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


async def exercise_tracker_exception_handler(
    request: Request, exc: ExerciseTrackerError
) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field_name = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field_name}: {first.get('msg')}" if field_name else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
