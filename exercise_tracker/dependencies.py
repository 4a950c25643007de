"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import json
import logging

from fastapi import Request

from exercise_tracker.config import Settings, get_settings
from exercise_tracker.db import DbClient, InMemoryDbClient, SqlDbClient
from exercise_tracker.errors import InvalidInputError

logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def build_db_client(settings: Settings | None = None) -> DbClient:
    """
    Create the store selected by settings: in-memory when requested or when
    no database URL is configured, SQLAlchemy otherwise.
    """
    settings = settings or get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        logger.info("Using in-memory user store")
        return InMemoryDbClient()
    logger.info("Using SQL user store")
    return SqlDbClient(settings.database_url)


def get_db_client(request: Request) -> DbClient:
    """Return the store handle attached to the application at startup."""
    return request.app.state.db


async def get_request_body(request: Request) -> dict:
    """
    Read a JSON or form-encoded body into a plain dict.

    An empty body reads as ``{}``; a body that is not a JSON object is rejected.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in _FORM_CONTENT_TYPES:
        form = await request.form()
        # Uploaded files are not valid field values.
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise InvalidInputError("Invalid request body")
    if not isinstance(body, dict):
        raise InvalidInputError("Invalid request body")
    return body
