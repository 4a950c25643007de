"""
FastAPI application entry point for the exercise tracker.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from exercise_tracker.config import get_settings
from exercise_tracker.db import DbClient
from exercise_tracker.dependencies import build_db_client
from exercise_tracker.errors import (
    ExerciseTrackerError,
    exercise_tracker_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from exercise_tracker.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Exercise tracker starting with %s", type(app.state.db).__name__)
    yield
    logger.info("Exercise tracker shutting down")
    app.state.db.close()


def create_app(db: DbClient | None = None) -> FastAPI:
    """
    Build the application. ``db`` overrides the store chosen from settings.
    """
    settings = get_settings()
    app = FastAPI(title="Exercise Tracker", version="0.1.0", lifespan=lifespan)
    app.state.db = db if db is not None else build_db_client(settings)
    app.add_exception_handler(ExerciseTrackerError, exercise_tracker_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
