"""
HTTP routes for the exercise tracker API.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from exercise_tracker.db import DbClient, UserRecord
from exercise_tracker.dependencies import get_db_client, get_request_body
from exercise_tracker.errors import (
    ExerciseTrackerError,
    InvalidInputError,
    UserNotFoundError,
)
from exercise_tracker.exercise_log import filter_log
from exercise_tracker.parsing import format_date, parse_date, parse_int
from exercise_tracker.schemas import (
    AddExercisePayload,
    CreateUserPayload,
    ExerciseResponse,
    LogEntry,
    LogResponse,
    UserResponse,
    parse_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _today() -> date:
    return date.today()


def _load_user(db: DbClient, user_id: str, failure_message: str) -> UserRecord:
    try:
        user = db.get_user(user_id)
    except Exception:
        logger.exception("Lookup of user %s failed", user_id)
        raise ExerciseTrackerError(failure_message)
    if not user:
        raise UserNotFoundError(user_id)
    return user


def _parse_bound(raw: Optional[str], name: str) -> Optional[date]:
    if not raw:
        return None
    parsed = parse_date(raw)
    if parsed is None:
        raise InvalidInputError(f"Invalid {name} date")
    return parsed


@router.post("/users", response_model=UserResponse)
def create_user(
    body: dict = Depends(get_request_body),
    db: DbClient = Depends(get_db_client),
):
    username = parse_payload(CreateUserPayload, body).username
    try:
        user = db.create_user(username)
    except Exception:
        logger.exception("Failed to create user %r", username)
        raise ExerciseTrackerError("Failed to create user")
    logger.info("Created user %s (%s)", user.id, user.username)
    return UserResponse(username=user.username, id=user.id)


@router.get("/users", response_model=list[UserResponse])
def list_users(db: DbClient = Depends(get_db_client)):
    try:
        users = db.list_users()
    except Exception:
        logger.exception("Failed to list users")
        raise ExerciseTrackerError("Failed to retrieve users")
    return [UserResponse(username=user.username, id=user.id) for user in users]


@router.post("/users/{user_id}/exercises", response_model=ExerciseResponse)
def add_exercise(
    user_id: str,
    body: dict = Depends(get_request_body),
    db: DbClient = Depends(get_db_client),
):
    """
    Append an exercise to a user. ``date`` defaults to today when omitted.
    """
    user = _load_user(db, user_id, "Failed to add exercise")
    exercise = parse_payload(AddExercisePayload, body).to_record(_today())
    user.add_exercise(exercise)
    try:
        db.save_user(user)
    except Exception:
        logger.exception("Failed to save exercise for user %s", user_id)
        raise ExerciseTrackerError("Failed to add exercise")
    logger.info(
        "Added exercise for user %s on %s", user.id, exercise.date.isoformat()
    )
    return ExerciseResponse(
        username=user.username,
        id=user.id,
        description=exercise.description,
        duration=exercise.duration,
        date=format_date(exercise.date),
    )


@router.get("/users/{user_id}/logs", response_model=LogResponse)
def get_logs(
    user_id: str,
    start: Optional[str] = Query(None, alias="from"),
    end: Optional[str] = Query(None, alias="to"),
    limit: Optional[str] = Query(None),
    db: DbClient = Depends(get_db_client),
):
    """
    Return a user's exercises, optionally restricted to ``[from, to]`` and
    truncated to ``limit`` entries. An unusable ``limit`` is ignored.
    """
    user = _load_user(db, user_id, "Failed to retrieve logs")
    entries = filter_log(
        user.exercises,
        start=_parse_bound(start, "from"),
        end=_parse_bound(end, "to"),
        limit=parse_int(limit),
    )
    log = [
        LogEntry(
            description=entry.description,
            duration=entry.duration,
            date=format_date(entry.date),
        )
        for entry in entries
    ]
    return LogResponse(
        username=user.username, id=user.id, count=len(log), log=log
    )
