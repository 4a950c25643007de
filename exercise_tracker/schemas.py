"""
Pydantic schemas for the exercise tracker API.

Request payloads accept loosely typed values (JSON or form fields); the
``mode="before"`` validators coerce them and reject each bad field with its
own message.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from exercise_tracker.db import ExerciseRecord
from exercise_tracker.errors import InvalidInputError
from exercise_tracker.parsing import parse_date, parse_int

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def _clean_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def parse_payload(model: Type[PayloadT], body: dict) -> PayloadT:
    """Validate a request body, reporting the first rejected field as a 400."""
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        first = exc.errors()[0]
        cause = first.get("ctx", {}).get("error")
        raise InvalidInputError(str(cause) if cause else first["msg"])


class CreateUserPayload(BaseModel):
    username: str = Field(None, validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def _require_username(cls, value: Any) -> str:
        username = _clean_text(value)
        if not username:
            raise ValueError("username is required")
        return username


class AddExercisePayload(BaseModel):
    description: str = Field(None, validate_default=True)
    duration: int = Field(None, validate_default=True)
    date: Optional[dt.date] = None

    @field_validator("description", mode="before")
    @classmethod
    def _require_description(cls, value: Any) -> str:
        description = _clean_text(value)
        if not description:
            raise ValueError("description is required")
        return description

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> int:
        duration = parse_int(value)
        if duration is None:
            raise ValueError("Invalid duration")
        return duration

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Optional[dt.date]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError("Invalid date")
        return parsed

    def to_record(self, today: dt.date) -> ExerciseRecord:
        """Build the stored exercise; a missing date means ``today``."""
        return ExerciseRecord(
            description=self.description,
            duration=self.duration,
            date=self.date or today,
        )


class UserResponse(BaseModel):
    username: str
    id: str


class ExerciseResponse(BaseModel):
    username: str
    id: str
    description: str
    duration: int
    date: str


class LogEntry(BaseModel):
    description: str
    duration: int
    date: str


class LogResponse(BaseModel):
    username: str
    id: str
    count: int
    log: list[LogEntry]
