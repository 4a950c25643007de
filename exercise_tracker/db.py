"""
Persistence for user records: an in-memory store and a SQLAlchemy-backed one.
"""

from __future__ import annotations

import copy
import time
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Protocol

from sqlalchemy import JSON, Column, Float, String, create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class DbClient(Protocol):
    """Interface for user record storage."""

    def create_user(self, username: str) -> "UserRecord":
        ...

    def list_users(self) -> list["UserSummary"]:
        ...

    def get_user(self, user_id: str) -> Optional["UserRecord"]:
        ...

    def save_user(self, record: "UserRecord") -> None:
        ...

    def close(self) -> None:
        ...


@dataclass
class ExerciseRecord:
    description: str
    duration: int
    date: date

    def as_dict(self) -> dict:
        return {
            "description": self.description,
            "duration": self.duration,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseRecord":
        return cls(
            description=data["description"],
            duration=int(data["duration"]),
            date=date.fromisoformat(data["date"]),
        )


@dataclass
class UserRecord:
    id: str
    username: str
    exercises: list[ExerciseRecord] = field(default_factory=list)
    created_at: float = field(default_factory=lambda: time.time())

    def add_exercise(self, exercise: ExerciseRecord) -> None:
        self.exercises.append(exercise)


@dataclass
class UserSummary:
    """Projection of a user without the exercise list."""

    id: str
    username: str


class InMemoryDbClient:
    """Simple in-memory store for development and tests."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}

    def create_user(self, username: str) -> UserRecord:
        record = UserRecord(id=uuid.uuid4().hex, username=username)
        self.users[record.id] = record
        return copy.deepcopy(record)

    def list_users(self) -> list[UserSummary]:
        return [
            UserSummary(id=user.id, username=user.username)
            for user in self.users.values()
        ]

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        record = self.users.get(user_id)
        return copy.deepcopy(record) if record else None

    def save_user(self, record: UserRecord) -> None:
        if record.id not in self.users:
            raise KeyError(f"Unknown user {record.id}")
        self.users[record.id] = copy.deepcopy(record)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.users.clear()

    def close(self) -> None:
        pass


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_user_record(self, row: "UserRow") -> UserRecord:
        return UserRecord(
            id=row.id,
            username=row.username,
            exercises=[ExerciseRecord.from_dict(item) for item in row.exercises or []],
            created_at=row.created_at,
        )

    def create_user(self, username: str) -> UserRecord:
        with self.Session() as session:
            row = UserRow(
                id=uuid.uuid4().hex,
                username=username,
                exercises=[],
                created_at=time.time(),
            )
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_user_record(row)

    def list_users(self) -> list[UserSummary]:
        with self.Session() as session:
            stmt = select(UserRow.id, UserRow.username).order_by(
                UserRow.created_at.asc()
            )
            return [
                UserSummary(id=user_id, username=username)
                for user_id, username in session.execute(stmt).all()
            ]

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self.Session() as session:
            row = session.get(UserRow, user_id)
            if not row:
                return None
            return self._to_user_record(row)

    def save_user(self, record: UserRecord) -> None:
        with self.Session() as session:
            row = session.get(UserRow, record.id)
            if not row:
                raise KeyError(f"Unknown user {record.id}")
            row.username = record.username
            # Assign a new list so the JSON column is flagged as modified.
            row.exercises = [exercise.as_dict() for exercise in record.exercises]
            session.commit()

    def close(self) -> None:
        self.engine.dispose()


Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    username = Column(String, nullable=False, index=True)
    exercises = Column(JSON, nullable=False, default=list)
    created_at = Column(Float, nullable=False)
