"""
Date-range and count filtering over a user's exercise list.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from exercise_tracker.db import ExerciseRecord


def filter_log(
    exercises: Iterable[ExerciseRecord],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    limit: Optional[int] = None,
) -> list[ExerciseRecord]:
    """
    Keep exercises dated within ``[start, end]`` (both inclusive, either
    optional), preserving stored order, then truncate to the first ``limit``
    entries. A ``limit`` that is None or not positive does not truncate.
    """
    entries = list(exercises)
    if start is not None:
        entries = [entry for entry in entries if entry.date >= start]
    if end is not None:
        entries = [entry for entry in entries if entry.date <= end]
    if limit is not None and limit > 0:
        entries = entries[:limit]
    return entries
