"""
Coercion helpers for loosely typed request values (dates and integers).
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Optional

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_DISPLAY_DATE = re.compile(r"^([A-Za-z]{3}) ([A-Za-z]{3}) (\d{1,2}) (\d{4})$")
_FALLBACK_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%b %d %Y",
)


def format_date(value: date) -> str:
    """Render a date as e.g. ``Mon Jan 01 2024``, independent of locale."""
    return (
        f"{_WEEKDAYS[value.weekday()]} {_MONTHS[value.month - 1]} "
        f"{value.day:02d} {value.year:04d}"
    )


def _parse_display_date(text: str) -> Optional[date]:
    match = _DISPLAY_DATE.match(text)
    if not match:
        return None
    weekday, month, day, year = match.groups()
    month = month.title()
    if month not in _MONTHS or weekday.title() not in _WEEKDAYS:
        return None
    try:
        return date(int(year), _MONTHS.index(month) + 1, int(day))
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a calendar date from request input.

    Accepts ``YYYY-MM-DD``, ISO-8601 datetimes (only the day is kept), the
    ``format_date`` output, ``YYYY/MM/DD``, ``MM/DD/YYYY`` and month-name forms
    such as ``January 2, 2024``. Returns None when the value is malformed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso_text).date()
    except ValueError:
        pass
    parsed = _parse_display_date(text)
    if parsed is not None:
        return parsed
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_int(value: Any) -> Optional[int]:
    """
    Read the leading integer of a value: ``"30"``, ``"30.5"`` and ``"30min"``
    all give 30. Returns None when there is no leading integer.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if not isinstance(value, str):
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # More digits than int() will convert from a string.
        return None
