# app/utils/date_utils.py
from __future__ import annotations

"""
Date utility functions used by the leave lifecycle.

Notes:
- Leave ranges are inclusive on both ends and measured in whole
  calendar days.
- All "UTC" helpers use timezone-aware datetimes with `timezone.utc`.
"""

import logging
import math
from datetime import date, datetime, timezone
from typing import Any

from app.core.constants import ISO_DATE_FORMAT

logger = logging.getLogger(__name__)

UTC = timezone.utc

_SECONDS_PER_DAY = 24 * 60 * 60


class DateUtilsError(ValueError):
    """Raised when a value cannot be interpreted as a date."""
    pass


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def parse_date(value: Any, fmt: str = ISO_DATE_FORMAT) -> date:
    """
    Parse a calendar date.

    Accepts `date` objects as-is and strings in the given format
    (default 'YYYY-MM-DD'). Datetimes are reduced to their date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise DateUtilsError("Date string cannot be empty")

    try:
        return datetime.strptime(value.strip(), fmt).date()
    except ValueError as e:
        logger.debug(f"Failed to parse date '{value}' with format '{fmt}': {e}")
        raise DateUtilsError(f"Invalid date format. Expected format: {fmt}") from e


def is_valid_date(value: Any, fmt: str = ISO_DATE_FORMAT) -> bool:
    try:
        parse_date(value, fmt)
    except DateUtilsError:
        return False
    return True


def inclusive_day_count(start: date, end: date) -> int:
    """
    Number of calendar days spanned by [start, end], counting both ends.

    2025-08-01 .. 2025-08-03 is 3 days.
    """
    if not isinstance(start, date) or not isinstance(end, date):
        raise DateUtilsError("Both start and end must be date objects")

    seconds = (end - start).total_seconds()
    return math.ceil(seconds / _SECONDS_PER_DAY) + 1
