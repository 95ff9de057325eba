"""Date/time parsing helpers.

Calendar invitations carry the schedule as a single line such as
"Monday, 27 October⋅14:30 – 15:00". The year is never shown, so the
current year (or an injected `now`) is used. Parsing is tolerant: any
failure yields None instead of raising.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)

SCHEDULE_SEPARATOR = "⋅"
RANGE_SEPARATOR = "–"

MONTHS = {
    "January": 1,
    "February": 2,
    "March": 3,
    "April": 4,
    "May": 5,
    "June": 6,
    "July": 7,
    "August": 8,
    "September": 9,
    "October": 10,
    "November": 11,
    "December": 12,
}


def _parse_number(
    value: str, *, low: int, high: int, default: int, width: Optional[int] = None
) -> int:
    """Parse an ASCII numeral of up to two digits in [low, high], else return default.

    With `width`, the numeral must have exactly that many digits.
    """
    if not (value.isascii() and value.isdigit()) or len(value) > 2:
        return default
    if width is not None and len(value) != width:
        return default
    number = int(value)
    if number < low or number > high:
        return default
    return number


def parse_meeting_time(
    line: str, *, now: Optional[datetime] = None
) -> Optional[datetime]:
    """Parse the start of a schedule line into a UTC datetime.

    A malformed day falls back to 1 and a malformed hour or minute to 0.
    An unknown month name, a missing separator or a start time that is
    not two colon-separated parts makes the whole parse fail.

    Args:
        line: Raw schedule line.
        now: Reference time supplying the year; defaults to the current time.

    Returns:
        Timezone-aware datetime in UTC, or None when the line cannot be parsed.

    Example:
        >>> parse_meeting_time("Monday, 27 October⋅14:30 – 15:00",
        ...                    now=datetime(2025, 1, 1))
        datetime.datetime(2025, 10, 27, 14, 30, tzinfo=datetime.timezone.utc)
    """

    parts = line.split(SCHEDULE_SEPARATOR)
    if len(parts) != 2:
        logger.debug("meeting_time_unparsed", line=line, reason="separator")
        return None

    date_part = parts[0].strip()
    time_part = parts[1].strip()
    start_time = time_part.split(RANGE_SEPARATOR)[0].strip()

    # "Monday, 27 October"
    date_fields = date_part.split()
    if len(date_fields) < 3:
        logger.debug("meeting_time_unparsed", line=line, reason="date_fields")
        return None

    day_str = date_fields[1].rstrip(",")
    month = MONTHS.get(date_fields[2])
    if month is None:
        logger.debug("meeting_time_unparsed", line=line, reason="month")
        return None

    day = _parse_number(day_str, low=1, high=31, default=1)

    time_fields = start_time.split(":")
    if len(time_fields) != 2:
        logger.debug("meeting_time_unparsed", line=line, reason="start_time")
        return None
    hour = _parse_number(time_fields[0], low=0, high=23, default=0)
    minute = _parse_number(time_fields[1], low=0, high=59, default=0, width=2)

    year = (now or datetime.now(timezone.utc)).year
    # Days past the end of the month roll over into the next one.
    return datetime(year, month, 1, tzinfo=timezone.utc) + timedelta(
        days=day - 1, hours=hour, minutes=minute
    )


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO 8601 with 'Z' for UTC.

    Example:
        >>> format_timestamp(datetime(2025, 10, 27, 14, 30, tzinfo=timezone.utc))
        '2025-10-27T14:30:00Z'
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.replace(microsecond=0)
    if value.utcoffset() == timedelta(0):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value.isoformat()


def to_date_key(value: datetime) -> str:
    """Convert a datetime to a YYYY-MM-DD key."""

    return value.date().isoformat()
