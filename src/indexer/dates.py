"""
Date-time parsing and canonical formatting.

Input is parsed permissively (RFC 822 mail dates, ISO-8601 and the other
formats dateutil understands). Output is always the canonical instant:
``YYYY-MM-DDTHH:MM:SS.mmm`` followed by ``Z`` for UTC or ``±HH:MM``.
The original offset is preserved, never converted to UTC.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any

from dateutil import parser as date_parser


def parse_datetime(value: Any) -> datetime:
    """
    Parse a value into a timezone-aware datetime.

    Naive inputs are taken as UTC.

    Args:
        value: A datetime, date, or string in any common date format

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the value cannot be parsed as a date-time
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date-time string")
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Unparseable date-time '{value}': {e}") from e
    else:
        raise ValueError(f"Unsupported date-time value of type {type(value).__name__}")

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_instant(value: datetime) -> str:
    """Format a datetime as a canonical instant with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    base = value.strftime("%Y-%m-%dT%H:%M:%S")
    millis = value.microsecond // 1000
    return f"{base}.{millis:03d}{_format_offset(value.utcoffset())}"


def to_canonical_instant(value: Any) -> str:
    """Parse any supported date-time value and return its canonical instant."""
    return format_instant(parse_datetime(value))


def to_canonical_date(value: Any) -> str:
    """Parse any supported date value and return it as ``YYYY-MM-DD``."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value.isoformat()
    return parse_datetime(value).date().isoformat()


def _format_offset(offset: timedelta) -> str:
    """Render a UTC offset as ``Z`` or ``±HH:MM``."""
    if not offset:
        return "Z"
    total_minutes = int(offset.total_seconds()) // 60
    sign = "+" if total_minutes > 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"
