"""
Timestamp parsing and formatting for forecast issue/expiry times.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

NZ_TIMEZONE = "Pacific/Auckland"

# e.g. "Monday 1st September 2025, 15:18"
_NZ_LONG_FORM = re.compile(r"(\w+)\s+(\d+)\w*\s+(\w+)\s+(\d{4}),\s*(\d{1,2}):(\d{2})")

_MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def _nz_zone():
    try:
        return ZoneInfo(NZ_TIMEZONE)
    except ZoneInfoNotFoundError:
        return timezone.utc


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an upstream timestamp into an aware UTC datetime.

    ISO 8601 strings are accepted with or without an offset (naive values are
    treated as UTC). NZ long-form dates are read as Pacific/Auckland wall time.
    Returns None when nothing matches.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
    if parsed is not None:
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    match = _NZ_LONG_FORM.search(text)
    if match:
        _, day, month_name, year, hour, minute = match.groups()
        month = _MONTHS.get(month_name.lower())
        if month is not None:
            try:
                local = datetime(int(year), month, int(day), int(hour), int(minute), tzinfo=_nz_zone())
            except ValueError:
                return None
            return local.astimezone(timezone.utc)
    return None


def format_iso_millis(value: datetime) -> str:
    """Format a datetime as UTC ISO 8601 with millisecond precision and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{value.microsecond // 1000:03d}Z"


def parse_date(value: Optional[str]) -> str:
    """
    Normalise an upstream timestamp string for feature time fields.

    Unparseable input falls back to the current time.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        logger.debug("Unrecognised timestamp %r; using current time", value)
        parsed = utc_now()
    return format_iso_millis(parsed)
