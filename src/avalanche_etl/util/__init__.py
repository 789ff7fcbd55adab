"""
Shared utility helpers for filesystem writes, text cleanup, HTTP errors and timestamps.
"""

from .filesystem import write_json_atomic
from .http import format_request_exception
from .text import strip_markup
from .time import format_iso_millis, parse_date, parse_timestamp, utc_now

__all__ = [
    "write_json_atomic",
    "format_request_exception",
    "strip_markup",
    "format_iso_millis",
    "parse_date",
    "parse_timestamp",
    "utc_now",
]
