"""
Helpers for reporting failed HTTP requests.
"""

from __future__ import annotations

import requests


def format_request_exception(exc: Exception) -> str:
    """
    Describe a request failure in one line, including status and URL when known.
    """
    if isinstance(exc, requests.Timeout):
        return f"timed out ({exc})"
    response = getattr(exc, "response", None)
    if response is not None:
        return f"HTTP {response.status_code} from {response.url}"
    return str(exc) or exc.__class__.__name__
