"""
Text-related helpers.
"""

from __future__ import annotations

import re

_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_markup(value: str) -> str:
    """
    Remove HTML/XML tags and surrounding whitespace.

    Entities are left untouched; only the tags themselves are dropped.
    """
    return _TAG_PATTERN.sub("", value or "").strip()
