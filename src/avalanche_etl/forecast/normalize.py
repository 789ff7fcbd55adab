"""
Reduce a region's raw forecast entry to a single danger rating with text and validity window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Sequence

from ..api.avalanche import RawForecast
from ..config.models import DEFAULT_SITE_URL
from ..util import format_iso_millis, parse_timestamp, strip_markup

logger = logging.getLogger(__name__)

INSUFFICIENT_SNOW_RATING = -2
NO_RATING_DESCRIPTION = "No rating available"

_LEVEL_TEXT = {
    -2: "Insufficient Snow",
    0: "No Rating",
    1: "Low (1)",
    2: "Moderate (2)",
    3: "Considerable (3)",
    4: "High (4)",
    5: "Extreme (5)",
}


@dataclass(frozen=True)
class NormalizedForecast:
    """
    Canonical danger record for one region.

    Attributes:
        location: Label for the region (e.g., "Region 3").
        level: Highest positive rating across altitude bands, 0 when unrated.
        level_text: Human-readable level, e.g. "Considerable (3)".
        description: Cleaned important information or the band description.
        start: Issue time exactly as published.
        expires: Issue time plus the validity period, ISO 8601 in UTC.
        url: Forecast detail page.
    """
    location: str
    level: int
    level_text: str
    description: str
    start: str
    expires: str
    url: str


def danger_level_text(rating: int) -> str:
    """Map any integer rating to its label, with "Level N" for unknown values."""
    return _LEVEL_TEXT.get(rating, f"Level {rating}")


def normalize_forecast(
    region_id: int,
    forecasts: Optional[Sequence[RawForecast]],
    *,
    site_url: str = DEFAULT_SITE_URL,
) -> Optional[NormalizedForecast]:
    """
    Build the NormalizedForecast for a region from the shared forecast list.

    The first entry for the region is taken as current; upstream publishes the
    list newest first.

    Returns:
        The normalized record, or None when the region has no (usable) forecast.
    """
    if not forecasts:
        logger.warning("No forecasts available")
        return None

    matching = [forecast for forecast in forecasts if forecast.region_id == region_id]
    if not matching:
        logger.warning("No forecasts available for region %s", region_id)
        return None
    forecast = matching[0]

    max_rating = 0
    rating_description = NO_RATING_DESCRIPTION
    for band in forecast.altitude_danger:
        if band.rating > max_rating and band.rating > 0:
            max_rating = band.rating
            rating_description = band.description

    if max_rating == 0:
        insufficient = next(
            (band for band in forecast.altitude_danger if band.rating == INSUFFICIENT_SNOW_RATING),
            None,
        )
        if insufficient is not None:
            rating_description = insufficient.description

    created = parse_timestamp(forecast.created)
    if created is None:
        logger.warning("Forecast for region %s has unparseable created time %r", region_id, forecast.created)
        return None
    valid_hours = 48 if forecast.valid_period == "48hrs" else 24
    expires = created + timedelta(hours=valid_hours)

    if forecast.important_information:
        description = strip_markup(forecast.important_information)
    else:
        description = rating_description

    return NormalizedForecast(
        location=f"Region {region_id}",
        level=max(0, max_rating),
        level_text=danger_level_text(max_rating),
        description=description,
        start=forecast.created,
        expires=format_iso_millis(expires),
        url=f"{site_url.rstrip('/')}/region/{region_id}",
    )
