"""
Region metadata and forecast retrieval from avalanche.net.nz.

Both fetchers are best-effort: any network, HTTP or payload problem is logged
and reported as ``None`` so the caller can skip the affected region.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from ..config.models import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, DEFAULT_USER_AGENT
from ..util import format_request_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionInfo:
    """
    Metadata for a forecast region.

    Attributes:
        id: Region identifier from the catalog.
        title: Display name (e.g., "Arthur's Pass").
        latitude: Latitude of the region centre.
        longitude: Longitude of the region centre.
        geometry: Raw geometry document as delivered upstream (JSON text).
    """
    id: int
    title: str
    latitude: float
    longitude: float
    geometry: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "RegionInfo":
        return cls(
            id=int(payload["id"]),
            title=str(payload["title"]),
            latitude=float(payload["latitude"]),
            longitude=float(payload["longitude"]),
            geometry=payload.get("geometry"),
        )


def _is_int(value: Any) -> bool:
    """Strict integer check; JSON booleans and floats don't count."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class AltitudeDanger:
    """Danger rating for one altitude band (-2 means insufficient snow)."""
    rating: int
    description: str = ""


@dataclass
class RawForecast:
    """
    A forecast entry as published by the upstream API.

    Attributes:
        region_id: Region the forecast applies to.
        altitude_danger: Ratings per altitude band, in upstream order.
        created: Issue timestamp string.
        valid_period: "24hrs" or "48hrs".
        important_information: Free text, may contain HTML.
    """
    region_id: int
    altitude_danger: List[AltitudeDanger] = field(default_factory=list)
    created: str = ""
    valid_period: str = "24hrs"
    important_information: str = ""

    @classmethod
    def from_payload(cls, payload: dict) -> "RawForecast":
        region_id = payload["regionId"]
        if not _is_int(region_id):
            raise ValueError(f"regionId must be an integer, got {region_id!r}")
        bands: List[AltitudeDanger] = []
        for band in payload.get("altitudeDanger") or []:
            if not isinstance(band, dict) or not _is_int(band.get("rating")):
                continue
            rating = band["rating"]
            bands.append(AltitudeDanger(rating=rating, description=band.get("description") or ""))
        return cls(
            region_id=region_id,
            altitude_danger=bands,
            created=payload.get("created") or "",
            valid_period=payload.get("validPeriod") or "24hrs",
            important_information=payload.get("importantInformation") or "",
        )


def _get_json(url: str, *, timeout_ms: int, headers: dict, session: Any = None) -> Any:
    http = session or requests
    resp = http.get(url, headers=headers, timeout=timeout_ms / 1000.0)
    resp.raise_for_status()
    return resp.json()


def fetch_region_info(
    region_id: int,
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    base_url: str = DEFAULT_BASE_URL,
    user_agent: str = DEFAULT_USER_AGENT,
    session: Any = None,
) -> Optional[RegionInfo]:
    """
    Retrieve title, centre and boundary for a region.

    Args:
        region_id: Region identifier.
        timeout_ms: Request timeout in milliseconds.
        base_url: API root.
        user_agent: User-Agent header value.
        session: Optional ``requests.Session`` (or compatible) to issue the call.

    Returns:
        RegionInfo, or None when the request or payload fails.
    """
    url = f"{base_url}/region/{region_id}"
    try:
        payload = _get_json(url, timeout_ms=timeout_ms, headers={"User-Agent": user_agent}, session=session)
    except requests.RequestException as exc:
        logger.warning("Failed to fetch region info %s: %s", region_id, format_request_exception(exc))
        return None
    except ValueError as exc:
        logger.error("Error fetching region info %s: invalid JSON (%s)", region_id, exc)
        return None

    if not isinstance(payload, dict):
        logger.error("Error fetching region info %s: unexpected payload type %s", region_id, type(payload).__name__)
        return None
    try:
        return RegionInfo.from_payload(payload)
    except (KeyError, TypeError, ValueError) as exc:
        logger.error("Error fetching region info %s: missing or invalid field %s", region_id, exc)
        return None


def fetch_forecasts(
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    base_url: str = DEFAULT_BASE_URL,
    user_agent: str = DEFAULT_USER_AGENT,
    session: Any = None,
) -> Optional[List[RawForecast]]:
    """
    Retrieve the current forecast list for all regions.

    Returns:
        The forecasts in upstream order (most recent first per region), an
        empty list when upstream has none, or None when the request fails.
    """
    url = f"{base_url}/forecast"
    headers = {"User-Agent": user_agent, "Accept": "application/json"}
    try:
        payload = _get_json(url, timeout_ms=timeout_ms, headers=headers, session=session)
    except requests.RequestException as exc:
        logger.warning("Failed to fetch forecasts: %s", format_request_exception(exc))
        return None
    except ValueError as exc:
        logger.error("Error fetching forecasts: invalid JSON (%s)", exc)
        return None

    entries = payload.get("forecasts") if isinstance(payload, dict) else None
    if not entries:
        logger.warning("No forecasts available")
        return []
    if not isinstance(entries, list):
        logger.warning("Forecast payload has non-list forecasts (%s); treating as empty", type(entries).__name__)
        return []

    forecasts: List[RawForecast] = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object forecast entry: %r", entry)
            continue
        try:
            forecasts.append(RawForecast.from_payload(entry))
        except (KeyError, TypeError, ValueError):
            logger.debug("Skipping forecast entry without a usable regionId: %r", entry.get("regionId"))
    return forecasts
