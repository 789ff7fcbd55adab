"""
Turn a region and its normalized forecast into styled GeoJSON features.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from ..api.avalanche import RegionInfo
from ..forecast.normalize import NormalizedForecast
from ..util import parse_date

_ICON_SET = "bb4df0a6-ca8d-4ba8-bb9e-3deb97ff015e:NaturalHazards"

AVALANCHE_ICONS: Mapping[int, str] = MappingProxyType(
    {
        0: f"{_ICON_SET}/NH.41B.Avalanche.DangerLevel0.Label.png",
        1: f"{_ICON_SET}/NH.42B.Avalanche.DangerLevel1.Label.png",
        2: f"{_ICON_SET}/NH.43B.Avalanche.DangerLevel2.Label.png",
        3: f"{_ICON_SET}/NH.44B.Avalanche.DangerLevel3.Label.png",
        4: f"{_ICON_SET}/NH.45B.Avalanche.DangerLevel4and5.Label.png",
        5: f"{_ICON_SET}/NH.45B.Avalanche.DangerLevel4and5.Label.png",
    }
)

AVALANCHE_COLORS: Mapping[int, str] = MappingProxyType(
    {
        5: "rgb(0, 0, 0)",
        4: "rgb(239, 43, 47)",
        3: "rgb(248, 151, 44)",
        2: "rgb(255, 244, 31)",
        1: "rgb(84, 187, 81)",
        0: "rgb(128, 128, 128)",
    }
)

COT_TYPE = "a-o-X-i-g-h"


def icon_for_level(level: int) -> str:
    return AVALANCHE_ICONS.get(level, AVALANCHE_ICONS[0])


def color_for_level(level: int) -> str:
    return AVALANCHE_COLORS.get(level, AVALANCHE_COLORS[0])


def _base_properties(region_id: int, region: RegionInfo, forecast: NormalizedForecast) -> Dict[str, Any]:
    callsign = f"Avalanche Risk: {region.title} - {forecast.level_text}"
    start_time = parse_date(forecast.start)
    stale_time = parse_date(forecast.expires) if forecast.expires else None

    remarks = [
        callsign,
        f"Location: {region.title}",
        f"Danger Level: {forecast.level_text}",
        f"Description: {forecast.description}",
        f"Issued: {forecast.start}",
    ]
    if forecast.expires:
        remarks.append(f"Valid Until: {forecast.expires}")

    return {
        "callsign": callsign,
        "type": COT_TYPE,
        "time": start_time,
        "start": start_time,
        "stale": stale_time,
        "remarks": "\n".join(remarks),
        "links": [
            {
                "uid": f"avalanche-{region_id}",
                "relation": "r-u",
                "mime": "text/html",
                "url": forecast.url,
                "remarks": "Avalanche Forecast Details",
            }
        ],
    }


def build_region_features(
    region_id: int,
    region: Optional[RegionInfo],
    forecast: Optional[NormalizedForecast],
    polygon: Optional[List[Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Build the features for one region: an optional polygon, then the centre point.

    Returns an empty list when the region info or forecast is missing. The
    point's coordinates keep the upstream ``[latitude, longitude]`` order.
    """
    if region is None or forecast is None:
        return []

    base = _base_properties(region_id, region, forecast)
    features: List[Dict[str, Any]] = []

    if polygon:
        color = color_for_level(forecast.level)
        features.append(
            {
                "id": f"avalanche-{region_id}",
                "type": "Feature",
                "properties": {
                    **base,
                    "stroke": color,
                    "stroke-opacity": 0.4,
                    "stroke-width": 2,
                    "stroke-style": "solid",
                    "fill-opacity": 0.4,
                    "fill": color,
                },
                "geometry": {"type": "Polygon", "coordinates": polygon},
            }
        )

    features.append(
        {
            "id": f"avalanche-{region_id}-center",
            "type": "Feature",
            "properties": {**base, "icon": icon_for_level(forecast.level)},
            "geometry": {"type": "Point", "coordinates": [region.latitude, region.longitude]},
        }
    )
    return features


def feature_collection(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}
