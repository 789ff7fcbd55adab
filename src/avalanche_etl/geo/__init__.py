"""
Geometry extraction and GeoJSON feature assembly.
"""

from .features import (
    AVALANCHE_COLORS,
    AVALANCHE_ICONS,
    build_region_features,
    color_for_level,
    feature_collection,
    icon_for_level,
)
from .geometry import extract_polygon

__all__ = [
    "AVALANCHE_COLORS",
    "AVALANCHE_ICONS",
    "build_region_features",
    "color_for_level",
    "feature_collection",
    "icon_for_level",
    "extract_polygon",
]
