"""
Clients for the avalanche.net.nz public API.
"""

from .avalanche import (
    AltitudeDanger,
    RawForecast,
    RegionInfo,
    fetch_forecasts,
    fetch_region_info,
)

__all__ = [
    "AltitudeDanger",
    "RawForecast",
    "RegionInfo",
    "fetch_forecasts",
    "fetch_region_info",
]
