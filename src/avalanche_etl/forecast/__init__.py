"""
Forecast normalisation.
"""

from .normalize import NO_RATING_DESCRIPTION, NormalizedForecast, danger_level_text, normalize_forecast

__all__ = ["NO_RATING_DESCRIPTION", "NormalizedForecast", "danger_level_text", "normalize_forecast"]
