"""
Pull a polygon out of the loosely-typed region geometry document.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Union

logger = logging.getLogger(__name__)


def extract_polygon(raw: Union[str, dict, None], region_id: Optional[int] = None) -> Optional[List[Any]]:
    """
    Return the ``layers[0].geometry`` polygon rings, or None.

    ``raw`` is usually JSON text; an already-decoded dict is accepted too.
    Malformed documents, missing layers, non-polygon geometry and empty
    coordinates all yield None so the region falls back to a point.
    """
    if raw is None or raw == "":
        logger.debug("Region %s has no geometry", region_id)
        return None

    if isinstance(raw, str):
        try:
            document = json.loads(raw)
        except ValueError as exc:
            logger.warning("Failed to parse geometry for region %s: %s", region_id, exc)
            return None
    else:
        document = raw

    if not isinstance(document, dict):
        logger.warning("Failed to parse geometry for region %s: document is %s", region_id, type(document).__name__)
        return None

    layers = document.get("layers")
    if not isinstance(layers, list) or not layers or not isinstance(layers[0], dict):
        logger.warning("Geometry for region %s has no layers", region_id)
        return None

    geometry = layers[0].get("geometry")
    if not isinstance(geometry, dict):
        logger.warning("Geometry for region %s has no layer geometry", region_id)
        return None

    if geometry.get("type") != "Polygon":
        logger.warning("Geometry for region %s is %r, not Polygon", region_id, geometry.get("type"))
        return None

    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, list) or not coordinates:
        logger.warning("Polygon for region %s has no coordinates", region_id)
        return None
    return coordinates
