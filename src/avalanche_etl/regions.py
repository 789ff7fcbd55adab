"""
Catalog of avalanche.net.nz forecast regions.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

VALID_REGIONS: Tuple[int, ...] = (1, 2, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 15)


def is_valid_region(region_id: int) -> bool:
    return region_id in VALID_REGIONS


def resolve_regions(selected: Optional[Iterable[int]] = None) -> Tuple[int, ...]:
    """
    Return the regions to process, in catalog order.

    A selection narrows the catalog; ids outside it are ignored.
    """
    if selected is None:
        return VALID_REGIONS
    wanted = set(selected)
    return tuple(region for region in VALID_REGIONS if region in wanted)
