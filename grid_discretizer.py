"""
Grid Discretizer
================
Lays an axis-aligned grid of unit cells over a region's bounding box and
keeps the cells that lie fully inside the region.
"""

import logging
import math
from typing import List

from covering_geometry import bbox, rect_inside_region
from covering_models import RegionLike, Square

logger = logging.getLogger(__name__)


def fill_grid(region: RegionLike, min_size: float) -> List[Square]:
    """
    Fill a region with min_size x min_size cells.

    Cells are anchored at the bounding box origin and emitted column by
    column (outer loop over x, inner loop over y). The merge engine breaks
    ties by this order, so it must stay stable.

    Args:
        region: Region or bare ring
        min_size: Cell side length; non-positive values give no cells

    Returns:
        Cells fully inside the region
    """
    if not (min_size > 0) or not math.isfinite(min_size):
        return []

    bb = bbox(region)
    if bb.is_degenerate or not (math.isfinite(bb.w) and math.isfinite(bb.h)):
        return []

    squares = []
    i = 0
    while i * min_size < bb.w:
        j = 0
        while j * min_size < bb.h:
            x = bb.x + i * min_size
            y = bb.y + j * min_size
            if rect_inside_region(x, y, min_size, min_size, region):
                squares.append(Square(x, y, min_size))
            j += 1
        i += 1

    logger.debug(f"Grid fill: {len(squares)} cells of size {min_size} "
                 f"over {bb.w:.1f} x {bb.h:.1f} bounding box")
    return squares
