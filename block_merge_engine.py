"""
Block Merge Engine
==================
Covers regions with axis-aligned squares, rectangles or circles.

Every strategy is a generator that yields a CoveringStep after each merge
(or circle pass), so a caller can animate the run, drain it in batches, or
simply stop pulling to cancel. A run holds no state outside its own
generator frame.

Squares: the regions are discretized into unit cells, then k x k blocks of
equal-size squares are repeatedly collapsed into one square of side size*k,
trying the largest k of the size ladder first.

Rectangles: the squares run completes first, then adjacent rectangles that
share a full edge are merged pairwise while the result stays inside a region.

Circles: disks are placed on a grid for each diameter of the ladder, largest
first, without overlapping any disk placed before.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple, Union

from covering_geometry import bbox, circle_inside_region, rect_inside_region
from covering_models import (
    Circle, CoveringOptions, CoveringShape, CoveringStep, Rectangle, Region, Square,
)
from grid_discretizer import fill_grid
from region_union import PolygonUnion, union_polygons

logger = logging.getLogger(__name__)

SquareKey = Tuple[float, float, float]


@dataclass(frozen=True)
class MergeResult:
    """A k x k block of size-`size` squares anchored at (x, y)."""
    x: float
    y: float
    size: float
    k: int


@dataclass(frozen=True)
class AdjacentMergePair:
    """Two rectangles at indices i < j that merge into `merged`."""
    i: int
    j: int
    merged: Rectangle


# ============================================================================
# SIZE LADDER
# ============================================================================

def k_halving_range(max_k: float, min_k: float) -> Iterator[int]:
    """
    Yield max_k, max_k // 2, max_k // 4, ... while the value is >= min_k.

    The floor never drops below 2 and repeated values are skipped.
    """
    k = math.floor(max_k)
    minimum = max(2, math.floor(min_k))
    seen = set()
    while k >= minimum:
        if k not in seen:
            seen.add(k)
            yield k
        following = k // 2
        if following >= k:
            break
        k = following


# Diameters follow the same halving rule as block multipliers.
diameter_halving_range = k_halving_range


# ============================================================================
# SQUARES
# ============================================================================

def squares_to_rects(squares: Sequence[Square]) -> List[Rectangle]:
    """Convert squares to fresh output rectangles."""
    return [s.to_rectangle() for s in squares]


def has_block(square_set: Set[SquareKey], x: float, y: float, size: float, k: int) -> bool:
    """Check that all k x k squares of `size` anchored at (x, y) are present."""
    for di in range(k):
        for dj in range(k):
            if (x + di * size, y + dj * size, size) not in square_set:
                return False
    return True


def find_merge(square_set: Set[SquareKey], squares: Sequence[Square],
               max_k: int, min_k: int,
               exclude_keys: Optional[Set[SquareKey]] = None) -> Optional[MergeResult]:
    """
    Find one block to merge.

    Largest k wins; within a k the smallest square size; within a size the
    earliest square in list order.
    """
    by_size: Dict[float, List[Square]] = {}
    for s in squares:
        if exclude_keys and s.key in exclude_keys:
            continue
        by_size.setdefault(s.size, []).append(s)

    sizes = sorted(by_size)
    for k in k_halving_range(max_k, min_k):
        for size in sizes:
            for s in by_size[size]:
                if has_block(square_set, s.x, s.y, size, k):
                    return MergeResult(s.x, s.y, size, k)
    return None


def run_covering_squares(regions: Sequence[Region], min_size: float,
                         cap_k: int, cap_min_k: int) -> Iterator[CoveringStep]:
    """Grid fill followed by k x k block merges, one step per merge."""
    squares: List[Square] = []
    for region in regions:
        squares.extend(fill_grid(region, min_size))

    iteration = 0
    initial_count = len(squares)
    yield CoveringStep(rectangles=squares_to_rects(squares), remaining=[], iteration=iteration)

    square_set: Set[SquareKey] = {s.key for s in squares}
    merged_keys: Set[SquareKey] = set()

    while True:
        merge = None

        # The square created by the previous merge is the likeliest next anchor.
        if squares:
            last = squares[-1]
            for k in k_halving_range(cap_k, cap_min_k):
                if has_block(square_set, last.x, last.y, last.size, k):
                    merge = MergeResult(last.x, last.y, last.size, k)
                    break

        if merge is None:
            exclude_keys = set(merged_keys)
            if squares:
                exclude_keys.add(squares[-1].key)
            merge = find_merge(square_set, squares, cap_k, cap_min_k, exclude_keys)

        if merge is None:
            break

        x, y, size, k = merge.x, merge.y, merge.size, merge.k
        for di in range(k):
            for dj in range(k):
                key = (x + di * size, y + dj * size, size)
                square_set.discard(key)
                merged_keys.add(key)

        merged = Square(x, y, size * k)
        square_set.add(merged.key)
        squares = [s for s in squares if s.key in square_set]
        squares.append(merged)

        iteration += 1
        logger.debug(f"Merge {iteration}: {k}x{k} block of size {size} at ({x}, {y})")
        yield CoveringStep(rectangles=squares_to_rects(squares), remaining=[], iteration=iteration)

    logger.info(f"Squares covering: {initial_count} cells -> {len(squares)} squares "
                f"in {iteration} merges")
    yield CoveringStep(rectangles=squares_to_rects(squares), remaining=[], iteration=iteration)


# ============================================================================
# RECTANGLES
# ============================================================================

def find_adjacent_mergeable_pair(rects: Sequence[Rectangle],
                                 regions: Sequence[Region]) -> Optional[AdjacentMergePair]:
    """
    First pair (i < j) sharing a full edge whose union is inside a region.

    Side by side requires the same y and height; stacked requires the same
    x and width. First match wins.
    """
    n = len(rects)
    for i in range(n):
        a = rects[i]
        for j in range(i + 1, n):
            b = rects[j]
            merged = None

            if a.y == b.y and a.h == b.h:
                if a.x + a.w == b.x:
                    merged = Rectangle(a.x, a.y, a.w + b.w, a.h)
                elif b.x + b.w == a.x:
                    merged = Rectangle(b.x, b.y, a.w + b.w, a.h)

            if merged is None and a.x == b.x and a.w == b.w:
                if a.y + a.h == b.y:
                    merged = Rectangle(a.x, a.y, a.w, a.h + b.h)
                elif b.y + b.h == a.y:
                    merged = Rectangle(b.x, b.y, a.w, a.h + b.h)

            if merged is not None and any(
                    rect_inside_region(merged.x, merged.y, merged.w, merged.h, region)
                    for region in regions):
                return AdjacentMergePair(i, j, merged)
    return None


def replace_pair_with_merged(rects: Sequence[Rectangle], i: int, j: int,
                             merged: Rectangle) -> List[Rectangle]:
    """Drop indices i and j and append the merged rectangle."""
    out = [r for idx, r in enumerate(rects) if idx != i and idx != j]
    out.append(merged)
    return out


def run_covering_rectangles(regions: Sequence[Region], min_size: float,
                            max_k: int, min_k: int) -> Iterator[CoveringStep]:
    """Squares covering, then pairwise merges of edge-sharing rectangles."""
    cap_k = max(2, min(1024, math.floor(max_k)))
    cap_min_k = max(2, min(cap_k, math.floor(min_k)))

    last_step = CoveringStep(rectangles=[], remaining=[], iteration=0)
    for step in run_covering_squares(regions, min_size, cap_k, cap_min_k):
        yield step
        last_step = step

    rects = list(last_step.rectangles)
    iteration = last_step.iteration
    square_count = len(rects)

    while True:
        pair = find_adjacent_mergeable_pair(rects, regions)
        if pair is None:
            break
        rects = replace_pair_with_merged(rects, pair.i, pair.j, pair.merged)
        iteration += 1
        logger.debug(f"Merge {iteration}: rectangles {pair.i} and {pair.j} -> {pair.merged}")
        yield CoveringStep(rectangles=list(rects), remaining=[], iteration=iteration)

    logger.info(f"Rectangles covering: {square_count} squares -> {len(rects)} rectangles")
    yield CoveringStep(rectangles=list(rects), remaining=[], iteration=iteration)


# ============================================================================
# CIRCLES
# ============================================================================

def circle_overlaps_existing(cx: float, cy: float, r: float, circles: Sequence[Circle]) -> bool:
    """Strict overlap: center distance below the sum of radii."""
    for c in circles:
        if math.hypot(cx - c.cx, cy - c.cy) < r + c.r:
            return True
    return False


def run_covering_circles(regions: Sequence[Region], min_size: float,
                         max_k: int, min_k: int) -> Iterator[CoveringStep]:
    """
    Place disks diameter by diameter, largest first.

    Disks are never removed; each smaller pass only fills gaps left by the
    larger ones. The grid size argument is unused by this strategy.
    """
    circles: List[Circle] = []
    cap_k = max(2, min(1024, math.floor(max_k)))
    cap_min_k = max(2, min(cap_k, math.floor(min_k)))
    iteration = 0

    yield CoveringStep(rectangles=[], circles=[], remaining=[], iteration=iteration)

    for diameter in diameter_halving_range(cap_k, cap_min_k):
        r = diameter / 2.0
        added = 0
        for region in regions:
            bb = bbox(region)
            i = 0
            while True:
                cx = bb.x + r + i * diameter
                if cx - r > bb.x + bb.w:
                    break
                j = 0
                while True:
                    cy = bb.y + r + j * diameter
                    if cy - r > bb.y + bb.h:
                        break
                    if (circle_inside_region(cx, cy, r, region) and
                            not circle_overlaps_existing(cx, cy, r, circles)):
                        circles.append(Circle(cx, cy, r))
                        added += 1
                    j += 1
                i += 1

        if added > 0:
            iteration += 1
            logger.debug(f"Circle pass {iteration}: {added} disks of diameter {diameter}")
            yield CoveringStep(rectangles=[], circles=list(circles), remaining=[], iteration=iteration)

    logger.info(f"Circles covering: {len(circles)} disks in {iteration} passes")
    yield CoveringStep(rectangles=[], circles=list(circles), remaining=[], iteration=iteration)


# ============================================================================
# ENTRY POINT
# ============================================================================

def run_covering(polygons: Sequence[Sequence[Any]],
                 options: Optional[Union[CoveringOptions, Mapping]] = None,
                 union_op: Optional[PolygonUnion] = None) -> Iterator[CoveringStep]:
    """
    Cover the union of `polygons`, yielding one CoveringStep per merge.

    Args:
        polygons: Rings of Points, (x, y) pairs or {'x', 'y'} mappings
        options: CoveringOptions or a mapping with min_size, max_k, min_k
            and shape; raw values are clamped, never rejected
        union_op: Boolean union implementation (shapely by default)

    Yields:
        CoveringStep snapshots; an empty input yields a single empty step
    """
    opts = CoveringOptions.coerce(options)
    regions = union_polygons(polygons or [], union_op)
    if not regions:
        logger.info("No coverable regions")
        yield CoveringStep(rectangles=[], remaining=[], iteration=0)
        return

    logger.info(f"Covering {len(regions)} regions with {opts.shape.value}: "
                f"min_size={opts.min_size}, k={opts.max_k}..{opts.min_k}")

    if opts.shape is CoveringShape.RECTANGLES:
        yield from run_covering_rectangles(regions, opts.min_size, opts.max_k, opts.min_k)
    elif opts.shape is CoveringShape.CIRCLES:
        yield from run_covering_circles(regions, opts.min_size, opts.max_k, opts.min_k)
    else:
        yield from run_covering_squares(regions, opts.min_size, opts.max_k, opts.min_k)


def run_to_completion(polygons: Sequence[Sequence[Any]],
                      options: Optional[Union[CoveringOptions, Mapping]] = None,
                      union_op: Optional[PolygonUnion] = None) -> CoveringStep:
    """Drain a covering run and return its final step."""
    final = None
    for step in run_covering(polygons, options, union_op):
        final = step
    return final
