"""
Covering Geometry Module
========================
Containment, intersection and measurement primitives used by the covering
engine. Rings are sequences of Points; a region is either a bare ring or a
Region with hole rings.
"""

import math
from typing import List, Sequence, Tuple

from covering_models import BBox, Point, Region, RegionLike


def _rings(region: RegionLike) -> Tuple[Sequence[Point], List[Sequence[Point]]]:
    """Split a region-like value into (exterior, holes)."""
    if isinstance(region, Region):
        return region.exterior or [], list(region.holes or [])
    return region or [], []


def _edges(ring: Sequence[Point]):
    """Yield consecutive (a, b) point pairs including the closing edge."""
    n = len(ring)
    for i in range(n):
        yield ring[i], ring[(i + 1) % n]


# ============================================================================
# POINT CONTAINMENT
# ============================================================================

def point_in_polygon(px: float, py: float, ring: Sequence[Point]) -> bool:
    """
    Even-odd ray casting test.

    Points exactly on an edge may land on either side; callers that need a
    closed test combine this with point_on_ring.
    """
    if not ring or len(ring) < 3:
        return False

    inside = False
    n = len(ring)
    j = n - 1
    for i in range(n):
        xi, yi = ring[i].x, ring[i].y
        xj, yj = ring[j].x, ring[j].y
        if (yi > py) != (yj > py) and px < (xj - xi) * (py - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def point_in_region(px: float, py: float, region: RegionLike) -> bool:
    """Inside the exterior ring and inside none of the holes."""
    exterior, holes = _rings(region)
    if not point_in_polygon(px, py, exterior):
        return False
    for hole in holes:
        if point_in_polygon(px, py, hole):
            return False
    return True


def point_on_ring(px: float, py: float, ring: Sequence[Point]) -> bool:
    """Exact test for a point lying on one of the ring's edges."""
    for a, b in _edges(ring):
        if orient(a.x, a.y, b.x, b.y, px, py) == 0 and on_segment(a.x, a.y, b.x, b.y, px, py):
            return True
    return False


def point_in_or_on_region(px: float, py: float, region: RegionLike) -> bool:
    """Closed containment: boundary points of any ring count as inside."""
    exterior, holes = _rings(region)
    if len(exterior) < 3:
        return False
    for ring in [exterior] + holes:
        if point_on_ring(px, py, ring):
            return True
    return point_in_region(px, py, region)


# ============================================================================
# SEGMENTS
# ============================================================================

def orient(ox: float, oy: float, px: float, py: float, qx: float, qy: float) -> int:
    """Sign of the turn o -> p -> q: -1, 0 (collinear) or 1."""
    v = (py - oy) * (qx - px) - (px - ox) * (qy - py)
    if v < 0:
        return -1
    if v > 0:
        return 1
    return 0


def on_segment(ax: float, ay: float, bx: float, by: float, qx: float, qy: float) -> bool:
    """Whether q lies in the bounding box of segment a-b (q assumed collinear)."""
    return (min(ax, bx) <= qx <= max(ax, bx) and
            min(ay, by) <= qy <= max(ay, by))


def segments_intersect(ax: float, ay: float, bx: float, by: float,
                       cx: float, cy: float, dx: float, dy: float) -> bool:
    """Segment a-b meets segment c-d, including collinear touching."""
    o1 = orient(ax, ay, bx, by, cx, cy)
    o2 = orient(ax, ay, bx, by, dx, dy)
    o3 = orient(cx, cy, dx, dy, ax, ay)
    o4 = orient(cx, cy, dx, dy, bx, by)

    if o1 != o2 and o3 != o4:
        return True
    if o1 == 0 and on_segment(ax, ay, bx, by, cx, cy):
        return True
    if o2 == 0 and on_segment(ax, ay, bx, by, dx, dy):
        return True
    if o3 == 0 and on_segment(cx, cy, dx, dy, ax, ay):
        return True
    if o4 == 0 and on_segment(cx, cy, dx, dy, bx, by):
        return True
    return False


def segment_enters_rect(ax: float, ay: float, bx: float, by: float,
                        x: float, y: float, w: float, h: float) -> bool:
    """
    Whether segment a-b passes through the open interior of a rectangle.

    The segment is clipped to the closed rectangle (Liang-Barsky); it enters
    the interior iff the midpoint of the clipped part is strictly inside.
    Segments that only touch a side or run along it do not enter.
    """
    dx = bx - ax
    dy = by - ay
    t0, t1 = 0.0, 1.0

    for p, q in ((-dx, ax - x), (dx, x + w - ax), (-dy, ay - y), (dy, y + h - ay)):
        if p == 0:
            if q < 0:
                return False
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return False
            t0 = max(t0, t)
        else:
            if t < t0:
                return False
            t1 = min(t1, t)

    mid = (t0 + t1) / 2.0
    mx = ax + mid * dx
    my = ay + mid * dy
    return x < mx < x + w and y < my < y + h


def ring_is_simple(ring: Sequence[Point]) -> bool:
    """True when no two non-adjacent edges of the ring intersect."""
    edges = list(_edges(ring))
    n = len(edges)
    if n < 4:
        return n == 3
    for i in range(n):
        a, b = edges[i]
        for j in range(i + 1, n):
            if j == i + 1 or (i == 0 and j == n - 1):
                continue
            c, d = edges[j]
            if segments_intersect(a.x, a.y, b.x, b.y, c.x, c.y, d.x, d.y):
                return False
    return True


# ============================================================================
# SHAPE CONTAINMENT
# ============================================================================

def rect_inside_region(x: float, y: float, w: float, h: float, region: RegionLike) -> bool:
    """
    Check if a rectangle is fully inside the region.

    All four corners must be inside (or on the boundary of) the region, no
    exterior or hole edge may cross into the rectangle, and the center must
    be inside. Corner containment alone misses concave indentations that cut
    through the rectangle between corners.
    """
    if not (w > 0 and h > 0):
        return False
    exterior, holes = _rings(region)
    if len(exterior) < 3:
        return False

    corners = ((x, y), (x + w, y), (x + w, y + h), (x, y + h))
    for cx, cy in corners:
        if not point_in_or_on_region(cx, cy, region):
            return False

    for ring in [exterior] + holes:
        for a, b in _edges(ring):
            if segment_enters_rect(a.x, a.y, b.x, b.y, x, y, w, h):
                return False

    return point_in_region(x + w / 2.0, y + h / 2.0, region)


def circle_inside_region(cx: float, cy: float, r: float, region: RegionLike) -> bool:
    """Disk is inside when its center is inside and no ring edge comes closer than r."""
    if not r > 0:
        return False
    exterior, holes = _rings(region)
    if len(exterior) < 3:
        return False
    if not point_in_region(cx, cy, region):
        return False

    for ring in [exterior] + holes:
        for a, b in _edges(ring):
            if point_to_segment_dist(cx, cy, a.x, a.y, b.x, b.y) < r:
                return False
    return True


# ============================================================================
# MEASUREMENT
# ============================================================================

def bbox(region: RegionLike) -> BBox:
    """Bounding box of the exterior ring; holes never expand it."""
    exterior, _ = _rings(region)
    if not exterior:
        return BBox(0, 0, 0, 0)

    xs = [p.x for p in exterior]
    ys = [p.y for p in exterior]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    return BBox(min_x, min_y, max_x - min_x, max_y - min_y)


def signed_area(ring: Sequence[Point]) -> float:
    """Shoelace area; sign follows ring orientation."""
    n = len(ring)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y - ring[j].x * ring[i].y
    return area / 2.0


def ring_area(ring: Sequence[Point]) -> float:
    """Unsigned ring area."""
    return abs(signed_area(ring))


def point_to_segment_dist(px: float, py: float, ax: float, ay: float,
                          bx: float, by: float) -> float:
    """Distance from p to the closest point of segment a-b."""
    abx, aby = bx - ax, by - ay
    apx, apy = px - ax, py - ay
    ab2 = abx * abx + aby * aby
    t = 0.0 if ab2 <= 0 else (apx * abx + apy * aby) / ab2
    t = max(0.0, min(1.0, t))
    qx = ax + t * abx
    qy = ay + t * aby
    return math.hypot(px - qx, py - qy)


def hit_test_polygon_edge(px: float, py: float, ring: Sequence[Point], threshold: float) -> bool:
    """Whether p is within threshold of any edge of the ring."""
    if not ring or len(ring) < 2:
        return False
    for a, b in _edges(ring):
        if point_to_segment_dist(px, py, a.x, a.y, b.x, b.y) <= threshold:
            return True
    return False
