"""
Region Union Module
===================
Combines caller supplied polygons into disjoint regions (exterior ring plus
hole rings) by folding a pairwise boolean union over the input.

The boolean union itself sits behind the PolygonUnion interface, which works
on GeoJSON-style coordinates: a ring is a list of [x, y] pairs, a polygon is
a list of rings and a multipolygon is a list of polygons. The default
implementation is backed by shapely.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from shapely.geometry import GeometryCollection
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from covering_geometry import ring_area
from covering_models import Point, Polygon, Region, to_polygon

logger = logging.getLogger(__name__)

Ring = List[List[float]]
GeoPolygon = List[Ring]
GeoMultiPolygon = List[GeoPolygon]


class PolygonUnion(ABC):
    """Boolean union over GeoJSON-style polygon / multipolygon coordinates."""

    @abstractmethod
    def union(self, first: Any, second: Any) -> Optional[Any]:
        """
        Union two polygons or multipolygons.

        Returns polygon or multipolygon coordinates, or None when nothing is
        left of the union.
        """


def _is_polygon_coords(coords: Sequence) -> bool:
    """Polygon coordinates nest three levels deep, multipolygons four."""
    try:
        return not isinstance(coords[0][0][0], (list, tuple))
    except (IndexError, TypeError):
        return True


def _as_multipolygon(coords: Sequence) -> GeoMultiPolygon:
    if not coords:
        return []
    if _is_polygon_coords(coords):
        return [list(coords)]
    return list(coords)


class ShapelyPolygonUnion(PolygonUnion):
    """PolygonUnion backed by shapely's overlay operations."""

    def union(self, first: Any, second: Any) -> Optional[Any]:
        geometry = self._to_geometry(first).union(self._to_geometry(second))
        polygons = self._polygons_of(geometry)
        if not polygons:
            return None
        coords = [self._polygon_coords(poly) for poly in polygons]
        if len(coords) == 1:
            return coords[0]
        return coords

    def _to_geometry(self, coords: Any) -> BaseGeometry:
        polygons = []
        for rings in _as_multipolygon(coords):
            rings = [ring for ring in rings if len(ring) >= 4]
            if not rings:
                continue
            polygon = ShapelyPolygon(rings[0], rings[1:])
            if not polygon.is_valid:
                polygon = polygon.buffer(0)
            if not polygon.is_empty:
                polygons.append(polygon)

        if not polygons:
            return GeometryCollection()
        if len(polygons) == 1:
            return polygons[0]
        return unary_union(polygons)

    @staticmethod
    def _polygons_of(geometry: BaseGeometry) -> List[ShapelyPolygon]:
        if geometry.is_empty:
            return []
        if isinstance(geometry, ShapelyPolygon):
            return [geometry]
        polygons = []
        for part in getattr(geometry, 'geoms', []):
            polygons.extend(ShapelyPolygonUnion._polygons_of(part))
        return polygons

    @staticmethod
    def _polygon_coords(polygon: ShapelyPolygon) -> GeoPolygon:
        rings = [polygon.exterior] + list(polygon.interiors)
        return [[[x, y] for x, y in ring.coords] for ring in rings]


def _closed_ring(points: Sequence[Point]) -> Ring:
    """Ring coordinates with the first vertex repeated at the end."""
    ring = [[p.x, p.y] for p in points]
    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))
    return ring


def _ring_to_points(ring: Ring) -> Polygon:
    """Open ring of Points; rings with fewer than 3 distinct vertices become []."""
    if not ring:
        return []
    points = [Point(x, y) for x, y in ring]
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    return points if len(points) >= 3 else []


def _classify(geo_polygon: GeoPolygon) -> Optional[Region]:
    """Largest ring by unsigned area is the exterior; every other ring is a hole."""
    rings = [r for r in (_ring_to_points(ring) for ring in geo_polygon) if len(r) >= 3]
    if not rings:
        return None
    rings.sort(key=ring_area, reverse=True)
    return Region(exterior=rings[0], holes=rings[1:])


def union_polygons(polygons: Sequence[Sequence[Any]],
                   union_op: Optional[PolygonUnion] = None) -> List[Region]:
    """
    Union polygons into a list of disjoint regions.

    Args:
        polygons: Rings of Points, (x, y) pairs or {'x', 'y'} mappings
        union_op: Boolean union implementation (shapely by default)

    Returns:
        Regions, or [] when there is nothing to cover
    """
    if not polygons:
        return []
    if len(polygons) == 1:
        return [Region(exterior=to_polygon(polygons[0]), holes=[])]

    union_op = union_op or ShapelyPolygonUnion()
    acc: Any = [_closed_ring(to_polygon(polygons[0]))]
    for polygon in polygons[1:]:
        result = union_op.union(acc, [_closed_ring(to_polygon(polygon))])
        if not result:
            logger.warning("Polygon union produced an empty result; nothing to cover")
            return []
        acc = result

    shapes = _as_multipolygon(acc)
    if len(shapes) > 1 and all(len(shape) == 1 for shape in shapes):
        regions = [Region(exterior=_ring_to_points(shape[0]), holes=[]) for shape in shapes]
    else:
        regions = [region for region in (_classify(shape) for shape in shapes) if region]

    logger.debug(f"Union of {len(polygons)} polygons: {len(regions)} regions, "
                 f"{sum(len(r.holes) for r in regions)} holes")
    return regions


def region_area(region: Region) -> float:
    """Exterior area minus hole areas, never negative."""
    if region is None:
        return 0.0
    area = ring_area(region.exterior or [])
    for hole in region.holes or []:
        area -= ring_area(hole)
    return max(0.0, area)


def get_union_area(polygons: Sequence[Sequence[Any]],
                   union_op: Optional[PolygonUnion] = None) -> float:
    """Total area covered by the union of the given polygons."""
    regions = union_polygons(polygons, union_op)
    return sum(region_area(region) for region in regions)
