#!/usr/bin/env python3
"""
Tests for the covering geometry primitives.
"""

import math

import pytest

from covering_geometry import (
    bbox, circle_inside_region, hit_test_polygon_edge, point_in_or_on_region,
    point_in_polygon, point_in_region, point_to_segment_dist, rect_inside_region,
    ring_area, ring_is_simple, segment_enters_rect, segments_intersect, signed_area,
)
from covering_models import BBox, Point, Region


def ring(*coords):
    return [Point(x, y) for x, y in coords]


RECT_80x60 = ring((0, 0), (80, 0), (80, 60), (0, 60))

# U shape: two arms joined at the bottom, notch between x=20 and x=40 above y=20
U_SHAPE = ring((0, 0), (60, 0), (60, 60), (40, 60), (40, 20), (20, 20), (20, 60), (0, 60))


@pytest.fixture
def square_with_hole():
    return Region(
        exterior=ring((0, 0), (100, 0), (100, 100), (0, 100)),
        holes=[ring((30, 30), (70, 30), (70, 70), (30, 70))],
    )


def test_point_in_polygon():
    assert point_in_polygon(40, 30, RECT_80x60)
    assert not point_in_polygon(90, 30, RECT_80x60)
    assert not point_in_polygon(40, -1, RECT_80x60)


def test_point_in_polygon_needs_three_points():
    assert not point_in_polygon(0, 0, ring((0, 0), (10, 10)))
    assert not point_in_polygon(0, 0, [])


def test_point_in_region_excludes_holes(square_with_hole):
    assert point_in_region(10, 10, square_with_hole)
    assert not point_in_region(50, 50, square_with_hole)
    assert not point_in_region(150, 50, square_with_hole)


def test_point_in_or_on_region_accepts_boundary(square_with_hole):
    assert point_in_or_on_region(0, 0, square_with_hole)
    assert point_in_or_on_region(100, 50, square_with_hole)
    assert point_in_or_on_region(30, 50, square_with_hole)
    assert not point_in_or_on_region(50, 50, square_with_hole)


def test_rect_equal_to_polygon_is_inside():
    assert rect_inside_region(0, 0, 80, 60, RECT_80x60)
    assert rect_inside_region(60, 40, 20, 20, RECT_80x60)


def test_rect_partially_outside_is_rejected():
    assert not rect_inside_region(70, 50, 20, 20, RECT_80x60)
    assert not rect_inside_region(-10, 0, 20, 20, RECT_80x60)


def test_rect_with_degenerate_extent_is_rejected():
    assert not rect_inside_region(10, 10, 0, 10, RECT_80x60)
    assert not rect_inside_region(10, 10, 10, -5, RECT_80x60)


def test_rect_across_concave_notch_is_rejected():
    """All four corners sit inside the arms but the notch cuts through the middle."""
    for cx, cy in ((10, 30), (50, 30), (50, 40), (10, 40)):
        assert point_in_polygon(cx, cy, U_SHAPE)
    assert not rect_inside_region(10, 30, 40, 10, U_SHAPE)
    assert rect_inside_region(0, 20, 20, 40, U_SHAPE)


def test_rect_filling_hole_is_rejected(square_with_hole):
    assert not rect_inside_region(30, 30, 40, 40, square_with_hole)
    assert not rect_inside_region(40, 40, 10, 10, square_with_hole)


def test_rect_flush_against_hole_is_inside(square_with_hole):
    assert rect_inside_region(10, 30, 20, 20, square_with_hole)
    assert not rect_inside_region(20, 30, 20, 20, square_with_hole)


def test_circle_inside_region():
    assert circle_inside_region(40, 30, 30, RECT_80x60)
    assert not circle_inside_region(40, 30, 31, RECT_80x60)
    assert not circle_inside_region(100, 30, 5, RECT_80x60)
    assert not circle_inside_region(40, 30, 0, RECT_80x60)


def test_circle_around_hole_is_rejected(square_with_hole):
    assert circle_inside_region(15, 15, 10, square_with_hole)
    assert not circle_inside_region(25, 50, 10, square_with_hole)


def test_segments_intersect():
    assert segments_intersect(0, 0, 10, 10, 0, 10, 10, 0)
    assert not segments_intersect(0, 0, 10, 0, 0, 5, 10, 5)
    # Collinear touching counts
    assert segments_intersect(0, 0, 10, 0, 10, 0, 20, 0)
    assert not segments_intersect(0, 0, 1, 0, 2, 0, 3, 0)
    # Endpoint touching
    assert segments_intersect(0, 0, 10, 0, 5, 0, 5, 10)


def test_segment_enters_rect():
    assert segment_enters_rect(0, 0, 20, 20, 0, 0, 20, 20)
    assert segment_enters_rect(-5, 10, 25, 10, 0, 0, 20, 20)
    assert segment_enters_rect(5, 5, 6, 6, 0, 0, 20, 20)
    assert not segment_enters_rect(0, 0, 20, 0, 0, 0, 20, 20)
    assert not segment_enters_rect(-10, 0, 30, 0, 0, 0, 20, 20)
    assert not segment_enters_rect(30, 0, 30, 20, 0, 0, 20, 20)
    assert not segment_enters_rect(20, 20, 30, 30, 0, 0, 20, 20)


def test_bbox_uses_exterior_only(square_with_hole):
    assert bbox(RECT_80x60) == BBox(0, 0, 80, 60)
    assert bbox(square_with_hole) == BBox(0, 0, 100, 100)
    assert bbox([]) == BBox(0, 0, 0, 0)
    assert bbox(Region(exterior=[])).is_degenerate


def test_point_to_segment_dist():
    assert point_to_segment_dist(0, 5, -10, 0, 10, 0) == pytest.approx(5)
    assert point_to_segment_dist(20, 0, -10, 0, 10, 0) == pytest.approx(10)
    assert point_to_segment_dist(3, 4, 0, 0, 0, 0) == pytest.approx(5)


def test_hit_test_polygon_edge():
    assert hit_test_polygon_edge(40, 2, RECT_80x60, 3)
    assert not hit_test_polygon_edge(40, 30, RECT_80x60, 3)
    assert not hit_test_polygon_edge(0, 0, ring((0, 0)), 3)


def test_ring_area_is_orientation_independent():
    assert ring_area(RECT_80x60) == pytest.approx(4800)
    assert ring_area(list(reversed(RECT_80x60))) == pytest.approx(4800)
    assert signed_area(RECT_80x60) == -signed_area(list(reversed(RECT_80x60)))


def test_ring_is_simple():
    assert ring_is_simple(RECT_80x60)
    assert ring_is_simple(U_SHAPE)
    assert not ring_is_simple(ring((0, 0), (10, 10), (10, 0), (0, 10)))
    assert not ring_is_simple(ring((0, 0), (1, 1)))


def test_circle_tangent_to_corner_cells():
    """A disk inscribed in a grid cell touches the cell edges without crossing them."""
    region = ring((0, 0), (8, 0), (8, 8), (0, 8))
    assert circle_inside_region(4, 4, 4, region)
    assert not circle_inside_region(4, 4, 4 + 1e-9, region)
    assert math.isclose(point_to_segment_dist(4, 4, 0, 0, 8, 0), 4)
