#!/usr/bin/env python3
"""
Tests for covering models and option clamping.
"""

import math

from covering_models import (
    Circle, CoveringOptions, CoveringShape, CoveringStep, Point, Rectangle, Region, Square,
    to_polygon,
)


def test_point_coercion():
    assert Point.coerce((1, 2)) == Point(1, 2)
    assert Point.coerce({'x': 3, 'y': 4}) == Point(3, 4)
    p = Point(5, 6)
    assert Point.coerce(p) is p
    assert to_polygon([(0, 0), {'x': 1, 'y': 0}, Point(1, 1)]) == [Point(0, 0), Point(1, 0), Point(1, 1)]


def test_square_key_and_rectangle():
    s = Square(10, 20, 5)
    assert s.key == (10, 20, 5)
    assert s.to_rectangle() == Rectangle(10, 20, 5, 5)


def test_rectangle_overlap_ignores_shared_edges():
    a = Rectangle(0, 0, 10, 10)
    assert not a.overlaps_with(Rectangle(10, 0, 10, 10))
    assert not a.overlaps_with(Rectangle(0, 10, 10, 10))
    assert a.overlaps_with(Rectangle(5, 5, 10, 10))


def test_rectangle_from_dict_aliases():
    assert Rectangle.from_dict({'x': 1, 'y': 2, 'width': 3, 'height': 4}) == Rectangle(1, 2, 3, 4)
    assert Rectangle.from_dict({'x': 1, 'y': 2, 'w': 3, 'h': 4}).to_dict() == {
        'x': 1, 'y': 2, 'w': 3, 'h': 4}


def test_step_shapes_and_area():
    step = CoveringStep(rectangles=[Rectangle(0, 0, 10, 10), Rectangle(10, 0, 5, 10)])
    assert step.shape_count == 2
    assert step.covered_area == 150
    assert step.shapes == step.rectangles

    disks = CoveringStep(circles=[Circle(0, 0, 1)], iteration=3)
    assert disks.shapes == [Circle(0, 0, 1)]
    assert math.isclose(disks.covered_area, math.pi)
    assert disks.to_dict()['iteration'] == 3


def test_region_rings():
    hole = [Point(2, 2), Point(3, 2), Point(3, 3)]
    region = Region(exterior=[Point(0, 0), Point(10, 0), Point(10, 10)], holes=[hole])
    assert region.rings[1] == hole
    assert region.to_dict()['holes'][0][0] == {'x': 2, 'y': 2}


def test_default_options():
    opts = CoveringOptions.coerce(None)
    assert (opts.min_size, opts.max_k, opts.min_k) == (8, 8, 2)
    assert opts.shape is CoveringShape.SQUARES


def test_options_fall_back_on_garbage():
    opts = CoveringOptions.from_values('abc', -3, 7000)
    # max_k -3 clamps to 2, min_k is then capped at max_k
    assert (opts.min_size, opts.max_k, opts.min_k) == (8, 2, 2)

    opts = CoveringOptions.from_values(float('nan'), None, True)
    assert (opts.min_size, opts.max_k, opts.min_k) == (8, 8, 2)


def test_options_floor_and_clamp():
    assert CoveringOptions.from_values(min_size=0.5).min_size == 8
    assert CoveringOptions.from_values(min_size=600).min_size == 500
    assert CoveringOptions.from_values(min_size='12.9').min_size == 12
    assert CoveringOptions.from_values(min_size=-4).min_size == 1
    assert CoveringOptions.from_values(max_k=5000).max_k == 1024
    assert CoveringOptions.from_values(max_k=16, min_k=32).min_k == 16


def test_options_beyond_float_range_clamp_to_bounds():
    opts = CoveringOptions.from_values(min_size=10**400, max_k=10**400, min_k=10**400)
    assert (opts.min_size, opts.max_k, opts.min_k) == (500, 1024, 1024)

    opts = CoveringOptions.from_values(min_size=-10**400, max_k=-10**400)
    assert (opts.min_size, opts.max_k, opts.min_k) == (1, 2, 2)


def test_shape_parsing():
    assert CoveringOptions.from_values(shape='CIRCLES').shape is CoveringShape.CIRCLES
    assert CoveringOptions.from_values(shape=' rectangles ').shape is CoveringShape.RECTANGLES
    assert CoveringOptions.from_values(shape='hexagons').shape is CoveringShape.SQUARES
    assert CoveringShape.parse(CoveringShape.CIRCLES) is CoveringShape.CIRCLES


def test_coerce_accepts_mappings():
    opts = CoveringOptions.coerce({'minSize': 20, 'maxK': 4, 'minK': 2, 'shape': 'rectangles'})
    assert opts == CoveringOptions(20, 4, 2, CoveringShape.RECTANGLES)

    opts = CoveringOptions.coerce({'min_size': 16})
    assert (opts.min_size, opts.max_k) == (16, 8)


def test_coerce_reclamps_options_object():
    raw = CoveringOptions(min_size=9999, max_k=1, min_k=1)
    opts = CoveringOptions.coerce(raw)
    assert (opts.min_size, opts.max_k, opts.min_k) == (500, 2, 2)
