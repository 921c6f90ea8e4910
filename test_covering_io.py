#!/usr/bin/env python3
"""
Tests for JSON and SVG import/export.
"""

import json
import logging

import pytest

from covering_io import (
    SessionDocument, export_polygons_json, export_rectangles_json, export_rectangles_svg,
    export_session_json, import_from_json,
)
from covering_models import Point, Rectangle
from utils import ValidationError


TRIANGLE = [Point(0, 0), Point(10, 0), Point(0, 10)]


def test_export_polygons_is_tagged():
    doc = json.loads(export_polygons_json([TRIANGLE]))
    assert doc['type'] == 'polygons'
    assert doc['version'] == 1
    assert doc['data'] == [[{'x': 0, 'y': 0}, {'x': 10, 'y': 0}, {'x': 0, 'y': 10}]]


def test_export_includes_current_polygon_once_closed():
    partial = [Point(1, 1), Point(2, 2)]
    assert len(json.loads(export_polygons_json([TRIANGLE], partial))['data']) == 1
    assert len(json.loads(export_polygons_json([TRIANGLE], TRIANGLE))['data']) == 2


def test_polygons_survive_export_and_import():
    result = import_from_json(export_polygons_json([TRIANGLE]))
    assert result.polygons == [TRIANGLE]
    assert result.rectangles is None


def test_rectangles_import():
    text = export_rectangles_json([Rectangle(0, 0, 10, 5)])
    result = import_from_json(text)
    assert result.rectangles == [Rectangle(0, 0, 10, 5)]
    assert result.polygons is None


def test_session_document():
    session = SessionDocument(polygons=[TRIANGLE], rectangles=[Rectangle(0, 0, 2, 2)])
    result = import_from_json(export_session_json(session))
    assert result.polygons == [TRIANGLE]
    assert result.rectangles == [Rectangle(0, 0, 2, 2)]


def test_legacy_formats():
    legacy_list = json.dumps([[{'x': 0, 'y': 0}, {'x': 4, 'y': 0}, {'x': 4, 'y': 4}]])
    assert len(import_from_json(legacy_list).polygons) == 1

    legacy_rects = json.dumps({'rectangles': [{'x': 0, 'y': 0, 'width': 3, 'height': 4}]})
    assert import_from_json(legacy_rects).rectangles == [Rectangle(0, 0, 3, 4)]

    legacy_polys = json.dumps({'polygons': []})
    result = import_from_json(legacy_polys)
    assert result.polygons == []
    assert result.rectangles == []


def test_short_polygons_are_dropped(caplog):
    text = json.dumps({'type': 'polygons', 'data': [[{'x': 0, 'y': 0}, {'x': 1, 'y': 1}]]})
    with caplog.at_level(logging.WARNING):
        assert import_from_json(text).polygons == []
    assert "Skipping polygon 0" in caplog.text


@pytest.mark.parametrize('text', [
    '',
    '   ',
    '{not json',
    '{"type": "triangles", "data": []}',
    '{"type": "polygons", "data": "abc"}',
    '{"type": "polygons", "data": [[{"x": "a", "y": 0}]]}',
    '{"type": "rectangles", "data": [{"x": 0, "y": 0, "w": "wide", "h": 1}]}',
    '{"type": "rectangles", "data": [3]}',
    '42',
    '{"shapes": []}',
])
def test_invalid_documents_raise(text):
    with pytest.raises(ValidationError):
        import_from_json(text)


def test_bool_coordinates_are_rejected():
    text = json.dumps([[{'x': True, 'y': 0}, {'x': 1, 'y': 0}, {'x': 1, 'y': 1}]])
    with pytest.raises(ValidationError):
        import_from_json(text)


def test_svg_viewbox_is_padded():
    svg = export_rectangles_svg([Rectangle(0, 0, 100, 50)])
    assert 'viewBox="-5 -5 110 60"' in svg
    assert '<rect x="0" y="0" width="100" height="50"' in svg
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')


def test_empty_svg():
    svg = export_rectangles_svg([])
    assert 'viewBox="0 0 100 100"' in svg
    assert '<rect' not in svg


@pytest.mark.parametrize('text', [
    '{"type": "polygons", "data": {}}',
    '{"type": "polygons", "data": 0}',
    '{"type": "rectangles", "data": ""}',
    '{"type": "session", "polygons": {}, "rectangles": []}',
    '{"type": "session", "polygons": [], "rectangles": 0}',
])
def test_falsy_non_array_payloads_raise(text):
    with pytest.raises(ValidationError, match="must be an array"):
        import_from_json(text)


def test_null_payload_reads_as_empty():
    assert import_from_json('{"type": "polygons", "data": null}').polygons == []
    assert import_from_json('{"type": "session"}').rectangles == []
