"""
Covering I/O
============
Tagged JSON import/export for polygons and rectangles, plus SVG export of a
rectangle covering.

Export documents look like {"type": "polygons", "version": 1, "data": [...]}.
Import also accepts "session" documents and the older untagged shapes: a bare
list of polygons, {"polygons": [...]} or {"rectangles": [...]}.
"""

import json
import logging
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, List, Optional, Sequence

from config_covering import CoveringConfig
from covering_geometry import ring_is_simple
from covering_models import Point, Polygon, Rectangle
from utils import ValidationError

logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION = CoveringConfig.EXPORT['format_version']


@dataclass
class ImportResult:
    """Polygons and/or rectangles read from a document; None means absent."""
    polygons: Optional[List[Polygon]] = None
    rectangles: Optional[List[Rectangle]] = None


@dataclass
class SessionDocument:
    """Everything needed to restore a covering session."""
    polygons: List[Polygon] = field(default_factory=list)
    rectangles: List[Rectangle] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _dumps(document: Any) -> str:
    return json.dumps(document, indent=CoveringConfig.EXPORT['json_indent'])


# ============================================================================
# EXPORT
# ============================================================================

def polygons_to_data(polygons: Sequence[Polygon]) -> List[List[dict]]:
    return [[{'x': p.x, 'y': p.y} for p in polygon] for polygon in polygons or []]


def export_polygons_json(polygons: Sequence[Polygon],
                         current_polygon: Optional[Polygon] = None) -> str:
    """Export polygons; an in-progress polygon is included once it has 3 points."""
    data = polygons_to_data(polygons)
    if current_polygon and len(current_polygon) >= 3:
        data.extend(polygons_to_data([current_polygon]))
    return _dumps({'type': 'polygons', 'version': EXPORT_FORMAT_VERSION, 'data': data})


def export_rectangles_json(rectangles: Sequence[Rectangle]) -> str:
    data = [r.to_dict() for r in rectangles or []]
    return _dumps({'type': 'rectangles', 'version': EXPORT_FORMAT_VERSION, 'data': data})


def export_session_json(session: SessionDocument) -> str:
    return _dumps({
        'type': 'session',
        'version': EXPORT_FORMAT_VERSION,
        'polygons': polygons_to_data(session.polygons),
        'rectangles': [r.to_dict() for r in session.rectangles],
    })


def _rects_viewbox(rectangles: Sequence[Rectangle]) -> str:
    min_x = min(r.x for r in rectangles)
    min_y = min(r.y for r in rectangles)
    max_x = max(r.x + r.w for r in rectangles)
    max_y = max(r.y + r.h for r in rectangles)
    pad = max(max_x - min_x, max_y - min_y) * CoveringConfig.EXPORT['svg_padding_ratio'] or 10
    return (f"{min_x - pad:g} {min_y - pad:g} "
            f"{max_x - min_x + 2 * pad:g} {max_y - min_y + 2 * pad:g}")


def export_rectangles_svg(rectangles: Sequence[Rectangle]) -> str:
    """Render rectangles as outlined SVG rects inside a padded viewBox."""
    if not rectangles:
        return (f'<svg xmlns="http://www.w3.org/2000/svg" '
                f'viewBox="{CoveringConfig.EXPORT["svg_empty_viewbox"]}"></svg>')

    stroke = CoveringConfig.EXPORT['svg_stroke']
    rects = '\n  '.join(
        f'<rect x="{r.x:g}" y="{r.y:g}" width="{r.w:g}" height="{r.h:g}" '
        f'fill="none" stroke="{stroke}" stroke-width="1"/>'
        for r in rectangles
    )
    return (f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{_rects_viewbox(rectangles)}">\n'
            f'  {rects}\n</svg>')


# ============================================================================
# IMPORT
# ============================================================================

def validate_polygons(data: Any) -> List[Polygon]:
    """Parse a list of point lists; polygons under 3 points are dropped."""
    if not isinstance(data, list):
        raise ValidationError("Polygons must be an array")

    polygons = []
    for index, ring in enumerate(data):
        if not isinstance(ring, list):
            raise ValidationError("Each polygon must be an array of points")
        points = []
        for p in ring:
            if not isinstance(p, dict) or not _is_number(p.get('x')) or not _is_number(p.get('y')):
                raise ValidationError("Each point must be { x, y } with numbers")
            points.append(Point(p['x'], p['y']))

        if len(points) < 3:
            logger.warning(f"Skipping polygon {index}: {len(points)} points")
            continue
        if not ring_is_simple(points):
            logger.warning(f"Polygon {index} is self-intersecting; covering may be unexpected")
        polygons.append(points)
    return polygons


def validate_rectangles(data: Any) -> List[Rectangle]:
    """Parse a list of {x, y, w, h} objects (width/height accepted as aliases)."""
    if not isinstance(data, list):
        raise ValidationError("Rectangles must be an array")

    rectangles = []
    for r in data:
        if not isinstance(r, dict):
            raise ValidationError("Each rectangle must be { x, y, w, h } with numbers")
        rect = Rectangle.from_dict(r) if 'x' in r and 'y' in r else None
        if rect is None or not all(_is_number(v) for v in (rect.x, rect.y, rect.w, rect.h)):
            raise ValidationError("Each rectangle must be { x, y, w, h } with numbers")
        rectangles.append(rect)
    return rectangles


def _field_or_empty(parsed: dict, key: str) -> Any:
    """Missing or null fields read as empty; any other value is validated as-is."""
    value = parsed.get(key)
    return value if value is not None else []


def import_from_json(text: str) -> ImportResult:
    """
    Parse an exported document.

    Raises:
        ValidationError: empty input, invalid JSON, unknown type tag or
            malformed polygon / rectangle entries
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Empty or invalid input")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    if isinstance(parsed, dict) and isinstance(parsed.get('type'), str):
        kind = parsed['type']
        if kind == 'polygons':
            return ImportResult(polygons=validate_polygons(_field_or_empty(parsed, 'data')))
        if kind == 'rectangles':
            return ImportResult(rectangles=validate_rectangles(_field_or_empty(parsed, 'data')))
        if kind == 'session':
            return ImportResult(
                polygons=validate_polygons(_field_or_empty(parsed, 'polygons')),
                rectangles=validate_rectangles(_field_or_empty(parsed, 'rectangles')),
            )
        raise ValidationError(f"Unknown export type: {kind}")

    if isinstance(parsed, list):
        return ImportResult(polygons=validate_polygons(parsed))

    if isinstance(parsed, dict):
        if isinstance(parsed.get('polygons'), list):
            rectangles = parsed.get('rectangles')
            return ImportResult(
                polygons=validate_polygons(parsed['polygons']),
                rectangles=validate_rectangles(rectangles) if isinstance(rectangles, list) else [],
            )
        if isinstance(parsed.get('rectangles'), list):
            return ImportResult(rectangles=validate_rectangles(parsed['rectangles']))

    raise ValidationError('Expected tagged JSON (type: "polygons"|"rectangles"|"session") '
                          'or legacy array / { polygons } / { rectangles }')
