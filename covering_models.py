"""
Covering Models
===============
Core data structures shared by the covering engine, statistics and I/O.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from config_covering import CoveringConfig


class CoveringShape(Enum):
    """Shape strategy used by the merge engine."""
    SQUARES = "squares"
    RECTANGLES = "rectangles"
    CIRCLES = "circles"

    @classmethod
    def parse(cls, value: Any) -> 'CoveringShape':
        """Resolve a shape name, falling back to squares for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls(CoveringConfig.DEFAULTS['shape'])


@dataclass(frozen=True)
class Point:
    """2D point in world coordinates."""
    x: float
    y: float

    @classmethod
    def coerce(cls, value: Any) -> 'Point':
        """Build a point from a Point, an (x, y) pair or an {'x', 'y'} mapping."""
        if isinstance(value, Point):
            return value
        if isinstance(value, Mapping):
            return cls(value['x'], value['y'])
        x, y = value
        return cls(x, y)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple representation."""
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}


# A polygon is an ordered ring of points; closing the ring is implicit.
Polygon = List[Point]


def to_polygon(points: Sequence[Any]) -> Polygon:
    """Normalize any sequence of point-like values into a Polygon."""
    return [Point.coerce(p) for p in points]


@dataclass
class Region:
    """One connected area: an exterior ring with optional hole rings."""
    exterior: Polygon
    holes: List[Polygon] = field(default_factory=list)

    @property
    def rings(self) -> List[Polygon]:
        """Exterior followed by every hole."""
        return [self.exterior] + list(self.holes)

    def to_dict(self) -> Dict:
        return {
            'exterior': [p.to_dict() for p in self.exterior],
            'holes': [[p.to_dict() for p in hole] for hole in self.holes],
        }


RegionLike = Union[Region, Sequence[Point]]


@dataclass(frozen=True)
class BBox:
    """Axis-aligned bounding box as origin plus extent."""
    x: float
    y: float
    w: float
    h: float

    @property
    def is_degenerate(self) -> bool:
        return not (self.w > 0 and self.h > 0)


@dataclass(frozen=True)
class Square:
    """Axis-aligned square owned by the merge engine: top-left corner + side."""
    x: float
    y: float
    size: float

    @property
    def key(self) -> Tuple[float, float, float]:
        """Exact-value key used for set membership."""
        return (self.x, self.y, self.size)

    def to_rectangle(self) -> 'Rectangle':
        return Rectangle(self.x, self.y, self.size, self.size)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned output rectangle."""
    x: float
    y: float
    w: float
    h: float

    @property
    def area(self) -> float:
        """Rectangle area."""
        return self.w * self.h

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Get bounding box (x1, y1, x2, y2)."""
        return (self.x, self.y, self.x + self.w, self.y + self.h)

    def overlaps_with(self, other: 'Rectangle') -> bool:
        """Check if the interiors of two rectangles intersect."""
        x1, y1, x2, y2 = self.bounds
        ox1, oy1, ox2, oy2 = other.bounds
        return not (x2 <= ox1 or ox2 <= x1 or y2 <= oy1 or oy2 <= y1)

    @classmethod
    def from_dict(cls, data: Mapping) -> 'Rectangle':
        """Accept either w/h or width/height keys."""
        w = data.get('w', data.get('width', 0))
        h = data.get('h', data.get('height', 0))
        return cls(data['x'], data['y'], w, h)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'w': self.w, 'h': self.h}


@dataclass(frozen=True)
class Circle:
    """Output disk for the circles strategy."""
    cx: float
    cy: float
    r: float

    @property
    def area(self) -> float:
        return math.pi * self.r * self.r

    def to_dict(self) -> Dict[str, float]:
        return {'cx': self.cx, 'cy': self.cy, 'r': self.r}


@dataclass
class CoveringStep:
    """Snapshot emitted by the engine once per merge event."""
    rectangles: List[Rectangle] = field(default_factory=list)
    remaining: List[Polygon] = field(default_factory=list)
    iteration: int = 0
    circles: List[Circle] = field(default_factory=list)

    @property
    def shapes(self) -> List[Union[Rectangle, Circle]]:
        """Whichever shape list this step carries."""
        if self.circles:
            return list(self.circles)
        return list(self.rectangles)

    @property
    def shape_count(self) -> int:
        return len(self.circles) + len(self.rectangles)

    @property
    def covered_area(self) -> float:
        return (sum(r.area for r in self.rectangles) +
                sum(c.area for c in self.circles))

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            'iteration': self.iteration,
            'rectangles': [r.to_dict() for r in self.rectangles],
            'circles': [c.to_dict() for c in self.circles],
            'remaining': [[p.to_dict() for p in ring] for ring in self.remaining],
        }


def _parse_int(value: Any, default: int) -> int:
    """Floor a numeric-looking value; anything unusable (or zero) gives default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except OverflowError:
        # Integers too large for a float are out of range; _clamp bounds them
        return math.floor(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    parsed = math.floor(number)
    return parsed if parsed != 0 else default


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True)
class CoveringOptions:
    """Validated options for one covering run."""
    min_size: int = CoveringConfig.DEFAULTS['min_size']
    max_k: int = CoveringConfig.DEFAULTS['max_k']
    min_k: int = CoveringConfig.DEFAULTS['min_k']
    shape: CoveringShape = CoveringShape.SQUARES

    @classmethod
    def from_values(cls, min_size: Any = None, max_k: Any = None,
                    min_k: Any = None, shape: Any = None) -> 'CoveringOptions':
        """
        Clamp raw option values into their documented ranges.

        Non-numeric or out-of-range input never raises; it falls back to the
        default or the nearest bound. ``min_k`` is additionally capped at the
        clamped ``max_k``.
        """
        defaults = CoveringConfig.DEFAULTS
        size_low, size_high = CoveringConfig.LIMITS['min_size']
        k_low, k_high = CoveringConfig.LIMITS['k']

        cap_size = _clamp(_parse_int(min_size, defaults['min_size']), size_low, size_high)
        cap_k = _clamp(_parse_int(max_k, defaults['max_k']), k_low, k_high)
        cap_min_k = _clamp(_parse_int(min_k, defaults['min_k']), k_low, cap_k)

        return cls(
            min_size=cap_size,
            max_k=cap_k,
            min_k=cap_min_k,
            shape=CoveringShape.parse(shape if shape is not None else defaults['shape']),
        )

    @classmethod
    def coerce(cls, options: Optional[Union['CoveringOptions', Mapping]] = None) -> 'CoveringOptions':
        """Accept an options object, a mapping of raw values, or None."""
        if options is None:
            return cls.from_values()
        if isinstance(options, CoveringOptions):
            return cls.from_values(options.min_size, options.max_k,
                                   options.min_k, options.shape)
        return cls.from_values(
            options.get('min_size', options.get('minSize')),
            options.get('max_k', options.get('maxK')),
            options.get('min_k', options.get('minK')),
            options.get('shape'),
        )
