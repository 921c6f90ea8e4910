"""
Coverage Statistics Module
==========================
Area and efficiency figures for a covering, derived from the same union
primitives the engine uses. Display only; nothing here feeds back into a run.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from covering_models import Circle, CoveringStep, Rectangle
from region_union import PolygonUnion, get_union_area

logger = logging.getLogger(__name__)

Shape = Union[Rectangle, Circle]


@dataclass
class CoverageStatistics:
    """Summary of one covering state. None marks a figure that is not available."""
    polygon_area: Optional[float]
    covered_area: Optional[float]
    shape_count: int
    efficiency: Optional[float]
    coverage_percent: Optional[float]
    iteration: Optional[int] = None
    size_distribution: Dict[str, float] = field(default_factory=dict)

    def format_summary(self, unit: str = "units²", shape_label: str = "square") -> str:
        """One-line display string; unavailable figures render as a placeholder."""
        pa = f"{self.polygon_area:.1f} {unit}" if self.polygon_area is not None else '—'
        ca = f"{self.covered_area:.1f} {unit}" if self.covered_area is not None else '—'
        eff = (f"{self.efficiency:.1f} {unit}/{shape_label}"
               if self.efficiency is not None else '—')
        cov = (f"{self.coverage_percent:.1f}% coverage"
               if self.coverage_percent is not None else 'Coverage: —')
        return f"Polygon area: {pa}  ·  Covered area: {ca}  ·  Efficiency: {eff}  ·  {cov}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'polygon_area': self.polygon_area,
            'covered_area': self.covered_area,
            'shape_count': self.shape_count,
            'efficiency': self.efficiency,
            'coverage_percent': self.coverage_percent,
            'iteration': self.iteration,
            'size_distribution': dict(self.size_distribution),
        }


def covered_area(shapes: Sequence[Shape]) -> float:
    """Sum of rectangle and disk areas."""
    return float(sum(s.area for s in shapes))


def size_distribution(shapes: Sequence[Shape]) -> Dict[str, float]:
    """Basic statistics over individual shape areas."""
    if not shapes:
        return {'count': 0, 'min': 0.0, 'max': 0.0, 'mean': 0.0, 'median': 0.0, 'std': 0.0}

    areas = np.array([s.area for s in shapes], dtype=float)
    return {
        'count': int(areas.size),
        'min': float(areas.min()),
        'max': float(areas.max()),
        'mean': float(np.mean(areas)),
        'median': float(np.median(areas)),
        'std': float(np.std(areas)),
    }


def compute_statistics(polygons: Sequence[Sequence[Any]],
                       shapes: Union[CoveringStep, Sequence[Shape]],
                       union_op: Optional[PolygonUnion] = None) -> CoverageStatistics:
    """
    Compute area, efficiency and coverage for a set of shapes.

    Args:
        polygons: Input polygons of the covering run
        shapes: A CoveringStep or a list of rectangles / circles
        union_op: Boolean union implementation (shapely by default)

    Returns:
        CoverageStatistics
    """
    iteration = None
    if isinstance(shapes, CoveringStep):
        iteration = shapes.iteration
        shape_list: List[Shape] = shapes.shapes
    else:
        shape_list = list(shapes or [])

    polygon_area = get_union_area(polygons, union_op) if polygons else None
    n = len(shape_list)
    covered = covered_area(shape_list) if n > 0 else None
    efficiency = polygon_area / n if n > 0 and polygon_area is not None else None

    coverage_percent = None
    if polygon_area is not None and polygon_area > 0 and covered is not None:
        coverage_percent = covered / polygon_area * 100.0

    stats = CoverageStatistics(
        polygon_area=polygon_area,
        covered_area=covered,
        shape_count=n,
        efficiency=efficiency,
        coverage_percent=coverage_percent,
        iteration=iteration,
        size_distribution=size_distribution(shape_list),
    )

    if coverage_percent is not None:
        logger.info(f"Coverage analysis: {coverage_percent:.1f}% coverage with {n} shapes")
    return stats
