"""
Covering Visualizer Module
==========================
Renders a covering step over its input polygons with matplotlib.
"""

import logging
from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Circle as MplCircle
from matplotlib.patches import Polygon as MplPolygon
from matplotlib.patches import Rectangle as MplRectangle

from config_covering import CoveringConfig
from coverage_statistics import CoverageStatistics
from covering_models import CoveringStep, Region

logger = logging.getLogger(__name__)


class CoveringVisualizer:
    """Creates figures of covering states."""

    def __init__(self):
        """Initialize visualizer."""
        self.config = CoveringConfig.VISUALIZATION
        self.figure_size = self.config['figure_size']
        self.dpi = self.config['dpi']

    def create_step_visualization(self, regions: Sequence[Region], step: CoveringStep,
                                  statistics: Optional[CoverageStatistics] = None,
                                  output_path: Optional[str] = None) -> plt.Figure:
        """
        Draw regions and the shapes of one step.

        Args:
            regions: Union regions the step covers
            step: Covering step to draw
            statistics: Optional statistics rendered as the figure title
            output_path: Optional path to save figure

        Returns:
            Matplotlib figure
        """
        fig, ax = plt.subplots(figsize=self.figure_size)

        for region in regions:
            self._plot_region(ax, region)

        for rect in step.rectangles:
            ax.add_patch(MplRectangle(
                (rect.x, rect.y), rect.w, rect.h,
                facecolor=self.config['shape_face_color'],
                edgecolor=self.config['shape_edge_color'],
                linewidth=self.config['line_width'],
            ))

        for circle in step.circles:
            ax.add_patch(MplCircle(
                (circle.cx, circle.cy), circle.r,
                facecolor=self.config['shape_face_color'],
                edgecolor=self.config['shape_edge_color'],
                linewidth=self.config['line_width'],
            ))

        ax.set_aspect('equal')
        ax.autoscale_view()
        # Screen coordinates: y grows downward
        ax.invert_yaxis()

        title = f"Iteration {step.iteration}: {step.shape_count} shapes"
        if statistics is not None:
            title += "\n" + statistics.format_summary()
        ax.set_title(title, fontsize=10)

        if output_path:
            fig.savefig(output_path, dpi=self.dpi, bbox_inches='tight')
            logger.info(f"Visualization saved to {output_path}")

        return fig

    def _plot_region(self, ax, region: Region):
        """Fill the exterior ring and punch out the holes."""
        exterior = [(p.x, p.y) for p in region.exterior]
        if len(exterior) >= 3:
            ax.add_patch(MplPolygon(exterior, closed=True,
                                    facecolor=self.config['polygon_color'],
                                    edgecolor='black', linewidth=1.0))
        for hole in region.holes:
            points = [(p.x, p.y) for p in hole]
            if len(points) >= 3:
                ax.add_patch(MplPolygon(points, closed=True,
                                        facecolor=self.config['hole_color'],
                                        edgecolor='black', linewidth=1.0))
