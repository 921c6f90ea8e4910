#!/usr/bin/env python3
"""
Main Covering System Entry Point
================================
Runs a covering over polygons read from a JSON document and writes the
final state, statistics and optional SVG / PNG renderings.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from block_merge_engine import run_covering
from config_covering import CoveringConfig
from coverage_statistics import compute_statistics
from covering_io import export_rectangles_svg, import_from_json
from covering_models import CoveringOptions, CoveringStep, Polygon
from region_union import union_polygons
from utils import ValidationError, save_json, save_text, setup_logging

logger = logging.getLogger(__name__)


class CoveringSystem:
    """Facade running one covering from input polygons to output artifacts."""

    def __init__(self, options: Optional[CoveringOptions] = None):
        """Initialize the covering system."""
        self.options = options or CoveringOptions.from_values()
        logger.info("Covering system initialized")

    def load_polygons(self, input_path: str) -> List[Polygon]:
        """Read polygons from an exported document."""
        text = Path(input_path).read_text()
        result = import_from_json(text)
        if result.polygons is None and result.rectangles is not None:
            raise ValidationError("This file contains rectangles only")
        polygons = result.polygons or []
        logger.info(f"Loaded {len(polygons)} polygons from {input_path}")
        return polygons

    def run(self, polygons: Sequence[Polygon], show_steps: bool = False) -> Dict[str, Any]:
        """
        Drain a covering run.

        Args:
            polygons: Input polygons
            show_steps: Print the shape count of every step

        Returns:
            Dictionary with the final step, statistics and timing
        """
        start_time = time.time()
        steps = 0
        final: Optional[CoveringStep] = None

        for step in run_covering(polygons, self.options):
            steps += 1
            final = step
            if show_steps:
                print(f"  step {steps:5d}  iteration {step.iteration:5d}  "
                      f"shapes {step.shape_count}")

        statistics = compute_statistics(polygons, final)
        elapsed = time.time() - start_time

        logger.info(statistics.format_summary())
        return {
            'final_step': final,
            'statistics': statistics,
            'steps': steps,
            'time_seconds': elapsed,
        }

    def save_results(self, results: Dict[str, Any], json_path: str):
        """Save final step and statistics to JSON file."""
        data = {
            'timestamp': time.strftime("%Y-%m-%d %H:%M:%S"),
            'options': {
                'min_size': self.options.min_size,
                'max_k': self.options.max_k,
                'min_k': self.options.min_k,
                'shape': self.options.shape.value,
            },
            'result': results['final_step'].to_dict(),
            'statistics': results['statistics'].to_dict(),
            'steps': results['steps'],
            'time_seconds': results['time_seconds'],
        }
        save_json(data, json_path, indent=CoveringConfig.EXPORT['json_indent'])
        logger.info(f"Results saved to {json_path}")

    def save_svg(self, results: Dict[str, Any], svg_path: str):
        save_text(export_rectangles_svg(results['final_step'].rectangles), svg_path)
        logger.info(f"SVG saved to {svg_path}")

    def save_plot(self, polygons: Sequence[Polygon], results: Dict[str, Any], png_path: str):
        import matplotlib.pyplot as plt
        from covering_visualizer import CoveringVisualizer

        visualizer = CoveringVisualizer()
        fig = visualizer.create_step_visualization(
            union_polygons(polygons), results['final_step'],
            results['statistics'], output_path=png_path)
        plt.close(fig)

    def print_summary(self, results: Dict[str, Any]):
        """Print results summary to console."""
        final = results['final_step']
        stats = results['statistics']

        print("\n" + "=" * 70)
        print("COVERING RESULTS")
        print("=" * 70)
        print(f"Shape: {self.options.shape.value}")
        print(f"Grid cell: {self.options.min_size}  ·  k ladder: "
              f"{self.options.max_k} .. {self.options.min_k}")
        print(f"Shapes: {final.shape_count}  ·  Iterations: {final.iteration}  ·  "
              f"Steps: {results['steps']}")
        print(stats.format_summary())
        print(f"Time: {results['time_seconds']:.2f} seconds")
        print("=" * 70)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Cover polygons with axis-aligned squares, rectangles or circles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shapes.json                              # Squares with defaults
  %(prog)s shapes.json --shape rectangles           # Merge squares into rectangles
  %(prog)s shapes.json --min-size 20 --max-k 4      # Coarser grid, smaller blocks
  %(prog)s shapes.json --output out.json --svg out.svg --plot out.png
        """
    )

    parser.add_argument("input", help="Polygons JSON document (exported or legacy format)")
    parser.add_argument("--min-size", default=CoveringConfig.DEFAULTS['min_size'],
                        help="Grid cell size (default: %(default)s)")
    parser.add_argument("--max-k", default=CoveringConfig.DEFAULTS['max_k'],
                        help="Largest block multiplier (default: %(default)s)")
    parser.add_argument("--min-k", default=CoveringConfig.DEFAULTS['min_k'],
                        help="Smallest block multiplier (default: %(default)s)")
    parser.add_argument("--shape", choices=list(CoveringConfig.SHAPES),
                        default=CoveringConfig.DEFAULTS['shape'],
                        help="Covering shape (default: %(default)s)")
    parser.add_argument("--output", default=None, help="Write final step and statistics as JSON")
    parser.add_argument("--svg", default=None, help="Write final rectangles as SVG")
    parser.add_argument("--plot", default=None, help="Write a PNG rendering of the final step")
    parser.add_argument("--steps", action="store_true", help="Print every step")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.debug:
        setup_logging("DEBUG")
    elif args.verbose:
        setup_logging("INFO")
    else:
        setup_logging("WARNING")

    try:
        options = CoveringOptions.from_values(args.min_size, args.max_k, args.min_k, args.shape)
        system = CoveringSystem(options)
        polygons = system.load_polygons(args.input)
        results = system.run(polygons, show_steps=args.steps)

        if args.output:
            system.save_results(results, args.output)
        if args.svg:
            system.save_svg(results, args.svg)
        if args.plot:
            system.save_plot(polygons, results, args.plot)

        system.print_summary(results)
        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 1

    except (ValidationError, FileNotFoundError) as e:
        logger.error(f"Error: {e}", exc_info=args.debug)
        print(f"Error: {e}")
        return 1

    except Exception as e:
        logger.error(f"Error: {e}", exc_info=args.debug)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
