"""
Covering System Configuration
=============================
Central configuration for the polygon covering engine.
"""


class CoveringConfig:
    """Configuration settings for the covering engine and its CLI."""

    # ============================================================================
    # COVERING DEFAULTS
    # ============================================================================

    DEFAULTS = {
        'min_size': 8,     # Grid cell side length in world units
        'max_k': 8,        # Largest block multiplier tried first
        'min_k': 2,        # Smallest block multiplier
        'shape': 'squares',
    }

    # Inclusive clamp ranges applied to caller supplied options
    LIMITS = {
        'min_size': (1, 500),
        'k': (2, 1024),
    }

    SHAPES = ('squares', 'rectangles', 'circles')

    # ============================================================================
    # EXPORT CONFIGURATION
    # ============================================================================

    EXPORT = {
        'format_version': 1,
        'json_indent': 2,
        'svg_padding_ratio': 0.05,
        'svg_empty_viewbox': '0 0 100 100',
        'svg_stroke': '#4ecdc4',
    }

    # ============================================================================
    # VISUALIZATION CONFIGURATION
    # ============================================================================

    VISUALIZATION = {
        'figure_size': (12, 9),
        'dpi': 150,
        'polygon_color': '#2b2b40',
        'hole_color': '#ffffff',
        'shape_edge_color': '#4ecdc4',
        'shape_face_color': '#4ecdc455',
        'line_width': 0.8,
    }

    # ============================================================================
    # LOGGING CONFIGURATION
    # ============================================================================

    LOGGING = {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'date_format': '%Y-%m-%d %H:%M:%S',
        'file': None,
        'max_bytes': 10 * 1024 * 1024,  # 10 MB
        'backup_count': 5,
        'console_output': True
    }
