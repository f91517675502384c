"""
Shape Modifiers - Constants and Configuration

This module contains all constant values used by the modifier engine:
- Modifier type identifiers and display names
- Default settings for each modifier kind
- Default shape dimensions and size heuristics
- Clamping floors for degenerate settings
"""

# ======================================================================
# MODIFIER TYPES
# ======================================================================

LINEAR_ARRAY = 'linear-array'
CIRCULAR_ARRAY = 'circular-array'
GRID_ARRAY = 'grid-array'
MIRROR = 'mirror'

MODIFIER_TYPES = (LINEAR_ARRAY, CIRCULAR_ARRAY, GRID_ARRAY, MIRROR)

MODIFIER_DISPLAY_NAMES = {
    LINEAR_ARRAY: 'Linear Array',
    CIRCULAR_ARRAY: 'Circular Array',
    GRID_ARRAY: 'Grid Array',
    MIRROR: 'Mirror',
}

# modifier_type recorded on the seed instance
ORIGINAL_MODIFIER_TYPE = 'original'

# ======================================================================
# DEFAULT SETTINGS
# ======================================================================
# Percentages are relative to the target dimensions (the shape's own
# size, or the group bounding box in group mode). Angles are degrees.

DEFAULT_SETTINGS = {
    LINEAR_ARRAY: {
        'count': 3,
        'offset_x': 100.0,
        'offset_y': 0.0,
        'rotation_increment': 0.0,
        'rotate_all': 0.0,
        'scale_step_percent': 100.0,
    },
    CIRCULAR_ARRAY: {
        'count': 8,
        'radius': 100.0,
        'start_angle': 0.0,
        'end_angle': 360.0,
        'center_offset_x': 0.0,
        'center_offset_y': 0.0,
        'rotate_each': 0.0,
        'rotate_all': 0.0,
        'align_to_tangent': False,
    },
    GRID_ARRAY: {
        'rows': 3,
        'columns': 3,
        'spacing_x': 100.0,
        'spacing_y': 100.0,
        'offset_x': 0.0,
        'offset_y': 0.0,
    },
    MIRROR: {
        'axis': 'x',
        'offset': 0.0,
        'merge_threshold': 0.0,
    },
}

MIRROR_AXES = ('x', 'y')

# ======================================================================
# CLAMPING
# ======================================================================

MIN_ARRAY_COUNT = 1         # Count/rows/columns floor
MAX_ARRAY_COUNT = 1000      # Count/rows/columns ceiling
MIN_INSTANCE_SCALE = 0.01   # Scale floor (no zero or mirrored scale)
MIN_DERIVED_DIMENSION = 1.0  # Smallest width/height written on derived shapes

# ======================================================================
# SHAPE DIMENSIONS
# ======================================================================

DEFAULT_SHAPE_WIDTH = 100.0
DEFAULT_SHAPE_HEIGHT = 100.0

# Text shapes without explicit size: width per character and line height,
# both as a multiple of the font size
DEFAULT_FONT_SIZE = 24.0
TEXT_CHAR_WIDTH_RATIO = 0.6
TEXT_LINE_HEIGHT_RATIO = 1.35

# Shape type tag of composites
GROUP_SHAPE_TYPE = 'group'

# ======================================================================
# DERIVED SHAPES
# ======================================================================

DERIVED_ID_SEPARATOR = '::derived::'
