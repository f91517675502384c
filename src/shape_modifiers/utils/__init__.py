"""Geometry and logging helpers"""

from .geometry import (
    degrees_to_radians,
    radians_to_degrees,
    interpolate,
    rotate_vector,
    rotate_point_around,
    get_shape_dimensions,
    shape_bounds,
    calculate_group_bounds,
    visual_center,
    top_left_from_center,
    distance,
)
from .logger import configure_logging
