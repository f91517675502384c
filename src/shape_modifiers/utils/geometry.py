"""Geometry helpers for the modifier pipeline.

Canvas convention:
- Positions are top-left anchors in page pixels (Y-down)
- Rotation is in radians and turns a shape around its top-left anchor
- Settings angles are degrees and get converted at the processor boundary
"""

from typing import Iterable, Tuple

import numpy as np

from shape_modifiers import constants
from shape_modifiers.models.group_context import BoundingBox
from shape_modifiers.models.shape import Shape
from shape_modifiers.models.transform import Transform, Vec2


def degrees_to_radians(degrees: float) -> float:
	return float(np.deg2rad(degrees))


def radians_to_degrees(radians: float) -> float:
	return float(np.rad2deg(radians))


def interpolate(start: float, end: float, t: float) -> float:
	"""Linear interpolation between start and end at t in [0, 1]"""
	return start + (end - start) * t


def rotate_vector(x: float, y: float, angle: float) -> Tuple[float, float]:
	"""Rotate a vector by angle (radians) around the origin.

	Args:
		x, y: Vector to rotate
		angle: Rotation in radians

	Returns:
		(rotated_x, rotated_y)
	"""
	if angle == 0:
		return float(x), float(y)
	cos_a = np.cos(angle)
	sin_a = np.sin(angle)
	return float(x * cos_a - y * sin_a), float(x * sin_a + y * cos_a)


def rotate_point_around(px: float, py: float, cx: float, cy: float, angle: float) -> Tuple[float, float]:
	"""Rotate point around center

	Args:
		px, py: Point to rotate
		cx, cy: Center of rotation
		angle: Rotation in radians

	Returns:
		(new_x, new_y)
	"""
	dx, dy = rotate_vector(px - cx, py - cy, angle)
	return cx + dx, cy + dy


# ========================================
# Dimensions
# ========================================

def get_shape_dimensions(shape: Shape) -> Tuple[float, float]:
	"""Width and height of a shape.

	Explicit width/height win, then props 'w'/'h', then the default unit
	size. Missing values never raise.
	"""
	width = shape.width
	height = shape.height
	if width is None:
		width = shape.props.get('w')
	if height is None:
		height = shape.props.get('h')
	if width is None:
		width = constants.DEFAULT_SHAPE_WIDTH
	if height is None:
		height = constants.DEFAULT_SHAPE_HEIGHT
	return float(width), float(height)


def _estimated_size(shape: Shape) -> Tuple[float, float]:
	"""Size of a shape, guessing from type-specific props when no size is set"""
	props = shape.props
	has_size = (shape.width is not None and shape.height is not None) or ('w' in props and 'h' in props)
	if has_size:
		return get_shape_dimensions(shape)

	if shape.type == 'text' and 'text' in props:
		font_size = float(props.get('size', props.get('font_size', constants.DEFAULT_FONT_SIZE)))
		lines = str(props['text']).split('\n') or ['']
		longest = max(len(line) for line in lines)
		width = max(1, longest) * font_size * constants.TEXT_CHAR_WIDTH_RATIO
		height = len(lines) * font_size * constants.TEXT_LINE_HEIGHT_RATIO
		return float(width), float(height)

	points = props.get('points')
	if points:
		coords = np.array([[p.get('x', 0.0), p.get('y', 0.0)] for p in points], dtype=float)
		extent = coords.max(axis=0) - np.minimum(coords.min(axis=0), 0.0)
		return float(extent[0]), float(extent[1])

	if 'radius' in props:
		diameter = 2.0 * float(props['radius'])
		return diameter, diameter

	return get_shape_dimensions(shape)


def shape_bounds(shape: Shape) -> BoundingBox:
	"""Axis-aligned page bounds of a shape, rotation included"""
	width, height = _estimated_size(shape)
	corners = np.array([[0.0, 0.0], [width, 0.0], [width, height], [0.0, height]])
	if shape.rotation:
		cos_a = np.cos(shape.rotation)
		sin_a = np.sin(shape.rotation)
		rot = np.array([[cos_a, -sin_a], [sin_a, cos_a]])
		corners = corners @ rot.T
	corners = corners + np.array([shape.x, shape.y])
	lo = corners.min(axis=0)
	hi = corners.max(axis=0)
	return BoundingBox(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def calculate_group_bounds(shapes: Iterable[Shape]) -> BoundingBox:
	"""Bounding box across a set of shapes (all zeros when empty)"""
	boxes = [shape_bounds(shape) for shape in shapes]
	if not boxes:
		return BoundingBox(0.0, 0.0, 0.0, 0.0)
	data = np.array([[b.min_x, b.min_y, b.max_x, b.max_y] for b in boxes])
	return BoundingBox(
		float(data[:, 0].min()),
		float(data[:, 1].min()),
		float(data[:, 2].max()),
		float(data[:, 3].max()),
	)


# ========================================
# Centers
# ========================================

def _half_size(shape: Shape, scale_x: float = 1.0, scale_y: float = 1.0) -> Tuple[float, float]:
	width, height = get_shape_dimensions(shape)
	return width * scale_x / 2.0, height * scale_y / 2.0


def visual_center(shape: Shape, transform: Transform = None) -> Vec2:
	"""Center of a shape as drawn.

	Stored position is the top-left anchor, so the center is the anchor
	plus the half-size vector turned by the rotation. With a transform the
	instance's position, rotation and scale are used instead of the shape's.

	Args:
		shape: Shape supplying the dimensions
		transform: Optional placement overriding the shape's own

	Returns:
		Center point in page pixels
	"""
	if transform is None:
		transform = Transform(Vec2(shape.x, shape.y), Vec2(1.0, 1.0), shape.rotation)
	half_w, half_h = _half_size(shape, transform.scale_x, transform.scale_y)
	dx, dy = rotate_vector(half_w, half_h, transform.rotation)
	return Vec2(transform.x + dx, transform.y + dy)


def top_left_from_center(shape: Shape, center: Vec2, rotation: float,
						 scale_x: float = 1.0, scale_y: float = 1.0) -> Vec2:
	"""Inverse of visual_center: the anchor that puts the shape's center at center"""
	half_w, half_h = _half_size(shape, scale_x, scale_y)
	dx, dy = rotate_vector(half_w, half_h, rotation)
	return Vec2(center.x - dx, center.y - dy)


def distance(a: Vec2, b: Vec2) -> float:
	return float(np.hypot(a.x - b.x, a.y - b.y))
