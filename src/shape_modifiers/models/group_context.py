"""Group context - bounds and live transform of an enclosing composite"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from shape_modifiers.models.shape import Shape
from shape_modifiers.models.transform import Vec2


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in page pixels"""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def top_left(self) -> Vec2:
        return Vec2(self.min_x, self.min_y)

    @property
    def center(self) -> Vec2:
        return Vec2((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    def to_dict(self) -> dict:
        return {
            'min': {'x': self.min_x, 'y': self.min_y},
            'max': {'x': self.max_x, 'y': self.max_y},
            'center': {'x': self.center.x, 'y': self.center.y},
            'width': self.width,
            'height': self.height,
        }


@dataclass(frozen=True)
class GroupTransform:
    """Live position (top-left) and rotation (radians) of a composite"""
    x: float
    y: float
    rotation: float = 0.0


@dataclass(frozen=True)
class GroupContext:
    """Everything a processor needs to treat a composite as one rigid body

    Supplied by a GroupResolver; the processors never discover group
    membership on their own.

    Properties:
        group_id: Id of the composite shape, if it has one
        top_left: Top-left of the member bounding box
        bounds: Member bounding box
        transform: Live transform of the composite (None when unknown)
        members: Member shapes of the composite
    """
    top_left: Vec2
    bounds: BoundingBox
    transform: Optional[GroupTransform] = None
    members: Tuple[Shape, ...] = ()
    group_id: Optional[str] = None

    @property
    def width(self) -> float:
        return self.bounds.width

    @property
    def height(self) -> float:
        return self.bounds.height

    @property
    def rotation(self) -> float:
        """Live rotation of the composite, 0 when no transform is known"""
        return self.transform.rotation if self.transform is not None else 0.0

    @property
    def pivot(self) -> Vec2:
        """Visual center of the composite

        Live position plus the half bounding-box size turned by the live
        rotation; falls back to the box top-left with no rotation.
        """
        if self.transform is None:
            origin = self.top_left
        else:
            origin = Vec2(self.transform.x, self.transform.y)
        angle = self.rotation
        half_w = self.bounds.width / 2.0
        half_h = self.bounds.height / 2.0
        cos_a = np.cos(angle)
        sin_a = np.sin(angle)
        return Vec2(
            float(origin.x + half_w * cos_a - half_h * sin_a),
            float(origin.y + half_w * sin_a + half_h * cos_a),
        )

    @property
    def member_ids(self) -> Tuple[str, ...]:
        return tuple(shape.id for shape in self.members)
