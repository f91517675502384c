"""Circular array - copies placed on an arc through the source."""

from typing import List, Optional

import numpy as np

from shape_modifiers import constants
from shape_modifiers.models.group_context import GroupContext
from shape_modifiers.models.instance import Instance, InstanceCollection
from shape_modifiers.models.modifier import CircularArraySettings
from shape_modifiers.models.transform import Vec2
from shape_modifiers.utils.geometry import visual_center
from .base_processor import BaseModifierProcessor


class CircularArrayProcessor(BaseModifierProcessor):
    """Arrange copies of every instance around an arc.

    The orbit center is solved backwards from the first angle so that
    copy 0 sits exactly where the source already is. There is no special
    case for a full 360 degree span: with the default 0..360 range the last
    copy lands on top of the first.
    """

    settings_class = CircularArraySettings

    def get_name(self) -> str:
        return constants.CIRCULAR_ARRAY

    def generate_angles(self, settings: CircularArraySettings) -> np.ndarray:
        """Angle (radians) of each copy on the arc"""
        count = settings.count
        if count > 1:
            step = (settings.end_angle - settings.start_angle) / (count - 1)
        else:
            step = 0.0
        return np.deg2rad(settings.start_angle + np.arange(count) * step)

    def generate_rotations(self, settings: CircularArraySettings, angles: np.ndarray) -> np.ndarray:
        """Extra rotation (radians) added to each copy"""
        rotations = np.full(len(angles), np.deg2rad(settings.rotate_all))
        rotations += np.arange(len(angles)) * np.deg2rad(settings.rotate_each)
        if settings.align_to_tangent:
            rotations += angles + np.pi / 2
        return rotations

    def apply(self, collection: InstanceCollection, settings: CircularArraySettings,
              group_context: Optional[GroupContext]) -> List[Instance]:
        angles = self.generate_angles(settings)
        rotations = self.generate_rotations(settings, angles)
        # Unit vectors from the orbit center to each copy
        directions = np.column_stack((np.cos(angles), np.sin(angles)))
        radius = settings.radius
        offset = np.array([settings.center_offset_x, settings.center_offset_y])

        output = []
        for instance in collection:
            if group_context is None:
                anchor = visual_center(instance.shape, instance.transform)
            else:
                anchor = group_context.pivot
            origin = np.array([anchor.x, anchor.y]) - radius * directions[0] + offset
            centers = origin + radius * directions

            for i in range(len(angles)):
                extra_rotation = float(rotations[i])
                if group_context is None:
                    transform = self._place_at_center(
                        instance,
                        Vec2(float(centers[i, 0]), float(centers[i, 1])),
                        instance.transform.rotation + extra_rotation,
                    )
                else:
                    delta = Vec2(float(centers[i, 0] - anchor.x), float(centers[i, 1] - anchor.y))
                    transform = self._rigid_group_step(instance, group_context, delta, extra_rotation)

                output.append(instance.derive(
                    transform, i,
                    modifier_type=constants.CIRCULAR_ARRAY,
                    array_index=i,
                    circular_array_index=i,
                    circular_angle=float(np.rad2deg(angles[i])),
                    circular_center=(float(origin[0]), float(origin[1])),
                    **self._group_metadata(group_context),
                ))
        return output
