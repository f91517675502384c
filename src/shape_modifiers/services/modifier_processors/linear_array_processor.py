"""Linear array - copies stepped along a line with rotation and scale falloff."""

from typing import List, Optional

import numpy as np

from shape_modifiers import constants
from shape_modifiers.models.group_context import GroupContext
from shape_modifiers.models.instance import Instance, InstanceCollection
from shape_modifiers.models.modifier import LinearArraySettings
from shape_modifiers.models.transform import Vec2
from shape_modifiers.utils.geometry import get_shape_dimensions, rotate_vector, visual_center
from .base_processor import BaseModifierProcessor


class LinearArrayProcessor(BaseModifierProcessor):
    """Repeat every instance `count` times along an offset vector.

    Offsets are percentages of the target size (the shape's own size, or
    the group bounding box in group mode) and follow the source rotation,
    so a rotated shape arrays along its own axis.
    """

    settings_class = LinearArraySettings

    def get_name(self) -> str:
        return constants.LINEAR_ARRAY

    def generate_steps(self, settings: LinearArraySettings) -> np.ndarray:
        """Per-step parameters shared by every input instance.

        Returns:
            count x 3 numpy array [[step, extra_rotation, scale], ...]
            with extra_rotation in radians
        """
        count = settings.count
        steps = np.zeros((count, 3))
        steps[:, 0] = np.arange(count)

        increment = np.deg2rad(settings.rotation_increment)
        rotate_all = np.deg2rad(settings.rotate_all)
        steps[:, 1] = steps[:, 0] * increment + rotate_all

        end_scale = settings.scale_step_percent / 100.0
        if count > 1:
            t = steps[:, 0] / (count - 1)
            steps[:, 2] = 1.0 + (end_scale - 1.0) * t
        else:
            steps[:, 2] = 1.0
        steps[:, 2] = np.maximum(steps[:, 2], constants.MIN_INSTANCE_SCALE)
        return steps

    def apply(self, collection: InstanceCollection, settings: LinearArraySettings,
              group_context: Optional[GroupContext]) -> List[Instance]:
        steps = self.generate_steps(settings)
        output = []
        for instance in collection:
            if group_context is None:
                output.extend(self._array_instance(instance, settings, steps))
            else:
                output.extend(self._array_group_member(instance, settings, steps, group_context))
        return output

    def _array_instance(self, instance: Instance, settings: LinearArraySettings,
                        steps: np.ndarray) -> List[Instance]:
        width, height = get_shape_dimensions(instance.shape)
        pixel_x = settings.offset_x / 100.0 * width
        pixel_y = settings.offset_y / 100.0 * height

        source = instance.transform
        center = visual_center(instance.shape, source)

        results = []
        for step, extra_rotation, factor in steps:
            i = int(step)
            # Offset follows the source rotation
            dx, dy = rotate_vector(i * pixel_x, i * pixel_y, source.rotation)
            scale = Vec2(source.scale_x * float(factor), source.scale_y * float(factor))
            transform = self._place_at_center(
                instance,
                Vec2(center.x + dx, center.y + dy),
                source.rotation + float(extra_rotation),
                scale,
            )
            results.append(instance.derive(
                transform, i,
                modifier_type=constants.LINEAR_ARRAY,
                array_index=i,
                linear_array_index=i,
            ))
        return results

    def _array_group_member(self, instance: Instance, settings: LinearArraySettings,
                            steps: np.ndarray, group_context: GroupContext) -> List[Instance]:
        pixel_x = settings.offset_x / 100.0 * group_context.width
        pixel_y = settings.offset_y / 100.0 * group_context.height

        results = []
        for step, extra_rotation, factor in steps:
            i = int(step)
            dx, dy = rotate_vector(i * pixel_x, i * pixel_y, group_context.rotation)
            transform = self._rigid_group_step(
                instance, group_context, Vec2(dx, dy), float(extra_rotation), float(factor))
            results.append(instance.derive(
                transform, i,
                modifier_type=constants.LINEAR_ARRAY,
                array_index=i,
                linear_array_index=i,
                **self._group_metadata(group_context),
            ))
        return results
