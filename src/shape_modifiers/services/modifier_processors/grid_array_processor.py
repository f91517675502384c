"""Grid array - row-major rows x columns copies."""

from typing import List, Optional

import numpy as np

from shape_modifiers import constants
from shape_modifiers.models.group_context import GroupContext
from shape_modifiers.models.instance import Instance, InstanceCollection
from shape_modifiers.models.modifier import GridArraySettings
from shape_modifiers.models.transform import Transform, Vec2
from shape_modifiers.utils.geometry import get_shape_dimensions
from .base_processor import BaseModifierProcessor


class GridArrayProcessor(BaseModifierProcessor):
    """Lay out copies of every instance on a grid.

    Spacing and offset are percentages of the target size. Rotation and
    scale pass through unchanged; only positions move.
    """

    settings_class = GridArraySettings

    def get_name(self) -> str:
        return constants.GRID_ARRAY

    def generate_cells(self, settings: GridArraySettings) -> np.ndarray:
        """Grid cells in row-major order.

        Returns:
            (rows*columns) x 2 integer array [[row, column], ...]
        """
        rows, columns = np.divmod(np.arange(settings.rows * settings.columns), settings.columns)
        return np.column_stack((rows, columns))

    def apply(self, collection: InstanceCollection, settings: GridArraySettings,
              group_context: Optional[GroupContext]) -> List[Instance]:
        cells = self.generate_cells(settings)

        output = []
        for instance in collection:
            if group_context is None:
                width, height = get_shape_dimensions(instance.shape)
            else:
                width, height = group_context.width, group_context.height
            pixel_offset = np.array([settings.offset_x / 100.0 * width, settings.offset_y / 100.0 * height])
            pixel_spacing = np.array([settings.spacing_x / 100.0 * width, settings.spacing_y / 100.0 * height])
            # cells are (row, col); spacing is (x, y)
            deltas = pixel_offset + cells[:, ::-1] * pixel_spacing

            source = instance.transform
            for index, (row, column) in enumerate(cells):
                dx, dy = float(deltas[index, 0]), float(deltas[index, 1])
                if group_context is None:
                    transform = Transform(Vec2(source.x + dx, source.y + dy), source.scale, source.rotation)
                else:
                    transform = self._rigid_group_step(instance, group_context, Vec2(dx, dy))

                output.append(instance.derive(
                    transform, index,
                    modifier_type=constants.GRID_ARRAY,
                    array_index=index,
                    grid_array_index=index,
                    grid_position=(int(row), int(column)),
                    **self._group_metadata(group_context),
                ))
        return output
