"""Base class for modifier processors.

Each modifier kind is a self-contained processor that defines:
- Its settings record (the discriminant it answers to)
- How one InstanceCollection becomes the next
- How a composite is moved as one rigid body in group mode
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from shape_modifiers import constants
from shape_modifiers.models.group_context import GroupContext
from shape_modifiers.models.instance import Instance, InstanceCollection
from shape_modifiers.models.transform import Transform, Vec2
from shape_modifiers.utils.geometry import rotate_vector, top_left_from_center, visual_center


class BaseModifierProcessor(ABC):
    """Abstract base class for modifier processors.

    Subclasses must implement:
    - get_name(): Return the modifier type discriminant (e.g., "linear-array")
    - apply(): Produce the output instances for sanitized settings

    Processors hold no state between calls; the same inputs always give
    the same collection.
    """

    # Settings record this processor consumes
    settings_class = None

    def __init__(self):
        self._logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def get_name(self) -> str:
        """Return the modifier type this processor handles.

        Returns:
            Type string (e.g., "linear-array", "mirror")
        """
        pass

    def get_display_name(self) -> str:
        """Return human readable name (e.g., "Linear Array")"""
        return constants.MODIFIER_DISPLAY_NAMES.get(self.get_name(), self.get_name())

    def accepts(self, settings) -> bool:
        """True when settings can be fed to this processor"""
        return isinstance(settings, (self.settings_class, dict))

    @abstractmethod
    def apply(self, collection: InstanceCollection, settings,
              group_context: Optional[GroupContext]) -> List[Instance]:
        """Calculate output instances.

        Args:
            collection: Input collection (output of the previous stage)
            settings: Sanitized settings record
            group_context: Composite context, or None in single-shape mode

        Returns:
            Output instances in order (indices are reassigned afterwards)
        """
        pass

    def process(self, collection: InstanceCollection, settings,
                group_context: Optional[GroupContext] = None) -> InstanceCollection:
        """Run this processor over a collection.

        Settings may be the typed record or a plain dict; either way they
        are clamped before any geometry is done, so malformed values never
        raise.

        Args:
            collection: Input collection
            settings: Settings record (or dict of settings fields)
            group_context: Optional composite context

        Returns:
            New InstanceCollection
        """
        if isinstance(settings, dict):
            settings = self.settings_class.from_dict(settings)
        settings = settings.sanitized()

        instances = self.apply(collection, settings, group_context)
        result = collection.with_instances(instances)
        self._logger.debug(
            f"{self.get_name()}: {len(collection)} -> {len(result)} instances"
            f"{' (group mode)' if group_context is not None else ''}"
        )
        return result

    # ========================================
    # Shared transform helpers
    # ========================================

    def _place_at_center(self, instance: Instance, center: Vec2, rotation: float,
                         scale: Vec2 = None) -> Transform:
        """Transform putting the instance's visual center at center"""
        if scale is None:
            scale = instance.transform.scale
        pos = top_left_from_center(instance.shape, center, rotation, scale.x, scale.y)
        return Transform(pos, scale, rotation)

    def _rigid_group_step(self, instance: Instance, group_context: GroupContext,
                          delta: Vec2, angle: float = 0.0, factor: float = 1.0) -> Transform:
        """Move one member of a composite as part of the whole.

        The member keeps its offset from the group pivot; that offset is
        scaled by factor and turned by angle, then the pivot itself moves
        by delta.

        Args:
            instance: Member instance
            group_context: Resolved composite context
            delta: Translation of the group pivot
            angle: Extra rotation of the whole composite (radians)
            factor: Uniform scale of the whole composite

        Returns:
            Transform of the moved member
        """
        pivot = group_context.pivot
        center = visual_center(instance.shape, instance.transform)
        rel_x, rel_y = rotate_vector((center.x - pivot.x) * factor,
                                     (center.y - pivot.y) * factor, angle)
        new_center = Vec2(pivot.x + delta.x + rel_x, pivot.y + delta.y + rel_y)
        scale = Vec2(instance.transform.scale_x * factor, instance.transform.scale_y * factor)
        return self._place_at_center(instance, new_center, instance.transform.rotation + angle, scale)

    @staticmethod
    def _group_metadata(group_context: Optional[GroupContext]) -> dict:
        if group_context is None:
            return {}
        return {'is_group_clone': True, 'group_id': group_context.group_id}
