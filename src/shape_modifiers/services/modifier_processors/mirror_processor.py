"""Mirror - reflect the whole current collection across a line."""

from typing import List, Optional

import numpy as np

from shape_modifiers import constants
from shape_modifiers.models.group_context import GroupContext
from shape_modifiers.models.instance import Instance, InstanceCollection
from shape_modifiers.models.modifier import MirrorSettings
from shape_modifiers.models.transform import Vec2
from shape_modifiers.utils.geometry import visual_center
from .base_processor import BaseModifierProcessor
from .mirror_ordering import MirrorOrderingPolicy, get_ordering


class MirrorProcessor(BaseModifierProcessor):
    """Reflect every incoming instance across a vertical or horizontal line.

    Unlike the arrays, the mirror works on the collection as a whole, so
    whatever compound layout came before it is mirrored as one piece.
    Originals are kept first and unchanged; reflections follow in the
    order chosen by the ordering policy, and a reflection whose center
    lands too close to an already emitted instance is merged away.

    The line runs through the center of the group bounding box in group
    mode. For a single shape it runs through the center of the box around
    the instance anchors (top-left positions), not their visual bounds, so
    a lone shape at the origin mirrors across x = 0 and the line does not
    move when the instances are rotated or scaled.

    Flips are recorded as metadata flags rather than negative scale.
    """

    settings_class = MirrorSettings

    def __init__(self, ordering: MirrorOrderingPolicy = None):
        super().__init__()
        self.ordering = ordering if ordering is not None else get_ordering()

    def get_name(self) -> str:
        return constants.MIRROR

    def mirror_line(self, collection: InstanceCollection, settings: MirrorSettings,
                    group_context: Optional[GroupContext] = None) -> float:
        """Coordinate of the reflection line.

        x for axis 'x' (a vertical line), y for axis 'y'. The line runs
        through the center of the group bounding box in group mode, else
        through the center of the box around the instance anchors, then
        moves by the pixel offset.
        """
        axis = 0 if settings.axis == 'x' else 1
        if group_context is not None:
            center = group_context.bounds.center
            base = center.x if axis == 0 else center.y
        else:
            anchors = np.array([[inst.transform.x, inst.transform.y] for inst in collection])
            base = (anchors[:, axis].min() + anchors[:, axis].max()) / 2.0
        return float(base) + settings.offset

    def reflect(self, instance: Instance, settings: MirrorSettings, line: float) -> Instance:
        """Reflection of one instance (the input is left untouched)"""
        center = visual_center(instance.shape, instance.transform)
        rotation = instance.transform.rotation
        metadata = dict(instance.metadata)

        if settings.axis == 'x':
            mirrored_center = Vec2(2.0 * line - center.x, center.y)
            mirrored_rotation = np.pi - rotation
            flip_key = 'is_flipped_x'
        else:
            mirrored_center = Vec2(center.x, 2.0 * line - center.y)
            mirrored_rotation = -rotation
            flip_key = 'is_flipped_y'

        transform = self._place_at_center(instance, mirrored_center, float(mirrored_rotation))
        return instance.derive(
            transform, instance.index,
            modifier_type=constants.MIRROR,
            is_mirrored=True,
            mirror_axis=settings.axis,
            mirror_offset=settings.offset,
            mirror_line=line,
            **{flip_key: not metadata.get(flip_key, False)},
        )

    def apply(self, collection: InstanceCollection, settings: MirrorSettings,
              group_context: Optional[GroupContext]) -> List[Instance]:
        originals = list(collection)
        if not originals:
            return []

        line = self.mirror_line(collection, settings, group_context)
        reflections = [self.reflect(inst, settings, line) for inst in originals]
        ordered = self.ordering.order(originals, reflections)

        threshold = settings.merge_threshold
        centers = [tuple(visual_center(inst.shape, inst.transform)) for inst in originals]
        output = list(originals)
        merged = 0
        for reflection in ordered:
            center = visual_center(reflection.shape, reflection.transform)
            if threshold > 0:
                emitted = np.array(centers)
                gaps = np.hypot(emitted[:, 0] - center.x, emitted[:, 1] - center.y)
                if gaps.min() < threshold:
                    merged += 1
                    continue
            output.append(reflection)
            centers.append((center.x, center.y))

        if merged:
            self._logger.debug(f"Merged {merged} reflection(s) within {threshold}px")
        return output
