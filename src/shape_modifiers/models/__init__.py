"""
Shape Modifiers - Data Models

Immutable value types threaded through the modifier pipeline.

Public API: Shape, Instance, InstanceCollection, Modifier and the settings
records, GroupContext and its parts, Vec2/Transform.
"""

from .transform import Vec2, Transform
from .shape import Shape
from .instance import Instance, InstanceCollection
from .modifier import (
    Modifier,
    ModifierSettings,
    LinearArraySettings,
    CircularArraySettings,
    GridArraySettings,
    MirrorSettings,
    SETTINGS_TYPES,
)
from .group_context import BoundingBox, GroupTransform, GroupContext

__all__ = [
    'Vec2', 'Transform', 'Shape', 'Instance', 'InstanceCollection',
    'Modifier', 'ModifierSettings', 'LinearArraySettings', 'CircularArraySettings',
    'GridArraySettings', 'MirrorSettings', 'SETTINGS_TYPES',
    'BoundingBox', 'GroupTransform', 'GroupContext',
]
