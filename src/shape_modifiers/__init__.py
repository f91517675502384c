"""
Shape Modifiers - procedural arrays and mirrors for canvas shapes

Attach an ordered list of modifiers (linear, circular and grid arrays,
mirror) to a shape and get back the deterministic set of derived
instances, optionally treating a whole composite as one rigid body.

Public API: ModifierStack / process_modifiers, the models, extract_shapes.
"""

__version__ = '0.1.0'

from .errors import ModifierError, UnknownModifierType, SceneError
from .models import (
    Vec2, Transform, Shape, Instance, InstanceCollection, Modifier,
    LinearArraySettings, CircularArraySettings, GridArraySettings, MirrorSettings,
    BoundingBox, GroupTransform, GroupContext,
)
from .services import (
    ModifierStack, process_modifiers, GroupResolver, ContainerGroupResolver,
    extract_shapes, plan_materialization, MaterializationPlan,
)
