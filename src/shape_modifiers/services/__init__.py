"""Processing services: processors, orchestration, group resolution, extraction"""

from .modifier_stack import ModifierStack, process_modifiers, active_modifiers
from .group_resolver import GroupResolver, ContainerGroupResolver
from .extraction import extract_shapes, plan_materialization, MaterializationPlan
