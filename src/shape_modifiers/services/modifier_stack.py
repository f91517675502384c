"""Modifier stack - folds an ordered modifier list over one shape."""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from shape_modifiers.models.group_context import GroupContext
from shape_modifiers.models.instance import InstanceCollection
from shape_modifiers.models.modifier import Modifier
from shape_modifiers.models.shape import Shape
from shape_modifiers.services.group_resolver import GroupResolver
from shape_modifiers.services.modifier_processors import AVAILABLE_PROCESSORS, BaseModifierProcessor

Listener = Callable[[Shape, InstanceCollection], None]


def active_modifiers(modifiers: Iterable[Modifier]) -> List[Modifier]:
    """Enabled modifiers by ascending order; ties keep their input order"""
    return sorted((m for m in modifiers if m.enabled), key=lambda m: m.order)


class ModifierStack:
    """Runs modifiers through their processors in order.

    Each call resolves the group context once, seeds a collection with the
    identity instance and folds every enabled modifier over it. Unknown
    types are logged and skipped. Listeners registered on this stack hear
    about every finished collection.
    """

    def __init__(self, resolver: GroupResolver = None,
                 processors: Dict[str, BaseModifierProcessor] = None):
        """Initialize stack

        Args:
            resolver: Default group resolver (None = single-shape mode)
            processors: Processor instances keyed by modifier type
                (default: one of each registered processor)
        """
        self._logger = logging.getLogger('ModifierStack')
        self.resolver = resolver
        if processors is None:
            processors = {name: cls() for name, cls in AVAILABLE_PROCESSORS.items()}
        self._processors = dict(processors)
        self._listeners: List[Listener] = []

    # ========================================
    # Listeners
    # ========================================

    def add_listener(self, listener: Listener):
        """Register a callable receiving (shape, collection) after each run"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, shape: Shape, collection: InstanceCollection):
        for listener in list(self._listeners):
            listener(shape, collection)

    # ========================================
    # Processing
    # ========================================

    def get_processor(self, modifier_type: str) -> Optional[BaseModifierProcessor]:
        return self._processors.get(modifier_type)

    def process(self, shape: Shape, modifiers: Sequence[Modifier],
                resolver: GroupResolver = None) -> InstanceCollection:
        """Apply modifiers to a shape

        Args:
            shape: Source shape
            modifiers: Modifier records in any order
            resolver: Group resolver for this call (default: the stack's)

        Returns:
            Final InstanceCollection (at least the identity instance)
        """
        resolver = resolver if resolver is not None else self.resolver
        group_context = resolver.resolve(shape) if resolver is not None else None
        return self.run(shape, modifiers, group_context)

    def process_group(self, members: Sequence[Shape], modifiers: Sequence[Modifier],
                      resolver: GroupResolver = None) -> List[InstanceCollection]:
        """Apply modifiers to every member of one composite

        The context is resolved once from the first member and shared, so
        all members move as one rigid body.

        Args:
            members: Member shapes of the composite
            modifiers: Modifier records
            resolver: Group resolver (default: the stack's)

        Returns:
            One collection per member, in member order
        """
        if not members:
            return []
        resolver = resolver if resolver is not None else self.resolver
        group_context = resolver.resolve(members[0]) if resolver is not None else None
        return [self.run(member, modifiers, group_context) for member in members]

    def run(self, shape: Shape, modifiers: Sequence[Modifier],
            group_context: Optional[GroupContext] = None) -> InstanceCollection:
        """Fold modifiers over shape with an already resolved context"""
        state = InstanceCollection.seed(shape)
        processed = []
        skipped = []

        for modifier in active_modifiers(modifiers):
            processor = self._processors.get(modifier.type)
            if processor is None:
                self._logger.warning(f"Skipping modifier {modifier.id}: unknown type '{modifier.type}'")
                skipped.append(modifier.id)
                continue
            if not processor.accepts(modifier.settings):
                self._logger.warning(
                    f"Skipping modifier {modifier.id}: {type(modifier.settings).__name__} "
                    f"does not match type '{modifier.type}'"
                )
                skipped.append(modifier.id)
                continue

            state = processor.process(state, modifier.settings, group_context)
            processed.append(modifier.id)

        state = state.with_metadata(
            processed_modifiers=processed,
            skipped_modifiers=skipped,
            group_mode=group_context is not None,
        )
        self._logger.debug(f"Shape {shape.id}: {len(processed)} modifier(s) -> {len(state)} instance(s)")
        self._notify(shape, state)
        return state


def process_modifiers(shape: Shape, modifiers: Sequence[Modifier],
                      resolver: GroupResolver = None) -> InstanceCollection:
    """One-shot processing with a fresh stack"""
    return ModifierStack(resolver).process(shape, modifiers)
