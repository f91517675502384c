"""Instance and InstanceCollection - the data threaded through the processor pipeline"""

from dataclasses import dataclass, field, replace
from typing import Dict, Any, Tuple, Iterable

from shape_modifiers.constants import ORIGINAL_MODIFIER_TYPE
from shape_modifiers.models.shape import Shape
from shape_modifiers.models.transform import Transform, Vec2


@dataclass(frozen=True)
class Instance:
    """One derived (or original) placed copy of a shape

    Each processor stage produces new Instance values; metadata carries
    provenance and is only ever extended, never trimmed.

    Properties:
        shape: Snapshot of the shape this instance places
        transform: Placement (top-left position, rotation, scale)
        index: Position of this instance in its collection
        metadata: Provenance keys (source_instance, array_index, flip flags...)
    """
    shape: Shape
    transform: Transform
    index: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_identity(self) -> bool:
        """True for the untouched seed instance"""
        return self.metadata.get('modifier_type') == ORIGINAL_MODIFIER_TYPE

    def derive(self, transform: Transform, index: int, **metadata) -> 'Instance':
        """Create a new instance derived from this one

        Keeps this instance's metadata and appends the given keys, plus
        source_instance and source_chain pointing back at this instance.

        Args:
            transform: Placement of the new instance
            index: Position of the new instance in its collection
            **metadata: Keys added by the deriving processor

        Returns:
            New Instance
        """
        chain = tuple(self.metadata.get('source_chain', ())) + (self.index,)
        merged = dict(self.metadata)
        merged.update(metadata)
        merged['source_instance'] = self.index
        merged['source_chain'] = chain
        return Instance(self.shape, transform, index, merged)

    def reindexed(self, index: int) -> 'Instance':
        """Return this instance at another list position"""
        if index == self.index:
            return self
        return replace(self, index=index)


@dataclass(frozen=True)
class InstanceCollection:
    """Ordered instances produced for one source shape

    Created fresh for every processing call; carries no identity across
    calls.
    """
    original_shape: Shape
    instances: Tuple[Instance, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.instances)

    def __iter__(self):
        return iter(self.instances)

    def __getitem__(self, item):
        return self.instances[item]

    @staticmethod
    def seed(shape: Shape, metadata: Dict[str, Any] = None) -> 'InstanceCollection':
        """Create the initial collection: one identity instance wrapping shape

        Args:
            shape: Source shape
            metadata: Optional collection-level metadata

        Returns:
            Collection holding a single identity instance
        """
        identity = Instance(
            shape=shape,
            transform=Transform(Vec2(shape.x, shape.y), Vec2(1.0, 1.0), shape.rotation),
            index=0,
            metadata={'modifier_type': ORIGINAL_MODIFIER_TYPE},
        )
        return InstanceCollection(shape, (identity,), dict(metadata or {}))

    def with_instances(self, instances: Iterable[Instance]) -> 'InstanceCollection':
        """Return a collection holding new instances, re-indexed by position

        Args:
            instances: Instances in output order

        Returns:
            New InstanceCollection sharing this one's original shape and metadata
        """
        ordered = tuple(inst.reindexed(i) for i, inst in enumerate(instances))
        return InstanceCollection(self.original_shape, ordered, dict(self.metadata))

    def with_metadata(self, **metadata) -> 'InstanceCollection':
        """Return a copy with collection-level metadata keys added"""
        merged = dict(self.metadata)
        merged.update(metadata)
        return replace(self, metadata=merged)

    def __repr__(self) -> str:
        return f"InstanceCollection(shape={self.original_shape.id!r}, instances={len(self.instances)})"
