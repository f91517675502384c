"""Ordering policies for reflected instances.

The mirror processor hands a policy the incoming instances and their
reflections (reflections[k] mirrors originals[k]); the policy decides the
order in which reflections are emitted after the originals.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from shape_modifiers.models.instance import Instance


class MirrorOrderingPolicy(ABC):
    """Decides the emission order of reflections"""

    name = ''

    @abstractmethod
    def order(self, originals: Sequence[Instance], reflections: Sequence[Instance]) -> List[Instance]:
        """Return reflections in emission order.

        Args:
            originals: Incoming instances, in collection order
            reflections: Reflection of each original, same positions

        Returns:
            Reflections reordered
        """
        pass


class PreserveOrder(MirrorOrderingPolicy):
    """Reflections follow the order of their originals"""

    name = 'preserve'

    def order(self, originals, reflections):
        return list(reflections)


class ReverseWithinSubgroupsOrder(MirrorOrderingPolicy):
    """Reverse reflections inside each compound sub-group.

    A sub-group is the set of originals that share the same
    `source_chain` and `source_instance`, i.e. the copies one earlier stage
    made from one instance. Indices alone repeat across stages; the chain
    keeps a reflection made by an earlier mirror out of the run it was
    reflected from. Sub-groups keep the order of their first appearance;
    inside each, reflections are emitted last to first so a mirrored array
    reads as a continuation of the original run.
    """

    name = 'reverse-subgroups'

    @staticmethod
    def subgroup_key(original: Instance):
        """Full ancestry of the instance an original was copied from"""
        if 'source_instance' not in original.metadata:
            return ('own', original.index)
        chain = tuple(original.metadata.get('source_chain', ()))
        return chain, original.metadata['source_instance']

    def order(self, originals, reflections):
        groups = {}
        for original, reflection in zip(originals, reflections):
            key = self.subgroup_key(original)
            groups.setdefault(key, []).append(reflection)

        ordered = []
        for members in groups.values():
            ordered.extend(reversed(members))
        return ordered


AVAILABLE_ORDERINGS = {
    PreserveOrder.name: PreserveOrder,
    ReverseWithinSubgroupsOrder.name: ReverseWithinSubgroupsOrder,
}

DEFAULT_ORDERING = ReverseWithinSubgroupsOrder.name


def get_ordering(name: str = DEFAULT_ORDERING) -> MirrorOrderingPolicy:
    """Get ordering policy instance by name.

    Raises:
        ValueError: If no policy has that name
    """
    policy_class = AVAILABLE_ORDERINGS.get(name)
    if policy_class is None:
        raise ValueError(f"Unknown mirror ordering '{name}'")
    return policy_class()
