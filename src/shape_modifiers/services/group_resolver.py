"""Group resolution - find the composite a shape belongs to."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from shape_modifiers.models.group_context import GroupContext, GroupTransform
from shape_modifiers.models.shape import Shape
from shape_modifiers.utils.geometry import calculate_group_bounds


class GroupResolver(ABC):
    """Supplies the GroupContext for a shape, or None when it stands alone"""

    @abstractmethod
    def resolve(self, shape: Shape) -> Optional[GroupContext]:
        pass


class ContainerGroupResolver(GroupResolver):
    """In-memory resolver over a flat list of canvas shapes.

    Composites are shapes of type 'group'; members point at their
    composite through parent_id. Nested composites resolve to the
    outermost one, and its live transform is the composite shape's own
    position and rotation.
    """

    def __init__(self, shapes: Iterable[Shape] = ()):
        self._logger = logging.getLogger('GroupResolver')
        self._shapes: Dict[str, Shape] = {}
        self._children: Dict[str, List[str]] = {}
        for shape in shapes:
            self.add(shape)

    def add(self, shape: Shape):
        """Register (or replace) a shape"""
        previous = self._shapes.get(shape.id)
        if previous is not None and previous.parent_id is not None:
            siblings = self._children.get(previous.parent_id, [])
            if shape.id in siblings:
                siblings.remove(shape.id)
        self._shapes[shape.id] = shape
        if shape.parent_id is not None:
            self._children.setdefault(shape.parent_id, []).append(shape.id)

    def get(self, shape_id: str) -> Optional[Shape]:
        return self._shapes.get(shape_id)

    def find_top_level_group(self, shape: Shape) -> Optional[Shape]:
        """Outermost composite containing shape (the shape itself if it is one)"""
        top = shape if shape.is_group else None
        seen = {shape.id}
        current = shape
        while current.parent_id is not None and current.parent_id not in seen:
            parent = self._shapes.get(current.parent_id)
            if parent is None:
                break
            if parent.is_group:
                top = parent
            seen.add(parent.id)
            current = parent
        return top

    def get_members(self, group: Shape) -> List[Shape]:
        """Leaf shapes under a composite, depth first in insertion order"""
        members = []
        stack = list(reversed(self._children.get(group.id, [])))
        seen = {group.id}
        while stack:
            child_id = stack.pop()
            if child_id in seen:
                continue
            seen.add(child_id)
            child = self._shapes[child_id]
            if child.is_group:
                stack.extend(reversed(self._children.get(child_id, [])))
            else:
                members.append(child)
        return members

    def resolve(self, shape: Shape) -> Optional[GroupContext]:
        """Build the context of the composite holding shape

        Args:
            shape: Target shape (a member or the composite itself)

        Returns:
            GroupContext, or None if shape is not part of a composite
        """
        group = self.find_top_level_group(shape)
        if group is None:
            return None

        members = self.get_members(group)
        if not members:
            self._logger.debug(f"Group {group.id} has no members")
            return None

        bounds = calculate_group_bounds(members)
        return GroupContext(
            top_left=bounds.top_left,
            bounds=bounds,
            transform=GroupTransform(group.x, group.y, group.rotation),
            members=tuple(members),
            group_id=group.id,
        )
