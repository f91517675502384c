"""Shape value - a canvas object the modifier engine reads but never mutates"""

from dataclasses import dataclass, field, replace
from typing import Dict, Any, Optional

from shape_modifiers.constants import GROUP_SHAPE_TYPE


@dataclass(frozen=True)
class Shape:
    """Immutable canvas shape

    Position is the top-left anchor in page pixels and rotation (radians)
    turns the shape around that anchor. width/height are optional; the
    geometry utilities fall back to props or a default size when missing.

    Properties:
        id: Shape identifier
        x, y: Top-left anchor position
        rotation: Rotation in radians
        width, height: Optional explicit size
        type: Shape type tag (e.g. 'geo', 'text', 'group')
        props: Opaque type-specific property bag
        meta: Opaque metadata bag
        parent_id: Id of the enclosing composite, if any
    """
    id: str
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    width: Optional[float] = None
    height: Optional[float] = None
    type: str = 'geo'
    props: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)
    parent_id: Optional[str] = None

    @property
    def is_group(self) -> bool:
        """True for composite shapes"""
        return self.type == GROUP_SHAPE_TYPE

    def moved(self, x: float, y: float, rotation: float = None) -> 'Shape':
        """Return a copy placed at a new position (and optionally rotation)"""
        if rotation is None:
            rotation = self.rotation
        return replace(self, x=x, y=y, rotation=rotation)

    # ========================================
    # Serialization
    # ========================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert shape to a plain dictionary

        Returns:
            Dictionary with shape data (optional fields omitted when unset)
        """
        data = {
            'id': self.id,
            'type': self.type,
            'x': self.x,
            'y': self.y,
            'rotation': self.rotation,
            'props': dict(self.props),
            'meta': dict(self.meta),
        }
        if self.width is not None:
            data['width'] = self.width
        if self.height is not None:
            data['height'] = self.height
        if self.parent_id is not None:
            data['parent_id'] = self.parent_id
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Shape':
        """Create shape from dictionary

        Accepts 'w'/'h' as aliases for width/height and 'parentId' for
        parent_id.

        Args:
            data: Dictionary with shape data

        Returns:
            New Shape object

        Raises:
            ValueError: If the dictionary has no id
        """
        if 'id' not in data:
            raise ValueError("Shape data needs an 'id'")

        width = data.get('width', data.get('w'))
        height = data.get('height', data.get('h'))

        return Shape(
            id=str(data['id']),
            x=float(data.get('x', 0.0)),
            y=float(data.get('y', 0.0)),
            rotation=float(data.get('rotation', 0.0)),
            width=float(width) if width is not None else None,
            height=float(height) if height is not None else None,
            type=data.get('type', 'geo'),
            props=dict(data.get('props', {})),
            meta=dict(data.get('meta', {})),
            parent_id=data.get('parent_id', data.get('parentId')),
        )
