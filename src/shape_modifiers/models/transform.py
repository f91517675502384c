"""Transform data structures for placing derived instances."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """2D vector for coordinate pairs.
    
    Used for any x/y pair on the canvas:
    - Page positions (top-left anchored, pixels)
    - Offsets and half-size vectors
    - Scale factors
    """
    x: float
    y: float
    
    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))
    
    def __add__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x + other.x, self.y + other.y)
    
    def __sub__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Transform:
    """Transform state: position, scale and rotation of one instance.
    
    pos is the top-left anchor in page pixels, rotation is in radians
    around that anchor, scale multiplies the shape's own dimensions.
    """
    pos: Vec2
    scale: Vec2 = Vec2(1.0, 1.0)
    rotation: float = 0.0
    
    @property
    def x(self) -> float:
        return self.pos.x
    
    @property
    def y(self) -> float:
        return self.pos.y
    
    @property
    def scale_x(self) -> float:
        return self.scale.x
    
    @property
    def scale_y(self) -> float:
        return self.scale.y
    
    def to_dict(self) -> dict:
        return {
            'x': self.pos.x,
            'y': self.pos.y,
            'rotation': self.rotation,
            'scale_x': self.scale.x,
            'scale_y': self.scale.y,
        }
