"""Modifier records and their typed settings

Each modifier kind has its own frozen settings record; the `MODIFIER_TYPE`
class attribute is the discriminant shared with the processor registry.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import Any, ClassVar, Dict, Union

from shape_modifiers import constants
from shape_modifiers.errors import UnknownModifierType


def _finite(value, default: float) -> float:
    """Coerce to float, replacing None/NaN/inf and junk with default"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(default)
    if not math.isfinite(number):
        return float(default)
    return number


def _count(value, default: int) -> int:
    """Coerce to an integer count between MIN_ARRAY_COUNT and MAX_ARRAY_COUNT"""
    number = _finite(value, default)
    return min(constants.MAX_ARRAY_COUNT, max(constants.MIN_ARRAY_COUNT, int(round(number))))


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


class _SettingsMixin:
    """Shared parsing for settings records"""

    MODIFIER_TYPE: ClassVar[str] = ''
    # camelCase (persisted record) name -> field name
    ALIASES: ClassVar[Dict[str, str]] = {}

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        return dict(constants.DEFAULT_SETTINGS[cls.MODIFIER_TYPE])

    @classmethod
    def from_dict(cls, data: Dict[str, Any] = None):
        """Build settings from a dict, filling gaps with defaults

        Unknown keys are ignored. Values are not validated here; use
        sanitized() before doing geometry with them.
        """
        values = cls.defaults()
        names = {f.name for f in fields(cls)}
        for key, value in (data or {}).items():
            name = cls.ALIASES.get(key, key)
            if name in names:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class LinearArraySettings(_SettingsMixin):
    """Copies along a line; offsets are percent of target width/height"""
    MODIFIER_TYPE: ClassVar[str] = constants.LINEAR_ARRAY
    ALIASES: ClassVar[Dict[str, str]] = {
        'offsetX': 'offset_x',
        'offsetY': 'offset_y',
        'rotationIncrement': 'rotation_increment',
        'rotation': 'rotation_increment',
        'rotateAll': 'rotate_all',
        'scaleStepPercent': 'scale_step_percent',
    }

    count: int = 3
    offset_x: float = 100.0
    offset_y: float = 0.0
    rotation_increment: float = 0.0
    rotate_all: float = 0.0
    scale_step_percent: float = 100.0

    def sanitized(self) -> 'LinearArraySettings':
        d = constants.DEFAULT_SETTINGS[self.MODIFIER_TYPE]
        return LinearArraySettings(
            count=_count(self.count, d['count']),
            offset_x=_finite(self.offset_x, d['offset_x']),
            offset_y=_finite(self.offset_y, d['offset_y']),
            rotation_increment=_finite(self.rotation_increment, d['rotation_increment']),
            rotate_all=_finite(self.rotate_all, d['rotate_all']),
            scale_step_percent=max(constants.MIN_INSTANCE_SCALE * 100.0,
                                   _finite(self.scale_step_percent, d['scale_step_percent'])),
        )


@dataclass(frozen=True)
class CircularArraySettings(_SettingsMixin):
    """Copies around an arc; angles in degrees, radius in pixels"""
    MODIFIER_TYPE: ClassVar[str] = constants.CIRCULAR_ARRAY
    ALIASES: ClassVar[Dict[str, str]] = {
        'startAngle': 'start_angle',
        'endAngle': 'end_angle',
        'centerOffsetX': 'center_offset_x',
        'centerOffsetY': 'center_offset_y',
        'centerX': 'center_offset_x',
        'centerY': 'center_offset_y',
        'rotateEach': 'rotate_each',
        'rotateAll': 'rotate_all',
        'alignToTangent': 'align_to_tangent',
        'pointToCenter': 'align_to_tangent',
    }

    count: int = 8
    radius: float = 100.0
    start_angle: float = 0.0
    end_angle: float = 360.0
    center_offset_x: float = 0.0
    center_offset_y: float = 0.0
    rotate_each: float = 0.0
    rotate_all: float = 0.0
    align_to_tangent: bool = False

    def sanitized(self) -> 'CircularArraySettings':
        d = constants.DEFAULT_SETTINGS[self.MODIFIER_TYPE]
        return CircularArraySettings(
            count=_count(self.count, d['count']),
            radius=abs(_finite(self.radius, d['radius'])),
            start_angle=_finite(self.start_angle, d['start_angle']),
            end_angle=_finite(self.end_angle, d['end_angle']),
            center_offset_x=_finite(self.center_offset_x, d['center_offset_x']),
            center_offset_y=_finite(self.center_offset_y, d['center_offset_y']),
            rotate_each=_finite(self.rotate_each, d['rotate_each']),
            rotate_all=_finite(self.rotate_all, d['rotate_all']),
            align_to_tangent=_flag(self.align_to_tangent),
        )


@dataclass(frozen=True)
class GridArraySettings(_SettingsMixin):
    """Row-major grid; spacing and offsets are percent of target width/height"""
    MODIFIER_TYPE: ClassVar[str] = constants.GRID_ARRAY
    ALIASES: ClassVar[Dict[str, str]] = {
        'spacingX': 'spacing_x',
        'spacingY': 'spacing_y',
        'offsetX': 'offset_x',
        'offsetY': 'offset_y',
    }

    rows: int = 3
    columns: int = 3
    spacing_x: float = 100.0
    spacing_y: float = 100.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def sanitized(self) -> 'GridArraySettings':
        d = constants.DEFAULT_SETTINGS[self.MODIFIER_TYPE]
        return GridArraySettings(
            rows=_count(self.rows, d['rows']),
            columns=_count(self.columns, d['columns']),
            spacing_x=_finite(self.spacing_x, d['spacing_x']),
            spacing_y=_finite(self.spacing_y, d['spacing_y']),
            offset_x=_finite(self.offset_x, d['offset_x']),
            offset_y=_finite(self.offset_y, d['offset_y']),
        )


@dataclass(frozen=True)
class MirrorSettings(_SettingsMixin):
    """Reflection of the whole collection across a vertical (x) or horizontal (y) line"""
    MODIFIER_TYPE: ClassVar[str] = constants.MIRROR
    ALIASES: ClassVar[Dict[str, str]] = {
        'offsetPixels': 'offset',
        'offset_pixels': 'offset',
        'mergeThreshold': 'merge_threshold',
        'mergeThresholdPixels': 'merge_threshold',
        'merge_threshold_pixels': 'merge_threshold',
    }

    axis: str = 'x'
    offset: float = 0.0
    merge_threshold: float = 0.0

    def sanitized(self) -> 'MirrorSettings':
        d = constants.DEFAULT_SETTINGS[self.MODIFIER_TYPE]
        axis = str(self.axis).lower()
        if axis not in constants.MIRROR_AXES:
            axis = d['axis']
        return MirrorSettings(
            axis=axis,
            offset=_finite(self.offset, d['offset']),
            merge_threshold=max(0.0, _finite(self.merge_threshold, d['merge_threshold'])),
        )


ModifierSettings = Union[LinearArraySettings, CircularArraySettings,
                         GridArraySettings, MirrorSettings]

SETTINGS_TYPES = {
    cls.MODIFIER_TYPE: cls
    for cls in (LinearArraySettings, CircularArraySettings, GridArraySettings, MirrorSettings)
}


@dataclass(frozen=True)
class Modifier:
    """An enabled, ordered, typed procedural rule attached to a shape

    Owned and persisted elsewhere; the engine receives it by value.
    """
    id: str
    type: str
    settings: ModifierSettings
    enabled: bool = True
    order: int = 0

    @staticmethod
    def create(settings: ModifierSettings, id: str = None, enabled: bool = True,
               order: int = 0) -> 'Modifier':
        """Build a modifier whose type matches its settings record"""
        modifier_type = settings.MODIFIER_TYPE
        if id is None:
            id = f"modifier:{modifier_type}:{order}"
        return Modifier(id=id, type=modifier_type, settings=settings,
                        enabled=enabled, order=order)

    def with_settings(self, **changes) -> 'Modifier':
        """Return a copy with some settings fields changed"""
        return replace(self, settings=replace(self.settings, **changes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type,
            'enabled': self.enabled,
            'order': self.order,
            'settings': self.settings.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Modifier':
        """Create modifier from a persisted record

        Settings are read from 'settings' (or 'props'); missing fields
        take defaults.

        Args:
            data: Dict with 'id', 'type', 'enabled', 'order', 'settings'

        Returns:
            New Modifier

        Raises:
            UnknownModifierType: If the type has no settings record
        """
        modifier_type = data.get('type')
        modifier_id = data.get('id')
        settings_cls = SETTINGS_TYPES.get(modifier_type)
        if settings_cls is None:
            raise UnknownModifierType(modifier_type, modifier_id)

        settings = settings_cls.from_dict(data.get('settings', data.get('props', {})))
        order = data.get('order', 0)
        return Modifier(
            id=str(modifier_id) if modifier_id is not None else f"modifier:{modifier_type}:{order}",
            type=modifier_type,
            settings=settings,
            enabled=_flag(data.get('enabled', True)),
            order=int(order),
        )
