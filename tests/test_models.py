"""
Tests for the value types.

Covers:
- Shape parsing and serialization
- Settings records: aliases, defaults, clamping of degenerate values
- Modifier records and the unknown-type error
- Instance provenance and InstanceCollection seeding/re-indexing
"""
import math
import pytest

from shape_modifiers import constants
from shape_modifiers.errors import UnknownModifierType, ModifierError
from shape_modifiers.models import (
    Shape, Transform, Vec2, Instance, InstanceCollection, Modifier,
    LinearArraySettings, CircularArraySettings, GridArraySettings, MirrorSettings,
)


# ══════════════════════════════════════════════════════════════════════════
# Shape
# ══════════════════════════════════════════════════════════════════════════

class TestShape:

    def test_from_dict_aliases(self):
        shape = Shape.from_dict({'id': 's1', 'x': 5, 'y': 6, 'w': 30, 'h': 40, 'parentId': 'g'})
        assert (shape.x, shape.y, shape.width, shape.height) == (5.0, 6.0, 30.0, 40.0)
        assert shape.parent_id == 'g'

    def test_from_dict_requires_id(self):
        with pytest.raises(ValueError):
            Shape.from_dict({'x': 1})

    def test_to_dict_omits_unset_size(self):
        data = Shape(id='s').to_dict()
        assert 'width' not in data
        assert data['type'] == 'geo'

    def test_moved_returns_new_value(self, square):
        moved = square.moved(10.0, 20.0)
        assert (moved.x, moved.y) == (10.0, 20.0)
        assert (square.x, square.y) == (0.0, 0.0)

    def test_is_group(self):
        assert Shape(id='g', type='group').is_group
        assert not Shape(id='s').is_group


# ══════════════════════════════════════════════════════════════════════════
# Settings
# ══════════════════════════════════════════════════════════════════════════

class TestSettings:

    def test_defaults(self):
        settings = LinearArraySettings.from_dict({})
        assert settings.count == 3
        assert settings.offset_x == 100.0
        assert settings.scale_step_percent == 100.0

    def test_camel_case_aliases(self):
        settings = LinearArraySettings.from_dict(
            {'count': 5, 'offsetX': 50, 'offsetY': 25, 'rotationIncrement': 15, 'scaleStepPercent': 80})
        assert settings == LinearArraySettings(count=5, offset_x=50, offset_y=25,
                                               rotation_increment=15, scale_step_percent=80)

    def test_circular_aliases(self):
        settings = CircularArraySettings.from_dict({'startAngle': 10, 'endAngle': 90, 'alignToTangent': True})
        assert (settings.start_angle, settings.end_angle, settings.align_to_tangent) == (10, 90, True)

    def test_mirror_aliases(self):
        settings = MirrorSettings.from_dict({'axis': 'y', 'offsetPixels': 12, 'mergeThresholdPixels': 3})
        assert settings == MirrorSettings(axis='y', offset=12, merge_threshold=3)

    def test_unknown_keys_ignored(self):
        settings = GridArraySettings.from_dict({'rows': 2, 'colour': 'red'})
        assert settings.rows == 2

    def test_sanitized_floors_counts(self):
        assert LinearArraySettings(count=0).sanitized().count == 1
        assert LinearArraySettings(count=-4).sanitized().count == 1
        grid = GridArraySettings(rows=0, columns=-1).sanitized()
        assert (grid.rows, grid.columns) == (1, 1)

    def test_sanitized_caps_counts(self):
        assert LinearArraySettings(count=1e12).sanitized().count == constants.MAX_ARRAY_COUNT
        assert CircularArraySettings(count=5000).sanitized().count == constants.MAX_ARRAY_COUNT
        grid = GridArraySettings(rows=1e9, columns=2).sanitized()
        assert (grid.rows, grid.columns) == (constants.MAX_ARRAY_COUNT, 2)

    def test_sanitized_replaces_non_finite(self):
        settings = LinearArraySettings(offset_x=float('nan'), rotate_all=float('inf')).sanitized()
        assert settings.offset_x == 100.0
        assert settings.rotate_all == 0.0

    def test_sanitized_replaces_junk(self):
        settings = CircularArraySettings(radius='wide', count=None).sanitized()
        assert settings.radius == 100.0
        assert settings.count == 8

    def test_sanitized_scale_floor(self):
        assert LinearArraySettings(scale_step_percent=-50).sanitized().scale_step_percent == pytest.approx(1.0)

    def test_sanitized_mirror(self):
        settings = MirrorSettings(axis='Z', merge_threshold=-5).sanitized()
        assert settings.axis == 'x'
        assert settings.merge_threshold == 0.0

    def test_sanitized_flag_from_string(self):
        assert CircularArraySettings(align_to_tangent='false').sanitized().align_to_tangent is False
        assert CircularArraySettings(align_to_tangent='true').sanitized().align_to_tangent is True


# ══════════════════════════════════════════════════════════════════════════
# Modifier
# ══════════════════════════════════════════════════════════════════════════

class TestModifier:

    def test_from_dict(self):
        modifier = Modifier.from_dict({
            'id': 'm1', 'type': 'linear-array', 'enabled': True, 'order': 2,
            'settings': {'count': 4, 'offsetX': 50},
        })
        assert modifier.type == 'linear-array'
        assert modifier.order == 2
        assert isinstance(modifier.settings, LinearArraySettings)
        assert modifier.settings.count == 4

    def test_from_dict_reads_props(self):
        modifier = Modifier.from_dict({'id': 'm', 'type': 'mirror', 'props': {'axis': 'y'}})
        assert modifier.settings.axis == 'y'

    def test_unknown_type(self):
        with pytest.raises(UnknownModifierType) as info:
            Modifier.from_dict({'id': 'm9', 'type': 'spiral'})
        assert info.value.modifier_type == 'spiral'
        assert info.value.modifier_id == 'm9'
        assert isinstance(info.value, ValueError)
        assert isinstance(info.value, ModifierError)

    def test_create_uses_settings_type(self):
        modifier = Modifier.create(GridArraySettings(), order=3)
        assert modifier.type == 'grid-array'
        assert modifier.enabled

    def test_to_dict_round_trip(self):
        modifier = Modifier.create(CircularArraySettings(count=5), id='c', order=1)
        assert Modifier.from_dict(modifier.to_dict()) == modifier

    def test_with_settings(self):
        modifier = Modifier.create(LinearArraySettings(count=2))
        changed = modifier.with_settings(count=7)
        assert changed.settings.count == 7
        assert modifier.settings.count == 2


# ══════════════════════════════════════════════════════════════════════════
# Instances
# ══════════════════════════════════════════════════════════════════════════

class TestInstances:

    def test_seed_is_identity(self, square):
        collection = InstanceCollection.seed(square)
        assert len(collection) == 1
        seed = collection[0]
        assert seed.is_identity
        assert seed.index == 0
        assert seed.transform == Transform(Vec2(0.0, 0.0), Vec2(1.0, 1.0), 0.0)

    def test_seed_uses_shape_rotation(self, rotated_square):
        seed = InstanceCollection.seed(rotated_square)[0]
        assert seed.transform.rotation == pytest.approx(math.pi / 2)

    def test_derive_keeps_and_extends_metadata(self, square):
        seed = InstanceCollection.seed(square)[0]
        first = seed.derive(seed.transform, 1, modifier_type='linear-array', array_index=1, marker='kept')
        second = first.derive(first.transform, 0, modifier_type='mirror', is_mirrored=True)

        assert second.metadata['marker'] == 'kept'
        assert second.metadata['array_index'] == 1
        assert second.metadata['is_mirrored'] is True
        assert second.metadata['source_instance'] == 1
        assert second.metadata['source_chain'] == (0, 1)
        assert not second.is_identity

    def test_with_instances_reindexes(self, square):
        collection = InstanceCollection.seed(square)
        seed = collection[0]
        copies = [Instance(square, seed.transform, index=7), Instance(square, seed.transform, index=7)]
        result = collection.with_instances(copies)
        assert [inst.index for inst in result] == [0, 1]

    def test_with_metadata_is_a_copy(self, square):
        collection = InstanceCollection.seed(square)
        tagged = collection.with_metadata(group_mode=True)
        assert tagged.metadata == {'group_mode': True}
        assert collection.metadata == {}
