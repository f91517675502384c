"""
Tests for the grid array processor.

Covers:
- Row-major layout with percentage spacing and offsets
- Rotation/scale pass-through
- Degenerate sizes and count composition
"""
import math
import pytest

from shape_modifiers.models import InstanceCollection, GridArraySettings, LinearArraySettings
from shape_modifiers.services.modifier_processors import GridArrayProcessor, LinearArrayProcessor

from conftest import positions


@pytest.fixture
def processor():
    return GridArrayProcessor()


def run(processor, shape, **settings):
    return processor.process(InstanceCollection.seed(shape), GridArraySettings(**settings))


class TestGridLayout:

    def test_two_by_two(self, processor, square):
        result = run(processor, square, rows=2, columns=2, spacing_x=100, spacing_y=100)
        assert positions(result) == [(0.0, 0.0), (100.0, 0.0), (0.0, 100.0), (100.0, 100.0)]

    def test_row_major_positions_metadata(self, processor, square):
        result = run(processor, square, rows=2, columns=3)
        assert [inst.metadata['grid_position'] for inst in result] == [
            (0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
        assert [inst.metadata['grid_array_index'] for inst in result] == list(range(6))

    def test_spacing_relative_to_size(self, processor, wide_rect):
        result = run(processor, wide_rect, rows=2, columns=2, spacing_x=100, spacing_y=100)
        assert positions(result) == [(10.0, 20.0), (210.0, 20.0), (10.0, 70.0), (210.0, 70.0)]

    def test_offset_shifts_every_cell(self, processor, square):
        result = run(processor, square, rows=1, columns=2, offset_x=50, offset_y=-25)
        assert positions(result) == [(50.0, -25.0), (150.0, -25.0)]

    def test_single_cell_is_identity(self, processor, wide_rect):
        result = run(processor, wide_rect, rows=1, columns=1)
        assert positions(result) == [(wide_rect.x, wide_rect.y)]

    def test_degenerate_rows_clamped(self, processor, square):
        result = run(processor, square, rows=0, columns=3)
        assert len(result) == 3


class TestGridPassThrough:

    def test_rotation_and_scale_unchanged(self, processor, square):
        shrunk = LinearArrayProcessor().process(
            InstanceCollection.seed(square.moved(0.0, 0.0, rotation=0.3)),
            LinearArraySettings(count=2, scale_step_percent=50))
        result = processor.process(shrunk, GridArraySettings(rows=2, columns=2))
        assert [inst.transform.rotation for inst in result] == pytest.approx([0.3] * 8)
        assert [inst.transform.scale_x for inst in result] == pytest.approx([1.0] * 4 + [0.5] * 4)

    def test_count_composition(self, processor, square):
        result = run(processor, square, rows=2, columns=3)
        result = LinearArrayProcessor().process(result, LinearArraySettings(count=2))
        assert len(result) == 12

    def test_source_instance_tracked(self, processor, square):
        first = run(processor, square, rows=1, columns=2)
        second = processor.process(first, GridArraySettings(rows=2, columns=1))
        assert [inst.metadata['source_instance'] for inst in second] == [0, 0, 1, 1]
        assert second[3].metadata['source_chain'] == (0, 1)
