"""
Tests for the headless command-line runner.

Covers:
- Scene loading (valid, missing, malformed, bad records)
- Output to stdout and to a file
- Composite targets processed member by member
"""
import json
import logging
import pytest

from shape_modifiers.errors import SceneError
from shape_modifiers.headless import load_scene, run_scene, main


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger; put it back afterwards"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def write_scene(tmp_path, data, name='scene.json'):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding='utf-8')
    return str(path)


SIMPLE_SCENE = {
    'shape': {'id': 'box', 'x': 0, 'y': 0, 'w': 100, 'h': 100},
    'modifiers': [
        {'id': 'arr', 'type': 'linear-array', 'order': 0, 'settings': {'count': 3, 'offsetX': 100}},
    ],
}

GROUP_SCENE = {
    'shape': {'id': 'g', 'type': 'group', 'x': 0, 'y': 0},
    'shapes': [
        {'id': 'a', 'x': 0, 'y': 0, 'w': 100, 'h': 100, 'parentId': 'g'},
        {'id': 'b', 'x': 200, 'y': 0, 'w': 100, 'h': 100, 'parentId': 'g'},
    ],
    'modifiers': [
        {'id': 'arr', 'type': 'linear-array', 'settings': {'count': 2, 'offsetX': 100}},
    ],
}


class TestLoadScene:

    def test_valid_scene(self, tmp_path):
        scene = load_scene(write_scene(tmp_path, SIMPLE_SCENE))
        assert scene['shape'].id == 'box'
        assert scene['shape'].width == 100.0
        assert len(scene['modifiers']) == 1
        assert [s.id for s in scene['shapes']] == ['box']

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneError):
            load_scene(str(tmp_path / 'nope.json'))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{not json', encoding='utf-8')
        with pytest.raises(SceneError):
            load_scene(str(path))

    def test_missing_shape(self, tmp_path):
        with pytest.raises(SceneError):
            load_scene(write_scene(tmp_path, {'modifiers': []}))

    def test_shape_without_id(self, tmp_path):
        with pytest.raises(SceneError):
            load_scene(write_scene(tmp_path, {'shape': {'x': 1}}))

    def test_bad_modifier_records_skipped(self, tmp_path, caplog):
        data = dict(SIMPLE_SCENE)
        data['modifiers'] = SIMPLE_SCENE['modifiers'] + [{'id': 'z', 'type': 'twirl'}, 'junk']
        with caplog.at_level(logging.WARNING, logger='Headless'):
            scene = load_scene(write_scene(tmp_path, data))
        assert [m.id for m in scene['modifiers']] == ['arr']
        assert 'twirl' in caplog.text


class TestRunScene:

    def test_single_shape(self, tmp_path):
        result = run_scene(load_scene(write_scene(tmp_path, SIMPLE_SCENE)))
        assert result['target'] == 'box'
        shapes = result['results'][0]['shapes']
        assert [s['x'] for s in shapes] == pytest.approx([0.0, 100.0, 200.0])
        assert result['results'][0]['metadata']['processed_modifiers'] == ['arr']

    def test_group_target(self, tmp_path):
        result = run_scene(load_scene(write_scene(tmp_path, GROUP_SCENE)))
        assert [r['source_shape_id'] for r in result['results']] == ['a', 'b']
        b_shapes = result['results'][1]['shapes']
        assert [s['x'] for s in b_shapes] == pytest.approx([200.0, 500.0])


class TestMain:

    def test_prints_json(self, tmp_path, capsys):
        assert main([write_scene(tmp_path, SIMPLE_SCENE)]) == 0
        output = json.loads(capsys.readouterr().out)
        assert len(output['results'][0]['shapes']) == 3

    def test_writes_file(self, tmp_path):
        out = tmp_path / 'derived.json'
        assert main([write_scene(tmp_path, SIMPLE_SCENE), '-o', str(out), '--skip-identity']) == 0
        output = json.loads(out.read_text(encoding='utf-8'))
        # A linear array leaves no untouched seed behind
        assert len(output['results'][0]['shapes']) == 3

    def test_missing_file_exit_code(self, tmp_path, capsys):
        assert main([str(tmp_path / 'nope.json')]) == 1
        assert 'Error' in capsys.readouterr().err
