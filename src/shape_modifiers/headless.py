"""Headless modifier runner - CLI entry point.

Reads a JSON scene holding one target shape, its modifier records and
optionally the other canvas shapes (for composites), runs the modifier
stack and writes the derived shapes as JSON.

Usage:
    python -m shape_modifiers <scene_file> [-o OUTPUT_FILE] [--skip-identity] [-v]

Examples:
    python -m shape_modifiers scene.json
    python -m shape_modifiers scene.json -o derived.json --skip-identity
"""

import sys
import os
import json
import argparse
import logging

from shape_modifiers.errors import SceneError, UnknownModifierType
from shape_modifiers.models.modifier import Modifier
from shape_modifiers.models.shape import Shape
from shape_modifiers.services.extraction import extract_shapes
from shape_modifiers.services.group_resolver import ContainerGroupResolver
from shape_modifiers.services.modifier_stack import ModifierStack
from shape_modifiers.utils.logger import configure_logging

logger = logging.getLogger('Headless')


def load_scene(file_path: str) -> dict:
    """Read and validate a scene file.

    Args:
        file_path: Path to the JSON scene.

    Returns:
        Dict with 'shape' (Shape), 'modifiers' (list of Modifier) and
        'shapes' (list of Shape, target included).

    Raises:
        SceneError: If the file is missing, is not JSON, or has no usable shape.
    """
    if not os.path.isfile(file_path):
        raise SceneError(f"Scene file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SceneError(f"Scene file is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('shape'), dict):
        raise SceneError("Scene needs a 'shape' object")

    try:
        shape = Shape.from_dict(data['shape'])
    except (TypeError, ValueError) as e:
        raise SceneError(f"Invalid target shape: {e}") from e

    return {
        'shape': shape,
        'modifiers': _parse_modifiers(data.get('modifiers', [])),
        'shapes': _parse_shapes(data.get('shapes', []), shape),
    }


def _parse_modifiers(records) -> list:
    """Modifier records to Modifier objects, skipping bad records."""
    modifiers = []
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"Skipping modifier #{i}: not an object")
            continue
        try:
            modifiers.append(Modifier.from_dict(record))
        except UnknownModifierType as e:
            logger.warning(f"Skipping modifier #{i}: {e}")
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Skipping modifier #{i}: invalid record ({e})")
    return modifiers


def _parse_shapes(records, target: Shape) -> list:
    """Other canvas shapes; the target replaces any record with its id."""
    shapes = []
    for i, record in enumerate(records):
        try:
            shape = Shape.from_dict(record)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Skipping shape #{i}: {e}")
            continue
        if shape.id != target.id:
            shapes.append(shape)
    shapes.append(target)
    return shapes


def run_scene(scene: dict, include_identity: bool = True) -> dict:
    """Process a loaded scene.

    A composite target processes every member with one shared context.

    Returns:
        JSON-ready dict with one entry per processed source shape.
    """
    resolver = ContainerGroupResolver(scene['shapes'])
    stack = ModifierStack(resolver)
    target = scene['shape']

    if target.is_group:
        group_context = resolver.resolve(target)
        members = list(group_context.members) if group_context is not None else []
        collections = stack.process_group(members, scene['modifiers'])
    else:
        collections = [stack.process(target, scene['modifiers'])]

    results = []
    for collection in collections:
        results.append({
            'source_shape_id': collection.original_shape.id,
            'metadata': collection.metadata,
            'shapes': [s.to_dict() for s in extract_shapes(collection, include_identity)],
        })
    return {'target': target.id, 'results': results}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Apply shape modifiers to a scene and print the derived shapes (headless).',
    )
    parser.add_argument(
        'scene_file',
        help='Path to JSON scene file.',
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output JSON file (default: stdout).',
    )
    parser.add_argument(
        '--skip-identity',
        action='store_true',
        help='Leave the untouched source instance out of the output.',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    # Logging goes to stderr when the result itself is printed
    configure_logging(args.verbose, sys.stdout if args.output else sys.stderr)

    scene_path = os.path.abspath(args.scene_file)
    try:
        scene = load_scene(scene_path)
    except SceneError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = run_scene(scene, include_identity=not args.skip_identity)
    text = json.dumps(result, indent=2)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        total = sum(len(r['shapes']) for r in result['results'])
        print(f"Wrote {total} shape(s) to {os.path.abspath(args.output)}")
    else:
        print(text)
    return 0


if __name__ == '__main__':
    sys.exit(main())
