"""
Shared fixtures for shape modifier tests.

Provides sample shapes, modifier builders, a two-member composite and a
helper for reading visual centers out of a collection.
"""
import sys
import os
import math
import pytest

# Ensure src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from shape_modifiers.models import (
    Shape, Modifier,
    LinearArraySettings, CircularArraySettings, GridArraySettings, MirrorSettings,
)
from shape_modifiers.services.group_resolver import ContainerGroupResolver
from shape_modifiers.utils.geometry import visual_center


# ── Helpers ──────────────────────────────────────────────────────────────

def centers(collection):
    """Visual centers of every instance as (x, y) tuples"""
    return [tuple(visual_center(inst.shape, inst.transform)) for inst in collection]


def positions(collection):
    """Top-left anchors of every instance as (x, y) tuples"""
    return [(inst.transform.x, inst.transform.y) for inst in collection]


def linear(order=0, **settings):
    return Modifier.create(LinearArraySettings(**settings), order=order)


def circular(order=0, **settings):
    return Modifier.create(CircularArraySettings(**settings), order=order)


def grid(order=0, **settings):
    return Modifier.create(GridArraySettings(**settings), order=order)


def mirror(order=0, **settings):
    return Modifier.create(MirrorSettings(**settings), order=order)


# ── Shapes ───────────────────────────────────────────────────────────────

@pytest.fixture
def square():
    """100x100 shape at the origin"""
    return Shape(id='square', x=0.0, y=0.0, width=100.0, height=100.0)


@pytest.fixture
def wide_rect():
    """200x50 shape at (10, 20)"""
    return Shape(id='rect', x=10.0, y=20.0, width=200.0, height=50.0)


@pytest.fixture
def rotated_square():
    """100x100 shape at the origin turned a quarter turn"""
    return Shape(id='rotated', x=0.0, y=0.0, width=100.0, height=100.0, rotation=math.pi / 2)


# ── Composite ────────────────────────────────────────────────────────────

@pytest.fixture
def group_shapes():
    """Group 'g' at the origin with members a (0,0) and b (200,0), both 100x100

    Member bounding box is 300x100, so the pivot sits at (150, 50).
    """
    return [
        Shape(id='g', type='group', x=0.0, y=0.0),
        Shape(id='a', x=0.0, y=0.0, width=100.0, height=100.0, parent_id='g'),
        Shape(id='b', x=200.0, y=0.0, width=100.0, height=100.0, parent_id='g'),
    ]


@pytest.fixture
def group_resolver(group_shapes):
    return ContainerGroupResolver(group_shapes)


@pytest.fixture
def member_a(group_shapes):
    return group_shapes[1]


@pytest.fixture
def member_b(group_shapes):
    return group_shapes[2]
