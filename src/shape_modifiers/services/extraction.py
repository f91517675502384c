"""Extraction - turn a finished collection into plain derived shapes.

Also plans how a materializer should sync previously created derived
shapes with a fresh extraction.
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Tuple

from shape_modifiers import constants
from shape_modifiers.models.instance import Instance, InstanceCollection
from shape_modifiers.models.shape import Shape


def derived_shape_id(source_id: str, index: int) -> str:
    return f"{source_id}{constants.DERIVED_ID_SEPARATOR}{index}"


def _scaled(value, factor: float):
    if value is None:
        return None
    return max(constants.MIN_DERIVED_DIMENSION, float(value) * abs(factor))


def to_derived_shape(instance: Instance, position: int) -> Shape:
    """Plain shape value for one instance

    Args:
        instance: Instance from a finished collection
        position: Position of the instance in that collection

    Returns:
        New Shape tagged with provenance in its meta
    """
    source = instance.shape
    transform = instance.transform

    props = dict(source.props)
    for key, factor in (('w', transform.scale_x), ('h', transform.scale_y)):
        if key in props:
            props[key] = _scaled(props[key], factor)

    meta = dict(source.meta)
    meta.update(instance.metadata)
    meta.update({
        'is_derived': True,
        'source_shape_id': source.id,
        'array_index': position,
        'scale_x': transform.scale_x,
        'scale_y': transform.scale_y,
    })

    return replace(
        source,
        id=derived_shape_id(source.id, position),
        x=transform.x,
        y=transform.y,
        rotation=transform.rotation,
        width=_scaled(source.width, transform.scale_x),
        height=_scaled(source.height, transform.scale_y),
        props=props,
        meta=meta,
    )


def extract_shapes(collection: InstanceCollection, include_identity: bool = True) -> List[Shape]:
    """Derived shape values for every instance, in collection order

    Args:
        collection: Finished InstanceCollection
        include_identity: Keep the untouched seed instance

    Returns:
        List of Shape
    """
    shapes = []
    for position, instance in enumerate(collection):
        if not include_identity and instance.is_identity:
            continue
        shapes.append(to_derived_shape(instance, position))
    return shapes


# ========================================
# Materialization diff
# ========================================

@dataclass(frozen=True)
class MaterializationPlan:
    """What a materializer has to do to match a fresh extraction

    Properties:
        create: Derived shapes with no existing counterpart
        update: Derived shapes that changed, carrying the existing id
        delete: Ids of existing derived shapes no longer produced
    """
    create: Tuple[Shape, ...] = ()
    update: Tuple[Shape, ...] = ()
    delete: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.create or self.update or self.delete)


def provenance_key(shape: Shape) -> Tuple[str, int]:
    return shape.meta.get('source_shape_id'), shape.meta.get('array_index')


def plan_materialization(derived: Iterable[Shape], existing: Iterable[Shape],
                         source_shape_id: str = None) -> MaterializationPlan:
    """Diff fresh derived shapes against already materialized ones

    Shapes are matched on (source_shape_id, array_index). Existing shapes
    without the derived flag are never touched, and neither are the derived
    shapes of other sources, so the whole canvas can be passed in.

    Args:
        derived: Output of extract_shapes
        existing: Shapes currently on the canvas
        source_shape_id: Source being synced. Defaults to the sources named
            in derived; pass it when derived is empty so the old copies of
            that source are deleted

    Returns:
        MaterializationPlan
    """
    derived = list(derived)
    if source_shape_id is not None:
        sources = {source_shape_id}
    else:
        sources = {shape.meta.get('source_shape_id') for shape in derived}

    current: Dict[Tuple[str, int], Shape] = {}
    for shape in existing:
        if shape.meta.get('is_derived') and shape.meta.get('source_shape_id') in sources:
            current[provenance_key(shape)] = shape

    create = []
    update = []
    seen = set()
    for shape in derived:
        key = provenance_key(shape)
        seen.add(key)
        match = current.get(key)
        if match is None:
            create.append(shape)
            continue
        candidate = replace(shape, id=match.id)
        if candidate != match:
            update.append(candidate)

    delete = [shape.id for key, shape in current.items() if key not in seen]
    return MaterializationPlan(tuple(create), tuple(update), tuple(delete))
