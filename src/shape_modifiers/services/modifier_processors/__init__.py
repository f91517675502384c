"""Modifier processor plugin system.

Each processor handles one modifier type and turns one InstanceCollection
into the next.
"""

from .base_processor import BaseModifierProcessor
from .linear_array_processor import LinearArrayProcessor
from .circular_array_processor import CircularArrayProcessor
from .grid_array_processor import GridArrayProcessor
from .mirror_processor import MirrorProcessor
from .mirror_ordering import (
    MirrorOrderingPolicy,
    PreserveOrder,
    ReverseWithinSubgroupsOrder,
    get_ordering,
)
from shape_modifiers import constants

# Registry of available processors, keyed by modifier type
AVAILABLE_PROCESSORS = {
    constants.LINEAR_ARRAY: LinearArrayProcessor,
    constants.CIRCULAR_ARRAY: CircularArrayProcessor,
    constants.GRID_ARRAY: GridArrayProcessor,
    constants.MIRROR: MirrorProcessor,
}

def get_processor(modifier_type: str) -> BaseModifierProcessor:
    """Get processor instance by modifier type.
    
    Args:
        modifier_type: Modifier type identifier
        
    Returns:
        Processor instance or None if not found
    """
    processor_class = AVAILABLE_PROCESSORS.get(modifier_type)
    if processor_class:
        return processor_class()
    return None

def get_available_processors():
    """Get list of available modifier types.
    
    Returns:
        List of (name, display_name) tuples
    """
    processors = []
    for name, cls in AVAILABLE_PROCESSORS.items():
        instance = cls()
        processors.append((name, instance.get_display_name()))
    return processors
