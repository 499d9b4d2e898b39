"""
Truck Loading Core

This module implements the load planner with:
- Container and box value types
- Stack ordering (non-fragile, heavy, large first)
- Two-phase shelf packing with queryable exclusions
- Volume utilization
"""

from .errors import ExclusionReason, InvalidContainer, InvalidItem
from .dimensions import Dimensions, Position, DEFAULT_TRUCK_DIMENSIONS
from .item import Item, PlacedItem
from .ordering import sort_for_stacking, stacking_key
from .shelf_packer import ExcludedItem, PackingResult, ShelfPacker, pack
from .utilization import calculate_utilization, capacity_overage, total_volume

__all__ = [
    "ExclusionReason",
    "InvalidContainer",
    "InvalidItem",
    "Dimensions",
    "Position",
    "DEFAULT_TRUCK_DIMENSIONS",
    "Item",
    "PlacedItem",
    "sort_for_stacking",
    "stacking_key",
    "ExcludedItem",
    "PackingResult",
    "ShelfPacker",
    "pack",
    "calculate_utilization",
    "capacity_overage",
    "total_volume",
]
