"""
Space Utilization

Fraction of the truck volume taken up by box volumes. Utilization is computed
from raw box volumes only: it ignores positions and counts boxes whether or
not the packer managed to place them.
"""

import math
from typing import Iterable

from .dimensions import Dimensions, validate_container
from .item import Item

CUBIC_CM_PER_CUBIC_M = 1_000_000


def total_volume(items: Iterable[Item]) -> float:
    """Sum of box volumes."""
    return sum(item.volume for item in items)


def _raw_percentage(items: Iterable[Item], container: Dimensions) -> float:
    validate_container(container)
    return total_volume(items) / container.volume * 100


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_utilization(items: Iterable[Item], container: Dimensions) -> int:
    """
    Calculate space utilization percentage.

    Args:
        items: Boxes assigned to the truck
        container: Truck interior

    Returns:
        Whole percentage in [0, 100], capped at 100

    Raises:
        InvalidContainer: If a container dimension is not positive
    """
    return min(_round_half_up(_raw_percentage(items, container)), 100)


def capacity_overage(items: Iterable[Item], container: Dimensions) -> int:
    """
    Percentage by which box volume exceeds the truck volume.

    Used for the "boxes exceed truck capacity by N%" warning; 0 when the
    boxes fit by volume.
    """
    return max(_round_half_up(_raw_percentage(items, container)) - 100, 0)


def container_volume_m3(container: Dimensions) -> float:
    """Truck volume in cubic metres, for dimensions given in centimetres."""
    return validate_container(container).volume / CUBIC_CM_PER_CUBIC_M
