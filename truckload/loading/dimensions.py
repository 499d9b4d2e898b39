"""
Container Dimensions

Value types for the usable interior of a truck and for near-corner
positions inside it.

Axis convention: x runs along the length, y is vertical (height) and z runs
along the width.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Tuple

from .errors import InvalidContainer


@dataclass(frozen=True)
class Dimensions:
    """
    Axis-aligned box size.

    Attributes:
        length (float): Extent along x
        width (float): Extent along z
        height (float): Extent along y (vertical)
    """

    length: float
    width: float
    height: float

    @property
    def volume(self) -> float:
        """Calculate box volume."""
        return float(self.length) * float(self.width) * float(self.height)

    def as_tuple(self) -> Tuple[float, float, float]:
        """Get dimensions as tuple (l, w, h)."""
        return (self.length, self.width, self.height)

    def fits_within(self, other: "Dimensions") -> bool:
        """True if no side exceeds the matching side of ``other`` (no rotation)."""
        return (
            self.length <= other.length
            and self.width <= other.width
            and self.height <= other.height
        )

    def __repr__(self) -> str:
        return f"Dimensions(l={self.length:g}, w={self.width:g}, h={self.height:g})"


@dataclass(frozen=True)
class Position:
    """Near corner of a placed box: the corner with the smallest coordinates."""

    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


def is_real_number(value: Any) -> bool:
    """True for finite real numbers, numpy scalars included; bools are not numbers here."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_container(container: Dimensions) -> Dimensions:
    """
    Check that a container can be packed into.

    Args:
        container: Truck interior dimensions

    Returns:
        The same container, for chaining

    Raises:
        InvalidContainer: If any dimension is not a positive finite number
    """
    for name, value in zip(("length", "width", "height"), container.as_tuple()):
        if not is_real_number(value) or value <= 0:
            raise InvalidContainer(
                f"Container {name} must be a positive number, got {value!r}"
            )
    return container


# 10 m x 2.5 m x 3 m box truck, in centimetres
DEFAULT_TRUCK_DIMENSIONS = Dimensions(length=1000.0, width=250.0, height=300.0)
