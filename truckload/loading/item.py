"""
Box Model for Truck Loading

Represents a box to be loaded: its size, weight, fragility and delivery
destination. Boxes are immutable; placing one yields a new ``PlacedItem``
carrying the near-corner position assigned by the packer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .dimensions import Dimensions, Position, is_real_number
from .errors import InvalidItem


@dataclass(frozen=True)
class Item:
    """
    Box to be loaded into a truck.

    Attributes:
        item_id (str): Identifier, unique within one packing run
        dimensions (Dimensions): Box size in the truck's unit
        weight (float): Weight, non-negative
        is_fragile (bool): Fragile boxes are loaded above all others
        destination (str): Delivery destination, opaque to the packer
        created_at (datetime): When the box was registered, if known
        position (Position): Near corner once placed, ``None`` otherwise
    """

    item_id: str
    dimensions: Dimensions
    weight: float = 0.0
    is_fragile: bool = False
    destination: str = ""
    created_at: Optional[datetime] = None
    position: Optional[Position] = None

    @property
    def length(self) -> float:
        return self.dimensions.length

    @property
    def width(self) -> float:
        return self.dimensions.width

    @property
    def height(self) -> float:
        return self.dimensions.height

    @property
    def volume(self) -> float:
        """Calculate box volume."""
        return self.dimensions.volume

    @property
    def is_placed(self) -> bool:
        return self.position is not None

    def validate(self) -> "Item":
        """
        Check the box has usable geometry and weight.

        Returns:
            The same box, for chaining

        Raises:
            InvalidItem: If any dimension is not positive or weight is negative
        """
        for name, value in zip(("length", "width", "height"), self.dimensions.as_tuple()):
            if not is_real_number(value) or value <= 0:
                raise InvalidItem(
                    f"Box {self.item_id} has invalid {name}: {value!r}",
                    item_id=self.item_id,
                )
        if not is_real_number(self.weight) or self.weight < 0:
            raise InvalidItem(
                f"Box {self.item_id} has invalid weight: {self.weight!r}",
                item_id=self.item_id,
            )
        return self

    def place(self, position: Position) -> "PlacedItem":
        """Return a placed copy of this box; the box itself is left untouched."""
        return PlacedItem(
            item_id=self.item_id,
            dimensions=self.dimensions,
            weight=self.weight,
            is_fragile=self.is_fragile,
            destination=self.destination,
            created_at=self.created_at,
            position=position,
        )

    def __repr__(self) -> str:
        kind = "fragile" if self.is_fragile else "solid"
        return (f"Item(id={self.item_id}, l={self.length:g}, w={self.width:g}, "
                f"h={self.height:g}, weight={self.weight:g}, {kind})")


@dataclass(frozen=True, repr=False)
class PlacedItem(Item):
    """Box with a position assigned by the packer."""

    def __post_init__(self):
        if self.position is None:
            raise ValueError(f"PlacedItem {self.item_id} requires a position")

    @property
    def top(self) -> float:
        """Height of the box's upper face."""
        return self.position.y + self.height

    def bounds(self) -> Tuple[Tuple[float, float, float], Tuple[float, float, float]]:
        """
        Axis-aligned bounding box in (x, y, z) order.

        Returns:
            (min_corner, max_corner)
        """
        x, y, z = self.position.as_tuple()
        return (x, y, z), (x + self.length, y + self.height, z + self.width)

    def __repr__(self) -> str:
        x, y, z = self.position.as_tuple()
        return f"PlacedItem(id={self.item_id}, pos=({x:g}, {y:g}, {z:g}), fragile={self.is_fragile})"