"""
Two-Phase Shelf Packer

Greedy shelf packing of boxes into a truck. Boxes are laid along the truck's
length to form a row; when a row is full a new row starts further along the
width; when the floor of the current shelf is full a new shelf starts on top
of the tallest box of the shelf below.

Packing runs in two phases over the stack-ordered boxes:
1. Non-fragile boxes, starting on the truck floor
2. Fragile boxes, starting above the highest non-fragile box

No box is rotated or split. Boxes that cannot fit are excluded with an
``ExclusionReason`` rather than raising.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

from .dimensions import Dimensions, Position, is_real_number, validate_container
from .errors import ExclusionReason
from .item import Item, PlacedItem
from .ordering import sort_for_stacking

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShelfCursor:
    """
    Cursor state threaded through one packing phase.

    Attributes:
        x (float): Next free position along the length in the current row
        y (float): Floor height of the current shelf
        z (float): Offset of the current row along the width
        row_max_depth (float): Widest box in the current row
        shelf_max_height (float): Tallest box on the current shelf
        top (float): Highest upper face placed so far in this phase
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    row_max_depth: float = 0.0
    shelf_max_height: float = 0.0
    top: float = 0.0


@dataclass(frozen=True)
class ExcludedItem:
    """Box left out of the layout and the reason it did not fit."""

    item: Item
    reason: ExclusionReason

    @property
    def item_id(self) -> str:
        return self.item.item_id


@dataclass
class PackingResult:
    """
    Outcome of one packing run.

    Attributes:
        container (Dimensions): Truck interior that was packed
        gap (float): Spacing used between neighbouring boxes
        placed (List[PlacedItem]): Placed boxes in loading order
        excluded (List[ExcludedItem]): Boxes that could not be loaded
    """

    container: Dimensions
    gap: float = 0.0
    placed: List[PlacedItem] = field(default_factory=list)
    excluded: List[ExcludedItem] = field(default_factory=list)

    @property
    def num_placed(self) -> int:
        return len(self.placed)

    @property
    def num_excluded(self) -> int:
        return len(self.excluded)

    @property
    def excluded_ids(self) -> List[str]:
        return [entry.item_id for entry in self.excluded]

    @property
    def top(self) -> float:
        """Highest upper face of any placed box, 0 for an empty layout."""
        return max((item.top for item in self.placed), default=0.0)

    def __iter__(self):
        return iter(self.placed)

    def __len__(self) -> int:
        return len(self.placed)

    def __repr__(self) -> str:
        return (f"PackingResult(placed={self.num_placed}, excluded={self.num_excluded}, "
                f"top={self.top:g}/{self.container.height:g})")


def place_on_shelf(
    cursor: ShelfCursor,
    item: Item,
    container: Dimensions,
    gap: float = 0.0,
) -> Tuple[Optional[Position], Optional[ExclusionReason], ShelfCursor]:
    """
    Try to place one box at the cursor.

    Steps, in order:
        1. Skip the box if any side exceeds the truck (cursor untouched)
        2. Start a new row if the box overruns the truck length
        3. Start a new shelf if the box overruns the truck width
        4. Skip the box if it would rise above the truck; the row and
           shelf changes from steps 2-3 are kept
        5. Place the box and advance the cursor

    Args:
        cursor: Current phase state
        item: Box to place
        container: Truck interior
        gap: Spacing added to every cursor advance

    Returns:
        (position, reason, new_cursor); exactly one of position and reason
        is set
    """
    if not item.dimensions.fits_within(container):
        return None, ExclusionReason.ITEM_TOO_LARGE, cursor

    length, width, height = (float(side) for side in item.dimensions.as_tuple())
    x, y, z = cursor.x, cursor.y, cursor.z
    row_max_depth = cursor.row_max_depth
    shelf_max_height = cursor.shelf_max_height

    if x + length > container.length:
        x = 0.0
        z += row_max_depth + gap
        row_max_depth = 0.0

    if z + width > container.width:
        x = 0.0
        z = 0.0
        y += shelf_max_height + gap
        shelf_max_height = 0.0
        row_max_depth = 0.0

    if y + height > container.height:
        skipped = replace(
            cursor,
            x=x,
            y=y,
            z=z,
            row_max_depth=row_max_depth,
            shelf_max_height=shelf_max_height,
        )
        return None, ExclusionReason.HEIGHT_EXCEEDED, skipped

    position = Position(x=x, y=y, z=z)
    advanced = ShelfCursor(
        x=x + length + gap,
        y=y,
        z=z,
        row_max_depth=max(row_max_depth, width),
        shelf_max_height=max(shelf_max_height, height),
        top=max(cursor.top, y + height),
    )
    return position, None, advanced


def pack_phase(
    items: Iterable[Item],
    container: Dimensions,
    start_y: float = 0.0,
    gap: float = 0.0,
) -> Tuple[List[PlacedItem], List[ExcludedItem], ShelfCursor]:
    """
    Shelf-pack one group of boxes starting at height ``start_y``.

    Args:
        items: Boxes in loading order
        container: Truck interior
        start_y: Floor height of the first shelf
        gap: Spacing between neighbouring boxes

    Returns:
        (placed, excluded, final_cursor)
    """
    cursor = ShelfCursor(y=float(start_y))
    placed: List[PlacedItem] = []
    excluded: List[ExcludedItem] = []

    for item in items:
        position, reason, cursor = place_on_shelf(cursor, item, container, gap)

        if reason is ExclusionReason.ITEM_TOO_LARGE:
            logger.warning("Box %s is too large for the truck and will be skipped", item.item_id)
            excluded.append(ExcludedItem(item=item, reason=reason))
            continue
        if reason is ExclusionReason.HEIGHT_EXCEEDED:
            logger.warning("Box %s would exceed truck height and will be skipped", item.item_id)
            excluded.append(ExcludedItem(item=item, reason=reason))
            continue

        placed.append(item.place(position))
        logger.debug(
            "Box %s positioned at (%g, %g, %g), shelf height %g",
            item.item_id, position.x, position.y, position.z, cursor.shelf_max_height,
        )

    return placed, excluded, cursor


class ShelfPacker:
    """
    Two-phase shelf packer.

    Example:
        >>> packer = ShelfPacker(gap=0.0)
        >>> result = packer.pack(items, DEFAULT_TRUCK_DIMENSIONS)
        >>> print(result.excluded_ids)
    """

    def __init__(self, gap: float = 0.0):
        """
        Initialize packer.

        Args:
            gap: Non-negative spacing added after every box, row and shelf
        """
        if not is_real_number(gap) or gap < 0:
            raise ValueError(f"Gap must be a non-negative number, got {gap!r}")
        self.gap = float(gap)

    def pack(self, items: Iterable[Item], container: Dimensions) -> PackingResult:
        """
        Compute a layout for the given boxes.

        The input boxes are not modified and need not be ordered. Identical
        inputs always give identical layouts.

        Args:
            items: Boxes to load
            container: Truck interior

        Returns:
            PackingResult with placed and excluded boxes

        Raises:
            InvalidContainer: If a container dimension is not positive
            InvalidItem: If a box has invalid dimensions or weight
        """
        validate_container(container)
        ordered = sort_for_stacking(items)

        solid = [item for item in ordered if not item.is_fragile]
        fragile = [item for item in ordered if item.is_fragile]

        logger.info("Packing %d non-fragile boxes", len(solid))
        solid_placed, solid_excluded, solid_cursor = pack_phase(
            solid, container, start_y=0.0, gap=self.gap
        )

        # fragile boxes never share a shelf with non-fragile ones
        fragile_start = solid_cursor.top + self.gap if solid_placed else 0.0
        logger.info(
            "Max height reached by non-fragile boxes: %g; packing %d fragile boxes from %g",
            solid_cursor.top, len(fragile), fragile_start,
        )
        fragile_placed, fragile_excluded, _ = pack_phase(
            fragile, container, start_y=fragile_start, gap=self.gap
        )

        result = PackingResult(
            container=container,
            gap=self.gap,
            placed=solid_placed + fragile_placed,
            excluded=solid_excluded + fragile_excluded,
        )
        if result.excluded:
            logger.warning("%d boxes could not be loaded", result.num_excluded)
        return result

    def __repr__(self) -> str:
        return f"ShelfPacker(gap={self.gap:g})"


def pack(items: Iterable[Item], container: Dimensions, gap: float = 0.0) -> PackingResult:
    """Pack boxes into a truck with a one-off ``ShelfPacker``."""
    return ShelfPacker(gap=gap).pack(items, container)
