"""
Stack Ordering

Loading order used by the shelf packer: non-fragile boxes first, then heavier
before lighter, then larger before smaller. Heavy solid boxes end up forming
the base layers.
"""

from typing import Iterable, List, Tuple

from .item import Item


def stacking_key(item: Item) -> Tuple[bool, float, float]:
    """
    Composite sort key for a box.

    Args:
        item: Box to rank

    Returns:
        (is_fragile, -weight, -volume); smaller keys load first
    """
    return (item.is_fragile, -item.weight, -item.volume)


def sort_for_stacking(items: Iterable[Item]) -> List[Item]:
    """
    Order boxes for loading.

    Every box is validated first. Relative order of boxes with identical
    fragility, weight and volume is not guaranteed.

    Args:
        items: Boxes in any order

    Returns:
        New list with the same boxes in loading order

    Raises:
        InvalidItem: If a box has non-positive dimensions or negative weight
    """
    validated = [item.validate() for item in items]
    return sorted(validated, key=stacking_key)
