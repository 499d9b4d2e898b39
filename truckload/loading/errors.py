"""
Load Planning Errors

Malformed input is a contract violation and raises immediately. Boxes that
simply do not fit are not errors: the packer excludes them and records an
``ExclusionReason`` instead.
"""

from enum import Enum
from typing import Optional


class InvalidContainer(ValueError):
    """Raised when a container dimension is not a positive finite number."""


class InvalidItem(ValueError):
    """Raised when a box has non-positive dimensions or a negative weight."""

    def __init__(self, message: str, item_id: Optional[str] = None):
        super().__init__(message)
        self.item_id = item_id


class ExclusionReason(str, Enum):
    """Why the packer left a box out of the layout."""

    ITEM_TOO_LARGE = "item_too_large"
    HEIGHT_EXCEEDED = "height_exceeded"
