"""
Record Decoding

Turns loosely typed box records, as read from the box store, into ``Item``
objects. Numeric fields are coerced to floats with missing or unparsable
values defaulting to zero, and dimensions may arrive either as a mapping or
as a JSON-encoded string.

Records that still describe an unusable box after coercion (zero size,
negative weight) are filtered out by ``items_from_records`` so they never
reach the packer.
"""

import json
import logging
import math
import re
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..loading.dimensions import Dimensions
from ..loading.errors import InvalidItem
from ..loading.item import Item

logger = logging.getLogger(__name__)

# fromisoformat before 3.11 only accepts 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def coerce_number(value: Any) -> float:
    """
    Coerce a record field to a float.

    Args:
        value: Raw field value (number, numeric string, None, ...)

    Returns:
        Finite float, or 0.0 when the value is missing or not numeric
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def decode_dimensions(raw: Any) -> Dimensions:
    """
    Decode a dimensions field.

    Args:
        raw: Mapping with length/width/height, a JSON string of one, or None

    Returns:
        Dimensions with missing or invalid fields set to 0.0
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.debug("Undecodable dimensions field: %r", raw)
            raw = None

    if not isinstance(raw, Mapping):
        raw = {}

    return Dimensions(
        length=coerce_number(raw.get("length")),
        width=coerce_number(raw.get("width")),
        height=coerce_number(raw.get("height")),
    )


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; a trailing ``Z`` is read as UTC."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def coerce_flag(value: Any) -> bool:
    """Coerce a fragility flag; strings such as "false" or "0" read as False."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return bool(value)


def _first(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return default


def item_from_record(record: Mapping[str, Any]) -> Item:
    """
    Build a box from a stored record.

    Accepts both camelCase (``isFragile``, ``createdAt``) and snake_case
    field names.

    Args:
        record: Raw record mapping

    Returns:
        Item with coerced fields; not validated
    """
    return Item(
        item_id=str(_first(record, "id", "item_id", default="")),
        dimensions=decode_dimensions(record.get("dimensions")),
        weight=coerce_number(record.get("weight")),
        is_fragile=coerce_flag(_first(record, "isFragile", "is_fragile", default=False)),
        destination=str(record.get("destination") or ""),
        created_at=parse_timestamp(_first(record, "createdAt", "created_at")),
    )


def items_from_records(records: Iterable[Mapping[str, Any]]) -> Tuple[List[Item], List[str]]:
    """
    Decode records and drop the ones the packer cannot accept.

    Args:
        records: Raw record mappings

    Returns:
        (valid_items, rejected_ids)
    """
    items: List[Item] = []
    rejected: List[str] = []

    for record in records:
        item = item_from_record(record)
        try:
            items.append(item.validate())
        except InvalidItem as exc:
            logger.warning("Rejecting box record: %s", exc)
            rejected.append(item.item_id)

    return items, rejected
