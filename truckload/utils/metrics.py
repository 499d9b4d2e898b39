"""
Metrics Calculator for Load Plans

Quality metrics for a packing result and an independent geometric check of
the layout (overlaps, out-of-bounds boxes, fragile boxes carrying load).
"""

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..loading.dimensions import Dimensions
from ..loading.item import Item, PlacedItem
from ..loading.shelf_packer import PackingResult
from ..loading.utilization import calculate_utilization, capacity_overage


def _bounds_arrays(placed: Sequence[PlacedItem]) -> Tuple[np.ndarray, np.ndarray]:
    """Min and max corners of every placed box, shape (n, 3) in (x, y, z)."""
    if not placed:
        empty = np.zeros((0, 3), dtype=np.float64)
        return empty, empty.copy()
    corners = [item.bounds() for item in placed]
    mins = np.array([low for low, _ in corners], dtype=np.float64)
    maxs = np.array([high for _, high in corners], dtype=np.float64)
    return mins, maxs


class LayoutMetrics:
    """
    Calculate metrics for a truck layout.

    Metrics include:
    - Space utilization (capped, whole percent)
    - Capacity overage
    - Packing ratio (boxes loaded / boxes offered)
    - Placed volume ratio
    - Load height and centre of gravity height
    - Geometry violations (overlaps, out of bounds, fragile support)
    - Load summary (box counts, weight, destinations, months)
    """

    @staticmethod
    def calculate_packing_ratio(num_placed: int, total_items: int) -> float:
        """
        Calculate packing ratio.

        Args:
            num_placed: Number of loaded boxes
            total_items: Number of boxes offered

        Returns:
            Packing ratio [0, 1]
        """
        return num_placed / total_items if total_items > 0 else 0.0

    @staticmethod
    def calculate_placed_volume_ratio(result: PackingResult) -> float:
        """Volume of loaded boxes over truck volume, uncapped and unrounded."""
        placed_volume = float(np.sum([item.volume for item in result.placed])) if result.placed else 0.0
        return placed_volume / result.container.volume

    @staticmethod
    def calculate_load_height(result: PackingResult) -> float:
        """Highest box top, normalized by truck height."""
        return result.top / result.container.height

    @staticmethod
    def calculate_center_of_gravity_height(result: PackingResult) -> float:
        """
        Weight-averaged height of box centres, normalized by truck height.

        Boxes with zero weight are counted by volume instead so an
        all-weightless load still reports a meaningful value.

        Returns:
            Centre of gravity height [0, 1]; 0 for an empty layout
        """
        if not result.placed:
            return 0.0

        centres = np.array([item.position.y + item.height / 2 for item in result.placed])
        weights = np.array([item.weight for item in result.placed], dtype=np.float64)
        if weights.sum() <= 0:
            weights = np.array([item.volume for item in result.placed], dtype=np.float64)

        return float(np.average(centres, weights=weights)) / result.container.height

    @staticmethod
    def find_overlaps(placed: Sequence[PlacedItem], tolerance: float = 1e-9) -> List[Tuple[str, str]]:
        """
        Find pairs of boxes whose volumes intersect.

        Boxes that only touch on a face are not overlapping.

        Args:
            placed: Placed boxes
            tolerance: Overlap depth below which boxes count as touching

        Returns:
            List of (item_id, item_id) pairs
        """
        mins, maxs = _bounds_arrays(placed)
        n = len(placed)
        if n < 2:
            return []

        # (n, n, 3) overlap depth per axis
        depth = np.minimum(maxs[:, None, :], maxs[None, :, :]) - np.maximum(mins[:, None, :], mins[None, :, :])
        intersects = np.all(depth > tolerance, axis=2)
        rows, cols = np.nonzero(np.triu(intersects, k=1))

        return [(placed[i].item_id, placed[j].item_id) for i, j in zip(rows, cols)]

    @staticmethod
    def find_out_of_bounds(placed: Sequence[PlacedItem], container: Dimensions,
                           tolerance: float = 1e-9) -> List[str]:
        """
        Find boxes that stick out of the truck.

        Returns:
            Ids of offending boxes
        """
        mins, maxs = _bounds_arrays(placed)
        if len(placed) == 0:
            return []

        limits = np.array([container.length, container.height, container.width], dtype=np.float64)
        outside = np.any(mins < -tolerance, axis=1) | np.any(maxs > limits + tolerance, axis=1)

        return [placed[i].item_id for i in np.nonzero(outside)[0]]

    @staticmethod
    def fragile_support_violations(placed: Sequence[PlacedItem],
                                   tolerance: float = 1e-9) -> List[Tuple[str, str]]:
        """
        Find fragile boxes that sit below the top of a non-fragile box.

        Returns:
            List of (fragile_id, non_fragile_id) pairs
        """
        fragile = [item for item in placed if item.is_fragile]
        solid = [item for item in placed if not item.is_fragile]
        if not fragile or not solid:
            return []

        fragile_floor = np.array([item.position.y for item in fragile])
        solid_top = np.array([item.top for item in solid])
        below = fragile_floor[:, None] < solid_top[None, :] - tolerance
        rows, cols = np.nonzero(below)

        return [(fragile[i].item_id, solid[j].item_id) for i, j in zip(rows, cols)]

    @staticmethod
    def calculate_load_summary(items: Iterable[Item],
                               container: Optional[Dimensions] = None) -> Dict[str, Any]:
        """
        Summarize the boxes assigned to a truck, independent of layout.

        Args:
            items: Boxes assigned to the truck
            container: Truck interior; adds utilization when given

        Returns:
            Dictionary with box and fragile counts, total weight, a
            destination Counter and a Counter of boxes per "YYYY-MM" month
            (boxes without a timestamp are not counted there)
        """
        items = list(items)
        summary = {
            "total_boxes": len(items),
            "fragile_boxes": sum(1 for item in items if item.is_fragile),
            "total_weight": float(np.sum([item.weight for item in items])) if items else 0.0,
            "boxes_by_destination": Counter(item.destination for item in items),
            "boxes_by_month": Counter(
                item.created_at.strftime("%Y-%m") for item in items if item.created_at is not None
            ),
        }
        if container is not None:
            summary["utilization"] = calculate_utilization(items, container)
        return summary

    @staticmethod
    def calculate_all_metrics(result: PackingResult,
                              items: Optional[Sequence[Item]] = None) -> Dict[str, Any]:
        """
        Calculate all available metrics for a layout.

        Args:
            result: Packing result
            items: Boxes offered to the packer; defaults to placed + excluded

        Returns:
            Dictionary of all metrics
        """
        if items is None:
            items = list(result.placed) + [entry.item for entry in result.excluded]

        return {
            "utilization": calculate_utilization(items, result.container),
            "capacity_overage": capacity_overage(items, result.container),
            "packing_ratio": LayoutMetrics.calculate_packing_ratio(result.num_placed, len(items)),
            "placed_volume_ratio": LayoutMetrics.calculate_placed_volume_ratio(result),
            "load_height": LayoutMetrics.calculate_load_height(result),
            "center_of_gravity": LayoutMetrics.calculate_center_of_gravity_height(result),
            "num_placed": result.num_placed,
            "num_excluded": result.num_excluded,
            "num_overlaps": len(LayoutMetrics.find_overlaps(result.placed)),
            "num_out_of_bounds": len(LayoutMetrics.find_out_of_bounds(result.placed, result.container)),
        }

    @staticmethod
    def format_metrics(metrics: Dict[str, Any], title: str = "Load Plan") -> str:
        """
        Format metrics as a text table.

        Args:
            metrics: Dictionary of metrics
            title: Table title

        Returns:
            Multi-line table
        """
        lines = ["=" * 50, f"{title:^50}", "=" * 50]

        for key, value in metrics.items():
            if isinstance(value, float):
                if "ratio" in key or "height" in key or "gravity" in key:
                    lines.append(f"{key:.<40} {value:>8.2%}")
                else:
                    lines.append(f"{key:.<40} {value:>8.4f}")
            elif key in ("utilization", "capacity_overage"):
                lines.append(f"{key:.<40} {value:>7}%")
            else:
                lines.append(f"{key:.<40} {value:>8}")

        lines.append("=" * 50)
        return "\n".join(lines)
