"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import numpy as np
import pytest

from truckload.loading.dimensions import DEFAULT_TRUCK_DIMENSIONS, Dimensions
from truckload.loading.item import Item
from truckload.utils.config import get_default_config


def make_item(item_id, length, width, height, weight=1.0, fragile=False, destination=""):
    """Shorthand box constructor for tests."""
    return Item(
        item_id=item_id,
        dimensions=Dimensions(length, width, height),
        weight=weight,
        is_fragile=fragile,
        destination=destination,
    )


@pytest.fixture
def make_box():
    """Factory for boxes with positional dimensions."""
    return make_item


@pytest.fixture
def truck():
    """Default 1000 x 250 x 300 cm truck."""
    return DEFAULT_TRUCK_DIMENSIONS


@pytest.fixture
def sample_boxes():
    """Five mixed boxes bound for different retailers."""
    created = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)
    return [
        Item("BOX001", Dimensions(30, 20, 15), 5.2, False, "Walmart", created),
        Item("BOX002", Dimensions(25, 25, 10), 2.8, True, "Amazon", created),
        Item("BOX003", Dimensions(40, 30, 25), 12.5, False, "Flipkart", created),
        Item("BOX004", Dimensions(15, 15, 20), 1.5, True, "JioMart", created),
        Item("BOX005", Dimensions(35, 25, 18), 8.7, False, "Blinkit", created),
    ]


@pytest.fixture
def random_boxes():
    """Sixty random boxes, a third of them fragile."""
    rng = np.random.RandomState(7)
    boxes = []
    for i in range(60):
        length, width, height = rng.uniform(5.0, 25.0, size=3)
        boxes.append(make_item(
            f"R{i:03d}",
            float(length), float(width), float(height),
            weight=float(rng.uniform(0.5, 30.0)),
            fragile=bool(i % 3 == 0),
        ))
    return boxes


@pytest.fixture
def small_truck():
    return Dimensions(120.0, 80.0, 200.0)


@pytest.fixture(scope="session")
def test_config():
    """Configuration as read from config/default.yaml, or the built-in defaults."""
    return get_default_config()


@pytest.fixture(autouse=True)
def set_random_seed():
    """Set random seeds for reproducible tests."""
    np.random.seed(42)
