"""Unit tests for box and truck value types."""

import dataclasses

import numpy as np
import pytest

from truckload.loading.dimensions import Dimensions, Position, validate_container
from truckload.loading.errors import InvalidContainer, InvalidItem
from truckload.loading.item import Item, PlacedItem


class TestDimensions:
    """Test Dimensions and container validation."""

    def test_volume(self):
        assert Dimensions(2.0, 3.0, 4.0).volume == 24.0

    def test_fits_within(self):
        truck = Dimensions(10.0, 10.0, 10.0)
        assert Dimensions(10.0, 5.0, 1.0).fits_within(truck)
        assert not Dimensions(10.5, 5.0, 1.0).fits_within(truck)
        # no rotation: a box that would fit on its side still does not fit
        assert not Dimensions(5.0, 12.0, 5.0).fits_within(Dimensions(12.0, 5.0, 5.0))

    def test_dimensions_are_immutable(self):
        dims = Dimensions(1.0, 1.0, 1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            dims.length = 2.0

    @pytest.mark.parametrize("dims", [
        Dimensions(0.0, 250.0, 300.0),
        Dimensions(1000.0, -1.0, 300.0),
        Dimensions(1000.0, 250.0, float("nan")),
        Dimensions(1000.0, 250.0, float("inf")),
        Dimensions(True, 250.0, 300.0),
    ])
    def test_invalid_container(self, dims):
        with pytest.raises(InvalidContainer):
            validate_container(dims)

    def test_valid_container_is_returned(self, truck):
        assert validate_container(truck) is truck

    def test_numpy_container_is_valid(self):
        dims = Dimensions(np.int64(1000), np.float32(250.0), np.int32(300))
        assert validate_container(dims) is dims
        assert dims.volume == 75_000_000.0


class TestItem:
    """Test Item class."""

    def test_item_initialization(self, make_box):
        item = make_box("A", 40, 30, 25, weight=12.5)

        assert item.item_id == "A"
        assert (item.length, item.width, item.height) == (40, 30, 25)
        assert item.weight == 12.5
        assert item.is_fragile is False
        assert item.position is None
        assert not item.is_placed

    def test_item_volume(self, make_box):
        assert make_box("A", 2.0, 3.0, 4.0).volume == 24.0

    def test_zero_dimension_is_invalid(self, make_box):
        with pytest.raises(InvalidItem) as excinfo:
            make_box("BAD", 10, 0, 10).validate()
        assert excinfo.value.item_id == "BAD"

    def test_negative_weight_is_invalid(self, make_box):
        with pytest.raises(InvalidItem):
            make_box("BAD", 10, 10, 10, weight=-1.0).validate()

    def test_numpy_fields_are_valid(self):
        item = Item("NP", Dimensions(np.int64(40), np.int64(30), np.int64(25)), weight=np.int64(12))
        assert item.validate() is item

    def test_bool_weight_is_invalid(self, make_box):
        with pytest.raises(InvalidItem):
            make_box("BAD", 10, 10, 10, weight=True).validate()

    def test_zero_weight_is_valid(self, make_box):
        item = make_box("LIGHT", 10, 10, 10, weight=0.0)
        assert item.validate() is item

    def test_place_returns_new_placed_item(self, make_box):
        item = make_box("A", 40, 30, 25, weight=12.5, destination="Flipkart")
        placed = item.place(Position(1.0, 2.0, 3.0))

        assert isinstance(placed, PlacedItem)
        assert placed.position == Position(1.0, 2.0, 3.0)
        assert placed.destination == "Flipkart"
        assert item.position is None


class TestPlacedItem:
    """Test PlacedItem geometry helpers."""

    def test_requires_position(self):
        with pytest.raises(ValueError):
            PlacedItem(item_id="A", dimensions=Dimensions(1, 1, 1))

    def test_top_and_bounds(self, make_box):
        placed = make_box("A", 40, 30, 25).place(Position(10.0, 5.0, 20.0))

        assert placed.top == 30.0
        # (x, y, z): length on x, height on y, width on z
        assert placed.bounds() == ((10.0, 5.0, 20.0), (50.0, 30.0, 50.0))

    def test_placed_items_compare_by_value(self, make_box):
        box = make_box("A", 1, 1, 1)
        assert box.place(Position(0, 0, 0)) == box.place(Position(0, 0, 0))
        assert box.place(Position(0, 0, 0)) != box.place(Position(1, 0, 0))
        assert isinstance(box, Item)
