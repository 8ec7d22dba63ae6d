"""Tests for line item entities."""

import pytest
from pydantic import ValidationError

from src.core.entities import LineItem, SubItem, TopLevelItem


class TestPricedLine:
    def test_amount_is_quantity_times_rate(self):
        item = TopLevelItem(description="Truss", quantity=3, rate=12.5)
        assert item.amount == 37.5

    def test_supplied_amount_is_ignored(self):
        item = TopLevelItem(description="Truss", quantity=2, rate=10, amount=999)
        assert item.amount == 20.0

    def test_amount_rounds_half_up(self):
        item = TopLevelItem(quantity=1, rate=1.005)
        assert item.amount == 1.01

    def test_defaults(self):
        item = TopLevelItem()
        assert item.quantity == 1.0
        assert item.rate == 0.0
        assert item.amount == 0.0
        assert item.sub_items == []


class TestSubItem:
    def test_cannot_nest_sub_items(self):
        with pytest.raises(ValidationError):
            SubItem(description="Carpet", sub_items=[{"description": "Underlay"}])

    def test_group_amount_includes_sub_items(self):
        item = TopLevelItem(
            quantity=1,
            rate=100,
            sub_items=[SubItem(quantity=2, rate=10), SubItem(quantity=1, rate=5.5)],
        )
        assert item.group_amount == pytest.approx(125.5)


class TestLineItemRow:
    def test_sub_item_requires_parent(self):
        with pytest.raises(ValidationError, match="parent"):
            LineItem(serial_no=1, is_sub_item=True)

    def test_top_level_cannot_have_parent(self):
        with pytest.raises(ValidationError, match="parent"):
            LineItem(serial_no=1, parent_serial_no=2)

    def test_valid_sub_item_row(self):
        row = LineItem(serial_no=1, is_sub_item=True, parent_serial_no=3, quantity=4, rate=2.5)
        assert row.amount == 10.0
        assert row.parent_serial_no == 3
