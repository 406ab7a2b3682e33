"""Starter data used when no saved household state exists."""

from __future__ import annotations

from nutricart.core.models import DAY_MS, GroceryItem, InventoryItem, ItemCategory


def default_shopping_list(now: int) -> list[GroceryItem]:
    return [
        GroceryItem(
            id="1",
            name="Milk",
            category=ItemCategory.DAIRY,
            quantity=1,
            unit="carton",
            is_checked=False,
            added_date=now,
        ),
        GroceryItem(
            id="2",
            name="White Bread",
            category=ItemCategory.BAKERY,
            quantity=1,
            unit="loaf",
            is_checked=False,
            added_date=now,
        ),
    ]


def default_inventory(now: int) -> list[InventoryItem]:
    """Sample pantry: one expired item, one fresh item, one history entry."""
    return [
        InventoryItem(
            id="inv1",
            name="Eggs",
            category=ItemCategory.DAIRY,
            quantity=12,
            unit="pcs",
            is_checked=True,
            added_date=now - DAY_MS * 10,
            purchased_date=now - DAY_MS * 10,
            expiry_date=now - DAY_MS,
            consumed=False,
        ),
        InventoryItem(
            id="inv2",
            name="Apples",
            category=ItemCategory.PRODUCE,
            quantity=5,
            unit="pcs",
            is_checked=True,
            added_date=now - DAY_MS * 2,
            purchased_date=now - DAY_MS * 2,
            expiry_date=now + DAY_MS * 5,
            consumed=False,
        ),
        InventoryItem(
            id="inv3",
            name="Chicken Breast",
            category=ItemCategory.MEAT,
            quantity=2,
            unit="lbs",
            is_checked=True,
            added_date=now - DAY_MS * 15,
            purchased_date=now - DAY_MS * 15,
            expiry_date=now - DAY_MS * 12,
            consumed=True,
        ),
    ]
