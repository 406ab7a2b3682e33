"""Conversion between domain dataclasses and plain JSON-ready records."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any

from nutricart.core.models import GroceryItem, InventoryItem, ItemCategory


def dataclass_to_dict(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        data = asdict(obj)
        return {key: dataclass_to_dict(value) for key, value in data.items()}
    if isinstance(obj, list):
        return [dataclass_to_dict(value) for value in obj]
    if isinstance(obj, dict):
        return {key: dataclass_to_dict(value) for key, value in obj.items()}
    return obj


def parse_grocery_item(data: dict[str, Any]) -> GroceryItem:
    """
    Rebuild a GroceryItem from a stored record.

    Raises:
        KeyError: If `id` or `name` is missing
        ValueError: If the category or a numeric field is invalid
        TypeError: If a field has an unusable type
    """
    return GroceryItem(
        id=_require_str(data, "id"),
        name=_require_str(data, "name"),
        category=ItemCategory(data.get("category", ItemCategory.OTHER.value)),
        quantity=_parse_quantity(data.get("quantity", 1)),
        unit=str(data.get("unit", "pkg")),
        is_checked=_parse_bool(data.get("is_checked", False)),
        added_date=_parse_timestamp(data.get("added_date", 0)),
    )


def parse_inventory_item(data: dict[str, Any]) -> InventoryItem:
    """Rebuild an InventoryItem from a stored record (see `parse_grocery_item`)."""
    base = parse_grocery_item(data)
    return InventoryItem(
        id=base.id,
        name=base.name,
        category=base.category,
        quantity=base.quantity,
        unit=base.unit,
        is_checked=base.is_checked,
        added_date=base.added_date,
        purchased_date=_parse_timestamp(data.get("purchased_date", 0)),
        expiry_date=_parse_timestamp(data.get("expiry_date", 0)),
        consumed=_parse_bool(data.get("consumed", False)),
    )


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def _parse_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"Expected a boolean, got {value!r}")
    return value


def _parse_timestamp(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a numeric timestamp, got {value!r}")
    return int(value)


def _parse_quantity(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a numeric quantity, got {value!r}")
    return value
