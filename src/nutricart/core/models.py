"""Core data models for the shopping list, pantry inventory and suggestions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DAY_MS = 24 * 60 * 60 * 1000
"""One day in milliseconds; all timestamps are integer ms since the epoch."""


class ItemCategory(str, Enum):
    """Fixed set of shelf categories a list item can belong to."""

    PRODUCE = "Produce"
    DAIRY = "Dairy"
    BAKERY = "Bakery"
    MEAT = "Meat"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    BEVERAGES = "Beverages"
    SNACKS = "Snacks"
    OTHER = "Other"


class SuggestionType(str, Enum):
    """Kind of recommendation surfaced to the household."""

    EXPIRING_SOON = "EXPIRING_SOON"
    REBUY = "REBUY"
    HEALTH_SWAP = "HEALTH_SWAP"


@dataclass
class GroceryItem:
    """
    A desired purchase on the active shopping list.

    `id` is assigned once and never changes. Checked items stay on the list
    until they are finalized into the inventory.
    """

    id: str
    """Unique within the active shopping list."""

    name: str
    """Free text as typed by the user."""

    category: ItemCategory = ItemCategory.OTHER

    quantity: float = 1
    """Amount to buy, in `unit`."""

    unit: str = "pkg"

    is_checked: bool = False
    """Picked up but not yet moved into the pantry."""

    added_date: int = 0
    """Creation timestamp (ms)."""


@dataclass
class InventoryItem(GroceryItem):
    """
    A purchased good owned by the household.

    Current stock and consumption history are the same collection,
    told apart by the `consumed` flag.
    """

    purchased_date: int = 0
    """Finalization timestamp (ms)."""

    expiry_date: int = 0
    """Estimated expiry timestamp (ms), normally >= purchased_date."""

    consumed: bool = False
    """Used up or discarded."""


@dataclass(frozen=True)
class Suggestion:
    """
    Transient recommendation derived from current state.

    Ids are derived from the source item id and the suggestion kind, so
    re-running a detector yields the same ids for the same state.
    """

    id: str
    type: SuggestionType
    message: str
    related_item_id: Optional[str] = None
    """Lookup key of the item that triggered the suggestion (not owned)."""

    suggested_item_name: Optional[str] = None
    """Name to put on the list if the suggestion is accepted."""


@dataclass(frozen=True)
class HealthSwapResult:
    """Healthier substitute found for a list item."""

    original: str
    alternative: str
    reason: str
    calories_diff: str


@dataclass(frozen=True)
class Prediction:
    """An item the household probably needs, with a short explanation."""

    item: str
    reason: str

    def to_suggestion(self, index: int) -> Suggestion:
        """Wrap this prediction so it can be accepted like a rebuy suggestion."""
        return Suggestion(
            id=f"smart-pred-{index}",
            type=SuggestionType.REBUY,
            message=self.reason,
            suggested_item_name=self.item,
        )


def is_current_stock(item: InventoryItem) -> bool:
    """Whether the item is still in the pantry (not consumed)."""
    return not item.consumed
