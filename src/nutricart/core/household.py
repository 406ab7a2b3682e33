"""Household session: shopping list, pantry and suggestion working set."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Optional

from nutricart.core.clock import SystemClock, UuidSupplier
from nutricart.core.codec import dataclass_to_dict, parse_grocery_item, parse_inventory_item
from nutricart.core.engine import SuggestionEngine
from nutricart.core.expiry import ExpiryEstimator
from nutricart.core.health_swap import HealthSwapAdvisor
from nutricart.core.interfaces import Clock, ExpiryEstimatorProtocol, IdSupplier, StateStore
from nutricart.core.models import (
    GroceryItem,
    HealthSwapResult,
    InventoryItem,
    ItemCategory,
    Prediction,
    Suggestion,
    is_current_stock,
)
from nutricart.core.predict_missing import MissingItemPredictor
from nutricart.core.seed import default_inventory, default_shopping_list

_logger = logging.getLogger(__name__)

LIST_KEY = "current_list"
INVENTORY_KEY = "current_inventory"
DEFAULT_HISTORY_WINDOW = 10


class Household:
    """
    Owns the shopping list and inventory and applies lifecycle transitions.

    list -> checked -> finalized into inventory -> consumed or removed.

    Every change to the list or inventory is saved to the store and
    regenerates the working set of expiring/rebuy suggestions from scratch.
    Accepting or dismissing a suggestion only edits the working set (plus
    the list, for accept); the detectors never see it.
    """

    def __init__(
        self,
        shopping_list: list[GroceryItem],
        inventory: list[InventoryItem],
        store: Optional[StateStore] = None,
        clock: Optional[Clock] = None,
        ids: Optional[IdSupplier] = None,
        estimator: Optional[ExpiryEstimatorProtocol] = None,
        engine: Optional[SuggestionEngine] = None,
        health_advisor: Optional[HealthSwapAdvisor] = None,
        predictor: Optional[MissingItemPredictor] = None,
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ) -> None:
        self.clock = clock or SystemClock()
        self.ids = ids or UuidSupplier()
        self.store = store
        self.estimator = estimator or ExpiryEstimator()
        self.engine = engine or SuggestionEngine(self.clock)
        self.health_advisor = health_advisor or HealthSwapAdvisor()
        self.predictor = predictor or MissingItemPredictor()
        self.history_window = history_window
        self.shopping_list: list[GroceryItem] = []
        self.inventory: list[InventoryItem] = list(inventory)
        self.suggestions: list[Suggestion] = []
        for item in shopping_list:
            self._insert(item)
        self.refresh_suggestions()

    @classmethod
    def load(
        cls,
        store: StateStore,
        clock: Optional[Clock] = None,
        **kwargs: Any,
    ) -> "Household":
        """
        Restore a household from `store`, seeding whatever is missing.

        A key that is absent or fails to parse is replaced by the starter
        list or inventory, which is saved right away so its timestamps stay
        fixed across later loads. This never raises for bad stored data.
        """
        clock = clock or SystemClock()
        now = clock.now()

        shopping_list = _load_records(store, LIST_KEY, parse_grocery_item)
        if shopping_list is None:
            _logger.warning("No saved shopping list, seeding defaults")
            shopping_list = default_shopping_list(now)
            store.save(LIST_KEY, dataclass_to_dict(shopping_list))

        inventory = _load_records(store, INVENTORY_KEY, parse_inventory_item)
        if inventory is None:
            _logger.warning("No saved inventory, seeding defaults")
            inventory = default_inventory(now)
            store.save(INVENTORY_KEY, dataclass_to_dict(inventory))

        return cls(shopping_list, inventory, store=store, clock=clock, **kwargs)

    # Shopping list

    def add_item(
        self,
        name: str,
        category: ItemCategory = ItemCategory.OTHER,
        quantity: float = 1,
        unit: str = "pkg",
    ) -> GroceryItem:
        item = GroceryItem(
            id=self.ids.next_id(),
            name=name,
            category=category,
            quantity=quantity,
            unit=unit,
            is_checked=False,
            added_date=self.clock.now(),
        )
        self._insert(item)
        _logger.info("Added list item: id=%s name=%s", item.id, item.name)
        self._changed(list_changed=True)
        return item

    def delete_item(self, item_id: str) -> bool:
        before = len(self.shopping_list)
        self.shopping_list = [i for i in self.shopping_list if i.id != item_id]
        if len(self.shopping_list) == before:
            return False
        _logger.info("Deleted list item: id=%s", item_id)
        self._changed(list_changed=True)
        return True

    def toggle_item(self, item_id: str) -> GroceryItem | None:
        item = self.get_list_item(item_id)
        if item is None:
            return None
        item.is_checked = not item.is_checked
        self._changed(list_changed=True)
        return item

    def swap_item(self, item_id: str, new_name: str) -> GroceryItem | None:
        """Rename a list entry, e.g. to apply a health swap."""
        item = self.get_list_item(item_id)
        if item is None:
            return None
        _logger.info("Swapped list item: id=%s %s -> %s", item_id, item.name, new_name)
        item.name = new_name
        self._changed(list_changed=True)
        return item

    def finalize_checked(self) -> list[InventoryItem]:
        """
        Move every checked list item into the inventory.

        Purchase time is "now" and the expiry date comes from the
        estimator. Does nothing when no item is checked.
        """
        checked = [item for item in self.shopping_list if item.is_checked]
        if not checked:
            return []

        now = self.clock.now()
        purchased = [
            InventoryItem(
                id=item.id,
                name=item.name,
                category=item.category,
                quantity=item.quantity,
                unit=item.unit,
                is_checked=item.is_checked,
                added_date=item.added_date,
                purchased_date=now,
                expiry_date=self.estimator.estimate(item.name, now),
                consumed=False,
            )
            for item in checked
        ]
        self.inventory.extend(purchased)
        self.shopping_list = [item for item in self.shopping_list if not item.is_checked]
        _logger.info("Finalized %s checked items into inventory", len(purchased))
        self._changed(list_changed=True, inventory_changed=True)
        return purchased

    # Inventory

    def consume(self, item_id: str) -> InventoryItem | None:
        for index, item in enumerate(self.inventory):
            if item.id == item_id:
                self.inventory[index] = replace(item, consumed=True)
                _logger.info("Consumed inventory item: id=%s name=%s", item.id, item.name)
                self._changed(inventory_changed=True)
                return self.inventory[index]
        return None

    def remove_inventory_item(self, item_id: str) -> bool:
        before = len(self.inventory)
        self.inventory = [i for i in self.inventory if i.id != item_id]
        if len(self.inventory) == before:
            return False
        _logger.info("Removed inventory item: id=%s", item_id)
        self._changed(inventory_changed=True)
        return True

    def current_stock(self) -> list[InventoryItem]:
        return [item for item in self.inventory if is_current_stock(item)]

    def consumption_history(self) -> list[InventoryItem]:
        return [item for item in self.inventory if not is_current_stock(item)]

    def recent_history(self, limit: int | None = None) -> list[str]:
        """Names of the most recently recorded consumed items, oldest first."""
        limit = self.history_window if limit is None else limit
        if limit <= 0:
            return []
        return [item.name for item in self.consumption_history()[-limit:]]

    # Suggestions

    def refresh_suggestions(self) -> list[Suggestion]:
        self.suggestions = self.engine.run(self.shopping_list, self.inventory)
        return self.suggestions

    def accept_suggestion(self, suggestion: Suggestion) -> GroceryItem | None:
        """
        Put the suggested item on the list and drop the suggestion.

        Suggestions without a suggested item name are left untouched.
        """
        if not suggestion.suggested_item_name:
            return None
        item = self.add_item(suggestion.suggested_item_name, ItemCategory.OTHER)
        self.dismiss_suggestion(suggestion.id)
        return item

    def dismiss_suggestion(self, suggestion_id: str) -> None:
        self.suggestions = [s for s in self.suggestions if s.id != suggestion_id]

    async def check_health(self, item_id: str) -> HealthSwapResult | None:
        item = self.get_list_item(item_id)
        if item is None:
            return None
        return await self.health_advisor.find_healthier_alternative(item.name)

    async def predict_missing_items(self) -> list[Prediction]:
        stock_names = [item.name for item in self.current_stock()]
        return await self.predictor.predict_missing_items(stock_names, self.recent_history())

    # Lookup

    def get_list_item(self, item_id: str) -> GroceryItem | None:
        return next((item for item in self.shopping_list if item.id == item_id), None)

    def get_inventory_item(self, item_id: str) -> InventoryItem | None:
        return next((item for item in self.inventory if item.id == item_id), None)

    def _insert(self, item: GroceryItem) -> None:
        if self.get_list_item(item.id) is not None:
            raise ValueError(f"List item with id='{item.id}' already exists")
        self.shopping_list.append(item)

    def _changed(self, list_changed: bool = False, inventory_changed: bool = False) -> None:
        if self.store is not None:
            if list_changed:
                self.store.save(LIST_KEY, dataclass_to_dict(self.shopping_list))
            if inventory_changed:
                self.store.save(INVENTORY_KEY, dataclass_to_dict(self.inventory))
        self.refresh_suggestions()


def _load_records(
    store: StateStore, key: str, parse: Callable[[dict[str, Any]], Any]
) -> list[Any] | None:
    records = store.load(key)
    if records is None:
        return None
    try:
        items = [parse(record) for record in records]
    except (KeyError, TypeError, ValueError) as exc:
        _logger.warning("Discarding malformed %s: %s", key, exc)
        return None
    if len({item.id for item in items}) != len(items):
        _logger.warning("Discarding %s with duplicate ids", key)
        return None
    return items
