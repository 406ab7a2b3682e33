"""Rebuy detection over the consumption history."""

from __future__ import annotations

from nutricart.core.clock import SystemClock
from nutricart.core.interfaces import Clock
from nutricart.core.models import DAY_MS, InventoryItem, Suggestion, SuggestionType


class RebuyDetector:
    """
    Suggests buying again what was used up a while ago.

    A consumed item qualifies when it was purchased more than
    `min_age_days` ago, nothing in current stock has exactly the same name,
    and the name is not already on the shopping list. Only the first
    qualifying entry per name produces a suggestion.
    """

    def __init__(self, clock: Clock | None = None, min_age_days: int = 7) -> None:
        self.clock = clock or SystemClock()
        self.min_age_days = min_age_days

    def detect(
        self, inventory: list[InventoryItem], active_list_names: list[str]
    ) -> list[Suggestion]:
        suggestions: list[Suggestion] = []
        now = self.clock.now()
        min_age = self.min_age_days * DAY_MS
        in_stock = {item.name for item in inventory if not item.consumed}
        on_list = set(active_list_names)
        suggested: set[str] = set()

        for item in inventory:
            if not item.consumed:
                continue
            if now - item.purchased_date <= min_age:
                continue
            # Exact, case-sensitive name comparison.
            if item.name in in_stock or item.name in on_list:
                continue
            if item.name in suggested:
                continue
            suggested.add(item.name)
            suggestions.append(
                Suggestion(
                    id=f"rebuy-{item.id}",
                    type=SuggestionType.REBUY,
                    message=f"You bought {item.name} a while ago. Need more?",
                    suggested_item_name=item.name,
                )
            )
        return suggestions
