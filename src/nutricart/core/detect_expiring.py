"""Expiring-item detection over current pantry stock."""

from __future__ import annotations

import math

from nutricart.core.clock import SystemClock
from nutricart.core.interfaces import Clock
from nutricart.core.models import DAY_MS, InventoryItem, Suggestion, SuggestionType


class ExpiringItemDetector:
    """
    Flags unconsumed items that have expired or expire within the window.

    Output follows inventory order; the detector keeps no memory of
    earlier runs or dismissals.
    """

    def __init__(self, clock: Clock | None = None, window_days: int = 3) -> None:
        self.clock = clock or SystemClock()
        self.window_days = window_days

    def detect(self, inventory: list[InventoryItem]) -> list[Suggestion]:
        suggestions: list[Suggestion] = []
        now = self.clock.now()
        window = self.window_days * DAY_MS

        for item in inventory:
            if item.consumed:
                continue
            time_left = item.expiry_date - now
            if 0 < time_left < window:
                days_left = math.ceil(time_left / DAY_MS)
                suggestions.append(
                    Suggestion(
                        id=f"exp-{item.id}",
                        type=SuggestionType.EXPIRING_SOON,
                        message=f"{item.name} is expiring in {days_left} days! Plan a meal around it.",
                        related_item_id=item.id,
                    )
                )
            elif time_left <= 0:
                suggestions.append(
                    Suggestion(
                        id=f"exp-expired-{item.id}",
                        type=SuggestionType.EXPIRING_SOON,
                        message=f"{item.name} has likely expired.",
                        related_item_id=item.id,
                    )
                )
        return suggestions


def days_until_expiry(item: InventoryItem, now: int) -> int:
    """Whole days left before expiry, rounded up; zero or negative once expired."""
    return math.ceil((item.expiry_date - now) / DAY_MS)
