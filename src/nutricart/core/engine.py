"""Suggestion engine: wires the state-driven detectors together."""

from __future__ import annotations

from typing import Optional

from nutricart.core.detect_expiring import ExpiringItemDetector
from nutricart.core.detect_rebuy import RebuyDetector
from nutricart.core.interfaces import Clock, ExpiringDetector, RebuyDetectorProtocol
from nutricart.core.models import GroceryItem, InventoryItem, Suggestion


class SuggestionEngine:
    """
    Recomputes the suggestion set from a list/inventory snapshot.

    Detectors are injected so implementations can be swapped; by default
    both share the given clock. Output is expiring suggestions followed by
    rebuy suggestions, each in inventory order.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        expiring_detector: Optional[ExpiringDetector] = None,
        rebuy_detector: Optional[RebuyDetectorProtocol] = None,
    ) -> None:
        self.expiring_detector = expiring_detector or ExpiringItemDetector(clock)
        self.rebuy_detector = rebuy_detector or RebuyDetector(clock)

    def run(
        self, shopping_list: list[GroceryItem], inventory: list[InventoryItem]
    ) -> list[Suggestion]:
        expiring = self.expiring_detector.detect(inventory)
        rebuy = self.rebuy_detector.detect(inventory, [item.name for item in shopping_list])
        return [*expiring, *rebuy]
