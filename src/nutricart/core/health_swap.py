"""Healthier-substitute lookup for shopping list items."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from nutricart.core.models import GroceryItem, HealthSwapResult, Suggestion, SuggestionType
from nutricart.core.templates import load_entries, normalize_text

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthSwapRule:
    keyword: str
    alternative: str
    reason: str
    diff: str


class HealthSwapAdvisor:
    """
    Table-driven swap advisor.

    Entries from health_swaps.yaml are tried in order. An entry is skipped
    when the item name already contains its alternative, so
    "Whole Wheat Bread" is never offered as a swap for itself.
    """

    def __init__(
        self,
        templates_path: str | Path | None = None,
        latency_seconds: float = 0.8,
    ) -> None:
        self.templates_path = Path(templates_path) if templates_path else None
        self.latency_seconds = latency_seconds
        self.rules = self._load_rules()

    def _load_rules(self) -> list[HealthSwapRule]:
        rules: list[HealthSwapRule] = []
        for entry in load_entries(self.templates_path, "health_swaps.yaml", "health_swaps"):
            alternative = entry.get("alternative")
            if not alternative:
                continue
            rules.append(
                HealthSwapRule(
                    keyword=normalize_text(str(entry["keyword"])),
                    alternative=str(alternative),
                    reason=str(entry.get("reason") or ""),
                    diff=str(entry.get("diff") or ""),
                )
            )
        return rules

    def lookup(self, item_name: str) -> HealthSwapResult | None:
        lower_name = normalize_text(item_name or "")
        for rule in self.rules:
            if rule.keyword not in lower_name:
                continue
            if normalize_text(rule.alternative) in lower_name:
                continue
            _logger.debug("Health swap match: name=%s keyword=%s", item_name, rule.keyword)
            return HealthSwapResult(
                original=item_name,
                alternative=rule.alternative,
                reason=rule.reason,
                calories_diff=rule.diff,
            )
        return None

    async def find_healthier_alternative(self, item_name: str) -> HealthSwapResult | None:
        """Look up a substitute after the configured response delay."""
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)
        return self.lookup(item_name)

    def suggest_for(self, item: GroceryItem) -> Suggestion | None:
        """Return a swap suggestion for a list item, if the table has one."""
        result = self.lookup(item.name)
        if result is None:
            return None
        return Suggestion(
            id=f"swap-{item.id}",
            type=SuggestionType.HEALTH_SWAP,
            message=f"Instead of {item.name}, consider {result.alternative}. {result.reason}",
            related_item_id=item.id,
            suggested_item_name=result.alternative,
        )
