"""Shelf-life heuristics: estimate an expiry timestamp from an item name."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from nutricart.core.models import DAY_MS
from nutricart.core.templates import load_entries, normalize_text

_logger = logging.getLogger(__name__)

DEFAULT_SHELF_LIFE_DAYS = 14


@dataclass(frozen=True)
class ShelfLifeRule:
    keyword: str
    days: int


class ExpiryEstimator:
    """
    Keyword-based shelf-life estimator.

    Uses shelf_life.yaml as an ordered table: the first keyword contained
    in the lowercased item name decides the shelf life.
    """

    def __init__(
        self,
        templates_path: str | Path | None = None,
        default_days: int = DEFAULT_SHELF_LIFE_DAYS,
    ) -> None:
        self.templates_path = Path(templates_path) if templates_path else None
        self.default_days = default_days
        self.rules = self._load_rules()

    def _load_rules(self) -> list[ShelfLifeRule]:
        rules: list[ShelfLifeRule] = []
        for entry in load_entries(self.templates_path, "shelf_life.yaml", "shelf_life"):
            try:
                days = int(entry.get("days"))
            except (TypeError, ValueError):
                continue
            if days < 0:
                continue
            rules.append(ShelfLifeRule(keyword=normalize_text(str(entry["keyword"])), days=days))
        return rules

    def shelf_life_days(self, name: str) -> int:
        lower_name = normalize_text(name or "")
        for rule in self.rules:
            if rule.keyword in lower_name:
                _logger.debug("Shelf life match: name=%s keyword=%s", name, rule.keyword)
                return rule.days
        return self.default_days

    def estimate(self, name: str, purchased_at: int) -> int:
        return purchased_at + self.shelf_life_days(name) * DAY_MS


_default_estimator: ExpiryEstimator | None = None


def estimate_expiry(name: str, purchased_at: int) -> int:
    """Estimate expiry with the packaged shelf-life table."""
    global _default_estimator
    if _default_estimator is None:
        _default_estimator = ExpiryEstimator()
    return _default_estimator.estimate(name, purchased_at)
