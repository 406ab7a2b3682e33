"""Prediction of items the household probably needs."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from pathlib import Path

from nutricart.core.models import Prediction
from nutricart.core.templates import load_entries, normalize_text

_logger = logging.getLogger(__name__)

MAX_PREDICTIONS = 3
FREQUENT_PURCHASE_REASON = "Based on your frequent purchases."


@dataclass(frozen=True)
class PairingRule:
    keyword: str
    companion: str


class MissingItemPredictor:
    """
    Two-phase predictor.

    1. Pairings: a stocked item containing a pairing keyword suggests its
       companion unless some stocked item already contains the companion.
    2. Fallback: when pairings yield fewer than three items, fill up with a
       random selection of recently consumed names that are not in stock.

    The fallback is randomized on purpose; pass a seeded `rng` for
    reproducible output.
    """

    def __init__(
        self,
        templates_path: str | Path | None = None,
        rng: random.Random | None = None,
        latency_seconds: float = 1.0,
        max_predictions: int = MAX_PREDICTIONS,
    ) -> None:
        self.templates_path = Path(templates_path) if templates_path else None
        self.rng = rng or random.Random()
        self.latency_seconds = latency_seconds
        self.max_predictions = max_predictions
        self.pairings = self._load_pairings()

    def _load_pairings(self) -> list[PairingRule]:
        rules: list[PairingRule] = []
        for entry in load_entries(self.templates_path, "pairings.yaml", "pairings"):
            companion = entry.get("companion")
            if not companion:
                continue
            rules.append(
                PairingRule(keyword=normalize_text(str(entry["keyword"])), companion=str(companion))
            )
        return rules

    def predict(
        self, current_stock_names: list[str], recently_consumed_names: list[str]
    ) -> list[Prediction]:
        predictions: list[Prediction] = []
        stock_lower = [normalize_text(name) for name in current_stock_names]

        for stock_name in stock_lower:
            for rule in self.pairings:
                if rule.keyword not in stock_name:
                    continue
                companion_lower = normalize_text(rule.companion)
                if any(companion_lower in name for name in stock_lower):
                    continue
                if any(p.item == rule.companion for p in predictions):
                    continue
                predictions.append(
                    Prediction(
                        item=rule.companion,
                        reason=f"You have {rule.keyword}, but might need {rule.companion}.",
                    )
                )

        if len(predictions) < self.max_predictions and recently_consumed_names:
            candidates = [
                name for name in recently_consumed_names if normalize_text(name) not in stock_lower
            ]
            self.rng.shuffle(candidates)
            for name in candidates[: self.max_predictions - len(predictions)]:
                predictions.append(Prediction(item=name, reason=FREQUENT_PURCHASE_REASON))

        _logger.debug("Predicted %s missing items", len(predictions))
        return predictions[: self.max_predictions]

    async def predict_missing_items(
        self, current_stock_names: list[str], recently_consumed_names: list[str]
    ) -> list[Prediction]:
        """Run `predict` after the configured response delay."""
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)
        return self.predict(current_stock_names, recently_consumed_names)
