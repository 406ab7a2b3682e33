"""Tests for missing-item prediction."""

import asyncio
import random

from nutricart.core.predict_missing import FREQUENT_PURCHASE_REASON, MissingItemPredictor


def _predictor(seed: int = 7) -> MissingItemPredictor:
    return MissingItemPredictor(rng=random.Random(seed), latency_seconds=0)


def test_cereal_predicts_milk() -> None:
    predictions = _predictor().predict(["Cereal"], [])

    assert len(predictions) == 1
    assert predictions[0].item == "Milk"
    assert predictions[0].reason == "You have cereal, but might need Milk."


def test_companion_in_stock_suppresses_pairing() -> None:
    assert _predictor().predict(["Cereal", "Oat Milk"], []) == []


def test_pairings_deduplicated_by_item() -> None:
    predictions = _predictor().predict(["Corn Cereal", "Bran Cereal"], [])

    assert [p.item for p in predictions] == ["Milk"]


def test_one_stock_name_can_match_several_keywords() -> None:
    # "bread" wants Butter, which the name already contains; "peanut butter" wants Jelly.
    predictions = _predictor().predict(["Peanut Butter Bread"], [])

    assert [p.item for p in predictions] == ["Jelly"]


def test_pairing_skipped_when_stock_contains_companion() -> None:
    # Bread pairs with Butter, which the item name itself already contains.
    predictions = _predictor().predict(["Bread", "Butter"], [])

    assert predictions == []


def test_pairings_truncated_to_three() -> None:
    predictions = _predictor().predict(["Cereal", "Pasta", "Salad", "Coffee", "Pancakes"], [])

    assert [p.item for p in predictions] == ["Milk", "Tomato Sauce", "Dressing"]


def test_fallback_fills_from_history() -> None:
    predictions = _predictor().predict(["Cereal"], ["Apples", "Yogurt", "Cheese"])

    assert len(predictions) == 3
    assert predictions[0].item == "Milk"
    fallback = predictions[1:]
    assert {p.item for p in fallback} <= {"Apples", "Yogurt", "Cheese"}
    assert len({p.item for p in fallback}) == 2
    assert all(p.reason == FREQUENT_PURCHASE_REASON for p in fallback)


def test_fallback_skips_items_in_stock() -> None:
    predictions = _predictor().predict(["apples"], ["Apples", "Yogurt"])

    assert [p.item for p in predictions] == ["Yogurt"]


def test_no_history_no_fallback() -> None:
    assert _predictor().predict(["Apples"], []) == []


def test_unknown_names_contribute_nothing() -> None:
    assert _predictor().predict(["Mystery Box"], []) == []


def test_seeded_fallback_is_reproducible() -> None:
    history = ["Apples", "Yogurt", "Cheese", "Grapes", "Tofu"]

    first = _predictor(seed=3).predict([], history)
    second = _predictor(seed=3).predict([], history)

    assert first == second
    assert len(first) == 3
    assert {p.item for p in first} <= set(history)


def test_fallback_does_not_mutate_history() -> None:
    history = ["Apples", "Yogurt", "Cheese", "Grapes"]

    _predictor().predict([], history)

    assert history == ["Apples", "Yogurt", "Cheese", "Grapes"]


def test_async_prediction() -> None:
    predictions = asyncio.run(_predictor().predict_missing_items(["Cereal"], []))

    assert [p.item for p in predictions] == ["Milk"]
