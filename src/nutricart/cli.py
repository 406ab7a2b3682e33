"""Command line interface for NutriCart."""

from __future__ import annotations

import argparse
import asyncio
import json
import random
import sys
from datetime import timezone
from pathlib import Path
from typing import Any, Sequence, TypeVar

from dateutil import parser as date_parser
from rapidfuzz import fuzz, utils

from nutricart.adapters.json_store import JsonFileStateStore
from nutricart.app_logging import configure_logging
from nutricart.config import Settings
from nutricart.core.clock import FixedClock, SystemClock
from nutricart.core.codec import dataclass_to_dict
from nutricart.core.detect_expiring import ExpiringItemDetector, days_until_expiry
from nutricart.core.detect_rebuy import RebuyDetector
from nutricart.core.engine import SuggestionEngine
from nutricart.core.expiry import ExpiryEstimator
from nutricart.core.health_swap import HealthSwapAdvisor
from nutricart.core.household import Household
from nutricart.core.interfaces import Clock
from nutricart.core.models import GroceryItem, ItemCategory
from nutricart.core.predict_missing import MissingItemPredictor

MATCH_THRESHOLD = 80

_ItemT = TypeVar("_ItemT", bound=GroceryItem)


class ItemNotFound(LookupError):
    pass


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = Settings(data_dir=Path(args.data_dir)) if args.data_dir else Settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        clock = _clock_from_arg(args.now)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    rng = random.Random(args.seed) if getattr(args, "seed", None) is not None else None
    household = build_household(settings, clock, rng)

    try:
        return _dispatch(args, household)
    except ItemNotFound as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nutricart")
    parser.add_argument("--data-dir", help="Directory holding the saved list and pantry")
    parser.add_argument("--now", help="Pin the clock to an ISO-8601 timestamp")
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="Show the shopping list")

    add_cmd = subparsers.add_parser("add", help="Add an item to the shopping list")
    add_cmd.add_argument("name")
    add_cmd.add_argument(
        "--category",
        default=ItemCategory.OTHER.value,
        choices=[c.value for c in ItemCategory],
    )
    add_cmd.add_argument("--quantity", type=float, default=1)
    add_cmd.add_argument("--unit", default="pkg")

    check_cmd = subparsers.add_parser("check", help="Toggle an item as picked up")
    check_cmd.add_argument("item")

    delete_cmd = subparsers.add_parser("delete", help="Remove an item from the shopping list")
    delete_cmd.add_argument("item")

    swap_cmd = subparsers.add_parser("swap", help="Rename a shopping list item")
    swap_cmd.add_argument("item")
    swap_cmd.add_argument("new_name")

    subparsers.add_parser("shop", help="Move checked items into the pantry")

    pantry_cmd = subparsers.add_parser("pantry", help="Show pantry stock by expiry")
    pantry_cmd.add_argument("--history", action="store_true", help="Show consumed items instead")

    consume_cmd = subparsers.add_parser("consume", help="Mark a pantry item as used up")
    consume_cmd.add_argument("item")

    discard_cmd = subparsers.add_parser("discard", help="Delete a pantry item")
    discard_cmd.add_argument("item")

    suggest_cmd = subparsers.add_parser("suggest", help="Show expiring and rebuy suggestions")
    suggest_cmd.add_argument("--json", action="store_true")

    accept_cmd = subparsers.add_parser("accept", help="Accept a suggestion by id")
    accept_cmd.add_argument("suggestion_id")

    health_cmd = subparsers.add_parser("health", help="Look up a healthier alternative")
    health_cmd.add_argument("item", help="List item id or name, or free text")
    health_cmd.add_argument("--apply", action="store_true", help="Rename the list item")

    predict_cmd = subparsers.add_parser("predict", help="Predict items you may need")
    predict_cmd.add_argument("--seed", type=int)
    predict_cmd.add_argument("--add", action="store_true", help="Add predictions to the list")
    predict_cmd.add_argument("--json", action="store_true")

    return parser


def build_household(
    settings: Settings, clock: Clock, rng: random.Random | None = None
) -> Household:
    templates_path = settings.templates_path
    engine = SuggestionEngine(
        expiring_detector=ExpiringItemDetector(clock, window_days=settings.expiring_window_days),
        rebuy_detector=RebuyDetector(clock, min_age_days=settings.rebuy_after_days),
    )
    return Household.load(
        JsonFileStateStore(settings.resolved_data_dir()),
        clock=clock,
        estimator=ExpiryEstimator(templates_path, default_days=settings.default_shelf_life_days),
        engine=engine,
        health_advisor=HealthSwapAdvisor(
            templates_path, latency_seconds=settings.health_swap_latency_seconds
        ),
        predictor=MissingItemPredictor(
            templates_path, rng=rng, latency_seconds=settings.prediction_latency_seconds
        ),
        history_window=settings.history_window,
    )


def _dispatch(args: argparse.Namespace, household: Household) -> int:
    if args.command == "list":
        for item in household.shopping_list:
            print(_format_list_item(item))
        return 0

    if args.command == "add":
        item = household.add_item(
            args.name, ItemCategory(args.category), quantity=args.quantity, unit=args.unit
        )
        print(_format_list_item(item))
        return 0

    if args.command == "check":
        item = resolve_item(args.item, household.shopping_list)
        household.toggle_item(item.id)
        print(_format_list_item(item))
        return 0

    if args.command == "delete":
        item = resolve_item(args.item, household.shopping_list)
        household.delete_item(item.id)
        print(f"Deleted {item.name}")
        return 0

    if args.command == "swap":
        item = resolve_item(args.item, household.shopping_list)
        household.swap_item(item.id, args.new_name)
        print(_format_list_item(item))
        return 0

    if args.command == "shop":
        purchased = household.finalize_checked()
        if not purchased:
            print("Nothing checked off yet.")
        for inv in purchased:
            days = days_until_expiry(inv, household.clock.now())
            print(f"{inv.name}: good for about {days} days")
        return 0

    if args.command == "pantry":
        now = household.clock.now()
        if args.history:
            for inv in household.consumption_history():
                print(f"{inv.name} ({inv.quantity:g} {inv.unit})  [{inv.id}]")
            return 0
        for inv in sorted(household.current_stock(), key=lambda i: i.expiry_date):
            print(f"{inv.name}: {_format_days_left(days_until_expiry(inv, now))}  [{inv.id}]")
        return 0

    if args.command == "consume":
        inv = resolve_item(args.item, household.current_stock())
        household.consume(inv.id)
        print(f"Used up {inv.name}")
        return 0

    if args.command == "discard":
        inv = resolve_item(args.item, household.inventory)
        household.remove_inventory_item(inv.id)
        print(f"Removed {inv.name}")
        return 0

    if args.command == "suggest":
        if args.json:
            _print_jsonl(dataclass_to_dict(household.suggestions))
            return 0
        if not household.suggestions:
            print("Everything looks good!")
        for suggestion in household.suggestions:
            print(f"[{suggestion.id}] {suggestion.message}")
        return 0

    if args.command == "accept":
        suggestion = next((s for s in household.suggestions if s.id == args.suggestion_id), None)
        if suggestion is None:
            raise ItemNotFound(f"No current suggestion with id '{args.suggestion_id}'")
        added = household.accept_suggestion(suggestion)
        if added is None:
            print("Nothing to add for this suggestion.")
        else:
            print(_format_list_item(added))
        return 0

    if args.command == "health":
        return _run_health(args, household)

    if args.command == "predict":
        predictions = asyncio.run(household.predict_missing_items())
        if args.json:
            _print_jsonl(dataclass_to_dict(predictions))
        elif not predictions:
            print("No predictions right now.")
        for index, prediction in enumerate(predictions):
            if not args.json:
                print(f"{prediction.item}: {prediction.reason}")
            if args.add:
                household.accept_suggestion(prediction.to_suggestion(index))
        return 0

    return 1


def _run_health(args: argparse.Namespace, household: Household) -> int:
    item: GroceryItem | None = _resolve_exact(args.item, household.shopping_list)
    if item is None and args.apply:
        raise ItemNotFound(f"No list item with id or name '{args.item}'")

    if item is not None:
        result = asyncio.run(household.check_health(item.id))
    else:
        result = asyncio.run(household.health_advisor.find_healthier_alternative(args.item))

    if result is None:
        print(f"No healthier alternative found for {args.item}.")
        return 0
    print(f"Instead of {result.original}, consider {result.alternative}")
    print(f"  {result.reason} ({result.calories_diff})")
    if args.apply and item is not None:
        household.swap_item(item.id, result.alternative)
    return 0


def resolve_item(reference: str, items: Sequence[_ItemT]) -> _ItemT:
    """
    Find an item by id, exact name, or a single close fuzzy name match.

    Fuzzy matching compares whole names, so "Milk" never resolves to
    "Milk Chocolate". More than one close match is refused.

    Raises:
        ItemNotFound: If nothing matches well enough, or several items do
    """
    exact = _resolve_exact(reference, items)
    if exact is not None:
        return exact

    candidates = [
        item
        for item in items
        if fuzz.ratio(reference, item.name, processor=utils.default_process) >= MATCH_THRESHOLD
    ]
    if len(candidates) == 1:
        return candidates[0]
    if candidates:
        names = ", ".join(item.name for item in candidates)
        raise ItemNotFound(f"'{reference}' is ambiguous: {names}")
    raise ItemNotFound(f"No item matching '{reference}'")


def _resolve_exact(reference: str, items: Sequence[_ItemT]) -> _ItemT | None:
    for item in items:
        if item.id == reference:
            return item
    lowered = reference.lower()
    for item in items:
        if item.name.lower() == lowered:
            return item
    return None


def _clock_from_arg(value: str | None) -> Clock:
    if not value:
        return SystemClock()
    try:
        moment = date_parser.isoparse(value)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"Invalid --now timestamp: {value}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return FixedClock(int(moment.timestamp() * 1000))


def _format_list_item(item: GroceryItem) -> str:
    mark = "x" if item.is_checked else " "
    return f"[{mark}] {item.name} ({item.quantity:g} {item.unit}, {item.category.value})  [{item.id}]"


def _format_days_left(days: int) -> str:
    if days <= 0:
        return "expired"
    if days == 1:
        return "1 day left"
    return f"{days} days left"


def _print_jsonl(records: list[dict[str, Any]]) -> None:
    for record in records:
        print(json.dumps(record, ensure_ascii=False))


if __name__ == "__main__":
    raise SystemExit(main())
