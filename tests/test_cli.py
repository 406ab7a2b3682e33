"""End-to-end tests for the command line interface."""

import json
import logging
from pathlib import Path

import pytest

from nutricart.cli import ItemNotFound, main, resolve_item
from nutricart.core.models import GroceryItem

NOW_ARG = "2024-01-10T12:00:00+00:00"


@pytest.fixture(autouse=True)
def _fast_advisors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NUTRICART_HEALTH_SWAP_LATENCY_SECONDS", "0")
    monkeypatch.setenv("NUTRICART_PREDICTION_LATENCY_SECONDS", "0")
    monkeypatch.delenv("NUTRICART_TEMPLATES_PATH", raising=False)
    logging.getLogger("nutricart").handlers.clear()


def _run(data_dir: Path, *args: str) -> int:
    return main(["--data-dir", str(data_dir), "--now", NOW_ARG, *args])


def test_list_shows_seed_items(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "list") == 0

    out = capsys.readouterr().out
    assert "[ ] Milk (1 carton, Dairy)  [1]" in out
    assert "White Bread" in out


def test_add_persists(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "add", "Bananas", "--category", "Produce", "--unit", "bunch") == 0

    saved = json.loads((tmp_path / "current_list.json").read_text(encoding="utf-8"))
    assert [r["name"] for r in saved] == ["Milk", "White Bread", "Bananas"]
    assert saved[-1]["category"] == "Produce"
    assert saved[-1]["unit"] == "bunch"


def test_check_and_shop(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "check", "milk") == 0
    assert _run(tmp_path, "shop") == 0
    out = capsys.readouterr().out
    assert "[x] Milk" in out
    assert "Milk: good for about 7 days" in out

    assert _run(tmp_path, "pantry") == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Eggs: expired")
    assert lines[1].startswith("Apples: 5 days left")
    assert lines[2].startswith("Milk: 7 days left")

    assert _run(tmp_path, "list") == 0
    assert "Milk" not in capsys.readouterr().out


def test_shop_with_nothing_checked(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "shop") == 0
    assert "Nothing checked off yet." in capsys.readouterr().out


def test_suggest_and_accept(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "suggest") == 0
    out = capsys.readouterr().out
    assert "[exp-expired-inv1] Eggs has likely expired." in out
    assert "[rebuy-inv3] You bought Chicken Breast a while ago. Need more?" in out

    assert _run(tmp_path, "accept", "rebuy-inv3") == 0
    assert "Chicken Breast" in capsys.readouterr().out

    assert _run(tmp_path, "suggest", "--json") == 0
    records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [r["id"] for r in records] == ["exp-expired-inv1"]
    assert records[0]["type"] == "EXPIRING_SOON"


def test_accept_without_item_name(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "accept", "exp-expired-inv1") == 0
    assert "Nothing to add" in capsys.readouterr().out


def test_accept_unknown_suggestion(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "accept", "rebuy-nope") == 1
    assert "rebuy-nope" in capsys.readouterr().err


def test_consume_and_discard(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "consume", "apple") == 0
    assert "Used up Apples" in capsys.readouterr().out

    assert _run(tmp_path, "pantry", "--history") == 0
    history = capsys.readouterr().out
    assert "Apples" in history
    assert "Chicken Breast" in history

    assert _run(tmp_path, "discard", "inv1") == 0
    assert "Removed Eggs" in capsys.readouterr().out

    assert _run(tmp_path, "pantry") == 0
    assert capsys.readouterr().out == ""


def test_unknown_item_reference(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "delete", "Motor Oil") == 1
    assert "No item matching 'Motor Oil'" in capsys.readouterr().err


def test_health_apply(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "health", "White Bread", "--apply") == 0
    out = capsys.readouterr().out
    assert "consider Whole Wheat Bread" in out

    assert _run(tmp_path, "list") == 0
    assert "Whole Wheat Bread" in capsys.readouterr().out


def test_health_free_text(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "health", "Brown Sugar") == 0
    assert "consider Honey or Stevia" in capsys.readouterr().out

    assert _run(tmp_path, "health", "Apples") == 0
    assert "No healthier alternative found" in capsys.readouterr().out


def test_predict_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "predict", "--seed", "1", "--json") == 0

    records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert records[0] == {"item": "Bacon", "reason": "You have eggs, but might need Bacon."}
    assert records[1]["item"] == "Chicken Breast"
    assert len(records) == 2


def test_predict_add(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "predict", "--add") == 0

    saved = json.loads((tmp_path / "current_list.json").read_text(encoding="utf-8"))
    assert {"Bacon", "Chicken Breast"} <= {r["name"] for r in saved}


def test_invalid_now(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--data-dir", str(tmp_path), "--now", "not a date", "list"]) == 1
    assert "Invalid --now" in capsys.readouterr().err


def test_resolve_item() -> None:
    items = [GroceryItem(id="1", name="Milk"), GroceryItem(id="2", name="White Bread")]

    assert resolve_item("2", items).name == "White Bread"
    assert resolve_item("MILK", items).id == "1"
    assert resolve_item("white bred", items).id == "2"
    with pytest.raises(ItemNotFound):
        resolve_item("Dish Soap", items)


def test_seed_data_is_pinned_on_first_run(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(tmp_path, "pantry") == 0
    assert "Apples: 5 days left" in capsys.readouterr().out

    assert main(["--data-dir", str(tmp_path), "--now", "2024-01-14T12:00:00+00:00", "pantry"]) == 0
    assert "Apples: 1 day left" in capsys.readouterr().out


def test_naive_now_is_read_as_utc(tmp_path: Path) -> None:
    assert main(["--data-dir", str(tmp_path), "--now", "2024-01-10", "list"]) == 0

    saved = json.loads((tmp_path / "current_list.json").read_text(encoding="utf-8"))
    assert saved[0]["added_date"] == 1_704_844_800_000


def test_short_name_does_not_pick_longer_item(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(tmp_path, "delete", "1") == 0
    assert _run(tmp_path, "add", "Milk Chocolate", "--category", "Snacks") == 0
    capsys.readouterr()

    assert _run(tmp_path, "delete", "Milk") == 1
    assert "No item matching 'Milk'" in capsys.readouterr().err

    assert _run(tmp_path, "list") == 0
    assert "Milk Chocolate" in capsys.readouterr().out


def test_health_free_text_is_not_taken_over_by_list_item(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(tmp_path, "delete", "1") == 0
    assert _run(tmp_path, "add", "Milk Chocolate", "--category", "Snacks") == 0
    capsys.readouterr()

    assert _run(tmp_path, "health", "Milk") == 0
    assert "No healthier alternative found for Milk." in capsys.readouterr().out

    assert _run(tmp_path, "health", "Milk", "--apply") == 1
    assert _run(tmp_path, "health", "milk chocolate", "--apply") == 0
    assert "consider Dark Chocolate" in capsys.readouterr().out


def test_resolve_item_refuses_ambiguous_matches() -> None:
    items = [GroceryItem(id="1", name="Green Apples"), GroceryItem(id="2", name="Green Apple")]

    with pytest.raises(ItemNotFound, match="ambiguous"):
        resolve_item("green aple", items)
    with pytest.raises(ItemNotFound):
        resolve_item("Milk", [GroceryItem(id="3", name="Milk Chocolate")])
