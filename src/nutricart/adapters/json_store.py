"""State store adapters: JSON files on disk and an in-memory variant."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

_logger = logging.getLogger(__name__)


class JsonFileStateStore:
    """
    Keeps each logical key in `<data_dir>/<key>.json`.

    Unreadable or malformed files load as None so callers fall back to
    their defaults instead of failing.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir).expanduser()

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> list[dict[str, Any]] | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            _logger.warning("Ignoring unreadable state file %s: %s", path, exc)
            return None
        if not isinstance(payload, list) or not all(isinstance(r, dict) for r in payload):
            _logger.warning("Ignoring malformed state file %s", path)
            return None
        return payload

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(records, handle, ensure_ascii=False, indent=2)
        tmp_path.replace(path)


class InMemoryStateStore:
    """Dictionary-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._records: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial or {})

    def load(self, key: str) -> list[dict[str, Any]] | None:
        records = self._records.get(key)
        return copy.deepcopy(records) if records is not None else None

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        self._records[key] = copy.deepcopy(records)
