"""Loading of the packaged keyword tables used by the rule engine."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

_logger = logging.getLogger(__name__)


def normalize_text(value: str) -> str:
    """Normalize text for case-insensitive keyword matching."""
    return value.lower()


def load_yaml(path: Path | None, resource_name: str) -> dict[str, Any]:
    """
    Read a YAML table from an override directory or from the package.

    Args:
        path: Directory that replaces the packaged tables, if any
        resource_name: File name of the table (e.g. 'pairings.yaml')

    Returns:
        Parsed mapping, or an empty dict when the table is missing
    """
    if path:
        file_path = path / resource_name
        if not file_path.exists():
            _logger.warning("Template override missing: %s", file_path)
            return {}
        with file_path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    try:
        resource = resources.files("nutricart.templates").joinpath(resource_name)
        with resource.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}
    except FileNotFoundError:
        return {}


def load_entries(path: Path | None, resource_name: str, section: str) -> list[dict[str, Any]]:
    """Return the ordered list of mapping entries stored under `section`."""
    data = load_yaml(path, resource_name)
    entries = data.get(section, []) if isinstance(data, dict) else []
    return [entry for entry in entries or [] if isinstance(entry, dict) and entry.get("keyword")]
