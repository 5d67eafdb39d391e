"""Lightweight helpers for reading small JSON settings files."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

SETTINGS_ENV = "TICTACTOE_SERIES_SETTINGS"
SETTINGS_FILE = "tictactoe_series_settings.json"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "ai_delay_ms": 500,
    "settle_delay_ms": 1500,
    "log_dir": os.path.join("data", "logs"),
    "default_series_length": 3,
    "default_difficulty": "easy",
    "series_lengths": [3, 5, 7, 10],
}

logger = logging.getLogger(__name__)


def resolve_settings_path(path: Optional[str] = None) -> Path:
    return Path(path or os.environ.get(SETTINGS_ENV) or SETTINGS_FILE)


def _coerce_int(val: Any, default: int, minimum: int = 0) -> int:
    try:
        number = int(val)
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


def load_settings(path: Path, defaults: Dict[str, Any] = DEFAULT_SETTINGS) -> Dict[str, Any]:
    """
    Load settings from ``path`` merging with ``defaults``.

    Returns defaults if the file is missing or invalid.
    """
    data = {key: list(val) if isinstance(val, list) else val for key, val in defaults.items()}
    if not path.exists():
        return data
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable settings file %s (%s)", path, exc)
        return data
    if not isinstance(raw, dict):
        return data
    for key, value in raw.items():
        data[key] = value
    return _validated(data, defaults)


def _validated(data: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    for key in ("ai_delay_ms", "settle_delay_ms"):
        data[key] = _coerce_int(data.get(key), defaults[key])
    data["default_series_length"] = _coerce_int(
        data.get("default_series_length"), defaults["default_series_length"], minimum=1
    )
    lengths = data.get("series_lengths")
    if isinstance(lengths, list):
        cleaned = [_coerce_int(v, 0, minimum=1) for v in lengths]
        data["series_lengths"] = [v for v in cleaned if v > 0] or list(defaults["series_lengths"])
    else:
        data["series_lengths"] = list(defaults["series_lengths"])
    if str(data.get("default_difficulty", "")).lower() not in {"easy", "hard"}:
        data["default_difficulty"] = defaults["default_difficulty"]
    if not isinstance(data.get("log_dir"), str) or not data["log_dir"]:
        data["log_dir"] = defaults["log_dir"]
    return data
