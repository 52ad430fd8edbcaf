"""CLI configuration helpers for per-user defaults."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

from nostromo.domain.state import MAX_ROSTER_SIZE

DEFAULT_CHARACTERS = 2
DEFAULT_OBJECTIVES = 3
MAX_OBJECTIVES = 10


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Nostromo"
        return Path.home() / "Nostromo"
    return Path.home() / ".config" / "nostromo"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _clamp(value: object, low: int, high: int, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return max(low, min(high, value))


def normalize_config(raw: Dict[str, object]) -> Dict[str, object]:
    return {
        "characters": _clamp(raw.get("characters"), 1, MAX_ROSTER_SIZE, DEFAULT_CHARACTERS),
        "objectives": _clamp(raw.get("objectives"), 1, MAX_OBJECTIVES, DEFAULT_OBJECTIVES),
        "use_ash": raw.get("use_ash") is not False,
    }


def load_config(path: Path | None = None) -> Dict[str, object]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return normalize_config({})
    except (OSError, ValueError):
        return normalize_config({})
    if not isinstance(raw, dict):
        return normalize_config({})
    return normalize_config(raw)


def save_config(config: Dict[str, object], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = normalize_config(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
