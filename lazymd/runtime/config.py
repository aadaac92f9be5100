"""Persistent JSON config helpers.

Stores the split ratio, the rendering style, and the background scan policy.
Malformed or missing config falls back to defaults on every load.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .layout import DEFAULT_SPLIT_RATIO, MAX_SPLIT_RATIO, MIN_SPLIT_RATIO

APP_NAME = "lazymd"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_DEPTH_CEILING = 5
DEFAULT_INITIAL_DELAY_SECONDS = 0.5
DEFAULT_STEP_DELAY_SECONDS = 0.05


@dataclass(frozen=True)
class ScanPolicy:
    """Progressive deepening cadence: depth ceiling plus the delays between steps."""

    depth_ceiling: int = DEFAULT_DEPTH_CEILING
    initial_delay_seconds: float = DEFAULT_INITIAL_DELAY_SECONDS
    step_delay_seconds: float = DEFAULT_STEP_DELAY_SECONDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_split_ratio() -> float:
    """Load the tree-pane share of the width, defaulting when unset/out of range."""
    value = load_config().get("split_ratio")
    if not _is_number(value):
        return DEFAULT_SPLIT_RATIO
    if value < MIN_SPLIT_RATIO or value > MAX_SPLIT_RATIO:
        return DEFAULT_SPLIT_RATIO
    return float(value)


def save_split_ratio(ratio: float) -> None:
    config = load_config()
    config["split_ratio"] = round(float(ratio), 4)
    save_config(config)


def load_style_name() -> str | None:
    """Load persisted Pygments style name, returning ``None`` when unset/invalid."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_scan_policy() -> ScanPolicy:
    """Load the deepening policy; each invalid field falls back to its default."""
    data = load_config()

    ceiling = data.get("scan_depth_ceiling")
    if isinstance(ceiling, bool) or not isinstance(ceiling, int) or ceiling < 0:
        ceiling = DEFAULT_DEPTH_CEILING

    def delay(key: str, default: float) -> float:
        value = data.get(key)
        if not _is_number(value) or value < 0:
            return default
        return float(value)

    return ScanPolicy(
        depth_ceiling=ceiling,
        initial_delay_seconds=delay("scan_initial_delay_seconds", DEFAULT_INITIAL_DELAY_SECONDS),
        step_delay_seconds=delay("scan_step_delay_seconds", DEFAULT_STEP_DELAY_SECONDS),
    )
