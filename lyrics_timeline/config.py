from __future__ import annotations

import json
from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lyrics-timeline"
    return Path.home() / ".config" / "lyrics-timeline"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Timing
    anticipation_ms: int
    decay_ms: int
    trailing_window_ms: int

    # Loading
    fetch_timeout_s: float
    fetch_max_retries: int
    fetch_backoff_base_s: float


_DEFAULTS: dict[str, Any] = {
    "anticipation_ms": 600,
    "decay_ms": 400,
    "trailing_window_ms": 3000,
    "fetch_timeout_s": 10.0,
    "fetch_max_retries": 3,
    "fetch_backoff_base_s": 1.0,
}


def load_config() -> AppConfig:
    # Priority: config.json → LYRICS_TIMELINE_* → defaults
    config_dir = _config_dir()
    file_values = _load_file(config_dir / "config.json")

    values: dict[str, Any] = {}
    for key, default in _DEFAULTS.items():
        raw = file_values.get(key)
        if raw is None:
            raw = os.getenv(f"LYRICS_TIMELINE_{key.upper()}")
        if raw is None:
            values[key] = default
            continue
        try:
            values[key] = type(default)(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid %s=%r", key, raw)
            values[key] = default

    return AppConfig(config_dir=config_dir, **values)


def _load_file(cfg_path: Path) -> dict[str, Any]:
    if not cfg_path.exists():
        return {}
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(**updates: Any) -> None:
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = _load_file(cfg_path)
    data.update({k: v for k, v in updates.items() if k in _DEFAULTS})
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
