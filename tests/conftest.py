from __future__ import annotations

from pathlib import Path

import pytest

from lyrics_timeline.config import AppConfig


@pytest.fixture
def cfg(tmp_path: Path) -> AppConfig:
    return AppConfig(
        config_dir=tmp_path / "config",
        anticipation_ms=600,
        decay_ms=400,
        trailing_window_ms=3000,
        fetch_timeout_s=1.0,
        fetch_max_retries=2,
        fetch_backoff_base_s=0.0,
    )


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in ("ANTICIPATION_MS", "DECAY_MS", "TRAILING_WINDOW_MS", "FETCH_TIMEOUT_S", "FETCH_MAX_RETRIES", "FETCH_BACKOFF_BASE_S"):
        monkeypatch.delenv(f"LYRICS_TIMELINE_{key}", raising=False)
