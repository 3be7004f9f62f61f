from __future__ import annotations

import logging
from pathlib import Path
import time

import requests

from lyrics_timeline.config import AppConfig
from lyrics_timeline.lrc.model import Timeline
from lyrics_timeline.lrc.parse import parse_lrc

logger = logging.getLogger(__name__)


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _fetch_url(url: str, *, timeout_s: float, max_retries: int, backoff_base_s: float) -> str | None:
    for attempt in range(1, max_retries + 1):
        try:
            r = requests.get(url, timeout=timeout_s)
            if r.status_code == 404:
                logger.warning("Lyrics not found at %s", url)
                return None
            r.raise_for_status()
            return r.content.decode("utf-8", errors="replace")
        except requests.RequestException as e:
            logger.warning("fetch error (attempt %s/%s): %s", attempt, max_retries, e)
            if attempt == max_retries:
                return None
            time.sleep(backoff_base_s * attempt)
    return None


def load_text(source: str | Path, cfg: AppConfig) -> str | None:
    """
    Read lyrics text from a local path or an http(s) URL.
    Returns None when the source cannot be read.
    """
    if _is_url(source):
        return _fetch_url(
            str(source),
            timeout_s=cfg.fetch_timeout_s,
            max_retries=max(cfg.fetch_max_retries, 1),
            backoff_base_s=cfg.fetch_backoff_base_s,
        )
    try:
        return Path(source).read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        logger.warning("Could not read %s: %s", source, e)
        return None


def load_timeline(source: str | Path, cfg: AppConfig) -> Timeline:
    text = load_text(source, cfg)
    if text is None:
        return Timeline()
    return parse_lrc(text, trailing_window_ms=cfg.trailing_window_ms)
