from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
import logging
import threading
from typing import Callable

from lyrics_timeline.lrc.model import Timeline
from lyrics_timeline.lrc.parse import DEFAULT_TRAILING_WINDOW_MS, parse_lrc

logger = logging.getLogger(__name__)


class TimelineWorker:
    """
    Parses lyrics off the caller's thread.

    Only the most recent request is ever published: a pending request is
    cancelled when a newer one arrives, and a result that finishes after
    being superseded is dropped. Readers see either the previous timeline
    or the new one, never anything in between.

    `on_ready` runs on the worker thread while the worker's lock is held; it
    may call back into the worker but should return quickly.
    """

    def __init__(
        self,
        *,
        trailing_window_ms: int = DEFAULT_TRAILING_WINDOW_MS,
        on_ready: Callable[[Timeline], None] | None = None,
    ):
        self.trailing_window_ms = trailing_window_ms
        self.on_ready = on_ready
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="lyrics-parse")
        self._lock = threading.RLock()
        self._generation = 0
        self._pending: Future[Timeline] | None = None
        self._timeline = Timeline()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    def request(self, text: str | None) -> Future[Timeline]:
        with self._lock:
            self._generation += 1
            if self._pending is not None:
                self._pending.cancel()
            self._pending = self._executor.submit(self._run, self._generation, text)
            return self._pending

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._timeline = Timeline()

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _run(self, generation: int, text: str | None) -> Timeline:
        if text:
            timeline = parse_lrc(text, trailing_window_ms=self.trailing_window_ms)
        else:
            timeline = Timeline()
        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding superseded parse #%d", generation)
                return timeline
            self._timeline = timeline
            self._pending = None
            # delivered under the lock so a concurrent clear()/request() lands after it
            if self.on_ready is not None:
                self.on_ready(timeline)
        return timeline
