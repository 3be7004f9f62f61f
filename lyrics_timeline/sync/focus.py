from __future__ import annotations

from lyrics_timeline.lrc.model import Line

ANTICIPATION_MS = 600
DECAY_MS = 400


def _lead_in(gap_ms: int, window_ms: int) -> float:
    if 0 < gap_ms < window_ms:
        return 1.0 - gap_ms / window_ms
    return 0.0


def focus_ratio(
    line: Line,
    next_start_ms: int | None,
    now_ms: int,
    *,
    anticipation_ms: int = ANTICIPATION_MS,
    decay_ms: int = DECAY_MS,
) -> float:
    """
    How active `line` is at `now_ms`, from 0.0 to 1.0.

    1.0 inside [start, end] and for unsynced lines. Before the start it ramps
    up over `anticipation_ms`. After the end it is the larger of a decay over
    `decay_ms` and the lead-in of the next line.
    """
    start = line.start_ms
    if start is None:
        return 1.0
    end = line.end_ms if line.end_ms is not None else start

    if start <= now_ms <= end:
        return 1.0
    if now_ms < start:
        return _lead_in(start - now_ms, anticipation_ms)

    since_end = now_ms - end
    decay = 1.0 - since_end / decay_ms if since_end < decay_ms else 0.0
    antic = 0.0
    if next_start_ms is not None:
        antic = _lead_in(next_start_ms - now_ms, anticipation_ms)
    return max(decay, antic)


def word_progress(line: Line, index: int, now_ms: int) -> float:
    """
    Elapsed fraction of word `index`, whose span runs to the next word's
    time or to the line end.
    """
    word = line.words[index]
    start = word.time_ms if word.time_ms is not None else line.start_ms
    if start is None:
        return 1.0

    stop: int | None = None
    if index + 1 < len(line.words):
        stop = line.words[index + 1].time_ms
    if stop is None:
        stop = line.end_ms if line.end_ms is not None else start

    duration = stop - start
    if duration <= 0:
        duration = 1
    return max(0.0, min(1.0, (now_ms - start) / duration))
