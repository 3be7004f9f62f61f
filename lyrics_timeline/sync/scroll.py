from __future__ import annotations

from typing import Sequence

from lyrics_timeline.lrc.model import Line, Timeline

from .focus import ANTICIPATION_MS
from .tracker import LineTracker


def _overlaps(line: Line, earlier: Line) -> bool:
    return (
        line.start_ms is not None
        and earlier.end_ms is not None
        and line.start_ms < earlier.end_ms
    )


def scroll_targets(lines: Sequence[Line], anchors: Sequence[float]) -> list[float]:
    """
    Per-line scroll anchor, with lines sharing a time window pulled together.

    `anchors[i]` is the layout position of `lines[i]`. A line overlapping its
    predecessor lands halfway between the two; a line still overlapping the
    one before that snaps to the middle line's anchor.
    """
    if len(lines) != len(anchors):
        raise ValueError(f"Got {len(anchors)} anchors for {len(lines)} lines")

    targets: list[float] = []
    for i, cur in enumerate(lines):
        anchor = anchors[i]
        if cur.start_ms is None:
            targets.append(anchor)
        elif i > 1 and _overlaps(cur, lines[i - 2]):
            targets.append(anchors[i - 1])
        elif i > 0 and _overlaps(cur, lines[i - 1]):
            targets.append((anchors[i - 1] + anchor) / 2)
        else:
            targets.append(anchor)
    return targets


def scroll_position(
    timeline: Timeline,
    targets: Sequence[float],
    now_ms: int,
    *,
    anticipation_ms: int = ANTICIPATION_MS,
    tracker: LineTracker | None = None,
) -> float | None:
    """
    Where the view should be centred at `now_ms`: the current line's target,
    eased toward the next line's target while that line is about to start.

    None when there is nothing to follow (empty or unsynced current line).
    """
    if len(targets) != len(timeline):
        raise ValueError(f"Got {len(targets)} targets for {len(timeline)} lines")
    tracker = tracker or LineTracker.from_timeline(timeline)
    idx = tracker.current_index(now_ms)
    if idx < 0 or timeline.lines[idx].start_ms is None:
        return None

    desired = targets[idx]
    next_start = tracker.next_start_ms(idx)
    if next_start is not None:
        until_next = next_start - now_ms
        if 0 < until_next < anticipation_ms:
            ratio = 1.0 - until_next / anticipation_ms
            desired += (targets[idx + 1] - desired) * ratio
    return desired
