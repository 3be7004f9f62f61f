from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from lyrics_timeline.lrc.model import Timeline

# unsynced lines count as started since forever
_ALWAYS = float("-inf")


@dataclass(slots=True)
class LineTracker:
    """
    Efficient lookup: O(log n) via bisect + update only on change.
    """

    t_ms: list[float]
    next_starts: list[int | None]
    last_idx: int = -1

    @classmethod
    def from_timeline(cls, timeline: Timeline) -> "LineTracker":
        t_ms = [_ALWAYS if ln.start_ms is None else float(ln.start_ms) for ln in timeline.lines]
        next_starts = [timeline.next_start_ms(i) for i in range(len(timeline.lines))]
        return cls(t_ms=t_ms, next_starts=next_starts)

    def current_index(self, now_ms: int) -> int:
        # before the first line starts, the first line is still "current"
        if not self.t_ms:
            return -1
        i = bisect_right(self.t_ms, now_ms) - 1
        return i if i >= 0 else 0

    def changed_index(self, now_ms: int) -> int | None:
        i = self.current_index(now_ms)
        if i != self.last_idx:
            self.last_idx = i
            return i
        return None

    def next_start_ms(self, idx: int) -> int | None:
        return self.next_starts[idx] if 0 <= idx < len(self.next_starts) else None
