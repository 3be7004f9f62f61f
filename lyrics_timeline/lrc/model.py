from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator


class VocalTrack(IntEnum):
    PRIMARY = 1
    SECONDARY = 2


@dataclass(frozen=True, slots=True)
class Word:
    # None: no own timestamp, the word shares its line's start
    time_ms: int | None
    text: str


@dataclass(frozen=True, slots=True)
class Line:
    start_ms: int | None
    end_ms: int | None = None
    words: tuple[Word, ...] = ()
    vocal: VocalTrack = VocalTrack.PRIMARY
    word_synced: bool = False
    background: bool = False

    @property
    def synced(self) -> bool:
        return self.start_ms is not None

    @property
    def text(self) -> str:
        return "".join(w.text for w in self.words).strip()


@dataclass(frozen=True, slots=True)
class Timeline:
    """
    Ordered, immutable result of one parse.

    `synced` is True when at least one line carries a line-level start time;
    only then are lines sorted and end times inferred.
    """

    lines: tuple[Line, ...] = ()
    synced: bool = False

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __getitem__(self, idx: int) -> Line:
        return self.lines[idx]

    def next_start_ms(self, idx: int) -> int | None:
        if idx + 1 < len(self.lines):
            return self.lines[idx + 1].start_ms
        return None
