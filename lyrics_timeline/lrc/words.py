from __future__ import annotations

import re

from .model import Word
from .timecode import decode_timestamp

_WORD_RE = re.compile(r"<(\d{2}):(\d{2})\.(\d{2,3})>([^<]*)", re.ASCII)


def extract_words(fragment: str) -> tuple[tuple[Word, ...], bool]:
    """
    Split `<mm:ss.xx>text` runs into words.

    Text in front of the first timestamp is dropped. The second value tells
    whether any timestamp was found at all.
    """
    words = tuple(
        Word(time_ms=decode_timestamp(m.group(1), m.group(2), m.group(3)), text=m.group(4))
        for m in _WORD_RE.finditer(fragment)
    )
    return words, bool(words)


def split_end_marker(words: tuple[Word, ...]) -> tuple[tuple[Word, ...], int | None]:
    """
    A trailing `<mm:ss.xx>` with no text marks where the line ends.
    Returns the remaining words and that end time (or None).
    """
    if words and not words[-1].text.strip():
        return words[:-1], words[-1].time_ms
    return words, None


def tokenize_plain(fragment: str, time_ms: int | None) -> tuple[Word, ...]:
    tokens = fragment.split()
    if tokens:
        return tuple(Word(time_ms=time_ms, text=tok + " ") for tok in tokens)
    if fragment:
        return (Word(time_ms=time_ms, text=fragment),)
    return ()
