from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import re
from typing import IO, Iterable

from .model import Line, Timeline, VocalTrack
from .timecode import LrcParseError, decode_timestamp
from .words import extract_words, split_end_marker, tokenize_plain

logger = logging.getLogger(__name__)

DEFAULT_TRAILING_WINDOW_MS = 3000

_LINE_TS_RE = re.compile(r"\[(\d{2}):(\d{2})\.(\d{2,3})\](.*)", re.ASCII)  # [mm:ss.xx] / [mm:ss.xxx]
_SINGER_PREFIX_RE = re.compile(r"^[^<:]*:")  # "Artist:" up to the first colon, no "<" inside
_BG_OPEN = "[bg:"
# only \n, \r and \r\n end a line; form feeds etc. stay part of the text
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class LrcParseStats:
    lines_total: int
    lines_with_timestamps: int
    lines_ignored: int
    lines_word_synced: int
    lines_background: int


def _unwrap_background(text: str) -> str | None:
    trimmed = text.strip()
    if trimmed.startswith(_BG_OPEN) and trimmed.endswith("]"):
        return trimmed[len(_BG_OPEN) : -1]
    return None


def _parse_content(content: str, *, start_ms: int | None, background: bool) -> Line:
    vocal = VocalTrack.PRIMARY
    head = content.strip()
    if head.startswith("v2:"):
        vocal = VocalTrack.SECONDARY
        content = content.replace("v2:", "", 1)
    elif head.startswith("v1:"):
        content = content.replace("v1:", "", 1)
    elif not background:
        content = _SINGER_PREFIX_RE.sub("", content, count=1)

    words, word_synced = extract_words(content)
    end_ms: int | None = None
    if word_synced:
        words, end_ms = split_end_marker(words)
    else:
        words = tokenize_plain(content, start_ms)

    return Line(
        start_ms=start_ms,
        end_ms=end_ms,
        words=words,
        vocal=vocal,
        word_synced=word_synced,
        background=background,
    )


def _classify(raw: str) -> Line | None:
    inner = _unwrap_background(raw)
    if inner is not None:
        line = _parse_content(inner, start_ms=None, background=True)
        if not line.words or line.words[0].time_ms is None:
            logger.debug("Dropping background line without word timestamps: %r", raw)
            return None
        return replace(line, start_ms=line.words[0].time_ms)

    m = _LINE_TS_RE.match(raw.strip())
    if m:
        start_ms = decode_timestamp(m.group(1), m.group(2), m.group(3))
        rest = m.group(4)
        inner = _unwrap_background(rest)
        if inner is not None:
            # outer line stamp wins over the first inner word here
            return _parse_content(inner, start_ms=start_ms, background=True)
        return _parse_content(rest, start_ms=start_ms, background=False)

    return Line(start_ms=None, words=tokenize_plain(raw, None))


def parse_line(raw: str) -> Line | None:
    """
    Classify one raw line as background, timed or plain.

    Returns None for blank lines, background lines without a usable word
    timestamp, and lines whose timestamp cannot be decoded.
    """
    if not raw or not raw.strip():
        return None
    try:
        return _classify(raw)
    except LrcParseError as e:
        logger.debug("Dropping line %r: %s", raw, e)
        return None


def _line_order(line: Line) -> tuple[bool, int, bool, int]:
    # unsynced first, then time, foreground before background, v1 before v2
    return (line.start_ms is not None, line.start_ms or 0, line.background, int(line.vocal))


def _infer_end_times(lines: list[Line], trailing_window_ms: int) -> list[Line]:
    out: list[Line] = []
    for i, cur in enumerate(lines):
        if cur.start_ms is None or cur.end_ms is not None:
            out.append(cur)
            continue
        end_ms = next(
            (
                nxt.start_ms
                for nxt in lines[i + 1 :]
                if nxt.start_ms is not None and nxt.start_ms > cur.start_ms
            ),
            None,
        )
        if end_ms is None:
            end_ms = cur.start_ms + trailing_window_ms
        out.append(replace(cur, end_ms=end_ms))
    return out


def build_timeline(
    lines: Iterable[Line],
    *,
    trailing_window_ms: int = DEFAULT_TRAILING_WINDOW_MS,
) -> Timeline:
    """
    Order classified lines and fill in missing end times.

    Without any line-level timestamp the lines are kept as encountered.
    Otherwise the sort is stable and end times come from the next strictly
    later start, or start + trailing_window_ms for the last one.
    """
    ordered = list(lines)
    if not any(line.start_ms is not None for line in ordered):
        return Timeline(lines=tuple(ordered), synced=False)

    ordered.sort(key=_line_order)
    return Timeline(lines=tuple(_infer_end_times(ordered, trailing_window_ms)), synced=True)


def _split_lines(text: str) -> list[str]:
    lines = _NEWLINE_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_lrc_with_stats(
    text: str,
    *,
    trailing_window_ms: int = DEFAULT_TRAILING_WINDOW_MS,
) -> tuple[Timeline, LrcParseStats]:
    lines: list[Line] = []
    total = 0
    ignored = 0

    for raw in _split_lines(text):
        total += 1
        line = parse_line(raw)
        if line is None:
            ignored += 1
            continue
        lines.append(line)

    timeline = build_timeline(lines, trailing_window_ms=trailing_window_ms)
    stats = LrcParseStats(
        lines_total=total,
        lines_with_timestamps=sum(1 for ln in lines if ln.synced),
        lines_ignored=ignored,
        lines_word_synced=sum(1 for ln in lines if ln.word_synced),
        lines_background=sum(1 for ln in lines if ln.background),
    )
    return timeline, stats


def parse_lrc(text: str, *, trailing_window_ms: int = DEFAULT_TRAILING_WINDOW_MS) -> Timeline:
    """
    Supported:
    - [mm:ss.xx] / [mm:ss.xxx] line stamps
    - <mm:ss.xx> word stamps, a trailing empty one marks the line end
    - [bg: ...] background vocals, standalone or after a line stamp
    - v1: / v2: vocal tracks, "Name:" singer prefixes are stripped

    Lines without a line stamp are kept as plain text.
    """
    timeline, _stats = parse_lrc_with_stats(text, trailing_window_ms=trailing_window_ms)
    return timeline


def parse_stream(
    stream: IO[str] | IO[bytes] | None,
    *,
    trailing_window_ms: int = DEFAULT_TRAILING_WINDOW_MS,
) -> Timeline:
    if stream is None:
        return Timeline()
    try:
        data = stream.read()
    except (OSError, ValueError) as e:
        logger.warning("Could not read lyrics stream: %s", e)
        return Timeline()
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    return parse_lrc(data, trailing_window_ms=trailing_window_ms)
