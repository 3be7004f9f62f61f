from __future__ import annotations

import json

from .model import Line, Timeline, VocalTrack
from .timecode import format_timestamp


def export_json(timeline: Timeline) -> str:
    return json.dumps(
        {
            "synced": timeline.synced,
            "lines": [
                {
                    "start_ms": ln.start_ms,
                    "end_ms": ln.end_ms,
                    "vocal": int(ln.vocal),
                    "background": ln.background,
                    "word_synced": ln.word_synced,
                    "words": [{"t_ms": w.time_ms, "text": w.text} for w in ln.words],
                }
                for ln in timeline.lines
            ],
        },
        ensure_ascii=False,
        indent=2,
    )


def _lrc_content(line: Line) -> str:
    if line.word_synced:
        body = "".join(
            f"<{format_timestamp(w.time_ms, millis=True)}>{w.text}"
            for w in line.words
            if w.time_ms is not None
        )
        if line.end_ms is not None:
            body += f"<{format_timestamp(line.end_ms, millis=True)}>"
    else:
        body = line.text
    if line.vocal == VocalTrack.SECONDARY:
        body = "v2:" + body
    elif not line.background and ":" in body.split("<", 1)[0]:
        # keep "Time: 3:00" from being read back as a singer prefix
        body = "v1:" + body
    if line.background:
        body = f"[bg: {body}]"
    return body


def export_lrc(timeline: Timeline) -> str:
    """
    Re-emit the timeline as extended LRC. Word stamps use three fraction
    digits so no precision is lost; inferred end times are written as end
    markers only for word-synced lines.
    """
    out: list[str] = []
    for ln in timeline.lines:
        if ln.start_ms is None:
            out.append(ln.text)
        else:
            out.append(f"[{format_timestamp(ln.start_ms, millis=True)}]{_lrc_content(ln)}")
    return "\n".join(out) + ("\n" if out else "")


def _fmt_srt_time(ms: int) -> str:
    # HH:MM:SS,mmm
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def export_srt(timeline: Timeline) -> str:
    """
    Only synced lines are written, with the end times the timeline carries.
    """
    out: list[str] = []
    idx = 0
    for ln in timeline.lines:
        if ln.start_ms is None:
            continue
        idx += 1
        end = ln.end_ms if ln.end_ms is not None else ln.start_ms
        out.append(str(idx))
        out.append(f"{_fmt_srt_time(ln.start_ms)} --> {_fmt_srt_time(max(end, ln.start_ms + 1))}")
        out.append(ln.text)
        out.append("")
    return "\n".join(out)
