import json

from lyrics_timeline.lrc.export import export_json, export_lrc, export_srt
from lyrics_timeline.lrc.parse import parse_lrc

TEXT = (
    "plain intro\n"
    "[00:00.00]a\n"
    "[00:01.00]v2:<00:01.00>b<00:01.50>c<00:02.00>\n"
    "[bg: <00:01.20>ooh]\n"
    "[00:03.00]Time: 3:00\n"
)


def test_export_srt_basic():
    srt = export_srt(parse_lrc("[00:00.00]a\n[00:01.00]b\n"))
    assert "00:00:00,000 --> 00:00:01,000" in srt
    assert "00:00:01,000 --> 00:00:04,000" in srt
    assert "\na\n" in srt
    assert "\nb\n" in srt


def test_export_srt_skips_unsynced_lines():
    srt = export_srt(parse_lrc(TEXT))
    assert "plain intro" not in srt
    assert srt.startswith("1\n00:00:00,000")


def test_export_json():
    data = json.loads(export_json(parse_lrc(TEXT)))
    assert data["synced"] is True
    bg = [ln for ln in data["lines"] if ln["background"]]
    assert bg == [
        {
            "start_ms": 1200,
            "end_ms": 3000,
            "vocal": 1,
            "background": True,
            "word_synced": True,
            "words": [{"t_ms": 1200, "text": "ooh"}],
        }
    ]


def test_export_lrc_reparses_to_same_timeline():
    tl = parse_lrc(TEXT)
    lrc = export_lrc(tl)
    assert "[00:01.000]v2:<00:01.000>b<00:01.500>c<00:02.000>" in lrc
    assert parse_lrc(lrc) == tl
