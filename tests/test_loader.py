from __future__ import annotations

from unittest.mock import Mock, patch

import requests

from lyrics_timeline.sources.loader import load_text, load_timeline


def _response(status: int, body: bytes = b"") -> Mock:
    r = Mock(status_code=status, content=body)
    if status >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"{status}")
    return r


def test_load_timeline_from_file(tmp_path, cfg):
    path = tmp_path / "song.lrc"
    path.write_text("[00:01.00]hello\n", encoding="utf-8")
    tl = load_timeline(path, cfg)
    assert [ln.start_ms for ln in tl] == [1000]


def test_missing_file_yields_empty_timeline(tmp_path, cfg):
    assert load_text(tmp_path / "nope.lrc", cfg) is None
    tl = load_timeline(tmp_path / "nope.lrc", cfg)
    assert len(tl) == 0
    assert tl.synced is False


def test_non_utf8_file_still_parses(tmp_path, cfg):
    path = tmp_path / "latin1.lrc"
    path.write_bytes("[00:01.00]café\n".encode("latin-1"))
    tl = load_timeline(path, cfg)
    assert tl[0].start_ms == 1000


def test_load_from_url(cfg):
    with patch("lyrics_timeline.sources.loader.requests.get", return_value=_response(200, b"[00:02.00]hi\n")) as get:
        tl = load_timeline("https://example.com/song.lrc", cfg)
    assert get.call_args.kwargs["timeout"] == cfg.fetch_timeout_s
    assert tl[0].start_ms == 2000


def test_url_not_found(cfg):
    with patch("lyrics_timeline.sources.loader.requests.get", return_value=_response(404)) as get:
        assert load_text("https://example.com/missing.lrc", cfg) is None
    assert get.call_count == 1


def test_url_retries_then_gives_up(cfg):
    with patch(
        "lyrics_timeline.sources.loader.requests.get",
        side_effect=requests.ConnectionError("down"),
    ) as get:
        tl = load_timeline("http://example.com/song.lrc", cfg)
    assert get.call_count == cfg.fetch_max_retries
    assert len(tl) == 0


def test_url_recovers_on_retry(cfg):
    with patch(
        "lyrics_timeline.sources.loader.requests.get",
        side_effect=[_response(503), _response(200, b"plain")],
    ):
        assert load_text("http://example.com/song.lrc", cfg) == "plain"
