from __future__ import annotations

from pathlib import Path
import typer

from lyrics_timeline.config import AppConfig, load_config
from lyrics_timeline.logging_setup import setup_logging
from lyrics_timeline.lrc.export import export_json, export_lrc, export_srt
from lyrics_timeline.lrc.parse import parse_lrc_with_stats
from lyrics_timeline.lrc.timecode import format_timestamp
from lyrics_timeline.sources.loader import load_text
from lyrics_timeline.sync.focus import focus_ratio
from lyrics_timeline.sync.scroll import scroll_targets


app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.callback()
def _root(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")):
    setup_logging(debug)


def _read_or_exit(source: str, cfg: AppConfig) -> str:
    text = load_text(source, cfg)
    if text is None:
        typer.echo(f"Error: could not read {source}", err=True)
        raise typer.Exit(code=1)
    return text


def _stamp(ms: int | None) -> str:
    return "--:--.--" if ms is None else format_timestamp(ms)


@app.command()
def parse(source: str):
    """Parse lyrics (path or URL) and print stats."""
    cfg = load_config()
    timeline, stats = parse_lrc_with_stats(_read_or_exit(source, cfg), trailing_window_ms=cfg.trailing_window_ms)
    typer.echo(f"lines_total={stats.lines_total}")
    typer.echo(f"lines_with_timestamps={stats.lines_with_timestamps}")
    typer.echo(f"lines_ignored={stats.lines_ignored}")
    typer.echo(f"lines_word_synced={stats.lines_word_synced}")
    typer.echo(f"lines_background={stats.lines_background}")
    typer.echo(f"timeline_lines={len(timeline)}")
    typer.echo(f"synced={timeline.synced}")


@app.command()
def export(
    source: str,
    fmt: str = typer.Option("json", "--format", case_sensitive=False, help="lrc|srt|json"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Export the parsed timeline to JSON/SRT/LRC (normalized)."""
    cfg = load_config()
    fmt_l = fmt.lower()
    if fmt_l not in ("lrc", "srt", "json"):
        raise typer.BadParameter("format must be one of: lrc, srt, json")

    timeline, _stats = parse_lrc_with_stats(_read_or_exit(source, cfg), trailing_window_ms=cfg.trailing_window_ms)
    if fmt_l == "json":
        data = export_json(timeline)
    elif fmt_l == "lrc":
        data = export_lrc(timeline)
    else:
        data = export_srt(timeline)

    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def focus(
    source: str,
    at_ms: int = typer.Option(..., "--at", help="Playback time in milliseconds"),
):
    """Print every line's focus ratio at a playback time."""
    cfg = load_config()
    timeline, _stats = parse_lrc_with_stats(_read_or_exit(source, cfg), trailing_window_ms=cfg.trailing_window_ms)
    for i, line in enumerate(timeline.lines):
        ratio = focus_ratio(
            line,
            timeline.next_start_ms(i),
            at_ms,
            anticipation_ms=cfg.anticipation_ms,
            decay_ms=cfg.decay_ms,
        )
        typer.echo(f"{ratio:.3f} [{_stamp(line.start_ms)}] {line.text}")


@app.command()
def scroll(
    source: str,
    line_height: float = typer.Option(1.0, "--line-height", help="Distance between consecutive anchors"),
):
    """Print scroll targets for evenly spaced line anchors."""
    cfg = load_config()
    timeline, _stats = parse_lrc_with_stats(_read_or_exit(source, cfg), trailing_window_ms=cfg.trailing_window_ms)
    anchors = [i * line_height for i in range(len(timeline))]
    for line, anchor, target in zip(timeline.lines, anchors, scroll_targets(timeline.lines, anchors)):
        typer.echo(f"{anchor:g} -> {target:g} [{_stamp(line.start_ms)}] {line.text}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
