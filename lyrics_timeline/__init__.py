from lyrics_timeline.lrc.model import Line, Timeline, VocalTrack, Word
from lyrics_timeline.lrc.parse import parse_lrc, parse_stream
from lyrics_timeline.sync.focus import focus_ratio
from lyrics_timeline.sync.scroll import scroll_targets

__all__ = [
    "Line",
    "Timeline",
    "VocalTrack",
    "Word",
    "focus_ratio",
    "parse_lrc",
    "parse_stream",
    "scroll_targets",
]
