from lyrics_timeline.lrc.parse import parse_lrc
from lyrics_timeline.sync.tracker import LineTracker


def test_tracker_changed_only_on_change():
    tl = parse_lrc("[00:00.00]a\n[00:01.00]b\n[00:02.00]c\n")
    tr = LineTracker.from_timeline(tl)
    assert tr.changed_index(0) == 0
    assert tr.changed_index(10) is None
    assert tr.changed_index(999) is None
    assert tr.changed_index(1000) == 1
    assert tr.changed_index(1500) is None
    assert tr.changed_index(2500) == 2


def test_tracker_clamps_before_first_line():
    tr = LineTracker.from_timeline(parse_lrc("[00:05.00]a\n[00:06.00]b\n"))
    assert tr.current_index(0) == 0
    assert tr.next_start_ms(0) == 6000
    assert tr.next_start_ms(1) is None


def test_tracker_treats_unsynced_lines_as_started():
    tr = LineTracker.from_timeline(parse_lrc("intro\n[00:05.00]a\n"))
    assert tr.current_index(0) == 0
    assert tr.current_index(5000) == 1


def test_tracker_empty_timeline():
    assert LineTracker.from_timeline(parse_lrc("")).current_index(0) == -1
