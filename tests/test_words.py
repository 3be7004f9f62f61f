from lyrics_timeline.lrc.model import Word
from lyrics_timeline.lrc.words import extract_words, split_end_marker, tokenize_plain


def test_extract_words_drops_leading_text():
    words, found = extract_words("ignored <00:01.00>Hel<00:01.25>lo <00:02.000>world")
    assert found is True
    assert words == (Word(1000, "Hel"), Word(1250, "lo "), Word(2000, "world"))


def test_extract_words_without_timestamps():
    words, found = extract_words("just text")
    assert found is False
    assert words == ()


def test_extract_words_ignores_malformed_tokens():
    words, found = extract_words("<0:01.00>a<00:01.5>b<00:02.00>c")
    assert found is True
    assert words == (Word(2000, "c"),)


def test_split_end_marker_pops_blank_last_word():
    words, end = split_end_marker((Word(1000, "a"), Word(2000, "  ")))
    assert words == (Word(1000, "a"),)
    assert end == 2000


def test_split_end_marker_keeps_real_last_word():
    original = (Word(1000, "a"), Word(2000, "b"))
    assert split_end_marker(original) == (original, None)
    assert split_end_marker(()) == ((), None)


def test_tokenize_plain_keeps_one_trailing_space():
    words = tokenize_plain("  Just   some\ttext ", None)
    assert [w.text for w in words] == ["Just ", "some ", "text "]
    assert all(w.time_ms is None for w in words)
    assert "".join(w.text for w in words) == "Just some text "


def test_tokenize_plain_edge_cases():
    assert tokenize_plain("", 5) == ()
    assert tokenize_plain("   ", 5) == (Word(5, "   "),)
