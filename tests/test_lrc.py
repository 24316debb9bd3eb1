# tests/test_lrc.py
"""Test the line-synced (LRC) codec"""

import pytest

from lyrics_resolver.lyrics.lrc import (
    format_timestamp,
    parse_lrc,
    parse_sentences,
    parse_sentences_fixed,
    parse_word_timings,
    to_lrc,
)
from lyrics_resolver.lyrics.models import Line, Word


class TestParseLrc:
    """Test the tolerant parser"""

    def test_parses_two_and_three_digit_fractions(self):
        lyrics = parse_lrc("[00:12.34]Hello\n[01:02.500]World")

        assert lyrics.is_synced is True
        assert [line.text for line in lyrics.lines] == ["Hello", "World"]
        assert lyrics.lines[0].start_time == pytest.approx(12.34)
        assert lyrics.lines[1].start_time == pytest.approx(62.5)

    def test_keeps_original_text(self):
        text = "[00:01.00]Hello\n"
        assert parse_lrc(text).text == text

    def test_skips_malformed_lines(self):
        text = "[00:01.00]first\nnot a timestamp at all\n[0:1.0]bad\n[00:02.00]x"
        lyrics = parse_lrc(text)

        assert [line.text for line in lyrics.lines] == ["first", "x"]

    def test_empty_line_text(self):
        lyrics = parse_lrc("[00:01.00]\n[00:02.00]Words")
        assert [line.text for line in lyrics.lines] == ["", "Words"]

    def test_keeps_input_order(self):
        lyrics = parse_lrc("[00:05.00]later\n[00:01.00]earlier")
        assert [line.text for line in lyrics.lines] == ["later", "earlier"]

    def test_handles_crlf(self):
        lyrics = parse_lrc("[00:01.00]Hello\r\n[00:02.00]World\r\n")
        assert [line.text for line in lyrics.lines] == ["Hello", "World"]

    def test_plain_text_is_not_synced(self):
        lyrics = parse_lrc("Just some words\nwithout any timing")

        assert lyrics.is_synced is False
        assert lyrics.lines == ()

    def test_word_timing_line_restores_words(self):
        text = (
            "[00:01.00]Hello world\n"
            "<Hello:1.0:1.4|world:1.5:2.0>\n"
            "[00:03.00]Next line"
        )
        lyrics = parse_lrc(text)

        assert len(lyrics.lines) == 2
        assert lyrics.lines[0].words == (
            Word("Hello", 1.0, 1.4),
            Word("world", 1.5, 2.0),
        )
        assert lyrics.lines[1].words == ()

    def test_word_timing_line_without_timed_line_is_ignored(self):
        lyrics = parse_lrc("<Hello:1.0:1.4|there:1.5:2.0>\n[00:01.00]Hello")

        assert len(lyrics.lines) == 1
        assert lyrics.lines[0].words == ()


class TestParseWordTimings:
    """Test the auxiliary word-timing line"""

    def test_parses_triples(self):
        words = parse_word_timings("<Hel:1.0:1.2|lo:1.2:1.5>")
        assert words == (Word("Hel", 1.0, 1.2), Word("lo", 1.2, 1.5))

    def test_skips_malformed_triples(self):
        words = parse_word_timings("<ok:1.0:2.0|bad|x:y:z|:1:2>")
        assert words == (Word("ok", 1.0, 2.0),)

    def test_text_may_contain_colons(self):
        words = parse_word_timings("<a:b:1.0:2.0>")
        assert words == (Word("a:b", 1.0, 2.0),)


class TestSentenceMaps:
    """Test both SentenceMap policies"""

    def test_tolerant_map(self):
        sentences = parse_sentences("[00:00.00]\n[00:12.34]Test line")
        assert sentences == {0: "", 12340: "Test line"}

    def test_tolerant_map_three_digit_fraction(self):
        assert parse_sentences("[00:01.500]x") == {0: "", 1500: "x"}

    def test_tolerant_map_sentinel_only_is_none(self):
        assert parse_sentences("no timestamps here") is None
        assert parse_sentences("[00:00.00]") is None

    def test_sentinel_present_without_line_at_zero(self):
        sentences = parse_sentences("[00:05.00]Late start")
        assert sentences[0] == ""
        assert sentences[5000] == "Late start"

    def test_fixed_map(self):
        sentences = parse_sentences_fixed("[00:00.00]\n[00:12.34]Test line")

        assert sentences is not None
        assert len(sentences) > 1
        assert sentences == {0: "", 12340: "Test line"}

    def test_fixed_map_digit_weights(self):
        assert parse_sentences_fixed("[01:02.03]x") == {0: "", 62030: "x"}
        assert parse_sentences_fixed("[10:00.00]x") == {0: "", 600000: "x"}

    def test_fixed_map_skips_non_digits(self):
        sentences = parse_sentences_fixed("[0a:00.00]bad\n[00:01.00]good")
        assert sentences == {0: "", 1000: "good"}

    def test_fixed_map_rejects_three_digit_fraction(self):
        # Column 9 must be ']'
        assert parse_sentences_fixed("[00:01.500]x") is None

    def test_fixed_map_nothing_parsed_is_none(self):
        assert parse_sentences_fixed("plain text only") is None
        assert parse_sentences_fixed("") is None


class TestToLrc:
    """Test serialization"""

    def test_format_timestamp(self):
        assert format_timestamp(62.5) == "[01:02.50]"
        assert format_timestamp(605.0) == "[10:05.00]"
        assert format_timestamp(0.0) == "[00:00.00]"

    def test_truncates_to_centiseconds(self):
        assert format_timestamp(1.999) == "[00:01.99]"

    def test_writes_lines(self):
        lines = [Line("First", 1.0), Line("Second", 62.5)]
        assert to_lrc(lines) == "[00:01.00]First\n[01:02.50]Second\n"

    def test_words_only_when_requested(self):
        line = Line("Hi there", 1.0, (Word("Hi", 1.0, 1.2), Word("there", 1.3, 1.8)))

        assert to_lrc([line]) == "[00:01.00]Hi there\n"
        assert to_lrc([line], include_words=True) == (
            "[00:01.00]Hi there\n<Hi:1.0:1.2|there:1.3:1.8>\n"
        )

    def test_round_trip_start_times(self):
        starts = [0.0, 12.34, 65.5, 125.07, 3599.99]
        lines = [Line(f"line {i}", start) for i, start in enumerate(starts)]

        parsed = parse_lrc(to_lrc(lines)).lines

        assert [line.text for line in parsed] == [line.text for line in lines]
        for original, restored in zip(lines, parsed):
            assert abs(original.start_time - restored.start_time) <= 0.01 + 1e-9

    def test_round_trip_words(self):
        words = (Word("Hel", 1.0, 1.25), Word("lo", 1.25, 1.5))
        lines = [Line("Hello", 1.0, words), Line("plain", 2.0)]

        parsed = parse_lrc(to_lrc(lines, include_words=True)).lines

        assert parsed[0].words == words
        assert parsed[1].words == ()
