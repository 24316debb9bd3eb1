# tests/test_text_utils.py
"""Test title/artist normalization and similarity scoring"""

import pytest

from lyrics_resolver.utils.text import (
    clean_artist,
    clean_title,
    levenshtein_distance,
    similarity,
)


class TestCleanTitle:
    """Test noise removal from titles"""

    def test_removes_qualifier_tags(self):
        assert clean_title("Song (Official Video)") == "Song"
        assert clean_title("Song [HD]") == "Song"
        assert clean_title("Song (Remastered 2011)") == "Song"
        assert clean_title("Song [Official Lyric Video]") == "Song"

    def test_removes_fullwidth_brackets(self):
        assert clean_title("Song 【MV】") == "Song"

    def test_removes_pipe_suffix(self):
        assert clean_title("Song | Live at Wembley") == "Song"

    def test_removes_dash_suffix(self):
        assert clean_title("Song - Official Audio") == "Song"
        assert clean_title("Song - Lyrics") == "Song"

    def test_removes_featuring_credits(self):
        assert clean_title("Song (feat. Other)") == "Song"
        assert clean_title("Song (ft. Other)") == "Song"
        assert clean_title("Song feat. Other") == "Song"
        assert clean_title("Song ft. Other") == "Song"

    def test_keeps_unrelated_parentheses(self):
        assert clean_title("Song (Part 2)") == "Song (Part 2)"

    def test_trims_whitespace(self):
        assert clean_title("  Plain Song  ") == "Plain Song"

    @pytest.mark.parametrize("title", [
        "Song (Official Video)",
        "Song [HD] (feat. Other)",
        "Song | Live",
        "Plain Song",
    ])
    def test_idempotent(self, title):
        once = clean_title(title)
        assert clean_title(once) == once


class TestCleanArtist:
    """Test primary artist extraction"""

    def test_splits_on_separators(self):
        assert clean_artist("A & B") == "A"
        assert clean_artist("A, B") == "A"
        assert clean_artist("A and B") == "A"
        assert clean_artist("A x B") == "A"
        assert clean_artist("A feat. B") == "A"
        assert clean_artist("A featuring B") == "A"
        assert clean_artist("A with B") == "A"

    def test_separators_are_case_insensitive(self):
        assert clean_artist("A FEAT. B") == "A"
        assert clean_artist("A And B") == "A"

    def test_separator_list_order_wins_over_position(self):
        # " & " is checked before " feat. " even though it occurs later
        assert clean_artist("A feat. B & C") == "A feat. B"

    def test_no_separator_returns_trimmed_input(self):
        assert clean_artist("  Solo Artist ") == "Solo Artist"
        assert clean_artist("Alexander") == "Alexander"


class TestSimilarity:
    """Test fuzzy string comparison"""

    def test_equal_strings(self):
        assert similarity("abc", "abc") == 1.0
        assert similarity("Hello", " hello ") == 1.0

    def test_empty_strings(self):
        assert similarity("test", "") == 0.0
        assert similarity("", "test") == 0.0

    def test_substring_containment(self):
        assert similarity("testing", "test") == 0.8
        assert similarity("Test", "A TEST CASE") == 0.8

    def test_edit_distance_score(self):
        assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
        assert similarity("abc", "xyz") == 0.0

    def test_levenshtein_distance(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("same", "same") == 0
        assert levenshtein_distance("flaw", "lawn") == 2
