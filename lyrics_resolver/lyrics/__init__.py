"""
Lyrics model, codecs and candidate matching.

    - models: Candidate, Line, Word, StructuredLyrics and outcome records
    - lrc: line-synced codec (tolerant and fixed-column policies)
    - ttml: word-synced codec
    - matcher: TrackMatcher candidate selection
"""

from lyrics_resolver.lyrics.lrc import (
    parse_lrc,
    parse_sentences,
    parse_sentences_fixed,
    to_lrc,
)
from lyrics_resolver.lyrics.matcher import TrackMatcher
from lyrics_resolver.lyrics.models import (
    DURATION_UNKNOWN,
    Candidate,
    CollectedLyrics,
    Line,
    LrcText,
    LyricsRequest,
    LyricsSource,
    MatchResult,
    StructuredLyrics,
    Word,
)
from lyrics_resolver.lyrics.ttml import parse_time, parse_ttml, ttml_to_lrc

__all__ = [
    "DURATION_UNKNOWN",
    "Candidate",
    "CollectedLyrics",
    "Line",
    "LrcText",
    "LyricsRequest",
    "LyricsSource",
    "MatchResult",
    "StructuredLyrics",
    "Word",
    "TrackMatcher",
    "parse_lrc",
    "parse_sentences",
    "parse_sentences_fixed",
    "to_lrc",
    "parse_ttml",
    "parse_time",
    "ttml_to_lrc",
]
