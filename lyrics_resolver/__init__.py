"""
lyrics-resolver: synced lyrics from several providers, one structured model.

Looks up lyrics for a (title, artist, duration) or a video id on
BetterLyrics, SimpMusic and LRCLIB, picks the best match per provider,
falls back across providers, and normalizes plain, line-synced (LRC) and
word-synced (TTML) lyrics into StructuredLyrics.

Usage:
    from lyrics_resolver import LyricsResolver

    async with LyricsResolver() as resolver:
        lyrics = await resolver.get_lyrics("Song", "Artist", duration=202)
"""

__version__ = "0.1.0"

from lyrics_resolver.core.config import Config, load_config
from lyrics_resolver.core.exceptions import (
    ConfigError,
    LyricsParseError,
    LyricsResolverError,
    LyricsUnavailableError,
    NoMatchError,
    ProviderError,
)
from lyrics_resolver.core.http import HttpClient
from lyrics_resolver.lyrics.models import (
    DURATION_UNKNOWN,
    Candidate,
    CollectedLyrics,
    Line,
    LrcText,
    LyricsSource,
    MatchResult,
    StructuredLyrics,
    Word,
)
from lyrics_resolver.resolver import LyricsResolver

__all__ = [
    "__version__",
    "LyricsResolver",
    "Config",
    "load_config",
    "HttpClient",
    "DURATION_UNKNOWN",
    "Candidate",
    "CollectedLyrics",
    "Line",
    "LrcText",
    "LyricsSource",
    "MatchResult",
    "StructuredLyrics",
    "Word",
    "LyricsResolverError",
    "ConfigError",
    "ProviderError",
    "NoMatchError",
    "LyricsParseError",
    "LyricsUnavailableError",
]
