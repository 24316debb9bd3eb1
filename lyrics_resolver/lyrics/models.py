"""
Data models for lyrics resolution.

This module defines immutable dataclasses for everything that flows
through a resolution call: the caller's request, the candidates each
provider reports, the structured lyrics handed back to a playback UI,
and the per-provider outcome records.

Design Decisions:
    - All dataclasses are frozen (immutable); sequences are tuples
    - Provider payload quirks are absorbed by the from_* factories, so
      the rest of the package never sees raw JSON
    - Empty or whitespace-only lyrics strings are stored as None
    - Lines keep insertion order; nothing here re-sorts by time

Usage:
    from lyrics_resolver.lyrics.models import StructuredLyrics, Line, Word

    lyrics = StructuredLyrics.from_lrc("[00:12.34]First line")
    for line in lyrics.lines:
        print(line.start_time, line.text)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# Sentinel for "duration not known"; switches matching to name similarity
DURATION_UNKNOWN = -1


class LyricsSource(str, Enum):
    """
    Provider selection for single-result resolution.
    
    ALL walks the configured provider order; any other member restricts
    the call to that single provider. Values match the provider names
    used in configuration and in MatchResult.source.
    """
    ALL = "all"
    BETTER_LYRICS = "better_lyrics"
    SIMPMUSIC = "simpmusic"
    LRCLIB = "lrclib"


@dataclass(frozen=True)
class LyricsRequest:
    """
    What the caller is looking for.
    
    Attributes:
        title: Track title as the caller knows it (may contain noise).
        artist: Artist credit as the caller knows it.
        duration: Track length in whole seconds, or DURATION_UNKNOWN.
        album: Optional album name, forwarded to providers that accept it.
        video_id: Optional video id, required by id-scoped providers.
    """
    title: str
    artist: str
    duration: int = DURATION_UNKNOWN
    album: str | None = None
    video_id: str | None = None
    
    @property
    def has_duration(self) -> bool:
        """True when the duration is usable for duration-based matching."""
        return self.duration != DURATION_UNKNOWN


def _lyrics_or_none(value: Any) -> str | None:
    """Treat missing, non-string, empty and whitespace-only lyrics as absent."""
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def _float_or_zero(value: Any) -> float:
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class Candidate:
    """
    One track reported by a provider's search.
    
    Attributes:
        id: Provider-specific identifier, as a string.
        title: Track title as stored by the provider.
        artist: Artist credit as stored by the provider.
        album: Album name, if reported.
        duration: Track length in seconds; 0.0 when the provider omitted it.
        plain_lyrics: Unsynced lyrics text, or None.
        synced_lyrics: Line-synced (LRC) lyrics text, or None.
        source: Name of the provider that reported the candidate.
        video_id: Video id the candidate is scoped to, for id-based providers.
    
    Properties:
        has_lyrics: True if plain or synced text is present.
        is_synced: True if synced text is present.
        best_lyrics: Synced text if present, else plain text, else None.
    """
    id: str
    title: str
    artist: str
    album: str | None = None
    duration: float = 0.0
    plain_lyrics: str | None = None
    synced_lyrics: str | None = None
    source: str = ""
    video_id: str | None = None
    
    @property
    def has_lyrics(self) -> bool:
        return self.plain_lyrics is not None or self.synced_lyrics is not None
    
    @property
    def is_synced(self) -> bool:
        return self.synced_lyrics is not None
    
    @property
    def best_lyrics(self) -> str | None:
        return self.synced_lyrics if self.synced_lyrics is not None else self.plain_lyrics
    
    @classmethod
    def from_lrclib(cls, record: dict[str, Any]) -> "Candidate":
        """
        Create a Candidate from one LRCLIB search result.
        
        Expected keys: id, trackName, artistName, albumName, duration,
        plainLyrics, syncedLyrics. Missing keys fall back to empty values.
        
        Example:
            Candidate.from_lrclib({
                "id": 1, "trackName": "Song", "artistName": "Artist",
                "duration": 202.0, "syncedLyrics": "[00:01.00]Hi"
            })
        """
        return cls(
            id=str(record.get("id", "")),
            title=record.get("trackName") or "",
            artist=record.get("artistName") or "",
            album=record.get("albumName") or None,
            duration=_float_or_zero(record.get("duration")),
            plain_lyrics=_lyrics_or_none(record.get("plainLyrics")),
            synced_lyrics=_lyrics_or_none(record.get("syncedLyrics")),
            source="lrclib",
        )
    
    @classmethod
    def from_simpmusic(cls, record: dict[str, Any]) -> "Candidate":
        """
        Create a Candidate from one entry of a SimpMusic response's data list.
        
        Expected keys: id, videoId, songTitle, artistName, albumName,
        durationSeconds, syncedLyrics, plainLyric. Note the singular
        'plainLyric' used by that API.
        """
        return cls(
            id=str(record.get("id", "")),
            title=record.get("songTitle") or "",
            artist=record.get("artistName") or "",
            album=record.get("albumName") or None,
            duration=_float_or_zero(record.get("durationSeconds")),
            plain_lyrics=_lyrics_or_none(record.get("plainLyric")),
            synced_lyrics=_lyrics_or_none(record.get("syncedLyrics")),
            source="simpmusic",
            video_id=record.get("videoId") or None,
        )


@dataclass(frozen=True)
class Word:
    """
    One word with its own timing.
    
    end_time >= start_time is expected from provider data but not checked.
    """
    text: str
    start_time: float
    end_time: float


@dataclass(frozen=True)
class Line:
    """
    One lyrics line.
    
    Attributes:
        text: The line as displayed.
        start_time: Seconds from the start of the track.
        words: Word-level timing; empty for line-only sync.
    """
    text: str
    start_time: float
    words: tuple[Word, ...] = ()


@dataclass(frozen=True)
class StructuredLyrics:
    """
    Lyrics in the one shape every source is normalized to.
    
    Attributes:
        text: The raw text the lines were produced from. For word-synced
              sources this is the LRC rendering including word-timing lines.
        lines: Lines in source order (not re-sorted by time).
        is_synced: True if the lines carry meaningful timestamps.
    
    Example:
        lyrics = StructuredLyrics.from_lrc("[00:00.00]\\n[00:12.34]Hello")
        lyrics.sentences  # {0: "", 12340: "Hello"}
    """
    text: str
    lines: tuple[Line, ...] = ()
    is_synced: bool = False
    
    @property
    def sentences(self) -> dict[int, str] | None:
        """
        Timestamp (whole milliseconds) to line text, seeded with {0: ""}.
        
        Returns None when the lyrics are not synced or have no lines.
        A later line at the same millisecond replaces an earlier one.
        """
        if not self.is_synced or not self.lines:
            return None
        
        result = {0: ""}
        for line in self.lines:
            result[int(line.start_time * 1000)] = line.text
        return result
    
    @classmethod
    def from_lrc(cls, text: str) -> "StructuredLyrics":
        """Parse LRC text with the tolerant line-synced parser."""
        from lyrics_resolver.lyrics.lrc import parse_lrc
        return parse_lrc(text)
    
    @classmethod
    def from_plain(cls, text: str) -> "StructuredLyrics":
        """Wrap unsynced text. No lines are produced."""
        return cls(text=text, lines=(), is_synced=False)


@dataclass(frozen=True)
class LrcText:
    """
    Raw LRC text whose sentence map is read with the fixed-column parser.
    
    Kept for callers that depend on the strict column layout
    ("[mm:ss.cc]" in exactly the first ten characters).
    """
    text: str
    
    @property
    def sentences(self) -> dict[int, str] | None:
        from lyrics_resolver.lyrics.lrc import parse_sentences_fixed
        return parse_sentences_fixed(self.text)


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of resolving lyrics, with the provider that answered.
    
    Attributes:
        source: Provider name that produced the lyrics, or the last one
                attempted on failure ("" when nothing was attempted).
        matched: True if lyrics were found.
        lyrics: The lyrics on success, None otherwise.
        error: Human-readable failure reason on failure, None otherwise.
    
    Example:
        result = await resolver.get_lyrics_with_source("Song", "Artist")
        if result.matched:
            print(f"{result.source}: {len(result.lyrics.lines)} lines")
        else:
            print(f"Failed: {result.error}")
    """
    source: str
    matched: bool
    lyrics: StructuredLyrics | None = None
    error: str | None = None
    
    @classmethod
    def success(cls, source: str, lyrics: StructuredLyrics) -> "MatchResult":
        """Create a successful result."""
        return cls(source=source, matched=True, lyrics=lyrics)
    
    @classmethod
    def failure(cls, source: str, error: str) -> "MatchResult":
        """Create a failed result."""
        return cls(source=source, matched=False, error=error)


@dataclass(frozen=True)
class CollectedLyrics:
    """One result of aggregate resolution."""
    source: str
    text: str
    is_synced: bool = False
