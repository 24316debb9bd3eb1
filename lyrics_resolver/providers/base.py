"""
Common interface of lyrics providers.

A provider turns a LyricsRequest into lyrics using one remote service.
It owns the wire format of that service and its matching policy; the
resolver only sequences providers and never looks at their payloads.
"""

from abc import ABC, abstractmethod

from lyrics_resolver.core.config import Config
from lyrics_resolver.core.http import HttpClient
from lyrics_resolver.lyrics.lrc import parse_lrc
from lyrics_resolver.lyrics.matcher import TrackMatcher
from lyrics_resolver.lyrics.models import (
    Candidate,
    CollectedLyrics,
    LyricsRequest,
    StructuredLyrics,
)


class LyricsProvider(ABC):
    """
    Abstract base class for providers.
    
    Class Attributes:
        name: Identifier used in configuration and in results.
        requires_video_id: True if the provider can only answer requests
                           carrying a video id.
    
    Attributes:
        http: Shared transport. Owned by the caller, never closed here.
        config: Full resolver configuration.
        matcher: TrackMatcher built from config.matching.
    
    Subclasses must implement:
        - get_lyrics(request): best lyrics, or raise NoMatchError /
          LyricsParseError
        - collect_lyrics(request): every acceptable text, best first
    """
    
    name: str = ""
    requires_video_id: bool = False
    
    def __init__(self, http: HttpClient, config: Config | None = None) -> None:
        self.http = http
        self.config = config or Config()
        self.matcher = TrackMatcher(self.config.matching)
    
    def accepts(self, request: LyricsRequest) -> bool:
        """True if this provider can be asked about the request at all."""
        return bool(request.video_id) or not self.requires_video_id
    
    @abstractmethod
    async def get_lyrics(self, request: LyricsRequest) -> StructuredLyrics:
        """
        Resolve the single best lyrics for a request.
        
        Raises:
            NoMatchError: No candidate qualified.
            LyricsParseError: The provider answered with unusable markup.
        """
        pass
    
    @abstractmethod
    async def collect_lyrics(self, request: LyricsRequest) -> list[CollectedLyrics]:
        """
        Every acceptable lyrics text for a request, best first.
        
        Never raises for a missing answer; returns an empty list.
        Result caps and deduplication are applied by the caller.
        """
        pass
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def lyrics_from_candidate(candidate: Candidate) -> StructuredLyrics:
    """
    Structured lyrics for a selected candidate.
    
    Synced text is parsed as LRC; plain text is wrapped without lines.
    """
    if candidate.synced_lyrics is not None:
        return parse_lrc(candidate.synced_lyrics)
    return StructuredLyrics.from_plain(candidate.plain_lyrics or "")
