"""
BetterLyrics provider (word-synced TTML).

BetterLyrics returns TTML with per-syllable timing. Title and artist are
sent exactly as given: cleaning them can select a different recording
(a radio edit instead of the album version) whose timing does not fit.

API:
    GET {better_lyrics_url}/getLyrics
        s   title
        a   artist
        d   duration in seconds (only when > 0)
        al  album (only when non-empty)
    -> {"ttml": "<tt ...>...</tt>"}
"""

from lyrics_resolver.core.config import PROVIDER_BETTER_LYRICS
from lyrics_resolver.core.exceptions import (
    LyricsParseError,
    LyricsResolverError,
    NoMatchError,
    ProviderError,
)
from lyrics_resolver.core.logger import get_logger
from lyrics_resolver.lyrics.models import (
    DURATION_UNKNOWN,
    CollectedLyrics,
    LyricsRequest,
    StructuredLyrics,
)
from lyrics_resolver.lyrics.ttml import parse_ttml, ttml_to_lrc
from lyrics_resolver.providers.base import LyricsProvider


logger = get_logger(__name__)


class BetterLyricsProvider(LyricsProvider):
    """Word-synced lyrics from BetterLyrics."""

    name = PROVIDER_BETTER_LYRICS
    requires_video_id = False

    async def fetch_markup(
        self,
        title: str,
        artist: str,
        duration: int = DURATION_UNKNOWN,
        album: str | None = None
    ) -> str | None:
        """
        Raw TTML for a track, or None when the service has none.

        Transport failures are reported as None as well.
        """
        params = {
            "s": title,
            "a": artist,
            "d": duration if duration > 0 else None,
            "al": album if album else None,
        }

        try:
            payload = await self.http.get_json(
                f"{self.config.providers.better_lyrics_url}/getLyrics", params=params
            )
        except ProviderError as e:
            logger.debug(f"BetterLyrics request failed: {e.message}")
            return None

        if not isinstance(payload, dict):
            return None

        markup = payload.get("ttml")
        if not isinstance(markup, str) or not markup.strip():
            return None
        return markup

    async def get_lyrics(self, request: LyricsRequest) -> StructuredLyrics:
        """
        Word-synced lyrics for the request.

        Returns:
            StructuredLyrics whose lines carry word timing and whose text is
            the LRC rendering with word-timing lines.

        Raises:
            NoMatchError: If the service has no markup for the track.
            LyricsParseError: If the markup yields no lines.
        """
        markup = await self.fetch_markup(
            request.title, request.artist, request.duration, request.album
        )

        if markup is None:
            raise NoMatchError(
                "Lyrics unavailable",
                details={"title": request.title, "artist": request.artist},
                provider=self.name
            )

        lines = parse_ttml(markup)
        if not lines:
            raise LyricsParseError(
                "Failed to parse lyrics",
                details={"title": request.title, "artist": request.artist},
                provider=self.name
            )

        return StructuredLyrics(text=ttml_to_lrc(lines), lines=tuple(lines), is_synced=True)

    async def collect_lyrics(self, request: LyricsRequest) -> list[CollectedLyrics]:
        """The single word-synced text, if any."""
        try:
            lyrics = await self.get_lyrics(request)
        except LyricsResolverError as e:
            logger.debug(f"BetterLyrics has nothing for '{request.title}': {e.message}")
            return []
        return [CollectedLyrics(self.name, lyrics.text, True)]
