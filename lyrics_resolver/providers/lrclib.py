"""
LRCLIB provider (name/duration search).

LRCLIB (https://lrclib.net) indexes tracks by title, artist, album and
duration, and stores plain and line-synced lyrics for each. Its search
is literal, so noisy titles are cleaned first and several query shapes
are tried in turn until one returns tracks that actually have lyrics.

API:
    GET {lrclib_url}/api/search
        q            free-text query
        track_name   title
        artist_name  artist
        album_name   album
    -> [{id, trackName, artistName, albumName, duration,
         plainLyrics, syncedLyrics}, ...]
"""

from typing import Any

from lyrics_resolver.core.config import PROVIDER_LRCLIB
from lyrics_resolver.core.exceptions import NoMatchError, ProviderError
from lyrics_resolver.core.logger import get_logger
from lyrics_resolver.lyrics.models import (
    Candidate,
    CollectedLyrics,
    LyricsRequest,
    StructuredLyrics,
)
from lyrics_resolver.providers.base import LyricsProvider, lyrics_from_candidate
from lyrics_resolver.utils.text import clean_artist, clean_title


logger = get_logger(__name__)


class LrcLibProvider(LyricsProvider):
    """
    Lyrics from LRCLIB, matched by duration or by name similarity.

    Example:
        async with HttpClient() as http:
            provider = LrcLibProvider(http)
            lyrics = await provider.get_lyrics(
                LyricsRequest(title="Song (Official Video)", artist="A & B", duration=202)
            )
    """

    name = PROVIDER_LRCLIB
    requires_video_id = False

    @property
    def search_url(self) -> str:
        return f"{self.config.providers.lrclib_url}/api/search"

    async def search(
        self,
        title: str | None = None,
        artist: str | None = None,
        album: str | None = None,
        query: str | None = None
    ) -> list[Candidate]:
        """
        Run one search request.

        Only the given fields are sent. Transport failures and unexpected
        payloads yield an empty list.

        Returns:
            Every reported track, with or without lyrics, in API order.
        """
        params = {
            "q": query,
            "track_name": title,
            "artist_name": artist,
            "album_name": album,
        }

        try:
            payload = await self.http.get_json(self.search_url, params=params)
        except ProviderError as e:
            logger.debug(f"LRCLIB search failed: {e.message}")
            return []

        if not isinstance(payload, list):
            return []

        return [Candidate.from_lrclib(record) for record in payload if isinstance(record, dict)]

    async def _search_with_lyrics(self, **params: Any) -> list[Candidate]:
        results = await self.search(**params)
        return [candidate for candidate in results if candidate.has_lyrics]

    async def query_lyrics(
        self,
        artist: str,
        title: str,
        album: str | None = None
    ) -> list[Candidate]:
        """
        Search with progressively looser queries until tracks with lyrics turn up.

        Strategies, in order:
            1. Cleaned title + cleaned artist (+ album)
            2. Cleaned title alone
            3. Free-text "cleaned artist cleaned title"
            4. Free-text cleaned title
            5. Original title + artist, only if cleaning changed the title

        Returns:
            Candidates with lyrics from the first strategy that found any,
            or an empty list.
        """
        cleaned_title = clean_title(title)
        cleaned_artist = clean_artist(artist)

        strategies = [
            {"title": cleaned_title, "artist": cleaned_artist, "album": album},
            {"title": cleaned_title},
            {"query": f"{cleaned_artist} {cleaned_title}"},
            {"query": cleaned_title},
        ]
        if cleaned_title != title.strip():
            strategies.append({"title": title.strip(), "artist": artist.strip()})

        for number, params in enumerate(strategies, start=1):
            results = await self._search_with_lyrics(**params)
            if results:
                logger.debug(
                    f"LRCLIB strategy {number} found {len(results)} track(s) with lyrics"
                )
                return results

        return []

    async def search_tracks(self, title: str, artist: str) -> list[Candidate]:
        """Tracks with lyrics for a title/artist pair, without any matching."""
        return await self.query_lyrics(artist, title)

    async def get_lyrics(self, request: LyricsRequest) -> StructuredLyrics:
        """
        Best LRCLIB lyrics for the request.

        Known duration: relaxed duration policy. Unknown duration: name
        similarity against the cleaned title and artist.

        Raises:
            NoMatchError: If no candidate qualifies.
        """
        candidates = await self.query_lyrics(request.artist, request.title, album=request.album)

        best = self.matcher.best_match(
            candidates,
            request.duration,
            title=clean_title(request.title),
            artist=clean_artist(request.artist),
        )

        if best is None or best.best_lyrics is None:
            raise NoMatchError(
                "Lyrics unavailable",
                details={
                    "title": request.title,
                    "artist": request.artist,
                    "duration": request.duration,
                    "candidates": len(candidates),
                },
                provider=self.name
            )

        logger.debug(f"LRCLIB matched '{best.artist} - {best.title}' (id {best.id})")
        return lyrics_from_candidate(best)

    async def collect_lyrics(self, request: LyricsRequest) -> list[CollectedLyrics]:
        """
        Every acceptable LRCLIB text, best first.

        Unknown duration: tracks ranked by name (synced first), synced texts only.
        Known duration: tracks ranked by duration difference; synced and then
        plain text of each track within the relaxed tolerance.
        """
        candidates = await self.query_lyrics(request.artist, request.title, album=request.album)
        collected = []

        if not request.has_duration:
            ranked = self.matcher.rank_by_name(
                candidates, clean_title(request.title), clean_artist(request.artist)
            )
            for candidate in ranked:
                if candidate.synced_lyrics is not None:
                    collected.append(CollectedLyrics(self.name, candidate.synced_lyrics, True))
            return collected

        for candidate in self.matcher.rank_by_duration(candidates, request.duration):
            if not self.matcher.within_relaxed_tolerance(candidate, request.duration):
                continue
            if candidate.synced_lyrics is not None:
                collected.append(CollectedLyrics(self.name, candidate.synced_lyrics, True))
            if candidate.plain_lyrics is not None:
                collected.append(CollectedLyrics(self.name, candidate.plain_lyrics, False))

        return collected
