"""
SimpMusic provider (video-id search).

SimpMusic keys its lyrics by YouTube video id, so it can only answer
requests that carry one. One id may map to several community uploads;
the duration picks between them when it is known.

API:
    GET {simpmusic_url}/{video_id}
    -> {"type": "success",
        "data": [{id, videoId, songTitle, artistName, albumName,
                  durationSeconds, syncedLyrics, plainLyric,
                  richSyncLyrics, vote}, ...]}
"""

from lyrics_resolver.core.config import PROVIDER_SIMPMUSIC
from lyrics_resolver.core.exceptions import NoMatchError, ProviderError
from lyrics_resolver.core.logger import get_logger
from lyrics_resolver.lyrics.matcher import first_synced_or_first
from lyrics_resolver.lyrics.models import (
    Candidate,
    CollectedLyrics,
    LyricsRequest,
    StructuredLyrics,
)
from lyrics_resolver.providers.base import LyricsProvider, lyrics_from_candidate


logger = get_logger(__name__)

RESPONSE_SUCCESS = "success"
REQUEST_HEADERS = {"Accept": "application/json"}


class SimpMusicProvider(LyricsProvider):
    """Lyrics from SimpMusic, scoped to one video id."""

    name = PROVIDER_SIMPMUSIC
    requires_video_id = True

    async def search_by_id(self, video_id: str) -> list[Candidate]:
        """
        All entries stored for a video id, in API order.

        Returns an empty list on transport failure, non-success responses
        and unexpected payloads.
        """
        url = f"{self.config.providers.simpmusic_url}/{video_id}"

        try:
            payload = await self.http.get_json(url, headers=REQUEST_HEADERS)
        except ProviderError as e:
            logger.debug(f"SimpMusic lookup failed for {video_id}: {e.message}")
            return []

        if not isinstance(payload, dict) or payload.get("type") != RESPONSE_SUCCESS:
            return []

        data = payload.get("data")
        if not isinstance(data, list):
            return []

        return [Candidate.from_simpmusic(record) for record in data if isinstance(record, dict)]

    def _require_video_id(self, request: LyricsRequest) -> str:
        if not request.video_id:
            raise ValueError("SimpMusic requires a video id")
        return request.video_id

    async def get_lyrics(self, request: LyricsRequest) -> StructuredLyrics:
        """
        Best SimpMusic lyrics for the request's video id.

        Known duration: relaxed duration policy over the entries for the id.
        Unknown duration: first entry with synced lyrics, else the first entry.

        Raises:
            ValueError: If the request has no video id.
            NoMatchError: If no entry with lyrics qualifies.
        """
        video_id = self._require_video_id(request)
        candidates = [c for c in await self.search_by_id(video_id) if c.has_lyrics]

        if request.has_duration:
            best = self.matcher.best_match_relaxed(candidates, request.duration)
        else:
            best = first_synced_or_first(candidates)

        if best is None:
            raise NoMatchError(
                "Lyrics unavailable",
                details={"video_id": video_id, "duration": request.duration},
                provider=self.name
            )

        return lyrics_from_candidate(best)

    async def collect_lyrics(self, request: LyricsRequest) -> list[CollectedLyrics]:
        """
        Every acceptable SimpMusic text, best first.

        Known duration: entries ranked by duration difference, those within
        the relaxed tolerance contribute synced then plain text.
        Unknown duration: every entry in API order.
        """
        video_id = self._require_video_id(request)
        candidates = await self.search_by_id(video_id)

        if request.has_duration:
            candidates = [
                candidate
                for candidate in self.matcher.rank_by_duration(candidates, request.duration)
                if self.matcher.within_relaxed_tolerance(candidate, request.duration)
            ]

        collected = []
        for candidate in candidates:
            if candidate.synced_lyrics is not None:
                collected.append(CollectedLyrics(self.name, candidate.synced_lyrics, True))
            if candidate.plain_lyrics is not None:
                collected.append(CollectedLyrics(self.name, candidate.plain_lyrics, False))
        return collected
