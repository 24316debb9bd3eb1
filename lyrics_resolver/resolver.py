"""
Multi-provider lyrics resolution.

LyricsResolver is the entry point of the library. It owns one provider
per configured service, all sharing a single HTTP transport, and
sequences them:

    Single-result resolution (get_lyrics, get_lyrics_with_source):
        Providers are tried one after the other in the configured order
        (word-synced first by default). The first one that produces
        lyrics wins. Provider failures are logged and skipped; only the
        exhaustion of every provider reaches the caller.

    Aggregate resolution (get_all_lyrics):
        Every eligible provider is asked for all acceptable texts. Results
        are capped across providers, plain (unsynced) texts are capped per
        provider, and texts sharing the same leading characters are
        reported only once.

Providers that need a video id are skipped for requests without one.
All provider calls are awaited sequentially; nothing runs in parallel.

Usage:
    async with LyricsResolver() as resolver:
        lyrics = await resolver.get_lyrics("Song", "Artist", duration=202)
        for line in lyrics.lines:
            print(f"{line.start_time:7.2f}  {line.text}")
"""

from typing import Callable

from lyrics_resolver.core.config import (
    PROVIDER_BETTER_LYRICS,
    PROVIDER_LRCLIB,
    PROVIDER_SIMPMUSIC,
    Config,
)
from lyrics_resolver.core.exceptions import LyricsResolverError, LyricsUnavailableError
from lyrics_resolver.core.http import HttpClient
from lyrics_resolver.core.logger import get_logger, log_lyrics_failure
from lyrics_resolver.lyrics.lrc import parse_lrc, parse_sentences, parse_sentences_fixed
from lyrics_resolver.lyrics.models import (
    DURATION_UNKNOWN,
    Candidate,
    CollectedLyrics,
    LrcText,
    LyricsRequest,
    LyricsSource,
    MatchResult,
    StructuredLyrics,
)
from lyrics_resolver.providers import PROVIDER_CLASSES, LyricsProvider
from lyrics_resolver.providers.better_lyrics import BetterLyricsProvider
from lyrics_resolver.providers.lrclib import LrcLibProvider
from lyrics_resolver.providers.simpmusic import SimpMusicProvider


logger = get_logger(__name__)

UNAVAILABLE_MESSAGE = "Lyrics unavailable from all sources"

# Signature of the aggregate-mode callback: (lyrics text, provider name)
LyricsCallback = Callable[[str, str], None]


class LyricsResolver:
    """
    Resolves lyrics across LRCLIB, SimpMusic and BetterLyrics.

    Attributes:
        config: Resolver configuration (provider order, thresholds, caps).
        http: Transport shared by every provider.
        providers: Provider instances keyed by name, one per known service.

    Lifetime:
        The transport is acquired at construction and released by close()
        or by leaving an `async with` block. A transport passed in by the
        caller is left open; the caller owns it.

    Example:
        resolver = LyricsResolver(load_config())
        try:
            result = await resolver.get_lyrics_with_source(
                title="Song (Official Video)",
                artist="Artist feat. Guest",
                duration=214,
                video_id="dQw4w9WgXcQ",
            )
            if result.matched:
                print(f"Found on {result.source}")
        finally:
            await resolver.close()
    """

    def __init__(self, config: Config | None = None, http: HttpClient | None = None) -> None:
        self.config = config or Config()
        self._owns_http = http is None
        self.http = http if http is not None else HttpClient(self.config.network)
        self.providers: dict[str, LyricsProvider] = {
            name: provider_class(self.http, self.config)
            for name, provider_class in PROVIDER_CLASSES.items()
        }

    async def __aenter__(self) -> "LyricsResolver":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the transport if this resolver created it."""
        if self._owns_http:
            await self.http.close()

    # =========================================================================
    # PROVIDER ACCESS
    # =========================================================================

    @property
    def lrclib(self) -> LrcLibProvider:
        return self.providers[PROVIDER_LRCLIB]

    @property
    def simpmusic(self) -> SimpMusicProvider:
        return self.providers[PROVIDER_SIMPMUSIC]

    @property
    def better_lyrics(self) -> BetterLyricsProvider:
        return self.providers[PROVIDER_BETTER_LYRICS]

    def _eligible_providers(self, request: LyricsRequest) -> list[LyricsProvider]:
        """Providers in configured order that can answer the request."""
        eligible = []
        for name in self.config.providers.order:
            provider = self.providers[name]
            if provider.accepts(request):
                eligible.append(provider)
            else:
                logger.debug(f"Skipping {name}: no video id")
        return eligible

    # =========================================================================
    # SINGLE-RESULT RESOLUTION
    # =========================================================================

    async def _resolve(self, request: LyricsRequest) -> MatchResult:
        attempted = ""

        for provider in self._eligible_providers(request):
            attempted = provider.name
            logger.debug(f"Trying {provider.name} for: {request.artist} - {request.title}")

            try:
                lyrics = await provider.get_lyrics(request)
            except LyricsResolverError as e:
                logger.debug(f"{provider.name}: {e.message}")
                continue

            logger.info(f"Lyrics found via {provider.name}: {request.artist} - {request.title}")
            return MatchResult.success(provider.name, lyrics)

        log_lyrics_failure(logger, request.title, request.artist, request.video_id)
        return MatchResult.failure(attempted, UNAVAILABLE_MESSAGE)

    async def get_lyrics(
        self,
        title: str,
        artist: str,
        duration: int = DURATION_UNKNOWN,
        album: str | None = None,
        video_id: str | None = None,
        source: LyricsSource = LyricsSource.ALL
    ) -> StructuredLyrics:
        """
        Resolve the best lyrics for a track.

        Args:
            title: Track title; noise such as "(Official Video)" is tolerated.
            artist: Artist credit; multi-artist credits are tolerated.
            duration: Track length in seconds, or DURATION_UNKNOWN (-1).
            album: Optional album name.
            video_id: Optional video id, enabling the SimpMusic provider.
            source: LyricsSource.ALL for the fallback chain, or one provider.

        Returns:
            StructuredLyrics from the first provider that had lyrics.

        Raises:
            LyricsUnavailableError: If no provider had lyrics.
            ValueError: If source is SIMPMUSIC and no video id was given.
        """
        request = LyricsRequest(title, artist, duration, album, video_id)

        if source != LyricsSource.ALL:
            provider = self.providers[LyricsSource(source).value]
            if not provider.accepts(request):
                raise ValueError(
                    f"{provider.name} requires a video id. Use get_lyrics_by_video_id instead."
                )
            try:
                return await provider.get_lyrics(request)
            except LyricsResolverError as e:
                log_lyrics_failure(logger, title, artist, video_id)
                raise LyricsUnavailableError(
                    f"Lyrics unavailable from {provider.name}",
                    details={"title": title, "artist": artist, "source": provider.name}
                ) from e

        result = await self._resolve(request)
        if not result.matched:
            raise LyricsUnavailableError(
                UNAVAILABLE_MESSAGE,
                details={"title": title, "artist": artist}
            )
        return result.lyrics

    async def get_lyrics_with_source(
        self,
        title: str,
        artist: str,
        duration: int = DURATION_UNKNOWN,
        album: str | None = None,
        video_id: str | None = None
    ) -> MatchResult:
        """
        Like get_lyrics(), but report which provider answered.

        Never raises for missing lyrics; returns a failed MatchResult
        whose error is "Lyrics unavailable from all sources".
        """
        return await self._resolve(LyricsRequest(title, artist, duration, album, video_id))

    async def get_lyrics_by_video_id(
        self,
        video_id: str,
        duration: int = DURATION_UNKNOWN
    ) -> StructuredLyrics:
        """
        Lyrics from SimpMusic for a video id.

        Raises:
            LyricsUnavailableError: If SimpMusic has no usable entry.
        """
        request = LyricsRequest(title="", artist="", duration=duration, video_id=video_id)
        try:
            return await self.simpmusic.get_lyrics(request)
        except LyricsResolverError as e:
            raise LyricsUnavailableError(
                f"Lyrics unavailable for video {video_id}",
                details={"video_id": video_id}
            ) from e

    # =========================================================================
    # AGGREGATE RESOLUTION
    # =========================================================================

    async def get_all_lyrics(
        self,
        title: str,
        artist: str,
        duration: int = DURATION_UNKNOWN,
        album: str | None = None,
        video_id: str | None = None,
        callback: LyricsCallback | None = None
    ) -> list[CollectedLyrics]:
        """
        Collect every distinct lyrics text from every eligible provider.

        Args:
            title, artist, duration, album, video_id: As for get_lyrics().
            callback: Called with (text, provider name) for each result,
                      in the order results are accepted.

        Returns:
            At most aggregate.max_results results, providers in configured
            order, each provider's results best first.

        Behavior:
            - A text whose first aggregate.dedup_key_length characters were
              already seen is dropped silently
            - At most aggregate.max_plain_per_provider unsynced texts are
              accepted from one provider
            - Collection stops as soon as max_results is reached
        """
        request = LyricsRequest(title, artist, duration, album, video_id)
        limits = self.config.aggregate

        results: list[CollectedLyrics] = []
        seen: set[str] = set()

        for provider in self._eligible_providers(request):
            if len(results) >= limits.max_results:
                break

            try:
                collected = await provider.collect_lyrics(request)
            except LyricsResolverError as e:
                logger.debug(f"{provider.name}: {e.message}")
                continue

            plain_accepted = 0
            for item in collected:
                if len(results) >= limits.max_results:
                    break

                key = item.text[:limits.dedup_key_length]
                if key in seen:
                    logger.debug(f"Duplicate lyrics from {provider.name} dropped")
                    continue

                if not item.is_synced:
                    if plain_accepted >= limits.max_plain_per_provider:
                        continue
                    plain_accepted += 1

                seen.add(key)
                results.append(item)
                if callback is not None:
                    callback(item.text, item.source)

        if results:
            logger.info(f"Collected {len(results)} lyrics for: {artist} - {title}")
        else:
            log_lyrics_failure(logger, title, artist, video_id)

        return results

    # =========================================================================
    # DIRECT PROVIDER ACCESS
    # =========================================================================

    async def search_tracks(self, title: str, artist: str) -> list[Candidate]:
        """LRCLIB tracks with lyrics for a title/artist pair, unfiltered."""
        return await self.lrclib.search_tracks(title, artist)

    async def get_lyrics_data_by_video_id(self, video_id: str) -> list[Candidate]:
        """Every SimpMusic entry stored for a video id."""
        return await self.simpmusic.search_by_id(video_id)

    async def get_parsed_lyrics(
        self,
        title: str,
        artist: str,
        duration: int = DURATION_UNKNOWN,
        album: str | None = None
    ) -> StructuredLyrics:
        """
        Word-synced lyrics from BetterLyrics.

        Raises:
            NoMatchError: If BetterLyrics has no markup for the track.
            LyricsParseError: If the markup yields no lines.
        """
        return await self.better_lyrics.get_lyrics(LyricsRequest(title, artist, duration, album))

    async def get_raw_markup(
        self,
        title: str,
        artist: str,
        duration: int = DURATION_UNKNOWN,
        album: str | None = None
    ) -> str | None:
        """Raw BetterLyrics TTML, or None."""
        return await self.better_lyrics.fetch_markup(title, artist, duration, album)

    # =========================================================================
    # PARSING HELPERS
    # =========================================================================

    @staticmethod
    def parse_lyrics(lrc_text: str) -> dict[int, str] | None:
        """SentenceMap of LRC text (tolerant policy)."""
        return parse_sentences(lrc_text)

    @staticmethod
    def parse_lyrics_fixed(lrc_text: str) -> dict[int, str] | None:
        """SentenceMap of LRC text (fixed-column policy)."""
        return parse_sentences_fixed(lrc_text)

    @staticmethod
    def parse_lrc_text(lrc_text: str) -> StructuredLyrics:
        return parse_lrc(lrc_text)

    @staticmethod
    def create_lyrics(text: str) -> LrcText:
        return LrcText(text)
