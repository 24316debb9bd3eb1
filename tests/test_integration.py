# tests/test_integration.py
"""End-to-end resolution over a routed fake transport"""

import pytest

from lyrics_resolver.lyrics.models import LyricsSource
from lyrics_resolver.resolver import LyricsResolver


LRCLIB_SYNCED = "[00:00.00]\n[00:12.34]From LRCLIB\n[00:15.80]Second line"
SIMPMUSIC_SYNCED = "[00:01.00]From SimpMusic"


class FakeServices:
    """Answers get_json calls the way the three services would"""

    def __init__(self, ttml=None, lrclib_records=None, simpmusic_entries=None):
        self.ttml = ttml
        self.lrclib_records = lrclib_records or []
        self.simpmusic_entries = simpmusic_entries or []
        self.urls = []

    async def get_json(self, url, params=None, headers=None):
        self.urls.append(url)
        if url.endswith("/getLyrics"):
            return {"ttml": self.ttml} if self.ttml else None
        if url.endswith("/api/search"):
            return self.lrclib_records
        if "simpmusic" in url:
            return {"type": "success", "data": self.simpmusic_entries}
        return None


@pytest.fixture
def services(mock_http, lrclib_record):
    fake = FakeServices(
        lrclib_records=[
            lrclib_record(id=7, duration=214.4, synced=LRCLIB_SYNCED, plain="From LRCLIB"),
        ],
        simpmusic_entries=[{
            "id": "s1",
            "videoId": "vid123",
            "songTitle": "Song",
            "artistName": "Artist",
            "durationSeconds": 213,
            "syncedLyrics": SIMPMUSIC_SYNCED,
            "plainLyric": None,
        }],
    )
    mock_http.get_json.side_effect = fake.get_json
    return fake


class TestEndToEnd:
    """Resolution through real providers, codecs and matching"""

    @pytest.mark.asyncio
    async def test_word_synced_first(self, config, mock_http, services, sample_ttml):
        services.ttml = sample_ttml
        resolver = LyricsResolver(config, http=mock_http)

        result = await resolver.get_lyrics_with_source("Song", "Artist", duration=214)

        assert result.source == "better_lyrics"
        assert result.lyrics.lines[0].words[0].text == "Hello"
        assert len(services.urls) == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_lrclib(self, config, mock_http, services):
        resolver = LyricsResolver(config, http=mock_http)

        lyrics = await resolver.get_lyrics("Song (Official Video)", "Artist & Guest", duration=214)

        assert lyrics.sentences == {0: "", 12340: "From LRCLIB", 15800: "Second line"}
        assert services.urls == [
            "https://lyrics-api.boidu.dev/getLyrics",
            "https://lrclib.net/api/search",
        ]

    @pytest.mark.asyncio
    async def test_video_id_enables_simpmusic(self, config, mock_http, services):
        resolver = LyricsResolver(config, http=mock_http)

        result = await resolver.get_lyrics_with_source(
            "Song", "Artist", duration=214, video_id="vid123"
        )

        assert result.source == "simpmusic"
        assert result.lyrics.lines[0].text == "From SimpMusic"

    @pytest.mark.asyncio
    async def test_aggregate(self, config, mock_http, services, sample_ttml):
        services.ttml = sample_ttml
        resolver = LyricsResolver(config, http=mock_http)
        seen = []

        results = await resolver.get_all_lyrics(
            "Song", "Artist", duration=214, video_id="vid123",
            callback=lambda text, source: seen.append(source),
        )

        assert [(r.source, r.is_synced) for r in results] == [
            ("better_lyrics", True),
            ("simpmusic", True),
            ("lrclib", True),
            ("lrclib", False),
        ]
        assert seen == ["better_lyrics", "simpmusic", "lrclib", "lrclib"]

    @pytest.mark.asyncio
    async def test_single_source_lrclib_by_name(self, config, mock_http, services):
        resolver = LyricsResolver(config, http=mock_http)

        lyrics = await resolver.get_lyrics("song", "ARTIST", source=LyricsSource.LRCLIB)

        assert lyrics.lines[1].text == "From LRCLIB"
        assert all("getLyrics" not in url for url in services.urls)
