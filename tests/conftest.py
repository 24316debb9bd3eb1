"""Test configuration and fixtures"""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, Mock

from lyrics_resolver.core.config import Config
from lyrics_resolver.core.http import HttpClient
from lyrics_resolver.lyrics.models import Candidate


SAMPLE_TTML = (
    '<tt xmlns="http://www.w3.org/ns/ttml"><body><div>'
    '<p begin="12.3" end="15.0">'
    '<span begin="12.3" end="12.6">Hel</span><span begin="12.6" end="13.0">lo</span> '
    '<span begin="13.1" end="13.6">world</span>'
    '</p>'
    '<p begin="16.0" end="18.0">'
    '<span begin="16.0" end="16.5">Second</span> <span begin="16.6" end="17.2">line</span>'
    '</p>'
    '</div></body></tt>'
)

SAMPLE_LRC = "[00:00.00]\n[00:12.34]Test line\n[00:15.80]Another line\n"


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def config():
    """Default configuration"""
    return Config()


@pytest.fixture
def mock_http():
    """HttpClient stand-in whose get_json is an AsyncMock"""
    http = Mock(spec=HttpClient)
    http.get_json = AsyncMock(return_value=None)
    http.close = AsyncMock()
    return http


@pytest.fixture
def make_candidate():
    """Factory for Candidate objects with sensible defaults"""
    def _make(
        title="Song",
        artist="Artist",
        duration=200.0,
        synced=None,
        plain=None,
        source="lrclib",
        id="1",
    ):
        return Candidate(
            id=id,
            title=title,
            artist=artist,
            duration=duration,
            synced_lyrics=synced,
            plain_lyrics=plain,
            source=source,
        )
    return _make


@pytest.fixture
def lrclib_record():
    """Factory for raw LRCLIB search records"""
    def _make(
        id=1,
        track="Song",
        artist="Artist",
        duration=200.0,
        synced=None,
        plain=None,
        album=None,
    ):
        return {
            "id": id,
            "trackName": track,
            "artistName": artist,
            "albumName": album,
            "duration": duration,
            "syncedLyrics": synced,
            "plainLyrics": plain,
        }
    return _make


@pytest.fixture
def sample_ttml():
    return SAMPLE_TTML


@pytest.fixture
def sample_lrc():
    return SAMPLE_LRC
