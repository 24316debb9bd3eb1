"""
Lyrics providers.

    - LrcLibProvider: name/duration search (plain and line-synced lyrics)
    - SimpMusicProvider: video-id search
    - BetterLyricsProvider: word-synced TTML

PROVIDER_CLASSES maps the names used in providers.order to classes.
"""

from lyrics_resolver.providers.base import LyricsProvider
from lyrics_resolver.providers.better_lyrics import BetterLyricsProvider
from lyrics_resolver.providers.lrclib import LrcLibProvider
from lyrics_resolver.providers.simpmusic import SimpMusicProvider

PROVIDER_CLASSES: dict[str, type[LyricsProvider]] = {
    BetterLyricsProvider.name: BetterLyricsProvider,
    SimpMusicProvider.name: SimpMusicProvider,
    LrcLibProvider.name: LrcLibProvider,
}

__all__ = [
    "LyricsProvider",
    "LrcLibProvider",
    "SimpMusicProvider",
    "BetterLyricsProvider",
    "PROVIDER_CLASSES",
]
