"""
Utility functions for lyrics-resolver.

    - clean_title / clean_artist: strip noise from free-text track metadata
    - similarity / levenshtein_distance: fuzzy string comparison

Usage:
    from lyrics_resolver.utils import clean_title, clean_artist, similarity
"""

from lyrics_resolver.utils.text import (
    clean_artist,
    clean_title,
    levenshtein_distance,
    similarity,
)

__all__ = [
    "clean_title",
    "clean_artist",
    "similarity",
    "levenshtein_distance",
]
