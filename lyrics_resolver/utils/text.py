"""
Text normalization and fuzzy comparison for track metadata.

Titles coming from video platforms carry noise that lyrics databases do
not index ("Song (Official Video)", "Song | Live at Wembley"), and artist
fields often list every performer ("A & B feat. C"). The helpers here
reduce both to the form a lyrics search is most likely to match, and
score how close two strings are once reduced.
"""

import re

from rapidfuzz.distance import Levenshtein


# Qualifier words that mark a bracketed/parenthesized tag as noise
_QUALIFIERS = (
    "official|video|audio|lyrics|lyric|visualizer|hd|hq|4k|remaster|remix|"
    "live|acoustic|version|edit|extended|radio|clean|explicit"
)

# Applied in order, each over the whole string
TITLE_NOISE_PATTERNS = [
    re.compile(rf"\s*\(.*?({_QUALIFIERS}).*?\)", re.IGNORECASE),
    re.compile(rf"\s*\[.*?({_QUALIFIERS}).*?\]", re.IGNORECASE),
    re.compile(r"\s*【.*?】", re.IGNORECASE),
    re.compile(r"\s*\|.*$", re.IGNORECASE),
    re.compile(r"\s*-\s*(official|video|audio|lyrics|lyric|visualizer).*$", re.IGNORECASE),
    re.compile(r"\s*\(feat\..*?\)", re.IGNORECASE),
    re.compile(r"\s*\(ft\..*?\)", re.IGNORECASE),
    re.compile(r"\s*feat\..*$", re.IGNORECASE),
    re.compile(r"\s*ft\..*$", re.IGNORECASE),
]

# Checked in order; the first one present wins, not the leftmost
ARTIST_SEPARATORS = [
    " & ",
    " and ",
    ", ",
    " x ",
    " X ",
    " feat. ",
    " feat ",
    " ft. ",
    " ft ",
    " featuring ",
    " with ",
]

# Score for one string containing the other
SUBSTRING_SIMILARITY = 0.8


def clean_title(title: str) -> str:
    """
    Remove qualifier tags and featuring credits from a track title.
    
    Examples:
        clean_title("Song (Official Video)")    # "Song"
        clean_title("Song [HD]")                # "Song"
        clean_title("Song (feat. Other)")       # "Song"
        clean_title("Song | Live at Wembley")   # "Song"
    """
    cleaned = title.strip()
    for pattern in TITLE_NOISE_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip()


def clean_artist(artist: str) -> str:
    """
    Reduce a multi-artist credit to its primary artist.
    
    Separators are tried in ARTIST_SEPARATORS order, case-insensitively,
    and the string is cut at the first separator found.
    
    Examples:
        clean_artist("A & B")        # "A"
        clean_artist("A, B")         # "A"
        clean_artist("A feat. B")    # "A"
        clean_artist("Solo Artist")  # "Solo Artist"
    """
    cleaned = artist.strip()
    for separator in ARTIST_SEPARATORS:
        match = re.search(re.escape(separator), cleaned, re.IGNORECASE)
        if match:
            return cleaned[:match.start()].strip()
    return cleaned


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost edit distance (insertions, deletions, substitutions)."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Score how similar two strings are, between 0.0 and 1.0.
    
    Both strings are lowercased and trimmed first.
    
    Rules (first that applies):
        - Equal                         -> 1.0
        - Either empty                  -> 0.0
        - One contains the other        -> 0.8
        - Otherwise                     -> 1 - distance / longest length
    
    Examples:
        similarity("Hello", "hello ")   # 1.0
        similarity("testing", "test")   # 0.8
        similarity("kitten", "sitting") # ~0.571
    """
    s1 = a.lower().strip()
    s2 = b.lower().strip()
    
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if s1 in s2 or s2 in s1:
        return SUBSTRING_SIMILARITY
    
    distance = levenshtein_distance(s1, s2)
    return 1.0 - distance / max(len(s1), len(s2))
