"""
Candidate selection for provider search results.

Providers return every track that loosely matches a query; this module
picks the one whose lyrics should be used. Which policy applies depends
on what the caller knows:

    Duration unknown (DURATION_UNKNOWN):
        Rank by title/artist similarity with a small bonus for synced
        lyrics, and accept the winner only if its names are similar enough.
        Without names to compare, take the first synced candidate, else
        the first candidate.

    Duration known, strict:
        Closest duration wins if within strict_tolerance seconds.

    Duration known, relaxed (the default for duration-based providers):
        Closest synced candidate within relaxed_tolerance; failing that,
        closest candidate of any kind within the same tolerance.

Ties keep the provider's order.
"""

from typing import Iterable

from lyrics_resolver.core.config import MatchingConfig
from lyrics_resolver.core.logger import get_logger
from lyrics_resolver.lyrics.models import DURATION_UNKNOWN, Candidate
from lyrics_resolver.utils.text import similarity


logger = get_logger(__name__)


def duration_difference(candidate: Candidate, duration: int) -> int:
    """Absolute difference in whole seconds (candidate duration truncated)."""
    return abs(int(candidate.duration) - duration)


def name_score(candidate: Candidate, title: str, artist: str) -> float:
    """Average of title and artist similarity, without any synced bonus."""
    return (similarity(title, candidate.title) + similarity(artist, candidate.artist)) / 2


def first_synced_or_first(candidates: list[Candidate]) -> Candidate | None:
    """First candidate carrying synced lyrics, else the first one, else None."""
    for candidate in candidates:
        if candidate.is_synced:
            return candidate
    return candidates[0] if candidates else None


class TrackMatcher:
    """
    Selects the best candidate among one provider's search results.

    Attributes:
        config: Thresholds used by every policy.

    Example:
        matcher = TrackMatcher(config.matching)
        best = matcher.best_match(candidates, duration=202)
        if best is not None:
            text = best.best_lyrics
    """

    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or MatchingConfig()

    def _closest(self, candidates: Iterable[Candidate], duration: int) -> Candidate | None:
        ranked = sorted(candidates, key=lambda c: duration_difference(c, duration))
        return ranked[0] if ranked else None

    def best_match_strict(self, candidates: list[Candidate], duration: int) -> Candidate | None:
        """
        Closest candidate by duration, if within strict_tolerance seconds.

        With an unknown duration, falls back to first_synced_or_first().
        """
        if not candidates:
            return None
        if duration == DURATION_UNKNOWN:
            return first_synced_or_first(candidates)

        best = self._closest(candidates, duration)
        if best is not None and duration_difference(best, duration) <= self.config.strict_tolerance:
            return best
        return None

    def best_match_relaxed(self, candidates: list[Candidate], duration: int) -> Candidate | None:
        """
        Closest synced candidate within relaxed_tolerance, else closest of all.

        With an unknown duration, falls back to first_synced_or_first().

        Example:
            # Durations 180 and 200 against a target of 202: picks 200.
            # Durations 180 and 190 against 202: returns None.
        """
        if not candidates:
            return None
        if duration == DURATION_UNKNOWN:
            return first_synced_or_first(candidates)

        tolerance = self.config.relaxed_tolerance

        synced = self._closest((c for c in candidates if c.is_synced), duration)
        if synced is not None and duration_difference(synced, duration) <= tolerance:
            return synced

        best = self._closest(candidates, duration)
        if best is not None and duration_difference(best, duration) <= tolerance:
            return best
        return None

    def best_match_by_name(
        self,
        candidates: list[Candidate],
        title: str | None,
        artist: str | None
    ) -> Candidate | None:
        """
        Highest name-similarity candidate, if similar enough.

        Each candidate scores name_score() plus synced_bonus when it has
        synced lyrics. The winner must beat the previous best strictly, so
        the earliest candidate wins ties. It is returned only if its
        name_score() alone exceeds name_similarity_threshold.

        Without both names, falls back to first_synced_or_first().
        """
        if not candidates:
            return None
        if title is None or artist is None:
            return first_synced_or_first(candidates)

        best_candidate = None
        best_score = 0.0

        for candidate in candidates:
            score = name_score(candidate, title, artist)
            if candidate.is_synced:
                score += self.config.synced_bonus
            if score > best_score:
                best_score = score
                best_candidate = candidate

        if best_candidate is None:
            return None

        names = name_score(best_candidate, title, artist)
        if names > self.config.name_similarity_threshold:
            return best_candidate

        logger.debug(
            f"Best name match '{best_candidate.artist} - {best_candidate.title}' "
            f"scored {names:.2f}, below threshold {self.config.name_similarity_threshold}"
        )
        return None

    def best_match(
        self,
        candidates: list[Candidate],
        duration: int,
        title: str | None = None,
        artist: str | None = None
    ) -> Candidate | None:
        """
        Select with the policy matching what is known.

        Unknown duration -> best_match_by_name(); known -> best_match_relaxed().
        """
        if duration == DURATION_UNKNOWN:
            return self.best_match_by_name(candidates, title, artist)
        return self.best_match_relaxed(candidates, duration)

    def rank_by_name(
        self,
        candidates: list[Candidate],
        title: str,
        artist: str
    ) -> list[Candidate]:
        """
        Order candidates for aggregate mode when the duration is unknown.

        Sort key, descending: 1.0 if synced, plus name_score(). Stable.
        """
        def score(candidate: Candidate) -> float:
            return (1.0 if candidate.is_synced else 0.0) + name_score(candidate, title, artist)

        return sorted(candidates, key=score, reverse=True)

    def rank_by_duration(self, candidates: list[Candidate], duration: int) -> list[Candidate]:
        """Order candidates by duration difference, closest first. Stable."""
        return sorted(candidates, key=lambda c: duration_difference(c, duration))

    def within_relaxed_tolerance(self, candidate: Candidate, duration: int) -> bool:
        return duration_difference(candidate, duration) <= self.config.relaxed_tolerance
