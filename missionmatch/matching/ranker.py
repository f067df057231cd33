"""Threshold, ordering and truncation of scored candidates."""

from typing import TypeVar

from missionmatch.config import DEFAULT_LIMIT, MATCH_THRESHOLD, MAX_LIMIT
from missionmatch.schemas.freelancer import Freelancer
from missionmatch.schemas.match import FreelancerMatch, MatchScore, MissionMatch
from missionmatch.schemas.mission import Mission

T = TypeVar("T", Mission, Freelancer)


def clamp_limit(limit: int | None) -> int:
    """Bound a caller-supplied limit to [1, MAX_LIMIT] (None uses the default)."""
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(MAX_LIMIT, limit))


def rank_scored(
    scored: list[tuple[T, MatchScore]],
    limit: int | None = None,
    threshold: float = MATCH_THRESHOLD,
) -> list[tuple[T, MatchScore]]:
    """Keep scores above the threshold, sort and truncate.

    Ordering is score descending, then candidate id ascending so equal
    scores come back in a reproducible order.

    Args:
        scored: (candidate, score) pairs.
        limit: Maximum number of results (clamped, None uses the default).
        threshold: Scores must be strictly greater than this to be kept.

    Returns:
        At most ``limit`` pairs, best first.
    """
    kept = [(candidate, match) for candidate, match in scored if match.score > threshold]
    kept.sort(key=lambda pair: (-pair[1].score, pair[0].id))
    return kept[: clamp_limit(limit)]


def rank_missions(
    scored: list[tuple[Mission, MatchScore]],
    limit: int | None = None,
) -> list[MissionMatch]:
    """Rank scored missions for a freelancer."""
    return [
        MissionMatch(mission=mission, match_score=match.score, match_reasons=match.reasons)
        for mission, match in rank_scored(scored, limit)
    ]


def rank_freelancers(
    scored: list[tuple[Freelancer, MatchScore]],
    limit: int | None = None,
) -> list[FreelancerMatch]:
    """Rank scored freelancers for a mission."""
    return [
        FreelancerMatch(freelancer=freelancer, match_score=match.score, match_reasons=match.reasons)
        for freelancer, match in rank_scored(scored, limit)
    ]
