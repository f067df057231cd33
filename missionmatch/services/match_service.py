"""Match service: bidirectional candidate ranking.

This service handles:
- Ranking published missions for a freelancer
- Ranking available freelancers for a mission
- Invalidating cached rankings when applications or shortlists change

Pipeline (per direction): cache lookup -> pool fetch (normalized) ->
relationship exclusion -> skill gate (freelancers only) -> scoring ->
threshold, sort and truncate -> cache store.

Store failures propagate to the caller. Cache failures never do.
"""

import logging

from missionmatch.cache import Direction, ResultCache, get_cache_store
from missionmatch.config import POOL_SIZE
from missionmatch.db.freelancers import get_freelancer_by_id, list_available_freelancers
from missionmatch.db.missions import get_mission_by_id, list_published_missions
from missionmatch.db.relationships import (
    get_application,
    list_freelancer_ids_applied_to,
    list_mission_ids_applied_by,
    list_shortlisted_freelancer_ids,
)
from missionmatch.matching.filter import apply_freelancer_filters, apply_mission_filters
from missionmatch.matching.ranker import clamp_limit, rank_freelancers, rank_missions
from missionmatch.matching.scorer import score_freelancer_for_mission, score_mission_for_freelancer
from missionmatch.schemas.match import FreelancerMatch, MissionMatch
from missionmatch.utils import (
    ApplicationNotFoundError,
    FreelancerNotFoundError,
    MissionNotFoundError,
)

logger = logging.getLogger(__name__)

_result_cache: ResultCache | None = None


def get_result_cache() -> ResultCache:
    """Get the process-wide result cache."""
    global _result_cache
    if _result_cache is None:
        _result_cache = ResultCache(get_cache_store())
    return _result_cache


def get_top_matching_missions(freelancer_id: str, limit: int | None = None) -> list[MissionMatch]:
    """Rank the best-fitting published missions for a freelancer.

    Args:
        freelancer_id: Freelancer profile ID.
        limit: Maximum number of results (default 10, capped at 50).

    Returns:
        MissionMatch list, best first. Empty when nothing scores above the
        threshold.

    Raises:
        FreelancerNotFoundError: If the freelancer does not exist.
    """
    limit = clamp_limit(limit)
    return get_result_cache().get_or_compute(
        Direction.MISSIONS_FOR_FREELANCER,
        freelancer_id,
        limit,
        MissionMatch,
        lambda: _compute_missions_for_freelancer(freelancer_id, limit),
    )


def get_top_matching_freelancers(mission_id: str, limit: int | None = None) -> list[FreelancerMatch]:
    """Rank the best-fitting available freelancers for a mission.

    Args:
        mission_id: Mission ID.
        limit: Maximum number of results (default 10, capped at 50).

    Returns:
        FreelancerMatch list, best first. Freelancers who applied, are
        shortlisted, or share no required skill never appear.

    Raises:
        MissionNotFoundError: If the mission does not exist.
    """
    limit = clamp_limit(limit)
    return get_result_cache().get_or_compute(
        Direction.FREELANCERS_FOR_MISSION,
        mission_id,
        limit,
        FreelancerMatch,
        lambda: _compute_freelancers_for_mission(mission_id, limit),
    )


def _compute_missions_for_freelancer(freelancer_id: str, limit: int) -> list[MissionMatch]:
    freelancer = get_freelancer_by_id(freelancer_id)
    if freelancer is None:
        raise FreelancerNotFoundError(freelancer_id)

    missions = list_published_missions(limit=POOL_SIZE)
    applied = list_mission_ids_applied_by(freelancer_id)
    logger.info(
        f"Ranking {len(missions)} published missions for freelancer {freelancer_id} "
        f"({len(applied)} already applied)"
    )

    candidates = apply_mission_filters(missions, applied)
    scored = [(mission, score_mission_for_freelancer(freelancer, mission)) for mission in candidates]
    results = rank_missions(scored, limit)

    logger.info(f"{len(results)} of {len(candidates)} missions ranked for freelancer {freelancer_id}")
    return results


def _compute_freelancers_for_mission(mission_id: str, limit: int) -> list[FreelancerMatch]:
    mission = get_mission_by_id(mission_id)
    if mission is None:
        raise MissionNotFoundError(mission_id)

    freelancers = list_available_freelancers(limit=POOL_SIZE)
    applicants = list_freelancer_ids_applied_to(mission_id)
    shortlisted = list_shortlisted_freelancer_ids(mission_id)
    logger.info(
        f"Ranking {len(freelancers)} available freelancers for mission {mission_id} "
        f"({len(applicants)} applied, {len(shortlisted)} shortlisted)"
    )

    candidates = apply_freelancer_filters(freelancers, mission, applicants, shortlisted)
    scored = [(freelancer, score_freelancer_for_mission(mission, freelancer)) for freelancer in candidates]
    results = rank_freelancers(scored, limit)

    logger.info(f"{len(results)} of {len(candidates)} freelancers ranked for mission {mission_id}")
    return results


def on_application_created(freelancer_id: str, mission_id: str) -> None:
    """Invalidate cached rankings after a new application."""
    get_result_cache().invalidate_relationship(freelancer_id, mission_id)


def on_application_status_changed(application_id: str) -> None:
    """Invalidate cached rankings after an application status change.

    Raises:
        ApplicationNotFoundError: If the application does not exist.
    """
    application = get_application(application_id)
    if application is None:
        raise ApplicationNotFoundError(application_id)
    get_result_cache().invalidate_relationship(application.freelancer_id, application.mission_id)


def on_shortlist_changed(freelancer_id: str, mission_id: str) -> None:
    """Invalidate cached rankings after a shortlist entry is added or removed."""
    get_result_cache().invalidate_relationship(freelancer_id, mission_id)
