"""Exclusion filters applied to candidate pools before scoring."""

from missionmatch.matching.scorer import matched_required_skills
from missionmatch.schemas.freelancer import Freelancer
from missionmatch.schemas.mission import Mission


def exclude_applied_missions(
    missions: list[Mission],
    applied_mission_ids: set[str],
) -> list[Mission]:
    """Drop missions the freelancer has already applied to.

    Args:
        missions: Candidate missions.
        applied_mission_ids: IDs of missions with an existing application.

    Returns:
        Missions with no application from the freelancer.
    """
    if not applied_mission_ids:
        return missions

    return [mission for mission in missions if mission.id not in applied_mission_ids]


def exclude_linked_freelancers(
    freelancers: list[Freelancer],
    applicant_ids: set[str],
    shortlisted_ids: set[str],
) -> list[Freelancer]:
    """Drop freelancers who applied to or are shortlisted for the mission.

    Args:
        freelancers: Candidate freelancers.
        applicant_ids: Freelancers with an application to the mission.
        shortlisted_ids: Freelancers shortlisted for the mission.

    Returns:
        Freelancers with no existing relationship to the mission.
    """
    excluded = applicant_ids | shortlisted_ids
    if not excluded:
        return freelancers

    return [freelancer for freelancer in freelancers if freelancer.id not in excluded]


def filter_by_required_skills(
    freelancers: list[Freelancer],
    mission: Mission,
) -> list[Freelancer]:
    """Hard gate: keep freelancers sharing at least one required skill.

    Missions without required skills never gate. This runs before scoring,
    so a gated-out freelancer is never scored regardless of rate,
    experience or rating.

    Args:
        freelancers: Normalized candidate freelancers.
        mission: Normalized mission.

    Returns:
        Freelancers covering at least one required skill.
    """
    if not mission.required_skills:
        return freelancers

    return [
        freelancer
        for freelancer in freelancers
        if matched_required_skills(mission, freelancer)
    ]


def apply_mission_filters(
    missions: list[Mission],
    applied_mission_ids: set[str],
) -> list[Mission]:
    """Apply all exclusions for ranking missions for a freelancer."""
    return exclude_applied_missions(missions, applied_mission_ids)


def apply_freelancer_filters(
    freelancers: list[Freelancer],
    mission: Mission,
    applicant_ids: set[str],
    shortlisted_ids: set[str],
) -> list[Freelancer]:
    """Apply all exclusions for ranking freelancers for a mission.

    Relationship exclusion runs first (cheap set lookups), then the skill gate.
    """
    freelancers = exclude_linked_freelancers(freelancers, applicant_ids, shortlisted_ids)
    return filter_by_required_skills(freelancers, mission)
