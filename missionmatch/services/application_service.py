"""Application and shortlist service.

Wraps the relationship writes that change what the matching engine may
recommend, so each one is followed by the matching cache invalidation.
Also computes the per-application fit score.
"""

import logging

from missionmatch.db.freelancers import get_freelancer_by_id
from missionmatch.db.missions import get_mission_by_id
from missionmatch.db.relationships import (
    add_to_shortlist,
    create_application,
    get_application,
    remove_from_shortlist,
    update_application_score,
    update_application_status,
)
from missionmatch.matching.scorer import ApplicationFitScore
from missionmatch.schemas.application import Application, ApplicationStatus
from missionmatch.schemas.mission import MissionStatus
from missionmatch.services.match_service import (
    on_application_created,
    on_application_status_changed,
    on_shortlist_changed,
)
from missionmatch.utils import (
    ApplicationNotFoundError,
    FreelancerNotFoundError,
    MissionNotAvailableError,
    MissionNotFoundError,
)

logger = logging.getLogger(__name__)

_fit_score = ApplicationFitScore()


def apply_to_mission(freelancer_id: str, mission_id: str) -> Application:
    """Create an application and invalidate both affected rankings.

    Raises:
        FreelancerNotFoundError: If the freelancer does not exist.
        MissionNotFoundError: If the mission does not exist.
        MissionNotAvailableError: If the mission is not published.
        ApplicationExistsError: If the freelancer already applied.
    """
    if get_freelancer_by_id(freelancer_id) is None:
        raise FreelancerNotFoundError(freelancer_id)
    mission = get_mission_by_id(mission_id)
    if mission is None:
        raise MissionNotFoundError(mission_id)
    if mission.status != MissionStatus.PUBLISHED:
        raise MissionNotAvailableError(mission_id, mission.status.value)

    application = create_application(freelancer_id, mission_id)
    logger.info(f"Freelancer {freelancer_id} applied to mission {mission_id} ({application.id})")

    on_application_created(freelancer_id, mission_id)
    return application


def change_application_status(application_id: str, status: ApplicationStatus) -> None:
    """Update an application's status and invalidate both affected rankings.

    Raises:
        ApplicationNotFoundError: If the application does not exist.
    """
    if not update_application_status(application_id, status):
        raise ApplicationNotFoundError(application_id)
    logger.info(f"Application {application_id} moved to {status.value}")

    on_application_status_changed(application_id)


def score_application(application_id: str) -> float:
    """Compute and store the fit score of one application.

    Uses ApplicationFitScore, which is weighted differently from the
    ranking score and is not used for ranking.

    Returns:
        The stored fit score (0-1).

    Raises:
        ApplicationNotFoundError: If the application does not exist.
        FreelancerNotFoundError: If the applicant profile is gone.
        MissionNotFoundError: If the mission is gone.
    """
    application = get_application(application_id)
    if application is None:
        raise ApplicationNotFoundError(application_id)

    freelancer = get_freelancer_by_id(application.freelancer_id)
    if freelancer is None:
        raise FreelancerNotFoundError(application.freelancer_id)
    mission = get_mission_by_id(application.mission_id)
    if mission is None:
        raise MissionNotFoundError(application.mission_id)

    score = _fit_score.score(freelancer, mission)
    update_application_score(application_id, score)
    logger.info(f"Application {application_id} fit score: {score:.2f}")
    return score


def shortlist_freelancer(company_id: str, mission_id: str, freelancer_id: str) -> bool:
    """Shortlist a freelancer for a mission.

    Returns:
        True if a new shortlist entry was created.
    """
    created = add_to_shortlist(company_id, mission_id, freelancer_id)
    if created:
        on_shortlist_changed(freelancer_id, mission_id)
    return created


def unshortlist_freelancer(company_id: str, mission_id: str, freelancer_id: str) -> bool:
    """Remove a freelancer from a mission's shortlist.

    Returns:
        True if an entry was removed.
    """
    removed = remove_from_shortlist(company_id, mission_id, freelancer_id)
    if removed:
        on_shortlist_changed(freelancer_id, mission_id)
    return removed
