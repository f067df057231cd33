"""Service layer for the matching engine."""

from missionmatch.services.application_service import (
    apply_to_mission,
    change_application_status,
    score_application,
    shortlist_freelancer,
    unshortlist_freelancer,
)
from missionmatch.services.match_service import (
    get_top_matching_freelancers,
    get_top_matching_missions,
    on_application_created,
    on_application_status_changed,
    on_shortlist_changed,
)

__all__ = [
    "get_top_matching_missions",
    "get_top_matching_freelancers",
    "on_application_created",
    "on_application_status_changed",
    "on_shortlist_changed",
    "apply_to_mission",
    "change_application_status",
    "score_application",
    "shortlist_freelancer",
    "unshortlist_freelancer",
]
