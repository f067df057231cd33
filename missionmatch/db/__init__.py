"""Database access for missions, freelancers and their relationships."""

from missionmatch.db.connection import get_connection, init_tables
from missionmatch.db.freelancers import (
    get_freelancer_by_id,
    list_available_freelancers,
    save_freelancer,
)
from missionmatch.db.missions import get_mission_by_id, list_published_missions, save_mission
from missionmatch.db.relationships import (
    add_to_shortlist,
    create_application,
    get_application,
    list_freelancer_ids_applied_to,
    list_mission_ids_applied_by,
    list_shortlisted_freelancer_ids,
    remove_from_shortlist,
    update_application_score,
    update_application_status,
)

__all__ = [
    "get_connection",
    "init_tables",
    "save_freelancer",
    "get_freelancer_by_id",
    "list_available_freelancers",
    "save_mission",
    "get_mission_by_id",
    "list_published_missions",
    "create_application",
    "get_application",
    "update_application_status",
    "update_application_score",
    "add_to_shortlist",
    "remove_from_shortlist",
    "list_mission_ids_applied_by",
    "list_freelancer_ids_applied_to",
    "list_shortlisted_freelancer_ids",
]
