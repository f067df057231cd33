"""Load missions, freelancers and relationships from a JSON file."""

import json
import logging
from pathlib import Path

from missionmatch.db.connection import init_tables
from missionmatch.db.freelancers import save_freelancer
from missionmatch.db.missions import save_mission
from missionmatch.db.relationships import add_to_shortlist, create_application
from missionmatch.services.match_service import on_application_created, on_shortlist_changed
from missionmatch.utils import ApplicationExistsError

logger = logging.getLogger(__name__)


def load_seed_file(file_path: Path) -> dict[str, int]:
    """Load a seed file into the database.

    The file holds an object with optional ``freelancers``, ``missions``,
    ``applications`` and ``shortlists`` lists. Profile and mission rows are
    stored as given (including legacy field shapes). Idempotent: existing
    rows are updated and duplicate relationships are skipped.

    Args:
        file_path: Path to the JSON seed file.

    Returns:
        Dict with the number of rows loaded per kind.
    """
    init_tables()

    with open(file_path) as f:
        data = json.load(f)

    stats = {"freelancers": 0, "missions": 0, "applications": 0, "shortlists": 0}

    for row in data.get("freelancers", []):
        save_freelancer(row)
        stats["freelancers"] += 1

    for row in data.get("missions", []):
        save_mission(row)
        stats["missions"] += 1

    for row in data.get("applications", []):
        freelancer_id = row.get("freelancerId", row.get("freelancer_id"))
        mission_id = row.get("missionId", row.get("mission_id"))
        try:
            create_application(freelancer_id, mission_id, application_id=row.get("id"))
        except ApplicationExistsError:
            continue
        on_application_created(freelancer_id, mission_id)
        stats["applications"] += 1

    for row in data.get("shortlists", []):
        freelancer_id = row.get("freelancerId", row.get("freelancer_id"))
        mission_id = row.get("missionId", row.get("mission_id"))
        company_id = row.get("companyId", row.get("company_id"))
        if add_to_shortlist(company_id, mission_id, freelancer_id):
            on_shortlist_changed(freelancer_id, mission_id)
            stats["shortlists"] += 1

    logger.info(f"Loaded seed file {file_path}: {stats}")
    return stats
