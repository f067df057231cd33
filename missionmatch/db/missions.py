"""Mission store operations."""

from datetime import UTC, datetime
from typing import Any

from missionmatch.config import POOL_SIZE
from missionmatch.db.connection import get_connection
from missionmatch.matching.normalize import first_value, normalize_mission
from missionmatch.schemas.mission import Mission, MissionStatus


def save_mission(row: dict[str, Any]) -> None:
    """Insert or update a mission from a raw row.

    Free-form fields (skill lists) are stored as given so data in legacy
    shapes can be loaded unchanged.

    Args:
        row: Mission fields in camelCase or snake_case.
    """
    columns = [
        "id", "company_id", "title", "required_skills", "optional_skills",
        "budget_min", "budget_max", "experience", "modality", "status", "urgency", "created_at",
    ]

    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        updates = ", ".join(f"{col} = excluded.{col}" for col in columns[1:])

        cursor.execute(
            f"""
            INSERT INTO missions ({", ".join(columns)})
            VALUES ({", ".join([ph] * len(columns))})
            ON CONFLICT (id) DO UPDATE SET {updates}
            """,
            (
                str(row["id"]),
                first_value(row, "companyId", "company_id"),
                row.get("title") or "",
                db.encode_json(first_value(row, "requiredSkills", "required_skills")),
                db.encode_json(first_value(row, "optionalSkills", "optional_skills")),
                first_value(row, "budgetMin", "budget_min"),
                first_value(row, "budgetMax", "budget_max"),
                row.get("experience"),
                row.get("modality"),
                str(row.get("status") or MissionStatus.DRAFT.value).lower(),
                row.get("urgency"),
                first_value(row, "createdAt", "created_at") or datetime.now(UTC).isoformat(),
            ),
        )
        db.commit()


def list_published_missions(limit: int = POOL_SIZE) -> list[Mission]:
    """Retrieve the most recent published missions.

    This is the candidate pool for ranking missions, a coarse bound on
    scoring cost rather than pagination of the final result.

    Args:
        limit: Maximum number of missions to return.

    Returns:
        Normalized missions, newest first.
    """
    with get_connection() as db:
        cursor = db.cursor(dictionary=True)
        ph = db.placeholder
        cursor.execute(
            f"""
            SELECT * FROM missions
            WHERE LOWER(status) = {ph}
            ORDER BY created_at DESC, id ASC
            LIMIT {ph}
            """,
            (MissionStatus.PUBLISHED.value, limit),
        )
        rows = cursor.fetchall()

    return [normalize_mission(dict(row)) for row in rows]


def get_mission_by_id(mission_id: str) -> Mission | None:
    """Retrieve a single mission by its ID.

    Args:
        mission_id: The mission ID to retrieve.

    Returns:
        Normalized Mission if found, None otherwise.
    """
    with get_connection() as db:
        cursor = db.cursor(dictionary=True)
        ph = db.placeholder
        cursor.execute(f"SELECT * FROM missions WHERE id = {ph}", (mission_id,))
        row = cursor.fetchone()

    if row is None:
        return None

    return normalize_mission(dict(row))
