"""Freelancer store operations."""

from datetime import UTC, datetime
from typing import Any

from missionmatch.config import POOL_SIZE
from missionmatch.db.connection import get_connection
from missionmatch.matching.normalize import coerce_bool, first_value, normalize_freelancer
from missionmatch.schemas.freelancer import AvailabilityStatus, Freelancer

FETCH_BATCH_SIZE = 200


def save_freelancer(row: dict[str, Any]) -> None:
    """Insert or update a freelancer profile from a raw row.

    Skills and availability are stored as given so profiles in legacy
    shapes (JSON strings, keyed objects) can be loaded unchanged.

    Args:
        row: Freelancer fields in camelCase or snake_case.
    """
    columns = [
        "id", "name", "title", "skills", "daily_rate", "seniority", "remote",
        "location", "availability", "rating", "completed_jobs", "created_at",
    ]

    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        updates = ", ".join(f"{col} = excluded.{col}" for col in columns[1:])

        cursor.execute(
            f"""
            INSERT INTO freelancers ({", ".join(columns)})
            VALUES ({", ".join([ph] * len(columns))})
            ON CONFLICT (id) DO UPDATE SET {updates}
            """,
            (
                str(row["id"]),
                row.get("name"),
                row.get("title"),
                db.encode_json(row.get("skills")),
                first_value(row, "dailyRate", "daily_rate"),
                row.get("seniority"),
                coerce_bool(row.get("remote")),
                row.get("location"),
                db.encode_json(row.get("availability")),
                row.get("rating"),
                first_value(row, "completedJobs", "completed_jobs"),
                first_value(row, "createdAt", "created_at") or datetime.now(UTC).isoformat(),
            ),
        )
        db.commit()


def list_available_freelancers(limit: int = POOL_SIZE) -> list[Freelancer]:
    """Retrieve the most recent freelancers whose availability is "available".

    Availability is stored in several shapes, so the status can only be
    trusted after normalization. Rows are read newest first in batches
    (with a coarse textual pre-filter) and normalized until ``limit``
    available freelancers have been collected.

    Args:
        limit: Maximum number of freelancers to return.

    Returns:
        Normalized available freelancers, newest first.
    """
    results: list[Freelancer] = []

    with get_connection() as db:
        cursor = db.cursor(dictionary=True)
        ph = db.placeholder
        availability_text = "availability::text" if db.is_postgres else "availability"
        cursor.execute(
            f"""
            SELECT * FROM freelancers
            WHERE LOWER({availability_text}) LIKE {ph}
            ORDER BY created_at DESC, id ASC
            """,
            (f"%{AvailabilityStatus.AVAILABLE.value}%",),
        )

        while len(results) < limit:
            rows = cursor.fetchmany(FETCH_BATCH_SIZE)
            if not rows:
                break
            for row in rows:
                freelancer = normalize_freelancer(dict(row))
                if freelancer.availability.status == AvailabilityStatus.AVAILABLE:
                    results.append(freelancer)
                    if len(results) >= limit:
                        break

    return results


def get_freelancer_by_id(freelancer_id: str) -> Freelancer | None:
    """Retrieve a single freelancer by ID.

    Args:
        freelancer_id: The freelancer profile ID to retrieve.

    Returns:
        Normalized Freelancer if found, None otherwise.
    """
    with get_connection() as db:
        cursor = db.cursor(dictionary=True)
        ph = db.placeholder
        cursor.execute(f"SELECT * FROM freelancers WHERE id = {ph}", (freelancer_id,))
        row = cursor.fetchone()

    if row is None:
        return None

    return normalize_freelancer(dict(row))
