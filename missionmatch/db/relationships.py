"""Application and shortlist relationship operations.

These relationships drive the exclusion filters: a freelancer who applied to
or is shortlisted for a mission is never recommended for it again.
"""

import sqlite3
import uuid
from datetime import UTC, datetime

import psycopg2

from missionmatch.db.connection import get_connection
from missionmatch.schemas.application import Application, ApplicationStatus
from missionmatch.utils import ApplicationExistsError


def list_mission_ids_applied_by(freelancer_id: str) -> set[str]:
    """Get IDs of missions the freelancer has applied to."""
    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        cursor.execute(
            f"SELECT mission_id FROM applications WHERE freelancer_id = {ph}",
            (freelancer_id,),
        )
        rows = cursor.fetchall()

    return {row[0] for row in rows}


def list_freelancer_ids_applied_to(mission_id: str) -> set[str]:
    """Get IDs of freelancers who have applied to the mission."""
    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        cursor.execute(
            f"SELECT freelancer_id FROM applications WHERE mission_id = {ph}",
            (mission_id,),
        )
        rows = cursor.fetchall()

    return {row[0] for row in rows}


def list_shortlisted_freelancer_ids(mission_id: str) -> set[str]:
    """Get IDs of freelancers shortlisted for the mission (by any company)."""
    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        cursor.execute(
            f"SELECT freelancer_id FROM shortlists WHERE mission_id = {ph}",
            (mission_id,),
        )
        rows = cursor.fetchall()

    return {row[0] for row in rows}


def create_application(
    freelancer_id: str,
    mission_id: str,
    application_id: str | None = None,
) -> Application:
    """Record a freelancer's application to a mission.

    Args:
        freelancer_id: Applying freelancer.
        mission_id: Target mission.
        application_id: Optional explicit ID (a UUID is generated otherwise).

    Returns:
        The created Application.

    Raises:
        ApplicationExistsError: If the freelancer already applied to the mission.
    """
    application = Application(
        id=application_id or str(uuid.uuid4()),
        freelancer_id=freelancer_id,
        mission_id=mission_id,
    )

    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        now = datetime.now(UTC).isoformat()
        try:
            cursor.execute(
                f"""
                INSERT INTO applications (
                    id, freelancer_id, mission_id, status, created_at, updated_at
                ) VALUES ({ph}, {ph}, {ph}, {ph}, {ph}, {ph})
                """,
                (
                    application.id,
                    freelancer_id,
                    mission_id,
                    application.status.value,
                    now,
                    now,
                ),
            )
        except (sqlite3.IntegrityError, psycopg2.IntegrityError) as e:
            # Only the (freelancer, mission) unique constraint means "already applied";
            # other violations (reused ID, missing reference) propagate.
            db.rollback()
            cursor = db.cursor()
            cursor.execute(
                f"SELECT 1 FROM applications WHERE freelancer_id = {ph} AND mission_id = {ph}",
                (freelancer_id, mission_id),
            )
            if cursor.fetchone() is not None:
                raise ApplicationExistsError(freelancer_id, mission_id) from e
            raise
        db.commit()

    return application


def get_application(application_id: str) -> Application | None:
    """Retrieve an application by ID.

    Args:
        application_id: The application ID.

    Returns:
        Application if found, None otherwise.
    """
    with get_connection() as db:
        cursor = db.cursor(dictionary=True)
        ph = db.placeholder
        cursor.execute(
            f"""
            SELECT id, freelancer_id, mission_id, status, matching_score
            FROM applications WHERE id = {ph}
            """,
            (application_id,),
        )
        row = cursor.fetchone()

    if row is None:
        return None

    return Application(
        id=row["id"],
        freelancer_id=row["freelancer_id"],
        mission_id=row["mission_id"],
        status=ApplicationStatus(row["status"]),
        matching_score=row["matching_score"],
    )


def update_application_status(application_id: str, status: ApplicationStatus) -> bool:
    """Change the status of an application.

    Returns:
        True if the application exists and was updated.
    """
    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        cursor.execute(
            f"UPDATE applications SET status = {ph}, updated_at = {ph} WHERE id = {ph}",
            (status.value, datetime.now(UTC).isoformat(), application_id),
        )
        updated = cursor.rowcount > 0
        db.commit()

    return updated


def update_application_score(application_id: str, score: float) -> None:
    """Store the fit score computed for an application."""
    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        cursor.execute(
            f"UPDATE applications SET matching_score = {ph} WHERE id = {ph}",
            (score, application_id),
        )
        db.commit()


def add_to_shortlist(company_id: str, mission_id: str, freelancer_id: str) -> bool:
    """Shortlist a freelancer for a mission.

    Idempotent: shortlisting the same freelancer twice is a no-op.

    Returns:
        True if a new shortlist entry was created.
    """
    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        try:
            cursor.execute(
                f"""
                INSERT INTO shortlists (company_id, mission_id, freelancer_id, created_at)
                VALUES ({ph}, {ph}, {ph}, {ph})
                """,
                (company_id, mission_id, freelancer_id, datetime.now(UTC).isoformat()),
            )
        except (sqlite3.IntegrityError, psycopg2.IntegrityError):
            return False  # Already shortlisted
        db.commit()

    return True


def remove_from_shortlist(company_id: str, mission_id: str, freelancer_id: str) -> bool:
    """Remove a freelancer from a mission's shortlist.

    Returns:
        True if an entry was removed.
    """
    with get_connection() as db:
        cursor = db.cursor()
        ph = db.placeholder
        cursor.execute(
            f"""
            DELETE FROM shortlists
            WHERE company_id = {ph} AND mission_id = {ph} AND freelancer_id = {ph}
            """,
            (company_id, mission_id, freelancer_id),
        )
        removed = cursor.rowcount > 0
        db.commit()

    return removed
