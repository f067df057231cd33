"""Database connection factory for SQLite (local) and PostgreSQL (production)."""

import json
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg2
from psycopg2.extras import RealDictCursor

from missionmatch.config import DATA_DIR, DATABASE_URL, DB_PATH


class DatabaseConnection:
    """Wrapper for database connections that provides a consistent interface."""

    def __init__(self, conn: Any, is_postgres: bool = False):
        self.conn = conn
        self.is_postgres = is_postgres
        self._cursor = None

    def cursor(self, dictionary: bool = False) -> Any:
        """Get a cursor for executing database operations.

        Args:
            dictionary: If True, rows are returned as dict-like objects
                (RealDictCursor on PostgreSQL, sqlite3.Row on SQLite) so
                columns can be accessed by name.

        Returns:
            Database cursor object for executing queries and fetching results.
        """
        if self.is_postgres:
            self._cursor = self.conn.cursor(cursor_factory=RealDictCursor if dictionary else None)
        else:
            if dictionary:
                self.conn.row_factory = sqlite3.Row
            self._cursor = self.conn.cursor()
        return self._cursor

    def commit(self) -> None:
        """Commit the transaction."""
        self.conn.commit()

    def rollback(self) -> None:
        """Roll back the current transaction."""
        self.conn.rollback()

    def close(self) -> None:
        """Close the connection."""
        if self._cursor:
            self._cursor.close()
        self.conn.close()

    @property
    def placeholder(self) -> str:
        """Return the parameter placeholder for this database."""
        return "%s" if self.is_postgres else "?"

    def encode_json(self, value: Any) -> str | None:
        """Encode a free-form field for storage.

        SQLite stores the text verbatim, so legacy values that are already
        strings (JSON-encoded or bare) are kept as they are. PostgreSQL JSONB
        columns need valid JSON, so strings end up stored as JSON strings.
        """
        if value is None:
            return None
        if isinstance(value, str) and not self.is_postgres:
            return value
        return json.dumps(value)


@contextmanager
def get_connection() -> Generator[DatabaseConnection, None, None]:
    """Get a database connection.

    Uses PostgreSQL if DATABASE_URL is set, otherwise falls back to SQLite.

    Yields:
        DatabaseConnection wrapper with consistent interface.
    """
    if DATABASE_URL:
        conn = psycopg2.connect(DATABASE_URL)
        db = DatabaseConnection(conn, is_postgres=True)
    else:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(DB_PATH, check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA busy_timeout=5000")
        conn.row_factory = sqlite3.Row
        db = DatabaseConnection(conn, is_postgres=False)

    try:
        yield db
    finally:
        db.close()


def init_tables() -> None:
    """Initialize database tables.

    Creates all required tables if they don't exist.
    Uses appropriate syntax for PostgreSQL or SQLite.
    """
    with get_connection() as db:
        if db.is_postgres:
            _init_postgres_tables(db)
        else:
            _init_sqlite_tables(db)
        db.commit()


def _init_postgres_tables(db: DatabaseConnection) -> None:
    """Create PostgreSQL tables."""
    cursor = db.cursor()

    # Skills and availability are JSONB but hold whatever shape was written
    # (arrays, keyed objects, JSON strings); readers normalize them.
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS freelancers (
            id TEXT PRIMARY KEY,
            name TEXT,
            title TEXT,
            skills JSONB,
            daily_rate DOUBLE PRECISION,
            seniority TEXT,
            remote BOOLEAN DEFAULT FALSE,
            location TEXT,
            availability JSONB,
            rating DOUBLE PRECISION,
            completed_jobs INTEGER,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS missions (
            id TEXT PRIMARY KEY,
            company_id TEXT,
            title TEXT NOT NULL DEFAULT '',
            required_skills JSONB,
            optional_skills JSONB,
            budget_min DOUBLE PRECISION,
            budget_max DOUBLE PRECISION,
            experience TEXT,
            modality TEXT,
            status TEXT NOT NULL DEFAULT 'draft',
            urgency TEXT,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS applications (
            id TEXT PRIMARY KEY,
            freelancer_id TEXT NOT NULL REFERENCES freelancers(id),
            mission_id TEXT NOT NULL REFERENCES missions(id),
            status TEXT NOT NULL DEFAULT 'pending',
            matching_score DOUBLE PRECISION,
            created_at TIMESTAMPTZ DEFAULT NOW(),
            updated_at TIMESTAMPTZ DEFAULT NOW(),
            UNIQUE (freelancer_id, mission_id)
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS shortlists (
            id SERIAL PRIMARY KEY,
            company_id TEXT NOT NULL,
            mission_id TEXT NOT NULL REFERENCES missions(id),
            freelancer_id TEXT NOT NULL REFERENCES freelancers(id),
            created_at TIMESTAMPTZ DEFAULT NOW(),
            UNIQUE (company_id, mission_id, freelancer_id)
        )
    """)

    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_missions_status_created
        ON missions(status, created_at DESC)
    """)
    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_applications_mission
        ON applications(mission_id)
    """)
    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_shortlists_mission
        ON shortlists(mission_id)
    """)


def _init_sqlite_tables(db: DatabaseConnection) -> None:
    """Create SQLite tables (for local development/testing)."""
    cursor = db.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS freelancers (
            id TEXT PRIMARY KEY,
            name TEXT,
            title TEXT,
            skills TEXT,
            daily_rate REAL,
            seniority TEXT,
            remote INTEGER DEFAULT 0,
            location TEXT,
            availability TEXT,
            rating REAL,
            completed_jobs INTEGER,
            created_at TEXT NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS missions (
            id TEXT PRIMARY KEY,
            company_id TEXT,
            title TEXT NOT NULL DEFAULT '',
            required_skills TEXT,
            optional_skills TEXT,
            budget_min REAL,
            budget_max REAL,
            experience TEXT,
            modality TEXT,
            status TEXT NOT NULL DEFAULT 'draft',
            urgency TEXT,
            created_at TEXT NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS applications (
            id TEXT PRIMARY KEY,
            freelancer_id TEXT NOT NULL REFERENCES freelancers(id),
            mission_id TEXT NOT NULL REFERENCES missions(id),
            status TEXT NOT NULL DEFAULT 'pending',
            matching_score REAL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            UNIQUE (freelancer_id, mission_id)
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS shortlists (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            company_id TEXT NOT NULL,
            mission_id TEXT NOT NULL REFERENCES missions(id),
            freelancer_id TEXT NOT NULL REFERENCES freelancers(id),
            created_at TEXT NOT NULL,
            UNIQUE (company_id, mission_id, freelancer_id)
        )
    """)

    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_missions_status_created
        ON missions(status, created_at)
    """)
    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_applications_mission
        ON applications(mission_id)
    """)
    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_shortlists_mission
        ON shortlists(mission_id)
    """)
