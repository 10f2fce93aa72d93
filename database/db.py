"""Database connection and initialization."""

import sqlite3
from pathlib import Path

from config import settings
from core.logger import logger


# Columns added after the first release; applied in place to older databases
_ADDED_COLUMNS = {
    "location": "TEXT",
    "url": "TEXT",
    "salary": "TEXT",
    "next_action": "TEXT",
    "next_action_at": "TIMESTAMP",
}


def get_db_path() -> Path:
    """Get database file path."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def get_db() -> sqlite3.Connection:
    """Get database connection."""
    db_path = get_db_path()
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


def init_db():
    """Initialize database with tables."""
    db_path = get_db_path()
    conn = get_db()
    cursor = conn.cursor()

    cursor.execute(
        """
        CREATE TABLE IF NOT EXISTS jobs (
            id TEXT NOT NULL PRIMARY KEY,
            company TEXT NOT NULL,
            role TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'SAVED',
            location TEXT,
            url TEXT,
            salary TEXT,
            notes TEXT,
            next_action TEXT,
            next_action_at TIMESTAMP,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        )
    """
    )

    existing = {row["name"] for row in cursor.execute("PRAGMA table_info(jobs)").fetchall()}
    for column, column_type in _ADDED_COLUMNS.items():
        if column not in existing:
            cursor.execute(f"ALTER TABLE jobs ADD COLUMN {column} {column_type}")
            logger.info(f"Added column jobs.{column}")

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_jobs_status ON jobs (status)")

    conn.commit()
    conn.close()
    logger.info(f"Database initialized at: {db_path}")


def clear_database() -> None:
    """Clear all rows from the jobs table without dropping it."""
    init_db()
    conn = get_db()
    try:
        conn.execute("DELETE FROM jobs")
        conn.commit()
        logger.info("Database cleared (tables kept).")
    finally:
        conn.close()
