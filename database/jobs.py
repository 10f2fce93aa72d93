"""Job CRUD operations."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from constants import SortKeys
from database.db import get_db
from database.schema import Job, JobStatus


# Columns searched by the free-text query
SEARCH_COLUMNS = ("company", "role", "notes", "next_action")

ORDER_BY = {
    SortKeys.UPDATED_DESC: "updated_at DESC",
    SortKeys.UPDATED_ASC: "updated_at ASC",
    SortKeys.CREATED_DESC: "created_at DESC",
    SortKeys.CREATED_ASC: "created_at ASC",
    SortKeys.COMPANY_ASC: "casefold(company) ASC",
    SortKeys.COMPANY_DESC: "casefold(company) DESC",
}

UPDATABLE_COLUMNS = (
    "company",
    "role",
    "status",
    "location",
    "url",
    "salary",
    "notes",
    "next_action",
    "next_action_at",
)


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def _connect():
    conn = get_db()
    # SQLite's LIKE/lower() only fold ASCII
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _to_db_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="microseconds") if value else None


def _from_db_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _row_to_job(row) -> Job:
    """Convert DB row to Job."""
    return Job(
        id=row["id"],
        company=row["company"],
        role=row["role"],
        status=JobStatus.parse(row["status"]) or JobStatus.SAVED,
        location=row["location"],
        url=row["url"],
        salary=row["salary"],
        notes=row["notes"],
        next_action=row["next_action"],
        next_action_at=_from_db_timestamp(row["next_action_at"]),
        created_at=_from_db_timestamp(row["created_at"]),
        updated_at=_from_db_timestamp(row["updated_at"]),
    )


def list_jobs(
    q: Optional[str] = None,
    status: Optional[JobStatus] = None,
    sort: str = SortKeys.DEFAULT,
) -> List[Job]:
    """
    Get all jobs matching the query, ordered by the sort key.

    Args:
        q: Case-insensitive substring matched against company, role, notes and next action
        status: Restrict to this status (None for all)
        sort: One of the SortKeys values; unknown keys fall back to SortKeys.DEFAULT

    Returns:
        Full list of matching jobs
    """
    clauses = []
    values: List[Any] = []
    if status is not None:
        clauses.append("status = ?")
        values.append(status.value)
    if q:
        needle = q.casefold()
        clauses.append(
            "(" + " OR ".join(f"instr(casefold({column}), ?) > 0" for column in SEARCH_COLUMNS) + ")"
        )
        values.extend([needle] * len(SEARCH_COLUMNS))

    sql = "SELECT * FROM jobs"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += f" ORDER BY {ORDER_BY.get(sort, ORDER_BY[SortKeys.DEFAULT])}, id ASC"

    conn = _connect()
    try:
        rows = conn.execute(sql, values).fetchall()
    finally:
        conn.close()
    return [_row_to_job(row) for row in rows]


def get_job_by_id(job_id: str) -> Optional[Job]:
    """Get job by ID."""
    conn = get_db()
    try:
        row = conn.execute("SELECT * FROM jobs WHERE id = ?", (job_id,)).fetchone()
    finally:
        conn.close()
    if not row:
        return None
    return _row_to_job(row)


def create_job(
    company: str,
    role: str,
    status: JobStatus = JobStatus.SAVED,
    location: Optional[str] = None,
    url: Optional[str] = None,
    salary: Optional[str] = None,
    notes: Optional[str] = None,
    next_action: Optional[str] = None,
    next_action_at: Optional[datetime] = None,
) -> Job:
    """Create a new job; created_at and updated_at share one timestamp."""
    job_id = uuid.uuid4().hex
    now = _now()
    conn = get_db()
    try:
        conn.execute(
            """
            INSERT INTO jobs (id, company, role, status, location, url, salary, notes,
                              next_action, next_action_at, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                job_id,
                company,
                role,
                status.value,
                location,
                url,
                salary,
                notes,
                next_action,
                _to_db_timestamp(next_action_at),
                _to_db_timestamp(now),
                _to_db_timestamp(now),
            ),
        )
        conn.commit()
    finally:
        conn.close()
    return Job(
        id=job_id,
        company=company,
        role=role,
        status=status,
        location=location,
        url=url,
        salary=salary,
        notes=notes,
        next_action=next_action,
        next_action_at=next_action_at,
        created_at=now,
        updated_at=now,
    )


def update_job(job_id: str, changes: Dict[str, Any]) -> Optional[Job]:
    """
    Apply a partial update to a job.

    Only keys present in ``changes`` are written; a value of None clears the
    column. updated_at is always refreshed and always moves forward.

    Args:
        job_id: Job identifier
        changes: Mapping of column name to new value

    Returns:
        The updated Job, or None if no job has this id
    """
    unknown = set(changes) - set(UPDATABLE_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown job columns: {', '.join(sorted(unknown))}")

    conn = get_db()
    try:
        row = conn.execute("SELECT updated_at FROM jobs WHERE id = ?", (job_id,)).fetchone()
        if not row:
            return None
        previous = _from_db_timestamp(row["updated_at"])
        updated_at = _now()
        if previous and updated_at <= previous:
            updated_at = previous + timedelta(microseconds=1)

        updates = []
        values: List[Any] = []
        for column in UPDATABLE_COLUMNS:
            if column not in changes:
                continue
            value = changes[column]
            if isinstance(value, JobStatus):
                value = value.value
            elif isinstance(value, datetime):
                value = _to_db_timestamp(value)
            updates.append(f"{column} = ?")
            values.append(value)
        updates.append("updated_at = ?")
        values.append(_to_db_timestamp(updated_at))
        values.append(job_id)

        conn.execute(f'UPDATE jobs SET {", ".join(updates)} WHERE id = ?', values)
        conn.commit()
    finally:
        conn.close()
    return get_job_by_id(job_id)


def delete_job(job_id: str) -> bool:
    """Delete a job."""
    conn = get_db()
    try:
        cursor = conn.execute("DELETE FROM jobs WHERE id = ?", (job_id,))
        conn.commit()
        deleted = cursor.rowcount > 0
    finally:
        conn.close()
    return deleted


def count_jobs() -> int:
    """Count all jobs."""
    conn = get_db()
    try:
        (count,) = conn.execute("SELECT COUNT(*) FROM jobs").fetchone()
    finally:
        conn.close()
    return count
