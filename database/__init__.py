"""Database models and initialization."""
from .db import init_db, get_db, clear_database
from .schema import Job, JobStatus
from .jobs import (
    list_jobs, get_job_by_id, create_job, update_job, delete_job, count_jobs
)

__all__ = [
    'init_db', 'get_db', 'clear_database', 'Job', 'JobStatus',
    'list_jobs', 'get_job_by_id', 'create_job', 'update_job', 'delete_job', 'count_jobs'
]
