"""Models package."""

from models.job_models import JobCreate, JobUpdate, JobRecord

__all__ = [
    "JobCreate",
    "JobUpdate",
    "JobRecord",
]
