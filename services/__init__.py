"""Services package."""
from services.job_service import JobService, job_service

__all__ = ["JobService", "job_service"]
