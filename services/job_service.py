"""Job query and mutation service layer."""

import sqlite3
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from constants import Messages, SortKeys
from core.exceptions import NotFoundError, StoreError, ValidationError
from core.logger import logger
from database import jobs as job_store
from database.schema import Job, JobStatus
from models.job_models import JobCreate, JobUpdate

PayloadT = TypeVar("PayloadT", bound=BaseModel)

ALLOWED_SORTS = {
    SortKeys.UPDATED_DESC,
    SortKeys.UPDATED_ASC,
    SortKeys.CREATED_DESC,
    SortKeys.CREATED_ASC,
    SortKeys.COMPANY_ASC,
    SortKeys.COMPANY_DESC,
}


def normalize_status_filter(value: Optional[str]) -> Optional[JobStatus]:
    """Status filter for listing; "all", blank and unknown values mean no filter."""
    return JobStatus.parse(value)


def normalize_sort(value: Optional[str]) -> str:
    """Sort key for listing; unknown values fall back to the default."""
    key = (value or "").strip()
    return key if key in ALLOWED_SORTS else SortKeys.DEFAULT


def parse_payload(model: Type[PayloadT], payload: Any) -> PayloadT:
    """
    Validate a decoded JSON body against a payload model.

    Raises:
        ValidationError: If the body is not an object or a field is malformed
    """
    if not isinstance(payload, dict):
        raise ValidationError(Messages.INVALID_JSON)
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        if field == "nextActionAt":
            raise ValidationError(Messages.INVALID_NEXT_ACTION_AT) from e
        raise ValidationError(f"Invalid value for {field}: {first.get('msg', 'invalid')}") from e


class JobService:
    """Service for listing and mutating job records."""

    def list_jobs(
        self,
        q: Optional[str] = None,
        status: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Job]:
        """
        List jobs matching a free-text query and status filter.

        Args:
            q: Case-insensitive substring searched in company, role, notes and next action
            status: One of the JobStatus values or "all"; unknown values are ignored
            sort: Sort key; unknown values fall back to updated_desc

        Returns:
            Every matching job, ordered by the sort key
        """
        query = (q or "").strip() or None
        try:
            return job_store.list_jobs(
                q=query, status=normalize_status_filter(status), sort=normalize_sort(sort)
            )
        except sqlite3.Error as e:
            logger.error(f"Failed to list jobs: {str(e)}", exc_info=True)
            raise StoreError(Messages.STORE_FAILURE) from e

    def create_job(self, payload: Any) -> Job:
        """
        Create a job from a request body.

        Raises:
            ValidationError: If company or role is blank or a field is malformed
            StoreError: If the database write fails
        """
        data = parse_payload(JobCreate, payload)
        if not data.company or not data.role:
            raise ValidationError(Messages.COMPANY_ROLE_REQUIRED)

        try:
            job = job_store.create_job(
                company=data.company,
                role=data.role,
                status=data.status or JobStatus.SAVED,
                location=data.location,
                url=data.url,
                salary=data.salary,
                notes=data.notes,
                next_action=data.next_action,
                next_action_at=data.next_action_at,
            )
        except sqlite3.Error as e:
            logger.error(f"Failed to create job: {str(e)}", exc_info=True)
            raise StoreError(Messages.STORE_FAILURE) from e

        logger.info(f"Created job {job.id}: {job.company} / {job.role} [{job.status.value}]")
        return job

    def update_job(self, job_id: str, payload: Any) -> Job:
        """
        Apply a partial update from a request body.

        Only fields present in the body change; present-but-blank fields are cleared.

        Raises:
            ValidationError: If company or role would become blank or a field is malformed
            NotFoundError: If no job has this id
            StoreError: If the database write fails
        """
        changes: Dict[str, Any] = parse_payload(JobUpdate, payload).to_changes()
        if "company" in changes and not changes["company"]:
            raise ValidationError(Messages.COMPANY_EMPTY)
        if "role" in changes and not changes["role"]:
            raise ValidationError(Messages.ROLE_EMPTY)

        try:
            job = job_store.update_job(job_id, changes)
        except sqlite3.Error as e:
            logger.error(f"Failed to update job {job_id}: {str(e)}", exc_info=True)
            raise StoreError(Messages.STORE_FAILURE) from e

        if job is None:
            raise NotFoundError(Messages.JOB_NOT_FOUND.format(job_id=job_id))
        logger.info(f"Updated job {job_id}: {', '.join(sorted(changes)) or 'touch'}")
        return job

    def delete_job(self, job_id: str) -> None:
        """
        Delete a job permanently.

        Raises:
            NotFoundError: If no job has this id
            StoreError: If the database write fails
        """
        try:
            deleted = job_store.delete_job(job_id)
        except sqlite3.Error as e:
            logger.error(f"Failed to delete job {job_id}: {str(e)}", exc_info=True)
            raise StoreError(Messages.STORE_FAILURE) from e

        if not deleted:
            raise NotFoundError(Messages.JOB_NOT_FOUND.format(job_id=job_id))
        logger.info(f"Deleted job {job_id}")


job_service = JobService()
