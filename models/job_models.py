"""Pydantic models for job payloads and records."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from database.schema import JobStatus


def _clean_text(value: Any) -> Optional[str]:
    """Trim a scalar to text; None and blank strings become None."""
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ValueError("must be a string")
    text = str(value).strip()
    return text or None


class _JobFields(BaseModel):
    """Fields shared by create and update payloads (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    status: Optional[JobStatus] = Field(None, description="Pipeline stage; unrecognised values are dropped")
    location: Optional[str] = Field(None, description="Job location")
    url: Optional[str] = Field(None, description="Link to the job posting")
    salary: Optional[str] = Field(None, description="Salary as free text")
    notes: Optional[str] = Field(None, description="Free-form notes")
    next_action: Optional[str] = Field(None, description="Next follow-up action")
    next_action_at: Optional[datetime] = Field(None, description="When the next action is due")

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> Optional[JobStatus]:
        return JobStatus.parse(value)

    @field_validator("location", "url", "salary", "notes", "next_action", mode="before")
    @classmethod
    def _trim_optional(cls, value: Any) -> Optional[str]:
        return _clean_text(value)

    @field_validator("next_action_at", mode="before")
    @classmethod
    def _blank_datetime(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value


class JobCreate(_JobFields):
    """Payload for creating a job. Company and role are checked by the service."""

    company: str = Field("", description="Company name (required)")
    role: str = Field("", description="Role title (required)")

    @field_validator("company", "role", mode="before")
    @classmethod
    def _trim_required(cls, value: Any) -> str:
        return _clean_text(value) or ""


class JobUpdate(_JobFields):
    """
    Payload for a partial update.

    Presence matters: a field left out of the request is not in
    ``model_fields_set`` and stays untouched, while a field sent as null or
    blank is present with value None and clears the stored value.
    """

    company: Optional[str] = Field(None, description="Company name")
    role: Optional[str] = Field(None, description="Role title")

    @field_validator("company", "role", mode="before")
    @classmethod
    def _trim_required(cls, value: Any) -> str:
        return _clean_text(value) or ""

    def to_changes(self) -> Dict[str, Any]:
        """
        Mapping of field name to new value for the fields present in the request.

        An unrecognised status is dropped rather than clearing the column.
        """
        changes = {name: getattr(self, name) for name in self.model_fields_set}
        if changes.get("status", JobStatus.SAVED) is None:
            del changes["status"]
        return changes


class JobRecord(BaseModel):
    """A job as returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    company: str
    role: str
    status: JobStatus = JobStatus.SAVED
    location: Optional[str] = None
    url: Optional[str] = None
    salary: Optional[str] = None
    notes: Optional[str] = None
    next_action: Optional[str] = None
    next_action_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
