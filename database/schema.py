"""Database schema: enums and model classes."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class JobStatus(str, Enum):
    """Pipeline stages, in board column order."""

    SAVED = "SAVED"
    APPLIED = "APPLIED"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: Any) -> Optional["JobStatus"]:
        """Return the matching status (case-insensitive) or None if unrecognised."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        normalized = str(value).strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            return None


class Job:
    """Job application model."""

    def __init__(
        self,
        id: str = "",
        company: str = "",
        role: str = "",
        status: JobStatus = JobStatus.SAVED,
        location: Optional[str] = None,
        url: Optional[str] = None,
        salary: Optional[str] = None,
        notes: Optional[str] = None,
        next_action: Optional[str] = None,
        next_action_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.company = company
        self.role = role
        self.status = status if isinstance(status, JobStatus) else JobStatus(status)
        self.location = location
        self.url = url
        self.salary = salary
        self.notes = notes
        self.next_action = next_action
        self.next_action_at = next_action_at
        self.created_at = created_at
        self.updated_at = updated_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary served by the API."""
        return {
            "id": self.id,
            "company": self.company,
            "role": self.role,
            "status": self.status.value,
            "location": self.location,
            "url": self.url,
            "salary": self.salary,
            "notes": self.notes,
            "nextAction": self.next_action,
            "nextActionAt": self.next_action_at.isoformat() if self.next_action_at else None,
            "createdAt": self.created_at.isoformat(timespec="microseconds") if self.created_at else None,
            "updatedAt": self.updated_at.isoformat(timespec="microseconds") if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"Job(id={self.id!r}, company={self.company!r}, role={self.role!r}, status={self.status.value})"
