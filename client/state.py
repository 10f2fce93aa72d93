"""Board state held by the client controller, plus pure derived views."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from constants import SortKeys
from database.schema import JobStatus
from models.job_models import JobRecord

ALL_STATUSES = "ALL"


class ToastKind(str, Enum):
    """Notification styles."""

    SUCCESS = "success"
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Toast:
    """A transient user-visible notification."""

    id: str
    kind: ToastKind
    title: str
    message: str


@dataclass
class BoardQuery:
    """Active search, filter and sort parameters."""

    q: str = ""
    status: str = ALL_STATUSES
    sort: str = SortKeys.DEFAULT


@dataclass
class BoardStats:
    """Counts per stage and the interview rate."""

    counts: Dict[JobStatus, int]
    total: int
    interview_rate: int


@dataclass
class BoardState:
    """Everything the board renders from."""

    jobs: List[JobRecord] = field(default_factory=list)
    query: BoardQuery = field(default_factory=BoardQuery)
    loading: bool = True
    busy: bool = False
    error_message: str = ""
    toasts: List[Toast] = field(default_factory=list)
    drag_id: Optional[str] = None
    over_column: Optional[JobStatus] = None

    def find_job(self, job_id: str) -> Optional[JobRecord]:
        return next((job for job in self.jobs if job.id == job_id), None)


def interview_rate(applied: int, interview: int) -> int:
    """Interviews per application as a whole percentage, rounding halves up; 0 with no applications."""
    if applied <= 0:
        return 0
    return int(math.floor(interview / applied * 100 + 0.5))


def compute_stats(jobs: Iterable[JobRecord]) -> BoardStats:
    """Recompute stage counts and interview rate from the job list."""
    counts = {status: 0 for status in JobStatus}
    total = 0
    for job in jobs:
        counts[job.status] += 1
        total += 1
    return BoardStats(
        counts=counts,
        total=total,
        interview_rate=interview_rate(counts[JobStatus.APPLIED], counts[JobStatus.INTERVIEW]),
    )


def group_by_status(jobs: Iterable[JobRecord]) -> Dict[JobStatus, List[JobRecord]]:
    """Bucket jobs into board columns, preserving list order within each column."""
    columns: Dict[JobStatus, List[JobRecord]] = {status: [] for status in JobStatus}
    for job in jobs:
        columns[job.status].append(job)
    return columns
