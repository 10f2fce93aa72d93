"""Client-side board state and API access."""
from client.api import ApiError, JobsApiClient
from client.controller import BoardController
from client.state import (
    ALL_STATUSES, BoardQuery, BoardState, BoardStats, Toast, ToastKind,
    compute_stats, group_by_status, interview_rate
)

__all__ = [
    "ApiError", "JobsApiClient", "BoardController",
    "ALL_STATUSES", "BoardQuery", "BoardState", "BoardStats", "Toast", "ToastKind",
    "compute_stats", "group_by_status", "interview_rate",
]
