"""Async HTTP client for the job tracker API."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from config import settings
from constants import SortKeys
from core.logger import logger
from models.job_models import JobRecord


class ApiError(Exception):
    """A request to the API failed or returned a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _encode(fields: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-ready copy of a payload: enums by value, datetimes as ISO strings."""
    encoded = {}
    for key, value in fields.items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, datetime):
            value = value.isoformat()
        encoded[key] = value
    return encoded


class JobsApiClient:
    """Thin wrapper over httpx.AsyncClient for the /api/jobs endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: API root, defaults to settings.api_base_url
            timeout: Per-request timeout in seconds, defaults to settings.request_timeout
            transport: Optional httpx transport (tests pass an httpx.MockTransport)
        """
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "JobsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {str(e)}")
            raise ApiError(f"Request failed: {str(e)}") from e

        if response.is_error:
            message = response.reason_phrase or "Request failed"
            try:
                message = response.json().get("error") or message
            except (ValueError, AttributeError):
                pass
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Invalid JSON in response", status_code=response.status_code) from e

    async def list_jobs(
        self, q: str = "", status: Optional[str] = None, sort: str = SortKeys.DEFAULT
    ) -> List[JobRecord]:
        """Fetch jobs matching the query; status None or "ALL" means no filter."""
        params = {"sort": sort}
        if q.strip():
            params["q"] = q.strip()
        if status and status.upper() != "ALL":
            params["status"] = status
        data = await self._request("GET", "/api/jobs", params=params)
        try:
            return [JobRecord.model_validate(item) for item in data.get("jobs") or []]
        except PydanticValidationError as e:
            raise ApiError(f"Malformed job list: {str(e)}") from e

    async def create_job(self, fields: Dict[str, Any]) -> JobRecord:
        """Create a job and return the stored record."""
        data = await self._request("POST", "/api/jobs", json=_encode(fields))
        return self._job_from(data)

    async def update_job(self, job_id: str, changes: Dict[str, Any]) -> JobRecord:
        """Send a partial update; only the keys in ``changes`` are touched."""
        data = await self._request("PATCH", f"/api/jobs/{job_id}", json=_encode(changes))
        return self._job_from(data)

    async def delete_job(self, job_id: str) -> None:
        """Delete a job."""
        await self._request("DELETE", f"/api/jobs/{job_id}")

    @staticmethod
    def _job_from(data: Dict[str, Any]) -> JobRecord:
        try:
            return JobRecord.model_validate(data.get("job"))
        except PydanticValidationError as e:
            raise ApiError(f"Malformed job: {str(e)}") from e
