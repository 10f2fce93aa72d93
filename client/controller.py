"""Board controller: owns BoardState and applies user intents to it."""

import asyncio
import uuid
from dataclasses import replace
from typing import Any, Dict, List, Optional, Union

from config import settings
from constants import DEMO_JOBS, Messages
from core.logger import logger
from database.schema import JobStatus
from models.job_models import JobRecord
from client.api import ApiError, JobsApiClient
from client.state import (
    ALL_STATUSES,
    BoardState,
    BoardStats,
    Toast,
    ToastKind,
    compute_stats,
    group_by_status,
)


class BoardController:
    """
    Single owner of the board state.

    Every user intent is a method here. Stage moves are optimistic: the local
    list changes first and only the moved job is reverted if the server rejects
    the move. Add, edit and delete wait for the server and then reload, so the
    list only ever shows confirmed state for those.

    Must be used from a running asyncio event loop.
    """

    def __init__(
        self,
        api: JobsApiClient,
        state: Optional[BoardState] = None,
        debounce_seconds: Optional[float] = None,
        toast_limit: Optional[int] = None,
        toast_ttl: Optional[float] = None,
    ):
        self.api = api
        self.state = state or BoardState()
        self.debounce_seconds = (
            debounce_seconds if debounce_seconds is not None else settings.reload_debounce_seconds
        )
        self.toast_limit = toast_limit if toast_limit is not None else settings.toast_limit
        self.toast_ttl = toast_ttl if toast_ttl is not None else settings.toast_ttl_seconds
        self._generation = 0
        self._pending_reload: Optional[asyncio.Task] = None
        self._toast_timers: Dict[str, asyncio.TimerHandle] = {}

    # Derived views

    @property
    def stats(self) -> BoardStats:
        return compute_stats(self.state.jobs)

    @property
    def columns(self) -> Dict[JobStatus, List[JobRecord]]:
        return group_by_status(self.state.jobs)

    # Loading

    async def start(self) -> bool:
        """Initial load, not debounced."""
        return await self.reload()

    async def close(self) -> None:
        """Cancel pending work and timers."""
        if self._pending_reload is not None and not self._pending_reload.done():
            self._pending_reload.cancel()
        for handle in self._toast_timers.values():
            handle.cancel()
        self._toast_timers.clear()

    def set_query(
        self,
        q: Optional[str] = None,
        status: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> asyncio.Task:
        """Update search/filter/sort and schedule a debounced reload."""
        if q is not None:
            self.state.query.q = q
        if status is not None:
            parsed = JobStatus.parse(status)
            self.state.query.status = parsed.value if parsed else ALL_STATUSES
        if sort is not None:
            self.state.query.sort = sort
        return self.schedule_reload()

    def schedule_reload(self) -> asyncio.Task:
        """
        Reload after the debounce delay.

        A newer call cancels the pending one, including its request if it is
        already in flight.
        """
        if self._pending_reload is not None and not self._pending_reload.done():
            self._pending_reload.cancel()
        self._pending_reload = asyncio.get_running_loop().create_task(self._debounced_reload())
        return self._pending_reload

    async def _debounced_reload(self) -> bool:
        await asyncio.sleep(self.debounce_seconds)
        return await self.reload()

    async def reload(self) -> bool:
        """
        Fetch the job list for the current query.

        A response that arrives after a newer reload has started is dropped.

        Returns:
            True if this reload's result was applied
        """
        self._generation += 1
        generation = self._generation
        query = replace(self.state.query)
        self.state.loading = True
        self.state.error_message = ""

        try:
            jobs = await self.api.list_jobs(q=query.q, status=query.status, sort=query.sort)
        except asyncio.CancelledError:
            if generation == self._generation:
                self.state.loading = False
            raise
        except ApiError as e:
            if generation != self._generation:
                return False
            logger.warning(f"Failed to load jobs: {str(e)}")
            self.state.jobs = []
            self.state.error_message = Messages.LOAD_FAILED
            self.state.loading = False
            return False

        if generation != self._generation:
            logger.debug(f"Discarding superseded job list (generation {generation} < {self._generation})")
            return False
        self.state.jobs = jobs
        self.state.loading = False
        return True

    # Stage moves

    def drag_start(self, job_id: str) -> None:
        self.state.drag_id = job_id

    def drag_over(self, column: Union[JobStatus, str]) -> None:
        self.state.over_column = JobStatus.parse(column)

    def drag_leave(self, column: Union[JobStatus, str]) -> None:
        if self.state.over_column == JobStatus.parse(column):
            self.state.over_column = None

    async def drop(self, column: Union[JobStatus, str]) -> bool:
        """Move the dragged job onto ``column`` and clear drag state."""
        job_id = self.state.drag_id
        self.state.drag_id = None
        self.state.over_column = None
        if not job_id:
            return False
        return await self.move_job(job_id, column)

    async def move_job(self, job_id: str, new_status: Union[JobStatus, str]) -> bool:
        """
        Optimistically move a job to another stage.

        Apply locally, then confirm with the server or put the job back in its
        previous stage. Other changes made to the list meanwhile are kept.

        Returns:
            True if the server accepted the move
        """
        status = JobStatus.parse(new_status)
        job = self.state.find_job(job_id)
        if status is None or job is None:
            logger.warning(f"Ignoring move of job {job_id} to {new_status}")
            return False
        if job.status == status:
            return True

        previous_status = job.status
        self.state.jobs = [
            j.model_copy(update={"status": status}) if j.id == job_id else j for j in self.state.jobs
        ]

        try:
            updated = await self.api.update_job(job_id, {"status": status})
        except ApiError as e:
            logger.warning(f"Rolling back move of job {job_id} to {status.value}: {str(e)}")
            self.state.jobs = [
                j.model_copy(update={"status": previous_status}) if j.id == job_id else j
                for j in self.state.jobs
            ]
            self.push_toast(ToastKind.DANGER, "Failed", "Could not move job. Please try again.")
            return False

        self.state.jobs = [updated if j.id == job_id else j for j in self.state.jobs]
        self.push_toast(ToastKind.SUCCESS, "Updated", f"Moved to {status.value}.")
        return True

    # Confirmed mutations

    async def add_job(self, fields: Dict[str, Any]) -> bool:
        """Create a job, then reload. Blank company or role is rejected locally."""
        company = str(fields.get("company") or "").strip()
        role = str(fields.get("role") or "").strip()
        if not company or not role:
            self.push_toast(ToastKind.WARNING, "Missing info", "Please enter company and role.")
            return False

        payload = dict(fields, company=company, role=role)
        return await self._confirm_then_reload(
            self.api.create_job(payload),
            failure="Could not add job. Please try again.",
            success=("Added", "Job added successfully."),
        )

    async def save_edit(self, job_id: str, changes: Dict[str, Any]) -> bool:
        """Send an edit for one job, then reload."""
        return await self._confirm_then_reload(
            self.api.update_job(job_id, changes),
            failure="Could not save changes.",
            success=("Saved", "Job updated."),
        )

    async def delete_job(self, job_id: str) -> bool:
        """Delete one job, then reload."""
        return await self._confirm_then_reload(
            self.api.delete_job(job_id),
            failure="Could not delete job.",
            success=("Deleted", "Job deleted."),
        )

    async def _confirm_then_reload(self, request, failure: str, success: tuple) -> bool:
        self.state.busy = True
        try:
            try:
                await request
            except ApiError as e:
                logger.warning(f"Mutation failed: {str(e)}")
                self.push_toast(ToastKind.DANGER, "Failed", failure)
                return False
            self.push_toast(ToastKind.SUCCESS, *success)
            await self.reload()
            return True
        finally:
            self.state.busy = False

    async def seed_demo(self) -> int:
        """
        Add the sample jobs through the API (disabled in production).

        Returns:
            Number of sample jobs created
        """
        if settings.is_production:
            return 0
        self.state.busy = True
        created = 0
        try:
            for sample in DEMO_JOBS:
                try:
                    await self.api.create_job(sample)
                    created += 1
                except ApiError as e:
                    logger.warning(f"Could not seed {sample['company']}: {str(e)}")
            self.push_toast(ToastKind.INFO, "Seeded", "Added sample jobs for demo.")
            await self.reload()
        finally:
            self.state.busy = False
        return created

    # Notifications

    def push_toast(self, kind: ToastKind, title: str, message: str) -> Toast:
        """Show a notification; newest first, oldest beyond the limit dropped."""
        toast = Toast(id=uuid.uuid4().hex, kind=kind, title=title, message=message)
        toasts = [toast] + self.state.toasts
        for dropped in toasts[self.toast_limit:]:
            self._cancel_toast_timer(dropped.id)
        self.state.toasts = toasts[: self.toast_limit]

        if self.toast_ttl > 0:
            loop = asyncio.get_running_loop()
            self._toast_timers[toast.id] = loop.call_later(self.toast_ttl, self.dismiss_toast, toast.id)
        return toast

    def dismiss_toast(self, toast_id: str) -> None:
        self._cancel_toast_timer(toast_id)
        self.state.toasts = [t for t in self.state.toasts if t.id != toast_id]

    def _cancel_toast_timer(self, toast_id: str) -> None:
        handle = self._toast_timers.pop(toast_id, None)
        if handle is not None:
            handle.cancel()
