"""Tests for the board controller (optimistic moves, debounce, toasts)."""

import asyncio
import json
import uuid
from datetime import datetime, timezone

import httpx
import pytest

from client.api import JobsApiClient
from client.controller import BoardController
from client.state import ToastKind
from config.settings import settings
from database.schema import JobStatus


class FakeJobsServer:
    """In-memory stand-in for the /api/jobs endpoints."""

    def __init__(self):
        self.jobs = {}
        self.requests = []
        self.fail = set()  # HTTP methods that should answer 500
        self.patch_gate = None  # asyncio.Event holding PATCH responses back

    def add(self, company, role="Engineer", status="SAVED"):
        now = datetime.now(timezone.utc).isoformat()
        job = {
            "id": uuid.uuid4().hex,
            "company": company,
            "role": role,
            "status": status,
            "notes": None,
            "createdAt": now,
            "updatedAt": now,
        }
        self.jobs[job["id"]] = job
        return job

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method in self.fail:
            return httpx.Response(500, json={"error": "boom"})

        parts = request.url.path.strip("/").split("/")
        job_id = parts[2] if len(parts) > 2 else None

        if request.method == "GET":
            q = request.url.params.get("q", "").lower()
            status = request.url.params.get("status")
            jobs = [
                j
                for j in self.jobs.values()
                if (not q or q in j["company"].lower()) and (not status or j["status"] == status)
            ]
            return httpx.Response(200, json={"jobs": jobs})

        if request.method == "POST":
            body = json.loads(request.content)
            job = self.add(body["company"], body["role"], body.get("status") or "SAVED")
            return httpx.Response(201, json={"job": job})

        if job_id not in self.jobs:
            return httpx.Response(404, json={"error": "Job not found"})

        if request.method == "PATCH":
            if self.patch_gate is not None:
                await self.patch_gate.wait()
                if "PATCH_AFTER_GATE" in self.fail:
                    return httpx.Response(500, json={"error": "boom"})
            body = json.loads(request.content)
            self.jobs[job_id].update(body)
            self.jobs[job_id]["updatedAt"] = datetime.now(timezone.utc).isoformat()
            return httpx.Response(200, json={"job": self.jobs[job_id]})

        if request.method == "DELETE":
            del self.jobs[job_id]
            return httpx.Response(200, json={"ok": True})

        return httpx.Response(405)

    def count(self, method):
        return sum(1 for r in self.requests if r.method == method)


def make_controller(server, **kwargs):
    api = JobsApiClient(base_url="http://tracker.test", transport=httpx.MockTransport(server.handler))
    kwargs.setdefault("toast_ttl", 0)
    kwargs.setdefault("debounce_seconds", 0.01)
    return BoardController(api, **kwargs)


@pytest.mark.asyncio
async def test_start_loads_jobs():
    server = FakeJobsServer()
    server.add("Acme")
    controller = make_controller(server)

    assert await controller.start() is True

    assert [job.company for job in controller.state.jobs] == ["Acme"]
    assert controller.state.loading is False
    await controller.close()


@pytest.mark.asyncio
async def test_failed_load_empties_list_and_sets_error():
    server = FakeJobsServer()
    server.add("Acme")
    controller = make_controller(server)
    await controller.start()

    server.fail.add("GET")
    assert await controller.reload() is False

    assert controller.state.jobs == []
    assert controller.state.error_message
    assert controller.state.loading is False
    await controller.close()


@pytest.mark.asyncio
async def test_optimistic_move_applies_immediately_and_commits():
    server = FakeJobsServer()
    job = server.add("Acme", status="SAVED")
    server.patch_gate = asyncio.Event()
    controller = make_controller(server)
    await controller.start()

    move = asyncio.create_task(controller.move_job(job["id"], JobStatus.APPLIED))
    await asyncio.sleep(0.01)
    assert controller.state.find_job(job["id"]).status == JobStatus.APPLIED

    server.patch_gate.set()
    assert await move is True
    assert controller.state.find_job(job["id"]).status == JobStatus.APPLIED
    assert controller.state.toasts[0].kind == ToastKind.SUCCESS
    assert controller.state.toasts[0].message == "Moved to APPLIED."
    await controller.close()


@pytest.mark.asyncio
async def test_optimistic_move_rolls_back_on_failure():
    server = FakeJobsServer()
    job = server.add("Acme", status="SAVED")
    server.patch_gate = asyncio.Event()
    server.fail.add("PATCH_AFTER_GATE")
    controller = make_controller(server)
    await controller.start()

    move = asyncio.create_task(controller.move_job(job["id"], "APPLIED"))
    await asyncio.sleep(0.01)
    assert controller.state.find_job(job["id"]).status == JobStatus.APPLIED

    server.patch_gate.set()
    assert await move is False
    assert controller.state.find_job(job["id"]).status == JobStatus.SAVED
    assert controller.state.toasts[0].kind == ToastKind.DANGER
    await controller.close()


@pytest.mark.asyncio
async def test_failed_move_keeps_changes_confirmed_meanwhile():
    server = FakeJobsServer()
    moved = server.add("Acme", status="SAVED")
    other = server.add("Beta", status="OFFER")
    server.patch_gate = asyncio.Event()
    server.fail.add("PATCH_AFTER_GATE")
    controller = make_controller(server)
    await controller.start()

    move = asyncio.create_task(controller.move_job(moved["id"], JobStatus.APPLIED))
    await asyncio.sleep(0.01)
    assert await controller.delete_job(other["id"]) is True

    server.patch_gate.set()
    assert await move is False

    assert [j.id for j in controller.state.jobs] == [moved["id"]]
    assert controller.state.find_job(moved["id"]).status == JobStatus.SAVED
    await controller.close()


@pytest.mark.asyncio
async def test_move_rolls_back_on_network_error():
    server = FakeJobsServer()
    job = server.add("Acme", status="SAVED")
    controller = make_controller(server)
    await controller.start()

    async def offline(request):
        raise httpx.ConnectError("connection refused", request=request)

    controller.api = JobsApiClient(base_url="http://tracker.test", transport=httpx.MockTransport(offline))
    assert await controller.move_job(job["id"], JobStatus.OFFER) is False
    assert controller.state.find_job(job["id"]).status == JobStatus.SAVED
    assert controller.state.toasts[0].kind == ToastKind.DANGER
    await controller.close()


@pytest.mark.asyncio
async def test_drop_onto_same_column_sends_nothing():
    server = FakeJobsServer()
    job = server.add("Acme", status="INTERVIEW")
    controller = make_controller(server)
    await controller.start()

    controller.drag_start(job["id"])
    controller.drag_over("INTERVIEW")
    assert controller.state.over_column == JobStatus.INTERVIEW
    assert await controller.drop(JobStatus.INTERVIEW) is True

    assert server.count("PATCH") == 0
    assert controller.state.drag_id is None
    assert controller.state.over_column is None
    await controller.close()


@pytest.mark.asyncio
async def test_drop_without_drag_is_ignored():
    controller = make_controller(FakeJobsServer())
    assert await controller.drop(JobStatus.OFFER) is False
    await controller.close()


@pytest.mark.asyncio
async def test_drag_and_drop_moves_job():
    server = FakeJobsServer()
    job = server.add("Acme", status="SAVED")
    controller = make_controller(server)
    await controller.start()

    controller.drag_start(job["id"])
    controller.drag_over(JobStatus.OFFER)
    controller.drag_leave(JobStatus.OFFER)
    assert controller.state.over_column is None

    assert await controller.drop(JobStatus.OFFER) is True
    assert server.jobs[job["id"]]["status"] == "OFFER"
    assert controller.columns[JobStatus.OFFER][0].id == job["id"]
    await controller.close()


@pytest.mark.asyncio
async def test_query_changes_are_debounced():
    server = FakeJobsServer()
    server.add("Acme")
    server.add("Beta")
    controller = make_controller(server)

    controller.set_query(q="a")
    controller.set_query(q="ac")
    last = controller.set_query(q="acm", status="all", sort="company_asc")
    assert await last is True

    gets = [r for r in server.requests if r.method == "GET"]
    assert len(gets) == 1
    assert gets[0].url.params["q"] == "acm"
    assert gets[0].url.params["sort"] == "company_asc"
    assert "status" not in gets[0].url.params
    assert [job.company for job in controller.state.jobs] == ["Acme"]
    await controller.close()


@pytest.mark.asyncio
async def test_stale_reload_response_is_discarded():
    server = FakeJobsServer()
    release = asyncio.Event()

    async def handler(request):
        company = request.url.params.get("q")
        if company == "old":
            await release.wait()
        return httpx.Response(
            200,
            json={"jobs": [dict(server.add(company.title()))]},
        )

    api = JobsApiClient(base_url="http://tracker.test", transport=httpx.MockTransport(handler))
    controller = BoardController(api, toast_ttl=0, debounce_seconds=0)

    controller.state.query.q = "old"
    first = asyncio.create_task(controller.reload())
    await asyncio.sleep(0.01)

    controller.state.query.q = "new"
    assert await controller.reload() is True

    release.set()
    assert await first is False
    assert [job.company for job in controller.state.jobs] == ["New"]
    await controller.close()


@pytest.mark.asyncio
async def test_add_job_confirms_then_reloads():
    server = FakeJobsServer()
    controller = make_controller(server)
    await controller.start()

    assert await controller.add_job({"company": " Acme ", "role": "Engineer", "notes": None}) is True

    assert [job.company for job in controller.state.jobs] == ["Acme"]
    assert controller.state.busy is False
    assert controller.state.toasts[0].title == "Added"
    assert server.count("GET") == 2
    await controller.close()


@pytest.mark.asyncio
async def test_add_job_missing_fields_never_calls_api():
    server = FakeJobsServer()
    controller = make_controller(server)

    assert await controller.add_job({"company": "Acme", "role": "  "}) is False

    assert server.requests == []
    assert controller.state.toasts[0].kind == ToastKind.WARNING
    await controller.close()


@pytest.mark.asyncio
async def test_failed_mutation_keeps_list_and_skips_reload():
    server = FakeJobsServer()
    job = server.add("Acme")
    controller = make_controller(server)
    await controller.start()
    server.fail.add("DELETE")

    assert await controller.delete_job(job["id"]) is False

    assert [j.id for j in controller.state.jobs] == [job["id"]]
    assert controller.state.busy is False
    assert controller.state.toasts[0].kind == ToastKind.DANGER
    assert server.count("GET") == 1
    await controller.close()


@pytest.mark.asyncio
async def test_save_edit_and_delete():
    server = FakeJobsServer()
    job = server.add("Acme")
    controller = make_controller(server)
    await controller.start()

    assert await controller.save_edit(job["id"], {"role": "Staff Engineer"}) is True
    assert controller.state.find_job(job["id"]).role == "Staff Engineer"

    assert await controller.delete_job(job["id"]) is True
    assert controller.state.jobs == []
    assert [t.title for t in controller.state.toasts[:2]] == ["Deleted", "Saved"]
    await controller.close()


@pytest.mark.asyncio
async def test_seed_demo_posts_samples():
    server = FakeJobsServer()
    controller = make_controller(server)

    assert await controller.seed_demo() == 3

    assert len(controller.state.jobs) == 3
    assert controller.state.toasts[0].kind == ToastKind.INFO
    await controller.close()


@pytest.mark.asyncio
async def test_seed_demo_disabled_in_production(monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")
    server = FakeJobsServer()
    controller = make_controller(server)

    assert await controller.seed_demo() == 0
    assert server.requests == []
    await controller.close()


@pytest.mark.asyncio
async def test_toasts_are_capped_newest_first():
    controller = make_controller(FakeJobsServer(), toast_limit=4)
    for i in range(6):
        controller.push_toast(ToastKind.INFO, "t", str(i))
    assert [t.message for t in controller.state.toasts] == ["5", "4", "3", "2"]
    await controller.close()


@pytest.mark.asyncio
async def test_toasts_auto_dismiss_and_manual_dismiss():
    controller = make_controller(FakeJobsServer(), toast_ttl=0.02)
    keep = controller.push_toast(ToastKind.SUCCESS, "a", "auto")
    gone = controller.push_toast(ToastKind.SUCCESS, "b", "manual")

    controller.dismiss_toast(gone.id)
    assert [t.id for t in controller.state.toasts] == [keep.id]

    await asyncio.sleep(0.05)
    assert controller.state.toasts == []
    await controller.close()


@pytest.mark.asyncio
async def test_stats_follow_current_list():
    server = FakeJobsServer()
    server.add("A", status="APPLIED")
    server.add("B", status="APPLIED")
    server.add("C", status="INTERVIEW")
    controller = make_controller(server)
    await controller.start()

    assert controller.stats.interview_rate == 50
    assert controller.stats.counts[JobStatus.APPLIED] == 2
    await controller.close()


@pytest.mark.asyncio
async def test_cancelled_reload_clears_loading():
    server = FakeJobsServer()
    never = asyncio.Event()

    async def handler(request):
        if request.url.params.get("q") == "slow":
            await never.wait()
        return await server.handler(request)

    api = JobsApiClient(base_url="http://tracker.test", transport=httpx.MockTransport(handler))
    controller = BoardController(api, toast_ttl=0, debounce_seconds=0)
    await controller.start()

    pending = controller.set_query(q="slow")
    await asyncio.sleep(0.01)
    assert controller.state.loading is True

    await controller.close()
    with pytest.raises(asyncio.CancelledError):
        await pending
    assert controller.state.loading is False
