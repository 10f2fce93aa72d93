"""Command-line board: drives BoardController against a running API."""

import argparse
import asyncio
import sys
from typing import List, Optional

from config import settings
from core.logger import logger, setup_logger
from database.schema import JobStatus
from client.api import JobsApiClient
from client.controller import BoardController
from client.state import ALL_STATUSES


def _print_board(controller: BoardController) -> None:
    """Print columns, toasts and stats."""
    state = controller.state
    if state.error_message:
        print(f"! {state.error_message}")
    for toast in state.toasts:
        print(f"[{toast.kind.value}] {toast.title}: {toast.message}")

    for status, jobs in controller.columns.items():
        print(f"\n{status.value} ({len(jobs)})")
        for job in jobs:
            line = f"  {job.id}  {job.company} - {job.role}"
            if job.next_action:
                line += f"  -> {job.next_action}"
            print(line)

    stats = controller.stats
    print(f"\nTotal: {stats.total}  Interview rate: {stats.interview_rate}%")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Job application tracker board")
    parser.add_argument("--api", default=None, help="API base URL (default: settings.api_base_url)")
    parser.add_argument("--q", default="", help="Free-text search")
    parser.add_argument("--status", default="ALL", help="Filter by status or ALL")
    parser.add_argument("--sort", default="updated_desc", help="Sort key")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("board", help="Show the board (default)")

    add = sub.add_parser("add", help="Add a job")
    add.add_argument("company")
    add.add_argument("role")
    add.add_argument("--job-status", default=JobStatus.SAVED.value)
    add.add_argument("--notes", default=None)

    move = sub.add_parser("move", help="Move a job to another stage")
    move.add_argument("job_id")
    move.add_argument("stage", choices=[s.value for s in JobStatus])

    delete = sub.add_parser("delete", help="Delete a job")
    delete.add_argument("job_id")

    sub.add_parser("seed", help="Add sample jobs (not in production)")
    return parser


async def run(argv: Optional[List[str]] = None) -> int:
    """Run one board command; returns a process exit code."""
    args = build_parser().parse_args(argv)
    async with JobsApiClient(base_url=args.api) as api:
        controller = BoardController(api, toast_ttl=0)
        controller.state.query.q = args.q
        parsed_status = JobStatus.parse(args.status)
        controller.state.query.status = parsed_status.value if parsed_status else ALL_STATUSES
        controller.state.query.sort = args.sort
        await controller.start()

        ok = True
        if args.command == "add":
            ok = await controller.add_job(
                {"company": args.company, "role": args.role, "status": args.job_status, "notes": args.notes}
            )
        elif args.command == "move":
            ok = await controller.move_job(args.job_id, args.stage)
        elif args.command == "delete":
            ok = await controller.delete_job(args.job_id)
        elif args.command == "seed":
            ok = await controller.seed_demo() > 0

        _print_board(controller)
        await controller.close()
    return 0 if ok else 1


def main():
    """Main application function."""
    setup_logger(log_level=settings.log_level)
    logger.info("Starting job tracker board")
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
