"""Seed database with example data."""
import argparse

from constants import DEMO_JOBS
from core.logger import logger
from database.db import init_db, clear_database
from database.jobs import create_job, count_jobs
from database.schema import JobStatus


def seed_database(reset: bool = False) -> int:
    """
    Seed database with example jobs.

    Existing data is left alone unless ``reset`` is set.

    Returns:
        Number of jobs created
    """
    init_db()

    if reset:
        logger.info("Reset flag detected: clearing database tables (without dropping)...")
        clear_database()

    if count_jobs() > 0:
        logger.info("Database already contains data. Skipping seed.")
        return 0

    logger.info("Seeding database with example data...")
    for sample in DEMO_JOBS:
        create_job(
            company=sample["company"],
            role=sample["role"],
            status=JobStatus.parse(sample.get("status")) or JobStatus.SAVED,
            notes=sample.get("notes"),
        )
    logger.info(f"Seeded {len(DEMO_JOBS)} example jobs")
    return len(DEMO_JOBS)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the job tracker database with example jobs.")
    parser.add_argument("--reset", action="store_true", help="Clear existing jobs before seeding")
    args = parser.parse_args()
    seed_database(reset=args.reset)
