"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path
import tempfile
import sys

# Ensure project root is on path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(scope="session", autouse=True)
def use_test_database():
    """Use a temporary database file for the whole test session (before app is imported)."""
    tmp_dir = Path(tempfile.mkdtemp(prefix="job_tracker_test_"))
    test_db_path = tmp_dir / "data" / "job_tracker.db"

    from config.settings import settings
    from database.db import init_db

    original_path = settings.database_path
    settings.database_path = test_db_path
    init_db()

    yield test_db_path

    settings.database_path = original_path


@pytest.fixture(autouse=True)
def empty_jobs_table():
    """Start every test with an empty jobs table."""
    from database.db import clear_database

    clear_database()


@pytest.fixture(scope="session")
def app():
    """Flask application with TESTING enabled (import after DB patch)."""
    from app import app as flask_app

    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
