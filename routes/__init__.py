"""Flask route registration."""

from routes.jobs import register_jobs
from routes.health import register_health
from routes.errors import register_error_handlers


def register_all_routes(app):
    """Register all route modules on the Flask app."""
    register_jobs(app)
    register_health(app)
    register_error_handlers(app)
