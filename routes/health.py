"""Health check route."""

import sqlite3

from flask import jsonify

from core.logger import logger
from database.db import get_db


def register_health(app):
    """Register health check route."""

    @app.route("/health")
    def health():
        """Report whether the jobs table is reachable."""
        try:
            db = get_db()
            try:
                db.execute("SELECT 1 FROM jobs LIMIT 1").fetchone()
            finally:
                db.close()
            return jsonify({"status": "healthy", "service": "job-tracker"}), 200
        except sqlite3.Error as e:
            logger.error(f"Health check failed: {str(e)}")
            return jsonify({"status": "unhealthy", "error": str(e)}), 503
