"""Job list and mutation routes."""

from flask import jsonify, request

from routes.helpers import get_json_body
from services.job_service import job_service


def register_jobs(app):
    """Register job API routes."""

    @app.route("/api/jobs", methods=["GET"])
    def list_jobs():
        """List jobs filtered by ?q=, ?status= and ordered by ?sort=."""
        jobs = job_service.list_jobs(
            q=request.args.get("q"),
            status=request.args.get("status"),
            sort=request.args.get("sort"),
        )
        return jsonify({"jobs": [job.to_dict() for job in jobs]})

    @app.route("/api/jobs", methods=["POST"])
    def create_job():
        """Create a job."""
        job = job_service.create_job(get_json_body())
        return jsonify({"job": job.to_dict()}), 201

    @app.route("/api/jobs/<job_id>", methods=["PATCH"])
    def update_job(job_id):
        """Partially update a job."""
        job = job_service.update_job(job_id, get_json_body())
        return jsonify({"job": job.to_dict()})

    @app.route("/api/jobs/<job_id>", methods=["DELETE"])
    def delete_job(job_id):
        """Delete a job."""
        job_service.delete_job(job_id)
        return jsonify({"ok": True})
