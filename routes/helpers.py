"""Shared helpers for routes."""

from typing import Any

from flask import jsonify, request


def get_json_body() -> Any:
    """Decoded JSON request body, or None if the body is missing or not valid JSON."""
    return request.get_json(force=True, silent=True)


def error_response(message: str, status_code: int):
    """JSON error body with the given HTTP status."""
    return jsonify({"error": message}), status_code
