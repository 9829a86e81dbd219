"""JSON helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional

from flask import Flask, jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    NotFound,
    PermissionDenied,
    StorageError,
    ValidationError,
)
from ..identity.model import Subject

logger = logging.getLogger(__name__)

SESSION_KEY = "subject"

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (PermissionDenied, 403),
    (NotFound, 404),
    (StorageError, 503),
)


def error_status(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def ok(data: Any = None, *, status: int = 200, message: Optional[str] = None):
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def fail(exc: DomainError):
    return jsonify({"success": False, "message": str(exc)}), error_status(exc)


def respond(result, *, serialize: Callable[[Any], Any] = lambda v: v, status: int = 200):
    """Turn an Ok/Err result into a JSON response."""
    if not result.ok:
        return fail(result.error)
    value = result.value
    return ok(None if value is None else serialize(value), status=status)


def current_subject() -> Subject:
    return Subject.from_session(session.get(SESSION_KEY))


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_subject().authenticated:
            return jsonify({"success": False, "message": "Vui lòng đăng nhập để tiếp tục!"}), 401
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return fail(exc)

    @app.errorhandler(404)
    def _not_found(_exc):
        return jsonify({"success": False, "message": "Không tìm thấy"}), 404

    @app.errorhandler(500)
    def _server_error(exc):
        logger.exception("Unhandled error: %s", exc)
        return jsonify({"success": False, "message": "Lỗi hệ thống"}), 500
