"""JSON helpers shared by the API controllers."""

from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from ..employees.model import User

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidStateError, 409),
)


def ok(status: int = 200, **payload: Any):
    return jsonify({"success": True, **payload}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def json_endpoint(view):
    """Turn domain errors into ``{"success": false}`` responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return fail(str(e), status_for(e))
        except Exception as e:
            current_app.logger.exception("Unhandled error in %s", request.endpoint)
            return fail(f"Internal server error: {e}", 500)

    return wrapper


def session_user() -> Optional[User]:
    if "user_id" not in session:
        return None
    try:
        return User(
            user_id=int(session["user_id"]),
            full_name=str(session.get("name") or ""),
            role=Role(session.get("role")),
        )
    except ValueError:
        return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if session_user() is None:
            return fail("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def body() -> dict:
    return request.get_json(silent=True) or {}
