from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..auth.identity import Identity
from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.enums import Role
from ..core.exceptions import (
    AlreadyCheckedOutError,
    AuthenticationError,
    DomainError,
    DuplicateCheckInError,
    DuplicateShiftNameError,
    NoOpenCheckInError,
    NotFoundError,
    PersistenceError,
    UnauthorizedError,
    ValidationError,
)
from ..core.logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (UnauthorizedError, 403),
    (NotFoundError, 404),
    (DuplicateShiftNameError, 409),
    (DuplicateCheckInError, 409),
    (NoOpenCheckInError, 409),
    (AlreadyCheckedOutError, 409),
    (ValidationError, 400),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def error_body(kind: str, message: str) -> dict:
    return {"success": False, "error": kind, "message": message}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        logger.warning("%s %s rejected: %s: %s", request.method, request.path, type(e).__name__, e)
        return jsonify(error_body(type(e).__name__, str(e))), status_for(e)

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(e: PersistenceError):
        logger.error("%s %s storage failure: %s", request.method, request.path, e)
        return jsonify(error_body("PersistenceError", "Storage is unavailable, please retry later")), 503

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("%s %s failed", request.method, request.path)
        return jsonify(error_body("InternalError", "Unexpected server error")), 500


def current_identity() -> Optional[Identity]:
    if "employee_id" not in session:
        return None
    return Identity(employee_id=int(session["employee_id"]), role=Role(session.get("role", Role.EMPLOYEE.value)))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_identity() is None:
            return jsonify(error_body("AuthenticationError", "Unauthorized")), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        identity = current_identity()
        if identity is None:
            return jsonify(error_body("AuthenticationError", "Unauthorized")), 401
        if not identity.is_admin:
            return jsonify(error_body("UnauthorizedError", "Forbidden")), 403
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("JSON object expected")
    return data


def arg_date(name: str):
    value = request.args.get(name)
    return parse_iso_date(value) if value else None


def arg_int(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def body_datetime(data: dict, key: str):
    value: Any = data.get(key)
    if not value:
        return None
    return parse_iso_datetime(str(value))


def ok(payload: Any, status: int = 200):
    return jsonify(payload), status
