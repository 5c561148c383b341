from __future__ import annotations

from functools import wraps
from typing import Iterable, Optional

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError


def error_response(exc: Exception):
    """Translate a domain exception into the JSON error envelope."""
    if isinstance(exc, ValidationError):
        return jsonify({"success": False, "message": str(exc), "errors": exc.errors}), 400
    if isinstance(exc, AuthorizationError):
        return jsonify({"success": False, "message": str(exc), "errors": [str(exc)]}), 403
    if isinstance(exc, NotFoundError):
        return jsonify({"success": False, "message": str(exc), "errors": [str(exc)]}), 404
    if isinstance(exc, DomainError):
        return jsonify({"success": False, "message": str(exc), "errors": [str(exc)]}), 400

    current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"success": False, "message": "Internal server error", "errors": []}), 500


def current_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Login required", "errors": []}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(roles: Iterable[Role]):
    allowed = set(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Login required", "errors": []}), 401
            if current_role() not in allowed:
                return jsonify({"success": False, "message": "Forbidden", "errors": []}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def int_arg(name: str, value=None) -> int:
    raw = request.args.get(name) if value is None else value
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be an integer") from exc
