from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import ValidationError


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def current_user_id() -> Optional[int]:
    user_id = session.get("user_id")
    return int(user_id) if user_id is not None else None


def current_role() -> Optional[Role]:
    role = session.get("role")
    try:
        return Role(role) if role else None
    except ValueError:
        return None


def is_admin() -> bool:
    return current_role() == Role.ADMIN


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Authentication required", 401)
        if not is_admin():
            return json_error("Insufficient permissions", 403)
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
