from __future__ import annotations

from functools import wraps

from flask import jsonify, request

from ..core.enums import Role


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def login_required(container):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if container.session.current_user is None:
                return json_error("Please log in to continue.", 401)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def role_required(container, *roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = container.session.current_user
            if user is None:
                return json_error("Please log in to continue.", 401)
            if user.role not in roles:
                return json_error("You do not have permission for this action.", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
