# -*- coding: utf-8 -*-
from functools import wraps
from flask import jsonify, request
from flask_login import current_user

from .settlement import ValidationError
from .settlement.errors import INVALID_RECORD

def _deny(status: int, error: str):
    return jsonify({"ok": False, "error": error}), status

def roles_required(*roles):
    """
    Not logged in -> 401 JSON.
    Role not in the list -> 403 JSON.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return _deny(401, "unauthorized")
            if current_user.role not in roles:
                return _deny(403, "forbidden")
            return f(*args, **kwargs)
        return wrapper
    return decorator

def position_required(*positions):
    """Workers with one of ``positions``; station admins always pass."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return _deny(401, "unauthorized")
            if current_user.role != "admin" and current_user.position not in positions:
                return _deny(403, "forbidden")
            return f(*args, **kwargs)
        return wrapper
    return decorator

def json_object() -> dict:
    """Request body as a dict. Missing or unparseable -> {}; any other JSON value -> 400."""
    try:
        payload = request.get_json(force=True)
    except Exception:
        return {}
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError.single("body", INVALID_RECORD, "request body must be a JSON object")
    return payload
