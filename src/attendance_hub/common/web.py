from __future__ import annotations

import logging
from datetime import date, datetime, time
from functools import wraps
from typing import Any

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Authentication required"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"message": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def domain_error(e: DomainError):
    return jsonify({"message": str(e), "error": type(e).__name__}), e.http_status


def server_error(action: str):
    logger.exception("unexpected error while %s", action)
    if current_app.config.get("DEBUG"):
        return jsonify({"message": f"Internal error while {action}"}), 500
    return jsonify({"message": "Internal server error"}), 500


def fmt_date(value: date | None) -> str | None:
    return value.strftime("%Y-%m-%d") if value else None


def fmt_time(value: time | None) -> str | None:
    return value.strftime("%H:%M:%S") if value else None


def fmt_datetime(value: datetime | None) -> str | None:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else None


def ok(message: str, **extra: Any):
    return jsonify({"message": message, **extra}), 200
