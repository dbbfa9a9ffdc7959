from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, fmt_datetime, login_required, ok, server_error
from ..container import Container
from .model import Notification


def notification_to_json(n: Notification) -> dict:
    return {
        "id": n.notification_id,
        "user_id": n.user_id,
        "title": n.title,
        "message": n.message,
        "is_read": n.is_read,
        "created_at": fmt_datetime(n.created_at),
    }


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.route("/api/user-alerts", methods=["GET"], endpoint="user_alerts")
    @login_required
    def user_alerts():
        try:
            return jsonify([notification_to_json(n) for n in service.list_recent(current_user_id())])
        except Exception:
            return server_error("listing notifications")

    @app.route("/api/user-alerts/read-all", methods=["POST"], endpoint="user_alerts_read_all")
    @login_required
    def user_alerts_read_all():
        try:
            updated = service.mark_all_read(current_user_id())
            return ok("All notifications marked as read", updated=updated)
        except Exception:
            return server_error("marking notifications as read")

    @app.route("/api/user-alerts/<int:notification_id>/read", methods=["POST"], endpoint="user_alert_read")
    @login_required
    def user_alert_read(notification_id: int):
        try:
            updated = service.mark_read(current_user_id(), notification_id)
            return ok("Notification marked as read", updated=updated)
        except Exception:
            return server_error("marking notification as read")
