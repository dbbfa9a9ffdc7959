from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_user_id, domain_error, login_required, server_error
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    @app.route("/api/dashboard-summary", methods=["GET"], endpoint="dashboard_summary")
    @login_required
    def dashboard_summary():
        try:
            summary = service.user_monthly_summary(current_user_id(), request.args.get("month"))
            return jsonify(summary.as_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("computing dashboard summary")

    @app.route("/api/admin/dashboard-summary", methods=["GET"], endpoint="admin_dashboard_summary")
    @admin_required
    def admin_dashboard_summary():
        try:
            day = request.args.get("date")
            snapshot = service.company_daily_snapshot(parse_iso_date(day) if day else None)
            return jsonify(snapshot.as_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("computing company snapshot")
