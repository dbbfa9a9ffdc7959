from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_user_id,
    domain_error,
    fmt_date,
    fmt_time,
    json_body,
    login_required,
    ok,
    server_error,
)
from ..core.exceptions import DomainError
from ..container import Container
from .model import AttendanceRecord


def record_to_json(r: Optional[AttendanceRecord]) -> Optional[dict]:
    if r is None:
        return None
    return {
        "id": r.attendance_id,
        "user_id": r.user_id,
        "user_name": r.employee_name,
        "division": r.division,
        "date": fmt_date(r.work_date),
        "check_in": fmt_time(r.check_in),
        "check_out": fmt_time(r.check_out),
        "status": r.status.value,
        "location_in": r.location_in.as_dict() if r.location_in else None,
        "location_out": r.location_out.as_dict() if r.location_out else None,
        "photo_in": r.photo_in,
        "photo_out": r.photo_out,
        "total_hours": r.total_hours,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        try:
            record = service.get_today(current_user_id())
            return jsonify(record_to_json(record))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("reading today's attendance")

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def attendance_check_in():
        data = json_body()
        try:
            service.check_in(
                current_user_id(),
                location=data.get("location"),
                photo=data.get("photo"),
                reported_status=data.get("status"),
            )
            return ok("Checked in successfully")
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("checking in")

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def attendance_check_out():
        data = json_body()
        try:
            service.check_out(
                current_user_id(),
                location=data.get("location"),
                photo=data.get("photo"),
            )
            return ok("Checked out successfully")
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("checking out")

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            limit = request.args.get("limit", type=int)
            rows = service.get_history(current_user_id(), limit=limit)
            return jsonify([record_to_json(r) for r in rows])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("reading attendance history")

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        try:
            rows = service.list_all()
            return jsonify([record_to_json(r) for r in rows])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("listing attendance")
