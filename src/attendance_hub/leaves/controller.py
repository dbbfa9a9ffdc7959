from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_enum
from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    domain_error,
    fmt_date,
    fmt_datetime,
    json_body,
    login_required,
    ok,
    server_error,
)
from ..container import Container
from ..core.enums import LeaveStatus
from ..core.exceptions import DomainError
from .model import LeaveRequest


def leave_to_json(r: LeaveRequest) -> dict:
    return {
        "id": r.request_id,
        "user_id": r.user_id,
        "user_name": r.employee_name,
        "type": r.leave_type.value,
        "reason": r.reason,
        "proof_file": r.proof_file,
        "start_date": fmt_date(r.start_date),
        "end_date": fmt_date(r.end_date),
        "status": r.status.value,
        "approved_by": r.approved_by,
        "created_at": fmt_datetime(r.created_at),
    }


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    def _optional_date(value):
        return parse_iso_date(value) if value else None

    @app.route("/api/leaves", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        data = json_body()
        try:
            request_id = service.submit(
                user_id=current_user_id(),
                leave_type=data.get("type", ""),
                reason=data.get("reason", ""),
                start_date=_optional_date(data.get("start_date")),
                end_date=_optional_date(data.get("end_date")),
                proof_file=data.get("proof_file"),
            )
            return ok("Leave request submitted successfully", id=request_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("submitting leave request")

    @app.route("/api/leaves", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        try:
            return jsonify([leave_to_json(r) for r in service.list_for_user(current_user_id())])
        except Exception:
            return server_error("listing leave requests")

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def admin_leaves():
        try:
            status = request.args.get("status")
            status = require_enum(status, LeaveStatus, "status") if status else None
            return jsonify([leave_to_json(r) for r in service.list_all(status=status)])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("listing leave requests")

    @app.route("/api/admin/leaves/<int:request_id>/approve", methods=["POST"], endpoint="decide_leave")
    @admin_required
    def decide_leave(request_id: int):
        data = json_body()
        try:
            decision = service.decide(
                current_role=current_role(),
                approver_id=current_user_id(),
                request_id=request_id,
                status=data.get("status", ""),
            )
            return ok(f"Leave request {decision.value}")
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("deciding leave request")
