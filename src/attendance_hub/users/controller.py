from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import current_user_id, domain_error, fmt_date, json_body, login_required, ok, server_error
from ..container import Container
from ..core.exceptions import DomainError
from .model import User
from .service import format_employee_code


def user_to_json(u: User) -> dict:
    return {
        "id": u.user_id,
        "employee_code": format_employee_code(u.user_id),
        "name": u.name,
        "email": u.email,
        "role": u.role.value,
        "job_title": u.job_title,
        "division": u.division,
        "phone": u.phone,
        "join_date": fmt_date(u.join_date),
        "status": u.status.value,
    }


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        try:
            s_user = auth.authenticate(data.get("employeeId", ""), data.get("password", ""))
            session.clear()
            session["user_id"] = s_user.user_id
            session["name"] = s_user.name
            session["role"] = s_user.role.value

            profile = auth.get_profile(s_user.user_id)
            return jsonify({"user": user_to_json(profile)})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("logging in")

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        session.clear()
        return ok("Logged out")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        try:
            return jsonify(user_to_json(auth.get_profile(current_user_id())))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("reading profile")
