from __future__ import annotations

from flask import Flask, session

from ..common.http import current_identity, json_body, ok
from ..container import Container
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/signup", methods=["POST"], endpoint="auth_signup")
    def signup():
        data = json_body()
        employee = container.employee_service.signup(
            full_name=data.get("full_name") or data.get("fullName", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            position=data.get("position", ""),
            department=data.get("department", ""),
            phone=data.get("phone", ""),
            salary=data.get("salary", 0),
        )
        return ok({"message": "User created successfully", "user": employee.to_dict()}, 201)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session["employee_id"] = s_user.employee_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["shift_info"] = s_user.shift_info
        return ok(
            {
                "success": True,
                "user": {
                    "id": s_user.employee_id,
                    "full_name": s_user.full_name,
                    "role": s_user.role.value,
                    "shift_info": s_user.shift_info,
                },
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return ok({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    def me():
        identity = current_identity()
        if identity is None:
            return ok({"user": None})
        try:
            employee = container.employee_service.get(identity.employee_id)
        except NotFoundError:
            session.clear()
            return ok({"user": None})
        return ok({"user": employee.to_dict()})

