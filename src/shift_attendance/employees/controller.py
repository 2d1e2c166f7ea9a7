from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, current_identity, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def users_list():
        return ok([e.to_dict() for e in service.list_employees(current_role=current_identity().role)])

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def users_create():
        data = json_body()
        employee = service.create_employee(
            current_role=current_identity().role,
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=data.get("role") or "employee",
            shift_id=data.get("shift_id"),
            position=data.get("position", ""),
            department=data.get("department", ""),
            phone=data.get("phone", ""),
            salary=data.get("salary", 0),
            annual_leaves=data.get("annual_leaves"),
            casual_leaves=data.get("casual_leaves"),
        )
        return ok(employee.to_dict(), 201)

    @app.route("/api/users/<int:employee_id>", methods=["PATCH", "PUT"], endpoint="users_update")
    @admin_required
    def users_update(employee_id: int):
        employee = service.update_employee(current_role=current_identity().role, employee_id=employee_id, changes=json_body())
        return ok(employee.to_dict())

    @app.route("/api/users/<int:employee_id>/shift", methods=["PUT"], endpoint="users_assign_shift")
    @admin_required
    def users_assign_shift(employee_id: int):
        data = json_body()
        employee = service.assign_shift(
            current_role=current_identity().role,
            employee_id=employee_id,
            shift_id=data.get("shift_id"),
        )
        return ok(employee.to_dict())

    @app.route("/api/users/<int:employee_id>/leaves", methods=["PUT"], endpoint="users_set_leaves")
    @admin_required
    def users_set_leaves(employee_id: int):
        data = json_body()
        employee = service.set_leave_balances(
            current_role=current_identity().role,
            employee_id=employee_id,
            annual_leaves=data.get("annual_leaves"),
            casual_leaves=data.get("casual_leaves"),
        )
        return ok(employee.to_dict())

    @app.route("/api/users/<int:employee_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    def users_delete(employee_id: int):
        identity = current_identity()
        service.delete_employee(current_role=identity.role, acting_employee_id=identity.employee_id, employee_id=employee_id)
        return ok({"message": "User deleted successfully"})
