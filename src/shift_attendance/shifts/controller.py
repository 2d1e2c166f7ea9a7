from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, current_identity, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    @app.route("/api/shifts", methods=["GET"], endpoint="shifts_list")
    @login_required
    def shifts_list():
        return ok([s.to_dict() for s in service.list_active()])

    @app.route("/api/shifts/all", methods=["GET"], endpoint="shifts_list_all")
    @admin_required
    def shifts_list_all():
        return ok([s.to_dict() for s in service.list_all()])

    @app.route("/api/shifts", methods=["POST"], endpoint="shifts_create")
    @admin_required
    def shifts_create():
        data = json_body()
        fields = {k: data[k] for k in ("entry_time", "exit_time", "break_start", "break_end", "break_duration", "working_days", "status") if k in data}
        policy = service.create_policy(current_role=current_identity().role, name=data.get("name", ""), **fields)
        return ok(policy.to_dict(), 201)

    @app.route("/api/shifts/<int:shift_id>", methods=["PATCH"], endpoint="shifts_update")
    @admin_required
    def shifts_update(shift_id: int):
        policy = service.update_policy(current_role=current_identity().role, shift_id=shift_id, changes=json_body())
        return ok(policy.to_dict())

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="shifts_delete")
    @admin_required
    def shifts_delete(shift_id: int):
        service.delete_policy(current_role=current_identity().role, shift_id=shift_id)
        return ok({"message": "Shift deleted"})
