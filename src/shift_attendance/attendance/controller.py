from __future__ import annotations

import io

import qrcode
from flask import Flask, send_file

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, arg_date, arg_int, body_datetime, current_identity, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import UnauthorizedError, ValidationError


def _qr_png(data: str) -> io.BytesIO:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        identity = current_identity()
        employee_id = arg_int("employee_id")
        if not identity.is_admin:
            if employee_id is not None and employee_id != identity.employee_id:
                raise UnauthorizedError("Forbidden")
            employee_id = identity.employee_id

        records = service.list_attendance(employee_id=employee_id, start=arg_date("start"), end=arg_date("end"))
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        record = service.get_today_record(current_identity().employee_id)
        return ok({"record": record.to_dict() if record else None})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_action")
    @login_required
    def attendance_action():
        data = json_body()
        employee_id = current_identity().employee_id
        action = data.get("action")

        if action == "checkin":
            record = service.check_in(employee_id, note=data.get("note"), dressing=data.get("dressing"))
            return ok(record.to_dict(), 201)
        if action == "checkout":
            record = service.check_out(employee_id, note=data.get("note"))
            return ok(record.to_dict())
        raise ValidationError("action must be 'checkin' or 'checkout'")

    @app.route("/api/attendance/qr", methods=["POST"], endpoint="attendance_qr")
    @login_required
    def attendance_qr():
        data = json_body()
        action, record = service.scan(current_identity().employee_id, str(data.get("code") or ""))
        return ok({"success": True, "action": action, "record": record.to_dict()})

    @app.route("/api/admin/qr.png", methods=["GET"], endpoint="admin_qr_image")
    @admin_required
    def admin_qr_image():
        return send_file(_qr_png(container.qr_token), mimetype="image/png")

    @app.route("/api/admin/attendance/manual", methods=["POST"], endpoint="admin_attendance_manual")
    @admin_required
    def admin_attendance_manual():
        data = json_body()
        identity = current_identity()
        try:
            employee_id = int(data.get("employee_id"))
        except (TypeError, ValueError):
            raise ValidationError("employee_id must be an integer")
        instant = body_datetime(data, "instant")
        action = data.get("action")

        if action == "checkin":
            record = service.admin_manual_check_in(
                current_role=identity.role,
                employee_id=employee_id,
                instant=instant,
                note=data.get("note"),
                dressing=data.get("dressing"),
            )
            return ok(record.to_dict(), 201)
        if action == "checkout":
            record = service.admin_manual_check_out(
                current_role=identity.role,
                employee_id=employee_id,
                instant=instant,
                note=data.get("note"),
            )
            return ok(record.to_dict())
        raise ValidationError("action must be 'checkin' or 'checkout'")

    @app.route("/api/admin/attendance/<int:attendance_id>/dressing", methods=["PATCH"], endpoint="admin_attendance_dressing")
    @admin_required
    def admin_attendance_dressing(attendance_id: int):
        data = json_body()
        record = service.set_dressing(
            current_role=current_identity().role,
            attendance_id=attendance_id,
            classification=data.get("dressing"),
        )
        return ok(record.to_dict())

    @app.route("/api/admin/attendance/<int:attendance_id>/note", methods=["PATCH"], endpoint="admin_attendance_note")
    @admin_required
    def admin_attendance_note(attendance_id: int):
        data = json_body()
        record = service.update_note(current_role=current_identity().role, attendance_id=attendance_id, note=data.get("note"))
        return ok(record.to_dict())

    @app.route("/api/admin/attendance/leave", methods=["POST"], endpoint="admin_attendance_leave")
    @admin_required
    def admin_attendance_leave():
        data = json_body()
        try:
            employee_id = int(data.get("employee_id"))
        except (TypeError, ValueError):
            raise ValidationError("employee_id must be an integer")
        record = service.mark_leave(
            current_role=current_identity().role,
            employee_id=employee_id,
            work_date=parse_iso_date(str(data.get("date") or "")),
            bucket=data.get("bucket", "casual"),
            note=data.get("note"),
        )
        return ok(record.to_dict(), 201)
