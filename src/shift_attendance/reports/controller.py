from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, arg_date, arg_int, current_identity, ok
from ..container import Container
from .service import rows_as_dicts


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _year_month():
        today = container.attendance_service.now().date()
        return arg_int("year") or today.year, arg_int("month") or today.month

    @app.route("/api/admin/reports/today", methods=["GET"], endpoint="report_today")
    @admin_required
    def report_today():
        return ok(rows_as_dicts(service.today_board(current_role=current_identity().role)))

    @app.route("/api/admin/reports/monthly", methods=["GET"], endpoint="report_monthly")
    @admin_required
    def report_monthly():
        year, month = _year_month()
        rows = service.monthly_summary(current_role=current_identity().role, year=year, month=month, as_of=arg_date("as_of"))
        return ok({"year": year, "month": month, "rows": rows_as_dicts(rows)})

    @app.route("/api/admin/reports/monthly.csv", methods=["GET"], endpoint="report_monthly_csv")
    @admin_required
    def report_monthly_csv():
        year, month = _year_month()
        body = service.monthly_csv(current_role=current_identity().role, year=year, month=month, as_of=arg_date("as_of"))
        filename = f"attendance_{year:04d}_{month:02d}.csv"
        return app.response_class(
            body.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
