from __future__ import annotations

from flask import Flask, request

from ..common.clock import ClockReading
from ..common.datetime_utils import parse_iso_date, parse_time_of_day
from ..common.http import json_body, ok
from ..common.validators import require_positive_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _reading_from(data: dict) -> ClockReading | None:
        """Explicit civil date/time from the body; None means "now"."""
        time_of_day = data.get("timeOfDay") or data.get("time")
        if not time_of_day:
            return None
        day = data.get("date") or container.clock.now().date
        parse_iso_date(day)
        return ClockReading(date=day, time=parse_time_of_day(time_of_day).strftime("%H:%M:%S"))

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    def mark():
        data = json_body()
        result = service.mark(
            require_positive_int(data.get("employeeId"), "employeeId"),
            data.get("action"),
            reading=_reading_from(data),
        )
        return ok({"data": result.to_dict(), "message": result.message})

    @app.route("/api/attendance/history/<int:employee_id>", methods=["GET"], endpoint="attendance_history")
    def history(employee_id: int):
        rows = service.get_history(employee_id)
        return ok({"count": len(rows), "data": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/admin/today", methods=["GET"], endpoint="attendance_admin_today")
    def admin_today():
        rows = service.get_today()
        return ok({"count": len(rows), "data": rows})

    @app.route("/api/attendance/admin/stats/<int:employee_id>", methods=["GET"], endpoint="attendance_admin_stats")
    def admin_stats(employee_id: int):
        result = service.employee_stats(employee_id)
        return ok(
            {
                "employee": result["employee"].to_dict(),
                "history": [r.to_dict() for r in result["history"]],
                "stats": result["stats"].to_dict(),
            }
        )

    @app.route("/api/attendance/admin/all-stats", methods=["GET"], endpoint="attendance_admin_all_stats")
    def admin_all_stats():
        return ok({"data": service.lifetime_stats()})

    @app.route("/api/attendance/admin/absence-warnings", methods=["GET"], endpoint="attendance_absence_warnings")
    def absence_warnings():
        window = request.args.get("window")
        warnings = service.absence_warnings(window=require_positive_int(window, "window") if window else None)
        return ok({"count": len(warnings), "data": [w.to_dict() for w in warnings]})

    @app.route("/api/attendance/summary/<int:employee_id>", methods=["GET"], endpoint="attendance_summary")
    def monthly_summary(employee_id: int):
        now = container.clock.now()
        summary = service.monthly_summary(
            employee_id,
            month=request.args.get("month") or now.month,
            year=request.args.get("year") or now.year,
        )
        return ok(
            {
                "employee": summary.employee.to_dict(),
                "month": summary.month,
                "year": summary.year,
                "records": [r.to_dict() for r in summary.records],
                "totals": summary.totals.to_dict(),
            }
        )

    @app.route("/api/attendance/<int:attendance_id>/status", methods=["PUT"], endpoint="attendance_override_status")
    def override_status(attendance_id: int):
        record = service.override_status(attendance_id, json_body().get("status"))
        return ok({"data": record.to_dict()})

    @app.route("/api/attendance/retention/sweep", methods=["POST"], endpoint="attendance_retention_sweep")
    def retention_sweep():
        result = container.retention_job.run()
        return ok({"data": result.to_dict()})
