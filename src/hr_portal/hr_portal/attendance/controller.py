from __future__ import annotations

from flask import Flask, redirect, url_for

from ..auth.navigation import ADMIN_HR, EMPLOYEE_ONLY
from ..web.views import flash_result, guarded, query_params, render_view
from ..web.workspace import current_container

REPORT_FILTERS = ("startDate", "endDate", "department", "status", "employeeId")


def register(app: Flask) -> None:
    @app.route("/attendance", endpoint="attendance")
    @guarded(EMPLOYEE_ONLY)
    def attendance():
        store = current_container().attendance
        store.fetch_personal(None, query_params("startDate", "endDate"))
        return render_view("attendance", **store.snapshot())

    @app.route("/attendance/check-in", methods=["POST"], endpoint="check_in")
    @guarded(EMPLOYEE_ONLY)
    def check_in():
        store = current_container().attendance
        result = store.check_in()
        flash_result(result, "Checked in")
        return redirect(url_for("attendance"))

    @app.route("/attendance/check-out", methods=["POST"], endpoint="check_out")
    @guarded(EMPLOYEE_ONLY)
    def check_out():
        store = current_container().attendance
        result = store.check_out()
        flash_result(result, "Checked out")
        return redirect(url_for("attendance"))

    @app.route("/attendance-report", endpoint="attendance_report")
    @guarded(ADMIN_HR)
    def attendance_report():
        result = current_container().attendance.fetch_all(query_params(*REPORT_FILTERS))
        return render_view("attendance_report", report=result.data or [], error=result.error)
