from __future__ import annotations

from flask import Flask, redirect, url_for

from ..auth.navigation import ADMIN_HR, EMPLOYEE_ONLY
from ..core.enums import RequestStatus
from ..web.views import flash_result, form_data, guarded, render_view
from ..web.workspace import current_container


def register(app: Flask) -> None:
    @app.route("/leaves", endpoint="leaves")
    @guarded(EMPLOYEE_ONLY)
    def leaves():
        store = current_container().leaves
        if not store.leave_types:
            store.fetch_types()
        store.fetch_my()
        return render_view("leaves", **store.snapshot())

    @app.route("/leaves/apply", methods=["POST"], endpoint="apply_leave")
    @guarded(EMPLOYEE_ONLY)
    def apply_leave():
        result = current_container().leaves.apply(form_data())
        flash_result(result, "Leave request submitted")
        return redirect(url_for("leaves"))

    @app.route("/leave-management", endpoint="leave_management")
    @guarded(ADMIN_HR)
    def leave_management():
        store = current_container().leaves
        store.fetch_all()
        return render_view("leave_management", **store.snapshot())

    @app.route("/leave-management/<leave_id>/status", methods=["POST"], endpoint="update_leave_status")
    @guarded(ADMIN_HR)
    def update_leave_status(leave_id: str):
        status = form_data().get("status") or RequestStatus.PENDING.value
        result = current_container().leaves.update_status(leave_id, status)
        flash_result(result, "Leave request updated")
        return redirect(url_for("leave_management"))
