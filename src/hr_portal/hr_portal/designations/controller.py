from __future__ import annotations

from flask import Flask, redirect, request, url_for

from ..auth.navigation import ADMIN_HR
from ..web.views import flash_result, form_data, guarded, render_view
from ..web.workspace import current_container


def register(app: Flask) -> None:
    @app.route("/designations", endpoint="designations")
    @guarded(ADMIN_HR)
    def designations():
        store = current_container().designations
        if request.args.get("refresh"):
            store.fetch()
        return render_view("designations", **store.snapshot())

    @app.route("/designations/add", methods=["POST"], endpoint="add_designation")
    @guarded(ADMIN_HR)
    def add_designation():
        result = current_container().designations.create(form_data())
        flash_result(result, "Designation added")
        return redirect(url_for("designations"))

    @app.route("/designations/<designation_id>/edit", methods=["POST"], endpoint="edit_designation")
    @guarded(ADMIN_HR)
    def edit_designation(designation_id: str):
        result = current_container().designations.update(designation_id, form_data())
        flash_result(result, "Designation updated")
        return redirect(url_for("designations"))

    @app.route("/designations/<designation_id>/delete", methods=["POST"], endpoint="delete_designation")
    @guarded(ADMIN_HR)
    def delete_designation(designation_id: str):
        result = current_container().designations.remove(designation_id)
        flash_result(result, "Designation deleted")
        return redirect(url_for("designations"))

    @app.route("/designations/<designation_id>/assign-employee", methods=["POST"], endpoint="assign_designation_employee")
    @guarded(ADMIN_HR)
    def assign_employee(designation_id: str):
        result = current_container().designations.assign_employee(designation_id, form_data().get("employeeId") or "")
        flash_result(result, "Employee assigned")
        return redirect(url_for("designations"))
