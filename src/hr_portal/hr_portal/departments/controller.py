from __future__ import annotations

from flask import Flask, redirect, request, url_for

from ..auth.navigation import ADMIN_HR
from ..web.views import flash_result, form_data, guarded, render_view
from ..web.workspace import current_container


def register(app: Flask) -> None:
    @app.route("/departments", endpoint="departments")
    @guarded(ADMIN_HR)
    def departments():
        store = current_container().departments
        if request.args.get("refresh"):
            store.fetch()
        return render_view("departments", **store.snapshot())

    @app.route("/departments/add", methods=["POST"], endpoint="add_department")
    @guarded(ADMIN_HR)
    def add_department():
        result = current_container().departments.create(form_data())
        flash_result(result, "Department added")
        return redirect(url_for("departments"))

    @app.route("/departments/<department_id>/edit", methods=["POST"], endpoint="edit_department")
    @guarded(ADMIN_HR)
    def edit_department(department_id: str):
        result = current_container().departments.update(department_id, form_data())
        flash_result(result, "Department updated")
        return redirect(url_for("departments"))

    @app.route("/departments/<department_id>/delete", methods=["POST"], endpoint="delete_department")
    @guarded(ADMIN_HR)
    def delete_department(department_id: str):
        result = current_container().departments.remove(department_id)
        flash_result(result, "Department deleted")
        return redirect(url_for("departments"))

    @app.route("/departments/<department_id>/assign-employees", methods=["POST"], endpoint="assign_department_employees")
    @guarded(ADMIN_HR)
    def assign_employees(department_id: str):
        data = form_data()
        employee_ids = data.get("employeeIds") or request.form.getlist("employeeIds")
        result = current_container().departments.assign_employees(department_id, employee_ids)
        flash_result(result, "Employees assigned")
        return redirect(url_for("departments"))
