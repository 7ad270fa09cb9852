from __future__ import annotations

from flask import Flask, redirect, request, url_for

from ..auth.navigation import ADMIN_HR, EMPLOYEE_ONLY
from ..web.views import flash_result, form_data, guarded, query_params, render_view
from ..web.workspace import current_container
from .store import FILTER_FIELDS


def register(app: Flask) -> None:
    @app.route("/employees", endpoint="employees")
    @guarded(ADMIN_HR)
    def employees():
        store = current_container().employees
        filters = query_params(*FILTER_FIELDS)
        # The browser debounces typing; by the time a query string arrives it is final.
        if filters or request.args.get("page"):
            store.fetch_page(filters, page=request.args.get("page", 1, type=int))
        return render_view("employees", filters=filters, **store.snapshot())

    @app.route("/employees/add", methods=["POST"], endpoint="add_employee")
    @guarded(ADMIN_HR)
    def add_employee():
        result = current_container().employees.create(form_data())
        flash_result(result, "Employee added")
        return redirect(url_for("employees"))

    @app.route("/employees/<employee_id>/edit", methods=["POST"], endpoint="edit_employee")
    @guarded(ADMIN_HR)
    def edit_employee(employee_id: str):
        result = current_container().employees.update(employee_id, form_data())
        flash_result(result, "Employee updated")
        return redirect(url_for("employees"))

    @app.route("/employees/<employee_id>/delete", methods=["POST"], endpoint="delete_employee")
    @guarded(ADMIN_HR)
    def delete_employee(employee_id: str):
        result = current_container().employees.remove(employee_id)
        flash_result(result, "Employee deleted")
        return redirect(url_for("employees"))

    @app.route("/employee-profile", methods=["GET", "POST"], endpoint="employee_profile")
    @guarded(EMPLOYEE_ONLY)
    def employee_profile():
        store = current_container().employees
        if request.method == "POST":
            result = store.update_my_profile(form_data())
            flash_result(result, "Profile updated")
            return redirect(url_for("employee_profile"))

        result = store.fetch_my_profile()
        return render_view("employee_profile", profile=result.data, error=result.error)
