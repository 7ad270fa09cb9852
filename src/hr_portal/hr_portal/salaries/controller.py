from __future__ import annotations

from flask import Flask, redirect, request, url_for

from ..auth.navigation import ADMIN_HR, EMPLOYEE_ONLY
from ..web.views import flash_result, form_data, guarded, render_view
from ..web.workspace import current_container


def register(app: Flask) -> None:
    @app.route("/salary", endpoint="salaries")
    @guarded(ADMIN_HR)
    def salaries():
        store = current_container().salaries
        if request.args.get("refresh"):
            store.fetch()
        data = store.snapshot()
        employee_id = request.args.get("employee")
        if employee_id:
            data["employeeSalary"] = store.fetch_by_employee(employee_id).to_dict()
        return render_view("salaries", **data)

    @app.route("/salary/add", methods=["POST"], endpoint="add_salary")
    @guarded(ADMIN_HR)
    def add_salary():
        result = current_container().salaries.set_salary(form_data())
        flash_result(result, "Salary saved")
        return redirect(url_for("salaries"))

    @app.route("/salary/<salary_id>/edit", methods=["POST"], endpoint="edit_salary")
    @guarded(ADMIN_HR)
    def edit_salary(salary_id: str):
        result = current_container().salaries.update(salary_id, form_data())
        flash_result(result, "Salary updated")
        return redirect(url_for("salaries"))

    @app.route("/employee-salary", endpoint="employee_salary")
    @guarded(EMPLOYEE_ONLY)
    def employee_salary():
        result = current_container().salaries.fetch_my_salary()
        return render_view("employee_salary", salary=result.data, error=result.error)
