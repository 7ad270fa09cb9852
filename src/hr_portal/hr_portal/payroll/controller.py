from __future__ import annotations

from flask import Flask, redirect, request, url_for

from ..auth.navigation import ADMIN_HR, EMPLOYEE_ONLY
from ..web.views import flash_result, form_data, guarded, render_view
from ..web.workspace import current_container


def register(app: Flask) -> None:
    @app.route("/payroll", endpoint="payrolls")
    @guarded(ADMIN_HR)
    def payrolls():
        store = current_container().payrolls
        month = request.args.get("month", type=int)
        year = request.args.get("year", type=int)
        if month and year:
            store.fetch_month(month, year)
        return render_view("payrolls", month=month, year=year, **store.snapshot())

    @app.route("/payroll/generate", methods=["POST"], endpoint="generate_payroll")
    @guarded(ADMIN_HR)
    def generate_payroll():
        data = form_data()
        result = current_container().payrolls.generate(data.get("month"), data.get("year"))
        flash_result(result, "Payroll generated")
        if result.success:
            return redirect(url_for("payrolls", month=data.get("month"), year=data.get("year")))
        return redirect(url_for("payrolls"))

    @app.route("/payroll/<payroll_id>/status", methods=["POST"], endpoint="update_payroll_status")
    @guarded(ADMIN_HR)
    def update_payroll_status(payroll_id: str):
        data = form_data()
        result = current_container().payrolls.update_status(
            payroll_id,
            data.get("status") or "",
            data.get("paymentDate"),
        )
        flash_result(result, "Payroll status updated")
        return redirect(url_for("payrolls"))

    @app.route("/employee-payroll", endpoint="employee_payroll")
    @guarded(EMPLOYEE_ONLY)
    def employee_payroll():
        result = current_container().payrolls.fetch_my_history()
        return render_view("employee_payroll", history=result.data or [], error=result.error)
