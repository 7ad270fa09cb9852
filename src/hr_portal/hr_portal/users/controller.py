from __future__ import annotations

from flask import Flask, redirect, url_for

from ..auth.navigation import ADMIN_HR
from ..web.views import flash_result, form_data, guarded, render_view
from ..web.workspace import current_container


def register(app: Flask) -> None:
    @app.route("/pending-users", endpoint="pending_users")
    @guarded(ADMIN_HR)
    def pending_users():
        store = current_container().pending_users
        store.fetch()
        return render_view("pending_users", **store.snapshot())

    @app.route("/pending-users/<user_id>/approve", methods=["POST"], endpoint="approve_user")
    @guarded(ADMIN_HR)
    def approve_user(user_id: str):
        result = current_container().pending_users.approve(user_id)
        flash_result(result, "User approved")
        return redirect(url_for("pending_users"))

    @app.route("/pending-users/<user_id>/reject", methods=["POST"], endpoint="reject_user")
    @guarded(ADMIN_HR)
    def reject_user(user_id: str):
        result = current_container().pending_users.reject(user_id, form_data().get("reason") or "")
        flash_result(result, "User rejected")
        return redirect(url_for("pending_users"))
