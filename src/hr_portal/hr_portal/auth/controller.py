from __future__ import annotations

from flask import Flask, flash, redirect, request, url_for

from ..core.constants import HOME_PATH, LOGIN_PATH, PENDING_APPROVAL_PATH
from ..core.enums import ApprovalStatus, Role
from ..web.views import flash_result, form_data, guarded, render_view
from ..web.workspace import close_workspace, current_container, open_workspace
from .navigation import ADMIN_HR


def register(app: Flask) -> None:
    @app.route(LOGIN_PATH, methods=["GET", "POST"], endpoint="login")
    def login():
        container = current_container()
        if container.session_store.session.authenticated:
            return redirect(HOME_PATH)

        if request.method == "POST":
            data = form_data()
            email = (data.get("email") or "").strip()
            result = open_workspace().session_store.login(email, data.get("password") or "")
            if result.success:
                flash("Login successful!", "success")
                return redirect(HOME_PATH)
            close_workspace()
            if result.approval_status == ApprovalStatus.PENDING.value:
                flash(result.error, "warning")
                return redirect(PENDING_APPROVAL_PATH)
            flash(result.error, "danger")
            return render_view("login", email=email), 401

        return render_view("login")

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if request.method == "POST":
            data = form_data()
            result = current_container().session_store.signup(
                data.get("name") or "",
                data.get("email") or "",
                data.get("password") or "",
            )
            flash_result(result, "Registration submitted. Please wait for approval.")
            if result.success:
                return redirect(url_for("login"))
            return render_view("signup"), 400

        return render_view("signup")

    @app.route(PENDING_APPROVAL_PATH, endpoint="pending_approval")
    def pending_approval():
        return render_view("pending_approval")

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        current_container().session_store.logout()
        close_workspace()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    @app.route(HOME_PATH, endpoint="dashboard")
    @guarded()
    def dashboard():
        container = current_container()
        identity = container.session_store.identity
        data = {}
        if identity.has_role(*ADMIN_HR):
            container.analytics.fetch()
            data["analytics"] = container.analytics.snapshot()["analytics"]
        return render_view("dashboard", **data)

    @app.route("/settings", methods=["GET", "POST"], endpoint="settings")
    @guarded()
    def settings():
        if request.method == "POST":
            data = form_data()
            result = current_container().session_store.change_password(
                data.get("oldPassword") or "",
                data.get("newPassword") or "",
            )
            flash_result(result, "Password changed successfully")
            return redirect(url_for("settings"))

        return render_view("settings")

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    @guarded(ADMIN_HR)
    def register_user():
        if request.method == "POST":
            data = form_data()
            result = current_container().session_store.register(
                data.get("name") or "",
                data.get("email") or "",
                data.get("password") or "",
                data.get("roleName") or Role.EMPLOYEE.value,
            )
            flash_result(result, "User registered successfully!")
            return redirect(url_for("register"))

        return render_view("register", roles=[r.value for r in Role])
