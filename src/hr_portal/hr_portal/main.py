from __future__ import annotations

import importlib
import logging
from typing import Optional

import requests
from dotenv import load_dotenv
from flask import Flask, redirect

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .container import build_container
from .core.constants import DEFAULT_WORKSPACE_LIMIT, HOME_PATH
from .departments.controller import register as register_departments
from .designations.controller import register as register_designations
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .salaries.controller import register as register_salaries
from .users.controller import register as register_users
from .web.workspace import EXTENSION_KEY, WorkspaceRegistry, release_anonymous

SETTING_NAMES = (
    "API_URL",
    "API_TIMEOUT",
    "SEARCH_DEBOUNCE_SECONDS",
    "EMPLOYEE_PAGE_LIMIT",
    "STORAGE_DIR",
    "WORKSPACE_LIMIT",
    "LOG_LEVEL",
    "DEBUG",
    "TESTING",
)


def create_app(overrides: Optional[dict] = None, *, http_session: Optional[requests.Session] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    for name in SETTING_NAMES:
        if hasattr(settings, name):
            app.config[name] = getattr(settings, name)
    app.config.update(overrides or {})

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if app.config.get("DEBUG"):
        app.logger.info("[hr-portal] settings=%s api=%s", settings_module, app.config["API_URL"])

    def make_container(storage):
        return build_container(
            storage=storage,
            api_url=app.config["API_URL"],
            timeout=float(app.config.get("API_TIMEOUT", 10)),
            debounce_seconds=float(app.config.get("SEARCH_DEBOUNCE_SECONDS", 0.5)),
            page_limit=int(app.config.get("EMPLOYEE_PAGE_LIMIT", 10)),
            http_session=http_session,
        )

    app.extensions[EXTENSION_KEY] = WorkspaceRegistry(
        make_container,
        storage_dir=app.config.get("STORAGE_DIR"),
        limit=int(app.config.get("WORKSPACE_LIMIT", DEFAULT_WORKSPACE_LIMIT)),
    )
    app.teardown_appcontext(release_anonymous)

    register_auth(app)
    register_departments(app)
    register_designations(app)
    register_employees(app)
    register_salaries(app)
    register_payroll(app)
    register_attendance(app)
    register_leaves(app)
    register_analytics(app)
    register_users(app)

    @app.errorhandler(404)
    def unmatched(_error):
        return redirect(HOME_PATH)

    return app
