from __future__ import annotations

from flask import Flask

from ..auth.navigation import ADMIN_HR
from ..web.views import guarded, render_view
from ..web.workspace import current_container


def register(app: Flask) -> None:
    @app.route("/analytics", endpoint="analytics")
    @guarded(ADMIN_HR)
    def analytics():
        store = current_container().analytics
        store.fetch()
        return render_view("analytics", **store.snapshot())
