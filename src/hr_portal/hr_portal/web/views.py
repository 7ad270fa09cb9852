from __future__ import annotations

from functools import wraps
from typing import Any, Iterable

from flask import flash, get_flashed_messages, jsonify, redirect, request

from ..auth.guard import GuardOutcome
from ..auth.navigation import navigation_for
from ..core.result import Result
from .workspace import current_container


def guarded(roles: Iterable[object] = ()):
    """Run the route guard before the view: render, report loading, or redirect."""
    allowed = tuple(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            container = current_container()
            decision = container.guard.decide(container.session_store.session, allowed)
            if decision.outcome == GuardOutcome.LOADING:
                return jsonify(loading=True), 202
            if decision.outcome == GuardOutcome.REDIRECT:
                return redirect(decision.location)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def render_view(view: str, **data: Any):
    container = current_container()
    identity = container.session_store.identity
    return jsonify(
        view=view,
        identity=identity.to_dict() if identity else None,
        navigation=[{"label": m.label, "path": m.path} for m in navigation_for(identity)],
        messages=[{"category": c, "message": m} for c, m in get_flashed_messages(with_categories=True)],
        **data,
    )


def flash_result(result: Result, success_message: str) -> None:
    if result.success:
        flash(result.message or success_message, "success")
    else:
        flash(result.error or "Something went wrong", "danger")


def form_data() -> dict:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def query_params(*names: str) -> dict:
    return {name: request.args.get(name) for name in names if request.args.get(name)}
