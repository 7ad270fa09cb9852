"""Route guard: render, wait, or redirect based on the session and an allow-list."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..core.constants import HOME_PATH, LOGIN_PATH
from ..core.enums import Role
from .model import Session


class GuardOutcome(str, Enum):
    RENDER = "RENDER"
    LOADING = "LOADING"
    REDIRECT = "REDIRECT"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    location: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == GuardOutcome.RENDER


class RouteGuard:
    def __init__(self, *, login_path: str = LOGIN_PATH, home_path: str = HOME_PATH):
        self._login_path = login_path
        self._home_path = home_path

    def decide(self, session: Session, allowed_roles: Optional[Iterable[object]] = None) -> GuardDecision:
        # Never redirect before resolution: a still-loading signed-in user would bounce to login.
        if not session.resolved:
            return GuardDecision(GuardOutcome.LOADING)

        if not session.authenticated:
            return GuardDecision(GuardOutcome.REDIRECT, self._login_path)

        required = tuple(allowed_roles or ())
        # A non-empty list whose names are all unknown admits nobody.
        if required and session.role not in _normalize_roles(required):
            return GuardDecision(GuardOutcome.REDIRECT, self._home_path)

        return GuardDecision(GuardOutcome.RENDER)


def _normalize_roles(roles: Iterable[object]) -> frozenset:
    normalized = (Role.normalize(r) for r in roles)
    return frozenset(r for r in normalized if r is not None)
