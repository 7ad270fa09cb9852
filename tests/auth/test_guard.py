from __future__ import annotations

import pytest

from hr_portal.auth.guard import GuardOutcome, RouteGuard
from hr_portal.auth.model import Identity, Session
from hr_portal.core.enums import Role, SessionState


def _session(role):
    identity = Identity.from_payload({"id": "1", "role": role})
    return Session(state=SessionState.AUTHENTICATED, identity=identity, token="t")


@pytest.fixture
def guard():
    return RouteGuard()


def test_unresolved_session_waits_instead_of_redirecting(guard):
    decision = guard.decide(Session(), [Role.ADMIN])
    assert decision.outcome == GuardOutcome.LOADING
    assert decision.location is None


def test_anonymous_goes_to_login(guard):
    decision = guard.decide(Session(state=SessionState.ANONYMOUS), [Role.HR])
    assert decision.outcome == GuardOutcome.REDIRECT
    assert decision.location == "/login"


def test_role_mismatch_goes_home_not_login(guard):
    decision = guard.decide(_session("EMPLOYEE"), [Role.ADMIN, Role.HR])
    assert decision.outcome == GuardOutcome.REDIRECT
    assert decision.location == "/"


def test_no_allow_list_admits_any_authenticated_identity(guard):
    assert guard.decide(_session("EMPLOYEE")).allowed
    assert guard.decide(_session(None), []).allowed


@pytest.mark.parametrize("role", ["HR", {"name": "HR"}, " hr "])
def test_role_shapes_are_equivalent(guard, role):
    assert guard.decide(_session(role), ["HR"]).allowed


def test_unknown_role_is_denied_when_roles_are_required(guard):
    decision = guard.decide(_session(None), [Role.ADMIN])
    assert decision.location == "/"


def test_allow_list_of_unknown_names_admits_nobody(guard):
    decision = guard.decide(_session("EMPLOYEE"), ["MANAGER"])
    assert decision.outcome == GuardOutcome.REDIRECT
    assert decision.location == "/"


def test_unknown_names_do_not_hide_known_ones(guard):
    assert guard.decide(_session("HR"), ["MANAGER", "HR"]).allowed
    assert not guard.decide(_session("EMPLOYEE"), ["MANAGER", "HR"]).allowed
