from __future__ import annotations

from hr_portal.core.exceptions import ApiError
from hr_portal.users.store import PendingUserStore

PENDING = [{"_id": "u1", "email": "a@corp.test"}, {"_id": "u2", "email": "b@corp.test"}]


def _store(api, session_store):
    return PendingUserStore(api, session_store, debounce_seconds=0.02)


def test_approve_removes_from_pending(api, session_store, sign_in):
    sign_in(role="ADMIN")
    store = _store(api, session_store)
    api.script("GET", "/users/pending", {"users": PENDING})
    store.fetch()

    result = store.approve("u1")

    assert result.message == "User approved successfully!"
    assert [u["_id"] for u in store.items] == ["u2"]


def test_reject_sends_reason(api, session_store, sign_in):
    sign_in(role="HR")
    store = _store(api, session_store)
    api.script("GET", "/users/pending", PENDING)
    store.fetch()

    store.reject("u2", "Unknown applicant")

    assert api.calls_to("PUT", "/users/u2/reject")[0][2] == {"reason": "Unknown applicant"}
    assert [u["_id"] for u in store.items] == ["u1"]


def test_failed_approval_keeps_user(api, session_store, sign_in):
    sign_in(role="ADMIN")
    store = _store(api, session_store)
    api.script("GET", "/users/pending", PENDING)
    api.script("PUT", "/users/u1/approve", ApiError("Server error", status=500, payload=None))
    store.fetch()

    result = store.approve("u1")

    assert result.error == "Failed to approve user"
    assert len(store.items) == 2


def test_signing_in_as_someone_else_drops_the_pending_list(api, session_store, sign_in):
    sign_in(role="HR", user_id="h1")
    store = _store(api, session_store)
    api.script("GET", "/users/pending", PENDING)
    store.fetch()
    api.script("POST", "/auth/login", {"accessToken": "jwt-e1", "user": {"id": "e1", "role": "EMPLOYEE"}})

    session_store.login("e1@corp.test", "pw")

    assert store.items == []
    assert not store.fetch().success


def test_resolving_the_same_account_again_keeps_the_list(api, session_store, sign_in):
    sign_in(role="ADMIN", user_id="a1")
    store = _store(api, session_store)
    api.script("GET", "/users/pending", PENDING)
    store.fetch()

    session_store.resolve()

    assert len(store.items) == 2
    assert len(api.calls_to("GET", "/users/pending")) == 1
