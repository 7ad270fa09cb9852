from __future__ import annotations

import json as jsonlib
from typing import Any, Optional

import pytest

from hr_portal.auth.session_store import SessionStore
from hr_portal.common.storage import MemoryStorage
from hr_portal.core.constants import IDENTITY_STORAGE_KEY, TOKEN_STORAGE_KEY


class FakeApi:
    """Scripted stand-in for ApiClient. Responses are keyed by (method, path).

    A scripted value may be a body, an exception to raise, or a callable
    ``(json, params) -> body``. The last scripted value repeats. Unscripted
    GETs answer ``[]``, other verbs ``{}``.
    """

    def __init__(self):
        self._routes: dict[tuple[str, str], list] = {}
        self.calls: list[tuple[str, str, Any, Any]] = []

    def script(self, method: str, path: str, *responses: Any) -> None:
        self._routes[(method, path)] = list(responses)

    def request(self, method: str, path: str, *, json: Any = None, params: Any = None) -> Any:
        self.calls.append((method, path, json, params))
        queue = self._routes.get((method, path))
        if queue:
            response = queue.pop(0) if len(queue) > 1 else queue[0]
        else:
            response = [] if method == "GET" else {}
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(json, params)
        return response

    def get(self, path: str, *, params: Any = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any = None, *, params: Any = None) -> Any:
        return self.request("POST", path, json=body, params=params)

    def put(self, path: str, body: Any = None, *, params: Any = None) -> Any:
        return self.request("PUT", path, json=body, params=params)

    def delete(self, path: str, *, params: Any = None) -> Any:
        return self.request("DELETE", path, params=params)

    def calls_to(self, method: str, path: str) -> list:
        return [c for c in self.calls if c[0] == method and c[1] == path]


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self.content = b"" if body is None else jsonlib.dumps(body).encode("utf-8")
        self.text = self.content.decode("utf-8")

    def json(self) -> Any:
        return jsonlib.loads(self.content)


class FakeHttpSession:
    """Stand-in for ``requests.Session``; routes by method and the path below ``/api``."""

    def __init__(self):
        self._handlers: dict[tuple[str, str], Any] = {}
        self.requests: list[dict] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        body: Any = None,
        *,
        raises: Optional[Exception] = None,
    ) -> None:
        self._handlers[(method, path)] = raises if raises is not None else FakeResponse(status, body)

    def request(self, method, url, headers=None, json=None, params=None, timeout=None):
        self.requests.append({"method": method, "url": url, "headers": headers or {}, "json": json, "params": params})
        path = url.split("/api", 1)[1]
        handler = self._handlers.get((method, path))
        if handler is None:
            return FakeResponse(200, [] if method == "GET" else {})
        if isinstance(handler, Exception):
            raise handler
        return handler

    def paths(self, method: str) -> list:
        return [r["url"].split("/api", 1)[1] for r in self.requests if r["method"] == method]


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def http() -> FakeHttpSession:
    return FakeHttpSession()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def session_store(api, storage) -> SessionStore:
    return SessionStore(api, storage)


@pytest.fixture
def sign_in(session_store, storage):
    """Persist a cached identity and resolve, as a reload of a signed-in client would."""

    def _sign_in(role: Any = "HR", user_id: str = "u1", name: str = "Tester"):
        storage[TOKEN_STORAGE_KEY] = f"token-{user_id}"
        storage[IDENTITY_STORAGE_KEY] = jsonlib.dumps(
            {"id": user_id, "name": name, "email": f"{user_id}@corp.test", "role": role}
        )
        return session_store.resolve()

    return _sign_in
