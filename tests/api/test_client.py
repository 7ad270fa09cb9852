from __future__ import annotations

import pytest
import requests

from hr_portal.api.client import ApiClient
from hr_portal.common.storage import MemoryStorage
from hr_portal.core.constants import TOKEN_STORAGE_KEY
from hr_portal.core.exceptions import ApiError, NetworkError, UnauthorizedError

BASE = "http://backend.test/api"


def make_client(http, token=None) -> ApiClient:
    storage = MemoryStorage({TOKEN_STORAGE_KEY: token} if token else {})
    return ApiClient(storage, base_url=BASE + "/", session=http)


def test_bearer_header_sent_when_token_stored(http):
    client = make_client(http, token="abc")
    client.get("/departments")

    sent = http.requests[0]
    assert sent["url"] == f"{BASE}/departments"
    assert sent["headers"]["Authorization"] == "Bearer abc"


def test_anonymous_request_has_no_auth_header(http):
    client = make_client(http)
    client.post("/auth/login", {"email": "a@b.com", "password": "pw"})

    sent = http.requests[0]
    assert "Authorization" not in sent["headers"]
    assert sent["json"] == {"email": "a@b.com", "password": "pw"}


def test_empty_query_params_are_dropped(http):
    client = make_client(http, token="abc")
    client.get("/employees", params={"search": "ali", "department": "", "status": None, "page": 1})

    assert http.requests[0]["params"] == {"search": "ali", "page": 1}


def test_decoded_body_is_returned(http):
    http.add("GET", "/designations", body=[{"_id": "d1", "title": "Engineer"}])
    client = make_client(http, token="abc")

    assert client.get("/designations") == [{"_id": "d1", "title": "Engineer"}]


def test_empty_body_decodes_to_none(http):
    http.add("DELETE", "/departments/d1", status=204)
    client = make_client(http, token="abc")

    assert client.delete("/departments/d1") is None


def test_http_error_carries_status_and_backend_payload(http):
    http.add("POST", "/departments", status=400, body={"message": "Name already exists"})
    client = make_client(http, token="abc")

    with pytest.raises(ApiError) as exc_info:
        client.post("/departments", {"name": "Ops"})

    err = exc_info.value
    assert err.status == 400
    assert err.message == "Name already exists"
    assert err.payload == {"message": "Name already exists"}
    assert not isinstance(err, NetworkError)


def test_unauthorized_is_surfaced_distinctly_and_listeners_notified(http):
    http.add("GET", "/employees", status=401, body={"message": "jwt expired"})
    storage = MemoryStorage({TOKEN_STORAGE_KEY: "stale"})
    client = ApiClient(storage, base_url=BASE, session=http)
    seen = []
    client.on_unauthorized(seen.append)

    with pytest.raises(UnauthorizedError):
        client.get("/employees")

    assert len(seen) == 1 and seen[0].status == 401
    # The client never clears the session on its own.
    assert storage[TOKEN_STORAGE_KEY] == "stale"


def test_transport_failure_becomes_network_error(http):
    http.add("GET", "/departments", raises=requests.exceptions.ConnectionError("refused"))
    client = make_client(http, token="abc")

    with pytest.raises(NetworkError) as exc_info:
        client.get("/departments")

    assert exc_info.value.status is None
