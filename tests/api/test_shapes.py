from __future__ import annotations

from hr_portal.api.shapes import error_message, extract_collection, extract_token, record_id, unwrap
from hr_portal.core.exceptions import ApiError, NetworkError, ValidationError


def test_extract_token_accepts_both_field_names():
    assert extract_token({"accessToken": "a1"}) == "a1"
    assert extract_token({"token": "t1"}) == "t1"
    assert extract_token({"accessToken": "a1", "token": "t1"}) == "a1"
    assert extract_token({"user": {}}) is None
    assert extract_token(None) is None


def test_extract_collection_bare_list():
    page = extract_collection([{"_id": "1"}], "employees")
    assert page.items == [{"_id": "1"}]
    assert page.total_pages is None


def test_extract_collection_wrapped_with_pagination():
    page = extract_collection({"employees": [{"_id": "1"}], "totalPages": 4, "currentPage": 2}, "employees")
    assert page.items == [{"_id": "1"}]
    assert page.total_pages == 4


def test_extract_collection_unknown_shape_is_empty():
    assert extract_collection({"message": "ok"}, "employees").items == []


def test_unwrap_and_record_id():
    assert unwrap({"employee": {"_id": "e1"}}, "employee") == {"_id": "e1"}
    assert unwrap({"_id": "d1"}, "department") == {"_id": "d1"}
    assert record_id({"_id": "x"}) == "x"
    assert record_id({"id": 7}) == 7
    assert record_id("nope") is None


def test_error_message_prefers_backend_message():
    assert error_message(ApiError("boom", status=400, payload={"message": "Bad email"}), "Fallback") == "Bad email"
    assert error_message(ApiError("boom", status=500, payload="<html>"), "Fallback") == "Fallback"
    assert error_message(NetworkError("Connection failed"), "Fallback") == "Fallback"
    assert error_message(ValidationError("Name is required"), "Fallback") == "Name is required"


def test_page_count_falls_back_to_one_when_unusable():
    for value in ("n/a", None, 0, "", {"pages": 3}):
        assert extract_collection({"employees": [], "totalPages": value}, "employees").total_pages == 1
    assert extract_collection({"employees": [], "totalPages": "3"}, "employees").total_pages == 3
