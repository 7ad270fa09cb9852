from __future__ import annotations

from hr_portal.attendance.store import AttendanceStore
from hr_portal.core.exceptions import ApiError


def _store(api, session_store):
    return AttendanceStore(api, session_store, debounce_seconds=0.02)


def test_employee_fetches_own_history(api, session_store, sign_in):
    sign_in(role="EMPLOYEE", user_id="e1")
    store = _store(api, session_store)
    api.script("GET", "/attendance/personal/e1", [{"_id": "a1", "date": "2024-05-01"}])

    assert store.fetch().success
    assert store.items == [{"_id": "a1", "date": "2024-05-01"}]


def test_employee_cannot_read_someone_else(api, session_store, sign_in):
    sign_in(role="EMPLOYEE", user_id="e1")
    store = _store(api, session_store)

    result = store.fetch_personal("e2")

    assert result.error == "You can only view your own records"
    assert api.calls == []


def test_check_in_appends_to_loaded_history(api, session_store, sign_in):
    sign_in(role="EMPLOYEE", user_id="e1")
    store = _store(api, session_store)
    api.script("GET", "/attendance/personal/e1", [{"_id": "a1"}])
    api.script("POST", "/attendance/check-in", {"message": "Checked in", "attendance": {"_id": "a2", "checkIn": "09:00"}})
    api.script("POST", "/attendance/check-out", {"attendance": {"_id": "a2", "checkIn": "09:00", "checkOut": "17:00"}})
    store.fetch()

    store.check_in()
    store.check_out()

    assert api.calls_to("POST", "/attendance/check-in")[0][2] == {"employeeId": "e1"}
    assert store.items == [{"_id": "a1"}, {"_id": "a2", "checkIn": "09:00", "checkOut": "17:00"}]


def test_double_check_in_reports_backend_message(api, session_store, sign_in):
    sign_in(role="EMPLOYEE", user_id="e1")
    store = _store(api, session_store)
    api.script("POST", "/attendance/check-in", ApiError("Bad", status=400, payload={"message": "Already checked in today"}))

    result = store.check_in()

    assert result.error == "Already checked in today"
    assert store.items == []


def test_report_is_staff_only(api, session_store, sign_in):
    sign_in(role="EMPLOYEE", user_id="e1")
    store = _store(api, session_store)

    assert not store.fetch_all().success
    assert api.calls_to("GET", "/attendance/all") == []


def test_report_for_hr(api, session_store, sign_in):
    sign_in(role="HR")
    store = _store(api, session_store)
    api.script("GET", "/attendance/all", [{"_id": "a1"}])

    result = store.fetch_all({"date": "2024-05-01"})

    assert result.data == [{"_id": "a1"}]
    assert api.calls_to("GET", "/attendance/all")[0][3] == {"date": "2024-05-01"}
