from __future__ import annotations

from hr_portal.salaries.store import SalaryStore


def _store(api, session_store):
    return SalaryStore(api, session_store, debounce_seconds=0.02)


def test_set_salary_unwraps_and_appends(api, session_store, sign_in):
    sign_in(role="HR")
    store = _store(api, session_store)
    api.script("POST", "/salaries", {"salary": {"_id": "s1", "basic": 1000}})

    result = store.set_salary({"employeeId": "e1", "basic": 1000})

    assert result.success
    assert store.items == [{"_id": "s1", "basic": 1000}]


def test_salaries_cannot_be_deleted(api, session_store, sign_in):
    sign_in(role="ADMIN")
    store = _store(api, session_store)

    result = store.remove("s1")

    assert result.error == "Cannot remove salaries from the portal"
    assert api.calls == []


def test_employee_only_sees_own_salary(api, session_store, sign_in):
    sign_in(role="EMPLOYEE", user_id="e1")
    store = _store(api, session_store)
    api.script("GET", "/salaries/employee/e1", {"basic": 500})

    assert store.fetch_by_employee().data == {"basic": 500}
    assert not store.fetch_by_employee("e2").success
    assert api.calls_to("GET", "/salaries/employee/e2") == []


def test_hr_may_look_up_any_employee(api, session_store, sign_in):
    sign_in(role="HR", user_id="h1")
    store = _store(api, session_store)

    assert store.fetch_by_employee("e2").success
    assert api.calls_to("GET", "/salaries/employee/e2")
