from __future__ import annotations

from datetime import date

from hr_portal.core.exceptions import ApiError
from hr_portal.payroll.store import PayrollStore


def _store(api, session_store):
    return PayrollStore(api, session_store, debounce_seconds=0.02)


def test_generate_refetches_the_month(api, session_store, sign_in):
    sign_in(role="HR")
    store = _store(api, session_store)
    api.script("POST", "/payrolls/generate", {"message": "Payroll generated for 2 employees"})
    api.script("GET", "/payrolls", [{"_id": "p1"}, {"_id": "p2"}])

    result = store.generate("5", "2024")

    assert result.success
    assert result.message == "Payroll generated for 2 employees"
    assert api.calls_to("POST", "/payrolls/generate")[0][2] == {"month": 5, "year": 2024}
    assert api.calls_to("GET", "/payrolls")[0][3] == {"month": 5, "year": 2024}
    assert len(store.items) == 2


def test_generate_rejects_bad_month(api, session_store, sign_in):
    sign_in(role="HR")
    store = _store(api, session_store)

    result = store.generate(13, 2024)

    assert result.error == "Month must be between 1 and 12"
    assert api.calls == []


def test_generate_failure_keeps_payrolls(api, session_store, sign_in):
    sign_in(role="ADMIN")
    store = _store(api, session_store)
    api.script("GET", "/payrolls", [{"_id": "p1"}])
    api.script("POST", "/payrolls/generate", ApiError("Conflict", status=409, payload={}))
    store.fetch_month(4, 2024)

    result = store.generate(4, 2024)

    assert result.error == "Failed to generate payroll"
    assert store.items == [{"_id": "p1"}]


def test_mark_paid_sends_status_and_date(api, session_store, sign_in):
    sign_in(role="HR")
    store = _store(api, session_store)
    api.script("GET", "/payrolls", [{"_id": "p1", "status": "Pending"}])
    api.script("PUT", "/payrolls/p1", {"payroll": {"_id": "p1", "status": "Paid"}})
    store.fetch_month(4, 2024)

    result = store.mark_paid("p1", date(2024, 5, 1))

    assert result.success
    assert api.calls_to("PUT", "/payrolls/p1")[0][2] == {"status": "Paid", "paymentDate": "2024-05-01"}
    assert store.items == [{"_id": "p1", "status": "Paid"}]


def test_payroll_records_are_not_created_directly(api, session_store, sign_in):
    sign_in(role="HR")
    store = _store(api, session_store)

    assert not store.create({"employeeId": "e1"}).success


def test_employee_history(api, session_store, sign_in):
    sign_in(role="EMPLOYEE", user_id="e1")
    store = _store(api, session_store)
    api.script("GET", "/payrolls/my-history", [{"_id": "p1"}])

    assert store.fetch_my_history().data == [{"_id": "p1"}]
    assert not store.fetch_employee_history("e7").success


def test_generate_reports_a_failed_reload(api, session_store, sign_in):
    sign_in(role="HR")
    store = _store(api, session_store)
    api.script("GET", "/payrolls", [{"_id": "old-month"}], ApiError("Server error", status=500, payload={}))
    api.script("POST", "/payrolls/generate", {"message": "Payroll generated"})
    store.fetch_month(3, 2024)

    result = store.generate(4, 2024)

    assert result.success
    assert result.data is None
    assert result.message == "Payroll generated. Reload failed: Failed to fetch payrolls"
