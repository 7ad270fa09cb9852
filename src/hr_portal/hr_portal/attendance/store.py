from __future__ import annotations

from typing import Any, Mapping, Optional

from ..api.shapes import record_id, unwrap
from ..common.domain_store import ALL_ROLES, DomainStore
from ..common.reconcile import append_record
from ..core.exceptions import DomainError
from ..core.result import Result


class AttendanceStore(DomainStore):
    """Personal attendance history plus check-in/out.

    ``items`` is the history of the employee last fetched with ``fetch_personal``.
    """

    resource = "attendance"
    singular = "attendance record"
    plural = "attendance"
    read_roles = ALL_ROLES
    supports = frozenset()

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._history_for: Optional[str] = None

    def fetch(self, params: Optional[Mapping[str, Any]] = None) -> Result:
        return self.fetch_personal(None, params)

    def fetch_personal(self, employee_id: Optional[Any] = None, params: Optional[Mapping[str, Any]] = None) -> Result:
        try:
            employee_id = self._scoped_employee_id(employee_id)
        except DomainError as e:
            return Result.fail(str(e))
        self._history_for = employee_id
        return self._load(self._collection, f"{self.collection_path()}/personal/{employee_id}", params)

    def fetch_all(self, params: Optional[Mapping[str, Any]] = None) -> Result:
        """Attendance report across employees (ADMIN/HR). Not cached."""
        try:
            self._authorize(self.write_roles)
            body = self._api.get(f"{self.collection_path()}/all", params=params)
        except DomainError as e:
            return self._action_failed("Failed to fetch reports", e)
        return Result.ok(body)

    def check_in(self, employee_id: Optional[Any] = None) -> Result:
        return self._punch("check-in", employee_id, "Failed to check in")

    def check_out(self, employee_id: Optional[Any] = None) -> Result:
        return self._punch("check-out", employee_id, "Failed to check out")

    def _punch(self, action: str, employee_id: Optional[Any], fallback: str) -> Result:
        try:
            employee_id = self._scoped_employee_id(employee_id)
            body = self._api.post(f"{self.collection_path()}/{action}", {"employeeId": employee_id})
        except DomainError as e:
            return self._action_failed(fallback, e)

        record = unwrap(body, "attendance")
        if record_id(record) is not None and self._history_for == employee_id:
            self._collection.patch(lambda items: append_record(items, record))
        return Result.ok(record)
