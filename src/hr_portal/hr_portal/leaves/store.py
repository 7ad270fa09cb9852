from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from ..api.shapes import record_id, unwrap
from ..auth.model import Session
from ..common.domain_store import ALL_ROLES, CachedCollection, DomainStore
from ..common.reconcile import prepend_record, replace_record
from ..core.enums import RequestStatus
from ..core.exceptions import DomainError, ValidationError
from ..core.result import Result


class LeaveStore(DomainStore):
    """Leave types, the caller's own requests and (for ADMIN/HR) every request.

    ``items`` holds every request; ``my_leaves`` and ``leave_types`` are kept
    alongside with the same fetch sequencing.
    """

    resource = "leaves"
    singular = "leave request"
    plural = "leaves"
    supports = frozenset()

    def __init__(self, *args: Any, **kwargs: Any):
        self._mine = CachedCollection("my leaves")
        self._types = CachedCollection("leave types")
        super().__init__(*args, **kwargs)

    @property
    def all_leaves(self) -> list:
        return self.items

    @property
    def my_leaves(self) -> list:
        return self._mine.items

    @property
    def leave_types(self) -> list:
        return self._types.items

    @property
    def loading(self) -> bool:
        return self._collection.loading or self._mine.loading

    def snapshot(self) -> dict:
        return {
            "leaveTypes": self.leave_types,
            "myLeaves": self.my_leaves,
            "allLeaves": self.all_leaves,
            "loading": self.loading,
            "error": self.error or self._mine.error,
        }

    def reset(self) -> None:
        super().reset()
        self._mine.clear()
        self._types.clear()

    def _on_session_change(self, session: Session) -> None:
        super()._on_session_change(session)
        if session.authenticated and not self._types.items:
            self.fetch_types()

    def collection_path(self) -> str:
        return f"/{self.resource}/all"

    def fetch_all(self) -> Result:
        return self.fetch()

    def fetch_types(self) -> Result:
        try:
            self._authorize(ALL_ROLES)
        except DomainError as e:
            return Result.fail(str(e))
        return self._load(self._types, f"/{self.resource}/types", key="leaveTypes")

    def fetch_my(self, employee_id: Optional[Any] = None) -> Result:
        try:
            employee_id = self._scoped_employee_id(employee_id)
        except DomainError as e:
            return Result.fail(str(e))
        return self._load(self._mine, f"/{self.resource}/personal/{employee_id}")

    def apply(self, leave: Mapping[str, Any]) -> Result:
        try:
            data = dict(leave)
            data["employeeId"] = self._scoped_employee_id(data.get("employeeId"))
            for field in ("leaveTypeId", "startDate", "endDate"):
                if not data.get(field):
                    raise ValidationError(f"{field} is required")
            if str(data["endDate"]) < str(data["startDate"]):
                raise ValidationError("End date cannot be before start date")
            body = self._api.post(f"/{self.resource}/apply", data)
        except DomainError as e:
            return self._action_failed("Failed to apply", e)

        request = unwrap(body, "leaveRequest")
        self._mine.patch(lambda items: prepend_record(items, request))
        return Result.ok(request)

    def update_status(self, leave_id: Any, status: Union[RequestStatus, str]) -> Result:
        value = status.value if isinstance(status, RequestStatus) else str(status)
        try:
            self._authorize(self.write_roles)
            body = self._api.put(f"/{self.resource}/{leave_id}/status", {"status": value})
        except DomainError as e:
            return self._action_failed("Failed to update", e)

        request = unwrap(body, "request")
        if record_id(request) is not None:
            self._collection.patch(lambda items: replace_record(items, leave_id, request))
            self._mine.patch(lambda items: replace_record(items, leave_id, request))
        return Result.ok(request)

    def approve(self, leave_id: Any) -> Result:
        return self.update_status(leave_id, RequestStatus.APPROVED)

    def reject(self, leave_id: Any) -> Result:
        return self.update_status(leave_id, RequestStatus.REJECTED)
