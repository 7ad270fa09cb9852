from __future__ import annotations

from typing import Any

from ..api.shapes import record_id, unwrap
from ..common.domain_store import DomainStore
from ..common.reconcile import replace_record
from ..core.exceptions import DomainError
from ..core.result import Result


class DesignationStore(DomainStore):
    resource = "designations"
    singular = "designation"
    plural = "designations"
    auto_fetch = True

    def assign_employee(self, designation_id: Any, employee_id: Any) -> Result:
        try:
            self._authorize(self.write_roles)
            body = self._api.post(
                f"{self.record_path(designation_id)}/assign-employee",
                {"employeeId": str(employee_id)},
            )
        except DomainError as e:
            return self._action_failed("Failed to assign employee", e)

        designation = unwrap(body, "designation")
        if record_id(designation) is not None and str(record_id(designation)) == str(designation_id):
            self._collection.patch(lambda items: replace_record(items, designation_id, designation))
        return Result.ok(designation)
