from __future__ import annotations

from typing import Any, Iterable

from ..api.shapes import record_id, unwrap
from ..common.domain_store import DomainStore
from ..common.reconcile import replace_record
from ..core.exceptions import DomainError
from ..core.result import Result


class DepartmentStore(DomainStore):
    resource = "departments"
    singular = "department"
    plural = "departments"
    auto_fetch = True

    def assign_employees(self, department_id: Any, employee_ids: Iterable[Any]) -> Result:
        try:
            self._authorize(self.write_roles)
            body = self._api.post(
                f"{self.record_path(department_id)}/assign-employees",
                {"employeeIds": [str(e) for e in employee_ids]},
            )
        except DomainError as e:
            return self._action_failed("Failed to assign employees", e)

        department = unwrap(body, "department")
        if record_id(department) is not None and str(record_id(department)) == str(department_id):
            self._collection.patch(lambda items: replace_record(items, department_id, department))
        return Result.ok(department)
