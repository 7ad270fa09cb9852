from __future__ import annotations

from typing import Any, Optional

from ..common.domain_store import ALL_ROLES, DomainStore
from ..core.exceptions import DomainError
from ..core.result import Result


class SalaryStore(DomainStore):
    resource = "salaries"
    record_key = "salary"
    singular = "salary"
    plural = "salaries"
    supports = frozenset({"create", "update"})
    auto_fetch = True

    def set_salary(self, salary: dict) -> Result:
        return self.create(salary)

    def fetch_by_employee(self, employee_id: Optional[Any] = None) -> Result:
        try:
            employee_id = self._scoped_employee_id(employee_id)
            body = self._api.get(f"{self.collection_path()}/employee/{employee_id}")
        except DomainError as e:
            return self._action_failed("Failed to fetch salary", e)
        return Result.ok(body)

    def fetch_my_salary(self) -> Result:
        try:
            self._authorize(ALL_ROLES)
            body = self._api.get(f"{self.collection_path()}/my-salary")
        except DomainError as e:
            return self._action_failed("Failed to fetch salary", e)
        return Result.ok(body)
