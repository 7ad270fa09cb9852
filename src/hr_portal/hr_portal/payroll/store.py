from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Union

from ..api.shapes import message_of
from ..common.domain_store import ALL_ROLES, DomainStore
from ..common.validators import require_month_year
from ..core.enums import PayrollStatus
from ..core.exceptions import DomainError
from ..core.result import Result

_logger = logging.getLogger(__name__)


class PayrollStore(DomainStore):
    """Monthly payroll runs. Generation has broad side effects, so it re-fetches the month it generated."""

    resource = "payrolls"
    record_key = "payroll"
    singular = "payroll"
    plural = "payrolls"
    supports = frozenset({"update"})

    def fetch_month(self, month: int, year: int) -> Result:
        return self.fetch({"month": month, "year": year})

    def generate(self, month: Any, year: Any) -> Result:
        try:
            self._authorize(self.write_roles)
            month, year = require_month_year(month, year)
            body = self._api.post(f"{self.collection_path()}/generate", {"month": month, "year": year})
        except DomainError as e:
            return self._action_failed("Failed to generate payroll", e)

        message = message_of(body) or "Payroll generated"
        reloaded = self.fetch_month(month, year)
        if not reloaded.success:
            _logger.warning("Payroll for %s/%s generated but not reloaded: %s", month, year, reloaded.error)
            return Result.ok(message=f"{message}. Reload failed: {reloaded.error}")
        return Result.ok(reloaded.data, message=message)

    def update_status(
        self,
        payroll_id: Any,
        status: Union[PayrollStatus, str],
        payment_date: Optional[Union[date, str]] = None,
    ) -> Result:
        payload: dict = {"status": status.value if isinstance(status, PayrollStatus) else str(status)}
        if payment_date is not None:
            payload["paymentDate"] = payment_date.isoformat() if isinstance(payment_date, date) else payment_date
        return self.update(payroll_id, payload)

    def mark_paid(self, payroll_id: Any, payment_date: Optional[date] = None) -> Result:
        return self.update_status(payroll_id, PayrollStatus.PAID, payment_date or date.today())

    def fetch_employee_history(self, employee_id: Optional[Any] = None) -> Result:
        try:
            employee_id = self._scoped_employee_id(employee_id)
            body = self._api.get(f"{self.collection_path()}/employee/{employee_id}")
        except DomainError as e:
            return self._action_failed("Failed to fetch history", e)
        return Result.ok(body)

    def fetch_my_history(self) -> Result:
        try:
            self._authorize(ALL_ROLES)
            body = self._api.get(f"{self.collection_path()}/my-history")
        except DomainError as e:
            return self._action_failed("Failed to fetch payroll history", e)
        return Result.ok(body)
