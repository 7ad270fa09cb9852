from __future__ import annotations

from dataclasses import dataclass
from typing import MutableMapping, Optional

import requests

from .analytics.store import AnalyticsStore
from .api.client import ApiClient
from .attendance.store import AttendanceStore
from .auth.guard import RouteGuard
from .auth.session_store import SessionStore
from .core.constants import DEFAULT_API_URL, DEFAULT_PAGE_LIMIT, DEFAULT_SEARCH_DEBOUNCE_SECONDS, DEFAULT_TIMEOUT_SECONDS
from .departments.store import DepartmentStore
from .designations.store import DesignationStore
from .employees.store import EmployeeStore
from .leaves.store import LeaveStore
from .payroll.store import PayrollStore
from .salaries.store import SalaryStore
from .users.store import PendingUserStore


@dataclass(frozen=True)
class Container:
    """Everything one signed-in client needs: session, guard and the domain stores."""

    api: ApiClient
    session_store: SessionStore
    guard: RouteGuard

    departments: DepartmentStore
    designations: DesignationStore
    employees: EmployeeStore
    salaries: SalaryStore
    payrolls: PayrollStore
    attendance: AttendanceStore
    leaves: LeaveStore
    analytics: AnalyticsStore
    pending_users: PendingUserStore

    def stores(self) -> tuple:
        return (
            self.departments,
            self.designations,
            self.employees,
            self.salaries,
            self.payrolls,
            self.attendance,
            self.leaves,
            self.analytics,
            self.pending_users,
        )

    def close(self) -> None:
        """Stop pending searches and release the HTTP session."""
        for store in self.stores():
            store.reset()
        self.api.close()


def build_container(
    *,
    storage: MutableMapping[str, str],
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    page_limit: int = DEFAULT_PAGE_LIMIT,
    http_session: Optional[requests.Session] = None,
    resolve: bool = True,
) -> Container:
    api = ApiClient(storage, base_url=api_url, timeout=timeout, session=http_session)
    session_store = SessionStore(api, storage)
    api.on_unauthorized(session_store.handle_unauthorized)

    store_kwargs = {"debounce_seconds": debounce_seconds}
    container = Container(
        api=api,
        session_store=session_store,
        guard=RouteGuard(),
        departments=DepartmentStore(api, session_store, **store_kwargs),
        designations=DesignationStore(api, session_store, **store_kwargs),
        employees=EmployeeStore(api, session_store, page_limit=page_limit, **store_kwargs),
        salaries=SalaryStore(api, session_store, **store_kwargs),
        payrolls=PayrollStore(api, session_store, **store_kwargs),
        attendance=AttendanceStore(api, session_store, **store_kwargs),
        leaves=LeaveStore(api, session_store, **store_kwargs),
        analytics=AnalyticsStore(api, session_store, **store_kwargs),
        pending_users=PendingUserStore(api, session_store, **store_kwargs),
    )

    # Stores subscribe in their constructors, so resolving last lets them react to a restored session.
    if resolve:
        session_store.resolve()
    return container
