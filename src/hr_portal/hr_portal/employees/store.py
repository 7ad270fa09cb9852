from __future__ import annotations

from typing import Any, Mapping, Optional

from ..api.shapes import record_id, unwrap
from ..common.domain_store import ALL_ROLES, DomainStore
from ..common.reconcile import replace_record
from ..core.constants import DEFAULT_PAGE_LIMIT
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..core.result import Result

FILTER_FIELDS = ("search", "department", "designation", "status")


class EmployeeStore(DomainStore):
    """Paginated employee directory. Each fetch replaces the page; pages are never accumulated."""

    resource = "employees"
    record_key = "employee"
    singular = "employee"
    plural = "employees"
    delete_roles = frozenset({Role.ADMIN})
    auto_fetch = True

    def __init__(self, *args: Any, page_limit: int = DEFAULT_PAGE_LIMIT, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._page_limit = page_limit

    def page_params(self, filters: Optional[Mapping[str, Any]] = None, *, page: int = 1) -> dict:
        filters = filters or {}
        params = {name: filters.get(name) for name in FILTER_FIELDS if filters.get(name)}
        params["page"] = max(int(page), 1)
        params["limit"] = self._page_limit
        return params

    def fetch_page(self, filters: Optional[Mapping[str, Any]] = None, *, page: int = 1) -> Result:
        return self.fetch(self.page_params(filters, page=page))

    def search_page(self, filters: Optional[Mapping[str, Any]] = None, *, page: int = 1) -> None:
        self.search(self.page_params(filters, page=page))

    def fetch_my_profile(self) -> Result:
        try:
            self._authorize(ALL_ROLES)
            body = self._api.get(f"{self.collection_path()}/profile/me")
        except DomainError as e:
            return self._action_failed("Failed to fetch profile", e)
        return Result.ok(unwrap(body, "employee"))

    def update_my_profile(self, patch: Mapping[str, Any]) -> Result:
        try:
            self._authorize(ALL_ROLES)
            body = self._api.put(f"{self.collection_path()}/profile/me", dict(patch))
        except DomainError as e:
            return self._action_failed("Failed to update profile", e)

        employee = unwrap(body, "employee")
        rid = record_id(employee)
        if rid is not None:
            self._collection.patch(lambda items: replace_record(items, rid, employee))
        return Result.ok(employee)
