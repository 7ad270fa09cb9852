from __future__ import annotations

from typing import Any

from ..common.domain_store import DomainStore
from ..common.reconcile import remove_record
from ..core.exceptions import DomainError
from ..core.result import Result


class PendingUserStore(DomainStore):
    """Accounts waiting for approval. A decided account leaves the pending list."""

    resource = "users"
    singular = "user"
    plural = "users"
    supports = frozenset()

    def collection_path(self) -> str:
        return f"/{self.resource}/pending"

    def approve(self, user_id: Any) -> Result:
        try:
            self._authorize(self.write_roles)
            self._api.put(f"{self.record_path(user_id)}/approve")
        except DomainError as e:
            return self._action_failed("Failed to approve user", e)
        self._collection.patch(lambda items: remove_record(items, user_id))
        return Result.ok(message="User approved successfully!")

    def reject(self, user_id: Any, reason: str = "") -> Result:
        try:
            self._authorize(self.write_roles)
            self._api.put(f"{self.record_path(user_id)}/reject", {"reason": reason})
        except DomainError as e:
            return self._action_failed("Failed to reject user", e)
        self._collection.patch(lambda items: remove_record(items, user_id))
        return Result.ok(message="User rejected successfully")
