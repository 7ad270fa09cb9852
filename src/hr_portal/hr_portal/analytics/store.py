from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.domain_store import CachedValue, DomainStore
from ..core.exceptions import DomainError
from ..core.result import Result
from .model import AnalyticsSnapshot


class AnalyticsStore(DomainStore):
    """Dashboard analytics (ADMIN/HR). Holds one snapshot instead of a collection."""

    resource = "dashboard"
    plural = "analytics"
    supports = frozenset()

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._snapshot = CachedValue(self.plural, AnalyticsSnapshot())

    @property
    def data(self) -> AnalyticsSnapshot:
        return self._snapshot.value

    @property
    def loading(self) -> bool:
        return self._snapshot.loading

    @property
    def error(self) -> Optional[str]:
        return self._snapshot.error

    def snapshot(self) -> dict:
        return {"analytics": self.data.to_dict(), "loading": self.loading, "error": self.error}

    def reset(self) -> None:
        super().reset()
        self._snapshot.clear()

    def fetch(self, params: Optional[Mapping[str, Any]] = None) -> Result:
        try:
            self._authorize(self.read_roles)
        except DomainError as e:
            return Result.fail(str(e))
        return self._load(
            self._snapshot,
            f"/{self.resource}/analytics",
            params,
            parse=AnalyticsSnapshot.from_payload,
        )
