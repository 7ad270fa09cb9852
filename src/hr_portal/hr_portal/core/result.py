from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Result:
    """Uniform outcome of every store action: success with optional data, or failure with a message."""

    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Optional[str] = None
    approval_status: Optional[str] = None
    status: Optional[int] = None

    @classmethod
    def ok(cls, data: Any = None, *, message: Optional[str] = None) -> "Result":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(
        cls,
        error: str,
        *,
        status: Optional[int] = None,
        approval_status: Optional[str] = None,
    ) -> "Result":
        return cls(success=False, error=error, status=status, approval_status=approval_status)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}
