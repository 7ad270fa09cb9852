from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional


class Role(str, Enum):
    """User role used for route and data-fetch authorization."""

    ADMIN = "ADMIN"
    HR = "HR"
    EMPLOYEE = "EMPLOYEE"

    @classmethod
    def normalize(cls, value: Any) -> Optional["Role"]:
        """Accept a bare string (``"HR"``) or a populated object (``{"name": "HR"}``)."""
        if isinstance(value, Role):
            return value
        if isinstance(value, Mapping):
            value = value.get("name")
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


STAFF_ROLES = frozenset({Role.ADMIN, Role.HR})


class SessionState(str, Enum):
    UNRESOLVED = "UNRESOLVED"
    AUTHENTICATED = "AUTHENTICATED"
    ANONYMOUS = "ANONYMOUS"


class ApprovalStatus(str, Enum):
    """Account approval gate, distinct from the role."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class RequestStatus(str, Enum):
    """Leave request workflow status as stored by the backend."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PayrollStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
