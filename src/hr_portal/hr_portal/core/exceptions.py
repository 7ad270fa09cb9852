from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for everything a store turns into a failure result."""


class ValidationError(DomainError):
    """Raised when form input is rejected before reaching the backend."""


class AuthenticationError(DomainError):
    """Raised when there is no authenticated identity for an action."""


class AuthorizationError(DomainError):
    """Raised when the identity's role lacks permission for an action."""


class ApiError(DomainError):
    """HTTP-level failure carrying the backend status and error body."""

    def __init__(self, message: str, *, status: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload

    def payload_field(self, name: str) -> Any:
        if isinstance(self.payload, dict):
            return self.payload.get(name)
        return None


class UnauthorizedError(ApiError):
    """401 from the backend. Reported distinctly, never clears the session by itself."""


class NetworkError(ApiError):
    """No response received (connection refused, DNS, timeout)."""
