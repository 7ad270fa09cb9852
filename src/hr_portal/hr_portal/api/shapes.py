"""Shape detection for backend responses.

The backend is not consistent about envelopes (bare list vs ``{"employees": [...]}``,
``token`` vs ``accessToken``, role as string or object). These helpers turn
every variant into one canonical value at the store boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.exceptions import ApiError, DomainError

ID_FIELDS = ("_id", "id")


@dataclass(frozen=True)
class Page:
    items: list
    total_pages: Optional[int] = None


def extract_token(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    token = body.get("accessToken") or body.get("token")
    return str(token) if token else None


def extract_collection(body: Any, key: str) -> Page:
    """Normalize a list response into items plus optional page count."""
    if isinstance(body, list):
        return Page(items=list(body))
    if isinstance(body, dict):
        items = body.get(key)
        if isinstance(items, list):
            return Page(items=list(items), total_pages=_page_count(body.get("totalPages")))
    return Page(items=[])


def _page_count(value: Any) -> int:
    """Wrapped responses without a usable page count are one page."""
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 1
    return count if count > 0 else 1


def unwrap(body: Any, key: Optional[str]) -> Any:
    """Return ``body[key]`` when the record comes wrapped, else the body itself."""
    if key and isinstance(body, dict) and key in body:
        return body[key]
    return body


def record_id(record: Any) -> Any:
    if isinstance(record, dict):
        for field in ID_FIELDS:
            if record.get(field) is not None:
                return record[field]
    return None


def message_of(body: Any) -> Optional[str]:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


def error_message(exc: DomainError, fallback: str) -> str:
    """User-facing message: the backend's when it sent one, else ``fallback``."""
    if isinstance(exc, ApiError):
        backend_message = exc.payload_field("message")
        return str(backend_message) if backend_message else fallback
    return str(exc) or fallback
