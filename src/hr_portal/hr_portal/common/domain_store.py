"""Shared fetch/create/update/remove pattern for one REST resource family.

Subclasses set the resource path and labels. The cached collection is
replaced wholesale on fetch and patched in place after successful writes;
it is never re-fetched behind the caller's back.

Fetches race freely. Each one is tagged with a sequence number and a response
older than the latest dispatched fetch is discarded instead of overwriting
newer data.
"""

from __future__ import annotations

import logging
import threading
from functools import partial
from typing import Any, Callable, ClassVar, FrozenSet, Mapping, Optional, Tuple

from ..api.client import ApiClient
from ..api.shapes import Page, error_message, extract_collection, unwrap
from ..auth.model import Identity, Session
from ..auth.session_store import SessionStore
from ..core.constants import DEFAULT_SEARCH_DEBOUNCE_SECONDS
from ..core.enums import STAFF_ROLES, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError
from ..core.result import Result
from .debounce import Debouncer
from .reconcile import append_record, remove_record, replace_record

_logger = logging.getLogger(__name__)

ALL_ROLES: FrozenSet[Role] = frozenset(Role)


class CachedValue:
    """One cached value with its loading/error flags and fetch sequence."""

    def __init__(self, name: str, empty: Any = None):
        self.name = name
        self._lock = threading.Lock()
        self._empty = empty
        self._value = empty
        self._error: Optional[str] = None
        self._in_flight = 0
        self._seq = 0

    @property
    def value(self) -> Any:
        with self._lock:
            return self._value

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    @property
    def error(self) -> Optional[str]:
        with self._lock:
            return self._error

    def begin(self) -> int:
        with self._lock:
            self._seq += 1
            self._in_flight += 1
            return self._seq

    def end(self) -> None:
        with self._lock:
            self._in_flight -= 1

    def apply(self, seq: int, value: Any) -> bool:
        """Store ``value`` unless a newer fetch was dispatched meanwhile."""
        with self._lock:
            if seq != self._seq:
                return False
            self._value = value
            self._error = None
            return True

    def fail(self, seq: int, message: str) -> None:
        with self._lock:
            if seq == self._seq:
                self._error = message

    def patch(self, fn: Callable[[Any], Any]) -> None:
        with self._lock:
            self._value = fn(self._value)

    def clear(self) -> None:
        with self._lock:
            # Bumping the sequence also drops any fetch still in flight.
            self._seq += 1
            self._value = self._empty
            self._error = None


class CachedCollection(CachedValue):
    """A cached list page: items plus the optional page count."""

    def __init__(self, name: str):
        super().__init__(name, Page(items=[]))

    @property
    def items(self) -> list:
        return list(self.value.items)

    @property
    def total_pages(self) -> Optional[int]:
        return self.value.total_pages

    def patch(self, fn: Callable[[list], list]) -> None:
        super().patch(lambda page: Page(items=fn(page.items), total_pages=page.total_pages))


def _owner_of(session: Session) -> Optional[Tuple[Optional[str], Optional[str]]]:
    if not session.authenticated:
        return None
    return (session.identity.id, session.identity.email)

class DomainStore:
    resource: ClassVar[str] = ""
    # Key wrapping the list in paginated/enveloped responses; defaults to ``resource``.
    collection_key: ClassVar[Optional[str]] = None
    # Key wrapping a single record in write responses (``{"employee": {...}}``); None = bare record.
    record_key: ClassVar[Optional[str]] = None
    singular: ClassVar[str] = "record"
    plural: ClassVar[str] = "records"

    read_roles: ClassVar[FrozenSet[Role]] = STAFF_ROLES
    write_roles: ClassVar[FrozenSet[Role]] = STAFF_ROLES
    delete_roles: ClassVar[FrozenSet[Role]] = STAFF_ROLES
    # Generic writes the backend exposes for this resource.
    supports: ClassVar[FrozenSet[str]] = frozenset({"create", "update", "remove"})
    auto_fetch: ClassVar[bool] = False

    def __init__(
        self,
        api: ApiClient,
        session: SessionStore,
        *,
        debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    ):
        self._api = api
        self._session = session
        self._collection = CachedCollection(self.plural)
        self._debouncer = Debouncer(self.fetch, debounce_seconds)
        self._owner = _owner_of(session.session)
        session.subscribe(self._on_session_change)

    # -- state -----------------------------------------------------------

    @property
    def items(self) -> list:
        return self._collection.items

    @property
    def loading(self) -> bool:
        return self._collection.loading

    @property
    def error(self) -> Optional[str]:
        return self._collection.error

    @property
    def total_pages(self) -> Optional[int]:
        return self._collection.total_pages

    def snapshot(self) -> dict:
        return {
            self.plural: self.items,
            "loading": self.loading,
            "error": self.error,
            "totalPages": self.total_pages,
        }

    def reset(self) -> None:
        self._debouncer.cancel()
        self._collection.clear()

    # -- access ----------------------------------------------------------

    def _authorize(self, roles: FrozenSet[Role]) -> Identity:
        session = self._session.session
        if not session.authenticated:
            raise AuthenticationError("Please sign in to continue")
        if roles and session.role not in roles:
            raise AuthorizationError("You do not have permission for this action")
        return session.identity

    def _scoped_employee_id(self, employee_id: Optional[Any]) -> str:
        """Employees may only address their own records; ADMIN/HR may address anyone."""
        identity = self._authorize(ALL_ROLES)
        if employee_id is None:
            employee_id = identity.id
        if employee_id is None:
            raise AuthenticationError("Signed-in identity has no employee id")
        if not identity.has_role(*STAFF_ROLES) and str(employee_id) != str(identity.id):
            raise AuthorizationError("You can only view your own records")
        return str(employee_id)

    def _on_session_change(self, session: Session) -> None:
        # Another account must never see the previous one's cache.
        owner = _owner_of(session)
        if owner is None:
            self._owner = None
            self.reset()
            return
        if self._owner is not None and owner != self._owner:
            _logger.debug("Account switched, clearing cached %s", self.plural)
            self.reset()
        self._owner = owner
        if self.auto_fetch and session.role in STAFF_ROLES:
            self.fetch()

    # -- paths -----------------------------------------------------------

    def collection_path(self) -> str:
        return f"/{self.resource}"

    def record_path(self, rid: Any) -> str:
        return f"/{self.resource}/{rid}"

    # -- operations ------------------------------------------------------

    def fetch(self, params: Optional[Mapping[str, Any]] = None) -> Result:
        try:
            self._authorize(self.read_roles)
        except DomainError as e:
            return Result.fail(str(e))
        return self._load(self._collection, self.collection_path(), params)

    def _load(
        self,
        holder: CachedValue,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        key: Optional[str] = None,
        parse: Optional[Callable[[Any], Any]] = None,
    ) -> Result:
        """GET ``path`` into ``holder``. Collections by default; ``parse`` maps other bodies."""
        if parse is None:
            parse = partial(extract_collection, key=key or self.collection_key or self.resource)
        seq = holder.begin()
        try:
            body = self._api.get(path, params=params)
        except DomainError as e:
            message = f"Failed to fetch {holder.name}"
            _logger.error("Error fetching %s: %s", holder.name, e)
            holder.fail(seq, message)
            return Result.fail(error_message(e, message), status=getattr(e, "status", None))
        else:
            value = parse(body)
            if not holder.apply(seq, value):
                _logger.debug("Discarding stale %s response", holder.name)
                return Result.fail("Discarded stale response")
            return Result.ok(value.items if isinstance(value, Page) else value)
        finally:
            holder.end()

    def search(self, params: Optional[Mapping[str, Any]] = None) -> None:
        """Debounced fetch: only the last params given within the delay are sent."""
        self._debouncer.call(dict(params or {}))

    def flush_search(self) -> None:
        self._debouncer.flush()

    def create(self, record: Mapping[str, Any]) -> Result:
        try:
            self._require("create", self.write_roles)
            body = self._api.post(self.collection_path(), dict(record))
        except DomainError as e:
            return self._write_failed("add", e)
        created = unwrap(body, self.record_key)
        self._collection.patch(lambda items: append_record(items, created))
        return Result.ok(created)

    def update(self, rid: Any, patch: Mapping[str, Any]) -> Result:
        try:
            self._require("update", self.write_roles)
            body = self._api.put(self.record_path(rid), dict(patch))
        except DomainError as e:
            return self._write_failed("update", e)
        updated = unwrap(body, self.record_key)
        self._collection.patch(lambda items: replace_record(items, rid, updated))
        return Result.ok(updated)

    def remove(self, rid: Any) -> Result:
        try:
            self._require("remove", self.delete_roles)
            self._api.delete(self.record_path(rid))
        except DomainError as e:
            return self._write_failed("delete", e)
        self._collection.patch(lambda items: remove_record(items, rid))
        return Result.ok()

    def _require(self, operation: str, roles: FrozenSet[Role]) -> Identity:
        if operation not in self.supports:
            raise DomainError(f"Cannot {operation} {self.plural} from the portal")
        return self._authorize(roles)

    def _write_failed(self, verb: str, exc: DomainError) -> Result:
        return self._action_failed(f"Failed to {verb} {self.singular}", exc)

    def _action_failed(self, fallback: str, exc: DomainError) -> Result:
        _logger.warning("%s: %s", fallback, exc)
        return Result.fail(error_message(exc, fallback), status=getattr(exc, "status", None))
