"""Session store: the single owner of the persisted token and identity.

States: UNRESOLVED -> AUTHENTICATED | ANONYMOUS. Resolution is a local
storage inspection, never a network round trip.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Callable, List, MutableMapping, Optional

from ..api.client import ApiClient
from ..api.shapes import error_message, extract_token, message_of
from ..common.validators import require_non_empty, require_role
from ..core.constants import IDENTITY_STORAGE_KEY, TOKEN_STORAGE_KEY
from ..core.enums import STAFF_ROLES, SessionState
from ..core.exceptions import ApiError, AuthorizationError, DomainError, UnauthorizedError
from ..core.result import Result
from .model import Identity, Session

_logger = logging.getLogger(__name__)

SessionListener = Callable[[Session], None]


class SessionStore:
    def __init__(self, api: ApiClient, storage: MutableMapping[str, str]):
        self._api = api
        self._storage = storage
        self._lock = threading.RLock()
        self._session = Session()
        self._listeners: List[SessionListener] = []
        self._unauthorized = False

    # -- state -----------------------------------------------------------

    @property
    def session(self) -> Session:
        with self._lock:
            return self._session

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def identity(self) -> Optional[Identity]:
        return self.session.identity

    @property
    def unauthorized(self) -> bool:
        """True once the backend answered 401 during the current session."""
        return self._unauthorized

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Call ``listener`` on every session transition. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, session: Session) -> None:
        with self._lock:
            self._session = session
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(session)
            except Exception:
                _logger.exception("Session listener %r failed", listener)

    # -- persistence -----------------------------------------------------

    def _read_identity(self) -> Optional[dict]:
        raw = self._storage.get(IDENTITY_STORAGE_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            _logger.warning("Discarding unreadable cached identity")
            return None
        return data if isinstance(data, dict) else None

    def _persist(self, token: str, identity: Identity) -> None:
        self._storage[TOKEN_STORAGE_KEY] = token
        self._storage[IDENTITY_STORAGE_KEY] = json.dumps(identity.raw)

    def _clear(self) -> None:
        self._storage.pop(TOKEN_STORAGE_KEY, None)
        self._storage.pop(IDENTITY_STORAGE_KEY, None)

    # -- operations ------------------------------------------------------

    def resolve(self) -> Session:
        """Restore the session from storage, trusting the cached identity."""
        token = self._storage.get(TOKEN_STORAGE_KEY)
        cached = self._read_identity()

        if token:
            # A token without a cached identity (older client versions) still counts as signed in, role unknown.
            identity = Identity.from_payload(cached or {})
            session = Session(state=SessionState.AUTHENTICATED, identity=identity, token=token)
        else:
            if cached is not None:
                self._storage.pop(IDENTITY_STORAGE_KEY, None)
            session = Session(state=SessionState.ANONYMOUS)

        self._transition(session)
        return session

    def login(self, email: str, password: str) -> Result:
        try:
            body = self._api.post("/auth/login", {"email": email, "password": password})
        except ApiError as e:
            approval_status = e.payload_field("approvalStatus")
            if e.status == 403 and approval_status:
                _logger.info("Login blocked for %s: account %s", email, approval_status)
                return Result.fail(
                    error_message(e, "Account is pending approval"),
                    status=403,
                    approval_status=str(approval_status),
                )
            _logger.warning("Login failed for %s: %s", email, e)
            return Result.fail(error_message(e, "Login failed"), status=e.status)

        token = extract_token(body)
        if not token:
            _logger.warning("Login failed: access token missing in response")
            return Result.fail("Login failed: Token missing in response")

        identity = Identity.from_payload(body.get("user"), email=email)
        self._persist(token, identity)
        self._unauthorized = False
        self._transition(Session(state=SessionState.AUTHENTICATED, identity=identity, token=token))
        return Result.ok(identity)

    def signup(self, name: str, email: str, password: str) -> Result:
        try:
            body = self._api.post("/auth/signup", {"name": name, "email": email, "password": password})
        except ApiError as e:
            _logger.warning("Signup failed for %s: %s", email, e)
            return Result.fail(error_message(e, "Signup failed"), status=e.status)
        return Result.ok(message=message_of(body))

    def register(self, name: str, email: str, password: str, role_name: str = "EMPLOYEE") -> Result:
        """Create an account on behalf of someone else (ADMIN/HR)."""
        try:
            identity = self.identity
            if identity is None or not identity.has_role(*STAFF_ROLES):
                raise AuthorizationError("You are not allowed to register users")
            payload = {
                "name": require_non_empty(name, "Name"),
                "email": require_non_empty(email, "Email"),
                "password": require_non_empty(password, "Password"),
                "roleName": require_role(role_name).value,
            }
            body = self._api.post("/auth/register", payload)
        except DomainError as e:
            _logger.warning("Register failed for %s: %s", email, e)
            return Result.fail(error_message(e, "Registration failed"), status=getattr(e, "status", None))
        return Result.ok(message=message_of(body))

    def logout(self) -> None:
        with self._lock:
            already_anonymous = self._session.state == SessionState.ANONYMOUS
        if already_anonymous and TOKEN_STORAGE_KEY not in self._storage and IDENTITY_STORAGE_KEY not in self._storage:
            return
        self._clear()
        self._unauthorized = False
        self._transition(Session(state=SessionState.ANONYMOUS))

    def change_password(self, old_password: str, new_password: str) -> Result:
        try:
            require_non_empty(new_password, "New password")
            body = self._api.post(
                "/auth/change-password",
                {"oldPassword": old_password, "newPassword": new_password},
            )
        except DomainError as e:
            _logger.warning("Change password failed: %s", e)
            return Result.fail(error_message(e, "Failed to change password"), status=getattr(e, "status", None))
        return Result.ok(message=message_of(body))

    def handle_unauthorized(self, error: UnauthorizedError) -> None:
        """API client hook. Flags the session; logging out is left to the caller."""
        if self.state == SessionState.AUTHENTICATED:
            self._unauthorized = True
            _logger.warning("Backend rejected the session token: %s", error.message)
