"""One client workspace (container) per signed-in browser session.

The browser cookie only carries an opaque workspace id; the bearer token and
identity stay server side in the workspace's storage. A workspace is opened at
login and closed at logout. Requests without one are served by a throwaway
anonymous container that is released when the request ends.
"""

from __future__ import annotations

import logging
import secrets
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Callable, MutableMapping, Optional

from flask import current_app, g, session

from ..common.storage import JsonFileStorage, MemoryStorage
from ..container import Container
from ..core.constants import DEFAULT_WORKSPACE_LIMIT

_logger = logging.getLogger(__name__)

EXTENSION_KEY = "hr_portal.workspaces"
WORKSPACE_COOKIE_KEY = "wid"

ContainerFactory = Callable[[MutableMapping[str, str]], Container]


class WorkspaceRegistry:
    """Open workspaces by id, least recently used first out once ``limit`` is exceeded."""

    def __init__(
        self,
        factory: ContainerFactory,
        *,
        storage_dir: Optional[str] = None,
        limit: int = DEFAULT_WORKSPACE_LIMIT,
    ):
        self._factory = factory
        self._storage_dir = Path(storage_dir) if storage_dir else None
        self._limit = max(int(limit), 1)
        self._lock = threading.Lock()
        self._workspaces: "OrderedDict[str, Container]" = OrderedDict()

    def _path_for(self, wid: str) -> Optional[Path]:
        return self._storage_dir / f"{wid}.json" if self._storage_dir else None

    def anonymous(self) -> Container:
        """A container with no persisted state, never registered."""
        return self._factory(MemoryStorage())

    def find(self, wid: str) -> Optional[Container]:
        """The open workspace for ``wid``, reopened from disk when it was persisted."""
        with self._lock:
            container = self._workspaces.get(wid)
            if container is not None:
                self._workspaces.move_to_end(wid)
                return container
            path = self._path_for(wid)
            if path is None or not path.exists():
                return None
            return self._register(wid, self._factory(JsonFileStorage(path)))

    def open(self, wid: str) -> Container:
        with self._lock:
            container = self._workspaces.get(wid)
            if container is not None:
                self._workspaces.move_to_end(wid)
                return container
            path = self._path_for(wid)
            storage = JsonFileStorage(path) if path else MemoryStorage()
            return self._register(wid, self._factory(storage))

    def _register(self, wid: str, container: Container) -> Container:
        self._workspaces[wid] = container
        _logger.debug("Opened workspace %s (%s)", wid[:8], container.session_store.state.value)
        while len(self._workspaces) > self._limit:
            old_wid, old = self._workspaces.popitem(last=False)
            _logger.info("Evicting idle workspace %s", old_wid[:8])
            old.close()
        return container

    def discard(self, wid: str) -> None:
        with self._lock:
            container = self._workspaces.pop(wid, None)
        if container is not None:
            container.close()
        path = self._path_for(wid)
        if path is not None and path.exists():
            path.unlink()

    def __contains__(self, wid: object) -> bool:
        with self._lock:
            return wid in self._workspaces

    def __len__(self) -> int:
        with self._lock:
            return len(self._workspaces)


def _registry() -> WorkspaceRegistry:
    return current_app.extensions[EXTENSION_KEY]


def current_container() -> Container:
    """The caller's workspace, or an anonymous container for this request only."""
    if "container" not in g:
        wid = session.get(WORKSPACE_COOKIE_KEY)
        container = _registry().find(wid) if wid else None
        if container is None:
            container = _registry().anonymous()
            g.anonymous_container = container
        g.container = container
    return g.container


def open_workspace() -> Container:
    """Make sure the caller owns a registered workspace, e.g. before signing in."""
    current = current_container()
    if "anonymous_container" not in g:
        return current
    wid = session.get(WORKSPACE_COOKIE_KEY) or secrets.token_urlsafe(24)
    session[WORKSPACE_COOKIE_KEY] = wid
    release_anonymous()
    g.container = _registry().open(wid)
    return g.container


def close_workspace() -> None:
    """Drop the caller's workspace and forget its id."""
    wid = session.pop(WORKSPACE_COOKIE_KEY, None)
    if wid:
        _registry().discard(wid)
    g.pop("container", None)


def release_anonymous(_exc: Optional[BaseException] = None) -> None:
    """Close the per-request anonymous container, if one was made."""
    container = g.pop("anonymous_container", None)
    if container is not None:
        container.close()
        if g.get("container") is container:
            g.pop("container", None)
