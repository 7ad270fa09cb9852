"""HTTP client for the HR backend REST API.

Every request carries ``Authorization: Bearer <token>`` when a token is
persisted. Transport problems are converted into ``ApiError`` subclasses here
and nowhere else.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional

import requests

from ..core.constants import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS, TOKEN_STORAGE_KEY
from ..core.exceptions import ApiError, NetworkError, UnauthorizedError

_logger = logging.getLogger(__name__)

UnauthorizedListener = Callable[[UnauthorizedError], None]


class ApiClient:
    def __init__(
        self,
        storage: Mapping[str, str],
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._storage = storage
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_http = session is None
        self._http = session or requests.Session()
        self._unauthorized_listeners: List[UnauthorizedListener] = []

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        """Release the pooled connections of a session this client created itself."""
        if self._owns_http:
            self._http.close()

    def on_unauthorized(self, listener: UnauthorizedListener) -> None:
        """Register a callback for 401 responses. The client itself never logs the user out."""
        self._unauthorized_listeners.append(listener)

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self._storage.get(TOKEN_STORAGE_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(self, method: str, path: str, *, json: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        url = self.url_for(path)
        try:
            response = self._http.request(
                method,
                url,
                headers=self._headers(),
                json=json,
                params=_clean_params(params),
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            _logger.error("%s %s failed without response: %s", method, url, e)
            raise NetworkError(f"Connection failed: {e}") from e

        body = _decode(response)
        if response.status_code >= 400:
            message = _message_from(body) or f"Request failed with status {response.status_code}"
            if response.status_code == 401:
                _logger.warning("Unauthorized access: %s %s", method, url)
                error = UnauthorizedError(message, status=401, payload=body)
                for listener in list(self._unauthorized_listeners):
                    listener(error)
                raise error
            _logger.info("%s %s -> %s: %s", method, url, response.status_code, message)
            raise ApiError(message, status=response.status_code, payload=body)
        return body

    def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any = None, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("POST", path, json=body, params=params)

    def put(self, path: str, body: Any = None, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("PUT", path, json=body, params=params)

    def delete(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("DELETE", path, params=params)


def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[dict]:
    # Empty filters ("" or None) are not sent, matching what the backend expects from form fields.
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None and v != ""}


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _message_from(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        return str(message) if message else None
    return None
