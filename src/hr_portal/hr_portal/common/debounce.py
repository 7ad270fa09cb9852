from __future__ import annotations

import threading
from typing import Any, Callable, Optional


class Debouncer:
    """Run ``func`` once the caller has been quiet for ``delay`` seconds.

    Each ``call`` cancels the pending one, so only the latest arguments are used.
    """

    def __init__(self, func: Callable[..., Any], delay: float):
        self._func = func
        self._delay = delay
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def call(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._delay, self._func, args=args, kwargs=kwargs)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> None:
        """Wait for the pending call, if any, to finish."""
        with self._lock:
            timer = self._timer
        if timer is not None:
            timer.join()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_alive()
