"""Cooperative cancellation for in-flight API calls."""

import threading
from typing import Callable, List, Optional

from .errors import RequestAborted


class CancelToken:
    """Caller-owned handle that aborts the calls it is passed to.

    A token may be shared by several calls (e.g. every request a screen
    issued) and cancelled from any thread. Once cancelled it stays cancelled.
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []
        self._timer: Optional[threading.Timer] = None

    @classmethod
    def after(cls, seconds: float) -> "CancelToken":
        """Token that cancels itself once ``seconds`` have elapsed."""
        token = cls()
        if seconds and seconds > 0:
            token._timer = threading.Timer(seconds, token.cancel)
            token._timer.daemon = True
            token._timer.start()
        return token

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Trigger the token and run registered callbacks once."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
            if self._timer is not None:
                self._timer.cancel()
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` on cancel (immediately if already cancelled).

        Returns a function that unregisters the callback.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                registered = True
            else:
                registered = False
        if not registered:
            callback()

        def unregister() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unregister

    def raise_if_cancelled(self, method: str = "", url: str = "") -> None:
        if self.cancelled:
            raise RequestAborted(f"{method} {url} aborted".strip())
