"""Cooperative cancellation for conversion runs."""

import itertools
import threading
from collections.abc import Callable

from rasterfont.exceptions import BuildCancelledError


class CancellationToken:
    """A one-shot, thread-safe cancellation signal.

    The caller raises it with cancel() from any thread. Workers poll
    is_cancelled between steps, and long waits subscribe with register()
    to be woken immediately.

    Example:
        token = CancellationToken()
        unregister = token.register(lambda: print("stop"))
        token.cancel()
        unregister()
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._ids = itertools.count()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Raise the signal. Registered callbacks run once, on this thread."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()

        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run callback when the token is cancelled.

        If the token is already cancelled the callback runs immediately.

        Returns:
            A function that removes the registration
        """
        with self._lock:
            if not self._event.is_set():
                key = next(self._ids)
                self._callbacks[key] = callback
                return lambda: self._callbacks.pop(key, None)

        callback()
        return lambda: None

    def raise_if_cancelled(self, stage: str, completed: int = 0) -> None:
        """Raise BuildCancelledError if the token has been cancelled."""
        if self._event.is_set():
            raise BuildCancelledError(stage, completed)
