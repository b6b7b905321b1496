"""Process-wide nonce source for signed requests."""

import threading
import time
from collections.abc import Callable


def milliseconds() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


class NonceSource:
    """Strictly increasing millisecond nonces.

    The exchange rejects a nonce that is not greater than the previous one
    (error 111), so two requests signed within the same millisecond, or
    after the clock steps back, get ``last + 1``. Safe to share between
    coroutines and threads.
    """

    def __init__(self, clock: Callable[[], int] = milliseconds) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            self._last = max(self._clock(), self._last + 1)
            return self._last

    @property
    def last(self) -> int:
        return self._last


_shared = NonceSource()


def shared_nonce_source() -> NonceSource:
    """The nonce source every connector in this process signs with."""
    return _shared
