"""Time-ordered identifier generator."""

import threading
import time
from collections.abc import Callable


class TimeMillisIdGenerator:
    """Millisecond wall-clock identifiers, strictly increasing per process.

    Two calls within the same millisecond (or after the clock steps back)
    get last + 1, so values never repeat. Ids stay 13 digits wide until the
    year 2286, so string order matches numeric order.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            now = int(self._clock() * 1000)
            self._last = max(now, self._last + 1)
            return str(self._last)
