import time
from typing import Callable, Optional


class Debouncer:
    """Trailing-edge debounce for a single-threaded, polled event loop.

    ``schedule()`` (re)arms the task ``delay`` seconds from now, dropping any
    run that was still pending. The owner calls ``poll()`` once per tick; the
    callback fires at most once per quiet period.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        delay: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.callback = callback
        self.delay = delay
        self._clock = clock
        self.deadline: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self.deadline is not None

    def schedule(self):
        self.deadline = self._clock() + self.delay

    def cancel(self):
        self.deadline = None

    def poll(self, now: Optional[float] = None) -> bool:
        if self.deadline is None:
            return False
        if now is None:
            now = self._clock()
        if now < self.deadline:
            return False
        self.deadline = None
        self.callback()
        return True

    def flush(self) -> bool:
        if self.deadline is None:
            return False
        self.deadline = None
        self.callback()
        return True
