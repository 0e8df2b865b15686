import time
from typing import Callable

# Returns integer seconds; read once per operation
Clock = Callable[[], int]


def system_clock() -> int:
    return int(time.time())


class FixedClock:
    """Settable clock for scripted runs and tests."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> int:
        self.now += seconds
        return self.now
