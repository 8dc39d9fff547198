"""Server-side clock used for session timing"""

import time
from typing import Protocol


class Clock(Protocol):
    """Source of timestamps in seconds"""

    def now(self) -> float: ...


class SystemClock:
    """Monotonic clock, unaffected by wall-clock adjustments"""

    def now(self) -> float:
        return time.monotonic()
