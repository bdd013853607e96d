"""Real clock implementation using datetime.now()."""

from datetime import datetime

from dpstctl.core.time.abc import Clock


class RealClock(Clock):
    """Production implementation reading the system clock."""

    def now(self) -> datetime:
        return datetime.now()
