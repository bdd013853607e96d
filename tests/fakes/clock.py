"""Fake Clock implementation for testing.

FakeClock returns a fixed time so backup file names are predictable.
"""

from datetime import datetime

from dpstctl.core.time.abc import Clock


class FakeClock(Clock):
    """Fake implementation returning a constant time.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, now: datetime | None = None) -> None:
        """Create FakeClock.

        Args:
            now: Time to return from now(). Defaults to 2024-01-15 10:30:00.
        """
        self._now = now if now is not None else datetime(2024, 1, 15, 10, 30, 0)

    def now(self) -> datetime:
        return self._now
