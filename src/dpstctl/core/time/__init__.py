"""Clock abstraction for testing."""

from dpstctl.core.time.abc import Clock
from dpstctl.core.time.real import RealClock

__all__ = ["Clock", "RealClock"]
