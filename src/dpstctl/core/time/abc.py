"""Clock abstraction for testing.

This module provides an ABC for reading the current local time so that backup
file names are deterministic in tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Abstract clock operations for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local time."""
        ...
