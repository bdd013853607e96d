"""Process privilege checks.

The write path requires administrative rights. Every failure to determine the
process's privileges is reported as "not elevated".
"""

import logging
import os
import sys
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Privileges(ABC):
    """Abstract interface for querying the current process's privileges."""

    @abstractmethod
    def is_elevated(self) -> bool:
        """Check whether the process runs with administrative rights.

        Returns:
            True if elevated, False otherwise (including when the query fails)
        """
        ...


class RealPrivileges(Privileges):
    """Query privileges from the operating system.

    On Windows this asks shell32 whether the process token is a member of the
    Administrators group. Elsewhere an effective uid of 0 counts as elevated.
    """

    def is_elevated(self) -> bool:
        if sys.platform == "win32":
            return self._is_windows_admin()
        geteuid = getattr(os, "geteuid", None)
        if geteuid is None:
            return False
        return geteuid() == 0

    def _is_windows_admin(self) -> bool:
        import ctypes

        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError) as exc:
            logger.debug("Privilege query failed, treating as not elevated: %s", exc)
            return False
