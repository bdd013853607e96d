"""Domain errors raised by dpstctl operations.

Each error carries the process exit code the CLI reports for it. Errors are
raised by core operations and converted to user-facing output only at the CLI
error boundary.
"""

from dpstctl.cli.constants import (
    EXIT_BACKUP_FAILED,
    EXIT_CONFIG_NOT_FOUND,
    EXIT_NOT_ELEVATED,
    EXIT_WRITE_FAILED,
)


class DpstctlError(Exception):
    """Base class for fatal dpstctl errors."""

    exit_code: int = 1


class ConfigurationNotFoundError(DpstctlError):
    """No device instance key carries the target value."""

    exit_code = EXIT_CONFIG_NOT_FOUND


class PrivilegeDeniedError(DpstctlError):
    """A registry write was required but the process is not elevated."""

    exit_code = EXIT_NOT_ELEVATED


class BackupWriteError(DpstctlError):
    """The recovery file could not be created."""

    exit_code = EXIT_BACKUP_FAILED


class ConfigurationWriteError(DpstctlError):
    """The registry rejected the new value."""

    exit_code = EXIT_WRITE_FAILED
