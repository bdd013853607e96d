"""Recovery files for registry values.

A backup is a ``.reg`` document that ``reg import`` or a double-click in
Explorer restores directly. Backups are write-only: nothing in dpstctl reads
them back.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from dpstctl.cli.output import user_output
from dpstctl.core.bitfield import format_dword
from dpstctl.core.errors import BackupWriteError
from dpstctl.core.types import BackupRecord

REG_FILE_HEADER = "Windows Registry Editor Version 5.00"

BACKUP_FILE_PREFIX = "dpst_backup_"


def render_backup(record: BackupRecord) -> str:
    """Render a record as an importable .reg document.

    Example:
        >>> print(render_backup(record), end="")
        Windows Registry Editor Version 5.00

        [HKEY_LOCAL_MACHINE\\...\\0000]
        "FeatureTestControl"=dword:00009240

    """
    lines = [
        REG_FILE_HEADER,
        "",
        f"[{record.path}]",
        f'"{record.value_name}"=dword:{format_dword(record.prior_value)}',
        "",
    ]
    return "\n".join(lines) + "\n"


def backup_file_name(record: BackupRecord) -> str:
    """File name embedding the record's timestamp to the second."""
    return f"{BACKUP_FILE_PREFIX}{record.created_at:%Y%m%d_%H%M%S}.reg"


class BackupWriter(ABC):
    """Abstract interface for persisting backup records."""

    @abstractmethod
    def write_backup(self, record: BackupRecord) -> Path:
        """Persist a record and return where it was written.

        Raises:
            BackupWriteError: If the file cannot be created, including when a
                file with the same name already exists
        """
        ...


class FilesystemBackupWriter(BackupWriter):
    """Writes backups as new files in a directory."""

    def __init__(self, backup_dir: Path) -> None:
        self._backup_dir = backup_dir

    def write_backup(self, record: BackupRecord) -> Path:
        target = self._backup_dir / backup_file_name(record)
        try:
            # "x" refuses to replace an existing backup from the same second
            with target.open("x", encoding="utf-8") as handle:
                handle.write(render_backup(record))
        except FileExistsError:
            raise BackupWriteError(f"Backup file already exists: {target}") from None
        except OSError as exc:
            raise BackupWriteError(f"Cannot write backup file {target}: {exc}") from exc
        return target


class DryRunBackupWriter(BackupWriter):
    """Reports the backup it would write without touching the filesystem."""

    def __init__(self, backup_dir: Path) -> None:
        self._backup_dir = backup_dir

    def write_backup(self, record: BackupRecord) -> Path:
        target = self._backup_dir / backup_file_name(record)
        user_output(
            f"[DRY RUN] Would write backup of {format_dword(record.prior_value)} to {target}"
        )
        return target
