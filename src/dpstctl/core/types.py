"""Data types shared across dpstctl operations."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class ConfigEntry:
    """The registry value holding the feature bit.

    Attributes:
        path: Full key path of the device instance key
        value_name: Name of the DWORD value under that key
        raw_value: The 32-bit value as read
    """

    path: str
    value_name: str
    raw_value: int


@dataclass(frozen=True)
class BackupRecord:
    """Snapshot of a value taken immediately before it is overwritten."""

    path: str
    value_name: str
    prior_value: int
    created_at: datetime


class Operation(Enum):
    STATUS = "status"
    ENABLE = "enable"
    DISABLE = "disable"


class Outcome(Enum):
    """How an operation ended.

    REPORTED: status was queried, nothing written
    UNCHANGED: the bit already had the requested state, nothing written
    WRITTEN: backup created and new value written
    DRY_RUN: a write was required but dry-run mode suppressed it
    """

    REPORTED = "reported"
    UNCHANGED = "unchanged"
    WRITTEN = "written"
    DRY_RUN = "dry_run"


@dataclass(frozen=True)
class ControlResult:
    operation: Operation
    outcome: Outcome
    entry: ConfigEntry
    new_value: int
    feature_enabled: bool
    backup_path: Path | None
