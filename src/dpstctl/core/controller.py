"""Status, enable and disable operations for the DPST feature bit.

Every operation runs as one linear sequence: locate the value, read it, decide
whether a write is needed, and only then check privileges, back up the prior
value and write. Any fatal error leaves the registry untouched.

Two invocations racing each other can both read the old value before either
writes. dpstctl does not lock against that; run one instance at a time.
"""

import logging

from dpstctl.core.bitfield import (
    FEATURE_BIT_MASK,
    clear_bit,
    format_dword,
    is_feature_enabled,
    set_bit,
)
from dpstctl.core.context import DpstContext
from dpstctl.core.errors import (
    ConfigurationNotFoundError,
    ConfigurationWriteError,
    PrivilegeDeniedError,
)
from dpstctl.core.locator import locate_config_entry
from dpstctl.core.registry.abc import RegistryError
from dpstctl.core.types import (
    BackupRecord,
    ConfigEntry,
    ControlResult,
    Operation,
    Outcome,
)

logger = logging.getLogger(__name__)

# Display adapters device setup class
DISPLAY_CLASS_KEY = (
    "HKEY_LOCAL_MACHINE\\SYSTEM\\CurrentControlSet\\Control\\Class\\"
    "{4d36e968-e325-11ce-bfc1-08002be10318}"
)
FEATURE_VALUE_NAME = "FeatureTestControl"


def find_entry(ctx: DpstContext) -> ConfigEntry:
    """Locate the FeatureTestControl value.

    Raises:
        ConfigurationNotFoundError: If no display adapter instance carries it
    """
    entry = locate_config_entry(ctx.registry, DISPLAY_CLASS_KEY, FEATURE_VALUE_NAME)
    if entry is None:
        raise ConfigurationNotFoundError(
            f"No display adapter under {DISPLAY_CLASS_KEY} has a {FEATURE_VALUE_NAME} value. "
            "The adapter may not support DPST or the driver layout has changed."
        )
    return entry


def run_operation(ctx: DpstContext, operation: Operation) -> ControlResult:
    """Run one operation against the located value.

    Raises:
        ConfigurationNotFoundError: If the value cannot be located
        PrivilegeDeniedError: If a write is needed and the process is not elevated
        BackupWriteError: If the recovery file cannot be written; the registry
            is not modified
        ConfigurationWriteError: If the registry rejects the new value
    """
    entry = find_entry(ctx)
    currently_enabled = is_feature_enabled(entry.raw_value, FEATURE_BIT_MASK)
    logger.debug(
        "Current value 0x%s, feature %s",
        format_dword(entry.raw_value),
        "enabled" if currently_enabled else "disabled",
    )

    if operation == Operation.STATUS:
        return _unchanged(operation, Outcome.REPORTED, entry, currently_enabled)

    if operation == Operation.ENABLE:
        if currently_enabled:
            return _unchanged(operation, Outcome.UNCHANGED, entry, currently_enabled)
        new_value = clear_bit(entry.raw_value, FEATURE_BIT_MASK)
    else:
        if not currently_enabled:
            return _unchanged(operation, Outcome.UNCHANGED, entry, currently_enabled)
        new_value = set_bit(entry.raw_value, FEATURE_BIT_MASK)

    return _commit(ctx, operation, entry, new_value)


def _unchanged(
    operation: Operation, outcome: Outcome, entry: ConfigEntry, enabled: bool
) -> ControlResult:
    return ControlResult(
        operation=operation,
        outcome=outcome,
        entry=entry,
        new_value=entry.raw_value,
        feature_enabled=enabled,
        backup_path=None,
    )


def _commit(
    ctx: DpstContext, operation: Operation, entry: ConfigEntry, new_value: int
) -> ControlResult:
    if not ctx.privileges.is_elevated():
        raise PrivilegeDeniedError(
            f"Administrator rights are required to {operation.value} DPST. "
            "Re-run from an elevated prompt."
        )

    record = BackupRecord(
        path=entry.path,
        value_name=entry.value_name,
        prior_value=entry.raw_value,
        created_at=ctx.clock.now(),
    )
    # Backup failure propagates before the registry is touched
    backup_path = ctx.backup_writer.write_backup(record)
    logger.debug("Backup written to %s", backup_path)

    try:
        ctx.registry.write_dword(entry.path, entry.value_name, new_value)
    except RegistryError as exc:
        raise ConfigurationWriteError(
            f"Failed to write {entry.value_name}=0x{format_dword(new_value)} to {entry.path}: "
            f"{exc}. The previous value is saved in {backup_path}."
        ) from exc

    return ControlResult(
        operation=operation,
        outcome=Outcome.DRY_RUN if ctx.dry_run else Outcome.WRITTEN,
        entry=entry,
        new_value=new_value,
        feature_enabled=is_feature_enabled(new_value, FEATURE_BIT_MASK),
        backup_path=backup_path,
    )
