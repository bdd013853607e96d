"""Pydantic models for JSON output schemas.

These models validate the documents dpstctl prints with --json.
"""

from pydantic import BaseModel, ConfigDict, Field

from dpstctl.core.bitfield import format_dword
from dpstctl.core.types import ControlResult, Outcome


class ControlResponse(BaseModel):
    """JSON response schema for every dpstctl operation.

    Attributes:
        operation: "status", "enable" or "disable"
        outcome: "reported", "unchanged", "written" or "dry_run"
        enabled: DPST state after the operation
        key_path: Registry key holding the value
        value_name: Name of the DWORD value
        previous_value: Value read before the operation (8 hex digits)
        current_value: Value after the operation (8 hex digits)
        backup_file: Backup file path, only when the value was written
        reboot_required: True only when the value was written
    """

    model_config = ConfigDict(strict=True)

    operation: str = Field(..., pattern="^(status|enable|disable)$")
    outcome: str = Field(..., pattern="^(reported|unchanged|written|dry_run)$")
    enabled: bool
    key_path: str
    value_name: str
    previous_value: str = Field(..., pattern="^[0-9a-f]{8}$")
    current_value: str = Field(..., pattern="^[0-9a-f]{8}$")
    backup_file: str | None
    reboot_required: bool

    @classmethod
    def from_result(cls, result: ControlResult) -> "ControlResponse":
        written = result.outcome == Outcome.WRITTEN
        return cls(
            operation=result.operation.value,
            outcome=result.outcome.value,
            enabled=result.feature_enabled,
            key_path=result.entry.path,
            value_name=result.entry.value_name,
            previous_value=format_dword(result.entry.raw_value),
            current_value=format_dword(result.new_value),
            backup_file=str(result.backup_path) if written and result.backup_path else None,
            reboot_required=written,
        )


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Error message
        error_type: Error class name (e.g., "PrivilegeDeniedError")
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    exit_code: int = Field(default=1, ge=0, le=255)
