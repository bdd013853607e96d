"""No-op wrapper for registry operations."""

from dpstctl.cli.output import user_output
from dpstctl.core.bitfield import format_dword
from dpstctl.core.registry.abc import Registry


class DryRunRegistry(Registry):
    """No-op wrapper for registry operations.

    Read operations are delegated to the wrapped implementation.
    Write operations print what would happen instead of executing.
    """

    def __init__(self, wrapped: Registry) -> None:
        """Initialize dry-run wrapper with a real implementation.

        Args:
            wrapped: The registry implementation to wrap (usually RealRegistry or FakeRegistry)
        """
        self._wrapped = wrapped

    def list_subkeys(self, path: str) -> list[str]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.list_subkeys(path)

    def list_value_names(self, path: str) -> list[str]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.list_value_names(path)

    def read_dword(self, path: str, value_name: str) -> int:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.read_dword(path, value_name)

    def write_dword(self, path: str, value_name: str, value: int) -> None:
        """Print the write instead of executing it."""
        user_output(f"[DRY RUN] Would write {value_name}=dword:{format_dword(value)} to [{path}]")
