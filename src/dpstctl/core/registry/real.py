"""Production registry implementation using winreg.

winreg only exists on Windows, so it is imported lazily inside each method.
That keeps this module importable everywhere, which the CLI needs for --help
and which tests need to build contexts.
"""

import logging
from typing import Any

from dpstctl.core.registry.abc import (
    Registry,
    RegistryAccessError,
    RegistryError,
    RegistryNotFoundError,
)

logger = logging.getLogger(__name__)

_HIVE_NAMES = {
    "HKEY_LOCAL_MACHINE": "HKEY_LOCAL_MACHINE",
    "HKLM": "HKEY_LOCAL_MACHINE",
    "HKEY_CURRENT_USER": "HKEY_CURRENT_USER",
    "HKCU": "HKEY_CURRENT_USER",
    "HKEY_CLASSES_ROOT": "HKEY_CLASSES_ROOT",
    "HKCR": "HKEY_CLASSES_ROOT",
    "HKEY_USERS": "HKEY_USERS",
    "HKU": "HKEY_USERS",
}


def split_hive(path: str) -> tuple[str, str]:
    """Split ``HIVE\\sub\\key`` into the canonical hive name and the subkey path.

    Raises:
        RegistryNotFoundError: If the path does not start with a known hive
    """
    hive, _, subkey = path.partition("\\")
    canonical = _HIVE_NAMES.get(hive.upper())
    if canonical is None:
        raise RegistryNotFoundError(f"Unknown registry hive in path: {path}")
    return canonical, subkey


def _translate(exc: OSError, path: str) -> RegistryError:
    if isinstance(exc, FileNotFoundError):
        return RegistryNotFoundError(f"Registry key or value not found: {path}")
    return RegistryAccessError(f"Cannot access registry key {path}: {exc}")


class RealRegistry(Registry):
    """Registry operations backed by the winreg module."""

    def _open(self, path: str, access: int | None = None) -> Any:
        import winreg

        hive_name, subkey = split_hive(path)
        hive = getattr(winreg, hive_name)
        if access is None:
            access = winreg.KEY_READ
        try:
            return winreg.OpenKey(hive, subkey, 0, access)
        except OSError as exc:
            raise _translate(exc, path) from exc

    def list_subkeys(self, path: str) -> list[str]:
        import winreg

        names: list[str] = []
        with self._open(path) as key:
            try:
                subkey_count, _, _ = winreg.QueryInfoKey(key)
                for index in range(subkey_count):
                    names.append(winreg.EnumKey(key, index))
            except OSError as exc:
                raise _translate(exc, path) from exc
        logger.debug("Enumerated %d subkeys under %s", len(names), path)
        return names

    def list_value_names(self, path: str) -> list[str]:
        import winreg

        names: list[str] = []
        with self._open(path) as key:
            try:
                _, value_count, _ = winreg.QueryInfoKey(key)
                for index in range(value_count):
                    name, _, _ = winreg.EnumValue(key, index)
                    names.append(name)
            except OSError as exc:
                raise _translate(exc, path) from exc
        return names

    def read_dword(self, path: str, value_name: str) -> int:
        import winreg

        with self._open(path) as key:
            try:
                value, value_type = winreg.QueryValueEx(key, value_name)
            except OSError as exc:
                raise _translate(exc, f"{path}\\{value_name}") from exc
        if value_type != winreg.REG_DWORD:
            raise RegistryAccessError(
                f"Value {value_name} under {path} is not a REG_DWORD (type {value_type})"
            )
        return int(value) & 0xFFFFFFFF

    def write_dword(self, path: str, value_name: str, value: int) -> None:
        import winreg

        with self._open(path, winreg.KEY_SET_VALUE) as key:
            try:
                winreg.SetValueEx(key, value_name, 0, winreg.REG_DWORD, value & 0xFFFFFFFF)
            except OSError as exc:
                raise _translate(exc, f"{path}\\{value_name}") from exc
        logger.debug("Wrote %s=0x%08x under %s", value_name, value, path)
