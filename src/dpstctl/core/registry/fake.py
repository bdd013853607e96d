"""Fake registry operations for testing.

FakeRegistry is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from dpstctl.core.registry.abc import (
    Registry,
    RegistryAccessError,
    RegistryNotFoundError,
)


class FakeRegistry(Registry):
    """In-memory fake implementation of registry operations.

    Keys are full path strings. Value names match without regard to case,
    as they do in the registry. A key's subkeys are the keys whose path is the
    parent path plus one more backslash-separated component, listed in the
    order the keys were given to the constructor.

    This class has NO public setup methods. All state is provided via constructor.

    Examples:
        >>> parent = "HKEY_LOCAL_MACHINE\\\\Class"
        >>> registry = FakeRegistry(
        ...     keys={
        ...         parent: {},
        ...         parent + "\\\\0000": {"FeatureTestControl": 0x9240},
        ...     },
        ... )
        >>> registry.read_dword(parent + "\\\\0000", "FeatureTestControl")
        37440
    """

    def __init__(
        self,
        *,
        keys: dict[str, dict[str, int]] | None = None,
        denied_keys: set[str] | None = None,
        write_error: Exception | None = None,
    ) -> None:
        """Create FakeRegistry with pre-configured state.

        Args:
            keys: Mapping of key path -> mapping of value name -> DWORD value
            denied_keys: Key paths that exist but raise RegistryAccessError when opened
            write_error: Exception to raise from write_dword (simulates write failure)
        """
        self._keys = {path: dict(values) for path, values in (keys or {}).items()}
        self._denied_keys = denied_keys or set()
        self._write_error = write_error
        self._writes: list[tuple[str, str, int]] = []

    @property
    def writes(self) -> list[tuple[str, str, int]]:
        """Get the list of (path, value_name, value) writes that were made.

        This property is for test assertions only.
        """
        return self._writes

    def _check_key(self, path: str) -> dict[str, int]:
        if path in self._denied_keys:
            raise RegistryAccessError(f"Access denied: {path}")
        if path not in self._keys:
            raise RegistryNotFoundError(f"Registry key not found: {path}")
        return self._keys[path]

    def list_subkeys(self, path: str) -> list[str]:
        self._check_key(path)
        prefix = path + "\\"
        names: list[str] = []
        for key_path in list(self._keys) + sorted(self._denied_keys - set(self._keys)):
            if key_path.startswith(prefix) and "\\" not in key_path[len(prefix) :]:
                names.append(key_path[len(prefix) :])
        return names

    def list_value_names(self, path: str) -> list[str]:
        return list(self._check_key(path))

    def _stored_name(self, values: dict[str, int], value_name: str) -> str | None:
        for name in values:
            if name.casefold() == value_name.casefold():
                return name
        return None

    def read_dword(self, path: str, value_name: str) -> int:
        values = self._check_key(path)
        stored = self._stored_name(values, value_name)
        if stored is None:
            raise RegistryNotFoundError(f"Value {value_name} not found under {path}")
        return values[stored]

    def write_dword(self, path: str, value_name: str, value: int) -> None:
        values = self._check_key(path)
        if self._write_error is not None:
            raise self._write_error
        stored = self._stored_name(values, value_name)
        values[stored if stored is not None else value_name] = value
        self._writes.append((path, value_name, value))
