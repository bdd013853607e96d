"""Registry operations interface.

Key paths are full strings rooted at a hive name, for example
``HKEY_LOCAL_MACHINE\\SYSTEM\\CurrentControlSet\\Control\\Class\\{...}\\0000``.
This is the same form a ``.reg`` file uses in its bracketed section header.
"""

from abc import ABC, abstractmethod


class RegistryError(Exception):
    """Base class for registry failures."""


class RegistryNotFoundError(RegistryError):
    """The key or value does not exist."""


class RegistryAccessError(RegistryError):
    """The key or value exists but could not be read or written."""


def join_key_path(parent: str, child: str) -> str:
    """Join a parent key path and a subkey name with a backslash."""
    return parent.rstrip("\\") + "\\" + child


class Registry(ABC):
    """Abstract interface for registry operations.

    All implementations (real, fake, and dry-run) must implement this interface.
    Enumeration methods report failures on the key they were asked about; callers
    that scan many sibling keys decide for themselves whether one unreadable key
    aborts the scan.
    """

    @abstractmethod
    def list_subkeys(self, path: str) -> list[str]:
        """List names of the direct subkeys of a key, in enumeration order.

        Raises:
            RegistryNotFoundError: If the key does not exist
            RegistryAccessError: If the key cannot be opened or enumerated
        """
        ...

    @abstractmethod
    def list_value_names(self, path: str) -> list[str]:
        """List the names of the values stored directly under a key.

        Raises:
            RegistryNotFoundError: If the key does not exist
            RegistryAccessError: If the key cannot be opened or enumerated
        """
        ...

    @abstractmethod
    def read_dword(self, path: str, value_name: str) -> int:
        """Read a REG_DWORD value as an unsigned 32-bit integer.

        Raises:
            RegistryNotFoundError: If the key or value does not exist
            RegistryAccessError: If the value cannot be read or is not a DWORD
        """
        ...

    @abstractmethod
    def write_dword(self, path: str, value_name: str, value: int) -> None:
        """Write a REG_DWORD value.

        The registry itself makes a single value write atomic.

        Raises:
            RegistryNotFoundError: If the key does not exist
            RegistryAccessError: If the key cannot be opened for writing
        """
        ...
