"""Registry operations subpackage.

This subpackage provides an abstraction over the Windows registry with support
for testing via fakes and dry-run via wrappers.
"""

from dpstctl.core.registry.abc import (
    Registry,
    RegistryAccessError,
    RegistryError,
    RegistryNotFoundError,
    join_key_path,
)
from dpstctl.core.registry.dry_run import DryRunRegistry
from dpstctl.core.registry.real import RealRegistry

__all__ = [
    "DryRunRegistry",
    "RealRegistry",
    "Registry",
    "RegistryAccessError",
    "RegistryError",
    "RegistryNotFoundError",
    "join_key_path",
]
