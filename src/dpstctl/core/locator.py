"""Locate the device instance key that holds the feature value.

Device class keys hold one subkey per adapter instance, named ``0000``,
``0001`` and so on, next to non-instance subkeys such as ``Properties``. The
instance that belongs to the Intel adapter is not at a fixed index, so the
subkeys are scanned for the first one carrying the target value.
"""

import logging
import re

from dpstctl.core.registry.abc import (
    Registry,
    RegistryError,
    RegistryNotFoundError,
    join_key_path,
)
from dpstctl.core.types import ConfigEntry

logger = logging.getLogger(__name__)

INSTANCE_KEY_PATTERN = re.compile(r"[0-9]{4}")


def locate_config_entry(
    registry: Registry, parent_path: str, value_name: str
) -> ConfigEntry | None:
    """Find the first instance subkey of ``parent_path`` holding ``value_name``.

    Subkeys are visited in registry enumeration order. A subkey that cannot be
    read is skipped and the scan continues with the next sibling; one
    unreadable adapter instance must not hide the one that matches. If several
    instances carry the value, the first one enumerated wins. Value names are
    matched without regard to case, as the registry does.

    Returns:
        The located entry with its current value, or None if no instance
        subkey carries the value or the parent key cannot be enumerated
    """
    try:
        subkeys = registry.list_subkeys(parent_path)
    except RegistryError as exc:
        logger.debug("Cannot enumerate %s: %s", parent_path, exc)
        return None

    for name in subkeys:
        if INSTANCE_KEY_PATTERN.fullmatch(name) is None:
            continue
        path = join_key_path(parent_path, name)
        try:
            raw_value = registry.read_dword(path, value_name)
        except RegistryNotFoundError:
            logger.debug("Skipping %s: no %s value", path, value_name)
            continue
        except RegistryError as exc:
            logger.debug("Skipping unreadable instance key %s: %s", path, exc)
            continue
        logger.debug("Located %s under %s (0x%08x)", value_name, path, raw_value)
        return ConfigEntry(path=path, value_name=value_name, raw_value=raw_value)

    return None
