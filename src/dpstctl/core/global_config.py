"""Global configuration data structures and loading.

Provides immutable configuration loaded from ~/.dpstctl/config.toml (or the file
named by DPSTCTL_CONFIG). The file is optional; without it every field takes
its default.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

CONFIG_ENV_VAR = "DPSTCTL_CONFIG"


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in DpstContext.

    Attributes:
        backup_dir: Directory receiving backup files. None means the current
            working directory at invocation.
        verbose: Enable debug logging without passing --verbose
    """

    backup_dir: Path | None = None
    verbose: bool = False


class ConfigStore(ABC):
    """Abstract interface for global config access.

    Provides dependency injection for config loading, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if a config file exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load global config, returning defaults when no file exists.

        Raises:
            ValueError: If the config file is malformed
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for error messages and debugging)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation reading a TOML file."""

    def path(self) -> Path:
        override = os.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(override).expanduser()
        return Path.home() / ".dpstctl" / "config.toml"

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> GlobalConfig:
        config_path = self.path()
        if not config_path.exists():
            return GlobalConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid TOML in {config_path}: {exc}") from exc

        return parse_config(data, config_path)


class InMemoryConfigStore(ConfigStore):
    """In-memory implementation for tests. No filesystem access."""

    def __init__(self, config: GlobalConfig | None = None) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/test/.dpstctl/config.toml")

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> GlobalConfig:
        if self._config is None:
            return GlobalConfig()
        return self._config


def parse_config(data: dict, config_path: Path) -> GlobalConfig:
    """Build GlobalConfig from parsed TOML data.

    Raises:
        ValueError: If a field has the wrong type
    """
    backup_dir = data.get("backup_dir")
    if backup_dir is not None and not isinstance(backup_dir, str):
        raise ValueError(f"'backup_dir' in {config_path} must be a string")

    verbose = data.get("verbose", False)
    if not isinstance(verbose, bool):
        raise ValueError(f"'verbose' in {config_path} must be true or false")

    return GlobalConfig(
        backup_dir=Path(backup_dir).expanduser() if backup_dir else None,
        verbose=verbose,
    )
