"""Application context with dependency injection."""

from dataclasses import dataclass, replace
from pathlib import Path

from dpstctl.core.backup import BackupWriter, DryRunBackupWriter, FilesystemBackupWriter
from dpstctl.core.global_config import ConfigStore, FilesystemConfigStore, GlobalConfig
from dpstctl.core.privileges import Privileges, RealPrivileges
from dpstctl.core.registry.abc import Registry
from dpstctl.core.registry.dry_run import DryRunRegistry
from dpstctl.core.registry.real import RealRegistry
from dpstctl.core.time.abc import Clock
from dpstctl.core.time.real import RealClock


@dataclass(frozen=True)
class DpstContext:
    """Immutable context holding all dependencies for dpstctl operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    registry: Registry
    privileges: Privileges
    backup_writer: BackupWriter
    clock: Clock
    config_store: ConfigStore
    global_config: GlobalConfig
    cwd: Path  # Current working directory at CLI invocation
    dry_run: bool

    @staticmethod
    def for_test(
        registry: Registry | None = None,
        privileges: Privileges | None = None,
        backup_writer: BackupWriter | None = None,
        clock: Clock | None = None,
        config_store: ConfigStore | None = None,
        global_config: GlobalConfig | None = None,
        cwd: Path | None = None,
        dry_run: bool = False,
    ) -> "DpstContext":
        """Create test context with optional pre-configured collaborators.

        Any collaborator not given is replaced by its fake: an empty
        FakeRegistry, an elevated FakePrivileges, a recording FakeBackupWriter
        and a FakeClock fixed at 2024-01-15 10:30:00.

        Example:
            >>> registry = FakeRegistry(keys={...})
            >>> ctx = DpstContext.for_test(
            ...     registry=registry, privileges=FakePrivileges(elevated=False)
            ... )
            >>> result = runner.invoke(cli, ["--disable"], obj=ctx)
        """
        from tests.fakes.backup import FakeBackupWriter
        from tests.fakes.clock import FakeClock
        from tests.fakes.privileges import FakePrivileges

        from dpstctl.core.global_config import InMemoryConfigStore
        from dpstctl.core.registry.fake import FakeRegistry

        if registry is None:
            registry = FakeRegistry()

        if privileges is None:
            privileges = FakePrivileges(elevated=True)

        if backup_writer is None:
            backup_writer = FakeBackupWriter()

        if clock is None:
            clock = FakeClock()

        if config_store is None:
            config_store = InMemoryConfigStore(global_config)

        if global_config is None:
            global_config = config_store.load()

        if cwd is None:
            cwd = Path("/test/default/cwd")

        ctx = DpstContext(
            registry=registry,
            privileges=privileges,
            backup_writer=backup_writer,
            clock=clock,
            config_store=config_store,
            global_config=global_config,
            cwd=cwd,
            dry_run=False,
        )
        if dry_run:
            return with_dry_run(ctx)
        return ctx


def with_dry_run(ctx: DpstContext) -> DpstContext:
    """Return a copy of the context whose writes only print what they would do."""
    if ctx.dry_run:
        return ctx
    return replace(
        ctx,
        registry=DryRunRegistry(ctx.registry),
        backup_writer=DryRunBackupWriter(resolve_backup_dir(ctx.global_config, ctx.cwd)),
        dry_run=True,
    )


def resolve_backup_dir(global_config: GlobalConfig, cwd: Path) -> Path:
    """Configured backup directory, or the invocation directory."""
    if global_config.backup_dir is None:
        return cwd
    return global_config.backup_dir


def create_context(*, dry_run: bool) -> DpstContext:
    """Create production context with real implementations.

    Called once at CLI entry point to create the context for the entire
    command execution.

    Args:
        dry_run: If True, wrap the registry and backup writer with dry-run
            wrappers that print intended actions without executing them

    Raises:
        ValueError: If the config file is malformed
    """
    cwd = Path.cwd()
    config_store = FilesystemConfigStore()
    global_config = config_store.load()

    ctx = DpstContext(
        registry=RealRegistry(),
        privileges=RealPrivileges(),
        backup_writer=FilesystemBackupWriter(resolve_backup_dir(global_config, cwd)),
        clock=RealClock(),
        config_store=config_store,
        global_config=global_config,
        cwd=cwd,
        dry_run=False,
    )
    if dry_run:
        return with_dry_run(ctx)
    return ctx
