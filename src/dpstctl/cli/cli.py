import logging
import os

import click

from dpstctl.cli.constants import EXIT_DISABLED, EXIT_ENABLED, REBOOT_NOTICE
from dpstctl.cli.json_output import emit_json, emit_json_error
from dpstctl.cli.json_schemas import ControlResponse
from dpstctl.cli.output import error_output, user_output
from dpstctl.core.bitfield import format_dword
from dpstctl.core.context import DpstContext, create_context, with_dry_run
from dpstctl.core.controller import run_operation
from dpstctl.core.errors import DpstctlError
from dpstctl.core.types import ControlResult, Operation, Outcome

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "DPSTCTL_DEBUG"


def configure_logging(verbose: bool) -> None:
    """Route debug diagnostics to stderr when requested."""
    if verbose or os.getenv(DEBUG_ENV_VAR):
        logging.basicConfig(
            level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s"
        )


def select_operation(status: bool, enable: bool, disable: bool) -> Operation:
    """Map the mutually exclusive operation flags to an Operation.

    Raises:
        click.UsageError: If more than one flag is given
    """
    if sum([status, enable, disable]) > 1:
        raise click.UsageError("--status, --enable and --disable are mutually exclusive")
    if enable:
        return Operation.ENABLE
    if disable:
        return Operation.DISABLE
    return Operation.STATUS


def render_result(result: ControlResult) -> None:
    state = "enabled" if result.feature_enabled else "disabled"
    entry = result.entry

    if result.outcome == Outcome.REPORTED:
        user_output(f"DPST is {state} ({entry.value_name}=0x{format_dword(entry.raw_value)})")
        return

    if result.outcome == Outcome.UNCHANGED:
        user_output(f"DPST is already {state}, nothing to do.")
        return

    if result.outcome == Outcome.DRY_RUN:
        user_output(
            f"[DRY RUN] DPST would be {state}: "
            f"0x{format_dword(entry.raw_value)} -> 0x{format_dword(result.new_value)}"
        )
        return

    user_output(
        click.style("✓ ", fg="green")
        + f"DPST {state}: 0x{format_dword(entry.raw_value)} -> 0x{format_dword(result.new_value)}"
    )
    user_output(f"Previous value saved to {result.backup_path}")
    user_output(click.style(REBOOT_NOTICE, fg="yellow", bold=True))


def exit_code_for(result: ControlResult) -> int:
    if result.outcome == Outcome.REPORTED and result.feature_enabled:
        return EXIT_ENABLED
    return EXIT_DISABLED


@click.command("dpstctl", context_settings=CONTEXT_SETTINGS)
@click.option("--status", is_flag=True, help="Report whether DPST is enabled (default).")
@click.option("--enable", is_flag=True, help="Enable DPST by clearing bit 4.")
@click.option("--disable", is_flag=True, help="Disable DPST by setting bit 4.")
@click.option("-v", "--verbose", is_flag=True, help="Show diagnostic output.")
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be written without writing a backup or the registry.",
)
@click.option("--json", "output_json", is_flag=True, help="Output JSON format.")
@click.version_option(package_name="dpstctl")
@click.pass_context
def cli(
    click_ctx: click.Context,
    status: bool,
    enable: bool,
    disable: bool,
    verbose: bool,
    dry_run: bool,
    output_json: bool,
) -> None:
    """Report, enable or disable Intel Display Power Saving Technology.

    DPST is controlled by bit 4 of the FeatureTestControl value of the Intel
    display adapter. A set bit disables the feature.

    \b
    Exit codes:
      0    DPST disabled, or the requested change succeeded
      1    DPST enabled (--status)
      3    FeatureTestControl not found
      4    backup file could not be written
      5    registry write failed
      255  administrator rights required
    """
    operation = select_operation(status, enable, disable)
    configure_logging(verbose)

    try:
        # Only create context if not already provided (e.g., by tests)
        if click_ctx.obj is None:
            click_ctx.obj = create_context(dry_run=dry_run)
    except ValueError as exc:
        if output_json:
            emit_json_error(str(exc), type(exc).__name__, exit_code=1)
        error_output(str(exc))
        raise SystemExit(1) from None

    ctx: DpstContext = click_ctx.obj
    configure_logging(ctx.global_config.verbose)
    if dry_run:
        ctx = with_dry_run(ctx)

    logger.debug("Command invoked: operation=%s, dry_run=%s", operation.value, ctx.dry_run)

    try:
        result = run_operation(ctx, operation)
    except DpstctlError as exc:
        logger.debug("Operation failed", exc_info=True)
        if output_json:
            emit_json_error(str(exc), type(exc).__name__, exit_code=exc.exit_code)
        error_output(str(exc))
        raise SystemExit(exc.exit_code) from None

    if output_json:
        emit_json(ControlResponse.from_result(result).model_dump(mode="json"))
    else:
        render_result(result)

    raise SystemExit(exit_code_for(result))


def main() -> None:
    """CLI entry point used by the `dpstctl` console script."""
    cli()
