"""Output utilities for CLI commands with clear intent.

user_output() carries human-readable messages on stderr. machine_output()
carries structured data (JSON) on stdout so it can be piped.
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Output informational message for human users (stderr)."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Output structured data for machine consumption (stdout)."""
    click.echo(message, nl=nl)


def error_output(message: str) -> None:
    """Output an error with the red "Error:" prefix."""
    user_output(click.style("Error: ", fg="red") + message)
