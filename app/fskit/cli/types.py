"""Shared helpers for CLI commands.

This module provides helpers used across multiple CLI command modules
to avoid code duplication.
"""

import typer

from fskit.core.config import get_config
from fskit.exceptions import ConfigError
from fskit.filesystem import Filesystem, OperationResult, OperationStatus
from fskit.utils.formatting import print_error, print_success, print_warning


def get_filesystem() -> Filesystem:
    """Create a Filesystem configured from the user config file.

    Returns:
        Filesystem using the loaded configuration (defaults if none exists).

    Raises:
        typer.Exit: If the config file is invalid.
    """
    try:
        config = get_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return Filesystem(config)


def report_result(result: OperationResult, done: str) -> None:
    """Print the outcome of a directory operation.

    Args:
        result: Result to report.
        done: Success message.

    Raises:
        typer.Exit: With code 1 if the operation failed.
    """
    if result.status == OperationStatus.FAILED:
        print_error(result.error or "Operation failed")
        raise typer.Exit(code=1)

    if result.status == OperationStatus.IGNORED:
        print_warning(result.error or "A non-critical step failed")

    print_success(done)
