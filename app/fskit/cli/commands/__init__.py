"""CLI commands for fskit.

This package contains all subcommand implementations.
"""

from fskit.cli.commands import config, directory, find

__all__ = ["config", "directory", "find"]
