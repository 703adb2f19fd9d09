"""Configuration commands.

Provides commands to show the effective configuration and to write
a default configuration file.
"""

import json
from typing import Annotated

import typer

from fskit.cli.types import get_filesystem
from fskit.core.config import FskitConfig, save_config
from fskit.core.paths import get_config_path
from fskit.exceptions import ConfigError
from fskit.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config = get_filesystem().config
    path = get_config_path()
    source = str(path) if path.exists() else "defaults"
    print_info(f"Configuration ({source}):")
    console.print_json(json.dumps(config.model_dump()))


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default configuration file."""
    path = get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(FskitConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
