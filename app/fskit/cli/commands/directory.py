"""Directory operation commands.

Provides commands to copy, delete, clean and create directories.
"""

from pathlib import Path
from typing import Annotated

import typer

from fskit.cli.types import get_filesystem, report_result
from fskit.utils.formatting import print_error, print_info

app = typer.Typer(
    help="Copy, delete, clean and create directories.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def copy(
    source: Annotated[Path, typer.Argument(help="Directory to copy.")],
    destination: Annotated[Path, typer.Argument(help="Target directory.")],
) -> None:
    """Copy a directory tree."""
    fs = get_filesystem()
    result = fs.copy_directory(source, destination)
    report_result(result, f"Copied {source} to {destination}")


@app.command()
def delete(
    directory: Annotated[Path, typer.Argument(help="Directory to delete.")],
    preserve: Annotated[
        bool,
        typer.Option("--preserve", help="Keep the emptied directory itself."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Recursively delete a directory."""
    _confirm(f"Delete everything in {directory}?", yes)

    fs = get_filesystem()
    result = fs.delete_directory(directory, preserve=preserve)
    report_result(result, f"Deleted {directory}")


@app.command()
def clean(
    directory: Annotated[Path, typer.Argument(help="Directory to empty.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove all files and sub-directories, keeping the directory."""
    _confirm(f"Remove all contents of {directory}?", yes)

    fs = get_filesystem()
    result = fs.clean_directory(directory)
    report_result(result, f"Cleaned {directory}")


@app.command()
def make(
    path: Annotated[Path, typer.Argument(help="Directory to create.")],
    mode: Annotated[
        str | None,
        typer.Option("--mode", "-m", help="Octal permission bits, e.g. 755."),
    ] = None,
    parents: Annotated[
        bool,
        typer.Option("--parents/--no-parents", help="Create missing parent directories."),
    ] = True,
    force: Annotated[
        bool,
        typer.Option("--force", help="Report failures without raising."),
    ] = False,
) -> None:
    """Create a directory."""
    fs = get_filesystem()

    mode_bits: int | None = None
    if mode is not None:
        try:
            mode_bits = int(mode, 8)
        except ValueError:
            print_error(f"Invalid mode '{mode}', expected octal digits")
            raise typer.Exit(code=1) from None

    try:
        result = fs.make_directory(path, mode_bits, recursive=parents, force=force)
    except OSError as e:
        print_error(f"Cannot create {path}: {e}")
        raise typer.Exit(code=1) from e

    report_result(result, f"Created {path}")


def _confirm(question: str, yes: bool) -> None:
    """Ask for confirmation unless --yes was given."""
    if yes:
        return
    if not typer.confirm(question, default=False):
        print_info("Aborted.")
        raise typer.Exit(code=0)
