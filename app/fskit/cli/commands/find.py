"""File and directory listing commands.

Provides commands to list files or directories below a root with
name/path/size/date/content filters and selectable properties.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from fskit.cli.types import get_filesystem
from fskit.exceptions import FileNotFound, UnsupportedFilter, UnsupportedProperty
from fskit.utils.formatting import (
    console,
    create_entry_table,
    format_value,
    print_error,
    print_info,
)

app = typer.Typer(
    help="Find files and directories.",
    invoke_without_command=True,
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for listings."""

    TABLE = "table"
    JSON = "json"


class ListingKind(str, Enum):
    """Which entries a listing returns."""

    FILES = "files"
    DIRECTORIES = "directories"


DirectoryArg = Annotated[
    Path,
    typer.Argument(help="Directory to search."),
]
RecursiveOpt = Annotated[
    bool,
    typer.Option("--recursive", "-r", help="Search sub-directories."),
]
DepthOpt = Annotated[
    str | None,
    typer.Option("--depth", "-d", help="Depth expression, e.g. '< 2' (overrides --recursive)."),
]
NameOpt = Annotated[
    list[str] | None,
    typer.Option("--name", "-n", help="Name pattern (glob or /regex/). Repeatable."),
]
FilterOpt = Annotated[
    list[str] | None,
    typer.Option("--filter", "-F", help="Filter as key=pattern, e.g. size='> 1K'. Repeatable."),
]
PropertyOpt = Annotated[
    list[str] | None,
    typer.Option("--property", "-p", help="Property to show, e.g. basename. Repeatable."),
]
LimitOpt = Annotated[
    int | None,
    typer.Option("--limit", "-l", help="Limit number of results."),
]
FormatOpt = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
]


@app.command("files")
def find_files(
    directory: DirectoryArg,
    recursive: RecursiveOpt = False,
    depth: DepthOpt = None,
    names: NameOpt = None,
    filters: FilterOpt = None,
    properties: PropertyOpt = None,
    limit: LimitOpt = None,
    output_format: FormatOpt = OutputFormat.TABLE,
) -> None:
    """List files in a directory."""
    _run_listing(
        ListingKind.FILES,
        directory,
        recursive,
        depth,
        names,
        filters,
        properties,
        limit,
        output_format,
    )


@app.command("dirs")
def find_dirs(
    directory: DirectoryArg,
    recursive: RecursiveOpt = False,
    depth: DepthOpt = None,
    names: NameOpt = None,
    filters: FilterOpt = None,
    properties: PropertyOpt = None,
    limit: LimitOpt = None,
    output_format: FormatOpt = OutputFormat.TABLE,
) -> None:
    """List directories in a directory."""
    _run_listing(
        ListingKind.DIRECTORIES,
        directory,
        recursive,
        depth,
        names,
        filters,
        properties,
        limit,
        output_format,
    )


# === Private helper functions ===


def _run_listing(
    kind: ListingKind,
    directory: Path,
    recursive: bool,
    depth: str | None,
    names: list[str] | None,
    filters: list[str] | None,
    properties: list[str] | None,
    limit: int | None,
    output_format: OutputFormat,
) -> None:
    """Run a files/directories listing and print the results."""
    fs = get_filesystem()

    filter_spec = _build_filter_spec(names or [], filters or [])
    props = properties or _as_list(fs.config.default_properties)
    recursion: bool | str = depth if depth is not None else recursive

    listing = fs.files if kind == ListingKind.FILES else fs.directories
    try:
        results = listing(directory, recursion, filter_spec, props, limit)
    except (FileNotFound, UnsupportedFilter, UnsupportedProperty, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(results, default=str))
        return

    if not results:
        print_info(f"No {kind.value} found in {directory}.")
        return

    _print_table(results, props, f"{kind.value.capitalize()} in {directory}")
    console.print(f"\n[dim]{len(results)} {kind.value}[/dim]")


def _build_filter_spec(names: list[str], filters: list[str]) -> dict[str, list[str]]:
    """Combine --name and --filter options into a filter spec."""
    spec: dict[str, list[str]] = {}
    if names:
        spec["name"] = list(names)

    for raw in filters:
        key, sep, pattern = raw.partition("=")
        if not sep or not key.strip():
            print_error(f"Invalid filter '{raw}', expected key=pattern")
            raise typer.Exit(code=1)
        spec.setdefault(key.strip(), []).append(pattern)

    return spec


def _as_list(properties: str | list[str]) -> list[str]:
    return [properties] if isinstance(properties, str) else list(properties)


def _print_table(results: list[dict[str, Any]], columns: list[str], title: str) -> None:
    """Display projected entries as a Rich table."""
    table = create_entry_table(columns, title=title)
    for row in results:
        table.add_row(*(format_value(row[column]) for column in columns))
    console.print(table)
