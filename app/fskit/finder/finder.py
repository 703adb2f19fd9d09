"""Recursive file and directory finder.

The Finder walks one or more root directories depth-first and yields
FileEntry handles for entries that pass every registered filter.
Filters are registered through chainable methods or in bulk through
apply_filters(); results are shaped with get/first/last/all/to_list.

Example:
    Finder.create().files().in_directory("src").name("*.py").depth("< 2").get("pathname")
"""

import fnmatch
import logging
import math
import os
import re
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Any

from fskit.exceptions import FileNotFound
from fskit.finder.comparators import DateComparator, NumberComparator
from fskit.finder.filters import FilterKind, FilterSpec, normalize_filters
from fskit.finder.models import FileEntry
from fskit.finder.properties import PropertySpec, extract_properties

logger = logging.getLogger(__name__)

# Properties returned by Finder.to_list()
SNAPSHOT_PROPERTIES: tuple[str, ...] = (
    "name",
    "filename",
    "type",
    "path",
    "pathname",
    "real_path",
)

# /pattern/flags is treated as a regular expression
_REGEX_DELIMITED = re.compile(r"^/(?P<body>.+)/(?P<flags>[imsx]*)$", re.DOTALL)
_REGEX_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def _as_regex(pattern: str) -> re.Pattern[str] | None:
    """Compile a /delimited/ pattern, or return None for plain patterns."""
    match = _REGEX_DELIMITED.match(pattern)
    if match is None:
        return None
    flags = 0
    for flag in match.group("flags"):
        flags |= _REGEX_FLAGS[flag]
    return re.compile(match.group("body"), flags)


def _split_alternatives(body: str) -> list[str]:
    """Split the inside of a brace group on commas outside nested groups."""
    options: list[str] = []
    depth = 0
    current = ""
    for char in body:
        if char == "," and depth == 0:
            options.append(current)
            current = ""
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current += char
    options.append(current)
    return options


def _expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternations (nested too) into plain globs.

    An unbalanced ``{`` is kept literally.
    """
    depth = 0
    start = 0
    for index, char in enumerate(pattern):
        if char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif char == "}" and depth:
            depth -= 1
            if depth == 0:
                prefix, suffix = pattern[:start], pattern[index + 1 :]
                return [
                    glob
                    for option in _split_alternatives(pattern[start + 1 : index])
                    for glob in _expand_braces(prefix + option + suffix)
                ]
    return [pattern]


def _match_glob(pattern: str, value: str) -> bool:
    regex = _as_regex(pattern)
    if regex is not None:
        return regex.search(value) is not None
    return any(fnmatch.fnmatchcase(value, glob) for glob in _expand_braces(pattern))


def _match_substring(pattern: str, value: str) -> bool:
    regex = _as_regex(pattern)
    if regex is not None:
        return regex.search(value) is not None
    return pattern in value


class Finder:
    """Finds files and directories below one or more roots.

    Inclusive filters of the same kind (name, path, contains) are OR'd;
    exclusive filters (not_name, not_path, not_contains) reject on any
    match; comparisons (depth, size, date) must all hold.

    Args:
        ignore_dot_files: Skip entries whose name starts with a dot.
        follow_links: Descend into symlinked directories.
    """

    def __init__(self, *, ignore_dot_files: bool = False, follow_links: bool = False) -> None:
        self._ignore_dot_files = ignore_dot_files
        self._follow_links = follow_links
        self._only_files = False
        self._only_dirs = False
        self._dirs: list[Path] = []

        self._names: list[str] = []
        self._not_names: list[str] = []
        self._paths: list[str] = []
        self._not_paths: list[str] = []
        self._contains: list[str] = []
        self._not_contains: list[str] = []
        self._excludes: list[str] = []
        self._depths: list[NumberComparator] = []
        self._sizes: list[NumberComparator] = []
        self._dates: list[DateComparator] = []

    @classmethod
    def create(cls, **kwargs: bool) -> "Finder":
        """Create a new Finder."""
        return cls(**kwargs)

    # =========================================================================
    # Fluent configuration
    # =========================================================================

    def files(self) -> "Finder":
        """Restrict results to files."""
        self._only_files = True
        self._only_dirs = False
        return self

    def directories(self) -> "Finder":
        """Restrict results to directories."""
        self._only_dirs = True
        self._only_files = False
        return self

    def in_directory(self, *dirs: str | os.PathLike[str]) -> "Finder":
        """Add root directories to search."""
        self._dirs.extend(Path(d) for d in dirs)
        return self

    def name(self, pattern: str) -> "Finder":
        self._names.append(pattern)
        return self

    def not_name(self, pattern: str) -> "Finder":
        self._not_names.append(pattern)
        return self

    def path(self, pattern: str) -> "Finder":
        self._paths.append(pattern)
        return self

    def not_path(self, pattern: str) -> "Finder":
        self._not_paths.append(pattern)
        return self

    def contains(self, pattern: str) -> "Finder":
        self._contains.append(pattern)
        return self

    def not_contains(self, pattern: str) -> "Finder":
        self._not_contains.append(pattern)
        return self

    def exclude(self, directory: str) -> "Finder":
        """Skip directories by relative path or name, including their contents."""
        self._excludes.append(directory.strip("/"))
        return self

    def depth(self, expression: int | str) -> "Finder":
        """Restrict the depth below the roots (immediate children are depth 0)."""
        self._depths.append(NumberComparator(expression))
        return self

    def size(self, expression: int | str) -> "Finder":
        """Restrict file sizes, e.g. ``"> 10K"`` or ``"<= 1Mi"``."""
        self._sizes.append(NumberComparator(expression))
        return self

    def date(self, expression: str | datetime) -> "Finder":
        """Restrict modification times, e.g. ``"since 2024-01-01"``."""
        self._dates.append(DateComparator(expression))
        return self

    def ignore_dot_files(self, ignore: bool = True) -> "Finder":
        self._ignore_dot_files = ignore
        return self

    def follow_links(self, follow: bool = True) -> "Finder":
        self._follow_links = follow
        return self

    def apply_filters(self, filters: FilterSpec) -> "Finder":
        """Register filters described by a filter spec.

        Args:
            filters: A string, a list of strings, or a mapping of filter
                key to one or more patterns. See fskit.finder.filters.

        Returns:
            This finder.

        Raises:
            UnsupportedFilter: If a key names no known filter.
        """
        for criterion in normalize_filters(filters):
            _FILTER_METHODS[criterion.kind](self, criterion.pattern)
        return self

    # =========================================================================
    # Results
    # =========================================================================

    def __iter__(self) -> Iterator[FileEntry]:
        if not self._dirs:
            msg = "You must call in_directory() before iterating over a Finder"
            raise ValueError(msg)

        for root in self._dirs:
            if not root.is_dir():
                raise FileNotFound(str(root), "Directory does not exist")
            logger.debug("Searching %s", root)
            yield from self._walk(root, root, 0)

    def get(self, properties: PropertySpec = None, limit: int | None = None) -> list[Any]:
        """Return found entries projected through the given properties.

        Args:
            properties: None for FileEntry objects, a name for scalars,
                or a sequence of names for dicts.
            limit: Maximum number of results.

        Returns:
            List of projected entries in traversal order.
        """
        results: list[Any] = []
        count = 0

        for entry in self:
            if limit is not None and count >= int(limit):
                break
            results.append(extract_properties(entry, properties))
            count += 1

        return results

    def first(self, properties: PropertySpec = None) -> Any:
        """Return the first projected entry, or None if nothing was found."""
        results = self.get(properties, 1)
        return results[0] if results else None

    def last(self, properties: PropertySpec = None) -> Any:
        """Return the last projected entry, or None if nothing was found.

        The whole traversal is materialized before the last entry is taken.
        """
        entries = self.all()
        if not entries:
            return None
        return extract_properties(entries[-1], properties)

    def all(self) -> list[FileEntry]:
        """Return every found entry without projection."""
        return list(self)

    def to_list(self) -> list[dict[str, Any]]:
        """Return a snapshot dict of common properties for every entry."""
        return self.get(list(SNAPSHOT_PROPERTIES))

    def count(self) -> int:
        return sum(1 for _ in self)

    # =========================================================================
    # Traversal
    # =========================================================================

    def _walk(self, root: Path, directory: Path | str, depth: int) -> Iterator[FileEntry]:
        """Yield accepted entries below a directory, depth-first."""
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda e: e.name)

        for child in children:
            if self._ignore_dot_files and child.name.startswith("."):
                continue

            relative = os.path.relpath(child.path, root).replace(os.sep, "/")
            is_dir = child.is_dir()

            if is_dir and self._is_excluded(child.name, relative):
                logger.debug("Excluded directory: %s", child.path)
                continue

            if self._depth_accepts(depth) and self._accepts(child, relative, is_dir):
                yield FileEntry(pathname=child.path, relative_pathname=relative)

            if not is_dir or depth + 1 > self._max_depth():
                continue
            if child.is_symlink() and not self._follow_links:
                continue
            yield from self._walk(root, child.path, depth + 1)

    def _max_depth(self) -> float:
        limit = math.inf
        for comparator in self._depths:
            if comparator.operator == "<":
                limit = min(limit, comparator.target - 1)
            elif comparator.operator in ("<=", "=="):
                limit = min(limit, comparator.target)
        return limit

    def _depth_accepts(self, depth: int) -> bool:
        return all(c.test(depth) for c in self._depths)

    def _is_excluded(self, name: str, relative: str) -> bool:
        return any(pattern in (name, relative) for pattern in self._excludes)

    def _accepts(self, entry: os.DirEntry[str], relative: str, is_dir: bool) -> bool:
        if self._only_files and not entry.is_file():
            return False
        if self._only_dirs and not is_dir:
            return False

        name = entry.name
        if self._names and not any(_match_glob(p, name) for p in self._names):
            return False
        if any(_match_glob(p, name) for p in self._not_names):
            return False
        if self._paths and not any(_match_substring(p, relative) for p in self._paths):
            return False
        if any(_match_substring(p, relative) for p in self._not_paths):
            return False

        if self._sizes and entry.is_file():
            size = entry.stat().st_size
            if not all(c.test(size) for c in self._sizes):
                return False

        if self._dates:
            mtime = entry.stat().st_mtime
            if not all(c.test(mtime) for c in self._dates):
                return False

        if self._contains or self._not_contains:
            return self._contents_accept(entry, is_dir)

        return True

    def _contents_accept(self, entry: os.DirEntry[str], is_dir: bool) -> bool:
        if is_dir or not os.access(entry.path, os.R_OK):
            return False

        try:
            content = Path(entry.path).read_text(errors="ignore")
        except OSError as e:
            logger.debug("Cannot read %s for content filter: %s", entry.path, e)
            return False

        if any(_match_substring(p, content) for p in self._not_contains):
            return False
        if self._contains:
            return any(_match_substring(p, content) for p in self._contains)
        return True


_FILTER_METHODS: dict[FilterKind, Callable[[Finder, Any], Finder]] = {
    FilterKind.NAME: Finder.name,
    FilterKind.NOT_NAME: Finder.not_name,
    FilterKind.PATH: Finder.path,
    FilterKind.NOT_PATH: Finder.not_path,
    FilterKind.DEPTH: Finder.depth,
    FilterKind.SIZE: Finder.size,
    FilterKind.DATE: Finder.date,
    FilterKind.CONTAINS: Finder.contains,
    FilterKind.NOT_CONTAINS: Finder.not_contains,
    FilterKind.EXCLUDE: Finder.exclude,
}
