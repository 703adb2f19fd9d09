"""Filesystem facade.

Bundles file helpers, filtered listings built on the Finder, and
recursive directory operations (copy, delete, clean, make).
"""

import logging
import os
import runpy
import shutil
from pathlib import Path
from typing import Any

from fskit.core.config import FskitConfig
from fskit.exceptions import FileNotFound
from fskit.filesystem.models import OperationResult
from fskit.finder.filters import FilterSpec
from fskit.finder.finder import Finder
from fskit.finder.properties import PropertySpec

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]

# Recursion argument: on/off, or a depth expression passed to Finder.depth()
RecursionSpec = bool | int | str


def normalize_depth(recursive: RecursionSpec) -> int | str | None:
    """Turn a recursion argument into a depth constraint.

    Args:
        recursive: False for immediate children only, True for unrestricted
            depth, or an int/str depth expression passed through verbatim.

    Returns:
        0, None (unrestricted) or the given expression.
    """
    if isinstance(recursive, bool):
        return None if recursive else 0
    return recursive


class Filesystem:
    """Convenience layer over local filesystem operations.

    Args:
        config: Defaults for listings and created directories.
            Uses FskitConfig() defaults if None.
    """

    def __init__(self, config: FskitConfig | None = None) -> None:
        self._config = config or FskitConfig()
        self._required: dict[str, dict[str, Any]] = {}

    @property
    def config(self) -> FskitConfig:
        return self._config

    # =========================================================================
    # Files
    # =========================================================================

    def exists(self, path: PathLike) -> bool:
        return os.path.exists(path)

    def is_file(self, path: PathLike) -> bool:
        return os.path.isfile(path)

    def is_directory(self, path: PathLike) -> bool:
        return os.path.isdir(path)

    def is_link(self, path: PathLike) -> bool:
        return os.path.islink(path)

    def is_readable(self, path: PathLike) -> bool:
        return os.access(path, os.R_OK)

    def is_readable_file(self, path: PathLike) -> bool:
        return self.is_readable(path) and self.is_file(path)

    def is_writable(self, path: PathLike) -> bool:
        return os.access(path, os.W_OK)

    def is_writable_file(self, path: PathLike) -> bool:
        return self.is_writable(path) and self.is_file(path)

    def get(self, path: PathLike) -> str:
        """Get the contents of a file.

        Raises:
            FileNotFound: If the path is not a file.
        """
        if self.is_file(path):
            return Path(path).read_text()
        raise FileNotFound(str(path))

    def get_require(self, path: PathLike) -> dict[str, Any]:
        """Execute a Python file and return its module namespace.

        Raises:
            FileNotFound: If the path is not a file.
        """
        if self.is_file(path):
            return runpy.run_path(str(path))
        raise FileNotFound(str(path))

    def require_once(self, path: PathLike) -> dict[str, Any]:
        """Execute a Python file once; later calls return the cached namespace.

        Raises:
            FileNotFound: If the path is not a file.
        """
        if not self.is_file(path):
            raise FileNotFound(str(path))

        key = os.path.realpath(path)
        if key not in self._required:
            self._required[key] = runpy.run_path(key)
        return self._required[key]

    def put(self, path: PathLike, contents: str) -> int:
        """Write contents to a file, returning the number of characters written."""
        return Path(path).write_text(contents)

    def append(self, path: PathLike, data: str) -> int:
        with open(path, "a") as f:
            return f.write(data)

    def size(self, path: PathLike) -> int:
        return os.path.getsize(path)

    def last_modified(self, path: PathLike) -> float:
        return os.path.getmtime(path)

    def copy(self, path: PathLike, target: PathLike) -> bool:
        """Copy a file, returning False on failure."""
        try:
            shutil.copy(path, target)
        except OSError as e:
            logger.warning("Failed to copy %s to %s: %s", path, target, e)
            return False
        return True

    def move(self, path: PathLike, target: PathLike) -> bool:
        """Move a file or directory, returning False on failure."""
        try:
            shutil.move(path, target)
        except OSError as e:
            logger.warning("Failed to move %s to %s: %s", path, target, e)
            return False
        return True

    def delete(self, *paths: PathLike) -> bool:
        """Delete files and symlinks.

        Every path is attempted even if an earlier one fails.

        Returns:
            True if all paths were deleted, False otherwise.
        """
        success = True

        for path in paths:
            try:
                os.unlink(path)
            except OSError as e:
                logger.warning("Failed to delete %s: %s", path, e)
                success = False

        return success

    # =========================================================================
    # Listings
    # =========================================================================

    def finder(self) -> Finder:
        """Create a Finder using the configured search defaults."""
        return Finder.create(
            ignore_dot_files=self._config.ignore_dot_files,
            follow_links=self._config.follow_links,
        )

    def find_files(self, directory: PathLike, depth: int | str | None = None) -> Finder:
        """Get a Finder for files in a directory, optionally depth-limited."""
        finder = self.finder().files().in_directory(directory)
        if depth is not None:
            finder.depth(depth)
        return finder

    def find_dirs(self, directory: PathLike, depth: int | str | None = None) -> Finder:
        """Get a Finder for directories in a directory, optionally depth-limited."""
        finder = self.finder().directories().in_directory(directory)
        if depth is not None:
            finder.depth(depth)
        return finder

    def files(
        self,
        directory: PathLike,
        recursive: RecursionSpec = False,
        filters: FilterSpec = None,
        properties: PropertySpec | bool = None,
        limit: int | None = None,
    ) -> list[Any]:
        """Get the files in a directory.

        Filters may be a string or list of strings (name patterns), or a
        mapping of filter key to patterns, e.g.
        ``{"name": "*.py", "path": ["src", "tests"]}`` finds .py files
        whose relative path contains "src" or "tests".

        Properties are snake_cased FileEntry properties (``basename``,
        ``real_path``, ``is_dir``...). None returns the configured default
        property (``pathname``); False returns FileEntry objects.

        Args:
            directory: Directory to search.
            recursive: True/False to turn recursion on/off, or a depth expression.
            filters: Filter spec, see above.
            properties: Property spec, see above.
            limit: Maximum number of results.

        Returns:
            List of projected entries.

        Raises:
            UnsupportedFilter: If a filter key names no known filter.
            UnsupportedProperty: If a property has no accessor.
        """
        finder = self.find_files(directory, normalize_depth(recursive))
        finder.apply_filters(filters)
        return finder.get(self._resolve_properties(properties), limit)

    def directories(
        self,
        directory: PathLike,
        recursive: RecursionSpec = False,
        filters: FilterSpec = None,
        properties: PropertySpec | bool = None,
        limit: int | None = None,
    ) -> list[Any]:
        """Get the directories in a directory.

        Takes the same arguments as files().
        """
        finder = self.find_dirs(directory, normalize_depth(recursive))
        finder.apply_filters(filters)
        return finder.get(self._resolve_properties(properties), limit)

    def all_files(self, directory: PathLike, properties: PropertySpec = None) -> list[Any]:
        """Get all files below a directory (recursive).

        Returns FileEntry objects if properties is None.
        """
        return self.find_files(directory).get(properties)

    def all_directories(self, directory: PathLike, properties: PropertySpec = None) -> list[Any]:
        """Get all directories below a directory (recursive).

        Returns FileEntry objects if properties is None.
        """
        return self.find_dirs(directory).get(properties)

    def all_dirs(self, directory: PathLike, properties: PropertySpec = None) -> list[Any]:
        return self.all_directories(directory, properties)

    def _resolve_properties(self, properties: PropertySpec | bool) -> PropertySpec:
        if properties is False:
            return None
        if properties is None:
            return self._config.default_properties
        return properties

    # =========================================================================
    # Directories
    # =========================================================================

    def make_directory(
        self,
        path: PathLike,
        mode: int | None = None,
        recursive: bool = True,
        force: bool = False,
    ) -> OperationResult:
        """Create a directory.

        Args:
            path: Directory to create.
            mode: Permission bits. Uses the configured directory_mode if None.
            recursive: Create missing parent directories.
            force: Report creation errors in the result instead of raising.

        Returns:
            OperationResult of the creation.

        Raises:
            OSError: If creation fails and force is False
                (e.g. FileExistsError for an existing path).
        """
        if mode is None:
            mode = self._config.directory_mode

        if force:
            try:
                self._mkdir(path, mode, recursive)
            except OSError as e:
                logger.debug("Forced mkdir of %s failed: %s", path, e)
                return OperationResult.failed(str(path), str(e))
            return OperationResult.succeeded(str(path))

        self._mkdir(path, mode, recursive)
        return OperationResult.succeeded(str(path))

    def copy_directory(self, source: PathLike, destination: PathLike) -> OperationResult:
        """Copy a directory tree to another location.

        The destination is created if missing. Copying stops at the first
        failing child; entries already copied are left in place.

        Args:
            source: Directory to copy.
            destination: Target directory.

        Returns:
            OperationResult for the source directory.
        """
        if not self.is_directory(source):
            return OperationResult.failed(str(source), f"Not a directory: {source}")

        # Prepare the destination before copying children into it
        if not self.is_directory(destination):
            created = self.make_directory(destination, 0o777, True, force=True)
            if not created:
                return OperationResult.failed(str(source), created.error or "mkdir failed")

        logger.info("Copying %s to %s", source, destination)

        with os.scandir(source) as it:
            children = sorted(it, key=lambda e: e.name)

        for child in children:
            target = os.path.join(destination, child.name)

            if child.is_dir():
                result = self.copy_directory(child.path, target)
                if not result:
                    return OperationResult.failed(str(source), result.error or "copy failed")

            elif not self.copy(child.path, target):
                return OperationResult.failed(str(source), f"Failed to copy {child.path}")

        return OperationResult.succeeded(str(source))

    def delete_directory(self, directory: PathLike, preserve: bool = False) -> OperationResult:
        """Recursively delete a directory.

        Sub-directories are deleted recursively; files and symlinks
        (including symlinks to directories) are unlinked without touching
        their targets. Removing the emptied directory itself is best
        effort: a failure is reported as an ignored result.

        Args:
            directory: Directory to delete.
            preserve: Keep the (emptied) directory itself.

        Returns:
            OperationResult for the directory.
        """
        if not self.is_directory(directory):
            return OperationResult.failed(str(directory), f"Not a directory: {directory}")

        with os.scandir(directory) as it:
            children = list(it)

        for child in children:
            if child.is_dir() and not child.is_symlink():
                self.delete_directory(child.path)
            else:
                self.delete(child.path)

        if not preserve:
            try:
                os.rmdir(directory)
            except OSError as e:
                logger.warning("Could not remove directory %s: %s", directory, e)
                return OperationResult.ignored(str(directory), str(e))

        logger.info("Deleted contents of %s", directory)
        return OperationResult.succeeded(str(directory))

    def clean_directory(self, directory: PathLike) -> OperationResult:
        """Empty a directory of all files and sub-directories."""
        return self.delete_directory(directory, preserve=True)

    @staticmethod
    def _mkdir(path: PathLike, mode: int, recursive: bool) -> None:
        if recursive:
            os.makedirs(path, mode)
        else:
            os.mkdir(path, mode)
