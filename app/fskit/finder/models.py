"""Finder domain models.

This module defines the file entry handle produced by a traversal
and the entry type classification.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryType(str, Enum):
    """Type of a filesystem entry.

    Attributes:
        FILE: Regular file.
        DIR: Directory.
        LINK: Symbolic link (live or dead).
    """

    FILE = "file"
    DIR = "dir"
    LINK = "link"


@dataclass(frozen=True, slots=True)
class FileEntry:
    """Handle on one filesystem node found during a traversal.

    The handle stores only paths; every accessor queries the filesystem
    when called. Accessors are named after the ``get_<property>`` and
    ``is_<property>`` conventions so properties can be projected by name.

    Attributes:
        pathname: Full path of the entry.
        relative_pathname: Path of the entry relative to the search root.
    """

    pathname: str
    relative_pathname: str = ""

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.pathname:
            msg = "Pathname cannot be empty"
            raise ValueError(msg)

    def __str__(self) -> str:
        return self.pathname

    def __fspath__(self) -> str:
        return self.pathname

    def get_basename(self) -> str:
        return os.path.basename(self.pathname)

    def get_filename(self) -> str:
        """Basename without its extension."""
        return Path(self.pathname).stem

    def get_extension(self) -> str:
        """Text after the last dot of the basename, empty if there is none.

        A leading dot counts, so ``.bashrc`` has the extension ``bashrc``.
        """
        _, dot, extension = self.get_basename().rpartition(".")
        return extension if dot else ""

    def get_path(self) -> str:
        """Directory containing the entry."""
        return os.path.dirname(self.pathname)

    def get_pathname(self) -> str:
        return self.pathname

    def get_relative_path(self) -> str:
        return os.path.dirname(self.relative_pathname)

    def get_relative_pathname(self) -> str:
        return self.relative_pathname

    def get_real_path(self) -> str | bool:
        """Resolved absolute path, or False when the target does not exist."""
        try:
            return str(Path(self.pathname).resolve(strict=True))
        except OSError:
            return False

    def get_type(self) -> str:
        if os.path.islink(self.pathname):
            return EntryType.LINK.value
        if os.path.isdir(self.pathname):
            return EntryType.DIR.value
        return EntryType.FILE.value

    def get_size(self) -> int:
        return os.path.getsize(self.pathname)

    def get_mtime(self) -> float:
        return os.path.getmtime(self.pathname)

    def get_contents(self) -> str:
        return Path(self.pathname).read_text()

    def is_dir(self) -> bool:
        return os.path.isdir(self.pathname)

    def is_file(self) -> bool:
        return os.path.isfile(self.pathname)

    def is_link(self) -> bool:
        return os.path.islink(self.pathname)

    def is_readable(self) -> bool:
        return os.access(self.pathname, os.R_OK)

    def is_writable(self) -> bool:
        return os.access(self.pathname, os.W_OK)
