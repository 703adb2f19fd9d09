"""fskit - filtered file finding and recursive directory operations.

Provides a Finder for recursive, filtered enumeration with projected
file properties, and a Filesystem facade for file helpers and
directory copy/delete/clean operations.
"""

from fskit.exceptions import (
    FileNotFound,
    FileNotReadable,
    FilesystemError,
    UnsupportedFilter,
    UnsupportedProperty,
)
from fskit.filesystem import Filesystem, OperationResult, OperationStatus
from fskit.finder import FileEntry, Finder

__version__ = "0.1.0"

__all__ = [
    "FileEntry",
    "FileNotFound",
    "FileNotReadable",
    "Filesystem",
    "FilesystemError",
    "Finder",
    "OperationResult",
    "OperationStatus",
    "UnsupportedFilter",
    "UnsupportedProperty",
    "__version__",
]
