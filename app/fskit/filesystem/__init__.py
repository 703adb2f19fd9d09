"""Filesystem facade module.

This module provides the Filesystem facade with file helpers, filtered
listings and recursive directory operations, plus the result models
those operations report through.
"""

from fskit.filesystem.filesystem import Filesystem, normalize_depth
from fskit.filesystem.models import OperationResult, OperationStatus

__all__ = [
    "Filesystem",
    "OperationResult",
    "OperationStatus",
    "normalize_depth",
]
