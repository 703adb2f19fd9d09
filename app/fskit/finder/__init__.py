"""File finder module.

This module provides the recursive Finder, filter normalization,
comparison expressions and property projection for file entries.
"""

from fskit.finder.comparators import DateComparator, NumberComparator
from fskit.finder.filters import FilterCriterion, FilterKind, normalize_filters
from fskit.finder.finder import SNAPSHOT_PROPERTIES, Finder
from fskit.finder.models import EntryType, FileEntry
from fskit.finder.properties import (
    PROPERTY_ALIASES,
    SUPPORTED_PROPERTIES,
    extract_properties,
    resolve_property_name,
)

__all__ = [
    "PROPERTY_ALIASES",
    "SNAPSHOT_PROPERTIES",
    "SUPPORTED_PROPERTIES",
    "DateComparator",
    "EntryType",
    "FileEntry",
    "FilterCriterion",
    "FilterKind",
    "Finder",
    "NumberComparator",
    "extract_properties",
    "normalize_filters",
    "resolve_property_name",
]
