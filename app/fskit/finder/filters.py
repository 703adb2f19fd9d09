"""Filter criteria normalization.

Callers describe filters as a string, a list of strings or a mapping
from filter key to one or more patterns. This module turns any of
those into an ordered list of FilterCriterion values, rejecting
unknown keys before any traversal starts.

All of the following select the same entries:

    "*.txt"
    ["*.txt"]
    {"name": "*.txt"}
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fskit.exceptions import UnsupportedFilter


class FilterKind(str, Enum):
    """Supported filter criteria.

    Attributes:
        NAME: Basename matches a glob or /regex/.
        NOT_NAME: Basename does not match a glob or /regex/.
        PATH: Relative pathname contains a string or matches a /regex/.
        NOT_PATH: Relative pathname does not contain/match the pattern.
        DEPTH: Depth below the search root satisfies a comparison.
        SIZE: File size satisfies a comparison (e.g. "> 10K").
        DATE: Modification time satisfies a comparison (e.g. "since 2024-01-01").
        CONTAINS: File contents contain a string or match a /regex/.
        NOT_CONTAINS: File contents do not contain/match the pattern.
        EXCLUDE: Directories (relative path or name) not to descend into.
    """

    NAME = "name"
    NOT_NAME = "not_name"
    PATH = "path"
    NOT_PATH = "not_path"
    DEPTH = "depth"
    SIZE = "size"
    DATE = "date"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    EXCLUDE = "exclude"


@dataclass(frozen=True, slots=True)
class FilterCriterion:
    """A single filter registration.

    Attributes:
        kind: Which filter to register.
        pattern: Pattern payload passed to the filter.
    """

    kind: FilterKind
    pattern: Any


FilterSpec = str | list[Any] | tuple[Any, ...] | Mapping[Any, Any] | None

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_filter_key(key: object) -> FilterKind:
    """Normalize a filter key to a FilterKind.

    Positional (integer) keys mean ``name``. String keys are matched
    case-insensitively in snake_case or camelCase form.

    Args:
        key: Filter key as given by the caller.

    Returns:
        The matching FilterKind.

    Raises:
        UnsupportedFilter: If the key names no known filter.
    """
    if isinstance(key, int) and not isinstance(key, bool):
        return FilterKind.NAME

    if not isinstance(key, str):
        raise UnsupportedFilter(key)

    normalized = _CAMEL_BOUNDARY.sub("_", key.strip()).replace("-", "_").lower()
    try:
        return FilterKind(normalized)
    except ValueError:
        raise UnsupportedFilter(key) from None


def normalize_filters(filters: FilterSpec) -> list[FilterCriterion]:
    """Turn a filter spec into an ordered list of criteria.

    Each pattern of a key yields its own criterion, so a key with
    several patterns registers its filter once per pattern. None
    patterns register nothing, but their key is still validated.

    Args:
        filters: A string, a list of strings, or a mapping of key to patterns.

    Returns:
        Criteria in input order.

    Raises:
        UnsupportedFilter: If any key names no known filter.
    """
    if filters is None:
        return []

    if isinstance(filters, str):
        items: list[tuple[object, Any]] = [(FilterKind.NAME.value, filters)]
    elif isinstance(filters, Mapping):
        items = list(filters.items())
    else:
        items = list(enumerate(filters))

    criteria: list[FilterCriterion] = []
    for key, patterns in items:
        kind = normalize_filter_key(key)
        if patterns is None:
            continue
        if not isinstance(patterns, (list, tuple)):
            patterns = [patterns]
        criteria.extend(FilterCriterion(kind=kind, pattern=p) for p in patterns if p is not None)

    return criteria
