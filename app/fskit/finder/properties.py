"""Property projection for file entries.

Properties are snake_cased names resolved to a FileEntry accessor:
names starting with ``is_`` map to the accessor of the same name,
every other name maps to ``get_<name>``.

    Property        Accessor called
    basename        FileEntry.get_basename()
    real_path       FileEntry.get_real_path()
    is_dir          FileEntry.is_dir()
"""

from collections.abc import Callable, Sequence
from typing import Any

from fskit.exceptions import UnsupportedProperty
from fskit.finder.models import FileEntry

# Caller-facing aliases for entry properties
PROPERTY_ALIASES: dict[str, str] = {
    "name": "basename",
    "dirname": "path",
}

SUPPORTED_PROPERTIES: tuple[str, ...] = (
    "basename",
    "filename",
    "extension",
    "path",
    "pathname",
    "relative_path",
    "relative_pathname",
    "real_path",
    "type",
    "size",
    "mtime",
    "contents",
    "is_dir",
    "is_file",
    "is_link",
    "is_readable",
    "is_writable",
)


def _accessor_name(prop: str) -> str:
    return prop if prop.startswith("is_") else f"get_{prop}"


_ACCESSORS: dict[str, Callable[[FileEntry], Any]] = {
    prop: getattr(FileEntry, _accessor_name(prop)) for prop in SUPPORTED_PROPERTIES
}

PropertySpec = str | Sequence[str] | None


def resolve_property_name(name: str) -> str:
    """Resolve a property alias to the real property name."""
    return PROPERTY_ALIASES.get(name, name)


def get_property_value(entry: FileEntry, prop: str) -> Any:
    """Read a single property from an entry.

    Args:
        entry: Entry to read from.
        prop: Property name or alias.

    Returns:
        The accessor's return value.

    Raises:
        UnsupportedProperty: If the property has no accessor.
    """
    accessor = _ACCESSORS.get(resolve_property_name(prop))
    if accessor is None:
        raise UnsupportedProperty(prop, entry.pathname)
    return accessor(entry)


def extract_properties(entry: FileEntry, properties: PropertySpec = None) -> Any:
    """Project the requested properties off an entry.

    Args:
        entry: Entry to project.
        properties: None for the entry itself, a name for a single value,
            or a sequence of names for a dict keyed by the names as given
            (input order, last duplicate wins).

    Returns:
        The entry, a scalar, or a dict of property values.

    Raises:
        UnsupportedProperty: If any property has no accessor.
    """
    if properties is None:
        return entry

    if isinstance(properties, str):
        return get_property_value(entry, properties)

    results: dict[str, Any] = {}
    for prop in properties:
        results[prop] = get_property_value(entry, prop)
    return results
