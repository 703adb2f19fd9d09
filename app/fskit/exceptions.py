"""Exception types for fskit.

File lookups raise FileNotFound / FileNotReadable, property projection
raises UnsupportedProperty and filter normalization raises
UnsupportedFilter. Directory operations never raise for child failures;
they report through OperationResult instead.
"""


class FilesystemError(Exception):
    """Base exception for all fskit errors."""


class FileNotFound(FilesystemError):
    """Raised when a path that should be a readable file does not exist.

    Attributes:
        path: The missing path.
    """

    def __init__(self, path: str, message: str = "File does not exist") -> None:
        self.path = str(path)
        super().__init__(f"{message}. Path `{self.path}`.")


class FileNotReadable(FilesystemError):
    """Raised when a file exists but cannot be read.

    Attributes:
        path: The unreadable path.
    """

    def __init__(self, path: str, message: str = "Unable to read file") -> None:
        self.path = str(path)
        super().__init__(f"{message}. Path `{self.path}`.")


class UnsupportedProperty(FilesystemError):
    """Raised when a requested property has no accessor on a file entry.

    Attributes:
        property: The property name as requested by the caller.
        path: Full path of the entry the property was requested from.
    """

    def __init__(self, property: str, path: str) -> None:
        self.property = property
        self.path = str(path)
        super().__init__(f"Unsupported file property '{property}'. Path `{self.path}`.")


class UnsupportedFilter(FilesystemError):
    """Raised when a filter key does not name a known filter.

    Attributes:
        key: The filter key as given by the caller.
    """

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Unsupported filter '{key}'")


class ConfigError(FilesystemError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""
