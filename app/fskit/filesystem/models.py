"""Filesystem operation result models.

Directory operations report their outcome through OperationResult
instead of raising, distinguishing failures that can be ignored from
failures that aborted the operation.
"""

from dataclasses import dataclass
from enum import Enum


class OperationStatus(str, Enum):
    """Outcome of a directory operation.

    Attributes:
        SUCCEEDED: Every step completed.
        IGNORED: A non-critical step failed; the operation still counts as done.
        FAILED: The operation was aborted or could not start.
    """

    SUCCEEDED = "succeeded"
    IGNORED = "ignored"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Result of a single directory operation.

    The result is truthy unless the operation failed, so it can be
    checked like the boolean it replaces.

    Attributes:
        path: Path that was operated on.
        status: Outcome of the operation.
        error: Error message for failed or ignored steps, None otherwise.
    """

    path: str
    status: OperationStatus
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate result data after initialization."""
        if self.status != OperationStatus.SUCCEEDED and not self.error:
            msg = f"Error message required for {self.status.value} result"
            raise ValueError(msg)

    def __bool__(self) -> bool:
        return self.success

    @property
    def success(self) -> bool:
        """Check if the operation did not fail."""
        return self.status != OperationStatus.FAILED

    @classmethod
    def succeeded(cls, path: str) -> "OperationResult":
        return cls(path=str(path), status=OperationStatus.SUCCEEDED)

    @classmethod
    def ignored(cls, path: str, error: str) -> "OperationResult":
        return cls(path=str(path), status=OperationStatus.IGNORED, error=error)

    @classmethod
    def failed(cls, path: str, error: str) -> "OperationResult":
        return cls(path=str(path), status=OperationStatus.FAILED, error=error)
