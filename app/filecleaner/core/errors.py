"""Exception hierarchy for directory cleanup.

Every error raised by the snapshot and reconcile engine derives from
CleanerError and records the offending path together with the operation
that was being attempted. None of them are recoverable: the engine never
retries or continues past one.
"""


class CleanerError(Exception):
    """Base exception for directory cleanup errors.

    Attributes:
        path: Filesystem path the failed operation targeted.
        operation: Short name of the attempted operation (e.g. "chmod").
    """

    def __init__(self, message: str, *, path: str, operation: str) -> None:
        super().__init__(message)
        self.path = path
        self.operation = operation


class ConstructionError(CleanerError):
    """Raised when a cleaner root or a captured path does not exist."""


class InconsistencyError(CleanerError):
    """Raised when a tracked path vanished or changed between file and directory."""


class PermissionRepairError(CleanerError):
    """Raised when permission bits cannot be read, restored, or granted."""


class DeletionError(CleanerError):
    """Raised when a file or an empty directory cannot be deleted."""
