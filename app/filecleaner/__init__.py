"""filecleaner - restore directories to their state before a test run.

Register a directory before running code that writes into it, and a
DirectoryCleaner puts it back afterwards: new files and directories are
deleted, changed permission bits are restored.
"""

from filecleaner.core.cleaner import DirectoryCleaner, sort_for_cleanup
from filecleaner.core.config import CleanerConfig
from filecleaner.core.errors import (
    CleanerError,
    ConstructionError,
    DeletionError,
    InconsistencyError,
    PermissionRepairError,
)
from filecleaner.filesystem.state import PathState

__version__ = "0.1.0"

__all__ = [
    "CleanerConfig",
    "CleanerError",
    "ConstructionError",
    "DeletionError",
    "DirectoryCleaner",
    "InconsistencyError",
    "PathState",
    "PermissionRepairError",
    "__version__",
    "sort_for_cleanup",
]
