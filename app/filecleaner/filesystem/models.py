"""Filesystem domain models for snapshot reconciliation.

This module defines the data structures describing the repairs applied
(or planned) while reconciling a directory tree against its snapshot.
"""

from dataclasses import dataclass
from enum import Enum


class PathType(str, Enum):
    """Type of filesystem entry.

    Symbolic links are reported as FILE, whatever they point to.

    Attributes:
        DIRECTORY: Real directory.
        FILE: Regular file, symbolic link or any other non-directory entry.
    """

    DIRECTORY = "directory"
    FILE = "file"

    @property
    def term(self) -> str:
        """Human-readable noun used in messages."""
        return self.value


class ActionKind(str, Enum):
    """Kind of repair performed on a path.

    Attributes:
        RESTORE_MODE: Permission bits of a tracked entry were put back.
        REMOVE: An entry created after the snapshot was deleted.
    """

    RESTORE_MODE = "restore_mode"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class CleanAction:
    """A single repair applied to (or planned for) a filesystem path.

    Attributes:
        path: Path the repair targets.
        kind: What was done to the path.
        path_type: Whether the path is a file or a directory.
        mode: Permission bits written to the path before the repair
            completed (restored mode, or mode granted ahead of a removal).
            None when no chmod was needed.
        dry_run: Whether the repair was only planned.
    """

    path: str
    kind: ActionKind
    path_type: PathType
    mode: int | None = None
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.kind == ActionKind.RESTORE_MODE and self.mode is None:
            msg = "A mode restore must carry the restored mode"
            raise ValueError(msg)

    @property
    def mode_octal(self) -> str | None:
        """Mode formatted as a four digit octal string (e.g. "0644")."""
        if self.mode is None:
            return None
        return f"{self.mode:04o}"

    def describe(self) -> str:
        """Describe the repair as a single human-readable line."""
        prefix = "Would " if self.dry_run else ""
        if self.kind == ActionKind.RESTORE_MODE:
            verb = "restore" if self.dry_run else "Restored"
            return f"{prefix}{verb} mode {self.mode_octal} on {self.path}"
        verb = "remove" if self.dry_run else "Removed"
        return f"{prefix}{verb} {self.path_type.term} {self.path}"
