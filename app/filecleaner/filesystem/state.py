"""Captured state of a single filesystem entry.

A PathState records whether an entry is a file or a directory and what
its permission bits were at capture time. It can put a tracked entry
back into that state, or delete an entry that was not part of the
snapshot, granting itself permissions first when the entry (or its
parent directory) has been made unwritable.
"""

import logging
import os
import stat
from dataclasses import dataclass

from filecleaner.core.errors import (
    ConstructionError,
    DeletionError,
    InconsistencyError,
    PermissionRepairError,
)
from filecleaner.filesystem.models import ActionKind, CleanAction, PathType

logger = logging.getLogger(__name__)

# Modes granted to unwritable entries before removal
DEFAULT_DIRECTORY_MODE: int = 0o777
DEFAULT_FILE_MODE: int = 0o666

# Owner bits needed to list, unlink or rmdir inside a directory
OWNER_ACCESS_BITS: int = stat.S_IRWXU


def path_exists(path: str) -> bool:
    """Check if a path exists, counting dangling symlinks as existing."""
    return os.path.lexists(path)


def get_path_type(path: str) -> PathType:
    """Determine the type of an existing path.

    Only real directories are reported as DIRECTORY; a symlink pointing
    at a directory is a FILE.
    """
    if os.path.isdir(path) and not os.path.islink(path):
        return PathType.DIRECTORY
    return PathType.FILE


def read_mode(path: str) -> int | None:
    """Read the permission bits of a path.

    Returns None where the bits carry no meaning: on platforms without
    POSIX permissions, for symbolic links (chmod would change the link
    target), and when the path cannot be stat-ed.
    """
    if os.name != "posix" or os.path.islink(path):
        return None
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except OSError as e:
        logger.debug("Cannot read mode of %s: %s", path, e)
        return None


def open_directory(path: str) -> int:
    """Give the owner read, write and search access to a directory.

    Args:
        path: Directory to open up.

    Returns:
        The mode the directory had before.

    Raises:
        PermissionRepairError: If the mode cannot be read or changed.
    """
    try:
        current = stat.S_IMODE(os.stat(path).st_mode)
        os.chmod(path, current | OWNER_ACCESS_BITS)
    except OSError as e:
        raise PermissionRepairError(
            f"Failed to get enough permissions on directory '{path}': {e.strerror}",
            path=path,
            operation="chmod",
        ) from e
    logger.info("Granted mode %04o on %s", current | OWNER_ACCESS_BITS, path)
    return current


@dataclass(frozen=True, slots=True)
class PathState:
    """Persisted state of a file or directory.

    Attributes:
        path: Path this state describes.
        path_type: Whether the entry was a file or a directory.
        mode: Permission bits at capture time, or None if unavailable.
    """

    path: str
    path_type: PathType
    mode: int | None

    @classmethod
    def capture(cls, path: str) -> "PathState":
        """Capture the current state of an existing path.

        Args:
            path: Path to capture.

        Returns:
            New PathState for the path.

        Raises:
            ConstructionError: If the path does not exist.
        """
        if not path_exists(path):
            raise ConstructionError(
                f"Cannot capture state of non-existent path '{path}'",
                path=path,
                operation="capture",
            )
        return cls(path=path, path_type=get_path_type(path), mode=read_mode(path))

    @property
    def is_dir(self) -> bool:
        """Check if the captured entry is a directory."""
        return self.path_type == PathType.DIRECTORY

    def reconcile(self, *, dry_run: bool = False) -> CleanAction | None:
        """Restore the entry to its captured state.

        Args:
            dry_run: If True, report the repair without applying it.

        Returns:
            CleanAction describing the restored mode, or None if the entry
            already matches its captured state.

        Raises:
            InconsistencyError: If the entry vanished or changed type.
            PermissionRepairError: If the mode cannot be read or restored.
        """
        term = self.path_type.term

        if not path_exists(self.path):
            raise InconsistencyError(
                f"The original {term} '{self.path}' no longer exists",
                path=self.path,
                operation="reconcile",
            )

        if get_path_type(self.path) != self.path_type:
            raise InconsistencyError(
                f"File/directory mismatch for '{self.path}'",
                path=self.path,
                operation="reconcile",
            )

        if self.mode is None:
            return None

        try:
            current = stat.S_IMODE(os.stat(self.path).st_mode)
        except OSError as e:
            raise PermissionRepairError(
                f"Failed to read permissions mode for {term} '{self.path}': {e.strerror}",
                path=self.path,
                operation="stat",
            ) from e

        if current == self.mode:
            return None

        if not dry_run:
            try:
                os.chmod(self.path, self.mode)
            except OSError as e:
                raise PermissionRepairError(
                    f"Failed to correct permissions mode for {term} '{self.path}': {e.strerror}",
                    path=self.path,
                    operation="chmod",
                ) from e
            logger.info("Restored mode %04o on %s (was %04o)", self.mode, self.path, current)

        return CleanAction(
            path=self.path,
            kind=ActionKind.RESTORE_MODE,
            path_type=self.path_type,
            mode=self.mode,
            dry_run=dry_run,
        )

    def remove(
        self,
        *,
        directory_mode: int = DEFAULT_DIRECTORY_MODE,
        file_mode: int = DEFAULT_FILE_MODE,
        dry_run: bool = False,
    ) -> CleanAction | None:
        """Delete the entry, repairing permissions that would prevent it.

        Directories are removed with rmdir and must already be empty.

        Args:
            directory_mode: Mode granted to an unwritable directory.
            file_mode: Mode granted to an unwritable file.
            dry_run: If True, report the removal without applying it.

        Returns:
            CleanAction describing the removal, or None if the entry was
            already gone.

        Raises:
            PermissionRepairError: If permissions cannot be granted.
            DeletionError: If the entry cannot be deleted.
        """
        term = self.path_type.term

        if not path_exists(self.path):
            logger.debug("Already removed: %s", self.path)
            return None

        granted: int | None = None
        if self.mode is not None and not os.access(self.path, os.W_OK):
            granted = directory_mode if self.is_dir else file_mode
            if not dry_run:
                try:
                    os.chmod(self.path, granted)
                except OSError as e:
                    raise PermissionRepairError(
                        f"Failed to get enough permissions to delete {term} '{self.path}': "
                        f"{e.strerror}",
                        path=self.path,
                        operation="chmod",
                    ) from e
                logger.info("Granted mode %04o on %s", granted, self.path)

        if dry_run:
            return CleanAction(
                path=self.path,
                kind=ActionKind.REMOVE,
                path_type=self.path_type,
                mode=granted,
                dry_run=True,
            )

        self._open_parent()

        try:
            if self.is_dir:
                os.rmdir(self.path)
            else:
                os.unlink(self.path)
        except OSError as e:
            raise DeletionError(
                f"Failed to delete {term} '{self.path}': {e.strerror}",
                path=self.path,
                operation="rmdir" if self.is_dir else "unlink",
            ) from e

        logger.info("Removed %s %s", term, self.path)
        return CleanAction(
            path=self.path,
            kind=ActionKind.REMOVE,
            path_type=self.path_type,
            mode=granted,
        )

    def _open_parent(self) -> None:
        """Give the owner write and search access to the parent directory.

        Deleting an entry needs those bits on its parent. The parent is
        processed later in the same pass (it sorts after its children),
        where a tracked parent gets its captured mode back and a new one
        is removed.

        Raises:
            PermissionRepairError: If the parent mode cannot be changed.
        """
        parent = os.path.dirname(self.path) or os.curdir
        if os.name != "posix" or os.access(parent, os.W_OK | os.X_OK):
            return

        open_directory(parent)
