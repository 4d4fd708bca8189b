"""Recursive enumeration of the entries under a cleaner root.

Walks a directory tree and returns every file and directory below it,
including the root itself. Symbolic links are listed but never followed.
A directory the owner cannot list is opened up (see open_directory) and
listed again, so code that locks a directory cannot hide its contents.
"""

import logging
import os
from collections.abc import Iterable

from filecleaner.core.errors import PermissionRepairError
from filecleaner.filesystem.protected import is_ignored_path
from filecleaner.filesystem.state import open_directory

logger = logging.getLogger(__name__)


def _list_directory(path: str, opened: dict[str, int]) -> list[os.DirEntry[str]]:
    """Read the entries of a directory, granting owner access if it is locked.

    Raises:
        PermissionRepairError: If the directory stays unreadable.
    """
    try:
        with os.scandir(path) as it:
            return list(it)
    except FileNotFoundError:
        logger.debug("Directory vanished while listing: %s", path)
        return []
    except PermissionError:
        logger.debug("Permission denied listing %s, opening it", path)

    original = open_directory(path)
    opened.setdefault(path, original)
    try:
        with os.scandir(path) as it:
            return list(it)
    except OSError as e:
        raise PermissionRepairError(
            f"Failed to list directory '{path}': {e.strerror}",
            path=path,
            operation="scandir",
        ) from e


def find_paths(
    root: str,
    ignore: Iterable[str] = (),
    opened: dict[str, int] | None = None,
) -> list[str]:
    """List the root and every path below it, parents before children.

    Args:
        root: Directory to enumerate.
        ignore: Glob patterns (relative to root) for paths to leave out.
            Ignored directories are not descended into.
        opened: If given, receives the original mode of every directory
            whose permissions had to be widened to list it.

    Returns:
        List of paths built by joining root with relative components.

    Raises:
        PermissionRepairError: If a directory cannot be made listable.
    """
    patterns = tuple(ignore)
    granted: dict[str, int] = {} if opened is None else opened
    paths: list[str] = [root]
    pending = [root]

    while pending:
        dirpath = pending.pop()
        subdirs: list[str] = []
        for entry in sorted(_list_directory(dirpath, granted), key=lambda e: e.name):
            path = os.path.join(dirpath, entry.name)
            if is_ignored_path(path, root, patterns):
                continue
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(path)
            else:
                paths.append(path)
        paths.extend(subdirs)
        # Reversed so the stack yields subdirectories alphabetically
        pending.extend(reversed(subdirs))

    return paths
