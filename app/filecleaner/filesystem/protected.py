"""Ignore patterns for paths the cleaner must leave alone.

Patterns are glob-style and matched against paths relative to the
cleaner root, using forward slashes as separators. A path is ignored
when the path itself or any of its ancestors below the root matches,
so ignoring a directory ignores its whole subtree.
"""

import fnmatch
import os
from collections.abc import Iterable
from pathlib import PurePath


def relative_parts(path: str, root: str) -> tuple[str, ...]:
    """Split a path into its components relative to root.

    Args:
        path: Path located at or below root.
        root: Cleaner root directory.

    Returns:
        Tuple of components; empty for the root itself.
    """
    rel = os.path.relpath(path, root)
    if rel == os.curdir:
        return ()
    return PurePath(rel).parts


def is_ignored_path(path: str, root: str, patterns: Iterable[str]) -> bool:
    """Check if a path falls under one of the ignore patterns.

    The root itself is never ignored.

    Args:
        path: Path located at or below root.
        root: Cleaner root directory.
        patterns: Glob patterns relative to root (e.g. "cache", "*.lock").

    Returns:
        True if the path or one of its ancestors below root matches.
    """
    patterns = tuple(patterns)
    if not patterns:
        return False

    parts = relative_parts(path, root)
    for end in range(1, len(parts) + 1):
        candidate = "/".join(parts[:end])
        for pattern in patterns:
            if fnmatch.fnmatchcase(candidate, pattern):
                return True

    return False
