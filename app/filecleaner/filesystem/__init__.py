"""Filesystem snapshot module.

This module provides per-path state capture and repair, recursive path
enumeration, ignore-pattern matching, and the models describing repairs.
"""

from filecleaner.filesystem.finder import find_paths
from filecleaner.filesystem.models import ActionKind, CleanAction, PathType
from filecleaner.filesystem.protected import is_ignored_path
from filecleaner.filesystem.state import PathState

__all__ = [
    "ActionKind",
    "CleanAction",
    "PathState",
    "PathType",
    "find_paths",
    "is_ignored_path",
]
