"""Directory snapshot and reconciliation.

A DirectoryCleaner scans a directory tree when it is created, then on
clean() compares the current tree with that scan: entries that existed
before get their permission bits restored, entries that did not are
deleted. Deletion is strictly bottom-up (files first, then directories
from the deepest up), so no directory is removed before its contents.

Typical use is as a context manager around code with filesystem side
effects:

    with DirectoryCleaner("tests/data"):
        run_code_that_writes_files()
"""

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType, TracebackType
from typing import Self

from filecleaner.core.config import CleanerConfig
from filecleaner.core.errors import ConstructionError
from filecleaner.filesystem.finder import find_paths
from filecleaner.filesystem.models import CleanAction
from filecleaner.filesystem.state import PathState, path_exists

logger = logging.getLogger(__name__)


def _close_opened(opened: dict[str, int]) -> None:
    """Put directories opened for listing back to their original mode, deepest first."""
    for path in sorted(opened, key=lambda p: len(Path(p).parts), reverse=True):
        try:
            os.chmod(path, opened[path])
        except OSError as e:
            logger.warning("Cannot restore mode %04o on %s: %s", opened[path], path, e.strerror)


def _sort_key(path: str) -> tuple[bool, int, str]:
    """Build the cleanup ordering key for a path.

    Files sort before directories, deeper entries before shallower ones,
    and equal entries alphabetically. A file's depth is the depth of its
    containing directory.
    """
    is_dir = os.path.isdir(path) and not os.path.islink(path)
    directory = path if is_dir else os.path.dirname(path)
    depth = len(Path(directory).parts)
    return (is_dir, -depth, path)


def sort_for_cleanup(paths: Iterable[str]) -> list[str]:
    """Order paths so that removing them one by one never hits a non-empty directory.

    Args:
        paths: Paths to order, in any order.

    Returns:
        New list with all files first, then directories deepest first.
    """
    return sorted(paths, key=_sort_key)


class DirectoryCleaner:
    """Restores a directory tree to a previously scanned state.

    Args:
        root: Directory to manage. Must exist.
        config: Cleaner settings. Defaults to CleanerConfig().

    Raises:
        ConstructionError: If root does not exist or is not a directory.
    """

    def __init__(self, root: str | os.PathLike[str], config: CleanerConfig | None = None) -> None:
        root_str = os.path.abspath(os.fspath(root))
        if not os.path.isdir(root_str):
            raise ConstructionError(
                f"DirectoryCleaner was not passed a directory: '{root_str}'",
                path=root_str,
                operation="construct",
            )

        self._root = root_str
        self._config = config or CleanerConfig()
        self._snapshot: dict[str, PathState] = {}
        self._actions: tuple[CleanAction, ...] = ()
        self._active = True

        self.reset()

    def __repr__(self) -> str:
        return f"DirectoryCleaner({self._root!r}, tracked={len(self._snapshot)})"

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return os.path.abspath(os.fspath(path)) in self._snapshot

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def path(self) -> Path:
        """Root directory managed by this cleaner."""
        return Path(self._root)

    @property
    def config(self) -> CleanerConfig:
        """Settings this cleaner was created with."""
        return self._config

    @property
    def active(self) -> bool:
        """Whether close() has yet to run its final clean."""
        return self._active

    @property
    def snapshot(self) -> Mapping[str, PathState]:
        """Read-only view of the tracked path states."""
        return MappingProxyType(self._snapshot)

    @property
    def actions(self) -> tuple[CleanAction, ...]:
        """Repairs applied by the most recent clean()."""
        return self._actions

    def reset(self) -> bool:
        """Rescan the root and adopt the current tree as the baseline.

        Directories that had to be opened up to be listed are recorded
        with their original mode and put back to it afterwards.

        Returns:
            Always True.

        Raises:
            ConstructionError: If a listed path vanishes before it is captured.
            PermissionRepairError: If a directory cannot be listed.
        """
        opened: dict[str, int] = {}
        snapshot: dict[str, PathState] = {}
        try:
            for path in self._find(opened):
                state = PathState.capture(path)
                if path in opened:
                    state = replace(state, mode=opened[path])
                snapshot[path] = state
        finally:
            _close_opened(opened)

        self._snapshot = snapshot
        logger.debug("Captured %d paths under %s", len(snapshot), self._root)
        return True

    def clean(self) -> bool:
        """Restore the root to the baseline captured by the last scan.

        Tracked entries get their permission bits restored; untracked
        entries are deleted. The first failure aborts the pass.

        Returns:
            Always True.

        Raises:
            CleanerError: Any InconsistencyError, PermissionRepairError or
                DeletionError raised while processing a path.
        """
        actions = list(self._process(dry_run=False))
        self._actions = tuple(actions)
        if actions:
            logger.debug("Applied %d repairs under %s", len(actions), self._root)
        return True

    def pending(self) -> list[CleanAction]:
        """List the repairs clean() would apply, without applying them.

        Returns:
            CleanAction records with dry_run set, in processing order.

        Raises:
            InconsistencyError: If a tracked path vanished or changed type.
            PermissionRepairError: If a tracked path's mode cannot be read.
        """
        return list(self._process(dry_run=True))

    def close(self) -> bool:
        """Run the final clean once, then deactivate the cleaner.

        Further calls do nothing.

        Returns:
            Always True.
        """
        if not self._active:
            return True
        try:
            self.clean()
        finally:
            self._active = False
        return True

    def _find(self, opened: dict[str, int]) -> list[str]:
        return find_paths(self._root, self._config.ignore, opened)

    def _process(self, *, dry_run: bool) -> Iterator[CleanAction]:
        """Reconcile or remove each current path in cleanup order.

        A real pass settles every directory it opened for listing: tracked
        ones get their captured mode back, new ones are removed. A dry run
        puts the opened directories back as it found them.
        """
        opened: dict[str, int] = {}
        try:
            yield from self._apply(self._find(opened), opened, dry_run=dry_run)
        finally:
            if dry_run:
                _close_opened(opened)

    def _apply(
        self, paths: list[str], opened: dict[str, int], *, dry_run: bool
    ) -> Iterator[CleanAction]:
        for path in sort_for_cleanup(paths):
            state = self._snapshot.get(path)
            if state is not None and dry_run and opened.get(path) == state.mode:
                # Already in its captured mode before this listing opened it
                continue
            if state is not None:
                action = state.reconcile(dry_run=dry_run)
            elif not path_exists(path):
                # Removed earlier in this pass
                logger.debug("Skipping vanished path %s", path)
                continue
            else:
                action = PathState.capture(path).remove(
                    directory_mode=self._config.directory_mode,
                    file_mode=self._config.file_mode,
                    dry_run=dry_run,
                )

            if action is not None:
                yield action

