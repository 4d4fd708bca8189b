"""pytest fixtures for directory cleanup.

Loaded automatically through the ``pytest11`` entry point. Every cleaner
a fixture hands out is closed at fixture teardown, so directories are
restored even when the test fails.

Example::

    def test_writes_report(make_dir_cleaner):
        make_dir_cleaner("tests/data")
        generate_report("tests/data/report.txt")
        assert Path("tests/data/report.txt").exists()
"""

import os
from collections.abc import Callable, Iterator
from contextlib import ExitStack
from pathlib import Path

import pytest

from filecleaner.core.cleaner import DirectoryCleaner
from filecleaner.core.config import CleanerConfig

CleanerFactory = Callable[..., DirectoryCleaner]


@pytest.fixture
def make_dir_cleaner() -> Iterator[CleanerFactory]:
    """Factory creating DirectoryCleaner objects that are closed at teardown.

    Cleaners are closed in reverse creation order, so a cleaner over a
    subdirectory is processed before one over its parent. Every cleaner
    is closed even when closing another one fails.
    """
    with ExitStack() as stack:

        def _make(
            root: str | os.PathLike[str], config: CleanerConfig | None = None
        ) -> DirectoryCleaner:
            cleaner = DirectoryCleaner(root, config)
            stack.callback(cleaner.close)
            return cleaner

        yield _make


@pytest.fixture
def dir_cleaner(tmp_path: Path, make_dir_cleaner: CleanerFactory) -> DirectoryCleaner:
    """DirectoryCleaner over the test's tmp_path."""
    return make_dir_cleaner(tmp_path)
