"""Unit tests for filesystem cleanup models.

Tests for PathType, ActionKind and CleanAction.
"""

import pytest
from filecleaner.filesystem.models import ActionKind, CleanAction, PathType


class TestPathType:
    """Tests for PathType enum."""

    def test_values(self) -> None:
        """PathType values are lowercase strings."""
        assert PathType.DIRECTORY.value == "directory"
        assert PathType.FILE.value == "file"

    def test_term(self) -> None:
        """term is the noun used in messages."""
        assert PathType.DIRECTORY.term == "directory"
        assert PathType.FILE.term == "file"


class TestCleanAction:
    """Tests for CleanAction dataclass."""

    def test_removal_defaults(self) -> None:
        """A removal without a granted mode has mode None and is not a dry run."""
        action = CleanAction(path="/tmp/x", kind=ActionKind.REMOVE, path_type=PathType.FILE)

        assert action.mode is None
        assert action.mode_octal is None
        assert action.dry_run is False

    def test_frozen(self) -> None:
        """CleanAction is immutable."""
        action = CleanAction(path="/tmp/x", kind=ActionKind.REMOVE, path_type=PathType.FILE)

        with pytest.raises(AttributeError):
            action.path = "/tmp/y"  # type: ignore[misc]

    def test_empty_path_rejected(self) -> None:
        """Empty paths are rejected."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            CleanAction(path="", kind=ActionKind.REMOVE, path_type=PathType.FILE)

    def test_restore_requires_mode(self) -> None:
        """A mode restore without a mode is rejected."""
        with pytest.raises(ValueError, match="restored mode"):
            CleanAction(path="/tmp/x", kind=ActionKind.RESTORE_MODE, path_type=PathType.FILE)

    def test_mode_octal(self) -> None:
        """mode_octal zero-pads to four digits."""
        action = CleanAction(
            path="/tmp/x",
            kind=ActionKind.RESTORE_MODE,
            path_type=PathType.FILE,
            mode=0o644,
        )

        assert action.mode_octal == "0644"

    @pytest.mark.parametrize(
        ("action", "expected"),
        [
            (
                CleanAction("/d/f", ActionKind.RESTORE_MODE, PathType.FILE, 0o600),
                "Restored mode 0600 on /d/f",
            ),
            (
                CleanAction("/d/f", ActionKind.REMOVE, PathType.FILE),
                "Removed file /d/f",
            ),
            (
                CleanAction("/d/sub", ActionKind.REMOVE, PathType.DIRECTORY, dry_run=True),
                "Would remove directory /d/sub",
            ),
            (
                CleanAction("/d", ActionKind.RESTORE_MODE, PathType.DIRECTORY, 0o755, True),
                "Would restore mode 0755 on /d",
            ),
        ],
    )
    def test_describe(self, action: CleanAction, expected: str) -> None:
        """describe() renders a single human-readable line."""
        assert action.describe() == expected
