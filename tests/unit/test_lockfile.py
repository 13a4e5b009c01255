"""
Tests for the lock file codec and ConflictSafeLockFile.

Tests cover:
- Serialization format, banner and ordering
- Parsing, comment handling and malformed lines
- Write then read stability
- Atomic replacement and write failures
"""

import os

import pytest

from versionslock.config import LOCKFILE_BANNER
from versionslock.errors import ErrorCode, FileSystemError, LockFileFormatError
from versionslock.lockfile import ConflictSafeLockFile, parse_lock_state, serialize_lock_state
from versionslock.lockstate import Line, LockState, ModuleIdentifier, compute_full_lock_state, to_lock_state
from tests.fixtures import GUAVA, GUAVA_FINGERPRINT, GUAVA_RETRYING, JACKSON_GUAVA


@pytest.fixture
def guava_lock_state(guava_snapshot):
    return to_lock_state(compute_full_lock_state(guava_snapshot.components))


class TestSerializeLockState:
    """Tests for serialize_lock_state."""

    def test_format(self, guava_lock_state):
        text = serialize_lock_state(guava_lock_state)
        lines = text.splitlines()

        assert text.startswith(LOCKFILE_BANNER)
        assert text.endswith("\n")
        assert lines[1:] == [
            f"{JACKSON_GUAVA}:2.9.0 (1 constraints: {guava_lock_state[ModuleIdentifier.parse(JACKSON_GUAVA)].fingerprint})",
            f"{GUAVA_RETRYING}:2.0.0 (1 constraints: {guava_lock_state[ModuleIdentifier.parse(GUAVA_RETRYING)].fingerprint})",
            f"{GUAVA} (2 constraints: {GUAVA_FINGERPRINT})",
        ]

    def test_empty_lock_state(self):
        assert serialize_lock_state(LockState({})) == LOCKFILE_BANNER

    def test_does_not_contain_dependents(self, guava_lock_state):
        text = serialize_lock_state(guava_lock_state)
        assert "[10.+,)" not in text


class TestParseLockState:
    """Tests for parse_lock_state."""

    def test_parse(self):
        text = LOCKFILE_BANNER + f"{GUAVA} (2 constraints: {GUAVA_FINGERPRINT})\n"
        lock_state = parse_lock_state(text)

        line = lock_state[ModuleIdentifier.parse("com.google.guava:guava")]
        assert line == Line("com.google.guava", "guava", "18.0", 2, GUAVA_FINGERPRINT)
        assert line.dependents is None

    def test_ignores_blank_lines_and_comments(self):
        text = "\n# some comment\n\n" + f"{GUAVA} (2 constraints: {GUAVA_FINGERPRINT})\n\n"
        assert len(parse_lock_state(text)) == 1

    def test_round_trip(self, guava_lock_state):
        assert parse_lock_state(serialize_lock_state(guava_lock_state)) == guava_lock_state

    @pytest.mark.parametrize("bad_line", [
        "com.google.guava:guava:18.0",
        "com.google.guava:guava (2 constraints: 420728e2)",
        "com.google.guava:guava:18.0 (2 constraints: 420728)",
        "com.google.guava:guava:18.0 (2 constraints: 420728E2)",
        "com.google.guava:guava:18.0 (two constraints: 420728e2)",
    ])
    def test_malformed_line(self, bad_line):
        text = LOCKFILE_BANNER + bad_line + "\n"
        with pytest.raises(LockFileFormatError) as exc_info:
            parse_lock_state(text, source="versions.lock")

        assert exc_info.value.line_number == 2
        assert exc_info.value.code == ErrorCode.LOCKFILE_MALFORMED_LINE
        assert "versions.lock" in str(exc_info.value)

    def test_reports_every_bad_line(self):
        text = (
            "a:b:1 (1 constraints: 0123abcd)\n"
            "bad line one\n"
            "c:d:2 (1 constraints: 0123abcd)\n"
            "bad line two\n"
            "a:b:3 (1 constraints: 0123abcd)\n"
        )
        with pytest.raises(LockFileFormatError) as exc_info:
            parse_lock_state(text, source="versions.lock")

        error = exc_info.value
        assert error.code == ErrorCode.LOCKFILE_MALFORMED_LINE
        assert error.problems == [
            (2, "bad line one"),
            (4, "bad line two"),
            (5, "a:b:3 (1 constraints: 0123abcd)"),
        ]
        assert "bad line one" in str(error)
        assert "bad line two" in str(error)
        assert "Module a:b is locked more than once" in str(error)

    def test_duplicate_module(self):
        text = (
            f"{GUAVA} (2 constraints: {GUAVA_FINGERPRINT})\n"
            f"com.google.guava:guava:19.0 (2 constraints: {GUAVA_FINGERPRINT})\n"
        )
        with pytest.raises(LockFileFormatError) as exc_info:
            parse_lock_state(text)

        assert exc_info.value.code == ErrorCode.LOCKFILE_DUPLICATE_MODULE
        assert exc_info.value.line_number == 2


class TestConflictSafeLockFile:
    """Tests for ConflictSafeLockFile."""

    def test_write_then_read(self, lockfile_path, guava_snapshot, guava_lock_state, mock_logger):
        lockfile = ConflictSafeLockFile(lockfile_path, logger=mock_logger)
        full = compute_full_lock_state(guava_snapshot.components)

        assert not lockfile.exists()
        assert lockfile.write_locks(full) == lockfile_path
        assert lockfile.exists()
        assert lockfile.read_locks() == guava_lock_state
        mock_logger.assert_logged('verbose', "Wrote 3 locked modules")
        mock_logger.assert_logged('verbose', "Read 3 locked modules")

    def test_rewrite_is_byte_identical(self, lockfile_path, guava_lock_state):
        lockfile = ConflictSafeLockFile(lockfile_path)
        lockfile.write_locks(guava_lock_state)
        first = lockfile_path.read_bytes()

        lockfile.write_locks(lockfile.read_locks())
        assert lockfile_path.read_bytes() == first

    def test_write_uses_unix_newlines(self, lockfile_path, guava_lock_state):
        ConflictSafeLockFile(lockfile_path).write_locks(guava_lock_state)
        assert b"\r\n" not in lockfile_path.read_bytes()

    def test_write_creates_parent_directories(self, tmp_path, guava_lock_state):
        path = tmp_path / "nested" / "dir" / "versions.lock"
        ConflictSafeLockFile(path).write_locks(guava_lock_state)
        assert path.is_file()

    def test_write_leaves_no_temporary_files(self, lockfile_path, guava_lock_state):
        ConflictSafeLockFile(lockfile_path).write_locks(guava_lock_state)
        assert os.listdir(lockfile_path.parent) == [lockfile_path.name]

    def test_read_missing_file(self, lockfile_path):
        with pytest.raises(FileSystemError) as exc_info:
            ConflictSafeLockFile(lockfile_path).read_locks()

        assert exc_info.value.code == ErrorCode.FS_PATH_NOT_FOUND

    def test_failed_replace_keeps_old_file(self, lockfile_path, guava_lock_state, monkeypatch):
        lockfile_path.write_text("old content\n", encoding="utf-8")

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("versionslock.lockfile.conflict_safe.os.replace", failing_replace)
        with pytest.raises(FileSystemError) as exc_info:
            ConflictSafeLockFile(lockfile_path).write_locks(guava_lock_state)

        assert exc_info.value.code == ErrorCode.FS_WRITE_FAILED
        assert lockfile_path.read_text(encoding="utf-8") == "old content\n"
        assert os.listdir(lockfile_path.parent) == [lockfile_path.name]
