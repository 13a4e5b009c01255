"""
Tests for strict constraints derived from the lock file.
"""

import pytest

from versionslock.config import LOCK_CONSTRAINT_REASON
from versionslock.enforcement import LockConstraint, constraints_from_lock_file, constraints_from_lock_state
from versionslock.errors import FileSystemError
from versionslock.lockfile import ConflictSafeLockFile, parse_lock_state
from versionslock.lockstate import ModuleIdentifier, compute_full_lock_state
from tests.fixtures import GUAVA, GUAVA_FINGERPRINT, GUAVA_RETRYING, JACKSON_GUAVA


class TestLockConstraint:

    def test_defaults(self):
        constraint = LockConstraint(ModuleIdentifier.parse("com.google.guava:guava"), "18.0")

        assert constraint.notation == GUAVA
        assert constraint.strictly
        assert constraint.lock_constraint
        assert constraint.because == LOCK_CONSTRAINT_REASON

    def test_to_dict(self):
        constraint = LockConstraint(ModuleIdentifier.parse("com.google.guava:guava"), "18.0")
        assert constraint.to_dict() == {
            'notation': GUAVA,
            'strictly': "18.0",
            'because': "Locked by versions.lock",
            'attributes': {'consistent-versions': True},
        }


class TestConstraintsFromLockState:

    def test_one_constraint_per_line(self):
        lock_state = parse_lock_state(f"{GUAVA} (2 constraints: {GUAVA_FINGERPRINT})\n")
        assert constraints_from_lock_state(lock_state) == [
            LockConstraint(ModuleIdentifier.parse("com.google.guava:guava"), "18.0"),
        ]

    def test_empty(self):
        assert constraints_from_lock_state(parse_lock_state("")) == []


class TestConstraintsFromLockFile:

    def test_reads_lock_file(self, lockfile_path, guava_snapshot, mock_logger):
        ConflictSafeLockFile(lockfile_path).write_locks(compute_full_lock_state(guava_snapshot.components))

        constraints = constraints_from_lock_file(lockfile_path, logger=mock_logger)

        assert [c.notation for c in constraints] == [
            f"{JACKSON_GUAVA}:2.9.0",
            f"{GUAVA_RETRYING}:2.0.0",
            GUAVA,
        ]
        mock_logger.assert_logged('verbose', "Constructed 3 lock constraints")

    def test_missing_lock_file(self, lockfile_path):
        with pytest.raises(FileSystemError):
            constraints_from_lock_file(lockfile_path)
