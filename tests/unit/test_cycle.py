"""
Tests for LockCycle and Memoized.

Tests cover:
- Resolving the snapshot at most once per cycle
- Writing, verifying and explaining a lock state
- Aborting on unresolved dependencies without writing
- Concurrent access to memoized values
"""

import threading

import pytest

from versionslock.cycle import LockCycle, Memoized
from versionslock.errors import ConfigurationError, StaleLockStateError, UnresolvedDependenciesError
from versionslock.lockfile import ConflictSafeLockFile
from versionslock.lockstate import ModuleIdentifier
from tests.fixtures import (
    GUAVA,
    GUAVA_FINGERPRINT,
    GUAVA_WITH_TRACING_FINGERPRINT,
    TRACING,
    create_guava_snapshot,
    create_projects,
    create_unresolved_snapshot,
    edge,
)


class CountingSupplier:
    def __init__(self, snapshot):
        self.snapshot = snapshot
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.snapshot


class TestMemoized:

    def test_computes_once(self):
        calls = []
        memoized = Memoized(lambda: calls.append(1) or len(calls))

        assert memoized.get() == 1
        assert memoized.get() == 1
        assert calls == [1]

    def test_concurrent_get_computes_once(self):
        calls = []
        started = threading.Event()

        def supplier():
            started.wait(timeout=5)
            calls.append(1)
            return object()

        memoized = Memoized(supplier)
        results = []
        threads = [threading.Thread(target=lambda: results.append(memoized.get())) for _ in range(8)]
        for thread in threads:
            thread.start()
        started.set()
        for thread in threads:
            thread.join(timeout=5)

        assert len(calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)

    def test_exception_is_not_cached(self):
        attempts = []

        def supplier():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first attempt fails")
            return "ok"

        memoized = Memoized(supplier)
        with pytest.raises(RuntimeError):
            memoized.get()
        assert memoized.get() == "ok"


class TestLockCycleWrite:

    def test_write(self, lockfile_path, mock_logger):
        cycle = LockCycle(lambda: create_guava_snapshot(), lockfile_path, logger=mock_logger)

        assert cycle.write() == lockfile_path
        assert f"{GUAVA} (2 constraints: {GUAVA_FINGERPRINT})" in lockfile_path.read_text()
        mock_logger.assert_logged('status', "Finished writing lock state")

    def test_snapshot_resolved_once(self, lockfile_path):
        supplier = CountingSupplier(create_guava_snapshot())
        cycle = LockCycle(supplier, lockfile_path)

        cycle.write()
        cycle.verify()
        cycle.why(GUAVA_FINGERPRINT)

        assert supplier.calls == 1

    def test_unresolved_aborts_without_writing(self, lockfile_path):
        cycle = LockCycle(create_unresolved_snapshot, lockfile_path)

        with pytest.raises(UnresolvedDependenciesError):
            cycle.write()
        assert not lockfile_path.exists()

    def test_unresolved_leaves_existing_lock_file(self, lockfile_path):
        lockfile_path.write_text("previous\n")
        cycle = LockCycle(create_unresolved_snapshot, lockfile_path)

        with pytest.raises(UnresolvedDependenciesError):
            cycle.write()
        assert lockfile_path.read_text() == "previous\n"

    def test_precondition_violation(self, lockfile_path):
        snapshot = create_guava_snapshot()
        snapshot.projects.extend(create_projects(conflict_resolution="strict"))

        with pytest.raises(ConfigurationError):
            LockCycle(lambda: snapshot, lockfile_path).write()
        assert not lockfile_path.exists()

    def test_preconditions_can_be_skipped(self, lockfile_path):
        snapshot = create_guava_snapshot()
        snapshot.projects.extend(create_projects(conflict_resolution="strict"))

        LockCycle(lambda: snapshot, lockfile_path, check_preconditions=False).write()
        assert lockfile_path.exists()


class TestLockCycleVerify:

    def test_up_to_date(self, lockfile_path):
        LockCycle(create_guava_snapshot, lockfile_path).write()
        assert LockCycle(create_guava_snapshot, lockfile_path).verify() is True

    def test_missing_lock_file_warns(self, lockfile_path, mock_logger):
        cycle = LockCycle(create_guava_snapshot, lockfile_path, logger=mock_logger)

        assert cycle.verify() is False
        mock_logger.assert_logged('warning', "doesn't exist")
        mock_logger.assert_logged('warning', "versionslock write")

    def test_new_dependent_is_reported(self, lockfile_path):
        LockCycle(create_guava_snapshot, lockfile_path).write()
        cycle = LockCycle(lambda: create_guava_snapshot(edge(TRACING, "16.0")), lockfile_path)

        with pytest.raises(StaleLockStateError) as exc_info:
            cycle.verify()

        differing = exc_info.value.differing
        guava = ModuleIdentifier.parse("com.google.guava:guava")
        assert list(differing) == [guava]
        assert differing[guava].persisted.fingerprint == GUAVA_FINGERPRINT
        assert differing[guava].current.fingerprint == GUAVA_WITH_TRACING_FINGERPRINT
        assert exc_info.value.missing == []
        assert exc_info.value.unknown == []

    def test_hand_edited_lock_file(self, lockfile_path):
        lockfile_path.write_text(f"{GUAVA} (2 constraints: f59715c4)\n")
        cycle = LockCycle(lambda: create_guava_snapshot(edge(TRACING, "16.0")), lockfile_path)

        with pytest.raises(StaleLockStateError) as exc_info:
            cycle.verify()

        assert len(exc_info.value.unknown) == 2
        assert list(exc_info.value.differing) == [ModuleIdentifier.parse("com.google.guava:guava")]


class TestLockCycleLookups:

    def test_why(self, lockfile_path):
        result = LockCycle(create_guava_snapshot, lockfile_path).why(GUAVA_FINGERPRINT)
        assert [str(m.line.module_version) for m in result.matches] == [GUAVA]

    def test_constraints(self, lockfile_path):
        ConflictSafeLockFile(lockfile_path).write_locks(
            LockCycle(create_guava_snapshot, lockfile_path).full_lock_state.get()
        )
        constraints = LockCycle(create_guava_snapshot, lockfile_path).constraints()
        assert GUAVA in [c.notation for c in constraints]
