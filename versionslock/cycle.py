"""
One validate/write cycle over a single resolution snapshot.

The snapshot is expensive to produce (a full graph walk) and every consumer in
a cycle has to observe the same graph. ``LockCycle`` therefore resolves it at
most once, through ``Memoized``, and shares that value with the write,
verify, why and constraints operations. Access to the lock file itself is
serialized so a reader never observes a half-finished write.
"""

import threading
from pathlib import Path
from typing import Callable, Generic, List, TypeVar, Union

from versionslock.config import WRITE_LOCKS_COMMAND
from versionslock.enforcement import LockConstraint, constraints_from_lock_state
from versionslock.error_messages import format_error
from versionslock.lockfile import (
    ConflictSafeLockFile,
    WhyResult,
    ensure_lock_state_is_up_to_date,
    why,
)
from versionslock.lockstate import FullLockState, ResolutionSnapshot, to_lock_state
from versionslock.preconditions import check_preconditions
from versionslock.resolution import compute_lock_state

T = TypeVar("T")


class Memoized(Generic[T]):
    """Thread-safe value computed on first ``get()`` and reused afterwards."""

    _UNSET = object()

    def __init__(self, supplier: Callable[[], T]):
        self._supplier = supplier
        self._value = self._UNSET
        self._lock = threading.Lock()

    def get(self) -> T:
        if self._value is self._UNSET:
            with self._lock:
                if self._value is self._UNSET:
                    self._value = self._supplier()
        return self._value


class LockCycle:
    """
    Orchestrates write, verify and lookups for one resolution snapshot.

    Args:
        snapshot_supplier: Produces the resolution snapshot; called at most once.
        lockfile_path: Location of the lock file.
        logger: Optional logger.
        check_preconditions: Validate the snapshot project settings before computing.
    """

    def __init__(self, snapshot_supplier: Callable[[], ResolutionSnapshot],
                 lockfile_path: Union[str, Path], logger=None, check_preconditions: bool = True):
        self.logger = logger
        self._check_preconditions = check_preconditions
        self.lockfile = ConflictSafeLockFile(lockfile_path, logger=logger)
        self.snapshot = Memoized(snapshot_supplier)
        self.full_lock_state = Memoized(self._compute_full_lock_state)
        self._lockfile_lock = threading.RLock()

    def _compute_full_lock_state(self) -> FullLockState:
        snapshot = self.snapshot.get()
        if self._check_preconditions:
            check_preconditions(snapshot, logger=self.logger)
        return compute_lock_state(snapshot, logger=self.logger)

    def write(self) -> Path:
        """Compute the lock state and replace the lock file with it."""
        full_lock_state = self.full_lock_state.get()
        with self._lockfile_lock:
            path = self.lockfile.write_locks(full_lock_state)
        if self.logger:
            self.logger.status(f"Finished writing lock state to {path}")
        return path

    def verify(self) -> bool:
        """Check the lock file against the current graph.

        Returns:
            True if the lock file exists and is up to date, False if there is
            no lock file yet.

        Raises:
            StaleLockStateError: If the lock file is out of date.
        """
        with self._lockfile_lock:
            if not self.lockfile.exists():
                if self.logger:
                    self.logger.warning(format_error('LOCKFILE_NOT_FOUND', path=self.lockfile.path,
                                                     command=WRITE_LOCKS_COMMAND))
                return False
            persisted = self.lockfile.read_locks()

        current = to_lock_state(self.full_lock_state.get())
        ensure_lock_state_is_up_to_date(current, persisted, path=str(self.lockfile.path), logger=self.logger)
        return True

    def why(self, fingerprint: str) -> WhyResult:
        return why(fingerprint, self.full_lock_state.get())

    def constraints(self) -> List[LockConstraint]:
        """Strict constraints for every module in the persisted lock file."""
        with self._lockfile_lock:
            lock_state = self.lockfile.read_locks()
        return constraints_from_lock_state(lock_state)
