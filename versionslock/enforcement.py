"""
Output boundary: strict version constraints derived from the lock file.

The host build applies one constraint per locked module to every project.
Each constraint is tagged so the resolver can report it back as a
lock-constraint edge, which ``compute_full_lock_state`` then ignores.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from versionslock.config import LOCK_CONSTRAINT_REASON
from versionslock.lockfile import ConflictSafeLockFile
from versionslock.lockstate import LockState, ModuleIdentifier


@dataclass(frozen=True, order=True)
class LockConstraint:
    """
    A strict version constraint for one locked module.

    Attributes:
        module: The locked module.
        version: The only version the module may resolve to.
        strictly: Always enforced as a strict constraint, never a preference.
        because: Reason shown by the host's dependency insight.
        lock_constraint: Tag identifying constraints generated by versionslock.
    """
    module: ModuleIdentifier
    version: str
    strictly: bool = True
    because: str = LOCK_CONSTRAINT_REASON
    lock_constraint: bool = True

    @property
    def notation(self) -> str:
        return f"{self.module}:{self.version}"

    def to_dict(self) -> dict:
        return {
            'notation': self.notation,
            'strictly': self.version if self.strictly else None,
            'because': self.because,
            'attributes': {'consistent-versions': self.lock_constraint},
        }


def constraints_from_lock_state(lock_state: LockState) -> List[LockConstraint]:
    return [LockConstraint(module, line.version) for module, line in lock_state.items()]


def constraints_from_lock_file(path: Union[str, Path], logger=None) -> List[LockConstraint]:
    """Read the lock file at ``path`` and turn every line into a strict constraint."""
    constraints = constraints_from_lock_state(ConflictSafeLockFile(path, logger=logger).read_locks())
    if logger:
        logger.verbose(f"Constructed {len(constraints)} lock constraints from {path}")
    return constraints
