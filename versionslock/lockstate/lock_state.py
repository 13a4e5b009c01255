"""
LockState: the compact, per-module projection that gets persisted.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from versionslock.lockstate.dependents import Dependents
from versionslock.lockstate.full_lock_state import FullLockState
from versionslock.lockstate.identifiers import ModuleIdentifier, ModuleVersionIdentifier


@dataclass(frozen=True)
class Line:
    """
    One module in the lock file.

    Attributes:
        group: Module group.
        name: Module name.
        version: Locked version.
        num_dependents: Number of requesting modules.
        fingerprint: Hash of the canonical dependents.
        dependents: Full dependents, only known when computed from a live graph.
    """
    group: str
    name: str
    version: str
    num_dependents: int
    fingerprint: str
    dependents: Optional[Dependents] = field(default=None, compare=False, repr=False)

    @property
    def module(self) -> ModuleIdentifier:
        return ModuleIdentifier(self.group, self.name)

    @property
    def module_version(self) -> ModuleVersionIdentifier:
        return ModuleVersionIdentifier(self.group, self.name, self.version)

    @classmethod
    def of(cls, identifier: ModuleVersionIdentifier, dependents: Dependents) -> "Line":
        return cls(
            group=identifier.group,
            name=identifier.name,
            version=identifier.version,
            num_dependents=len(dependents),
            fingerprint=dependents.fingerprint(),
            dependents=dependents,
        )

    def __str__(self) -> str:
        return f"{self.group}:{self.name}:{self.version} ({self.num_dependents} constraints: {self.fingerprint})"


class LockState(Mapping):
    """Immutable mapping of ModuleIdentifier -> Line, iterated in module order."""

    __slots__ = ("_lines",)

    def __init__(self, lines: Dict[ModuleIdentifier, Line]):
        self._lines = dict(sorted(lines.items()))

    @classmethod
    def from_lines(cls, lines) -> "LockState":
        return cls({line.module: line for line in lines})

    def __getitem__(self, key: ModuleIdentifier) -> Line:
        return self._lines[key]

    def __iter__(self) -> Iterator[ModuleIdentifier]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __eq__(self, other):
        if isinstance(other, LockState):
            return self._lines == other._lines
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"LockState({len(self)} lines)"

    def lines_by_module_identifier(self) -> Dict[ModuleIdentifier, Line]:
        return dict(self._lines)


def to_lock_state(full_lock_state: FullLockState) -> LockState:
    """Compact a FullLockState, fingerprinting every module's dependents."""
    return LockState.from_lines(
        Line.of(identifier, dependents) for identifier, dependents in full_lock_state.lines()
    )
