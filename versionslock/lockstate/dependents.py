"""
Canonical dependents of a locked module and their fingerprint.

Two ``Dependents`` with the same content always serialize to the same bytes,
no matter in which order requesters and constraints were collected. The
fingerprint is derived from that serialization, so it only moves when the set
of requesters or one of their requested constraints moves.
"""

import hashlib
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, Tuple

from versionslock.config import FINGERPRINT_LENGTH
from versionslock.lockstate.constraints import VersionConstraint
from versionslock.lockstate.identifiers import ModuleIdentifier


class Dependents(Mapping):
    """Requesting module -> sorted, de-duplicated requested constraints."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Dict[ModuleIdentifier, Tuple[VersionConstraint, ...]]):
        self._entries = entries

    @classmethod
    def of(cls, mapping: Mapping) -> "Dependents":
        """Build from ``{requester: iterable of constraints}`` in any order."""
        entries = {}
        for requester in sorted(mapping):
            constraints = {_as_constraint(c) for c in mapping[requester]}
            entries[requester] = tuple(sorted(constraints))
        return cls(entries)

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[ModuleIdentifier, VersionConstraint]]) -> "Dependents":
        """Group ``(requester, constraint)`` pairs by requester."""
        grouped: Dict[ModuleIdentifier, set] = {}
        for requester, constraint in edges:
            grouped.setdefault(requester, set()).add(constraint)
        return cls.of(grouped)

    @classmethod
    def empty(cls) -> "Dependents":
        return cls({})

    def __getitem__(self, requester: ModuleIdentifier) -> Tuple[VersionConstraint, ...]:
        return self._entries[requester]

    def __iter__(self) -> Iterator[ModuleIdentifier]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other):
        if isinstance(other, Dependents):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self):
        return hash(tuple(self._entries.items()))

    def __repr__(self) -> str:
        return f"Dependents({self.canonical_form()!r})"

    def canonical_form(self) -> str:
        """Serialize as ``g1:n1->c1,c2;g2:n2->c3``."""
        return ";".join(
            f"{requester}->{','.join(str(c) for c in constraints)}"
            for requester, constraints in self._entries.items()
        )

    def fingerprint(self) -> str:
        """First ``FINGERPRINT_LENGTH`` hex characters of SHA-256 over the canonical form."""
        digest = hashlib.sha256(self.canonical_form().encode("utf-8")).hexdigest()
        return digest[:FINGERPRINT_LENGTH]


def _as_constraint(value) -> VersionConstraint:
    if isinstance(value, VersionConstraint):
        return value
    return VersionConstraint(value)
