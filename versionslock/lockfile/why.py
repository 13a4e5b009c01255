"""
Reverse lookup from a lock file fingerprint to the dependents behind it.

The lock file only stores the fingerprint, so the dependents are taken from a
FullLockState computed in the same cycle.
"""

from dataclasses import dataclass, field
from typing import List

from versionslock.config import DEFAULT_LOCKFILE
from versionslock.error_messages import format_error
from versionslock.errors import ConfigurationError
from versionslock.lockstate import ConstraintKind, Dependents, FullLockState, Line


@dataclass(frozen=True)
class WhyMatch:
    line: Line
    dependents: Dependents


@dataclass
class WhyResult:
    fingerprint: str
    matches: List[WhyMatch] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.matches)

    @property
    def ambiguous(self) -> bool:
        return len(self.matches) > 1


def why(fingerprint: str, full_lock_state: FullLockState) -> WhyResult:
    """Find every locked module whose fingerprint starts with ``fingerprint``.

    Raises:
        ConfigurationError: If ``fingerprint`` is empty or not hexadecimal.
    """
    query = (fingerprint or "").strip().lower()
    if not query or any(c not in "0123456789abcdef" for c in query):
        raise ConfigurationError(
            f"Invalid hash: {fingerprint!r}",
            parameter="hash",
            expected="hexadecimal fingerprint from the lock file",
            actual=fingerprint,
        )

    matches = []
    for identifier, dependents in full_lock_state.lines():
        line = Line.of(identifier, dependents)
        if line.fingerprint.startswith(query):
            matches.append(WhyMatch(line, dependents))
    return WhyResult(fingerprint=query, matches=matches)


def format_why_report(result: WhyResult, path: str = DEFAULT_LOCKFILE) -> str:
    if not result.found:
        return format_error('WHY_NOT_FOUND', fingerprint=result.fingerprint, path=path)

    lines = []
    if result.ambiguous:
        lines.append(f"{len(result.matches)} lines match hash {result.fingerprint}:")
    for match in result.matches:
        lines.append(str(match.line))
        for requester, constraints in match.dependents.items():
            for constraint in constraints:
                row = f"  {requester} -> {constraint}"
                # Only non-exact requests are annotated
                if constraint.kind is not ConstraintKind.EXACT:
                    row += f" ({constraint.kind.value})"
                lines.append(row)
        if not match.dependents:
            lines.append("  (no dependents)")
    return "\n".join(lines)
