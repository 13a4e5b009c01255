"""
Staleness check of a persisted lock state against a freshly computed one.

Every difference is reported in one go, grouped as:
- missing: locked, but no longer in the resolution result
- unknown: resolved, but not locked
- differing: locked with another version or other dependents
"""

from dataclasses import dataclass, field
from typing import Dict, List

from versionslock.config import DEFAULT_LOCKFILE, WRITE_LOCKS_COMMAND
from versionslock.error_messages import format_error
from versionslock.errors import StaleLockStateError
from versionslock.lockstate import Line, LockState, ModuleIdentifier


@dataclass(frozen=True)
class LineDifference:
    persisted: Line
    current: Line

    def __str__(self) -> str:
        return f"({self.persisted}, {self.current})"


@dataclass
class LockStateDifference:
    """Result of comparing a persisted lock state with the current one."""
    missing: List[ModuleIdentifier] = field(default_factory=list)
    unknown: List[ModuleIdentifier] = field(default_factory=list)
    differing: Dict[ModuleIdentifier, LineDifference] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.missing or self.unknown or self.differing)

    @property
    def summary(self) -> str:
        if self.is_empty:
            return "Lock state is up to date"
        issues = []
        if self.missing:
            issues.append(f"{len(self.missing)} missing")
        if self.unknown:
            issues.append(f"{len(self.unknown)} unknown")
        if self.differing:
            issues.append(f"{len(self.differing)} differing")
        return f"Lock state is stale: {', '.join(issues)}"


def diff_lock_states(persisted: LockState, current: LockState) -> LockStateDifference:
    """Compare two lock states module by module."""
    persisted_lines = persisted.lines_by_module_identifier()
    current_lines = current.lines_by_module_identifier()

    missing = sorted(persisted_lines.keys() - current_lines.keys())
    unknown = sorted(current_lines.keys() - persisted_lines.keys())
    differing = {
        module: LineDifference(persisted_lines[module], current_lines[module])
        for module in sorted(persisted_lines.keys() & current_lines.keys())
        if persisted_lines[module] != current_lines[module]
    }
    return LockStateDifference(missing=missing, unknown=unknown, differing=differing)


def format_difference_report(difference: LockStateDifference) -> str:
    """Format a difference as one paragraph per non-empty category."""
    lines = []
    if difference.missing:
        lines.append(format_error('LOCK_STATE_MISSING', modules=_bracketed(difference.missing)))
        lines.extend(f"  - {module}" for module in difference.missing)
    if difference.unknown:
        lines.append(format_error('LOCK_STATE_UNKNOWN', modules=_bracketed(difference.unknown)))
        lines.extend(f"  - {module}" for module in difference.unknown)
    if difference.differing:
        lines.append(format_error('LOCK_STATE_DIFFERING', modules=_bracketed(difference.differing)))
        for module, line_difference in difference.differing.items():
            lines.append(f"  - {module}")
            lines.append(f"      locked:   {line_difference.persisted}")
            lines.append(f"      resolved: {line_difference.current}")
    return "\n".join(lines)


def ensure_lock_state_is_up_to_date(current: LockState, persisted: LockState,
                                    path: str = DEFAULT_LOCKFILE, logger=None) -> LockStateDifference:
    """Raise if ``persisted`` does not match ``current``.

    Raises:
        StaleLockStateError: Listing every missing, unknown and differing module.
    """
    difference = diff_lock_states(persisted, current)
    if difference.is_empty:
        if logger:
            logger.verbose(f"Lock state in {path} is up to date ({len(current)} modules)")
        return difference

    raise StaleLockStateError(
        format_error('LOCK_STATE_STALE', path=path, report=format_difference_report(difference),
                     command=WRITE_LOCKS_COMMAND),
        missing=difference.missing,
        unknown=difference.unknown,
        differing=difference.differing,
    )


def _bracketed(modules) -> str:
    return "[" + ", ".join(str(m) for m in modules) + "]"
