"""
Lock file operations for versionslock.

This module reads and writes ``versions.lock``, checks a freshly computed lock
state against it, and answers "why" lookups by fingerprint.

Key features:
- Deterministic, sorted, one-line-per-module text format
- Atomic replacement of the lock file on write
- Staleness report listing every missing, unknown and differing module
- Reverse lookup from a fingerprint to the dependents behind it

Public exports:
    ConflictSafeLockFile: Reads and writes the lock file at a path
    serialize_lock_state / parse_lock_state: Pure text codec
    diff_lock_states: Compare persisted and current lock states
    ensure_lock_state_is_up_to_date: Raise StaleLockStateError on drift
    format_difference_report: Human-readable drift report
    why / format_why_report: Reverse lookup by fingerprint
"""

from versionslock.lockfile.conflict_safe import (
    ConflictSafeLockFile,
    LINE_PATTERN,
    serialize_lock_state,
    parse_lock_state,
)
from versionslock.lockfile.validator import (
    LineDifference,
    LockStateDifference,
    diff_lock_states,
    ensure_lock_state_is_up_to_date,
    format_difference_report,
)
from versionslock.lockfile.why import (
    WhyMatch,
    WhyResult,
    why,
    format_why_report,
)

__all__ = [
    # Codec
    "ConflictSafeLockFile",
    "LINE_PATTERN",
    "serialize_lock_state",
    "parse_lock_state",
    # Validator
    "LineDifference",
    "LockStateDifference",
    "diff_lock_states",
    "ensure_lock_state_is_up_to_date",
    "format_difference_report",
    # Why
    "WhyMatch",
    "WhyResult",
    "why",
    "format_why_report",
]
