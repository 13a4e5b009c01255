"""
CLI argument builders for versionslock.

Modules:
    - common_args: Shared help messages and universal arguments
    - lock_args: write, verify, why and constraints arguments
"""

from versionslock.cli.common_args import (
    HELP_MESSAGES,
    PROGRAM_DESCRIPTIONS,
    add_universal_arguments,
    add_lockfile_argument,
    add_snapshot_argument,
)
from versionslock.cli.lock_args import (
    CONSTRAINT_FORMATS,
    add_write_arguments,
    add_verify_arguments,
    add_why_arguments,
    add_constraints_arguments,
)

__all__ = [
    'HELP_MESSAGES',
    'PROGRAM_DESCRIPTIONS',
    'add_universal_arguments',
    'add_lockfile_argument',
    'add_snapshot_argument',
    'CONSTRAINT_FORMATS',
    'add_write_arguments',
    'add_verify_arguments',
    'add_why_arguments',
    'add_constraints_arguments',
]
