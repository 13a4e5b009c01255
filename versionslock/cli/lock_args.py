"""
CLI argument builders for the lock commands.

Provides arguments for:
- versionslock write: Regenerate the lock file from a resolution snapshot
- versionslock verify: Fail if the lock file drifted from the snapshot
- versionslock why: Expand a lock file hash into its dependents
- versionslock constraints: Print the strict constraints to enforce
"""

from versionslock.cli.common_args import (
    HELP_MESSAGES,
    add_lockfile_argument,
    add_snapshot_argument,
    add_universal_arguments,
)

CONSTRAINT_FORMATS = ['text', 'yaml']


def add_write_arguments(parser):
    add_lockfile_argument(parser)
    add_snapshot_argument(parser)
    parser.add_argument(
        "--skip-preconditions",
        action="store_true",
        help=HELP_MESSAGES['skip_preconditions'],
    )
    add_universal_arguments(parser)
    return parser


def add_verify_arguments(parser):
    add_lockfile_argument(parser)
    add_snapshot_argument(parser)
    parser.add_argument(
        "--skip-preconditions",
        action="store_true",
        help=HELP_MESSAGES['skip_preconditions'],
    )
    add_universal_arguments(parser)
    return parser


def add_why_arguments(parser):
    parser.add_argument(
        "hash",
        help=HELP_MESSAGES['hash'],
    )
    add_lockfile_argument(parser)
    add_snapshot_argument(parser)
    add_universal_arguments(parser)
    return parser


def add_constraints_arguments(parser):
    add_lockfile_argument(parser)
    parser.add_argument(
        "--format",
        choices=CONSTRAINT_FORMATS,
        default="text",
        dest="output_format",
        help=HELP_MESSAGES['constraints_format'],
    )
    add_universal_arguments(parser)
    return parser
