"""
Common CLI arguments and help messages shared across commands.

This module contains:
- Help message definitions
- Universal argument functions
- Lock file and snapshot location arguments
"""

from versionslock.config import DEFAULT_LOCKFILE, FINGERPRINT_LENGTH, WRITE_LOCKS_COMMAND


HELP_MESSAGES = {
    'lockfile': f"Path to the lock file (default: {DEFAULT_LOCKFILE}).",
    'snapshot': (
        "Resolution snapshot exported by the build's dependency resolver (YAML or JSON). "
        "Lists every resolved component with its dependents, plus any unresolved dependencies."
    ),
    'hash': (
        f"Fingerprint from the lock file, e.g. the {FINGERPRINT_LENGTH} hex characters after "
        "'constraints:'. An unambiguous prefix is enough."
    ),
    'constraints_format': "Output format for the constraints. Options: 'text', 'yaml'. Default: text",
    'config_file': "Path to YAML file with argument overrides that will be applied after CLI arguments",
    'skip_preconditions': "Do not check project settings in the snapshot before computing the lock state.",
}

PROGRAM_DESCRIPTIONS = {
    'write': "Compute the lock state from a resolution snapshot and overwrite the lock file.",
    'verify': (
        "Compare the lock file with the lock state computed from a resolution snapshot. "
        f"Fails if anything drifted; fix with '{WRITE_LOCKS_COMMAND}'."
    ),
    'why': "Show which modules depend on the module whose lock file line carries the given hash.",
    'constraints': "Print the strict version constraints the build must apply for the current lock file.",
}


def add_universal_arguments(parser):
    """Add arguments common to all commands.

    Args:
        parser: Argparse parser to add arguments to.
    """
    standard_args = parser.add_argument_group("Standard Arguments")
    standard_args.add_argument(
        '--config-file', '-c',
        type=str,
        help=HELP_MESSAGES['config_file']
    )

    output_control = parser.add_argument_group("Output Control")
    output_control.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )
    output_control.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose mode"
    )
    output_control.add_argument(
        "--stream-log-level",
        type=str,
        help="Log level for console output, e.g. DEBUG, VERBOSE, INFO, STATUS, WARNING"
    )


def add_lockfile_argument(parser):
    parser.add_argument(
        "-l", "--lockfile",
        default=DEFAULT_LOCKFILE,
        help=HELP_MESSAGES['lockfile'],
    )


def add_snapshot_argument(parser, required=True):
    parser.add_argument(
        "-s", "--snapshot",
        required=required,
        help=HELP_MESSAGES['snapshot'],
    )
