"""
Constants and exit codes for versionslock.

Values here are shared by the lock-state engine, the lock file codec and the
command line front end. Command line arguments may be overridden from a YAML
file, see ``versionslock.cli_parser.apply_yaml_config_overrides``.
"""

import enum


# Lock file location, relative to the project root
DEFAULT_LOCKFILE = "versions.lock"

# Number of hex characters kept from the dependents digest
FINGERPRINT_LENGTH = 8

# Name of the aggregate configuration whose resolution feeds the lock state
UNIFIED_CLASSPATH_NAME = "unifiedClasspath"

# Reason attached to every constraint generated from the lock file. Edges that
# carry this tag are dropped when dependents are computed.
LOCK_CONSTRAINT_REASON = f"Locked by {DEFAULT_LOCKFILE}"

# Remediation shown whenever the persisted lock state is stale
WRITE_LOCKS_COMMAND = "versionslock write"

LOCKFILE_BANNER = (
    "# Run {command} to regenerate this file\n"
).format(command=WRITE_LOCKS_COMMAND)

# Component category values that mark a platform/BOM request
PLATFORM_CATEGORY_MARKER = "platform"

# Project settings that the external resolver must not use
STRICT_CONFLICT_RESOLUTION = "strict"
OVERRIDE_TRANSITIVES_STRATEGY = "OverrideTransitives"
CONFLICT_RESOLVED_STRATEGY = "ConflictResolved"


class EXIT_CODE(enum.IntEnum):
    SUCCESS = 0
    FAILURE = 1
    INVALID_ARGUMENTS = 2
    CONFIG_ERROR = 3
    STALE_LOCK_STATE = 4
    FILE_NOT_FOUND = 5
    ERROR = 10
    INTERRUPTED = 130

    def __str__(self):
        return f"{self.name} ({self.value})"
