"""
Preconditions on how the external resolver is configured.

The lock state is only meaningful when the resolver picks versions by normal
conflict resolution. These checks reject project settings that would make the
resolved graph disagree with what the lock file enforces. All violations are
collected and reported together.
"""

from typing import List

from versionslock.config import (
    CONFLICT_RESOLVED_STRATEGY,
    OVERRIDE_TRANSITIVES_STRATEGY,
    STRICT_CONFLICT_RESOLUTION,
)
from versionslock.error_messages import format_error
from versionslock.errors import ConfigurationError, ErrorCode
from versionslock.lockstate import ResolutionSnapshot


def find_precondition_violations(snapshot: ResolutionSnapshot) -> List[str]:
    violations = []
    root = next((p for p in snapshot.projects if p.is_root), None)

    for project in snapshot.projects:
        if root is not None and not project.is_root \
                and project.group == root.group and project.name == root.name:
            violations.append(format_error('PRECONDITION_SAME_GROUP_AND_NAME',
                                           project=project.path, name=root.name))
        if project.conflict_resolution == STRICT_CONFLICT_RESOLUTION:
            violations.append(format_error('PRECONDITION_STRICT_CONFLICTS', project=project.path))
        if project.recommendation_strategy == OVERRIDE_TRANSITIVES_STRATEGY:
            violations.append(format_error('PRECONDITION_OVERRIDE_TRANSITIVES', project=project.path,
                                           recommended=CONFLICT_RESOLVED_STRATEGY))

    return violations


def check_preconditions(snapshot: ResolutionSnapshot, logger=None) -> None:
    """Validate the project settings carried by ``snapshot``.

    Raises:
        ConfigurationError: Listing every violated precondition.
    """
    violations = find_precondition_violations(snapshot)
    if not violations:
        if logger:
            logger.debug(f"Preconditions satisfied for {len(snapshot.projects)} projects")
        return

    if logger:
        for violation in violations:
            logger.error(f"  - {violation}")
    raise ConfigurationError(
        f"{len(violations)} project setting(s) are incompatible with version locking:\n"
        + "\n".join(f"  - {v}" for v in violations),
        parameter="projects",
        code=ErrorCode.CONFIG_PRECONDITION_FAILED,
    )
