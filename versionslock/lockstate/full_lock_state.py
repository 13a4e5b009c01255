"""
FullLockState: every locked module version with its complete dependents.
"""

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from versionslock.error_messages import format_error
from versionslock.errors import ConfigurationError, ErrorCode
from versionslock.lockstate.constraints import requested_version_constraint
from versionslock.lockstate.dependents import Dependents
from versionslock.lockstate.graph import ComponentKind, ResolvedComponent
from versionslock.lockstate.identifiers import ModuleIdentifier, ModuleVersionIdentifier


class FullLockState(Mapping):
    """Immutable mapping of ModuleVersionIdentifier -> Dependents, one version per module."""

    __slots__ = ("_lines", "_by_module")

    def __init__(self, lines: Dict[ModuleVersionIdentifier, Dependents]):
        self._lines = dict(sorted(lines.items()))
        self._by_module = {mvi.module: mvi for mvi in self._lines}

    @staticmethod
    def builder() -> "FullLockStateBuilder":
        return FullLockStateBuilder()

    def __getitem__(self, key: ModuleVersionIdentifier) -> Dependents:
        return self._lines[key]

    def __iter__(self) -> Iterator[ModuleVersionIdentifier]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"FullLockState({len(self)} lines)"

    def lines(self) -> List[Tuple[ModuleVersionIdentifier, Dependents]]:
        return list(self._lines.items())

    def find(self, module: ModuleIdentifier) -> Optional[ModuleVersionIdentifier]:
        """Return the locked version identifier of ``module``, if any."""
        return self._by_module.get(module)


class FullLockStateBuilder:
    def __init__(self):
        self._lines: Dict[ModuleVersionIdentifier, Dependents] = {}
        self._by_module: Dict[ModuleIdentifier, ModuleVersionIdentifier] = {}

    def put_line(self, identifier: ModuleVersionIdentifier, dependents: Dependents) -> "FullLockStateBuilder":
        existing = self._by_module.get(identifier.module)
        if existing is not None and existing != identifier:
            raise ConfigurationError(
                format_error('DUPLICATE_MODULE_VERSION',
                             module=identifier.module, first=existing.version, second=identifier.version),
                parameter=str(identifier.module),
                expected=existing.version,
                actual=identifier.version,
                code=ErrorCode.CONFIG_DUPLICATE_MODULE,
            )
        self._by_module[identifier.module] = identifier
        self._lines[identifier] = dependents
        return self

    def build(self) -> FullLockState:
        return FullLockState(self._lines)


def extract_dependents(component: ResolvedComponent, logger=None) -> Optional[Dependents]:
    """Return the dependents to lock for ``component``, or None if it is not lockable.

    Raises:
        UnsupportedSelectorError: If an edge requested something other than a module.
    """
    if component.kind is not ComponentKind.MODULE:
        return None

    # Platforms only recommend versions. Locking one would let it pin itself
    # as a transitive dependency.
    if any(edge.platform for edge in component.dependents):
        if logger:
            logger.debug(f"Not locking component because it's a platform: {component.identifier}")
        return None

    return Dependents.from_edges(
        (edge.requester, requested_version_constraint(edge.requested))
        for edge in component.dependents
        if not edge.lock_constraint
    )


def compute_full_lock_state(components: Iterable[ResolvedComponent], logger=None) -> FullLockState:
    """Build the FullLockState from resolved components.

    Assumes unresolved dependencies were already rejected, see
    ``versionslock.resolution.fail_if_any_dependencies_unresolved``.

    Args:
        components: Resolved components of one snapshot, consumed once.
        logger: Optional logger for skipped components.

    Returns:
        FullLockState with one entry per lockable module.
    """
    builder = FullLockState.builder()
    for component in components:
        dependents = extract_dependents(component, logger=logger)
        if dependents is not None:
            builder.put_line(component.identifier, dependents)
    return builder.build()
