"""
Records describing a resolved dependency graph snapshot.

The external resolver walks its graph once per cycle and hands the result
over as plain records. Flags that the resolver only exposes as attributes on
its edges (platform category, lock-constraint tag) are resolved into explicit
booleans when the records are created, see ``versionslock.resolution``.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from versionslock.lockstate.constraints import RequestedSelector
from versionslock.lockstate.identifiers import ModuleIdentifier, ModuleVersionIdentifier


class ComponentKind(enum.Enum):
    MODULE = "module"
    PROJECT = "project"


@dataclass(frozen=True)
class DependentEdge:
    """
    One incoming edge of a resolved component.

    Attributes:
        requester: Module that declared the dependency.
        requested: What the requester asked for.
        platform: True if the request came through a platform/BOM relationship.
        lock_constraint: True if the request is a constraint generated from the lock file.
    """
    requester: ModuleIdentifier
    requested: RequestedSelector
    platform: bool = False
    lock_constraint: bool = False


@dataclass(frozen=True)
class ResolvedComponent:
    identifier: ModuleVersionIdentifier
    kind: ComponentKind = ComponentKind.MODULE
    dependents: tuple = ()


@dataclass(frozen=True)
class UnresolvedDependency:
    """
    A dependency edge the resolver failed to resolve.

    Attributes:
        attempted: Coordinate the resolver tried.
        requested: Coordinate as it was requested.
        reason: Why the attempted coordinate was selected.
        failures: Failure messages, outermost cause first.
    """
    attempted: str
    requested: str
    reason: str = "requested"
    failures: tuple = ()


@dataclass(frozen=True)
class ProjectInfo:
    """Build settings of one project, used only for precondition checks."""
    path: str
    group: str
    name: str
    conflict_resolution: str = "latest"
    recommendation_strategy: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.path == ":"


@dataclass
class ResolutionSnapshot:
    components: List[ResolvedComponent] = field(default_factory=list)
    unresolved: List[UnresolvedDependency] = field(default_factory=list)
    projects: List[ProjectInfo] = field(default_factory=list)
