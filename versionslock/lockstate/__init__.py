"""
Lock-state data model.

Public exports:
    ModuleIdentifier, ModuleVersionIdentifier: Module coordinates
    VersionConstraint, RequestedSelector, SelectorKind: Requested versions
    Dependents: Canonical requester -> constraints mapping with fingerprint
    FullLockState, compute_full_lock_state: Locked versions with full dependents
    Line, LockState, to_lock_state: Compact per-module projection
    ResolvedComponent, DependentEdge, UnresolvedDependency, ResolutionSnapshot:
        Resolved graph records
"""

from versionslock.lockstate.identifiers import ModuleIdentifier, ModuleVersionIdentifier
from versionslock.lockstate.constraints import (
    ConstraintKind,
    VersionConstraint,
    RequestedSelector,
    SelectorKind,
    requested_version_constraint,
)
from versionslock.lockstate.dependents import Dependents
from versionslock.lockstate.graph import (
    ComponentKind,
    DependentEdge,
    ResolvedComponent,
    UnresolvedDependency,
    ProjectInfo,
    ResolutionSnapshot,
)
from versionslock.lockstate.full_lock_state import (
    FullLockState,
    FullLockStateBuilder,
    compute_full_lock_state,
    extract_dependents,
)
from versionslock.lockstate.lock_state import Line, LockState, to_lock_state

__all__ = [
    "ModuleIdentifier",
    "ModuleVersionIdentifier",
    "ConstraintKind",
    "VersionConstraint",
    "RequestedSelector",
    "SelectorKind",
    "requested_version_constraint",
    "Dependents",
    "ComponentKind",
    "DependentEdge",
    "ResolvedComponent",
    "UnresolvedDependency",
    "ProjectInfo",
    "ResolutionSnapshot",
    "FullLockState",
    "FullLockStateBuilder",
    "compute_full_lock_state",
    "extract_dependents",
    "Line",
    "LockState",
    "to_lock_state",
]
