"""
Input boundary: resolved dependency graph snapshots.

The external resolver exports its result as a YAML (or JSON) document:

    projects:
      - {path: ":", group: com.example, name: root-project}
    components:
      - id: com.google.guava:guava:18.0
        dependents:
          - from: com.fasterxml.jackson.datatype:jackson-datatype-guava
            requested: "18.0"
          - from: com.github.rholder:guava-retrying
            requested: "[10.+,)"
      - id: com.example:bom:1.0
        dependents:
          - from: com.example:app
            requested: "1.0"
            attributes: {org.gradle.component.category: platform}
    unresolved:
      - attempted: com.squareup.retrofit2:retrofit:2.4.0
        requested: com.squareup.retrofit2:retrofit:2.4.0
        reason: requested
        failures: ["Could not find retrofit:2.4.0"]

Edge attributes are folded into the explicit ``platform`` and
``lock_constraint`` flags of ``DependentEdge`` here, once, so nothing past
this module inspects raw attributes.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from versionslock.config import PLATFORM_CATEGORY_MARKER, UNIFIED_CLASSPATH_NAME
from versionslock.error_messages import format_error
from versionslock.errors import ConfigurationError, ErrorCode, UnresolvedDependenciesError
from versionslock.lockstate import (
    ComponentKind,
    DependentEdge,
    FullLockState,
    ModuleIdentifier,
    ModuleVersionIdentifier,
    ProjectInfo,
    RequestedSelector,
    ResolutionSnapshot,
    ResolvedComponent,
    SelectorKind,
    UnresolvedDependency,
    compute_full_lock_state,
)

# Attribute names as the resolver reports them
COMPONENT_CATEGORY_ATTRIBUTE = "org.gradle.component.category"
LOCK_CONSTRAINT_ATTRIBUTE = "consistent-versions"


def load_snapshot(path: Union[str, Path], logger=None) -> ResolutionSnapshot:
    """Read a resolution snapshot file.

    Raises:
        ConfigurationError: If the file is missing, unparsable or does not follow the schema.
    """
    snapshot_path = Path(path)
    try:
        with open(snapshot_path, 'r', encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Resolution snapshot not found: {snapshot_path}",
            parameter="snapshot",
            actual=str(snapshot_path),
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse resolution snapshot {snapshot_path}: {e}",
            parameter="snapshot",
            code=ErrorCode.CONFIG_PARSE_ERROR,
        ) from e

    snapshot = parse_snapshot(payload)
    if logger:
        logger.verbose(
            f"Loaded snapshot {snapshot_path}: {len(snapshot.components)} components, "
            f"{len(snapshot.unresolved)} unresolved"
        )
    return snapshot


def parse_snapshot(payload: Any) -> ResolutionSnapshot:
    """Build a ResolutionSnapshot from already-decoded YAML/JSON data."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise _schema_error("snapshot", "mapping", payload)

    components = [_parse_component(item, index)
                  for index, item in enumerate(_list_field(payload, "components", "snapshot"))]
    unresolved = [_parse_unresolved(item, index)
                  for index, item in enumerate(_list_field(payload, "unresolved", "snapshot"))]
    projects = [_parse_project(item, index)
                for index, item in enumerate(_list_field(payload, "projects", "snapshot"))]
    return ResolutionSnapshot(components=components, unresolved=unresolved, projects=projects)


def format_unresolved_dependency(unresolved: UnresolvedDependency) -> str:
    """Format one unresolved edge with its whole failure chain."""
    failures = "".join(f"         - {failure}\n" for failure in unresolved.failures)
    return (f" * {unresolved.attempted} (requested: '{unresolved.requested}' "
            f"because: {unresolved.reason})\n      Failures:\n{failures}")


def fail_if_any_dependencies_unresolved(snapshot: ResolutionSnapshot) -> None:
    """Refuse to compute a lock state while anything is unresolved.

    Raises:
        UnresolvedDependenciesError: Listing every unresolved dependency and its causes.
    """
    if not snapshot.unresolved:
        return
    raise UnresolvedDependenciesError(
        format_error('UNRESOLVED_DEPENDENCIES',
                     configuration=UNIFIED_CLASSPATH_NAME,
                     unresolved="\n".join(format_unresolved_dependency(u) for u in snapshot.unresolved)),
        unresolved=snapshot.unresolved,
    )


def compute_lock_state(snapshot: ResolutionSnapshot, logger=None) -> FullLockState:
    """Compute the FullLockState of a fully resolved snapshot."""
    fail_if_any_dependencies_unresolved(snapshot)
    full_lock_state = compute_full_lock_state(snapshot.components, logger=logger)
    if logger:
        logger.verbose(f"Computed lock state for {len(full_lock_state)} modules")
    return full_lock_state


def _parse_component(item: Any, index: int) -> ResolvedComponent:
    where = f"components[{index}]"
    if not isinstance(item, dict):
        raise _schema_error(where, "mapping", item)

    kind_value = item.get("kind", ComponentKind.MODULE.value)
    try:
        kind = ComponentKind(kind_value)
    except ValueError:
        raise _schema_error(f"{where}.kind", [k.value for k in ComponentKind], kind_value)

    identifier = _parse_module_version(item.get("id"), f"{where}.id")
    dependents = tuple(
        _parse_edge(edge, f"{where}.dependents[{edge_index}]")
        for edge_index, edge in enumerate(_list_field(item, "dependents", where))
    )
    return ResolvedComponent(identifier=identifier, kind=kind, dependents=dependents)


def _parse_edge(item: Any, where: str) -> DependentEdge:
    if not isinstance(item, dict):
        raise _schema_error(where, "mapping", item)

    attributes = item.get("attributes") or {}
    if not isinstance(attributes, dict):
        raise _schema_error(f"{where}.attributes", "mapping", attributes)

    category = str(item.get("category") or attributes.get(COMPONENT_CATEGORY_ATTRIBUTE) or "")
    platform = _flag_field(item, "platform", where) or PLATFORM_CATEGORY_MARKER in category
    lock_constraint = _flag_field(item, "lock_constraint", where)
    lock_constraint = _flag_field(attributes, LOCK_CONSTRAINT_ATTRIBUTE, f"{where}.attributes") or lock_constraint

    return DependentEdge(
        requester=_parse_requester(item.get("from"), f"{where}.from"),
        requested=_parse_selector(item.get("requested"), f"{where}.requested"),
        platform=platform,
        lock_constraint=lock_constraint,
    )


def _parse_requester(value: Any, where: str) -> ModuleIdentifier:
    if isinstance(value, dict):
        return ModuleIdentifier(str(value.get("group", "")), str(value.get("name", "")))
    if not isinstance(value, str):
        raise _schema_error(where, "group:name", value)
    parts = value.split(":")
    # Requesters may be reported with their own version, which is not part of the identity
    if len(parts) == 3 and all(parts):
        return ModuleVersionIdentifier(*parts).module
    return ModuleIdentifier.parse(value)


def _parse_selector(value: Any, where: str) -> RequestedSelector:
    if isinstance(value, (str, int, float)):
        return RequestedSelector.module(str(value))
    if isinstance(value, dict):
        kind_value = value.get("type", SelectorKind.MODULE.value)
        try:
            kind = SelectorKind(kind_value)
        except ValueError:
            kind = SelectorKind.UNKNOWN
        version = value.get("version")
        return RequestedSelector(
            kind=kind,
            version=None if version is None else str(version),
            display=str(value.get("display") or value.get("version") or kind_value),
        )
    raise _schema_error(where, "version string or selector mapping", value)


def _parse_module_version(value: Any, where: str) -> ModuleVersionIdentifier:
    if isinstance(value, dict):
        try:
            return ModuleVersionIdentifier(str(value["group"]), str(value["name"]), str(value["version"]))
        except KeyError as e:
            raise _schema_error(where, "group, name and version", value) from e
    if not isinstance(value, str):
        raise _schema_error(where, "group:name:version", value)
    return ModuleVersionIdentifier.parse(value)


def _parse_unresolved(item: Any, index: int) -> UnresolvedDependency:
    where = f"unresolved[{index}]"
    if not isinstance(item, dict) or "attempted" not in item:
        raise _schema_error(where, "mapping with 'attempted'", item)
    failures = item.get("failures") or []
    if isinstance(failures, str):
        failures = [failures]
    return UnresolvedDependency(
        attempted=str(item["attempted"]),
        requested=str(item.get("requested", item["attempted"])),
        reason=str(item.get("reason", "requested")),
        failures=tuple(str(f) for f in failures),
    )


def _parse_project(item: Any, index: int) -> ProjectInfo:
    where = f"projects[{index}]"
    if not isinstance(item, dict) or "path" not in item:
        raise _schema_error(where, "mapping with 'path'", item)
    return ProjectInfo(
        path=str(item["path"]),
        group=str(item.get("group", "")),
        name=str(item.get("name", "")),
        conflict_resolution=str(item.get("conflict_resolution", "latest")),
        recommendation_strategy=item.get("recommendation_strategy"),
    )


def _list_field(payload: Dict, key: str, where: str) -> List:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _schema_error(f"{where}.{key}", "list", value)
    return value


def _flag_field(payload: Dict, key: str, where: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise _schema_error(f"{where}.{key}", "true or false", value)
    return value


def _schema_error(parameter: str, expected: Any, actual: Any) -> ConfigurationError:
    return ConfigurationError(
        f"Invalid resolution snapshot: {parameter}",
        parameter=parameter,
        expected=expected,
        actual=repr(actual),
        code=ErrorCode.CONFIG_PARSE_ERROR,
    )
