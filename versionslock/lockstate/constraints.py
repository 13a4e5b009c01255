"""
Requested version constraints and the selectors that carry them.

A dependent edge in the resolved graph records *what was requested*: usually a
module selector holding a version expression, but the resolver may also hand
us project or library selectors, which have no version to lock against.
"""

import enum
import re
from dataclasses import dataclass
from typing import Optional

from versionslock.error_messages import format_error
from versionslock.errors import UnsupportedSelectorError


class ConstraintKind(enum.Enum):
    EXACT = "exact"
    RANGE = "range"
    DYNAMIC = "dynamic"
    EMPTY = "empty"


# [1.0,2.0) / (,1.0] / ]1.0,2.0[
_RANGE_PATTERN = re.compile(r"^[\[\](].*,.*[\[\])]$")
# 1.+ / + / latest.release / latest.integration
_DYNAMIC_PATTERN = re.compile(r"\+$|^latest\.[A-Za-z]+$")


@dataclass(frozen=True, order=True)
class VersionConstraint:
    """
    A requested version expression, compared by its canonical string form.

    Attributes:
        value: The expression exactly as the resolver reported it, trimmed.
    """
    value: str

    def __post_init__(self):
        object.__setattr__(self, "value", str(self.value).strip())

    @property
    def kind(self) -> ConstraintKind:
        if not self.value:
            return ConstraintKind.EMPTY
        if _RANGE_PATTERN.match(self.value):
            return ConstraintKind.RANGE
        if _DYNAMIC_PATTERN.search(self.value):
            return ConstraintKind.DYNAMIC
        return ConstraintKind.EXACT

    def __str__(self) -> str:
        return self.value


class SelectorKind(enum.Enum):
    MODULE = "module"
    PROJECT = "project"
    LIBRARY = "library"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RequestedSelector:
    """
    The requested side of a dependent edge.

    Attributes:
        kind: Which kind of component was requested.
        version: Requested version expression (module selectors only).
        display: Human-readable form of the selector for error messages.
    """
    kind: SelectorKind
    version: Optional[str] = None
    display: str = ""

    @classmethod
    def module(cls, version: str, display: str = "") -> "RequestedSelector":
        return cls(SelectorKind.MODULE, version, display or version)

    def __str__(self) -> str:
        return self.display or f"{self.kind.value} selector"


def requested_version_constraint(selector: RequestedSelector) -> VersionConstraint:
    """Return the version constraint a selector requested.

    Raises:
        UnsupportedSelectorError: If the selector is not a module selector.
    """
    if selector.kind is SelectorKind.MODULE and selector.version is not None:
        return VersionConstraint(selector.version)
    raise UnsupportedSelectorError(
        format_error('UNSUPPORTED_SELECTOR', selector_type=f"{selector.kind.value} selector", selector=selector),
        selector_type=selector.kind.value,
        selector=str(selector),
    )
