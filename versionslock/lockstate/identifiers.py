"""
Module coordinates used as keys throughout the lock state.

Every coordinate is a single token without whitespace or ``:`` so it can be
written to the lock file and read back unchanged.
"""

import re
from dataclasses import dataclass, fields

from versionslock.errors import ConfigurationError

TOKEN_PATTERN = re.compile(r"[^\s:]+")


def _check_tokens(identifier) -> None:
    for field in fields(identifier):
        value = getattr(identifier, field.name)
        if not isinstance(value, str) or not TOKEN_PATTERN.fullmatch(value):
            raise ConfigurationError(
                f"Invalid {field.name} in module coordinates: {value!r}",
                parameter=field.name,
                expected="non-empty text without whitespace or ':'",
                actual=value,
            )


@dataclass(frozen=True, order=True)
class ModuleIdentifier:
    """A dependency independent of its version, ordered by group then name."""
    group: str
    name: str

    def __post_init__(self):
        _check_tokens(self)

    def __str__(self) -> str:
        return f"{self.group}:{self.name}"

    @classmethod
    def parse(cls, notation: str) -> "ModuleIdentifier":
        """Parse ``group:name``."""
        parts = notation.strip().split(":")
        if len(parts) != 2 or not all(parts):
            raise ConfigurationError(
                f"Invalid module identifier: {notation!r}",
                parameter="module",
                expected="group:name",
                actual=notation,
            )
        return cls(parts[0], parts[1])


@dataclass(frozen=True, order=True)
class ModuleVersionIdentifier:
    """A module together with the version that was chosen for it."""
    group: str
    name: str
    version: str

    def __post_init__(self):
        _check_tokens(self)

    @property
    def module(self) -> ModuleIdentifier:
        return ModuleIdentifier(self.group, self.name)

    def __str__(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"

    @classmethod
    def parse(cls, notation: str) -> "ModuleVersionIdentifier":
        """Parse ``group:name:version``."""
        parts = notation.strip().split(":")
        if len(parts) != 3 or not all(parts):
            raise ConfigurationError(
                f"Invalid module version identifier: {notation!r}",
                parameter="module",
                expected="group:name:version",
                actual=notation,
            )
        return cls(parts[0], parts[1], parts[2])
