"""
Custom exceptions for versionslock.

This module provides custom exception classes with user-friendly messaging
that include:
- Clear error descriptions
- Technical details for debugging
- Actionable suggestions for resolution

Every exception enumerates all of the affected items it knows about, so a
single failed run reports everything that needs fixing at once.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Any, Dict, Tuple
from enum import Enum

from versionslock.config import WRITE_LOCKS_COMMAND


class ErrorCode(Enum):
    """Machine-readable error codes for versionslock errors."""
    # Configuration errors (1xx)
    CONFIG_INVALID_VALUE = "E101"
    CONFIG_FILE_NOT_FOUND = "E102"
    CONFIG_PARSE_ERROR = "E103"
    CONFIG_PRECONDITION_FAILED = "E104"
    CONFIG_DUPLICATE_MODULE = "E105"

    # Resolution errors (2xx)
    RESOLUTION_UNRESOLVED = "E201"
    RESOLUTION_UNSUPPORTED_SELECTOR = "E202"

    # Lock file errors (3xx)
    LOCKFILE_MALFORMED_LINE = "E301"
    LOCKFILE_DUPLICATE_MODULE = "E302"

    # Staleness errors (4xx)
    LOCK_STATE_STALE = "E401"

    # File system errors (5xx)
    FS_PATH_NOT_FOUND = "E501"
    FS_WRITE_FAILED = "E502"

    # Internal errors (9xx)
    INTERNAL_ERROR = "E901"


@dataclass
class LockError:
    """
    Structured error information for versionslock.

    Attributes:
        code: Machine-readable error code.
        message: User-facing error message.
        details: Technical details for debugging.
        suggestion: How to fix the issue.
        context: Additional context information.
    """
    code: ErrorCode
    message: str
    details: str = ""
    suggestion: str = ""
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        lines = [f"[{self.code.value}] {self.message}"]
        if self.details:
            lines.append(f"  Details: {self.details}")
        if self.suggestion:
            lines.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(lines)


class VersionsLockException(Exception):
    """
    Base exception class for versionslock.

    All custom exceptions inherit from this class and provide
    structured error information.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR,
                 details: str = "", suggestion: str = "", **context):
        self.error = LockError(
            code=code,
            message=message,
            details=details,
            suggestion=suggestion,
            context=context
        )
        super().__init__(str(self.error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def suggestion(self) -> str:
        return self.error.suggestion


class ConfigurationError(VersionsLockException):
    """
    Raised when input or configuration is invalid.

    Examples:
        - Malformed module coordinate
        - Resolution snapshot that does not follow the schema
        - Project settings that break the resolver preconditions
    """

    def __init__(self, message: str, parameter: str = None,
                 expected: Any = None, actual: Any = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE):
        details_parts = []
        if parameter:
            details_parts.append(f"Parameter: {parameter}")
        if expected is not None:
            details_parts.append(f"Expected: {expected}")
        if actual is not None:
            details_parts.append(f"Actual: {actual}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            parameter=parameter,
            expected=expected,
            actual=actual
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.CONFIG_INVALID_VALUE: "Check the value and correct it",
            ErrorCode.CONFIG_FILE_NOT_FOUND: "Verify the file path exists",
            ErrorCode.CONFIG_PARSE_ERROR: "Check file syntax (YAML or JSON expected)",
            ErrorCode.CONFIG_PRECONDITION_FAILED: "Fix the project settings listed above",
            ErrorCode.CONFIG_DUPLICATE_MODULE: "A module can only be locked at a single version",
        }
        return suggestions.get(code, "Check the configuration and try again")


class UnresolvedDependenciesError(VersionsLockException):
    """
    Raised when the resolved graph still contains unresolved dependencies.

    No lock state is computed, and nothing is written, while any dependency
    is unresolved.
    """

    def __init__(self, message: str, unresolved: List = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.RESOLUTION_UNRESOLVED):
        unresolved = list(unresolved or [])
        details_parts = [f"{len(unresolved)} unresolved dependency(ies)"]
        details_parts.extend(f"  - {item.attempted}" for item in unresolved)

        super().__init__(
            message=message,
            code=code,
            details="\n".join(details_parts),
            suggestion=suggestion or "Fix the failures above so every dependency resolves",
            unresolved=unresolved
        )

    @property
    def unresolved(self) -> List:
        return self.error.context["unresolved"]


class UnsupportedSelectorError(VersionsLockException):
    """
    Raised when a requested version cannot be turned into a version constraint.

    This is a contract violation by whoever produced the resolution snapshot,
    not a transient failure.
    """

    def __init__(self, message: str, selector_type: str = None,
                 selector: Any = None,
                 code: ErrorCode = ErrorCode.RESOLUTION_UNSUPPORTED_SELECTOR):
        details_parts = []
        if selector_type:
            details_parts.append(f"Selector type: {selector_type}")
        if selector is not None:
            details_parts.append(f"Selector: {selector}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts),
            suggestion="Only module selectors carry a requested version; check the snapshot producer",
            selector_type=selector_type,
            selector=selector
        )


class LockFileFormatError(VersionsLockException):
    """
    Raised when the lock file cannot be parsed.

    Carries every offending line of the file, not just the first one.

    Examples:
        - A line that does not match ``group:name:version (N constraints: hash)``
        - The same module locked twice
    """

    def __init__(self, message: str, path: str = None,
                 problems: List[Tuple[int, str]] = None,
                 code: ErrorCode = ErrorCode.LOCKFILE_MALFORMED_LINE):
        problems = list(problems or [])
        details_parts = []
        if path:
            details_parts.append(f"File: {path}")
        details_parts.extend(f"Line {line_number}: {line!r}" for line_number, line in problems)

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts),
            suggestion=f"Do not edit the lock file by hand; run '{WRITE_LOCKS_COMMAND}'",
            path=path,
            problems=problems
        )

    @property
    def problems(self) -> List[Tuple[int, str]]:
        return self.error.context["problems"]

    @property
    def line_number(self) -> Optional[int]:
        """Line number of the first offending line."""
        return self.problems[0][0] if self.problems else None


class StaleLockStateError(VersionsLockException):
    """
    Raised when the persisted lock state no longer matches the resolved graph.

    Carries every missing, unknown and differing module at once. The fix is
    always to regenerate the lock file; nothing is repaired automatically.
    """

    def __init__(self, message: str, missing: List = None, unknown: List = None,
                 differing: Dict = None,
                 code: ErrorCode = ErrorCode.LOCK_STATE_STALE):
        missing = list(missing or [])
        unknown = list(unknown or [])
        differing = dict(differing or {})

        details_parts = []
        if missing:
            details_parts.append(f"Missing: {', '.join(str(m) for m in missing)}")
        if unknown:
            details_parts.append(f"Unknown: {', '.join(str(m) for m in unknown)}")
        if differing:
            details_parts.append(f"Differing: {', '.join(str(m) for m in differing)}")

        super().__init__(
            message=message,
            code=code,
            details="\n".join(details_parts),
            suggestion=f"Please run '{WRITE_LOCKS_COMMAND}'.",
            missing=missing,
            unknown=unknown,
            differing=differing
        )

    @property
    def missing(self) -> List:
        return self.error.context["missing"]

    @property
    def unknown(self) -> List:
        return self.error.context["unknown"]

    @property
    def differing(self) -> Dict:
        return self.error.context["differing"]


class FileSystemError(VersionsLockException):
    """
    Raised when file system operations fail.

    Examples:
        - Lock file or snapshot not found
        - Lock file could not be replaced
    """

    def __init__(self, message: str, path: str = None,
                 operation: str = None, suggestion: str = None,
                 code: ErrorCode = ErrorCode.FS_PATH_NOT_FOUND):
        details_parts = []
        if path:
            details_parts.append(f"Path: {path}")
        if operation:
            details_parts.append(f"Operation: {operation}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            path=path,
            operation=operation
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.FS_PATH_NOT_FOUND: "Verify the path exists and is accessible",
            ErrorCode.FS_WRITE_FAILED: "Check directory permissions and free disk space",
        }
        return suggestions.get(code, "Check file system and try again")
