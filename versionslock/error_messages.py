"""
Centralized error message templates for versionslock.

This module provides:
- Consistent error message templates
- User-friendly formatting
- Actionable suggestions

Usage:
    from versionslock.error_messages import format_error, ERROR_MESSAGES

    msg = format_error('LOCKFILE_NOT_FOUND', path='versions.lock', command='versionslock write')
"""

from typing import Dict, Any, Optional


ERROR_MESSAGES: Dict[str, str] = {
    # Resolution
    'UNRESOLVED_DEPENDENCIES': (
        "Could not write lock for {configuration} due to unresolved dependencies:\n"
        "{unresolved}"
    ),

    'UNSUPPORTED_SELECTOR': (
        "Expecting a module selector but found a {selector_type}: {selector}"
    ),

    'DUPLICATE_MODULE_VERSION': (
        "Module {module} resolved to more than one version: {first} and {second}"
    ),

    # Lock file
    'LOCKFILE_NOT_FOUND': (
        "Root lock file '{path}' doesn't exist, please run "
        "`{command}` to initialise locks"
    ),

    'LOCKFILE_MALFORMED_LINE': (
        "Invalid line {line_number} in lock file {path}: {line!r}\n"
        "Expected: <group>:<name>:<version> (<N> constraints: <hash>)"
    ),

    'LOCKFILE_DUPLICATE_MODULE': (
        "Module {module} is locked more than once in {path} (line {line_number})"
    ),

    # Staleness
    'LOCK_STATE_MISSING': (
        "Locked dependencies missing from the resolution result: {modules}"
    ),

    'LOCK_STATE_UNKNOWN': (
        "Found dependencies that were not in the lock state: {modules}"
    ),

    'LOCK_STATE_DIFFERING': (
        "Found dependencies whose dependents changed: {modules}"
    ),

    'LOCK_STATE_STALE': (
        "The lock state in {path} is out of date.\n"
        "{report}\n"
        "Please run '{command}'."
    ),

    # Preconditions
    'PRECONDITION_SAME_GROUP_AND_NAME': (
        "The root project shares both group and name with subproject {project}. "
        "Consider renaming the root project, e.g. rootProject.name = '{name}-root'"
    ),

    'PRECONDITION_STRICT_CONFLICTS': (
        "Must not use failOnVersionConflict() for {project}"
    ),

    'PRECONDITION_OVERRIDE_TRANSITIVES': (
        "Must not use strategy OverrideTransitives for {project}. "
        "Use this instead: dependencyRecommendations {{ strategy {recommended} }}"
    ),

    # Lookup
    'WHY_NOT_FOUND': (
        "No dependencies found with hash {fingerprint} in {path}"
    ),

    # General
    'INTERNAL_ERROR': (
        "An internal error occurred: {error}\n"
        "This is likely a bug in versionslock.\n"
        "Include the full error message and stack trace when reporting it."
    ),
}


def format_error(error_key: str, **kwargs) -> str:
    """
    Format an error message with the given parameters.

    Args:
        error_key: Key for the error message template.
        **kwargs: Parameters to substitute in the template.

    Returns:
        Formatted error message string.

    Example:
        >>> format_error('LOCK_STATE_UNKNOWN', modules='[com.google.guava:guava]')
        'Found dependencies that were not in the lock state: [com.google.guava:guava]'
    """
    template = ERROR_MESSAGES.get(error_key)
    if template is None:
        return f"Unknown error: {error_key}\nContext: {kwargs}"

    try:
        return template.format(**kwargs)
    except KeyError as e:
        return f"{template}\n(Missing format parameter: {e})"


def get_error_template(error_key: str) -> Optional[str]:
    """Get the raw error template for a given key, or None."""
    return ERROR_MESSAGES.get(error_key)


class ErrorFormatter:
    """
    Helper class for formatting errors with consistent styling.

    Provides methods for formatting exceptions with optional color support.
    """

    # ANSI color codes
    COLORS = {
        'reset': '\033[0m',
        'bold': '\033[1m',
        'red': '\033[91m',
        'yellow': '\033[93m',
        'cyan': '\033[96m',
    }

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if enabled."""
        if self.use_colors and color in self.COLORS:
            return f"{self.COLORS[color]}{text}{self.COLORS['reset']}"
        return text

    def format_error_header(self, code: str, title: str) -> str:
        """Format an error header with code and title."""
        return self._color(f"[{code}] {title}", 'red')

    def format_suggestion(self, suggestion: str) -> str:
        """Format a suggestion with styling."""
        prefix = self._color("Suggestion:", 'cyan')
        return f"{prefix} {suggestion}"

    def format_details(self, details: Dict[str, Any]) -> str:
        """Format details as an indented list."""
        lines = []
        for key, value in details.items():
            key_styled = self._color(f"{key}:", 'bold')
            lines.append(f"  {key_styled} {value}")
        return "\n".join(lines)

    def format_full_error(self, code: str, title: str,
                          details: Dict[str, Any] = None,
                          suggestion: str = None) -> str:
        """
        Format a complete error message.

        Args:
            code: Error code.
            title: Error title/message.
            details: Optional dictionary of details.
            suggestion: Optional suggestion text.

        Returns:
            Fully formatted error string.
        """
        parts = [self.format_error_header(code, title)]

        if details:
            parts.append(self.format_details(details))

        if suggestion:
            parts.append("")
            parts.append(self.format_suggestion(suggestion))

        return "\n".join(parts)

    def format_exception(self, exc) -> str:
        """Format a VersionsLockException using its structured error."""
        error = exc.error
        details = {"Details": error.details} if error.details else None
        return self.format_full_error(error.code.value, error.message, details, error.suggestion)
