"""
Error types for livery schema construction, theme resolution and file loading.

Validation problems are not exceptions: they are collected as
``ValidationIssue`` records and returned inside a ``ValidationResult``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from livery.validation.engine import ValidationIssue


class LiveryError(Exception):
    """Base exception for all livery errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SchemaError(LiveryError):
    """
    Raised when a schema definition cannot be turned into a Schema.

    Examples:
    - A leaf that is neither a token nor a nested group
    - A token mapping with an unknown kind
    - A group that contains itself (directly or through descendants)
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class ThemeResolutionError(LiveryError):
    """
    Raised by the resolver when fetched theme data fails validation.

    The per-field issues are kept on ``issues`` and folded into a single
    human-readable message.
    """

    def __init__(self, theme_id: str, issues: Sequence[ValidationIssue]):
        self.theme_id = theme_id
        self.issues = list(issues)
        super().__init__(format_resolution_message(theme_id, self.issues))


class ThemeFileError(LiveryError):
    """Raised when a schema or theme file cannot be read or parsed."""

    pass


def format_resolution_message(theme_id: str, issues: Sequence[ValidationIssue]) -> str:
    """
    Format validation issues for a theme as one line.

    Returns:
        Message like: 'Invalid theme data for theme "acme": colors.primary: expected string'
    """
    details = ", ".join(f"{issue.path}: {issue.message}" for issue in issues)
    return f'Invalid theme data for theme "{theme_id}": {details}'
