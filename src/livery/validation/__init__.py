"""
Theme validation: per-kind validators, the schema walk and CSS escaping.
"""

from .css_escape import escape_css_value, needs_css_escaping
from .engine import (
    ValidationIssue,
    ValidationMode,
    ValidationResult,
    coerce,
    validate,
    validate_partial,
    validate_with_mode,
)
from .validators import ValueResult, coerce_value, validate_value

__all__ = [
    "ValidationIssue",
    "ValidationMode",
    "ValidationResult",
    "validate",
    "validate_partial",
    "coerce",
    "validate_with_mode",
    "ValueResult",
    "validate_value",
    "coerce_value",
    "escape_css_value",
    "needs_css_escaping",
]
