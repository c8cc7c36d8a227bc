"""
CSS custom property generation for validated themes.
"""

from .generator import (
    CssVariableOptions,
    create_css_var_helper,
    css_var,
    to_css_string,
    to_css_string_all,
    to_css_variables,
    variable_name,
)

__all__ = [
    "CssVariableOptions",
    "to_css_variables",
    "to_css_string",
    "to_css_string_all",
    "css_var",
    "create_css_var_helper",
    "variable_name",
]
