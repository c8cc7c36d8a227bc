"""
livery - schema-driven design tokens for multi-tenant theming.

Declare a typed token schema, validate theme data from untrusted sources,
resolve themes through a TTL/stale-while-revalidate cache and emit them as
CSS custom properties.

Usage:
    from livery import create_schema, t, create_resolver, to_css_string

    schema = create_schema(
        {
            "colors": {
                "primary": t.color().default("#3b82f6"),
                "background": t.color().default("#ffffff"),
            },
            "spacing": {"md": t.dimension().default("16px")},
        }
    )

    resolver = create_resolver(schema, fetcher=load_tenant_theme)
    theme = await resolver.resolve("acme")
    css = to_css_string(schema, theme)
"""

from __future__ import annotations

from ._version import get_version
from .core import (
    LiveryError,
    Schema,
    SchemaError,
    ThemeFileError,
    ThemeResolutionError,
    Token,
    TokenKind,
    build_defaults,
    create_schema,
    get_schema_definition,
    get_token_at_path,
    get_token_paths,
    is_schema,
    is_schema_definition,
    is_token_definition,
    load_schema,
    load_theme,
    t,
)
from .css import (
    CssVariableOptions,
    create_css_var_helper,
    css_var,
    to_css_string,
    to_css_string_all,
    to_css_variables,
)
from .resolver import (
    CacheConfig,
    ThemeNotFoundError,
    ThemeResolver,
    create_resolver,
    file_fetcher,
    mapping_fetcher,
)
from .validation import (
    ValidationIssue,
    ValidationMode,
    ValidationResult,
    coerce,
    coerce_value,
    escape_css_value,
    needs_css_escaping,
    validate,
    validate_partial,
    validate_value,
)

__version__ = get_version()

__all__ = [
    "__version__",
    # Tokens & schema
    "t",
    "Token",
    "TokenKind",
    "Schema",
    "create_schema",
    "get_schema_definition",
    "get_token_paths",
    "get_token_at_path",
    "build_defaults",
    "is_schema",
    "is_schema_definition",
    "is_token_definition",
    # Validation
    "ValidationIssue",
    "ValidationMode",
    "ValidationResult",
    "validate",
    "validate_partial",
    "coerce",
    "validate_value",
    "coerce_value",
    # Resolver
    "CacheConfig",
    "ThemeResolver",
    "create_resolver",
    "file_fetcher",
    "mapping_fetcher",
    # CSS
    "CssVariableOptions",
    "to_css_variables",
    "to_css_string",
    "to_css_string_all",
    "css_var",
    "create_css_var_helper",
    "escape_css_value",
    "needs_css_escaping",
    # Files
    "load_schema",
    "load_theme",
    # Errors
    "LiveryError",
    "SchemaError",
    "ThemeFileError",
    "ThemeResolutionError",
    "ThemeNotFoundError",
]
