"""
livery core: token model, schema, errors and file loading.
"""

from .errors import LiveryError, SchemaError, ThemeFileError, ThemeResolutionError
from .loader import load_schema, load_theme, save_schema, schema_to_mapping
from .schema import (
    Schema,
    build_defaults,
    create_schema,
    get_schema_definition,
    get_token_at_path,
    get_token_paths,
    is_schema,
    is_schema_definition,
    is_token_definition,
)
from .tokens import TOKEN_KINDS, Token, TokenKind, is_token_kind, t

__all__ = [
    # Tokens
    "Token",
    "TokenKind",
    "TOKEN_KINDS",
    "is_token_kind",
    "t",
    # Schema
    "Schema",
    "create_schema",
    "get_schema_definition",
    "get_token_paths",
    "get_token_at_path",
    "build_defaults",
    "is_schema",
    "is_schema_definition",
    "is_token_definition",
    # Files
    "load_schema",
    "load_theme",
    "save_schema",
    "schema_to_mapping",
    # Errors
    "LiveryError",
    "SchemaError",
    "ThemeFileError",
    "ThemeResolutionError",
]
