"""
Schema creation and traversal.

A schema is a tree whose leaves are tokens and whose inner nodes are named
groups. ``create_schema`` checks the tree once (rejecting non-token leaves
and cycles) and then freezes a private copy of it.

Example:
    schema = create_schema(
        {
            "colors": {
                "primary": t.color().default("#3b82f6"),
                "secondary": t.color(),
            },
            "spacing": {
                "sm": t.dimension().default("4px"),
                "md": t.dimension().default("8px"),
            },
        }
    )
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from .errors import SchemaError
from .tokens import Token, is_token_kind

SchemaDefinition = Mapping[str, Any]


# =============================================================================
# Node discrimination
# =============================================================================


def is_token_definition(value: Any) -> bool:
    """
    Check whether a node is a token.

    Accepts ``Token`` instances and the mapping form ``{"type": <kind>}``
    where the ``type`` tag is one of the token kinds.
    """
    if isinstance(value, Token):
        return True
    if isinstance(value, Mapping):
        return is_token_kind(value.get("type"))
    return False


def is_schema_definition(value: Any) -> bool:
    """Check whether a node is a nested group (a mapping that is not a token)."""
    return isinstance(value, Mapping) and not is_token_definition(value)


def _as_token(value: Any) -> Token:
    if isinstance(value, Token):
        return value
    return Token.from_mapping(value)


# =============================================================================
# Schema
# =============================================================================


class Schema:
    """
    Frozen schema tree.

    The definition is exposed as read-only mappings whose leaves are
    ``Token`` instances. Shared read-only by resolvers, validators and the
    CSS generator.
    """

    __slots__ = ("_definition",)

    def __init__(self, definition: SchemaDefinition):
        object.__setattr__(self, "_definition", definition)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Schema is immutable")

    @property
    def definition(self) -> SchemaDefinition:
        return self._definition

    def token_paths(self) -> list[str]:
        return get_token_paths(self)

    def token_at(self, path: str) -> Token | None:
        return get_token_at_path(self, path)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and get_token_at_path(self, path) is not None

    def __iter__(self) -> Iterator[tuple[str, Token]]:
        """Iterate ``(path, token)`` pairs depth-first."""
        yield from _walk_tokens(self._definition, "")

    def __repr__(self) -> str:
        return f"Schema(tokens={len(get_token_paths(self))})"


def _check_token_mapping(value: Mapping[str, Any], path: str) -> None:
    try:
        Token.from_mapping(value)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise SchemaError(f'Invalid token at "{path}": {details}', path) from e


def _check_definition(definition: Any, path: str, ancestors: set[int]) -> None:
    """
    Recursively check a definition tree.

    ``ancestors`` holds the ids of the groups on the current path only, so a
    group shared by two siblings is fine while a group containing itself is
    rejected.
    """
    where = path or "root"
    if not isinstance(definition, Mapping):
        raise SchemaError(
            f'Invalid schema definition at "{where}": expected mapping, '
            f"got {type(definition).__name__}",
            path,
        )

    if id(definition) in ancestors:
        raise SchemaError(f'Circular reference detected at "{where}"', path)

    ancestors.add(id(definition))
    for key, value in definition.items():
        if not isinstance(key, str):
            raise SchemaError(
                f'Invalid schema key at "{where}": expected str, got {type(key).__name__}',
                path,
            )
        current_path = f"{path}.{key}" if path else key

        if is_token_definition(value):
            if isinstance(value, Mapping):
                _check_token_mapping(value, current_path)
            continue

        if not isinstance(value, Mapping):
            raise SchemaError(
                f'Invalid schema definition at "{current_path}": expected token or group, '
                f"got {type(value).__name__}",
                current_path,
            )

        if "type" in value and isinstance(value["type"], str):
            # Looks like a token but the tag is not a known kind
            raise SchemaError(
                f'Invalid schema definition at "{current_path}": '
                f'unknown token type "{value["type"]}"',
                current_path,
            )

        _check_definition(value, current_path, ancestors)
    ancestors.discard(id(definition))


def _freeze(definition: SchemaDefinition) -> SchemaDefinition:
    frozen: dict[str, Any] = {}
    for key, value in definition.items():
        if is_token_definition(value):
            frozen[key] = _as_token(value)
        else:
            frozen[key] = _freeze(value)
    return MappingProxyType(frozen)


def create_schema(definition: SchemaDefinition) -> Schema:
    """
    Create a validated, immutable schema from a definition tree.

    Args:
        definition: Mapping of names to tokens or nested groups

    Returns:
        Frozen Schema

    Raises:
        SchemaError: If a node is neither a token nor a group, or the tree
            contains a cycle
    """
    if isinstance(definition, Schema):
        return definition
    _check_definition(definition, "", set())
    return Schema(_freeze(definition))


def is_schema(value: Any) -> bool:
    """Check whether a value was produced by ``create_schema``."""
    return isinstance(value, Schema)


def get_schema_definition(schema: Schema | SchemaDefinition) -> SchemaDefinition:
    """Return the definition tree of a schema (raw definitions pass through)."""
    if isinstance(schema, Schema):
        return schema.definition
    return schema


# =============================================================================
# Traversal
# =============================================================================


def _walk_tokens(definition: SchemaDefinition, prefix: str) -> Iterator[tuple[str, Token]]:
    for key, value in definition.items():
        current_path = f"{prefix}.{key}" if prefix else key
        if is_token_definition(value):
            yield current_path, _as_token(value)
        elif is_schema_definition(value):
            yield from _walk_tokens(value, current_path)


def get_token_paths(schema: Schema | SchemaDefinition, prefix: str = "") -> list[str]:
    """
    Get the dot-notation path of every token, depth-first.

    Example:
        get_token_paths(schema)
        # ['colors.primary', 'colors.secondary', 'spacing.sm']
    """
    return [path for path, _ in _walk_tokens(get_schema_definition(schema), prefix)]


def get_token_at_path(schema: Schema | SchemaDefinition, path: str) -> Token | None:
    """
    Get the token at a dot-notation path.

    Returns ``None`` when the path does not exist or names a group.
    """
    current: Any = get_schema_definition(schema)
    for part in path.split("."):
        if not is_schema_definition(current):
            return None
        current = current.get(part)

    if is_token_definition(current):
        return _as_token(current)
    return None


def build_defaults(schema: Schema | SchemaDefinition) -> dict[str, Any]:
    """
    Collect every declared default into a theme-shaped dict.

    Groups with no defaults underneath are omitted.
    """
    defaults: dict[str, Any] = {}
    for key, value in get_schema_definition(schema).items():
        if is_token_definition(value):
            token = _as_token(value)
            if token.has_default:
                defaults[key] = token.default_value
        elif is_schema_definition(value):
            nested = build_defaults(value)
            if nested:
                defaults[key] = nested
    return defaults
