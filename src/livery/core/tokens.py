"""
Token model and builder API.

A token is a single typed design value declaration: a kind, an optional
default and an optional description. Tokens are immutable; the builder
methods return new instances.

Example:
    colors = {
        "primary": t.color().default("#3b82f6"),
        "background": t.color().describe("Page background color"),
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Token kinds
# =============================================================================


class TokenKind(StrEnum):
    """Closed set of value kinds a token can declare."""

    COLOR = "color"
    DIMENSION = "dimension"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    FONT_FAMILY = "fontFamily"
    FONT_WEIGHT = "fontWeight"
    SHADOW = "shadow"
    URL = "url"


TOKEN_KINDS: frozenset[str] = frozenset(kind.value for kind in TokenKind)


def is_token_kind(value: Any) -> bool:
    """Check whether a value names one of the token kinds."""
    return isinstance(value, str) and value in TOKEN_KINDS


# =============================================================================
# Token
# =============================================================================


class Token(BaseModel):
    """
    A leaf declaration in a schema.

    ``default_value`` of ``None`` means the token has no default.
    """

    model_config = ConfigDict(frozen=True)

    kind: TokenKind = Field(description="Value kind")
    default_value: Any = Field(default=None, description="Value used when input omits the token")
    description: str | None = Field(default=None, description="Human-readable description")

    def with_default(self, value: Any) -> Token:
        """Return a copy of this token with a default value."""
        return self.model_copy(update={"default_value": value})

    def with_description(self, text: str) -> Token:
        """Return a copy of this token with a description."""
        return self.model_copy(update={"description": text})

    # Fluent aliases: t.color().default("#000").describe("Text color")
    default = with_default
    describe = with_description

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Token:
        """
        Build a token from its mapping form.

        Example:
            Token.from_mapping({"type": "color", "default": "#000"})
        """
        return cls(
            kind=TokenKind(data["type"]),
            default_value=data.get("default"),
            description=data.get("description"),
        )

    def to_mapping(self) -> dict[str, Any]:
        """Inverse of ``from_mapping``; omits unset fields."""
        data: dict[str, Any] = {"type": self.kind.value}
        if self.default_value is not None:
            data["default"] = self.default_value
        if self.description is not None:
            data["description"] = self.description
        return data


# =============================================================================
# Builders
# =============================================================================


class _TokenBuilders:
    """
    Token builder namespace.

    Each method returns a fresh token of one kind with no default and no
    description.
    """

    def color(self) -> Token:
        """Hex, rgb()/rgba(), hsl()/hsla() or a CSS named color."""
        return Token(kind=TokenKind.COLOR)

    def dimension(self) -> Token:
        """Number with a CSS length unit, or ``"0"``."""
        return Token(kind=TokenKind.DIMENSION)

    def number(self) -> Token:
        return Token(kind=TokenKind.NUMBER)

    def string(self) -> Token:
        return Token(kind=TokenKind.STRING)

    def boolean(self) -> Token:
        return Token(kind=TokenKind.BOOLEAN)

    def font_family(self) -> Token:
        """Font family stack, e.g. ``"Inter, sans-serif"``."""
        return Token(kind=TokenKind.FONT_FAMILY)

    def font_weight(self) -> Token:
        """Weight 1-1000 or a keyword such as ``bold``."""
        return Token(kind=TokenKind.FONT_WEIGHT)

    def shadow(self) -> Token:
        """CSS box-shadow / text-shadow value."""
        return Token(kind=TokenKind.SHADOW)

    def url(self) -> Token:
        """http(s), safe data: URL, relative path or hash fragment."""
        return Token(kind=TokenKind.URL)


t = _TokenBuilders()
