"""
Theme validation engine.

Walks a schema against input data and applies the token validators in one
of three modes:

- strict: every token without a default must be present and valid
- partial: missing tokens are skipped
- coerce: like strict, but values are converted when possible

Every reachable token is checked and every problem collected; the engine
never stops at the first error and never raises.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from livery.core.schema import (
    Schema,
    SchemaDefinition,
    get_schema_definition,
    is_schema_definition,
    is_token_definition,
)
from livery.core.tokens import Token

from .validators import coerce_value, validate_value

_MISSING = object()


class ValidationMode(StrEnum):
    """How missing and mistyped values are treated."""

    STRICT = "strict"
    PARTIAL = "partial"
    COERCE = "coerce"


class ValidationIssue(BaseModel):
    """
    One validation error.

    ``expected`` is the token kind, or ``"object"`` for a nested group.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: str = Field(description="Dot-notation path of the offending value")
    message: str = Field(description="What went wrong")
    expected: str = Field(description="Token kind or 'object'")
    received: Any = Field(default=None, description="The value that was supplied")

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ValidationResult(BaseModel):
    """
    Outcome of validating a whole theme.

    On success ``data`` holds the reconstructed theme with defaults filled
    in; on failure ``errors`` lists every issue found.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool
    data: dict[str, Any] | None = None
    errors: list[ValidationIssue] = Field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success


def _collect(
    definition: SchemaDefinition,
    data: Any,
    mode: ValidationMode,
    path: str,
    errors: list[ValidationIssue],
) -> dict[str, Any]:
    """Validate one group; append issues to ``errors`` and return the rebuilt group."""
    rebuilt: dict[str, Any] = {}
    source = data if isinstance(data, Mapping) else {}

    for key, node in definition.items():
        current_path = f"{path}.{key}" if path else key
        value = source.get(key, _MISSING)
        if value is None:
            value = _MISSING

        if is_token_definition(node):
            token = node if isinstance(node, Token) else Token.from_mapping(node)

            if value is _MISSING:
                if token.has_default:
                    rebuilt[key] = token.default_value
                elif mode != ValidationMode.PARTIAL:
                    errors.append(
                        ValidationIssue(
                            path=current_path,
                            message="required value is missing",
                            expected=token.kind.value,
                            received=None,
                        )
                    )
                continue

            if mode == ValidationMode.COERCE:
                result = coerce_value(value, token.kind)
            else:
                result = validate_value(value, token.kind)

            if result.valid:
                rebuilt[key] = result.value
            else:
                errors.append(
                    ValidationIssue(
                        path=current_path,
                        message=result.message,
                        expected=token.kind.value,
                        received=value,
                    )
                )

        elif is_schema_definition(node):
            if value is _MISSING:
                if mode == ValidationMode.PARTIAL:
                    continue
                # Absent group: defaults fill in, each missing leaf is reported
                rebuilt[key] = _collect(node, {}, mode, current_path, errors)
            elif not isinstance(value, Mapping):
                errors.append(
                    ValidationIssue(
                        path=current_path,
                        message="expected object for nested group",
                        expected="object",
                        received=value,
                    )
                )
            else:
                rebuilt[key] = _collect(node, value, mode, current_path, errors)

    return rebuilt


def validate_with_mode(
    schema: Schema | SchemaDefinition,
    data: Any,
    mode: ValidationMode | str,
) -> ValidationResult:
    """Validate ``data`` against ``schema`` in the given mode."""
    errors: list[ValidationIssue] = []
    rebuilt = _collect(get_schema_definition(schema), data, ValidationMode(mode), "", errors)

    if errors:
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True, data=rebuilt)


def validate(schema: Schema | SchemaDefinition, data: Any) -> ValidationResult:
    """
    Validate theme data in strict mode.

    Example:
        result = validate(schema, theme_data)
        if result.success:
            css = to_css_string(schema, result.data)
    """
    return validate_with_mode(schema, data, ValidationMode.STRICT)


def validate_partial(schema: Schema | SchemaDefinition, data: Any) -> ValidationResult:
    """Validate theme data, allowing missing values (e.g. a partial override)."""
    return validate_with_mode(schema, data, ValidationMode.PARTIAL)


def coerce(schema: Schema | SchemaDefinition, data: Any) -> ValidationResult:
    """Validate theme data, converting values to their token kind when possible."""
    return validate_with_mode(schema, data, ValidationMode.COERCE)
