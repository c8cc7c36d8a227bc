"""
CSS generator for livery themes.

Turns a validated theme into CSS custom properties. Variable names come
from the token path: each camelCase segment is kebab-cased and segments are
joined with the separator, so ``colors.primaryHover`` becomes
``--colors-primary-hover``. ``css_var`` uses the same rule, which keeps
``var()`` references in step with the generated declarations.

Every value is escaped before it is written into CSS text.

Output format::

    :root, [data-theme="light"] {
      --colors-primary: #14b8a6;
    }

    [data-theme="dark"] {
      --colors-primary: #2dd4bf;
    }
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from livery.core.schema import (
    Schema,
    SchemaDefinition,
    get_schema_definition,
    get_token_paths,
    is_schema_definition,
    is_token_definition,
)
from livery.utils import path_to_kebab_case, stringify_value
from livery.validation.css_escape import escape_css_value


class CssVariableOptions(BaseModel):
    """
    Naming options for CSS variables.

    Example:
        CssVariableOptions(prefix="theme")  # --theme-colors-primary
    """

    model_config = ConfigDict(frozen=True)

    prefix: str = Field(default="", description="Prepended to every variable name")
    separator: str = Field(default="-", description="Joins prefix and path segments")
    transform_name: Callable[[str], str] | None = Field(
        default=None, description="Custom dot-path to name transform"
    )


DEFAULT_OPTIONS = CssVariableOptions()

OptionsArg = CssVariableOptions | Mapping[str, Any] | None


def _options(options: OptionsArg) -> CssVariableOptions:
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, CssVariableOptions):
        return options
    return CssVariableOptions.model_validate(options)


def variable_name(path: str, options: OptionsArg = None) -> str:
    """
    Derive the custom property name for a token path.

    Example:
        variable_name("colors.primaryColor")                     # "--colors-primary-color"
        variable_name("colors.primary", {"prefix": "theme"})     # "--theme-colors-primary"
    """
    opts = _options(options)
    if opts.transform_name is not None:
        name = opts.transform_name(path)
    else:
        name = path_to_kebab_case(path, opts.separator)

    if opts.prefix:
        return f"--{opts.prefix}{opts.separator}{name}"
    return f"--{name}"


def _generate_variables(
    definition: SchemaDefinition,
    data: Mapping[str, Any],
    options: CssVariableOptions,
    path: str,
    variables: dict[str, str],
) -> None:
    for key, node in definition.items():
        current_path = f"{path}.{key}" if path else key
        value = data.get(key)

        if is_token_definition(node):
            if value is not None:
                name = variable_name(current_path, options)
                variables[name] = escape_css_value(stringify_value(value))
        elif is_schema_definition(node) and isinstance(value, Mapping):
            _generate_variables(node, value, options, current_path, variables)


def _format_declarations(variables: Mapping[str, str]) -> str:
    return "\n".join(f"  {name}: {value};" for name, value in variables.items())


def _format_rule(selector: str, variables: Mapping[str, str]) -> str:
    return f"{selector} {{\n{_format_declarations(variables)}\n}}"


def to_css_variables(
    schema: Schema | SchemaDefinition,
    theme: Mapping[str, Any],
    options: OptionsArg = None,
) -> dict[str, str]:
    """
    Convert a validated theme to a map of CSS variable names to escaped values.

    The theme is not validated here; tokens with no value are skipped.

    Example:
        to_css_variables(schema, theme)
        # {'--colors-primary': '#3b82f6', '--spacing-md': '16px'}
    """
    variables: dict[str, str] = {}
    _generate_variables(get_schema_definition(schema), theme, _options(options), "", variables)
    return variables


def to_css_string(
    schema: Schema | SchemaDefinition,
    theme: Mapping[str, Any],
    options: OptionsArg = None,
    selector: str = ":root",
) -> str:
    """
    Convert a validated theme to one CSS rule.

    Returns an empty string when the theme yields no variables.
    """
    variables = to_css_variables(schema, theme, options)
    if not variables:
        return ""
    return _format_rule(selector, variables)


def to_css_string_all(
    schema: Schema | SchemaDefinition,
    themes: Mapping[str, Mapping[str, Any]],
    default_theme: str | None = None,
    options: OptionsArg = None,
    attribute: str = "data-theme",
) -> str:
    """
    Generate one rule per named theme.

    Each theme gets an ``[attribute="name"]`` selector; the default theme's
    rule is also applied to ``:root``. Themes that yield no variables are
    skipped and blocks are separated by a blank line.

    Example:
        to_css_string_all(schema, {"light": light, "dark": dark}, default_theme="light")
    """
    opts = _options(options)
    blocks: list[str] = []

    for name, theme in themes.items():
        variables = to_css_variables(schema, theme, opts)
        if not variables:
            continue

        attr_selector = f'[{attribute}="{name}"]'
        selector = f":root, {attr_selector}" if name == default_theme else attr_selector
        blocks.append(_format_rule(selector, variables))

    return "\n\n".join(blocks)


def css_var(path: str, options: OptionsArg = None) -> str:
    """
    Build a ``var()`` reference for a token path.

    Example:
        css_var("colors.primary")  # "var(--colors-primary)"
    """
    return f"var({variable_name(path, options)})"


def create_css_var_helper(
    schema: Schema | SchemaDefinition,
    options: OptionsArg = None,
) -> Callable[[str], str]:
    """
    Bind ``css_var`` to a schema and its naming options.

    The helper raises ``KeyError`` for paths that do not name a token, so a
    typo fails loudly instead of producing a reference that never resolves.

    Example:
        theme_var = create_css_var_helper(schema, {"prefix": "brand"})
        theme_var("colors.primary")  # "var(--brand-colors-primary)"
    """
    opts = _options(options)
    known_paths = frozenset(get_token_paths(schema))

    def theme_var(path: str) -> str:
        if path not in known_paths:
            raise KeyError(f"Unknown token path: {path}")
        return css_var(path, opts)

    return theme_var
