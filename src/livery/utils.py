"""
Tree helpers shared by the schema, resolver and CSS modules.

Themes are plain nested dicts; these helpers treat any ``Mapping`` as a
group and everything else as a leaf value.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any


def deep_clone(value: Any) -> Any:
    """Deep copy mappings and lists; other values are returned as-is."""
    if isinstance(value, Mapping):
        return {key: deep_clone(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [deep_clone(item) for item in value]
    return value


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Merge ``source`` over ``target`` and return a new dict.

    Nested mappings are merged recursively; any other source value
    replaces the target value. ``None`` in the source does not override.
    Neither input is mutated.
    """
    result: dict[str, Any] = deep_clone(target)
    if not source:
        return result

    for key, source_value in source.items():
        target_value = result.get(key)
        if isinstance(source_value, Mapping) and isinstance(target_value, Mapping):
            result[key] = deep_merge(target_value, source_value)
        elif source_value is not None:
            result[key] = deep_clone(source_value)

    return result


def get_at_path(obj: Any, path: str) -> Any:
    """
    Get the value at a dot-notation path, or ``None`` if any step is missing.

    Example:
        get_at_path({"colors": {"primary": "#3b82f6"}}, "colors.primary")
    """
    current = obj
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def set_at_path(obj: Mapping[str, Any], path: str, value: Any) -> dict[str, Any]:
    """Return a copy of ``obj`` with ``value`` set at ``path``, creating groups as needed."""
    result: dict[str, Any] = deep_clone(obj)
    parts = path.split(".")

    current = result
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value
    return result


# lowercase->Uppercase, or the last capital of an acronym followed by Titlecase
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])|([A-Z])([A-Z][a-z])")


def _kebab_boundary(match: re.Match[str]) -> str:
    if match.group(1):
        return f"{match.group(1)}-{match.group(2)}"
    return f"{match.group(3)}-{match.group(4)}"


def to_kebab_case(segment: str) -> str:
    """
    Convert one camelCase segment to kebab-case.

    Example:
        to_kebab_case("primaryColor")  # "primary-color"
        to_kebab_case("HTMLParser")    # "html-parser"
    """
    return _CAMEL_BOUNDARY.sub(_kebab_boundary, segment).lower()


def path_to_kebab_case(path: str, separator: str = "-") -> str:
    """
    Convert a dot path to a CSS variable name body.

    Example:
        path_to_kebab_case("colors.primaryColor")  # "colors-primary-color"
    """
    return separator.join(to_kebab_case(part) for part in path.split("."))


def stringify_value(value: Any) -> str:
    """
    Render a theme value as CSS text.

    Booleans become ``true``/``false`` and integral floats drop their
    trailing ``.0`` so ``16.0`` renders as ``16``. Lists join their items
    with commas (``None`` items render empty) and mappings render as
    ``[object Object]``, the same text a browser produces.
    """
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, list | tuple):
        return ",".join("" if item is None else stringify_value(item) for item in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)
