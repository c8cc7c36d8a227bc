"""
Token value validators.

Each validator checks whether an arbitrary runtime value matches one token
kind and returns a ``ValueResult``: either the accepted (possibly
normalised) value or a message explaining the rejection.

``coerce_value`` layers a small set of explicit conversions on top of
validation (numeric strings to numbers, ``"true"``/``1`` to booleans,
bare numbers to pixel dimensions, anything to string).
"""

from __future__ import annotations

import math
import re
from typing import Any, NamedTuple, assert_never
from urllib.parse import urlsplit

from livery.core.tokens import TokenKind
from livery.utils import stringify_value


class ValueResult(NamedTuple):
    """Outcome of validating a single value."""

    valid: bool
    value: Any = None
    message: str = ""

    @classmethod
    def ok(cls, value: Any) -> ValueResult:
        return cls(True, value)

    @classmethod
    def fail(cls, message: str) -> ValueResult:
        return cls(False, None, message)


# =============================================================================
# Patterns and keyword sets
# =============================================================================

_HEX_COLOR = re.compile(r"#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{4}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})")
_RGB_COLOR = re.compile(
    r"rgba?\(\s*\d{1,3}\s*,\s*\d{1,3}\s*,\s*\d{1,3}\s*(,\s*(0|1|0?\.\d+))?\s*\)",
    re.ASCII,
)
_HSL_COLOR = re.compile(
    r"hsla?\(\s*\d{1,3}\s*,\s*\d{1,3}%\s*,\s*\d{1,3}%\s*(,\s*(0|1|0?\.\d+))?\s*\)",
    re.ASCII,
)

DIMENSION_UNITS = (
    "px", "rem", "em", "%", "vh", "vw", "vmin", "vmax", "ch", "ex",
    "cm", "mm", "in", "pt", "pc", "svh", "svw", "dvh", "dvw", "lvh", "lvw",
)  # fmt: skip

_UNIT_ALTERNATION = "|".join(re.escape(unit) for unit in DIMENSION_UNITS)
_DIMENSION = re.compile(rf"-?(\d+\.?\d*|\.\d+)({_UNIT_ALTERNATION})", re.ASCII)

# Shadow offsets: unit optional, modern viewport units not included
_SHADOW_LENGTH = re.compile(
    r"-?(\d+\.?\d*|\.\d+)(px|rem|em|%|vh|vw|vmin|vmax|ch|ex|cm|mm|in|pt|pc)?",
    re.ASCII,
)
_INSET_PREFIX = re.compile(r"^inset\s+", re.IGNORECASE)

_NUMERIC_TEXT = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_HEX_INT_TEXT = re.compile(r"0[xX][0-9A-Fa-f]+|0[bB][01]+|0[oO][0-7]+")

FONT_WEIGHT_KEYWORDS = frozenset(
    {"normal", "bold", "bolder", "lighter", "inherit", "initial", "unset"}
)
SHADOW_KEYWORDS = frozenset({"none", "inherit", "initial", "unset"})

ALLOWED_URL_PROTOCOLS = frozenset({"http:", "https:", "data:"})
DANGEROUS_DATA_MIMES = ("text/html", "application/javascript", "application/x-javascript")
_URL_SCHEME = re.compile(r"([A-Za-z][A-Za-z0-9+.\-]*):")
_DATA_MIME = re.compile(r"[^;,]+")
_SPECIAL_PROTOCOLS = ("http:", "https:")
# WHATWG forbidden host code points (colon and brackets belong to ports and IPv6)
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r\0#/<>?@\\^|%")

# CSS Color Module Level 4 named colors plus special keywords
CSS_NAMED_COLORS = frozenset(
    {
        "transparent", "currentcolor", "inherit", "initial", "unset",
        "aliceblue", "antiquewhite", "aqua", "aquamarine", "azure", "beige",
        "bisque", "black", "blanchedalmond", "blue", "blueviolet", "brown",
        "burlywood", "cadetblue", "chartreuse", "chocolate", "coral",
        "cornflowerblue", "cornsilk", "crimson", "cyan", "darkblue", "darkcyan",
        "darkgoldenrod", "darkgray", "darkgreen", "darkgrey", "darkkhaki",
        "darkmagenta", "darkolivegreen", "darkorange", "darkorchid", "darkred",
        "darksalmon", "darkseagreen", "darkslateblue", "darkslategray",
        "darkslategrey", "darkturquoise", "darkviolet", "deeppink",
        "deepskyblue", "dimgray", "dimgrey", "dodgerblue", "firebrick",
        "floralwhite", "forestgreen", "fuchsia", "gainsboro", "ghostwhite",
        "gold", "goldenrod", "gray", "green", "greenyellow", "grey", "honeydew",
        "hotpink", "indianred", "indigo", "ivory", "khaki", "lavender",
        "lavenderblush", "lawngreen", "lemonchiffon", "lightblue", "lightcoral",
        "lightcyan", "lightgoldenrodyellow", "lightgray", "lightgreen",
        "lightgrey", "lightpink", "lightsalmon", "lightseagreen",
        "lightskyblue", "lightslategray", "lightslategrey", "lightsteelblue",
        "lightyellow", "lime", "limegreen", "linen", "magenta", "maroon",
        "mediumaquamarine", "mediumblue", "mediumorchid", "mediumpurple",
        "mediumseagreen", "mediumslateblue", "mediumspringgreen",
        "mediumturquoise", "mediumvioletred", "midnightblue", "mintcream",
        "mistyrose", "moccasin", "navajowhite", "navy", "oldlace", "olive",
        "olivedrab", "orange", "orangered", "orchid", "palegoldenrod",
        "palegreen", "paleturquoise", "palevioletred", "papayawhip",
        "peachpuff", "peru", "pink", "plum", "powderblue", "purple",
        "rebeccapurple", "red", "rosybrown", "royalblue", "saddlebrown",
        "salmon", "sandybrown", "seagreen", "seashell", "sienna", "silver",
        "skyblue", "slateblue", "slategray", "slategrey", "snow",
        "springgreen", "steelblue", "tan", "teal", "thistle", "tomato",
        "turquoise", "violet", "wheat", "white", "whitesmoke", "yellow",
        "yellowgreen",
    }
)  # fmt: skip


# =============================================================================
# Helpers
# =============================================================================


def _is_number(value: Any) -> bool:
    """Real numbers only; ``bool`` is excluded even though it subclasses int."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def parse_number(text: str) -> float | int | None:
    """
    Parse numeric text the way form inputs and query strings are read.

    Surrounding whitespace is ignored and blank text reads as ``0``.
    Decimal, exponent, ``Infinity`` and 0x/0b/0o integer forms are
    accepted. Returns ``None`` when the text is not a number.
    """
    stripped = text.strip()
    if not stripped:
        return 0
    if _NUMERIC_TEXT.fullmatch(stripped):
        number = float(stripped)
        return int(number) if number.is_integer() else number
    if _HEX_INT_TEXT.fullmatch(stripped):
        return int(stripped, 0)
    if stripped in ("Infinity", "+Infinity"):
        return math.inf
    if stripped == "-Infinity":
        return -math.inf
    return None


# =============================================================================
# Validators
# =============================================================================


def validate_color(value: Any) -> ValueResult:
    """
    Validate a color value.

    Accepts CSS named colors (case-insensitive, returned lowercased), hex
    (#RGB, #RGBA, #RRGGBB, #RRGGBBAA), rgb()/rgba() and hsl()/hsla().
    """
    if not isinstance(value, str):
        return ValueResult.fail("expected string")

    trimmed = value.strip()
    lower = trimmed.lower()

    if lower in CSS_NAMED_COLORS:
        return ValueResult.ok(lower)

    if (
        _HEX_COLOR.fullmatch(trimmed)
        or _RGB_COLOR.fullmatch(trimmed)
        or _HSL_COLOR.fullmatch(trimmed)
    ):
        return ValueResult.ok(trimmed)

    return ValueResult.fail(
        "invalid color format (expected hex, rgb, rgba, hsl, hsla, or CSS named color)"
    )


def validate_dimension(value: Any) -> ValueResult:
    """Validate a dimension such as ``16px`` or ``1.5rem``; ``"0"`` needs no unit."""
    if not isinstance(value, str):
        return ValueResult.fail("expected string")

    trimmed = value.strip()
    if trimmed == "0":
        return ValueResult.ok("0")

    if _DIMENSION.fullmatch(trimmed):
        return ValueResult.ok(trimmed)

    return ValueResult.fail(
        "invalid dimension format (expected number with unit like px, rem, em, %, etc.)"
    )


def validate_number(value: Any) -> ValueResult:
    if _is_number(value) and not (isinstance(value, float) and math.isnan(value)):
        return ValueResult.ok(value)
    return ValueResult.fail("expected number")


def validate_string(value: Any) -> ValueResult:
    if isinstance(value, str):
        return ValueResult.ok(value)
    return ValueResult.fail("expected string")


def validate_boolean(value: Any) -> ValueResult:
    if isinstance(value, bool):
        return ValueResult.ok(value)
    return ValueResult.fail("expected boolean")


def validate_font_family(value: Any) -> ValueResult:
    if not isinstance(value, str):
        return ValueResult.fail("expected string")

    trimmed = value.strip()
    if not trimmed:
        return ValueResult.fail("font family cannot be empty")
    return ValueResult.ok(trimmed)


def validate_font_weight(value: Any) -> ValueResult:
    """
    Validate a font weight.

    Numbers must be within 1-1000. Strings may be a keyword (returned
    lowercased) or numeric text in range, which is returned as a number.
    """
    if _is_number(value):
        if 1 <= value <= 1000:
            return ValueResult.ok(value)
        return ValueResult.fail("font weight number must be between 1 and 1000")

    if isinstance(value, str):
        trimmed = value.strip()
        lower = trimmed.lower()

        if lower in FONT_WEIGHT_KEYWORDS:
            return ValueResult.ok(lower)

        number = parse_number(trimmed)
        if number is not None and 1 <= number <= 1000:
            return ValueResult.ok(number)

    return ValueResult.fail("invalid font weight (expected number 1-1000 or keyword)")


def split_shadows(shadow: str) -> list[str]:
    """Split a shadow list on commas that are not nested inside parentheses."""
    shadows: list[str] = []
    current: list[str] = []
    depth = 0

    for char in shadow:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            shadows.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    tail = "".join(current).strip()
    if tail:
        shadows.append(tail)
    return shadows


def _is_single_shadow(shadow: str) -> bool:
    """Check ``[inset] offset-x offset-y ...``; blur, spread and color are not checked."""
    working = shadow.strip()
    if not working:
        return False

    working = _INSET_PREFIX.sub("", working, count=1).strip()
    if not working:
        return False

    first = _SHADOW_LENGTH.match(working)
    if not first:
        return False

    working = working[first.end() :].strip()
    if not working:
        return False

    return _SHADOW_LENGTH.match(working) is not None


def validate_shadow(value: Any) -> ValueResult:
    """
    Validate a box-shadow / text-shadow value.

    ``none``/``inherit``/``initial``/``unset`` pass (lowercased); otherwise
    every comma-separated shadow needs at least two leading lengths.
    """
    if not isinstance(value, str):
        return ValueResult.fail("expected string")

    trimmed = value.strip()
    lower = trimmed.lower()
    if lower in SHADOW_KEYWORDS:
        return ValueResult.ok(lower)

    if not trimmed:
        return ValueResult.fail("shadow cannot be empty")

    for shadow in split_shadows(trimmed):
        if not _is_single_shadow(shadow):
            return ValueResult.fail(
                "invalid shadow syntax (expected: [inset] offset-x offset-y [blur] [spread] [color])"
            )

    return ValueResult.ok(trimmed)


def _has_valid_host(rest: str) -> bool:
    """Check the authority of an http(s) URL; leading slashes after the scheme are optional."""
    authority = rest.lstrip("/\\")
    try:
        parts = urlsplit(f"//{authority}")
        hostname = parts.hostname
        parts.port  # raises ValueError outside 0-65535
    except ValueError:
        return False
    return bool(hostname) and not _FORBIDDEN_HOST_CHARS.intersection(hostname)


def validate_url(value: Any) -> ValueResult:
    """
    Validate a URL with protocol allow-listing.

    Relative paths (``/``, ``./``, ``../``) and ``#`` fragments pass.
    Absolute URLs must be http, https or data; data URLs carrying HTML or
    JavaScript MIME types are rejected.
    """
    if not isinstance(value, str):
        return ValueResult.fail("expected string")

    trimmed = value.strip()
    if not trimmed:
        return ValueResult.fail("URL cannot be empty")

    if trimmed.startswith(("/", "./", "../", "#")):
        return ValueResult.ok(trimmed)

    scheme = _URL_SCHEME.match(trimmed)
    if not scheme:
        return ValueResult.fail("invalid URL format")

    protocol = f"{scheme.group(1).lower()}:"
    if protocol not in ALLOWED_URL_PROTOCOLS:
        return ValueResult.fail(f"unsafe URL protocol '{protocol}' (allowed: http, https, data)")

    if protocol in _SPECIAL_PROTOCOLS and not _has_valid_host(trimmed[scheme.end() :]):
        return ValueResult.fail("invalid URL format")

    if protocol == "data:":
        mime_match = _DATA_MIME.match(trimmed[len("data:") :])
        if mime_match:
            mime = mime_match.group(0).lower()
            if any(dangerous in mime for dangerous in DANGEROUS_DATA_MIMES):
                return ValueResult.fail(f"dangerous data URL MIME type '{mime}' is not allowed")

    return ValueResult.ok(trimmed)


# =============================================================================
# Dispatch
# =============================================================================


def validate_value(value: Any, kind: TokenKind | str) -> ValueResult:
    """
    Validate a value against a token kind.

    Example:
        validate_value("#3b82f6", TokenKind.COLOR)  # ValueResult(valid=True, value='#3b82f6')
        validate_value("hello", "number")           # ValueResult(valid=False, ...)
    """
    kind = TokenKind(kind)
    match kind:
        case TokenKind.COLOR:
            return validate_color(value)
        case TokenKind.DIMENSION:
            return validate_dimension(value)
        case TokenKind.NUMBER:
            return validate_number(value)
        case TokenKind.STRING:
            return validate_string(value)
        case TokenKind.BOOLEAN:
            return validate_boolean(value)
        case TokenKind.FONT_FAMILY:
            return validate_font_family(value)
        case TokenKind.FONT_WEIGHT:
            return validate_font_weight(value)
        case TokenKind.SHADOW:
            return validate_shadow(value)
        case TokenKind.URL:
            return validate_url(value)
        case _:
            assert_never(kind)


def coerce_value(value: Any, kind: TokenKind | str) -> ValueResult:
    """
    Validate a value, falling back to explicit conversions.

    Conversions:
    - number: numeric text to number ("42" -> 42)
    - boolean: "true"/1 -> True, "false"/0 -> False
    - string: any non-None value -> its text form
    - dimension: bare number -> pixels (16 -> "16px")

    Other kinds are not widened; the validation failure is returned.
    """
    kind = TokenKind(kind)
    direct = validate_value(value, kind)
    if direct.valid:
        return direct

    match kind:
        case TokenKind.NUMBER:
            if isinstance(value, str):
                number = parse_number(value)
                if number is not None:
                    return ValueResult.ok(number)
        case TokenKind.BOOLEAN:
            if value == "true" or (_is_number(value) and value == 1):
                return ValueResult.ok(True)
            if value == "false" or (_is_number(value) and value == 0):
                return ValueResult.ok(False)
        case TokenKind.STRING:
            if value is not None:
                return ValueResult.ok(stringify_value(value))
        case TokenKind.DIMENSION:
            if _is_number(value):
                return ValueResult.ok(f"{stringify_value(value)}px")
        case (
            TokenKind.COLOR
            | TokenKind.FONT_FAMILY
            | TokenKind.FONT_WEIGHT
            | TokenKind.SHADOW
            | TokenKind.URL
        ):
            pass
        case _:
            assert_never(kind)

    return direct
