"""Tests for per-kind token value validators and coercion."""

from __future__ import annotations

import math

import pytest

from livery.core.tokens import TokenKind
from livery.validation.validators import (
    coerce_value,
    parse_number,
    split_shadows,
    validate_boolean,
    validate_color,
    validate_dimension,
    validate_font_family,
    validate_font_weight,
    validate_number,
    validate_shadow,
    validate_string,
    validate_url,
    validate_value,
)

# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------


class TestColor:
    @pytest.mark.parametrize(
        "value",
        [
            "#fff",
            "#FFFA",
            "#3b82f6",
            "#3b82f680",
            "rgb(255, 0, 0)",
            "rgba(0,0,0,0.5)",
            "rgba(0, 0, 0, .25)",
            "rgba(0, 0, 0, 1)",
            "hsl(210, 50%, 40%)",
            "hsla(210, 50%, 40%, 0.3)",
        ],
    )
    def test_accepts_functional_and_hex(self, value: str) -> None:
        result = validate_color(value)
        assert result.valid
        assert result.value == value

    def test_named_colors_are_case_insensitive(self) -> None:
        assert validate_color("RebeccaPurple").value == "rebeccapurple"
        assert validate_color("transparent").valid
        assert validate_color("currentColor").value == "currentcolor"

    @pytest.mark.parametrize(
        "value",
        ["#ff", "#fffff", "#ggg", "rgb(0, 0)", "rgba(0, 0, 0, 2)", "hsl(10, 50, 40)", "bluish", ""],
    )
    def test_rejects_malformed(self, value: str) -> None:
        result = validate_color(value)
        assert not result.valid
        assert result.message.startswith("invalid color format")

    def test_rejects_non_string(self) -> None:
        assert validate_color(0xFFFFFF).message == "expected string"


# ---------------------------------------------------------------------------
# Dimension
# ---------------------------------------------------------------------------


class TestDimension:
    @pytest.mark.parametrize(
        "value",
        ["16px", "1.5rem", "-2em", ".5em", "100%", "10vmin", "3ch", "1in", "100dvh", "50svw", "0"],
    )
    def test_accepts_units(self, value: str) -> None:
        assert validate_dimension(value).valid

    @pytest.mark.parametrize("value", ["16", "px", "16 px", "1.5xx", "0px0", "--1px"])
    def test_rejects_invalid(self, value: str) -> None:
        result = validate_dimension(value)
        assert not result.valid
        assert "invalid dimension format" in result.message

    def test_rejects_numbers(self) -> None:
        assert validate_dimension(16).message == "expected string"


# ---------------------------------------------------------------------------
# Exact-type kinds
# ---------------------------------------------------------------------------


class TestExactTypes:
    def test_number(self) -> None:
        assert validate_number(42).valid
        assert validate_number(-1.5).valid
        assert not validate_number("42").valid
        assert not validate_number(True).valid
        assert not validate_number(math.nan).valid

    def test_string(self) -> None:
        assert validate_string("").valid
        assert not validate_string(1).valid

    def test_boolean(self) -> None:
        assert validate_boolean(False).valid
        assert not validate_boolean(1).valid
        assert not validate_boolean("true").valid


class TestFontFamily:
    def test_trims(self) -> None:
        assert validate_font_family("  Inter, sans-serif ").value == "Inter, sans-serif"

    def test_rejects_blank(self) -> None:
        assert validate_font_family("   ").message == "font family cannot be empty"


class TestFontWeight:
    @pytest.mark.parametrize("value", [1, 400, 1000, 550.5])
    def test_numbers_in_range(self, value: float) -> None:
        assert validate_font_weight(value).value == value

    @pytest.mark.parametrize("value", [0, 1001, -100])
    def test_numbers_out_of_range(self, value: int) -> None:
        message = validate_font_weight(value).message
        assert message == "font weight number must be between 1 and 1000"

    def test_keywords_lowercased(self) -> None:
        assert validate_font_weight("Bold").value == "bold"
        assert validate_font_weight("lighter").value == "lighter"

    def test_numeric_strings_become_numbers(self) -> None:
        assert validate_font_weight("700").value == 700
        assert validate_font_weight(" 300 ").value == 300

    @pytest.mark.parametrize("value", ["heavy", "0", "2000", True, None])
    def test_rejects_other_values(self, value: object) -> None:
        assert not validate_font_weight(value).valid


# ---------------------------------------------------------------------------
# Shadow
# ---------------------------------------------------------------------------


class TestShadow:
    @pytest.mark.parametrize(
        "value",
        [
            "0 1px 2px rgba(0, 0, 0, 0.1)",
            "inset 0 0 4px #000",
            "INSET 2px 2px",
            "1px 1px 2px black, 0 0 1em red",
            "0 4px 6px -1px rgb(0 0 0 / 0.1), 0 2px 4px -2px rgb(0 0 0 / 0.1)",
        ],
    )
    def test_accepts_shadows(self, value: str) -> None:
        assert validate_shadow(value).valid

    def test_keywords(self) -> None:
        assert validate_shadow("None").value == "none"
        assert validate_shadow("unset").value == "unset"

    @pytest.mark.parametrize(
        "value", ["1px", "inset", "red 1px 2px", "1px 1px, red", "inset inset 1px 1px"]
    )
    def test_rejects_invalid(self, value: str) -> None:
        assert not validate_shadow(value).valid

    def test_rejects_empty(self) -> None:
        assert validate_shadow("  ").message == "shadow cannot be empty"

    def test_split_respects_parentheses(self) -> None:
        assert split_shadows("0 0 1px rgba(0, 0, 0, 0.5), 1px 1px red") == [
            "0 0 1px rgba(0, 0, 0, 0.5)",
            "1px 1px red",
        ]


# ---------------------------------------------------------------------------
# URL
# ---------------------------------------------------------------------------


class TestUrl:
    @pytest.mark.parametrize(
        "value",
        [
            "/logo.svg",
            "./img/a.png",
            "../up.png",
            "#section",
            "https://cdn.example.com/logo.png",
            "http://localhost:8080/x",
            "data:image/png;base64,iVBORw0KGgo=",
        ],
    )
    def test_accepts_safe_urls(self, value: str) -> None:
        assert validate_url(value).valid

    @pytest.mark.parametrize(
        ("value", "protocol"),
        [
            ("javascript:alert(1)", "javascript:"),
            ("JavaScript:alert(1)", "javascript:"),
            ("vbscript:msgbox", "vbscript:"),
            ("file:///etc/passwd", "file:"),
            ("ftp://example.com", "ftp:"),
        ],
    )
    def test_rejects_unsafe_protocols(self, value: str, protocol: str) -> None:
        result = validate_url(value)
        assert not result.valid
        assert result.message == f"unsafe URL protocol '{protocol}' (allowed: http, https, data)"

    @pytest.mark.parametrize(
        "value",
        [
            "data:text/html,<script>alert(1)</script>",
            "data:TEXT/HTML;base64,PHNjcmlwdD4=",
            "data:application/javascript,alert(1)",
            "data:application/x-javascript,alert(1)",
        ],
    )
    def test_rejects_dangerous_data_urls(self, value: str) -> None:
        assert "dangerous data URL MIME type" in validate_url(value).message

    @pytest.mark.parametrize(
        "value",
        [
            "logo.png",
            "example.com/x",
            "https://",
            "https:",
            "https://exa mple.com/a.png",
            "https://exa<mple.com/",
            "https://ex%41mple.com/",
            "http://example.com:99999/",
            "http://example.com:port/",
            "https://[::1/",
        ],
    )
    def test_rejects_unparseable(self, value: str) -> None:
        assert validate_url(value).message == "invalid URL format"

    @pytest.mark.parametrize(
        "value",
        [
            "https:example.com/logo.png",
            "https:/example.com",
            "http:///example.com/x",
            "http://[::1]:80/",
        ],
    )
    def test_slashes_after_web_scheme_are_optional(self, value: str) -> None:
        result = validate_url(value)
        assert result.valid
        assert result.value == value

    def test_rejects_empty_and_non_string(self) -> None:
        assert validate_url("").message == "URL cannot be empty"
        assert validate_url(None).message == "expected string"


# ---------------------------------------------------------------------------
# Dispatch and coercion
# ---------------------------------------------------------------------------


class TestDispatch:
    def test_every_kind_dispatches(self) -> None:
        samples = {
            TokenKind.COLOR: "red",
            TokenKind.DIMENSION: "1px",
            TokenKind.NUMBER: 1,
            TokenKind.STRING: "s",
            TokenKind.BOOLEAN: True,
            TokenKind.FONT_FAMILY: "Inter",
            TokenKind.FONT_WEIGHT: 400,
            TokenKind.SHADOW: "none",
            TokenKind.URL: "/a",
        }
        assert set(samples) == set(TokenKind)
        for kind, value in samples.items():
            assert validate_value(value, kind).valid, kind

    def test_accepts_kind_strings(self) -> None:
        assert validate_value("Inter", "fontFamily").valid

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            validate_value("x", "gradient")


class TestCoerce:
    def test_valid_values_pass_through(self) -> None:
        assert coerce_value("#fff", TokenKind.COLOR).value == "#fff"
        assert coerce_value(3, TokenKind.NUMBER).value == 3

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("42", 42), (" 1.5 ", 1.5), ("-3", -3), ("1e3", 1000), ("0x10", 16), ("", 0)],
    )
    def test_number_from_text(self, text: str, expected: float) -> None:
        assert coerce_value(text, TokenKind.NUMBER).value == expected

    def test_number_rejects_nan_text(self) -> None:
        result = coerce_value("abc", TokenKind.NUMBER)
        assert not result.valid
        assert result.message == "expected number"

    def test_number_does_not_widen_booleans(self) -> None:
        assert not coerce_value(True, TokenKind.NUMBER).valid

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("true", True), (1, True), ("false", False), (0, False), (0.0, False)],
    )
    def test_boolean(self, value: object, expected: bool) -> None:
        result = coerce_value(value, TokenKind.BOOLEAN)
        assert result.valid
        assert result.value is expected

    @pytest.mark.parametrize("value", ["yes", "TRUE", 2, None])
    def test_boolean_rejects_other_values(self, value: object) -> None:
        assert not coerce_value(value, TokenKind.BOOLEAN).valid

    def test_string(self) -> None:
        assert coerce_value(42, TokenKind.STRING).value == "42"
        assert coerce_value(2.0, TokenKind.STRING).value == "2"
        assert coerce_value(True, TokenKind.STRING).value == "true"
        assert not coerce_value(None, TokenKind.STRING).valid

    def test_string_from_containers(self) -> None:
        assert coerce_value(["a", "b"], TokenKind.STRING).value == "a,b"
        assert coerce_value([1, None, 2.5], TokenKind.STRING).value == "1,,2.5"
        assert coerce_value({"nested": "x"}, TokenKind.STRING).value == "[object Object]"

    def test_dimension_from_number(self) -> None:
        assert coerce_value(16, TokenKind.DIMENSION).value == "16px"
        assert coerce_value(1.5, TokenKind.DIMENSION).value == "1.5px"
        assert not coerce_value("16", TokenKind.DIMENSION).valid

    def test_other_kinds_are_not_widened(self) -> None:
        assert not coerce_value(123, TokenKind.COLOR).valid
        assert not coerce_value(5, TokenKind.URL).valid
        assert not coerce_value(1, TokenKind.SHADOW).valid


class TestParseNumber:
    def test_forms(self) -> None:
        assert parse_number("12") == 12
        assert isinstance(parse_number("12.0"), int)
        assert parse_number("+.5") == 0.5
        assert parse_number("0b101") == 5
        assert parse_number("-Infinity") == -math.inf
        assert parse_number("12px") is None
        assert parse_number("1_000") is None
