"""Shared pytest fixtures for livery tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from livery import Schema, create_schema, t


class FakeClock:
    """Manually advanced monotonic clock for cache timing tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def color_schema() -> Schema:
    """Two colors, one with a default and one required."""
    return create_schema(
        {
            "colors": {
                "primary": t.color().default("#000"),
                "secondary": t.color(),
            }
        }
    )


@pytest.fixture
def brand_schema() -> Schema:
    """A schema touching every token kind, all with defaults."""
    return create_schema(
        {
            "colors": {
                "primary": t.color().default("#3b82f6").describe("Brand color"),
                "primaryHover": t.color().default("#2563eb"),
                "background": t.color().default("#ffffff"),
            },
            "spacing": {
                "sm": t.dimension().default("4px"),
                "md": t.dimension().default("16px"),
            },
            "typography": {
                "fontFamily": t.font_family().default("Inter, sans-serif"),
                "weight": t.font_weight().default(400),
                "lineHeight": t.number().default(1.5),
            },
            "effects": {
                "cardShadow": t.shadow().default("0 1px 2px rgba(0, 0, 0, 0.1)"),
                "rounded": t.boolean().default(True),
            },
            "brand": {
                "name": t.string().default("Acme"),
                "logo": t.url().default("/logo.svg"),
            },
        }
    )


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """A YAML schema file mirroring ``color_schema`` plus a spacing group."""
    path = tmp_path / "schema.yaml"
    path.write_text(
        """
colors:
  primary:
    type: color
    default: "#000"
    description: Brand color
  secondary:
    type: color
spacing:
  md:
    type: dimension
    default: 16px
""".lstrip(),
        encoding="utf-8",
    )
    return path
