"""
livery command line interface.

Commands:
  paths     List every token path in a schema
  validate  Validate a theme file against a schema
  css       Render a theme file as a CSS rule
  css-all   Render several themes as one stylesheet
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from livery._version import get_version
from livery.core.errors import LiveryError
from livery.core.loader import load_schema, load_theme
from livery.core.schema import Schema, get_token_at_path, get_token_paths
from livery.css.generator import CssVariableOptions, to_css_string, to_css_string_all
from livery.validation.engine import ValidationMode, ValidationResult, coerce, validate_with_mode

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="livery – schema-driven design tokens and CSS variables",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"livery {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """livery CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_schema_or_exit(path: Path) -> Schema:
    try:
        return load_schema(path)
    except LiveryError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=2) from e


def _load_theme_or_exit(path: Path) -> dict:
    try:
        return load_theme(path)
    except LiveryError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=2) from e


def _report_issues(source: Path, result: ValidationResult) -> None:
    typer.echo(f"✗ {source}: {len(result.errors)} problem(s)", err=True)
    for issue in result.errors:
        typer.echo(
            f"  {issue.path}: {issue.message} (expected {issue.expected}, got {issue.received!r})",
            err=True,
        )


@app.command("paths")
def paths_command(
    schema_file: Path = typer.Argument(..., help="Schema file (.yaml, .yml or .json)"),
    show_kind: bool = typer.Option(False, "--kind", "-k", help="Show each token's kind"),
) -> None:
    """List every token path in a schema, depth-first."""
    schema = _load_schema_or_exit(schema_file)
    for path in get_token_paths(schema):
        token = get_token_at_path(schema, path) if show_kind else None
        typer.echo(f"{path}\t{token.kind.value}" if token is not None else path)


@app.command("validate")
def validate_command(
    schema_file: Path = typer.Argument(..., help="Schema file"),
    theme_file: Path = typer.Argument(..., help="Theme file"),
    mode: ValidationMode = typer.Option(
        ValidationMode.STRICT, "--mode", "-m", help="strict, partial or coerce"
    ),
) -> None:
    """Validate a theme against a schema and report every problem."""
    schema = _load_schema_or_exit(schema_file)
    theme = _load_theme_or_exit(theme_file)

    result = validate_with_mode(schema, theme, mode)
    if not result.success:
        _report_issues(theme_file, result)
        raise typer.Exit(code=1)

    typer.echo("OK")


@app.command("css")
def css_command(
    schema_file: Path = typer.Argument(..., help="Schema file"),
    theme_file: Path = typer.Argument(..., help="Theme file"),
    prefix: str = typer.Option("", "--prefix", "-p", help="Variable name prefix"),
    selector: str = typer.Option(":root", "--selector", "-s", help="CSS selector for the rule"),
) -> None:
    """Coerce a theme and print it as a CSS rule of custom properties."""
    schema = _load_schema_or_exit(schema_file)
    theme = _load_theme_or_exit(theme_file)

    result = coerce(schema, theme)
    if not result.success or result.data is None:
        _report_issues(theme_file, result)
        raise typer.Exit(code=1)

    typer.echo(to_css_string(schema, result.data, CssVariableOptions(prefix=prefix), selector))


@app.command("css-all")
def css_all_command(
    schema_file: Path = typer.Argument(..., help="Schema file"),
    theme: list[str] = typer.Option(
        ..., "--theme", "-t", help="Named theme as NAME=PATH (repeatable)"
    ),
    default: str | None = typer.Option(
        None, "--default", "-d", help="Theme also applied to :root"
    ),
    attribute: str = typer.Option("data-theme", "--attribute", "-a", help="Selector attribute"),
    prefix: str = typer.Option("", "--prefix", "-p", help="Variable name prefix"),
) -> None:
    """Render several named themes as one stylesheet."""
    schema = _load_schema_or_exit(schema_file)

    themes: dict[str, dict] = {}
    failed = False
    for entry in theme:
        name, sep, raw_path = entry.partition("=")
        if not sep or not name or not raw_path:
            typer.echo(f"Error: expected NAME=PATH, got '{entry}'", err=True)
            raise typer.Exit(code=2)

        theme_path = Path(raw_path)
        result = coerce(schema, _load_theme_or_exit(theme_path))
        if not result.success or result.data is None:
            _report_issues(theme_path, result)
            failed = True
            continue
        themes[name] = result.data

    if failed:
        raise typer.Exit(code=1)

    logger.debug("Rendering %d theme(s)", len(themes))

    if default is not None and default not in themes:
        typer.echo(f"Error: default theme '{default}' is not among --theme names", err=True)
        raise typer.Exit(code=2)

    typer.echo(
        to_css_string_all(
            schema,
            themes,
            default_theme=default,
            options=CssVariableOptions(prefix=prefix),
            attribute=attribute,
        )
    )


def main(argv: list[str] | None = None) -> None:
    app(args=argv if argv is not None else sys.argv[1:])


if __name__ == "__main__":
    main()
