"""CLI commands: stylescope scope / stylescope selector -- rewrite CSS under a scope."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stylescope.config import ScopeConfig
from stylescope.errors import InvalidScopeError, ParseError
from stylescope.scoping import scope_selector
from stylescope.stylesheet import scope_css


def _config(attribute: str) -> ScopeConfig:
    return ScopeConfig(attribute=attribute)


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--scope", "scope_token", required=True, help="Scope token to apply.")
@click.option(
    "--attribute",
    default="data-scope",
    show_default=True,
    help="Marker attribute appended to element selectors.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the scoped CSS here instead of stdout.",
)
def scope(cssfile: str, scope_token: str, attribute: str, output: str | None) -> None:
    """Rewrite every selector in CSSFILE so it only matches SCOPE."""
    source = Path(cssfile).read_text(encoding="utf-8")

    try:
        scoped = scope_css(source, scope_token, _config(attribute))
    except InvalidScopeError as exc:
        raise click.BadParameter(str(exc), param_hint="--scope") from exc
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if output is None:
        click.echo(scoped, nl=False)
        return
    Path(output).write_text(scoped, encoding="utf-8")
    click.echo(f"Wrote {output}", err=True)


@click.command()
@click.argument("text")
@click.option("--scope", "scope_token", required=True, help="Scope token to apply.")
@click.option(
    "--attribute",
    default="data-scope",
    show_default=True,
    help="Marker attribute appended to element selectors.",
)
def selector(text: str, scope_token: str, attribute: str) -> None:
    """Rewrite a single selector list TEXT under SCOPE."""
    try:
        click.echo(scope_selector(text, scope_token, _config(attribute)))
    except InvalidScopeError as exc:
        raise click.BadParameter(str(exc), param_hint="--scope") from exc
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
