"""CLI command: stylescope check -- parse a stylesheet and summarize it."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stylescope.config import DEFAULT_CONFIG, ScopeConfig
from stylescope.errors import ParseError
from stylescope.stylesheet import (
    AtRule,
    Rule,
    parse_rule_selectors,
    scoped_body,
    split_rules,
)


def _walk(
    source: str, start: int, end: int, counts: dict[str, int], config: ScopeConfig
) -> None:
    for item in split_rules(source, start, end):
        if isinstance(item, AtRule):
            counts["at-rules"] += 1
            body = scoped_body(item, config)
            if body is not None:
                _walk(source, *body, counts, config)
        elif isinstance(item, Rule):
            counts["rules"] += 1
            counts["selectors"] += len(parse_rule_selectors(source, item))


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
def check(cssfile: str) -> None:
    """Parse every rule and selector in CSSFILE without rewriting it.

    Exits with code 0 if everything parses, or code 1 on the first error.
    """
    css_path = Path(cssfile)
    source = css_path.read_text(encoding="utf-8")
    counts = {"rules": 0, "at-rules": 0, "selectors": 0}

    try:
        _walk(source, 0, len(source), counts, DEFAULT_CONFIG)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    click.echo(
        f"OK: {css_path.name}: {counts['rules']} rule(s), "
        f"{counts['at-rules']} at-rule(s), {counts['selectors']} selector(s)"
    )
