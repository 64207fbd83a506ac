"""Stylesheet scoper: rewrites every style rule in a CSS source under a scope."""

from __future__ import annotations

import logging

from stylescope.config import DEFAULT_CONFIG, ScopeConfig
from stylescope.errors import ParseError, ensure_scope
from stylescope.scoping.rewriter import scope_selector_list
from stylescope.selector.model import SelectorList
from stylescope.selector.parser import parse_selector_list
from stylescope.stylesheet.model import AtRule, Rule, ScopedStylesheet, Verbatim
from stylescope.stylesheet.splitter import split_rules

__all__ = ["parse_rule_selectors", "scope_css", "scope_stylesheet", "scoped_body"]

logger = logging.getLogger(__name__)


def scoped_body(at_rule: AtRule, config: ScopeConfig) -> tuple[int, int] | None:
    """Return the source range of *at_rule*'s body if the rules in it get scoped.

    Returns ``None`` for statement at-rules and for block at-rules whose name
    is not in ``config.scoped_at_rules``; those are copied verbatim.
    """
    if not at_rule.has_block or at_rule.name not in config.scoped_at_rules:
        return None
    return at_rule.body_offset, at_rule.body_offset + len(at_rule.body or "")


def parse_rule_selectors(source: str, rule: Rule) -> SelectorList:
    """Parse the selector list of *rule*, locating any error within *source*."""
    try:
        return parse_selector_list(rule.selector_text)
    except ParseError as exc:
        raise exc.relocate(source, rule.offset) from exc


class _StylesheetScoper:
    """Walks the split items of one source and accumulates scoped output."""

    def __init__(self, source: str, scope: str, config: ScopeConfig) -> None:
        self.source = source
        self.scope = scope
        self.config = config
        self.class_names: set[str] = set()
        self.id_names: set[str] = set()

    def scope_range(self, start: int, end: int) -> str:
        out: list[str] = []
        for item in split_rules(self.source, start, end):
            if isinstance(item, Verbatim):
                out.append(item.text)
            elif isinstance(item, AtRule):
                out.append(self._scope_at_rule(item))
            else:
                out.append(self._scope_rule(item))
        return "".join(out)

    def _scope_at_rule(self, at_rule: AtRule) -> str:
        body = scoped_body(at_rule, self.config)
        if body is None:
            logger.debug("Passing @%s through unscoped", at_rule.name)
            return at_rule.text
        inner = self.scope_range(*body)
        return f"{at_rule.prelude.rstrip()} {{{inner}}}"

    def _scope_rule(self, rule: Rule) -> str:
        if rule.selector_text in self.config.global_selectors:
            logger.debug("Leaving global rule %r unscoped", rule.selector_text)
            return rule.text
        selectors = parse_rule_selectors(self.source, rule)
        self._collect_names(selectors)
        scoped = scope_selector_list(selectors, self.scope, self.config)
        return f"{scoped} {{{rule.declarations}}}"

    def _collect_names(self, selectors: SelectorList) -> None:
        for selector in selectors:
            for step in selector.steps:
                self.class_names.update(step.compound.classes)
                if step.compound.id is not None:
                    self.id_names.add(step.compound.id)


def scope_stylesheet(
    source: str, scope: str, config: ScopeConfig | None = None
) -> ScopedStylesheet:
    """Scope every style rule in *source* and report the names that were scoped.

    Declaration blocks, comments and whitespace between rules are copied
    unchanged.  Rules inside conditional group at-rules (``@media``,
    ``@supports``, ...) are scoped; every other at-rule, ``@keyframes``
    included, is copied verbatim.

    Raises ``InvalidScopeError`` for an empty scope and a ``ParseError``
    subclass, located in *source*, if any part of the input cannot be parsed.
    Nothing is returned on failure.
    """
    ensure_scope(scope)
    scoper = _StylesheetScoper(source, scope, config or DEFAULT_CONFIG)
    css = scoper.scope_range(0, len(source))
    return ScopedStylesheet(
        css=css,
        scope=scope,
        class_names=tuple(sorted(scoper.class_names)),
        id_names=tuple(sorted(scoper.id_names)),
    )


def scope_css(source: str, scope: str, config: ScopeConfig | None = None) -> str:
    """Return *source* with every selector rewritten under *scope*."""
    return scope_stylesheet(source, scope, config).css
