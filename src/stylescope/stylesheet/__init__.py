from stylescope.stylesheet.scoper import (
    parse_rule_selectors,
    scope_css,
    scope_stylesheet,
    scoped_body,
)
from stylescope.stylesheet.splitter import split_rules
from stylescope.stylesheet.model import AtRule, Rule, ScopedStylesheet, Verbatim

__all__ = [
    "parse_rule_selectors",
    "scope_css",
    "scope_stylesheet",
    "scoped_body",
    "split_rules",
    "AtRule",
    "Rule",
    "ScopedStylesheet",
    "Verbatim",
]
