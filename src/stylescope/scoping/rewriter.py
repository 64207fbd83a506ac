"""Scoping rewriter: serializes parsed selectors under a scope token.

Rewrite policy, applied to each part of a compound selector:

    .name     -> .{scope}_name
    #name     -> #{scope}_name
    tag       -> tag[data-scope="{scope}"]
    *         -> *
    [attr]    -> unchanged
    :pseudo   -> unchanged, moved after every non-pseudo part

Combinators are re-emitted with single surrounding spaces and selectors are
joined with ``", "``.
"""

from __future__ import annotations

from stylescope.config import DEFAULT_CONFIG, ScopeConfig
from stylescope.errors import ensure_scope
from stylescope.selector.model import (
    CompoundSelector,
    PartKind,
    Selector,
    SelectorList,
    SimpleSelector,
)
from stylescope.selector.parser import parse_selector_list

__all__ = [
    "scope_compound",
    "scope_part",
    "scope_selector",
    "scope_selector_list",
]


def scope_part(
    part: SimpleSelector, scope: str, config: ScopeConfig | None = None
) -> str:
    """Return the scoped text of a single simple selector."""
    config = config or DEFAULT_CONFIG
    kind = part.kind
    if kind is PartKind.CLASS:
        return f".{config.prefixed(scope, part.value)}"
    if kind is PartKind.ID:
        return f"#{config.prefixed(scope, part.value)}"
    if kind is PartKind.ELEMENT:
        return f"{part.value}{config.marker(scope)}"
    # Universal, attribute and pseudo parts pass through verbatim.
    return part.value


def scope_compound(
    compound: CompoundSelector, scope: str, config: ScopeConfig | None = None
) -> str:
    """Return the scoped text of a compound selector."""
    config = config or DEFAULT_CONFIG
    head = [scope_part(p, scope, config) for p in compound.parts if p.kind is not PartKind.PSEUDO]
    tail = [p.value for p in compound.parts if p.kind is PartKind.PSEUDO]
    return "".join(head + tail)


def _scope_complex(selector: Selector, scope: str, config: ScopeConfig) -> str:
    return "".join(
        step.combinator.joiner + scope_compound(step.compound, scope, config)
        for step in selector.steps
    )


def scope_selector_list(
    selectors: SelectorList, scope: str, config: ScopeConfig | None = None
) -> str:
    """Serialize an already-parsed selector list under *scope*."""
    ensure_scope(scope)
    config = config or DEFAULT_CONFIG
    return ", ".join(_scope_complex(s, scope, config) for s in selectors)


def scope_selector(text: str, scope: str, config: ScopeConfig | None = None) -> str:
    """Parse selector-list *text* and return it rewritten under *scope*.

    Raises ``InvalidScopeError`` for an empty scope (before parsing) and
    ``SelectorSyntaxError`` if the text cannot be parsed.
    """
    ensure_scope(scope)
    return scope_selector_list(parse_selector_list(text), scope, config)
