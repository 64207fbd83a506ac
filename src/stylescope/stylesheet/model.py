"""Stylesheet model: items produced by the rule splitter and the scoped result."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rule:
    """A style rule: selector list text paired with its declaration block.

    ``declarations`` is the raw text between the braces and is never
    modified.  ``text`` is the full source of the rule.
    """

    selector_text: str
    declarations: str
    offset: int  # where selector_text starts in the source
    text: str


@dataclass(frozen=True)
class AtRule:
    """An at-rule, either a statement (``@import ...;``) or a block.

    Attributes:
        name: Lower-cased at-keyword without the ``@``.
        prelude: Raw text from the ``@`` up to the block or semicolon.
        body: Raw text between the braces, or None for statement at-rules.
        offset: Where the at-rule starts in the source.
        body_offset: Where ``body`` starts in the source (-1 without a body).
        text: The full source of the at-rule.
    """

    name: str
    prelude: str
    body: str | None
    offset: int
    body_offset: int
    text: str

    @property
    def has_block(self) -> bool:
        return self.body is not None


@dataclass(frozen=True)
class Verbatim:
    """Whitespace, comments or stray semicolons copied to output unchanged."""

    text: str
    offset: int


@dataclass(frozen=True)
class ScopedStylesheet:
    """Result of scoping a stylesheet.

    ``class_names`` and ``id_names`` are the original (unprefixed) names that
    received the scope prefix, sorted and de-duplicated.
    """

    css: str
    scope: str
    class_names: tuple[str, ...] = ()
    id_names: tuple[str, ...] = ()
