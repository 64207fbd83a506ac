"""Selector model: combinators, simple and compound selectors, selector lists."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Combinator(Enum):
    """Operator joining two compound selectors.

    ``NONE`` marks the first step of a selector.
    """

    NONE = ""
    DESCENDANT = " "
    CHILD = ">"
    ADJACENT = "+"
    SIBLING = "~"

    @property
    def joiner(self) -> str:
        """Text emitted between two compound selectors."""
        if self is Combinator.NONE:
            return ""
        if self is Combinator.DESCENDANT:
            return " "
        return f" {self.value} "


class PartKind(Enum):
    """Kind of a simple selector inside a compound selector."""

    ELEMENT = "element"
    UNIVERSAL = "universal"
    ID = "id"
    CLASS = "class"
    ATTRIBUTE = "attribute"
    PSEUDO = "pseudo"


@dataclass(frozen=True)
class SimpleSelector:
    """One part of a compound selector.

    ``value`` is the bare name for element, id and class parts, ``*`` for the
    universal selector, and the raw source text (brackets and colons
    included) for attribute and pseudo parts.
    """

    kind: PartKind
    value: str
    offset: int = 0

    def __str__(self) -> str:
        if self.kind is PartKind.ID:
            return f"#{self.value}"
        if self.kind is PartKind.CLASS:
            return f".{self.value}"
        return self.value


@dataclass(frozen=True)
class CompoundSelector:
    """A run of simple selectors with no combinator between them."""

    parts: tuple[SimpleSelector, ...]

    def _values(self, kind: PartKind) -> tuple[str, ...]:
        return tuple(p.value for p in self.parts if p.kind is kind)

    @property
    def element(self) -> str | None:
        """Tag name, ``"*"`` for the universal selector, or None."""
        first = self.parts[0] if self.parts else None
        if first is not None and first.kind in (PartKind.ELEMENT, PartKind.UNIVERSAL):
            return first.value
        return None

    @property
    def id(self) -> str | None:
        ids = self._values(PartKind.ID)
        return ids[0] if ids else None

    @property
    def classes(self) -> tuple[str, ...]:
        return self._values(PartKind.CLASS)

    @property
    def attributes(self) -> tuple[str, ...]:
        return self._values(PartKind.ATTRIBUTE)

    @property
    def pseudos(self) -> tuple[str, ...]:
        return self._values(PartKind.PSEUDO)

    def __str__(self) -> str:
        return "".join(str(p) for p in self.parts)


@dataclass(frozen=True)
class Step:
    """A compound selector together with the combinator that precedes it."""

    combinator: Combinator
    compound: CompoundSelector


@dataclass(frozen=True)
class Selector:
    """One complex selector: an ordered sequence of steps."""

    steps: tuple[Step, ...]

    @property
    def combinators(self) -> tuple[Combinator, ...]:
        """Combinators between compounds, excluding the leading ``NONE``."""
        return tuple(s.combinator for s in self.steps[1:])

    def __str__(self) -> str:
        return "".join(f"{s.combinator.joiner}{s.compound}" for s in self.steps)


@dataclass(frozen=True)
class SelectorList:
    """Comma-separated selectors in source order."""

    selectors: tuple[Selector, ...]

    def __iter__(self):
        return iter(self.selectors)

    def __len__(self) -> int:
        return len(self.selectors)

    def __str__(self) -> str:
        return ", ".join(str(s) for s in self.selectors)
