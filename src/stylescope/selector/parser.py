"""Hand-written state machine parser for CSS selector lists.

Supported grammar (informally)::

    selector_list := selector ("," selector)*
    selector      := compound (combinator compound)*
    combinator    := whitespace | ">" | "+" | "~"
    compound      := [element | "*"] (id | class | attribute | pseudo)*

Attribute selectors and functional pseudo-class arguments are kept as raw
text.  The scan is a single left-to-right pass over the input.
"""

from __future__ import annotations

from enum import Enum, auto

from stylescope.errors import SelectorSyntaxError
from stylescope.selector.model import (
    Combinator,
    CompoundSelector,
    PartKind,
    Selector,
    SelectorList,
    SimpleSelector,
    Step,
)

__all__ = ["parse_selector_list"]

WHITESPACE = frozenset(" \t\n\r\f")
QUOTES = frozenset("\"'")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_COMBINATORS = {
    ">": Combinator.CHILD,
    "+": Combinator.ADJACENT,
    "~": Combinator.SIBLING,
}

_PART_PREFIXES = {
    ".": PartKind.CLASS,
    "#": PartKind.ID,
}


def is_name_start(ch: str) -> bool:
    """Return True if *ch* may start a CSS identifier (escapes excluded)."""
    return ch.isalpha() or ch in "-_" or ord(ch) > 127


def is_name_char(ch: str) -> bool:
    """Return True if *ch* may continue a CSS identifier (escapes excluded)."""
    return is_name_start(ch) or ch.isdigit()


def starts_identifier(text: str, pos: int) -> bool:
    """Return True if a CSS identifier may begin at ``text[pos]``.

    An identifier cannot start with a digit, nor with a hyphen followed by a
    digit.  Escapes count as name characters.
    """
    ch = text[pos:pos + 1]
    if ch == "-":
        ch = text[pos + 1:pos + 2]
        if ch == "-":
            return True
    return ch == "\\" or (ch != "" and is_name_start(ch))


def skip_escape(text: str, pos: int) -> int:
    """Return the index just past the escape sequence starting at ``text[pos]``.

    ``text[pos]`` must be a backslash.  A hex escape consumes up to six hex
    digits and one optional trailing whitespace character.
    """
    end = len(text)
    if pos + 1 >= end:
        raise SelectorSyntaxError(
            "Dangling escape at end of selector", offset=pos, fragment="\\"
        )
    i = pos + 1
    if text[i] not in HEX_DIGITS:
        return i + 1
    limit = min(i + 6, end)
    while i < limit and text[i] in HEX_DIGITS:
        i += 1
    if i < end and text[i] in WHITESPACE:
        i += 1
    return i


class _State(Enum):
    BETWEEN = auto()  # outside any compound: start, after whitespace/combinator/comma
    COMPOUND = auto()  # right after a complete simple selector
    IDENT = auto()  # reading an element, class, id or pseudo name
    ATTRIBUTE = auto()  # inside [...]
    PSEUDO_ARGS = auto()  # inside the parens of a functional pseudo-class
    STRING = auto()  # inside a quoted string in an attribute or pseudo argument


class _SelectorParser:
    """Single-use scanner turning selector-list text into a ``SelectorList``."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.state = _State.BETWEEN

        self.selectors: list[Selector] = []
        self.steps: list[Step] = []
        self.parts: list[SimpleSelector] = []

        # Combinator for the compound currently being built.
        self.step_combinator = Combinator.NONE
        # Explicit combinator seen since the last compound, and where.
        self.explicit: Combinator | None = None
        self.explicit_at = 0
        self.comma_at: int | None = None

        # Open part bookkeeping.
        self.part_kind = PartKind.ELEMENT
        self.part_start = 0
        self.name_start = 0
        self.depth = 0
        self.quote = ""
        self.string_start = 0
        self.after_string = _State.ATTRIBUTE

    # --- errors ---------------------------------------------------------------

    def _error(self, message: str, start: int, end: int | None = None) -> SelectorSyntaxError:
        if end is None:
            end = start + 1
        return SelectorSyntaxError(message, offset=start, fragment=self.text[start:end])

    # --- scan -----------------------------------------------------------------

    def parse(self) -> SelectorList:
        text = self.text
        end = len(text)
        i = 0
        while i < end:
            ch = text[i]
            state = self.state

            if state is _State.STRING:
                if ch == "\\":
                    i += 2
                    continue
                if ch == "\n":
                    raise self._error("Unterminated string", self.string_start, i)
                if ch == self.quote:
                    self.state = self.after_string
                i += 1
                continue

            if state is _State.ATTRIBUTE:
                if ch == "\\":
                    i = skip_escape(text, i)
                    continue
                if ch in QUOTES:
                    self._open_string(ch, i, _State.ATTRIBUTE)
                elif ch == "[":
                    raise self._error("Nested '[' in attribute selector", i)
                elif ch == "]":
                    self._close_raw_part(i + 1)
                i += 1
                continue

            if state is _State.PSEUDO_ARGS:
                if ch == "\\":
                    i = skip_escape(text, i)
                    continue
                if ch in QUOTES:
                    self._open_string(ch, i, _State.PSEUDO_ARGS)
                elif ch == "(":
                    self.depth += 1
                elif ch == ")":
                    self.depth -= 1
                    if self.depth == 0:
                        self._close_raw_part(i + 1)
                i += 1
                continue

            if state is _State.IDENT:
                if ch == "\\":
                    i = skip_escape(text, i)
                    continue
                if is_name_char(ch):
                    i += 1
                    continue
                if self.part_kind is PartKind.PSEUDO and ch == "(":
                    self._check_name(i)
                    self.state = _State.PSEUDO_ARGS
                    self.depth = 1
                    i += 1
                    continue
                self._close_name_part(i)
                # Re-dispatch the terminating character in COMPOUND state.
                continue

            i = self._dispatch(ch, i)

        return self._finish()

    def _dispatch(self, ch: str, i: int) -> int:
        """Handle one character in the BETWEEN or COMPOUND state.

        Returns the index at which scanning continues.
        """
        if ch in WHITESPACE:
            if self.state is _State.COMPOUND:
                self._close_compound()
            return i + 1

        if ch in _COMBINATORS:
            if self.state is _State.COMPOUND:
                self._close_compound()
            if not self.steps:
                raise self._error(f"Selector cannot start with combinator {ch!r}", i)
            if self.explicit is not None:
                raise self._error("Two combinators in a row", self.explicit_at, i + 1)
            self.explicit = _COMBINATORS[ch]
            self.explicit_at = i
            return i + 1

        if ch == ",":
            if self.state is _State.COMPOUND:
                self._close_compound()
            self._close_selector(i)
            self.comma_at = i
            return i + 1

        if ch in _PART_PREFIXES:
            self._open_part(_PART_PREFIXES[ch], i, i + 1)
            self.state = _State.IDENT
            return i + 1

        if ch == ":":
            name_start = i + 1
            if name_start < len(self.text) and self.text[name_start] == ":":
                name_start += 1
            self._open_part(PartKind.PSEUDO, i, name_start)
            self.state = _State.IDENT
            return name_start

        if ch == "[":
            self._open_part(PartKind.ATTRIBUTE, i, i + 1)
            self.state = _State.ATTRIBUTE
            return i + 1

        if ch == "*":
            self._require_leading(i)
            self._open_part(PartKind.UNIVERSAL, i, i)
            self.parts.append(SimpleSelector(PartKind.UNIVERSAL, "*", i))
            self.state = _State.COMPOUND
            return i + 1

        if is_name_start(ch) or ch == "\\":
            self._require_leading(i)
            self._open_part(PartKind.ELEMENT, i, i)
            self.state = _State.IDENT
            # The IDENT state consumes the first character, escapes included.
            return i

        raise self._error(f"Unexpected character {ch!r} in selector", i)

    # --- parts ----------------------------------------------------------------

    def _open_part(self, kind: PartKind, start: int, name_start: int) -> None:
        if self.state is _State.BETWEEN:
            self._open_compound()
        self.part_kind = kind
        self.part_start = start
        self.name_start = name_start

    def _require_leading(self, i: int) -> None:
        if self.state is _State.COMPOUND:
            raise self._error(
                "Type selector must come first in a compound selector", i
            )

    def _open_string(self, quote: str, i: int, resume: _State) -> None:
        self.quote = quote
        self.string_start = i
        self.after_string = resume
        self.state = _State.STRING

    def _check_name(self, end: int) -> None:
        if end <= self.name_start:
            raise self._error(
                f"Missing name in {self.part_kind.value} selector",
                self.part_start,
                end + 1,
            )

    def _close_name_part(self, end: int) -> None:
        self._check_name(end)
        kind = self.part_kind
        if kind is not PartKind.PSEUDO and not starts_identifier(self.text, self.name_start):
            raise self._error(
                f"Invalid name in {kind.value} selector", self.part_start, end
            )
        if kind is PartKind.PSEUDO:
            value = self.text[self.part_start:end]
        else:
            value = self.text[self.name_start:end]
        if kind is PartKind.ID and any(p.kind is PartKind.ID for p in self.parts):
            raise self._error(
                "Compound selector has more than one id", self.part_start, end
            )
        self.parts.append(SimpleSelector(kind, value, self.part_start))
        self.state = _State.COMPOUND

    def _close_raw_part(self, end: int) -> None:
        value = self.text[self.part_start:end]
        if self.part_kind is PartKind.ATTRIBUTE and not value[1:-1].strip():
            raise self._error("Empty attribute selector", self.part_start, end)
        self.parts.append(SimpleSelector(self.part_kind, value, self.part_start))
        self.state = _State.COMPOUND

    # --- structure ------------------------------------------------------------

    def _open_compound(self) -> None:
        if not self.steps:
            self.step_combinator = Combinator.NONE
        else:
            self.step_combinator = self.explicit or Combinator.DESCENDANT
        self.explicit = None

    def _close_compound(self) -> None:
        compound = CompoundSelector(tuple(self.parts))
        self.steps.append(Step(self.step_combinator, compound))
        self.parts = []
        self.state = _State.BETWEEN

    def _close_selector(self, at: int) -> None:
        if self.explicit is not None:
            raise self._error(
                "Combinator is not followed by a compound selector", self.explicit_at
            )
        if not self.steps:
            if self.comma_at is not None:
                raise self._error("Empty selector after ','", self.comma_at, at + 1)
            raise self._error("Empty selector before ','", at)
        self.selectors.append(Selector(tuple(self.steps)))
        self.steps = []

    def _finish(self) -> SelectorList:
        end = len(self.text)
        state = self.state
        if state is _State.STRING:
            raise self._error("Unterminated string", self.string_start, end)
        if state is _State.ATTRIBUTE:
            raise self._error("Unterminated attribute selector", self.part_start, end)
        if state is _State.PSEUDO_ARGS:
            raise self._error("Unbalanced '(' in pseudo-class", self.part_start, end)
        if state is _State.IDENT:
            self._close_name_part(end)
        if self.state is _State.COMPOUND:
            self._close_compound()

        if not self.selectors and not self.steps and self.comma_at is None:
            raise SelectorSyntaxError("Empty selector list", offset=0)
        self._close_selector(end)
        return SelectorList(tuple(self.selectors))


def parse_selector_list(text: str) -> SelectorList:
    """Parse selector-list text into a ``SelectorList``.

    Raises ``SelectorSyntaxError`` with the offset and offending fragment if
    the text does not follow the supported grammar.
    """
    return _SelectorParser(text).parse()
