"""Error hierarchy for stylescope."""

from __future__ import annotations


class StylescopeError(Exception):
    """Base error for all stylescope errors."""


class InvalidScopeError(StylescopeError, ValueError):
    """The scope token is empty."""


def ensure_scope(scope: str) -> str:
    """Return *scope* unchanged, raising ``InvalidScopeError`` if it is empty."""
    if not scope:
        raise InvalidScopeError("Scope token must be a non-empty string")
    return scope


class RegistryError(StylescopeError):
    """A registry operation could not complete, e.g. a self-referencing producer."""


class ParseError(StylescopeError):
    """Raised when CSS or selector source cannot be parsed.

    Attributes:
        reason: The message without location information.
        offset: Zero-based character offset of the problem in the parsed text.
        fragment: The offending substring, if one could be isolated.
        line: One-based line number, when the full source is known.
        column: One-based column number, when the full source is known.
    """

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        fragment: str = "",
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.reason = message
        self.offset = offset
        self.fragment = fragment
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [self.reason]
        if self.line is not None and self.column is not None:
            parts.append(f"(line {self.line}, column {self.column})")
        elif self.offset is not None:
            parts.append(f"(offset {self.offset})")
        if self.fragment:
            parts.append(f"near {self.fragment!r}")
        return " ".join(parts)

    def relocate(self, source: str, base: int) -> ParseError:
        """Return a copy of this error positioned inside *source*.

        *base* is the offset of the originally parsed text within *source*.
        """
        offset = base + (self.offset or 0)
        line, column = locate(source, offset)
        return type(self)(
            self.reason,
            offset=offset,
            fragment=self.fragment,
            line=line,
            column=column,
        )


class SelectorSyntaxError(ParseError):
    """A selector list does not follow the supported selector grammar."""


class CssSyntaxError(ParseError):
    """CSS source has unbalanced braces, brackets, quotes or comments."""


def locate(source: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-based ``(line, column)`` pair."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column
