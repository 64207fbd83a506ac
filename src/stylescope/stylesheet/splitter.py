"""Rule splitter: breaks CSS source into rules, at-rules and verbatim text.

Only enough structure is recognized to pair each prelude with the block that
follows it.  Strings, comments and escapes are tracked so that braces inside
them never open or close a block.
"""

from __future__ import annotations

import re
from typing import Iterator, Union

from stylescope.errors import CssSyntaxError, locate
from stylescope.stylesheet.model import AtRule, Rule, Verbatim

__all__ = ["Item", "split_rules"]

Item = Union[Rule, AtRule, Verbatim]

_AT_KEYWORD_RE = re.compile(r"@(-?[A-Za-z_][\w-]*)")
_WHITESPACE = " \t\n\r\f"


class _RuleSplitter:
    """Scanner over ``source[start:end]``; offsets stay absolute."""

    def __init__(self, source: str, start: int, end: int) -> None:
        self.source = source
        self.start = start
        self.end = end

    def _error(self, message: str, offset: int, fragment: str = "") -> CssSyntaxError:
        line, column = locate(self.source, offset)
        return CssSyntaxError(
            message, offset=offset, fragment=fragment, line=line, column=column
        )

    # --- low-level skips ------------------------------------------------------

    def _skip_string(self, pos: int) -> int:
        """Return the index just past the string opened at *pos*."""
        src = self.source
        quote = src[pos]
        i = pos + 1
        while i < self.end:
            ch = src[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                return i + 1
            if ch == "\n":
                break
            i += 1
        raise self._error("Unterminated string", pos, src[pos:min(i, pos + 20)])

    def _skip_comment(self, pos: int) -> int:
        """Return the index just past the comment opened at *pos*."""
        close = self.source.find("*/", pos + 2, self.end)
        if close == -1:
            raise self._error("Unterminated comment", pos, "/*")
        return close + 2

    def _is_comment(self, pos: int) -> bool:
        return self.source.startswith("/*", pos) and pos + 1 < self.end

    def _skip_trivia(self, pos: int) -> int:
        src = self.source
        while pos < self.end:
            if src[pos] in _WHITESPACE:
                pos += 1
            elif self._is_comment(pos):
                pos = self._skip_comment(pos)
            else:
                break
        return pos

    # --- preludes and blocks --------------------------------------------------

    def _scan_prelude(self, pos: int) -> int:
        """Return the index of the ``{`` or ``;`` ending the prelude, or ``end``."""
        src = self.source
        closers: list[str] = []
        while pos < self.end:
            ch = src[pos]
            if ch in "\"'":
                pos = self._skip_string(pos)
                continue
            if ch == "\\":
                pos += 2
                continue
            if self._is_comment(pos):
                pos = self._skip_comment(pos)
                continue
            if ch == "(":
                closers.append(")")
            elif ch == "[":
                closers.append("]")
            elif ch in ")]":
                if not closers or closers[-1] != ch:
                    raise self._error(f"Unbalanced {ch!r}", pos, ch)
                closers.pop()
            elif not closers:
                if ch in "{;":
                    return pos
                if ch == "}":
                    raise self._error("Unexpected '}'", pos, ch)
            pos += 1
        if closers:
            raise self._error(f"Missing {closers[-1]!r}", self.end)
        return self.end

    def _scan_block(self, open_at: int) -> int:
        """Return the index of the ``}`` matching the ``{`` at *open_at*."""
        src = self.source
        depth = 1
        pos = open_at + 1
        while pos < self.end:
            ch = src[pos]
            if ch in "\"'":
                pos = self._skip_string(pos)
                continue
            if ch == "\\":
                pos += 2
                continue
            if self._is_comment(pos):
                pos = self._skip_comment(pos)
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return pos
            pos += 1
        raise self._error("Unterminated block", open_at, "{")

    def _blank_comments(self, start: int, stop: int) -> str:
        """Return ``source[start:stop]`` with comments replaced by spaces.

        Blanking instead of removing keeps offsets aligned with the source.
        """
        src = self.source
        out: list[str] = []
        pos = start
        while pos < stop:
            ch = src[pos]
            if ch in "\"'":
                close = self._skip_string(pos)
                out.append(src[pos:close])
                pos = close
            elif ch == "\\":
                out.append(src[pos:pos + 2])
                pos += 2
            elif self._is_comment(pos):
                close = self._skip_comment(pos)
                out.append(" " * (close - pos))
                pos = close
            else:
                out.append(ch)
                pos += 1
        return "".join(out)

    # --- items ----------------------------------------------------------------

    def items(self) -> Iterator[Item]:
        src = self.source
        pos = self.start
        while pos < self.end:
            trivia_end = self._skip_trivia(pos)
            if trivia_end > pos:
                yield Verbatim(src[pos:trivia_end], pos)
                pos = trivia_end
            if pos >= self.end:
                break

            if src[pos] == "}":
                raise self._error("Unexpected '}'", pos, "}")
            if src[pos] == ";":
                yield Verbatim(";", pos)
                pos += 1
                continue

            item = self._read_item(pos)
            yield item
            pos = item.offset + len(item.text)

    def _read_item(self, pos: int) -> Rule | AtRule:
        src = self.source
        stop = self._scan_prelude(pos)
        if src.startswith("@", pos):
            return self._at_rule(pos, stop)

        prelude = src[pos:stop]
        if stop >= self.end:
            raise self._error("Expected '{' after selector", pos, prelude.strip()[:40])
        if src[stop] == ";":
            raise self._error(
                "Declaration outside of a rule block", pos, prelude.strip()[:40]
            )
        close = self._scan_block(stop)
        return Rule(
            selector_text=self._blank_comments(pos, stop).rstrip(),
            declarations=src[stop + 1:close],
            offset=pos,
            text=src[pos:close + 1],
        )

    def _at_rule(self, pos: int, stop: int) -> AtRule:
        src = self.source
        match = _AT_KEYWORD_RE.match(src, pos, stop)
        if match is None:
            raise self._error("Invalid at-rule", pos, src[pos:min(stop, pos + 20)])
        name = match.group(1).lower()
        prelude = src[pos:stop]
        if stop >= self.end or src[stop] == ";":
            end = min(stop + 1, self.end)
            return AtRule(name, prelude, None, pos, -1, src[pos:end])
        close = self._scan_block(stop)
        return AtRule(name, prelude, src[stop + 1:close], pos, stop + 1, src[pos:close + 1])


def split_rules(source: str, start: int = 0, end: int | None = None) -> Iterator[Item]:
    """Lazily split ``source[start:end]`` into rules, at-rules and verbatim text.

    Offsets on the returned items are relative to the whole *source*, which
    lets nested at-rule bodies be split in place.  Raises ``CssSyntaxError``
    for unbalanced braces, brackets, strings or comments.
    """
    if end is None:
        end = len(source)
    return _RuleSplitter(source, start, end).items()
