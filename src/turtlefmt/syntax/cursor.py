"""Immutable cursor over Turtle source text.

Every parse rule takes a Cursor and returns a new one; the source string
is shared, only the offset changes. Line and column numbers are derived
lazily, for diagnostics only.

Line endings:
    LF and CRLF count as one line break each. A lone CR is whitespace to
    the grammar but does not start a new line in diagnostics.
"""

import re
from bisect import bisect_right
from dataclasses import dataclass

__all__ = ["Cursor", "LineOffsetCache", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Position in a source string.

    Example:
        >>> cursor = Cursor("<s>", 0)
        >>> cursor.current
        '<'
        >>> cursor.advance().current
        's'
        >>> cursor.current  # Original unchanged (immutability)
        '<'
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns None ONLY when peeking beyond EOF.
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def at(self, pos: int) -> "Cursor":
        """Return a cursor over the same source at an absolute position."""
        return Cursor(self.source, min(pos, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos."""
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing cursor.

        Example:
            >>> Cursor("@prefix", 0).slice_ahead(3)
            '@pr'
        """
        return self.source[self.pos : self.pos + n]

    def startswith(self, text: str) -> bool:
        """Check whether the source continues with text at this position."""
        return self.source.startswith(text, self.pos)

    def match(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        """Anchor a compiled regular expression at the current position.

        Example:
            >>> cursor = Cursor("+01 .", 0)
            >>> cursor.match(re.compile(r"[+-]?[0-9]+")).group()
            '+01'
        """
        return pattern.match(self.source, self.pos)

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise."""
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character (not consumed)."""
        cursor = self
        while not cursor.is_eof and cursor.current not in ("\n", "\r"):
            cursor = cursor.advance()
        return cursor

    @property
    def byte_offset(self) -> int:
        """UTF-8 byte offset of the current position."""
        return len(self.source[: self.pos].encode("utf-8", errors="surrogatepass"))

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position.
            Only call for error reporting, not during normal parsing!

        Example:
            >>> cursor = Cursor("line1\\nline2", 8)
            >>> cursor.compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. The comment correlator and the
    printer ask for the line of every comment and statement, so this is
    much cheaper than Cursor.compute_line_col() per position.

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(6)
        (2, 1)
        >>> cache.line_start(8)
        6

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        """Build line offset cache from source (O(n))."""
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def _line_index(self, pos: int) -> int:
        pos = max(0, min(pos, self._source_len))
        return bisect_right(self._offsets, pos) - 1

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get 1-indexed (line, column) for a character position."""
        index = self._line_index(pos)
        return (index + 1, pos - self._offsets[index] + 1)

    def line_start(self, pos: int) -> int:
        """Offset of the first character of the line containing pos."""
        return self._offsets[self._line_index(pos)]


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Type Parameters:
        T: The type of the parsed value

    Pattern:
        Every sub-parser has the signature:
            def parse_foo(cursor: Cursor) -> ParseResult[Foo] | None

        None means "not a Foo here" (nothing consumed); malformed input
        that has already committed to a Foo raises TurtleSyntaxError.

    Example:
        >>> cursor = Cursor("abc", 0)
        >>> result = ParseResult("a", cursor.advance())
        >>> result.value
        'a'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor
