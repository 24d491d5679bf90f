"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (only for errors)

Line Ending Support:
    LF and CRLF are supported; \\n is the line delimiter. CR-only files
    report every error on line 1.
"""

from dataclasses import dataclass

__all__ = ["Cursor", "ParseResult"]

# XML 1.0 S production: space, tab, carriage return, line feed
XML_WHITESPACE = frozenset(" \t\r\n")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("<a/>", 0)
        >>> cursor.current
        '<'
        >>> cursor.advance().current
        'a'
        >>> cursor.current  # Original unchanged (immutability)
        '<'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True if position >= source length."""
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

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped at EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def move_to(self, pos: int) -> "Cursor":
        """Return new cursor at an absolute position (clamped at EOF)."""
        return Cursor(self.source, min(pos, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def starts_with(self, literal: str) -> bool:
        """Check whether the source continues with ``literal`` at this position.

        Example:
            >>> Cursor("<!-- x -->", 0).starts_with("<!--")
            True
        """
        return self.source.startswith(literal, self.pos)

    def find(self, literal: str) -> int:
        """Offset of the next occurrence of ``literal``, or -1."""
        return self.source.find(literal, self.pos)

    def skip_whitespace(self) -> "Cursor":
        """Skip XML whitespace (space, tab, CR, LF).

        Example:
            >>> Cursor(" \\t\\n <a/>", 0).skip_whitespace().pos
            4
        """
        c = self
        while not c.is_eof and c.current in XML_WHITESPACE:
            c = c.advance()
        return c

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Every sub-parser returns ``ParseResult(value, cursor)`` on success and
    raises ResourceParseError on failure.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult("h", cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor
