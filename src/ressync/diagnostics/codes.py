"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (command line, locale qualifier)
        2000-2999: File errors (missing files, read/write/replace failures)
        3000-3999: Syntax errors (resource document parse failures)
    """

    # Configuration errors (1000-1999)
    ROOT_NOT_SET = 1001
    LOCALE_NOT_SET = 1002
    NO_FILENAMES = 1003
    ROOT_NOT_DIRECTORY = 1004
    LOCALE_INVALID = 1005
    FILENAME_INVALID = 1006

    # File errors (2000-2999)
    FILE_NOT_FOUND = 2001
    READ_FAILED = 2002
    WRITE_FAILED = 2003
    REPLACE_FAILED = 2004

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    MALFORMED_MARKUP = 3002
    MISSING_ROOT = 3003
    MISMATCHED_TAG = 3004
    MISSING_NAME = 3005
    DUPLICATE_KEY = 3006
    INVALID_ENCODING = 3007
    SOURCE_TOO_LARGE = 3008
    TRAILING_CONTENT = 3009
    DUPLICATE_ATTRIBUTE = 3010


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for non-syntax errors)
        path: File the diagnostic refers to (None for configuration errors)
        hint: Suggestion for fixing the error
        context: Source excerpt with a caret under the error position
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    path: str | None = None
    hint: str | None = None
    context: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    @property
    def location(self) -> str | None:
        """Location as ``path:line:column``, ``path``, or None."""
        if self.path is not None and self.span is not None:
            return f"{self.path}:{self.span.line}:{self.span.column}"
        if self.path is not None:
            return self.path
        if self.span is not None:
            return f"line {self.span.line}, column {self.span.column}"
        return None

    def format_error(self) -> str:
        """Format diagnostic like a compiler.

        Example output:
            error[MISMATCHED_TAG]: Expected '</string>' but found '</strng>'
              --> res/values-fr/strings.xml:4:27
               |
               |     <string name="hello">Salut</strng>
               |                               ^
              = help: Close every element with the tag that opened it

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
