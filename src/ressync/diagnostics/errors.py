"""Sync exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error output.
Every error is fatal for the run: the command line reports it and exits
non-zero.

Hierarchy:
    SyncError (base)
    ├─ ConfigError (missing or invalid configuration, raised before file I/O)
    ├─ ResourceNotFoundError (base or locale file absent)
    ├─ ResourceParseError (malformed resource document)
    └─ ResourceIOError (read/write/replace failure)

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class SyncError(Exception):
    """Base exception for all resource sync errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize SyncError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigError(SyncError):
    """Missing or invalid configuration.

    Examples:
    - ``--root`` or ``--locale`` not given
    - No resource filenames given
    - Locale qualifier containing path separators
    """


class _PathError(SyncError):
    """Error tied to a single resource file."""

    def __init__(self, message: str | Diagnostic, *, path: str = "") -> None:
        """Initialize the error.

        Args:
            message: Error message string OR Diagnostic object
            path: Filesystem path of the offending file
        """
        super().__init__(message)
        self.path = path


class ResourceNotFoundError(_PathError):
    """A base or locale resource file does not exist.

    The locale file is never created from scratch: it must exist before
    a sync.
    """


class ResourceParseError(_PathError):
    """Resource document is not well-formed.

    Attributes:
        line: 1-based line of the error (0 if unknown)
        column: 1-based column of the error (0 if unknown)
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        path: str = "",
        line: int = 0,
        column: int = 0,
    ) -> None:
        """Initialize ResourceParseError.

        Args:
            message: Error message string OR Diagnostic object
            path: Filesystem path of the malformed file
            line: 1-based line of the error
            column: 1-based column of the error
        """
        super().__init__(message, path=path)
        self.line = line
        self.column = column


class ResourceIOError(_PathError):
    """Reading, writing or replacing a resource file failed.

    The underlying OSError is chained as ``__cause__``.
    """
