"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here so exception constructors never
    build their own strings.
    """

    @staticmethod
    def root_not_set() -> Diagnostic:
        """The ``--root`` option was not given."""
        return Diagnostic(
            code=DiagnosticCode.ROOT_NOT_SET,
            message="Must define --root",
            hint="Pass the directory that contains the 'res' directory",
        )

    @staticmethod
    def locale_not_set() -> Diagnostic:
        """The ``--locale`` option was not given."""
        return Diagnostic(
            code=DiagnosticCode.LOCALE_NOT_SET,
            message="Must define --locale",
            hint="Pass the qualifier of the res/values-<locale> directory, e.g. 'fr' or 'pt-rBR'",
        )

    @staticmethod
    def no_filenames() -> Diagnostic:
        """No resource filenames were given."""
        return Diagnostic(
            code=DiagnosticCode.NO_FILENAMES,
            message="No resource files to sync",
            hint="List one or more file names, e.g. strings.xml",
        )

    @staticmethod
    def root_not_directory(root: str) -> Diagnostic:
        """The root path is missing or not a directory.

        Args:
            root: The configured root path
        """
        return Diagnostic(
            code=DiagnosticCode.ROOT_NOT_DIRECTORY,
            message=f"Root '{root}' is not a directory",
            path=root,
        )

    @staticmethod
    def locale_invalid(locale: str, reason: str) -> Diagnostic:
        """The locale qualifier cannot name a resource directory.

        Args:
            locale: The rejected qualifier
            reason: Why it was rejected
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALE_INVALID,
            message=f"Invalid locale '{locale}': {reason}",
            hint="Use an Android resource qualifier such as 'de', 'zh-rTW' or 'b+sr+Latn'",
        )

    @staticmethod
    def filename_invalid(filename: str, reason: str) -> Diagnostic:
        """A resource filename would escape its values directory.

        Args:
            filename: The rejected filename
            reason: Why it was rejected
        """
        return Diagnostic(
            code=DiagnosticCode.FILENAME_INVALID,
            message=f"Invalid resource file name {filename!r}: {reason}",
        )

    @staticmethod
    def file_not_found(path: str, role: str) -> Diagnostic:
        """A base or locale resource file does not exist.

        Args:
            path: Path of the missing file
            role: 'base' or 'locale'
        """
        hint = (
            "Create the locale file first; it is augmented, never created"
            if role == "locale"
            else None
        )
        return Diagnostic(
            code=DiagnosticCode.FILE_NOT_FOUND,
            message=f"{role.capitalize()} resource file not found",
            path=path,
            hint=hint,
        )

    @staticmethod
    def read_failed(path: str, reason: str) -> Diagnostic:
        """Reading a resource file failed."""
        return Diagnostic(
            code=DiagnosticCode.READ_FAILED,
            message=f"Cannot read resource file: {reason}",
            path=path,
        )

    @staticmethod
    def write_failed(path: str, reason: str) -> Diagnostic:
        """Writing the temporary output file failed."""
        return Diagnostic(
            code=DiagnosticCode.WRITE_FAILED,
            message=f"Cannot write updated resource file: {reason}",
            path=path,
        )

    @staticmethod
    def replace_failed(path: str, reason: str) -> Diagnostic:
        """Swapping the temporary file into place failed."""
        return Diagnostic(
            code=DiagnosticCode.REPLACE_FAILED,
            message=f"Cannot replace resource file: {reason}",
            path=path,
            hint="The original file is unchanged",
        )

    @staticmethod
    def invalid_encoding(path: str, byte_offset: int, reason: str) -> Diagnostic:
        """Resource file is not valid UTF-8.

        Args:
            path: Path of the file
            byte_offset: Offset of the first undecodable byte
            reason: Decoder message
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_ENCODING,
            message=f"Invalid UTF-8 at byte {byte_offset}: {reason}",
            path=path,
            hint="Resource files must be saved as UTF-8",
        )

    @staticmethod
    def source_too_large(size: int, limit: int, *, path: str | None = None) -> Diagnostic:
        """Source exceeds the parser's size limit."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=f"Source size ({size:,} characters) exceeds maximum ({limit:,})",
            path=path,
        )

    @staticmethod
    def syntax_error(
        code: DiagnosticCode,
        message: str,
        *,
        span: SourceSpan,
        context: str,
        path: str | None = None,
        hint: str | None = None,
    ) -> Diagnostic:
        """Malformed resource document.

        Args:
            code: Syntax error code (3000-3999)
            message: What the parser expected or found
            span: Location of the error
            context: Source excerpt with a caret under the error position
            path: File being parsed, when known
            hint: Suggestion for fixing the error
        """
        return Diagnostic(
            code=code,
            message=message,
            span=span,
            path=path,
            hint=hint,
            context=context,
        )
