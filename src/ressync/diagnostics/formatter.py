"""Diagnostic formatting service.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Compiler-style multi-line output (default)
    SIMPLE = "simple"  # Single-line format


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple)
        show_context: Include the source excerpt when the diagnostic has one

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        res/values-fr/strings.xml:4:27: MISMATCHED_TAG: Expected '</string>' ...
    """

    output_format: OutputFormat = OutputFormat.RUST
    show_context: bool = True

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        parts = [f"{diagnostic.severity}[{diagnostic.code.name}]: {diagnostic.message}"]

        location = diagnostic.location
        if location is not None:
            parts.append(f"  --> {location}")

        if self.show_context and diagnostic.context:
            parts.append("   |")
            parts.extend(f"   | {line}" for line in diagnostic.context.split("\n"))

        if diagnostic.hint:
            parts.append(f"  = help: {diagnostic.hint}")

        return "\n".join(parts)

    @staticmethod
    def _format_simple(diagnostic: Diagnostic) -> str:
        location = diagnostic.location
        prefix = f"{location}: " if location is not None else ""
        return f"{prefix}{diagnostic.code.name}: {diagnostic.message}"
