"""Diagnostic system for resource sync errors.

Provides structured error diagnostics with codes, spans and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ConfigError,
    ResourceIOError,
    ResourceNotFoundError,
    ResourceParseError,
    SyncError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "OutputFormat",
    "ResourceIOError",
    "ResourceNotFoundError",
    "ResourceParseError",
    "SourceSpan",
    "SyncError",
]
