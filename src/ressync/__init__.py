"""ressync - keep Android locale resource files in step with the base file.

Appends string resources that exist in ``res/values/<file>`` but not in
``res/values-<locale>/<file>`` to the locale file, leaving every existing
translation, comment and formatting byte untouched. The locale file is
replaced atomically.

Public API:
    SyncConfig - Validated run configuration (root, locale, filenames)
    sync - Sync every configured file, stopping at the first error
    merge_file - Sync one base/locale file pair
    merge_documents - Merge two parsed documents in memory
    parse_resources - Parse resource XML to a lossless document
    serialize_resources - Serialize a document back to XML

Exceptions:
    SyncError - Base exception class
    ConfigError - Missing or invalid configuration
    ResourceNotFoundError - Base or locale file does not exist
    ResourceParseError - Malformed resource file
    ResourceIOError - Read, write or replace failure

Submodules:
    ressync.syntax - Resource document model, parser and serializer
    ressync.diagnostics - Error codes, templates and formatting
    ressync.locale_utils - Android locale qualifiers and Babel lookup
    ressync.cli - Command-line entry point
"""

from .config import SyncConfig
from .diagnostics import (
    ConfigError,
    ResourceIOError,
    ResourceNotFoundError,
    ResourceParseError,
    SyncError,
)
from .merge import MergeOptions, MergeResult, merge_documents
from .syncer import FileSyncResult, SyncSummary, merge_file, sync
from .syntax import parse as parse_resources
from .syntax import serialize as serialize_resources

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("ressync")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigError",
    "FileSyncResult",
    "MergeOptions",
    "MergeResult",
    "ResourceIOError",
    "ResourceNotFoundError",
    "ResourceParseError",
    "SyncConfig",
    "SyncError",
    "SyncSummary",
    "__version__",
    "merge_documents",
    "merge_file",
    "parse_resources",
    "serialize_resources",
    "sync",
]
