"""Resource syncer: merge missing base entries into locale files.

Operations:
    merge_file - Sync one base/locale file pair
    sync - Sync every file named by a SyncConfig, stopping at the first error

Each file pair goes through the same linear sequence:

    read base -> read locale -> parse both -> diff keys -> merge
    -> serialize to temp file -> os.replace over the locale file

The base file is only ever read. When nothing is missing the locale file is
not rewritten at all.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ressync.constants import BASE_VALUES_DIR
from ressync.diagnostics import ConfigError, ErrorTemplate
from ressync.enums import FileStatus
from ressync.files import atomic_write_text, read_resource
from ressync.locale_utils import locale_display_name
from ressync.merge import MergeOptions, merge_documents
from ressync.syntax import EntryKey, serialize

if TYPE_CHECKING:
    from pathlib import Path

    from ressync.config import SyncConfig

__all__ = ["FileSyncResult", "SyncSummary", "merge_file", "sync"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileSyncResult:
    """Outcome of syncing one file pair.

    Attributes:
        base_path: Base resource file
        locale_path: Locale resource file
        status: Whether the locale file was updated
        added: Keys appended to the locale file, in base order
        namespaces_added: Namespace prefixes declared on the locale root
    """

    base_path: Path
    locale_path: Path
    status: FileStatus
    added: tuple[EntryKey, ...] = ()
    namespaces_added: tuple[str, ...] = ()

    @property
    def is_updated(self) -> bool:
        """True if the locale file was rewritten."""
        return self.status == FileStatus.UPDATED


@dataclass(frozen=True, slots=True)
class SyncSummary:
    """Aggregate of one sync run.

    Attributes:
        locale: Locale qualifier that was synced
        results: Per-file results in command-line order
    """

    locale: str
    results: tuple[FileSyncResult, ...]

    @property
    def total_added(self) -> int:
        """Entries added (or, in a dry run, that would be added) across all files."""
        return sum(len(result.added) for result in self.results)

    @property
    def files_updated(self) -> int:
        """Number of locale files rewritten."""
        return sum(1 for result in self.results if result.is_updated)


def merge_file(
    base_path: Path,
    locale_path: Path,
    *,
    options: MergeOptions | None = None,
    source_label: str | None = None,
) -> FileSyncResult:
    """Append entries missing from the locale file and replace it atomically.

    Args:
        base_path: Authoritative resource file
        locale_path: Resource file to augment; must already exist
        options: Merge switches
        source_label: Base file name for the marker comment
            (default ``values/<base file name>``)

    Returns:
        FileSyncResult describing what was added

    Raises:
        ResourceNotFoundError: If either file is missing
        ResourceParseError: If either file is malformed
        ResourceIOError: If reading or replacing fails
    """
    options = options or MergeOptions()
    label = source_label or f"{BASE_VALUES_DIR}/{base_path.name}"

    _, base = read_resource(base_path, role="base")
    _, locale = read_resource(locale_path, role="locale")

    result = merge_documents(base, locale, options=options, source_label=label)
    added = tuple(entry.key for entry in result.added)

    if not result.changed:
        logger.info("%s: already in sync", locale_path)
        return FileSyncResult(base_path, locale_path, FileStatus.UNCHANGED)

    if options.dry_run:
        logger.info("%s: %d missing entries (dry run)", locale_path, len(added))
        for kind, name in added:
            logger.info("  + <%s name=\"%s\">", kind, name)
        return FileSyncResult(
            base_path, locale_path, FileStatus.DRY_RUN, added, result.namespaces_added
        )

    atomic_write_text(locale_path, serialize(result.document))
    logger.info("%s: added %d missing entries", locale_path, len(added))
    return FileSyncResult(
        base_path, locale_path, FileStatus.UPDATED, added, result.namespaces_added
    )


def sync(config: SyncConfig) -> SyncSummary:
    """Sync every configured resource file, stopping at the first failure.

    Args:
        config: Validated run configuration

    Returns:
        SyncSummary with one result per filename

    Raises:
        ConfigError: If the root is not a directory (checked before any file
            is opened)
        ResourceNotFoundError, ResourceParseError, ResourceIOError: From the
            first file that fails; later files are not touched
    """
    assert config.root is not None  # checked by SyncConfig
    if not config.root.is_dir():
        raise ConfigError(ErrorTemplate.root_not_directory(str(config.root)))

    display_name = locale_display_name(config.locale)
    if display_name:
        logger.info("Syncing locale %s (%s)", config.locale, display_name)
    else:
        logger.info("Syncing locale %s", config.locale)

    results = [
        merge_file(
            pair.base_path,
            pair.locale_path,
            options=config.options,
            source_label=pair.source_label,
        )
        for pair in config.pairs()
    ]
    return SyncSummary(locale=config.locale, results=tuple(results))
