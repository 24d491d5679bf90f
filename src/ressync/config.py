"""Run configuration.

A SyncConfig is built once at start-up (from the command line or in code)
and passed explicitly to :func:`ressync.syncer.sync`. Validation happens in
``__post_init__``, before any file is opened.

Python 3.13+.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from ressync.constants import BASE_VALUES_DIR, LOCALE_VALUES_PREFIX, RES_DIR
from ressync.diagnostics import ConfigError, ErrorTemplate
from ressync.locale_utils import validate_qualifier
from ressync.merge import MergeOptions

__all__ = ["ResourcePair", "SyncConfig"]


@dataclass(frozen=True, slots=True)
class ResourcePair:
    """Base and locale paths for one resource filename."""

    filename: str
    base_path: Path
    locale_path: Path

    @property
    def source_label(self) -> str:
        """Base file relative to ``res/``, e.g. ``values/strings.xml``."""
        return f"{BASE_VALUES_DIR}/{self.filename}"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Validated configuration for one sync run.

    Attributes:
        root: Directory containing the ``res`` directory (None when not given)
        locale: Android locale qualifier (``fr``, ``pt-rBR``, ``b+sr+Latn``)
        filenames: Resource file names present in both values directories
        options: Merge switches applied to every file

    Raises:
        ConfigError: From ``__post_init__`` when root or locale is missing,
            no filename is given, or a locale/filename could escape ``res/``

    Example:
        >>> config = SyncConfig(root=Path("app"), locale="fr", filenames=("strings.xml",))
        >>> config.pairs()[0].locale_path
        PosixPath('app/res/values-fr/strings.xml')
    """

    root: Path | None
    locale: str
    filenames: tuple[str, ...]
    options: MergeOptions = field(default_factory=MergeOptions)

    def __post_init__(self) -> None:
        """Validate configuration before any file I/O."""
        if self.root is None:
            raise ConfigError(ErrorTemplate.root_not_set())
        if not self.locale:
            raise ConfigError(ErrorTemplate.locale_not_set())
        try:
            validate_qualifier(self.locale)
        except ValueError as e:
            raise ConfigError(ErrorTemplate.locale_invalid(self.locale, str(e))) from e
        if not self.filenames:
            raise ConfigError(ErrorTemplate.no_filenames())
        for filename in self.filenames:
            self._validate_filename(filename)

    @staticmethod
    def _validate_filename(filename: str) -> None:
        """Reject filenames that are not a single path component."""
        if not filename or filename.strip() != filename:
            raise ConfigError(
                ErrorTemplate.filename_invalid(filename, "empty or surrounded by whitespace")
            )
        if PurePath(filename).name != filename or filename in (".", ".."):
            raise ConfigError(
                ErrorTemplate.filename_invalid(filename, "must be a plain file name")
            )

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> SyncConfig:
        """Build a config from parsed command-line arguments.

        Missing ``--root``/``--locale`` arrive as empty strings and are
        reported as ConfigError by ``__post_init__``.
        """
        options = MergeOptions(
            mark_untranslated=not args.no_marker,
            skip_untranslatable=args.skip_untranslatable,
            dry_run=args.dry_run,
        )
        return cls(
            root=Path(args.root) if args.root else None,
            locale=args.locale or "",
            filenames=tuple(args.filenames),
            options=options,
        )

    @property
    def base_dir(self) -> Path:
        """``<root>/res/values``"""
        assert self.root is not None  # checked in __post_init__
        return self.root / RES_DIR / BASE_VALUES_DIR

    @property
    def locale_dir(self) -> Path:
        """``<root>/res/values-<locale>``"""
        assert self.root is not None  # checked in __post_init__
        return self.root / RES_DIR / f"{LOCALE_VALUES_PREFIX}{self.locale}"

    def pairs(self) -> tuple[ResourcePair, ...]:
        """Base/locale path pairs, in command-line order."""
        return tuple(
            ResourcePair(
                filename=filename,
                base_path=self.base_dir / filename,
                locale_path=self.locale_dir / filename,
            )
            for filename in self.filenames
        )
