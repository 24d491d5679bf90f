"""Command-line interface.

Usage:
    ressync --root PATH --locale CODE [options] FILENAME [FILENAME ...]

Example:
    ressync --root app/src/main --locale fr strings.xml arrays.xml

Exit Codes:
    0: Every file synced (or already in sync)
    1: Configuration, missing file, parse or I/O error
    2: Command-line usage error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from ressync import __version__
from ressync.config import SyncConfig
from ressync.diagnostics import DiagnosticFormatter, OutputFormat, SyncError
from ressync.enums import FileStatus
from ressync.syncer import sync

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["EXIT_ERROR", "EXIT_OK", "build_parser", "configure_logging", "main"]

EXIT_OK = 0
EXIT_ERROR = 1

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    ``--root`` and ``--locale`` are checked by SyncConfig rather than by
    argparse, so a missing value is reported as a configuration error.
    """
    parser = argparse.ArgumentParser(
        prog="ressync",
        description=(
            "Copy string resources that exist in res/values but not in "
            "res/values-<locale> into the locale file, keeping existing translations."
        ),
    )
    parser.add_argument("--root", default="", help="Root directory (contains 'res')")
    parser.add_argument(
        "--locale",
        default="",
        help="Locale to update, as in the directory name (fr, pt-rBR, b+sr+Latn)",
    )
    parser.add_argument(
        "filenames",
        nargs="*",
        metavar="FILENAME",
        help="Resource file present in both values directories (e.g. strings.xml)",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Report missing entries without writing"
    )
    parser.add_argument(
        "--no-marker",
        action="store_true",
        help="Do not put an 'Untranslated' comment before appended entries",
    )
    parser.add_argument(
        "--skip-untranslatable",
        action="store_true",
        help='Do not copy entries marked translatable="false"',
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Log every entry added"
    )
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Log only problems, one line each")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send ressync log records to stderr at the requested level."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(format="%(levelname)s: %(message)s", stream=sys.stderr)
    logging.getLogger("ressync").setLevel(level)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        config = SyncConfig.from_namespace(args)
        summary = sync(config)
    except SyncError as e:
        if args.quiet and e.diagnostic is not None:
            simple = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
            logger.error("%s", simple.format(e.diagnostic))
        else:
            logger.error("%s", e)
        return EXIT_ERROR

    if any(result.status == FileStatus.DRY_RUN for result in summary.results):
        logger.info("Dry run: %d entries missing, nothing written", summary.total_added)
    else:
        logger.info(
            "Done: %d entries added, %d of %d files updated",
            summary.total_added,
            summary.files_updated,
            len(summary.results),
        )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
