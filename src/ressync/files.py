"""Resource file input and atomic output.

Reading maps filesystem failures onto the sync error taxonomy. Writing goes
through a temporary file created next to the target and swapped in with
``os.replace``, so a failed or interrupted write leaves the original file
as it was and no temporary file behind.

Python 3.13+.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from typing import TYPE_CHECKING

from ressync.constants import TEMP_FILE_PREFIX, TEMP_FILE_SUFFIX
from ressync.diagnostics import (
    ErrorTemplate,
    ResourceIOError,
    ResourceNotFoundError,
    ResourceParseError,
)
from ressync.syntax import ResourceDocument, parse

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["atomic_write_text", "read_resource", "read_source"]

logger = logging.getLogger(__name__)


def read_source(path: Path, *, role: str) -> str:
    """Read a resource file as UTF-8 text without newline translation.

    Args:
        path: File to read
        role: 'base' or 'locale', used in error messages

    Raises:
        ResourceNotFoundError: If the file does not exist
        ResourceIOError: If the file cannot be read
        ResourceParseError: If the file is not valid UTF-8
    """
    try:
        with path.open("rb") as handle:
            data = handle.read()
    except FileNotFoundError as e:
        raise ResourceNotFoundError(
            ErrorTemplate.file_not_found(str(path), role), path=str(path)
        ) from e
    except OSError as e:
        raise ResourceIOError(
            ErrorTemplate.read_failed(str(path), e.strerror or str(e)), path=str(path)
        ) from e

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ResourceParseError(
            ErrorTemplate.invalid_encoding(str(path), e.start, e.reason), path=str(path)
        ) from e


def read_resource(path: Path, *, role: str) -> tuple[str, ResourceDocument]:
    """Read and parse a resource file.

    Returns:
        (source text, parsed document)

    Raises:
        ResourceNotFoundError, ResourceIOError, ResourceParseError
    """
    source = read_source(path, role=role)
    document = parse(source, path=str(path))
    logger.debug("Parsed %s: %d entries", path, len(document.entries))
    return source, document


def atomic_write_text(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` atomically.

    The temporary file is created in the target's directory so the final
    rename stays on one filesystem. The target's permission bits are copied
    onto the temporary file before the swap.

    Raises:
        ResourceIOError: If creating, writing or renaming the temporary file
            fails. On this or any other exception the temporary file is
            removed before the exception propagates.
    """
    try:
        handle = tempfile.NamedTemporaryFile(  # noqa: SIM115 - closed below, kept on success
            "w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=TEMP_FILE_PREFIX,
            suffix=TEMP_FILE_SUFFIX,
            delete=False,
        )
    except OSError as e:
        raise ResourceIOError(
            ErrorTemplate.write_failed(str(path), e.strerror or str(e)), path=str(path)
        ) from e

    tmp_name = handle.name
    try:
        try:
            with handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            shutil.copymode(path, tmp_name)
        except OSError as e:
            raise ResourceIOError(
                ErrorTemplate.write_failed(str(path), e.strerror or str(e)), path=str(path)
            ) from e

        try:
            os.replace(tmp_name, path)
        except OSError as e:
            raise ResourceIOError(
                ErrorTemplate.replace_failed(str(path), e.strerror or str(e)), path=str(path)
            ) from e
    except BaseException:
        _discard(tmp_name)
        raise
    logger.debug("Replaced %s via %s", path, tmp_name)


def _discard(tmp_name: str) -> None:
    with contextlib.suppress(FileNotFoundError):
        os.unlink(tmp_name)
