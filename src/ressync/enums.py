"""Enumerations for ressync type-safe constants.

Uses StrEnum so members compare equal to the tag names found in source.

Python 3.13+.
"""

from enum import StrEnum


class EntryKind(StrEnum):
    """Android resource element holding user-visible text.

    StrEnum provides automatic string conversion: str(EntryKind.STRING) == "string"
    """

    STRING = "string"
    """Single string: <string name="app_name">Terminal</string>"""

    STRING_ARRAY = "string-array"
    """Ordered list of strings: <string-array name="fonts"><item>...</item></string-array>"""

    PLURALS = "plurals"
    """Quantity strings: <plurals name="files"><item quantity="one">...</item></plurals>"""


class FileStatus(StrEnum):
    """Outcome of syncing one resource file."""

    UPDATED = "updated"
    """Missing entries were appended and the locale file replaced."""

    UNCHANGED = "unchanged"
    """Locale file already had every key; nothing was written."""

    DRY_RUN = "dry_run"
    """Missing entries were found but, by request, nothing was written."""


__all__ = [
    "EntryKind",
    "FileStatus",
]
