"""Shared constants for ressync.

Constants are grouped by domain:
- Directory layout: Fixed res/values[-<locale>] contract
- Output: Temp file naming and default layout of appended entries
- Input limits: Size and nesting bounds for the parser

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Directory layout
    "RES_DIR",
    "BASE_VALUES_DIR",
    "LOCALE_VALUES_PREFIX",
    # Output
    "TEMP_FILE_PREFIX",
    "TEMP_FILE_SUFFIX",
    "DEFAULT_INDENT",
    "DEFAULT_NEWLINE",
    "UNTRANSLATED_MARKER",
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_DEPTH",
]

# ============================================================================
# DIRECTORY LAYOUT
# ============================================================================

RES_DIR = "res"
BASE_VALUES_DIR = "values"
LOCALE_VALUES_PREFIX = "values-"

# ============================================================================
# OUTPUT
# ============================================================================

TEMP_FILE_PREFIX = "xmlOut"
TEMP_FILE_SUFFIX = ".tmp"

# Used only when the locale file has no entry to copy the layout from
DEFAULT_INDENT = "    "
DEFAULT_NEWLINE = "\n"

# Comment placed before a block of appended entries; {source} is the
# base file relative to res/, e.g. "values/strings.xml"
UNTRANSLATED_MARKER = " Untranslated: copied from {source} "

# ============================================================================
# INPUT LIMITS
# ============================================================================

# 10 million characters; Android string files are far smaller
MAX_SOURCE_SIZE = 10_000_000

# Element nesting inside one entry (<string><b><i>...</i></b></string>)
MAX_DEPTH = 100
