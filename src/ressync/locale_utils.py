"""Locale utilities for Android resource qualifiers.

Resource directories name their locale with an Android qualifier
(``values-fr``, ``values-pt-rBR``, ``values-b+sr+Latn``). This module
validates those qualifiers and converts them to the POSIX identifiers Babel
understands, so the tool can name the locale it is working on.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "locale_display_name",
    "qualifier_to_locale_code",
    "validate_qualifier",
]

logger = logging.getLogger(__name__)

# values-fr, values-pt-rBR
_LEGACY_QUALIFIER_RE = re.compile(r"([a-z]{2,3})(?:-r([A-Z]{2}))?")
# values-b+sr+Latn, values-b+es+419
_BCP47_QUALIFIER_RE = re.compile(r"b\+([a-z]{2,3})((?:\+[A-Za-z0-9]{2,8})*)")

# Android still uses pre-ISO 639 revision codes for these languages
_LEGACY_LANGUAGE_CODES = {"in": "id", "iw": "he", "ji": "yi"}


def validate_qualifier(qualifier: str) -> None:
    """Validate a locale qualifier used as a directory suffix.

    Args:
        qualifier: Qualifier following ``values-`` (e.g. "fr", "pt-rBR")

    Raises:
        ValueError: If the qualifier is empty, could escape the res directory,
            or is not an Android locale qualifier

    Example:
        >>> validate_qualifier("pt-rBR")
        >>> validate_qualifier("../values")
        Traceback (most recent call last):
        ...
        ValueError: Path traversal sequences not allowed in locale: '../values'
    """
    if not qualifier:
        msg = "Locale code cannot be empty"
        raise ValueError(msg)
    if ".." in qualifier:
        msg = f"Path traversal sequences not allowed in locale: '{qualifier}'"
        raise ValueError(msg)
    if "/" in qualifier or "\\" in qualifier:
        msg = f"Path separators not allowed in locale: '{qualifier}'"
        raise ValueError(msg)
    if not (
        _LEGACY_QUALIFIER_RE.fullmatch(qualifier) or _BCP47_QUALIFIER_RE.fullmatch(qualifier)
    ):
        msg = f"Not an Android locale qualifier: '{qualifier}'"
        raise ValueError(msg)


def qualifier_to_locale_code(qualifier: str) -> str:
    """Convert an Android locale qualifier to a POSIX locale code for Babel.

    Args:
        qualifier: Qualifier following ``values-``

    Returns:
        POSIX-formatted locale code

    Raises:
        ValueError: If the qualifier is invalid

    Example:
        >>> qualifier_to_locale_code("pt-rBR")
        'pt_BR'
        >>> qualifier_to_locale_code("b+sr+Latn")
        'sr_Latn'
        >>> qualifier_to_locale_code("iw")
        'he'
    """
    validate_qualifier(qualifier)

    legacy = _LEGACY_QUALIFIER_RE.fullmatch(qualifier)
    if legacy is not None:
        language, region = legacy.groups()
        language = _LEGACY_LANGUAGE_CODES.get(language, language)
        return f"{language}_{region}" if region else language

    bcp47 = _BCP47_QUALIFIER_RE.fullmatch(qualifier)
    assert bcp47 is not None  # validate_qualifier accepted it
    language, rest = bcp47.groups()
    parts = [_LEGACY_LANGUAGE_CODES.get(language, language)]
    for subtag in rest.split("+")[1:]:
        if len(subtag) == 4 and subtag.isalpha():
            parts.append(subtag.title())
        elif (len(subtag) == 2 and subtag.isalpha()) or (len(subtag) == 3 and subtag.isdigit()):
            parts.append(subtag.upper())
        # Variants (5-8 characters) have no place in a Babel identifier
    return "_".join(parts)


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: POSIX locale code (e.g. "pt_BR")

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(locale_code)


def locale_display_name(qualifier: str) -> str | None:
    """English display name of the locale a qualifier names.

    Args:
        qualifier: Validated qualifier following ``values-``

    Returns:
        Display name such as "Portuguese (Brazil)", or None if Babel has no
        data for the locale

    Example:
        >>> locale_display_name("fr-rCA")
        'French (Canada)'
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    locale_code = qualifier_to_locale_code(qualifier)
    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Unknown locale '%s' (%s): %s", qualifier, locale_code, e)
        return None
    return locale.get_display_name("en")
