"""Locale identifier utilities.

Covers the fallback hierarchy of locale identifiers, the mapping from
Android resource directory names to locale identifiers, and conversion to
the POSIX form Babel expects.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import TYPE_CHECKING

from resbridge.constants import ANDROID_VALUES_DIR, ANDROID_VALUES_PREFIX, BASE_LOCALE

if TYPE_CHECKING:
    from babel import Locale

    from resbridge.config import LocaleNameMap

__all__ = [
    "android_qualifier_locale",
    "fallback_chain",
    "get_babel_locale",
    "normalize_locale",
    "parent_locale",
]

logger = logging.getLogger(__name__)

# Segment separators of a locale identifier. "_" separates the region in
# Apple-style identifiers such as "zh-Hant_HK".
_SEGMENT_SEPARATORS = ("-", "_")

# values-<lang>[-r<REGION>] qualifiers, e.g. "en", "zh-rTW", "es-r419"
_LANGUAGE_QUALIFIER = re.compile(r"(?P<lang>[a-z]{2,3})(?:-r(?P<region>[A-Z]{2}|\d{3}))?")

# values-b+<bcp47 subtags joined by '+'>, e.g. "b+sr+Latn"
_BCP47_QUALIFIER = re.compile(r"b\+(?P<tags>[A-Za-z0-9]+(?:\+[A-Za-z0-9]+)*)")


def parent_locale(locale: str) -> str | None:
    """Return the next, more general identifier in the fallback hierarchy.

    Strips the last segment. An identifier with a single segment falls back
    to Base; Base itself has no parent.

    Example:
        >>> parent_locale("zh-Hant_HK")
        'zh-Hant'
        >>> parent_locale("zh")
        'Base'
        >>> parent_locale("Base") is None
        True
    """
    if locale == BASE_LOCALE:
        return None
    cut = max(locale.rfind(sep) for sep in _SEGMENT_SEPARATORS)
    if cut <= 0:
        return BASE_LOCALE
    return locale[:cut]


@functools.lru_cache(maxsize=128)
def fallback_chain(locale: str) -> tuple[str, ...]:
    """Return ``locale`` followed by every more general identifier, ending at Base.

    Example:
        >>> fallback_chain("zh-Hant_HK")
        ('zh-Hant_HK', 'zh-Hant', 'zh', 'Base')
    """
    chain = [locale]
    current = parent_locale(locale)
    while current is not None:
        chain.append(current)
        current = parent_locale(current)
    return tuple(chain)


def android_qualifier_locale(dir_name: str, locale_map: LocaleNameMap) -> str | None:
    """Map an Android ``values*`` directory name to a locale identifier.

    ``values`` is the Base locale. ``values-<lang>-r<REGION>`` collapses to
    ``<lang>-<REGION>`` and ``values-b+<tags>`` to the hyphen-joined tags;
    the result then goes through ``locale_map`` for explicit overrides.

    Args:
        dir_name: Directory base name (e.g. "values-zh-rTW")
        locale_map: Override table applied to the collapsed identifier

    Returns:
        Locale identifier, or None if the directory carries a non-locale
        qualifier (e.g. "values-night", "values-v21")

    Example:
        >>> from resbridge.config import LocaleNameMap
        >>> android_qualifier_locale("values-zh-rTW", LocaleNameMap())
        'zh-Hant'
        >>> android_qualifier_locale("values-pt-rBR", LocaleNameMap())
        'pt-BR'
    """
    if dir_name == ANDROID_VALUES_DIR:
        return BASE_LOCALE
    if not dir_name.startswith(ANDROID_VALUES_PREFIX):
        return None

    qualifier = dir_name.removeprefix(ANDROID_VALUES_PREFIX)
    if match := _LANGUAGE_QUALIFIER.fullmatch(qualifier):
        region = match.group("region")
        code = f"{match.group('lang')}-{region}" if region else match.group("lang")
    elif match := _BCP47_QUALIFIER.fullmatch(qualifier):
        code = match.group("tags").replace("+", "-")
    else:
        logger.debug("Skipping non-locale resource directory: %s", dir_name)
        return None
    return locale_map.map(code)


def normalize_locale(locale_code: str) -> str:
    """Convert a locale identifier to POSIX format for Babel.

    Example:
        >>> normalize_locale("zh-Hant_HK")
        'zh_Hant_HK'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))
