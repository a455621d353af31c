"""Shared constants for resbridge.

Constants are grouped by domain:
- Locales: the root of every fallback chain and report column pinning
- Content markers: reference prefix and plural quantity vocabulary
- File layout: directory conventions and output file names

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locales
    "BASE_LOCALE",
    "PINNED_REPORT_LOCALES",
    "DEFAULT_LOCALE_OVERRIDES",
    # Content markers
    "STRING_REFERENCE_PREFIX",
    "CANONICAL_QUANTITIES",
    # File layout
    "UTF8_BOM",
    "ANDROID_VALUES_DIR",
    "ANDROID_VALUES_PREFIX",
    "LPROJ_SUFFIX",
    "STRINGS_FILE_NAME",
    "ARRAYS_FILE_NAME",
    "PLURALS_FILE_NAME",
    "ACCESSOR_FILE_NAME",
    "REPORT_ID_HEADER",
    "PLURAL_FORMAT_VARIABLE",
]

# ============================================================================
# LOCALES
# ============================================================================

# Development-language bundle. Every fallback chain ends here.
BASE_LOCALE: str = "Base"

# Report columns listed first (when present); all others follow lexically.
PINNED_REPORT_LOCALES: tuple[str, ...] = (BASE_LOCALE, "en")

# Android qualifier locale -> target locale identifier.
# zh-HK has been shipped both as "zh-Hant" and "zh-Hant_HK"; the latter is
# the default and LocaleNameMap lets callers pick the other.
DEFAULT_LOCALE_OVERRIDES: dict[str, str] = {
    "zh-TW": "zh-Hant",
    "zh-HK": "zh-Hant_HK",
    "zh-CN": "zh-Hans",
}

# ============================================================================
# CONTENT MARKERS
# ============================================================================

STRING_REFERENCE_PREFIX: str = "@string/"

# CLDR quantity classes in canonical output order. Custom tags follow these,
# sorted lexically.
CANONICAL_QUANTITIES: tuple[str, ...] = ("zero", "one", "two", "few", "many", "other")

# ============================================================================
# FILE LAYOUT
# ============================================================================

UTF8_BOM: str = "\ufeff"

ANDROID_VALUES_DIR: str = "values"
ANDROID_VALUES_PREFIX: str = "values-"

LPROJ_SUFFIX: str = ".lproj"
STRINGS_FILE_NAME: str = "Localizable.strings"
ARRAYS_FILE_NAME: str = "LocalizableArray.strings"
PLURALS_FILE_NAME: str = "Localizable.stringsdict"
ACCESSOR_FILE_NAME: str = "R.swift"

REPORT_ID_HEADER: str = "ID"

# Variable name used in NSStringLocalizedFormatKey ("%#@x@").
PLURAL_FORMAT_VARIABLE: str = "x"
