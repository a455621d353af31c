"""Enumerations for resbridge type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum

__all__ = [
    "ResourceKind",
    "SourceFormat",
    "TargetFormat",
]


class ResourceKind(StrEnum):
    """Kind of localized resource.

    Each kind owns a separate key namespace in every locale bundle.
    """

    STRINGS = "strings"
    """Plain key -> text entries."""

    ARRAYS = "arrays"
    """Key -> ordered list of texts."""

    PLURALS = "plurals"
    """Key -> quantity class -> text."""


class SourceFormat(StrEnum):
    """Representation an import reads from."""

    ANDROID = "android"
    """Android ``res/values*/*.xml`` tree."""

    IOS = "ios"
    """``*.lproj`` tree of strings, list and stringsdict files."""

    CSV = "csv"
    """Tabular report."""


class TargetFormat(StrEnum):
    """Representation an export writes to."""

    IOS = "ios"
    """``*.lproj`` tree of strings, list and stringsdict files."""

    CSV = "csv"
    """Tabular report."""

    SWIFT = "swift"
    """Type-safe accessor source (R.swift)."""
