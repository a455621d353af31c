"""Type aliases for the resource model.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "ArrayValue",
    "LocaleCode",
    "PluralValue",
    "QuantityTag",
    "ResourceKey",
]

type LocaleCode = str
"""Locale identifier (e.g., 'Base', 'en', 'zh-Hant', 'zh-Hant_HK')."""

type ResourceKey = str
"""Key of a string, array or plural entry, unique within its kind."""

type QuantityTag = str
"""Plural quantity class ('zero', 'one', ..., 'other' or a custom tag)."""

type ArrayValue = list[str | None]
"""Ordered array texts; None marks an index not yet filled by an import."""

type PluralValue = dict[QuantityTag, str]
"""Quantity class -> text."""
