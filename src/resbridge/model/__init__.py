"""In-memory resource model: locale bundles, the locale store and key registry.

Submodules:
    types    - PEP 695 type aliases (LocaleCode, ResourceKey, QuantityTag, ...)
    bundle   - LocaleBundle, LocaleStore
    registry - KeyRegistry

Python 3.13+. Zero external dependencies.
"""

from resbridge.model.bundle import LocaleBundle, LocaleStore, array_length
from resbridge.model.registry import KeyRegistry
from resbridge.model.types import (
    ArrayValue,
    LocaleCode,
    PluralValue,
    QuantityTag,
    ResourceKey,
)

__all__ = [
    "ArrayValue",
    "KeyRegistry",
    "LocaleBundle",
    "LocaleCode",
    "LocaleStore",
    "PluralValue",
    "QuantityTag",
    "ResourceKey",
    "array_length",
]
