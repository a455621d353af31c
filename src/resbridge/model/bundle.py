"""Locale bundles and the locale store.

A LocaleBundle holds the three key-indexed collections of one locale. The
LocaleStore owns every bundle and is the single mutable accumulator that
import passes merge into; exports only read from it.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from resbridge.enums import ResourceKind
from resbridge.model.types import (
    ArrayValue,
    LocaleCode,
    PluralValue,
    QuantityTag,
    ResourceKey,
)

__all__ = ["LocaleBundle", "LocaleStore", "array_length"]

logger = logging.getLogger(__name__)


def array_length(items: ArrayValue) -> int:
    """Length of an array ignoring trailing unfilled indices.

    Sparse arrays appear while a tabular import fills indices one row at a
    time; holes do not count towards the length.
    """
    length = len(items)
    while length > 0 and items[length - 1] is None:
        length -= 1
    return length


@dataclass(slots=True)
class LocaleBundle:
    """Strings, arrays and plurals of a single locale.

    Attributes:
        strings: key -> text (a literal or an ``@string/<key>`` reference)
        arrays: key -> ordered texts, possibly sparse
        plurals: key -> quantity class -> text
    """

    strings: dict[ResourceKey, str] = field(default_factory=dict)
    arrays: dict[ResourceKey, ArrayValue] = field(default_factory=dict)
    plurals: dict[ResourceKey, PluralValue] = field(default_factory=dict)

    def entries(self, kind: ResourceKind) -> dict[ResourceKey, object]:
        """Return the collection holding entries of ``kind``."""
        match kind:
            case ResourceKind.STRINGS:
                return self.strings  # type: ignore[return-value]
            case ResourceKind.ARRAYS:
                return self.arrays  # type: ignore[return-value]
            case ResourceKind.PLURALS:
                return self.plurals  # type: ignore[return-value]

    @property
    def is_empty(self) -> bool:
        """Check if the bundle holds no entries of any kind."""
        return not (self.strings or self.arrays or self.plurals)

    def set_array_item(self, key: ResourceKey, index: int, value: str) -> None:
        """Store one array element, padding skipped indices with None.

        Args:
            key: Array key
            index: 0-based element index
            value: Element text
        """
        if index < 0:
            msg = f"Array index must be >= 0, got {index} for '{key}'"
            raise ValueError(msg)
        items = self.arrays.setdefault(key, [])
        if index >= len(items):
            items.extend([None] * (index + 1 - len(items)))
        items[index] = value

    def set_plural_item(self, key: ResourceKey, quantity: QuantityTag, value: str) -> None:
        """Store the text of one quantity class of a plural entry."""
        self.plurals.setdefault(key, {})[quantity] = value

    def merge(self, other: LocaleBundle) -> None:
        """Merge ``other`` into this bundle key-wise; ``other`` wins on conflict.

        Entries are replaced whole: an incoming array or plural set replaces
        the existing one for the same key rather than being combined with it.
        """
        self.strings.update(other.strings)
        self.arrays.update({key: list(items) for key, items in other.arrays.items()})
        self.plurals.update({key: dict(forms) for key, forms in other.plurals.items()})

    def copy(self) -> LocaleBundle:
        """Return a deep copy sharing no mutable state with this bundle."""
        return copy.deepcopy(self)


class LocaleStore:
    """Mapping from locale identifier to its LocaleBundle.

    Built incrementally by import passes, in the order the caller supplied
    them. Once export starts the store is frozen; the only mutation allowed
    between registry finalization and freezing is ``copy_base_to``.

    Example:
        >>> store = LocaleStore()
        >>> store.ensure("Base").strings["app_name"] = "Demo"
        >>> store.lookup("Base", ResourceKind.STRINGS, "app_name")
        'Demo'
    """

    __slots__ = ("_bundles", "_frozen")

    def __init__(self) -> None:
        self._bundles: dict[LocaleCode, LocaleBundle] = {}
        self._frozen = False

    def __contains__(self, locale: object) -> bool:
        return locale in self._bundles

    def __iter__(self) -> Iterator[LocaleCode]:
        return iter(self._bundles)

    def __len__(self) -> int:
        return len(self._bundles)

    def __repr__(self) -> str:
        return f"LocaleStore(locales={list(self._bundles)!r}, frozen={self._frozen})"

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locale identifiers in the order they were first imported."""
        return tuple(self._bundles)

    @property
    def is_frozen(self) -> bool:
        """Check if the store has entered the read-only export phase."""
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "LocaleStore is read-only once export has started"
            raise RuntimeError(msg)

    def bundle(self, locale: LocaleCode) -> LocaleBundle | None:
        """Get the bundle of ``locale``, or None if no import produced one."""
        return self._bundles.get(locale)

    def ensure(self, locale: LocaleCode) -> LocaleBundle:
        """Get the bundle of ``locale``, creating an empty one if missing."""
        self._check_mutable()
        bundle = self._bundles.get(locale)
        if bundle is None:
            bundle = LocaleBundle()
            self._bundles[locale] = bundle
            logger.debug("Created bundle for locale: %s", locale)
        return bundle

    def merge(self, locale: LocaleCode, bundle: LocaleBundle) -> None:
        """Merge ``bundle`` into the stored bundle of ``locale`` (last writer wins)."""
        self.ensure(locale).merge(bundle)

    def lookup(self, locale: LocaleCode, kind: ResourceKind, key: ResourceKey) -> object | None:
        """Look up ``key`` in exactly one locale, without fallback."""
        bundle = self._bundles.get(locale)
        if bundle is None:
            return None
        return bundle.entries(kind).get(key)

    def copy_base_to(self, locale: LocaleCode, base: LocaleCode) -> None:
        """Store a deep copy of the ``base`` bundle under ``locale``.

        Raises:
            KeyError: If no bundle exists for ``base``
        """
        self._check_mutable()
        self._bundles[locale] = self._bundles[base].copy()
        logger.info("Copied %s resources to locale %s", base, locale)

    def freeze(self) -> None:
        """Enter the read-only export phase."""
        self._frozen = True
