"""Locale fallback resolution over the LocaleStore.

A lookup starts at the requested locale and walks the fallback chain
(``zh-Hant_HK`` -> ``zh-Hant`` -> ``zh`` -> ``Base``) until a bundle holds
the key. The first match wins; values from different levels are never
combined.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import Literal, overload

from resbridge.enums import ResourceKind
from resbridge.locale_utils import fallback_chain
from resbridge.model.bundle import LocaleStore
from resbridge.model.types import ArrayValue, LocaleCode, PluralValue, ResourceKey

__all__ = ["LocaleResolver"]


class LocaleResolver:
    """Resolve keys through the locale fallback chain.

    Returns None for NotFound; callers decide whether a miss is fatal.

    Example:
        >>> store = LocaleStore()
        >>> store.ensure("Base").strings["ok"] = "OK"
        >>> store.ensure("zh-Hant").strings["ok"] = "確定"
        >>> resolver = LocaleResolver(store)
        >>> resolver.resolve("zh-Hant_HK", ResourceKind.STRINGS, "ok")
        '確定'
        >>> resolver.resolve("fr", ResourceKind.STRINGS, "ok")
        'OK'
    """

    __slots__ = ("_store",)

    def __init__(self, store: LocaleStore) -> None:
        self._store = store

    @property
    def store(self) -> LocaleStore:
        """The store this resolver reads from."""
        return self._store

    @overload
    def resolve(
        self, locale: LocaleCode, kind: Literal[ResourceKind.STRINGS], key: ResourceKey
    ) -> str | None: ...

    @overload
    def resolve(
        self, locale: LocaleCode, kind: Literal[ResourceKind.ARRAYS], key: ResourceKey
    ) -> ArrayValue | None: ...

    @overload
    def resolve(
        self, locale: LocaleCode, kind: Literal[ResourceKind.PLURALS], key: ResourceKey
    ) -> PluralValue | None: ...

    def resolve(self, locale: LocaleCode, kind: ResourceKind, key: ResourceKey) -> object | None:
        """Resolve ``key`` of ``kind`` starting at ``locale``.

        Args:
            locale: Locale the lookup starts from
            kind: Collection to search
            key: Resource key

        Returns:
            The first value found along the fallback chain, or None
        """
        found = self.resolve_with_origin(locale, kind, key)
        return None if found is None else found[1]

    def resolve_with_origin(
        self, locale: LocaleCode, kind: ResourceKind, key: ResourceKey
    ) -> tuple[LocaleCode, object] | None:
        """Like ``resolve`` but also report the locale that supplied the value."""
        for candidate in fallback_chain(locale):
            value = self._store.lookup(candidate, kind, key)
            if value is not None:
                return candidate, value
        return None
