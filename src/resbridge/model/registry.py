"""Key registry driving deterministic export order.

Collects the keys of every kind observed across all locale bundles during
import, then finalizes them into sorted tuples. Every writer and the
accessor surface iterate keys in that order, so identical inputs always
produce byte-identical output.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from resbridge.enums import ResourceKind
from resbridge.model.bundle import LocaleBundle
from resbridge.model.types import ResourceKey

__all__ = ["KeyRegistry"]


class KeyRegistry:
    """Per-kind key sets, mutable during import and read-only afterwards.

    Example:
        >>> registry = KeyRegistry()
        >>> registry.add(ResourceKind.STRINGS, "title")
        >>> registry.add(ResourceKind.STRINGS, "app_name")
        >>> registry.add(ResourceKind.STRINGS, "title")
        >>> registry.finalize()
        >>> registry.keys(ResourceKind.STRINGS)
        ('app_name', 'title')
    """

    __slots__ = ("_finalized", "_pending")

    def __init__(self) -> None:
        self._pending: dict[ResourceKind, set[ResourceKey]] = {kind: set() for kind in ResourceKind}
        self._finalized: dict[ResourceKind, tuple[ResourceKey, ...]] | None = None

    def __repr__(self) -> str:
        counts = ", ".join(f"{kind}={len(self._pending[kind])}" for kind in ResourceKind)
        return f"KeyRegistry({counts}, finalized={self.is_finalized})"

    @property
    def is_finalized(self) -> bool:
        """Check if the registry has been finalized."""
        return self._finalized is not None

    def add(self, kind: ResourceKind, key: ResourceKey) -> None:
        """Record that ``key`` exists for ``kind`` in at least one locale.

        Raises:
            RuntimeError: If the registry is already finalized
        """
        if self._finalized is not None:
            msg = f"KeyRegistry is finalized; cannot add {kind} key '{key}'"
            raise RuntimeError(msg)
        self._pending[kind].add(key)

    def observe(self, bundle: LocaleBundle) -> None:
        """Record every key present in ``bundle``."""
        for kind in ResourceKind:
            for key in bundle.entries(kind):
                self.add(kind, key)

    def finalize(self) -> None:
        """Freeze the key sets into lexically sorted tuples. Idempotent."""
        if self._finalized is None:
            self._finalized = {kind: tuple(sorted(keys)) for kind, keys in self._pending.items()}

    def keys(self, kind: ResourceKind) -> tuple[ResourceKey, ...]:
        """Return the sorted keys of ``kind``.

        Raises:
            RuntimeError: If called before ``finalize()``
        """
        if self._finalized is None:
            msg = "KeyRegistry must be finalized before keys are iterated"
            raise RuntimeError(msg)
        return self._finalized[kind]

    def has_keys(self, kind: ResourceKind) -> bool:
        """Check if at least one key of ``kind`` was observed."""
        if self._finalized is not None:
            return bool(self._finalized[kind])
        return bool(self._pending[kind])
