"""Plural quantity-class ordering and CLDR category lookup.

Canonical output order is zero, one, two, few, many, other; any custom
tags follow in lexical order. Required categories per locale come from
Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

from collections.abc import Iterable

from babel.core import UnknownLocaleError

from resbridge.constants import BASE_LOCALE, CANONICAL_QUANTITIES
from resbridge.locale_utils import get_babel_locale
from resbridge.model.types import QuantityTag

__all__ = ["order_quantities", "required_quantities"]


def order_quantities(tags: Iterable[QuantityTag]) -> tuple[QuantityTag, ...]:
    """Order quantity tags canonically, dropping duplicates.

    Example:
        >>> order_quantities(["other", "one", "zero"])
        ('zero', 'one', 'other')
        >>> order_quantities(["other", "dual", "one", "a"])
        ('one', 'other', 'a', 'dual')
    """
    present = set(tags)
    canonical = [tag for tag in CANONICAL_QUANTITIES if tag in present]
    custom = sorted(present.difference(CANONICAL_QUANTITIES))
    return (*canonical, *custom)


def required_quantities(locale: str) -> frozenset[QuantityTag] | None:
    """Return the CLDR plural categories ``locale`` distinguishes.

    Args:
        locale: Locale identifier (e.g. "ru", "zh-Hant_HK")

    Returns:
        Category set always including "other", or None when the locale is
        Base or unknown to CLDR

    Example:
        >>> sorted(required_quantities("ru"))
        ['few', 'many', 'one', 'other']
        >>> sorted(required_quantities("ja"))
        ['other']
    """
    if locale == BASE_LOCALE:
        return None
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        return None
    return frozenset(locale_obj.plural_form.tags) | {"other"}
