"""Lookup and value normalization over a populated locale store.

Submodules:
    resolver     - LocaleResolver (fallback-chain lookups)
    normalizer   - specifier rewrites, reference resolution, escaping
    plural_rules - quantity ordering and CLDR categories

Python 3.13+.
"""

from resbridge.runtime.normalizer import ValueNormalizer
from resbridge.runtime.plural_rules import order_quantities, required_quantities
from resbridge.runtime.resolver import LocaleResolver

__all__ = [
    "LocaleResolver",
    "ValueNormalizer",
    "order_quantities",
    "required_quantities",
]
