"""Plural coverage check against CLDR categories.

Reports plural keys whose resolved quantity classes miss a category the
locale's CLDR rules distinguish (e.g. Russian "few" and "many"). Purely
advisory: the export still runs and the platform falls back to "other".

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

import logging

from resbridge.diagnostics import DiagnosticCode, ValidationResult, ValidationWarning
from resbridge.enums import ResourceKind
from resbridge.model.registry import KeyRegistry
from resbridge.runtime.plural_rules import order_quantities, required_quantities
from resbridge.runtime.resolver import LocaleResolver

__all__ = ["PLURAL_CATEGORY_MISSING", "check_plural_coverage"]

logger = logging.getLogger(__name__)

PLURAL_CATEGORY_MISSING = DiagnosticCode.PLURAL_CATEGORY_MISSING.name.lower().replace("_", "-")


def check_plural_coverage(resolver: LocaleResolver, registry: KeyRegistry) -> ValidationResult:
    """Check every (locale, plural key) pair for missing CLDR categories.

    Keys with no plural value anywhere on a locale's fallback chain are
    not reported here; export logs those as missing keys.

    Args:
        resolver: Resolver over the populated store
        registry: Finalized key registry

    Returns:
        ValidationResult with one warning per incomplete (locale, key) pair
    """
    warnings: list[ValidationWarning] = []
    for locale in resolver.store.locales:
        required = required_quantities(locale)
        if required is None:
            logger.debug("Skipping plural coverage for %s: no CLDR rules", locale)
            continue
        for key in registry.keys(ResourceKind.PLURALS):
            forms = resolver.resolve(locale, ResourceKind.PLURALS, key)
            if forms is None:
                continue
            missing = order_quantities(required.difference(forms))
            if missing:
                warnings.append(
                    ValidationWarning(
                        code=PLURAL_CATEGORY_MISSING,
                        message=f"Missing plural categories: {', '.join(missing)}",
                        context=f"{locale}:{key}",
                    )
                )
    return ValidationResult(warnings=tuple(warnings))
