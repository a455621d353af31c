"""Advisory checks over a populated locale store.

Python 3.13+.
"""

from resbridge.validation.plurals import PLURAL_CATEGORY_MISSING, check_plural_coverage

__all__ = ["PLURAL_CATEGORY_MISSING", "check_plural_coverage"]
