"""Validation results for recovered, non-fatal conditions.

Python 3.13+.
"""

from dataclasses import dataclass

__all__ = [
    "ValidationResult",
    "ValidationWarning",
]


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    """Structured warning from a resource check.

    Attributes:
        code: Warning code (e.g., "plural-category-missing")
        message: Human-readable warning message
        context: Additional context (e.g., "ru:files_count")
    """

    code: str
    message: str
    context: str | None = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Immutable collection of validation warnings.

    Warnings never invalidate a run; they are reported and the conversion
    continues.

    Example:
        >>> ValidationResult(warnings=()).is_clean
        True
    """

    warnings: tuple[ValidationWarning, ...]

    @property
    def is_clean(self) -> bool:
        """Check whether no warnings were produced."""
        return len(self.warnings) == 0

    @property
    def warning_count(self) -> int:
        """Get number of warnings."""
        return len(self.warnings)
