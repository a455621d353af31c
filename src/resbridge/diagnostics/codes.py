"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages shared by every
exception raised from resbridge.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (missing options, empty input)
        2000-2999: Source errors (missing paths, malformed files)
        3000-3999: Content integrity errors (unresolvable references)
        4000-4999: Validation warnings (recovered, never fatal)
    """

    # Configuration errors (1000-1999)
    NO_IMPORT_SOURCE = 1001
    NO_EXPORT_TARGET = 1002
    NO_LOCALE_DATA = 1003
    BASE_LOCALE_MISSING = 1004
    INVALID_LOCALE_MAPPING = 1005
    ACCESSOR_PATH_MISSING = 1006
    INVALID_COPY_BASE = 1007

    # Source errors (2000-2999)
    SOURCE_NOT_FOUND = 2001
    MALFORMED_XML = 2002
    MALFORMED_STRINGS = 2003
    MALFORMED_PLIST = 2004

    # Content integrity errors (3000-3999)
    UNRESOLVED_REFERENCE = 3001
    CYCLIC_REFERENCE = 3002

    # Validation warnings (4000-4999)
    PLURAL_CATEGORY_MISSING = 4001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        location: File, directory, or locale/key pair the error refers to
        severity: Error severity level
        resolution_path: Reference chain followed before the failure
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    location: str | None = None
    severity: Literal["error", "warning"] = "error"
    resolution_path: tuple[str, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in a compiler-like layout.

        Example output:
            error[UNRESOLVED_REFERENCE]: String reference '@string/app' not found
              --> zh-Hant_HK:title
              = path: title -> app
              = help: Define the referenced key at least in the Base locale

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.location:
            lines.append(f"  --> {self.location}")
        if self.resolution_path:
            lines.append(f"  = path: {' -> '.join(self.resolution_path)}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
