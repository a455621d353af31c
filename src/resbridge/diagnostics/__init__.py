"""Diagnostic system for resbridge errors.

Provides structured error diagnostics with codes, locations and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigError,
    ResBridgeError,
    ResourceFormatError,
    SourceNotFoundError,
    UnresolvedReferenceError,
)
from .validation import ValidationResult, ValidationWarning

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "ResBridgeError",
    "ResourceFormatError",
    "SourceNotFoundError",
    "UnresolvedReferenceError",
    "ValidationResult",
    "ValidationWarning",
]
