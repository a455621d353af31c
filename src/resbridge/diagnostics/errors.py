"""Exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object, which
is kept on the instance for callers that want the structured form.

Hierarchy:
    ResBridgeError
    ├─ ConfigError (fatal before any I/O)
    ├─ SourceNotFoundError (declared import path missing)
    ├─ ResourceFormatError (unparseable input file)
    └─ UnresolvedReferenceError (missing or cyclic string reference)

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ConfigError",
    "ResBridgeError",
    "ResourceFormatError",
    "SourceNotFoundError",
    "UnresolvedReferenceError",
]


class ResBridgeError(Exception):
    """Base exception for all resbridge errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ResBridgeError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigError(ResBridgeError):
    """Invalid or incomplete run configuration.

    Raised when no import source is given, no locale data was found, or an
    option cannot be honored (e.g. copying a Base bundle that does not exist).
    """


class SourceNotFoundError(ResBridgeError):
    """A declared import path does not exist.

    Attributes:
        path: The path that was not found
    """

    def __init__(self, message: str | Diagnostic, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ResourceFormatError(ResBridgeError):
    """An input file could not be parsed.

    Attributes:
        path: File that failed to parse
    """

    def __init__(self, message: str | Diagnostic, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class UnresolvedReferenceError(ResBridgeError):
    """A symbolic string reference cannot be resolved.

    Raised when a ``@string/<key>`` chain ends at a key missing from the whole
    fallback chain, or when the chain loops back onto itself. This is a
    content-integrity defect and aborts the run.

    Attributes:
        key: The key that could not be resolved
        locale: Locale the lookup started from
        chain: Keys visited before the failure, in order
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        key: str = "",
        locale: str = "",
        chain: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message)
        self.key = key
        self.locale = locale
        self.chain = chain
