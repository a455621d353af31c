"""resbridge - Android string resources to iOS strings, stringsdict and CSV.

Imports Android ``res/values*`` XML, existing ``*.lproj`` trees and CSV
reports into one in-memory locale store, then exports ``*.lproj`` trees,
CSV reports for translators and a type-safe ``R.swift`` accessor. Lookups
fall back along the locale hierarchy (``zh-Hant_HK`` -> ``zh-Hant`` ->
``zh`` -> ``Base``).

Public API:
    ConversionConfig - Immutable description of one conversion run
    ImportSource, ExportTarget - Ordered import passes and export targets
    LocaleNameMap - Android locale -> target locale override table
    run - Execute a conversion and return a RunSummary
    LocaleStore, KeyRegistry - In-memory model for programmatic use
    LocaleResolver, ValueNormalizer - Fallback lookups and per-format values

Exceptions:
    ResBridgeError - Base exception class
    ConfigError - Invalid or incomplete configuration
    SourceNotFoundError - Declared import path missing
    ResourceFormatError - Unparseable input file
    UnresolvedReferenceError - Missing or cyclic @string/ reference

Submodules:
    resbridge.formats - Format adapters (android, apple, report, swift)
    resbridge.validation - Advisory checks (CLDR plural coverage)
    resbridge.diagnostics - Error types, codes and validation results
"""

from .config import ConversionConfig, ExportTarget, ImportSource, LocaleNameMap
from .diagnostics import (
    ConfigError,
    ResBridgeError,
    ResourceFormatError,
    SourceNotFoundError,
    UnresolvedReferenceError,
)
from .enums import ResourceKind, SourceFormat, TargetFormat
from .model import KeyRegistry, LocaleBundle, LocaleStore
from .orchestrator import RunSummary, run
from .runtime import LocaleResolver, ValueNormalizer

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("resbridge")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigError",
    "ConversionConfig",
    "ExportTarget",
    "ImportSource",
    "KeyRegistry",
    "LocaleBundle",
    "LocaleNameMap",
    "LocaleResolver",
    "LocaleStore",
    "ResBridgeError",
    "ResourceFormatError",
    "ResourceKind",
    "RunSummary",
    "SourceFormat",
    "SourceNotFoundError",
    "TargetFormat",
    "UnresolvedReferenceError",
    "ValueNormalizer",
    "__version__",
    "run",
]
