"""Run configuration for resbridge conversions.

Provides the configurable locale-name mapping table and the frozen
ConversionConfig that the orchestrator executes.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from resbridge.constants import (
    ACCESSOR_FILE_NAME,
    ARRAYS_FILE_NAME,
    BASE_LOCALE,
    DEFAULT_LOCALE_OVERRIDES,
    PLURALS_FILE_NAME,
    STRINGS_FILE_NAME,
)
from resbridge.diagnostics import ConfigError, Diagnostic, DiagnosticCode
from resbridge.enums import SourceFormat, TargetFormat

__all__ = [
    "ConversionConfig",
    "ExportTarget",
    "ImportSource",
    "LocaleNameMap",
    "OutputFileNames",
]


@dataclass(frozen=True, slots=True)
class LocaleNameMap:
    """Override table from Android qualifier locales to target locale identifiers.

    Example:
        >>> names = LocaleNameMap()
        >>> names.map("zh-HK")
        'zh-Hant_HK'
        >>> names.with_overrides({"zh-HK": "zh-Hant"}).map("zh-HK")
        'zh-Hant'
        >>> names.map("fr")
        'fr'
    """

    overrides: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_LOCALE_OVERRIDES))
    )

    def map(self, code: str) -> str:
        """Return the target identifier for ``code`` (identity if not overridden)."""
        return self.overrides.get(code, code)

    def with_overrides(self, extra: Mapping[str, str]) -> LocaleNameMap:
        """Return a new map with ``extra`` entries taking precedence."""
        merged = dict(self.overrides)
        merged.update(extra)
        return LocaleNameMap(MappingProxyType(merged))

    @staticmethod
    def parse_override(spec: str) -> tuple[str, str]:
        """Parse a ``SRC=DST`` override specification.

        Raises:
            ConfigError: If the specification is not of the form SRC=DST
        """
        source, sep, target = spec.partition("=")
        source, target = source.strip(), target.strip()
        if not sep or not source or not target:
            diagnostic = Diagnostic(
                code=DiagnosticCode.INVALID_LOCALE_MAPPING,
                message=f"Invalid locale mapping '{spec}'",
                hint="Use SRC=DST, e.g. zh-HK=zh-Hant",
            )
            raise ConfigError(diagnostic)
        return source, target


@dataclass(frozen=True, slots=True)
class OutputFileNames:
    """File names written into each ``<locale>.lproj`` directory."""

    strings: str = STRINGS_FILE_NAME
    arrays: str = ARRAYS_FILE_NAME
    plurals: str = PLURALS_FILE_NAME
    accessor: str = ACCESSOR_FILE_NAME


@dataclass(frozen=True, slots=True)
class ImportSource:
    """One import pass: a format and the path it reads from."""

    format: SourceFormat
    path: str


@dataclass(frozen=True, slots=True)
class ExportTarget:
    """One export: a format and the path it writes to."""

    format: TargetFormat
    path: str


@dataclass(frozen=True, slots=True)
class ConversionConfig:
    """Immutable description of one conversion run.

    Imports run in the given order; later sources win on key conflicts.

    Attributes:
        imports: Ordered import passes
        exports: Export targets, executed in order after all imports
        copy_base: Locale to synthesize as a copy of Base (optional)
        locale_map: Android qualifier -> locale identifier overrides
        file_names: Output file names for the lproj tree and accessor
        check_plurals: Report CLDR plural categories missing per locale

    Raises:
        ConfigError: If no import source or no export target is given
    """

    imports: tuple[ImportSource, ...]
    exports: tuple[ExportTarget, ...]
    copy_base: str | None = None
    locale_map: LocaleNameMap = field(default_factory=LocaleNameMap)
    file_names: OutputFileNames = field(default_factory=OutputFileNames)
    check_plurals: bool = False

    def __post_init__(self) -> None:
        if not self.imports:
            diagnostic = Diagnostic(
                code=DiagnosticCode.NO_IMPORT_SOURCE,
                message="No import source given",
                hint="Use one of --import-android, --import-ios or --import-csv",
            )
            raise ConfigError(diagnostic)
        if not self.exports:
            diagnostic = Diagnostic(
                code=DiagnosticCode.NO_EXPORT_TARGET,
                message="No export target given",
                hint="Use one of --export-ios, --export-csv or --export-swift",
            )
            raise ConfigError(diagnostic)
        if self.copy_base == BASE_LOCALE:
            diagnostic = Diagnostic(
                code=DiagnosticCode.INVALID_COPY_BASE,
                message=f"Cannot copy {BASE_LOCALE} onto itself",
                hint="Name a locale other than Base for --copy-base",
            )
            raise ConfigError(diagnostic)

        for target in self.exports:
            if target.format is TargetFormat.SWIFT and not target.path:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.ACCESSOR_PATH_MISSING,
                    message="Accessor export needs an output directory",
                    hint="Give --import-ios or --export-ios before --export-swift",
                )
                raise ConfigError(diagnostic)
