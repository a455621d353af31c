"""Conversion run orchestration.

Sequences the import passes into a shared LocaleStore, finalizes the key
registry, then drives the requested exports through a resolver and
normalizer bound to the frozen store.

Phases:
    1. Check every declared import path exists (fatal before any I/O)
    2. Import sources in the order given; later sources win on conflicts
    3. Finalize the registry; synthesize the copy-of-Base locale
    4. Freeze the store; optionally check plural coverage
    5. Run exports in the order given

A fatal error aborts the run; files already written are left in place.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from resbridge.config import ConversionConfig, ExportTarget, ImportSource
from resbridge.constants import BASE_LOCALE
from resbridge.diagnostics import (
    ConfigError,
    Diagnostic,
    DiagnosticCode,
    SourceNotFoundError,
    ValidationResult,
)
from resbridge.enums import SourceFormat, TargetFormat
from resbridge.formats.android import read_android_resources
from resbridge.formats.apple import read_lproj_tree, write_lproj_tree
from resbridge.formats.report import read_report, write_report
from resbridge.formats.swift import build_accessor_surface, write_swift
from resbridge.model.bundle import LocaleStore
from resbridge.model.registry import KeyRegistry
from resbridge.model.types import LocaleCode
from resbridge.runtime.normalizer import ValueNormalizer
from resbridge.runtime.resolver import LocaleResolver
from resbridge.validation.plurals import check_plural_coverage

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Driver
    "Converter",
    "run",
    # Result types
    "ImportResult",
    "ExportResult",
    "RunSummary",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Outcome of one import pass.

    Attributes:
        source: The import that ran
        locales: Locales the source contributed to, in discovery order
    """

    source: ImportSource
    locales: tuple[LocaleCode, ...]


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Outcome of one export.

    Attributes:
        target: The export that ran
        files: Paths written
        missing: Keys skipped (tree export) or fields blanked (report) for
            lack of a value along the fallback chain
    """

    target: ExportTarget
    files: tuple[str, ...]
    missing: int = 0


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Immutable aggregate of a conversion run.

    Attributes:
        imports: Import results in execution order
        exports: Export results in execution order
        locales: Locales present in the store at export time
        plural_check: Plural coverage result (None when not requested)
    """

    imports: tuple[ImportResult, ...]
    exports: tuple[ExportResult, ...]
    locales: tuple[LocaleCode, ...]
    plural_check: ValidationResult | None = None

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"RunSummary(locales={len(self.locales)}, "
            f"imports={len(self.imports)}, "
            f"files={self.files_written}, "
            f"missing={self.total_missing})"
        )

    @property
    def files_written(self) -> int:
        """Total number of files written across all exports."""
        return sum(len(result.files) for result in self.exports)

    @property
    def total_missing(self) -> int:
        """Total number of missing keys recovered during export."""
        return sum(result.missing for result in self.exports)

    @property
    def has_plural_warnings(self) -> bool:
        """Check if the plural coverage check reported any gaps."""
        return self.plural_check is not None and not self.plural_check.is_clean


class Converter:
    """Single-use driver for one ConversionConfig.

    Owns the LocaleStore and KeyRegistry for the run. ``run()`` may be
    called once; afterwards ``store`` and ``registry`` stay available for
    inspection.

    Example:
        >>> config = ConversionConfig(
        ...     imports=(ImportSource(SourceFormat.ANDROID, "app/src/main/res"),),
        ...     exports=(ExportTarget(TargetFormat.CSV, "strings.csv"),),
        ... )
        >>> summary = Converter(config).run()
    """

    __slots__ = ("_config", "_registry", "_store")

    def __init__(self, config: ConversionConfig) -> None:
        self._config = config
        self._store = LocaleStore()
        self._registry = KeyRegistry()

    @property
    def config(self) -> ConversionConfig:
        """The configuration this converter runs."""
        return self._config

    @property
    def store(self) -> LocaleStore:
        """The locale store populated by the import passes."""
        return self._store

    @property
    def registry(self) -> KeyRegistry:
        """The key registry populated by the import passes."""
        return self._registry

    def run(self) -> RunSummary:
        """Execute all phases.

        Raises:
            RuntimeError: If the converter already ran
            ConfigError: If no locale data was imported, or Base is missing
                while a copy of it was requested
            SourceNotFoundError: If a declared import path does not exist
            ResourceFormatError: If an input file cannot be parsed
            UnresolvedReferenceError: If a string reference cannot be resolved
        """
        if self._registry.is_finalized:
            msg = "Converter.run() may only be called once"
            raise RuntimeError(msg)

        self._check_sources()
        imports = tuple(self._import(source) for source in self._config.imports)

        if not self._store:
            diagnostic = Diagnostic(
                code=DiagnosticCode.NO_LOCALE_DATA,
                message="No locale data found in any import source",
                hint="Check that the import paths point at resource roots",
            )
            raise ConfigError(diagnostic)

        self._registry.finalize()
        if self._config.copy_base is not None:
            self._copy_base(self._config.copy_base)
        self._store.freeze()

        resolver = LocaleResolver(self._store)
        normalizer = ValueNormalizer(resolver)

        plural_check = None
        if self._config.check_plurals:
            plural_check = check_plural_coverage(resolver, self._registry)
            for warning in plural_check.warnings:
                logger.warning("%s: %s", warning.context, warning.message)

        exports = tuple(self._export(target, normalizer) for target in self._config.exports)
        summary = RunSummary(
            imports=imports,
            exports=exports,
            locales=self._store.locales,
            plural_check=plural_check,
        )
        logger.info(
            "Converted %d locale(s); wrote %d file(s)", len(summary.locales), summary.files_written
        )
        return summary

    def _check_sources(self) -> None:
        for source in self._config.imports:
            if not Path(source.path).exists():
                diagnostic = Diagnostic(
                    code=DiagnosticCode.SOURCE_NOT_FOUND,
                    message=f"Import path does not exist: {source.path}",
                    location=source.path,
                )
                raise SourceNotFoundError(diagnostic, path=source.path)

    def _import(self, source: ImportSource) -> ImportResult:
        path = Path(source.path)
        logger.info("Importing %s resources from %s", source.format, path)
        match source.format:
            case SourceFormat.ANDROID:
                locales = read_android_resources(
                    path, self._store, self._registry, locale_map=self._config.locale_map
                )
            case SourceFormat.IOS:
                locales = read_lproj_tree(path, self._store, self._registry)
            case SourceFormat.CSV:
                locales = read_report(path, self._store, self._registry)
        return ImportResult(source=source, locales=locales)

    def _copy_base(self, locale: LocaleCode) -> None:
        if BASE_LOCALE not in self._store:
            diagnostic = Diagnostic(
                code=DiagnosticCode.BASE_LOCALE_MISSING,
                message=f"Cannot copy {BASE_LOCALE} to {locale}: no {BASE_LOCALE} resources",
                hint="Import a source that provides default resources",
            )
            raise ConfigError(diagnostic)
        self._store.copy_base_to(locale, BASE_LOCALE)

    def _export(self, target: ExportTarget, normalizer: ValueNormalizer) -> ExportResult:
        path = Path(target.path)
        names = self._config.file_names
        logger.info("Exporting %s resources to %s", target.format, path)
        match target.format:
            case TargetFormat.IOS:
                files, missing = write_lproj_tree(
                    path, tuple(sorted(self._store.locales)), self._registry, normalizer, names
                )
                return ExportResult(target=target, files=files, missing=missing)
            case TargetFormat.CSV:
                missing = write_report(path, self._store, self._registry, normalizer)
                return ExportResult(target=target, files=(str(path),), missing=missing)
            case TargetFormat.SWIFT:
                surface = build_accessor_surface(self._registry, normalizer)
                written = write_swift(path, surface, names.accessor, names.arrays)
                return ExportResult(target=target, files=(str(written),))


def run(config: ConversionConfig) -> RunSummary:
    """Run one conversion described by ``config``."""
    return Converter(config).run()
