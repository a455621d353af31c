"""Command-line entry point.

Import and export options may be repeated and mixed; imports run in the
order they appear. ``--export-swift`` writes into the most recent
``--import-ios`` or ``--export-ios`` directory given before it.

Exit codes: 0 success, 1 conversion error, 2 usage error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from resbridge import __version__
from resbridge.config import ConversionConfig, ExportTarget, ImportSource, LocaleNameMap
from resbridge.diagnostics import ResBridgeError
from resbridge.enums import SourceFormat, TargetFormat
from resbridge.orchestrator import run

__all__ = ["build_config", "main", "parse_args"]

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _ImportAction(argparse.Action):
    """Append an ImportSource, keeping command-line order."""

    def __call__(self, parser, namespace, values, option_string=None):  # type: ignore[no-untyped-def]
        source = ImportSource(self.const, values)
        namespace.imports = [*namespace.imports, source]
        if self.const is SourceFormat.IOS:
            namespace.ios_path = values


class _ExportAction(argparse.Action):
    """Append an ExportTarget, keeping command-line order."""

    def __call__(self, parser, namespace, values, option_string=None):  # type: ignore[no-untyped-def]
        if self.const is TargetFormat.SWIFT:
            values = namespace.ios_path or ""
        target = ExportTarget(self.const, values)
        namespace.exports = [*namespace.exports, target]
        if self.const is TargetFormat.IOS:
            namespace.ios_path = values


def parse_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="resbridge",
        description="Convert Android string resources to iOS strings, stringsdict and CSV",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.set_defaults(imports=[], exports=[], ios_path=None)

    imports = parser.add_argument_group("import sources (run in the order given)")
    imports.add_argument(
        "--import-android",
        metavar="DIR",
        action=_ImportAction,
        const=SourceFormat.ANDROID,
        help="Import from an Android res directory",
    )
    imports.add_argument(
        "--import-ios",
        metavar="DIR",
        action=_ImportAction,
        const=SourceFormat.IOS,
        help="Import from an iOS resources directory (*.lproj)",
    )
    imports.add_argument(
        "--import-csv",
        metavar="FILE",
        action=_ImportAction,
        const=SourceFormat.CSV,
        help="Import from a CSV report",
    )

    exports = parser.add_argument_group("export targets")
    exports.add_argument(
        "--export-ios",
        metavar="DIR",
        action=_ExportAction,
        const=TargetFormat.IOS,
        help="Export to an iOS resources directory",
    )
    exports.add_argument(
        "--export-csv",
        metavar="FILE",
        action=_ExportAction,
        const=TargetFormat.CSV,
        help="Export to a CSV report",
    )
    exports.add_argument(
        "--export-swift",
        action=_ExportAction,
        nargs=0,
        const=TargetFormat.SWIFT,
        help="Generate R.swift; requires an earlier --import-ios or --export-ios",
    )

    parser.add_argument(
        "--copy-base",
        metavar="LOCALE",
        help="Copy Base resources to the specified locale",
    )
    parser.add_argument(
        "--locale-map",
        metavar="SRC=DST",
        action="append",
        default=[],
        help="Map an Android locale to a target locale (can be repeated, e.g. zh-HK=zh-Hant)",
    )
    parser.add_argument(
        "--check-plurals",
        action="store_true",
        help="Warn about CLDR plural categories missing per locale",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log per-file progress")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Log warnings only")

    return parser.parse_args(args)


def build_config(parsed: argparse.Namespace) -> ConversionConfig:
    """Build a ConversionConfig from parsed arguments.

    Raises:
        ConfigError: If the options do not describe a runnable conversion
    """
    overrides = dict(LocaleNameMap.parse_override(spec) for spec in parsed.locale_map)
    return ConversionConfig(
        imports=tuple(parsed.imports),
        exports=tuple(parsed.exports),
        copy_base=parsed.copy_base,
        locale_map=LocaleNameMap().with_overrides(overrides),
        check_plurals=parsed.check_plurals,
    )


def _configure_logging(parsed: argparse.Namespace) -> None:
    if parsed.verbose:
        level = logging.DEBUG
    elif parsed.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr, force=True)


def main(args: Sequence[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments (None uses sys.argv)

    Returns:
        Exit code: 0 success, 1 conversion error
    """
    parsed = parse_args(args)
    _configure_logging(parsed)

    try:
        summary = run(build_config(parsed))
    except ResBridgeError as error:
        print(f"Error! {error}", file=sys.stderr)
        return 1

    logger.debug("%r", summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
