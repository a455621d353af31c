"""Apple ``*.lproj`` resource tree: writers and reader.

Each locale directory holds up to three files, each UTF-8 with a byte-order
mark and keys in registry order:

- ``Localizable.strings``: ``"key" = "value";`` lines
- ``LocalizableArray.strings``: ``"key" = ( "v1", "v2", );`` blocks
- ``Localizable.stringsdict``: plist of plural rule dictionaries

Keys with no value along a locale's fallback chain are skipped and counted.

Python 3.13+.
"""

from __future__ import annotations

import html
import logging
import plistlib
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from xml.parsers.expat import ExpatError

from resbridge.config import OutputFileNames
from resbridge.constants import LPROJ_SUFFIX, PLURAL_FORMAT_VARIABLE, UTF8_BOM
from resbridge.diagnostics import Diagnostic, DiagnosticCode, ResourceFormatError
from resbridge.enums import ResourceKind
from resbridge.formats.strings_syntax import parse_strings_entries
from resbridge.model.bundle import LocaleBundle, LocaleStore
from resbridge.model.registry import KeyRegistry
from resbridge.model.types import LocaleCode
from resbridge.runtime.normalizer import ValueNormalizer
from resbridge.runtime.plural_rules import order_quantities

__all__ = [
    "RenderedFile",
    "read_lproj_tree",
    "render_string_lists",
    "render_strings",
    "render_stringsdict",
    "write_lproj_tree",
]

logger = logging.getLogger(__name__)

_FORMAT_KEY = "NSStringLocalizedFormatKey"
_SPEC_TYPE_KEY = "NSStringFormatSpecTypeKey"
_VALUE_TYPE_KEY = "NSStringFormatValueTypeKey"
_PLURAL_RULE_TYPE = "NSStringPluralRuleType"
_FORMAT_VARIABLE = re.compile(r"%#@(?P<name>[^@]+)@")


@dataclass(frozen=True, slots=True)
class RenderedFile:
    """Rendered content of one output file.

    Attributes:
        text: File content without the byte-order mark
        missing: Keys skipped because no value resolved for the locale
    """

    text: str
    missing: tuple[str, ...] = ()


# ============================================================================
# WRITERS
# ============================================================================


def render_strings(
    locale: LocaleCode, registry: KeyRegistry, normalizer: ValueNormalizer
) -> RenderedFile:
    """Render the flat strings file of ``locale``."""
    resolver = normalizer.resolver
    lines: list[str] = []
    missing: list[str] = []
    for key in registry.keys(ResourceKind.STRINGS):
        value = resolver.resolve(locale, ResourceKind.STRINGS, key)
        if value is None:
            missing.append(key)
            continue
        lines.append(f'"{key}" = "{normalizer.for_strings(locale, value)}";\n')
    return RenderedFile("".join(lines), tuple(missing))


def render_string_lists(
    locale: LocaleCode, registry: KeyRegistry, normalizer: ValueNormalizer
) -> RenderedFile:
    """Render the ordered-list file of ``locale``."""
    resolver = normalizer.resolver
    chunks: list[str] = []
    missing: list[str] = []
    for key in registry.keys(ResourceKind.ARRAYS):
        items = resolver.resolve(locale, ResourceKind.ARRAYS, key)
        if items is None:
            missing.append(key)
            continue
        chunks.append(f'"{key}" = (\n')
        for item in items:
            chunks.append(f'    "{normalizer.for_strings(locale, item or "")}",\n')
        chunks.append(");\n\n")
    return RenderedFile("".join(chunks), tuple(missing))


def render_stringsdict(
    locale: LocaleCode, registry: KeyRegistry, normalizer: ValueNormalizer
) -> RenderedFile:
    """Render the plural dictionary of ``locale``."""
    resolver = normalizer.resolver
    chunks = ['<plist version="1.0">\n', "<dict>\n\n"]
    missing: list[str] = []
    for key in registry.keys(ResourceKind.PLURALS):
        forms = resolver.resolve(locale, ResourceKind.PLURALS, key)
        if forms is None:
            missing.append(key)
            continue
        chunks.append(f"<key>{html.escape(key, quote=False)}</key>\n")
        chunks.append("<dict>\n")
        chunks.append(f"    <key>{_FORMAT_KEY}</key>\n")
        chunks.append(f"    <string>%#@{PLURAL_FORMAT_VARIABLE}@</string>\n")
        chunks.append(f"    <key>{PLURAL_FORMAT_VARIABLE}</key>\n")
        chunks.append("    <dict>\n")
        chunks.append(f"        <key>{_SPEC_TYPE_KEY}</key>\n")
        chunks.append(f"        <string>{_PLURAL_RULE_TYPE}</string>\n")
        chunks.append(f"        <key>{_VALUE_TYPE_KEY}</key>\n")
        chunks.append("        <string>d</string>\n")
        for quantity in order_quantities(forms):
            value = normalizer.for_plural(locale, forms[quantity])
            chunks.append(f"        <key>{html.escape(quantity, quote=False)}</key>\n")
            chunks.append(f"        <string>{value}</string>\n")
        chunks.append("    </dict>\n")
        chunks.append("</dict>\n\n")
    chunks.append("</dict>\n")
    chunks.append("</plist>\n")
    return RenderedFile("".join(chunks), tuple(missing))


def _write_with_bom(path: Path, text: str) -> None:
    path.write_text(UTF8_BOM + text, encoding="utf-8", newline="")


def write_lproj_tree(
    out_dir: Path,
    locales: tuple[LocaleCode, ...],
    registry: KeyRegistry,
    normalizer: ValueNormalizer,
    file_names: OutputFileNames,
) -> tuple[tuple[str, ...], int]:
    """Write ``<locale>.lproj`` directories for every locale.

    A file is only written when its kind has at least one registered key.

    Args:
        out_dir: Directory receiving the lproj directories
        locales: Locales to export
        registry: Finalized key registry
        normalizer: Normalizer bound to the store's resolver
        file_names: Output file names

    Returns:
        Tuple of (written file paths, number of skipped missing keys)
    """
    renderers = (
        (ResourceKind.STRINGS, file_names.strings, render_strings),
        (ResourceKind.ARRAYS, file_names.arrays, render_string_lists),
        (ResourceKind.PLURALS, file_names.plurals, render_stringsdict),
    )
    written: list[str] = []
    missing_total = 0
    for locale in locales:
        locale_dir = out_dir / f"{locale}{LPROJ_SUFFIX}"
        locale_dir.mkdir(parents=True, exist_ok=True)
        for kind, file_name, render in renderers:
            if not registry.has_keys(kind):
                continue
            rendered = render(locale, registry, normalizer)
            if rendered.missing:
                logger.warning(
                    "%s: %d %s key(s) without value skipped: %s",
                    locale,
                    len(rendered.missing),
                    kind,
                    ", ".join(rendered.missing),
                )
                missing_total += len(rendered.missing)
            path = locale_dir / file_name
            _write_with_bom(path, rendered.text)
            logger.debug("Wrote %s", path)
            written.append(str(path))
    return tuple(written), missing_total


# ============================================================================
# READER
# ============================================================================


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8-sig")


def _parse_stringsdict(path: Path) -> dict[str, dict[str, str]]:
    """Extract plural rule dictionaries from a stringsdict file.

    Raises:
        ResourceFormatError: If the file is not a valid XML plist
    """
    data = path.read_bytes().removeprefix(UTF8_BOM.encode("utf-8"))
    try:
        document = plistlib.loads(data, fmt=plistlib.FMT_XML)
    except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.MALFORMED_PLIST,
            message=f"Invalid stringsdict: {e}",
            location=str(path),
        )
        raise ResourceFormatError(diagnostic, path=str(path)) from e

    plurals: dict[str, dict[str, str]] = {}
    if not isinstance(document, dict):
        return plurals
    for key, entry in document.items():
        if not isinstance(entry, dict):
            continue
        format_key = entry.get(_FORMAT_KEY, "")
        for match in _FORMAT_VARIABLE.finditer(str(format_key)):
            rule = entry.get(match.group("name"))
            if not isinstance(rule, dict) or rule.get(_SPEC_TYPE_KEY) != _PLURAL_RULE_TYPE:
                continue
            forms = {
                tag: text
                for tag, text in rule.items()
                if tag not in (_SPEC_TYPE_KEY, _VALUE_TYPE_KEY) and isinstance(text, str)
            }
            if forms:
                plurals[key] = forms
            break
        else:
            logger.debug("Skipping %s in %s: no plural rule variable", key, path)
    return plurals


def _iter_lproj_dirs(root: Path) -> Iterator[Path]:
    candidates = [root] if root.name.endswith(LPROJ_SUFFIX) else []
    candidates.extend(root.rglob(f"*{LPROJ_SUFFIX}"))
    for path in sorted(candidates):
        if path.is_dir():
            yield path


def read_lproj_tree(
    root: Path,
    store: LocaleStore,
    registry: KeyRegistry,
) -> tuple[LocaleCode, ...]:
    """Import every ``*.lproj`` directory found under ``root``.

    Entries of ``*.strings`` files become strings, or arrays when their value
    is a parenthesized list; ``*.stringsdict`` files supply plurals.

    Returns:
        Locales that received at least one entry

    Raises:
        ResourceFormatError: If a file cannot be parsed
    """
    imported: dict[LocaleCode, None] = {}
    for lproj_dir in _iter_lproj_dirs(root):
        locale = lproj_dir.name.removesuffix(LPROJ_SUFFIX)
        bundle = LocaleBundle()

        for strings_path in sorted(lproj_dir.glob("*.strings")):
            logger.debug("strings: %s", strings_path)
            entries = parse_strings_entries(_read_text(strings_path), str(strings_path))
            for entry in entries:
                if isinstance(entry.value, tuple):
                    items: list[str | None] = list(entry.value)
                    bundle.arrays[entry.key] = items
                else:
                    bundle.strings[entry.key] = entry.value

        for dict_path in sorted(lproj_dir.glob("*.stringsdict")):
            logger.debug("stringsdict: %s", dict_path)
            bundle.plurals.update(_parse_stringsdict(dict_path))

        if bundle.is_empty:
            continue
        store.merge(locale, bundle)
        registry.observe(bundle)
        imported[locale] = None

    logger.info("Imported %d iOS locale(s) from %s", len(imported), root)
    return tuple(imported)
