"""Tabular (CSV) report: writer and reader.

Layout::

    ID,Base,en,fr,
    app_name,"Demo","Demo","Démo",
    planets.1,"Mercury","Mercury","Mercure",
    files.one,"%d file","%d file","%d fichier",

The first column holds the row key. ``<key>.<N>`` rows are 1-based array
elements, ``<key>.<tag>`` rows are plural quantity classes, anything else
is a plain string key. Every value field is quoted; each row ends with a
trailing comma.

Python 3.13+.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from resbridge.constants import PINNED_REPORT_LOCALES, REPORT_ID_HEADER, UTF8_BOM
from resbridge.enums import ResourceKind
from resbridge.model.bundle import LocaleStore, array_length
from resbridge.model.registry import KeyRegistry
from resbridge.model.types import LocaleCode, QuantityTag, ResourceKey
from resbridge.runtime.normalizer import ValueNormalizer
from resbridge.runtime.plural_rules import order_quantities

__all__ = [
    "ArrayKey",
    "PlainKey",
    "PluralKey",
    "RowKey",
    "format_row_key",
    "order_report_locales",
    "parse_row_key",
    "read_report",
    "render_report",
    "write_report",
]

logger = logging.getLogger(__name__)

_ARRAY_ROW = re.compile(r"(?P<key>.+)\.(?P<index>\d+)")
_PLURAL_ROW = re.compile(r"(?P<key>.+)\.(?P<tag>[a-z]+)")
_NEEDS_QUOTING = frozenset(',"\r\n')


@dataclass(frozen=True, slots=True)
class PlainKey:
    """Row holding a plain string."""

    key: ResourceKey


@dataclass(frozen=True, slots=True)
class ArrayKey:
    """Row holding one array element.

    Attributes:
        key: Array key
        index: 0-based element index
    """

    key: ResourceKey
    index: int


@dataclass(frozen=True, slots=True)
class PluralKey:
    """Row holding one plural quantity class."""

    key: ResourceKey
    quantity: QuantityTag


type RowKey = PlainKey | ArrayKey | PluralKey


def parse_row_key(cell: str) -> RowKey:
    """Classify a row-key cell.

    Index suffixes are 1-based; ``.0`` is not a valid array index and the
    cell is taken as a plain string key, as is any cell matching neither
    suffix form.

    Example:
        >>> parse_row_key("planets.2")
        ArrayKey(key='planets', index=1)
        >>> parse_row_key("files.few")
        PluralKey(key='files', quantity='few')
        >>> parse_row_key("app_name")
        PlainKey(key='app_name')
    """
    if match := _ARRAY_ROW.fullmatch(cell):
        index = int(match.group("index"))
        if index >= 1:
            return ArrayKey(match.group("key"), index - 1)
    elif match := _PLURAL_ROW.fullmatch(cell):
        return PluralKey(match.group("key"), match.group("tag"))
    return PlainKey(cell)


def format_row_key(row_key: RowKey) -> str:
    """Render a row key as written in the first column."""
    match row_key:
        case ArrayKey(key=key, index=index):
            return f"{key}.{index + 1}"
        case PluralKey(key=key, quantity=quantity):
            return f"{key}.{quantity}"
        case PlainKey(key=key):
            return key


def order_report_locales(locales: tuple[LocaleCode, ...]) -> tuple[LocaleCode, ...]:
    """Order report columns: pinned locales first (if present), then lexical.

    Example:
        >>> order_report_locales(("fr", "en", "de", "Base"))
        ('Base', 'en', 'de', 'fr')
    """
    pinned = [locale for locale in PINNED_REPORT_LOCALES if locale in locales]
    rest = sorted(set(locales).difference(pinned))
    return (*pinned, *rest)


def _cell(text: str) -> str:
    if _NEEDS_QUOTING.isdisjoint(text):
        return text
    return '"' + text.replace('"', '""') + '"'


def _row(key_cell: str, fields: list[str]) -> str:
    return _cell(key_cell) + "," + "".join(f"{field}," for field in fields) + "\n"


def render_report(
    store: LocaleStore, registry: KeyRegistry, normalizer: ValueNormalizer
) -> tuple[str, int]:
    """Render the report.

    Returns:
        Tuple of (report text without byte-order mark, number of blank
        fields written for keys missing in a locale)
    """
    resolver = normalizer.resolver
    locales = order_report_locales(store.locales)
    rows = [REPORT_ID_HEADER + "," + "".join(f"{_cell(locale)}," for locale in locales) + "\n"]
    blanks = 0

    for key in registry.keys(ResourceKind.STRINGS):
        fields = []
        for locale in locales:
            value = resolver.resolve(locale, ResourceKind.STRINGS, key)
            blanks += value is None
            fields.append(normalizer.for_report(locale, value))
        rows.append(_row(key, fields))

    for key in registry.keys(ResourceKind.ARRAYS):
        arrays = [resolver.resolve(locale, ResourceKind.ARRAYS, key) for locale in locales]
        size = max((array_length(items) for items in arrays if items), default=0)
        for index in range(size):
            fields = []
            for locale, items in zip(locales, arrays, strict=True):
                value = items[index] if items and index < len(items) else None
                blanks += value is None
                fields.append(normalizer.for_report(locale, value))
            rows.append(_row(format_row_key(ArrayKey(key, index)), fields))

    for key in registry.keys(ResourceKind.PLURALS):
        plurals = [resolver.resolve(locale, ResourceKind.PLURALS, key) for locale in locales]
        quantities = order_quantities(tag for forms in plurals if forms for tag in forms)
        for quantity in quantities:
            fields = []
            for locale, forms in zip(locales, plurals, strict=True):
                value = forms.get(quantity) if forms else None
                blanks += value is None
                fields.append(normalizer.for_report(locale, value))
            rows.append(_row(format_row_key(PluralKey(key, quantity)), fields))

    return "".join(rows), blanks


def write_report(
    path: Path, store: LocaleStore, registry: KeyRegistry, normalizer: ValueNormalizer
) -> int:
    """Write the report to ``path`` (UTF-8 with byte-order mark).

    Returns:
        Number of blank fields written for missing keys
    """
    text, blanks = render_report(store, registry, normalizer)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(UTF8_BOM + text, encoding="utf-8", newline="")
    if blanks:
        logger.warning("%s: %d field(s) left blank for missing keys", path, blanks)
    logger.info("Wrote report %s", path)
    return blanks


def read_report(path: Path, store: LocaleStore, registry: KeyRegistry) -> tuple[LocaleCode, ...]:
    """Import a report into ``store``.

    Every header locale gets a bundle. Empty cells are skipped. Values merge
    element-wise: a row sets one string, one array index, or one plural
    quantity class, replacing only that slot.

    Returns:
        Locales named in the header row
    """
    with path.open(encoding="utf-8-sig", newline="") as handle:
        reader = csv.reader(handle)
        header = next(reader, None)
        if not header:
            logger.warning("Report %s is empty", path)
            return ()

        locales = header[1:]
        if locales and not locales[-1]:
            locales.pop()
        bundles = [store.ensure(locale) for locale in locales]

        for row in reader:
            if not row or not row[0]:
                continue
            row_key = parse_row_key(row[0])
            for bundle, value in zip(bundles, row[1:], strict=False):
                if not value:
                    continue
                match row_key:
                    case PlainKey(key=key):
                        bundle.strings[key] = value
                        registry.add(ResourceKind.STRINGS, key)
                    case ArrayKey(key=key, index=index):
                        bundle.set_array_item(key, index, value)
                        registry.add(ResourceKind.ARRAYS, key)
                    case PluralKey(key=key, quantity=quantity):
                        bundle.set_plural_item(key, quantity, value)
                        registry.add(ResourceKind.PLURALS, key)

    logger.info("Imported %d locale(s) from report %s", len(locales), path)
    return tuple(locales)
