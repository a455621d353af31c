"""Android resource reader.

Reads ``res/values*/*.xml`` trees into the LocaleStore. ``<string>``,
``<string-array>`` and ``<plurals>`` elements are supported; resources
marked ``translatable="false"`` are skipped.

Python 3.13+. Depends on lxml for XML parsing.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from resbridge.config import LocaleNameMap
from resbridge.diagnostics import Diagnostic, DiagnosticCode, ResourceFormatError
from resbridge.locale_utils import android_qualifier_locale
from resbridge.model.bundle import LocaleBundle, LocaleStore
from resbridge.model.registry import KeyRegistry
from resbridge.model.types import LocaleCode
from resbridge.runtime.normalizer import import_android_text

__all__ = ["parse_values_file", "read_android_resources"]

logger = logging.getLogger(__name__)


def _create_secure_parser() -> etree.XMLParser:
    """Return an XML parser configured to avoid external entity resolution."""
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        dtd_validation=False,
        load_dtd=False,
        remove_comments=True,
        remove_pis=True,
    )


def _is_translatable(element: etree._Element) -> bool:
    return element.get("translatable", "true").lower() != "false"


def _element_text(element: etree._Element) -> str | None:
    """Return the text of ``element``, unwrapping nested annotation wrappers.

    ``<string name="k"><xliff:g id="n">%s</xliff:g></string>`` yields "%s":
    while the element has child elements, descend into its last child.
    """
    while len(element):
        element = element[-1]
    return element.text


def parse_values_file(path: Path) -> LocaleBundle:
    """Parse one Android ``values`` XML file.

    Args:
        path: XML resource file

    Returns:
        Bundle with the file's translatable strings, arrays and plurals

    Raises:
        ResourceFormatError: If the file is not well-formed XML
    """
    try:
        tree = etree.parse(str(path), _create_secure_parser())
    except etree.XMLSyntaxError as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.MALFORMED_XML,
            message=f"XML parse error: {e}",
            location=str(path),
        )
        raise ResourceFormatError(diagnostic, path=str(path)) from e

    bundle = LocaleBundle()
    root = tree.getroot()
    if root.tag != "resources":
        logger.debug("Skipping %s: root element is <%s>", path, root.tag)
        return bundle

    for element in root.iterchildren("string", "string-array", "plurals"):
        key = element.get("name")
        if not key or not _is_translatable(element):
            continue

        match element.tag:
            case "string":
                text = _element_text(element)
                if not text:
                    continue
                logger.debug("string: %s", key)
                bundle.strings[key] = import_android_text(text)
            case "string-array":
                items: list[str | None] = [
                    import_android_text(_element_text(item) or "")
                    for item in element.iterchildren("item")
                ]
                if items:
                    logger.debug("string-array: %s", key)
                    bundle.arrays[key] = items
            case "plurals":
                forms = {
                    item.get("quantity", ""): import_android_text(_element_text(item) or "")
                    for item in element.iterchildren("item")
                }
                forms.pop("", None)
                if forms:
                    logger.debug("plurals: %s", key)
                    bundle.plurals[key] = forms

    return bundle


def read_android_resources(
    res_dir: Path,
    store: LocaleStore,
    registry: KeyRegistry,
    *,
    locale_map: LocaleNameMap,
) -> tuple[LocaleCode, ...]:
    """Import every ``values*`` directory under ``res_dir``.

    Files of the same locale are merged in file-name order; a later file
    overwrites entries of an earlier one with the same key.

    Args:
        res_dir: Android ``res`` directory
        store: Store the bundles are merged into
        registry: Registry recording every imported key
        locale_map: Qualifier locale overrides

    Returns:
        Locales that received at least one entry
    """
    imported: dict[LocaleCode, None] = {}
    for values_dir in sorted(p for p in res_dir.glob("values*") if p.is_dir()):
        locale = android_qualifier_locale(values_dir.name, locale_map)
        if locale is None:
            continue

        for xml_path in sorted(values_dir.glob("*.xml")):
            logger.debug("xml: %s", xml_path)
            bundle = parse_values_file(xml_path)
            if bundle.is_empty:
                continue
            store.merge(locale, bundle)
            registry.observe(bundle)
            imported[locale] = None

    logger.info("Imported %d Android locale(s) from %s", len(imported), res_dir)
    return tuple(imported)
