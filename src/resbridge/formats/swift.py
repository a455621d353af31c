"""Type-safe accessor surface (``R.swift``).

The surface is data first: sorted key lists per kind plus the resolved Base
value of each string key. ``render_swift`` turns that data into a Swift
source file with one enum per non-empty kind.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePath

from resbridge.constants import ARRAYS_FILE_NAME, BASE_LOCALE
from resbridge.enums import ResourceKind
from resbridge.model.registry import KeyRegistry
from resbridge.model.types import ResourceKey
from resbridge.runtime.normalizer import ValueNormalizer

__all__ = [
    "AccessorSurface",
    "build_accessor_surface",
    "render_swift",
    "write_swift",
]

logger = logging.getLogger(__name__)

_HEADER = "// THIS FILE IS GENERATED BY TOOL, PLEASE DO NOT EDIT!\n\nimport Foundation\n\n"


@dataclass(frozen=True, slots=True)
class AccessorSurface:
    """Input of the accessor renderer.

    Attributes:
        strings: (key, Base value or None) pairs in registry order
        arrays: Array keys in registry order
        plurals: Plural keys in registry order
    """

    strings: tuple[tuple[ResourceKey, str | None], ...]
    arrays: tuple[ResourceKey, ...]
    plurals: tuple[ResourceKey, ...]


def build_accessor_surface(registry: KeyRegistry, normalizer: ValueNormalizer) -> AccessorSurface:
    """Collect accessor data from a finalized registry."""
    strings = []
    for key in registry.keys(ResourceKind.STRINGS):
        value = normalizer.resolver.resolve(BASE_LOCALE, ResourceKind.STRINGS, key)
        annotation = None if value is None else normalizer.for_accessor(BASE_LOCALE, value)
        strings.append((key, annotation))
    return AccessorSurface(
        strings=tuple(strings),
        arrays=registry.keys(ResourceKind.ARRAYS),
        plurals=registry.keys(ResourceKind.PLURALS),
    )


def render_swift(surface: AccessorSurface, arrays_file_name: str = ARRAYS_FILE_NAME) -> str:
    """Render the accessor source.

    Args:
        surface: Accessor data
        arrays_file_name: Name of the ordered-list file the array table loads
    """
    array_resource = PurePath(arrays_file_name)
    lines = [_HEADER, "struct R {\n\n"]

    if surface.strings:
        lines.append("    enum string : String {\n")
        for key, annotation in surface.strings:
            if annotation is not None:
                lines.append(f"        /// {annotation}\n")
            lines.append(f"        case {key}\n")
        lines.append("    }\n\n")

    if surface.arrays:
        lines.append("    enum array : String {\n")
        lines.extend(f"        case {key}\n" for key in surface.arrays)
        lines.append(
            "\n"
            "        subscript(index: Int) -> String {\n"
            "            return R.arrays[self.rawValue]![index]\n"
            "        }\n"
            "    }\n\n"
            "    fileprivate static var arrays: [String : [String]] = {\n"
            f'        let path = Bundle.main.path(forResource: "{array_resource.stem}", '
            f'ofType: "{array_resource.suffix.lstrip(".")}")!\n'
            "        let dict = NSDictionary(contentsOfFile: path)!\n"
            "        var map = [String : [String]]()\n"
            "        for (k, v) in dict {\n"
            "            let list = v as! [String]\n"
            "            map[k as! String] = list\n"
            "        }\n"
            "        return map\n"
            "    }()\n\n"
        )

    if surface.plurals:
        lines.append("    enum plurals : String {\n")
        lines.extend(f"        case {key}\n" for key in surface.plurals)
        lines.append(
            "\n"
            "        subscript(quantity: Int) -> String {\n"
            "            return String.localizedStringWithFormat("
            'NSLocalizedString(self.rawValue, comment: ""), quantity)\n'
            "        }\n"
            "    }\n\n"
        )

    lines.append("}\n\n")

    if surface.strings or surface.arrays:
        lines.append("postfix operator ^\n\n")
    if surface.strings:
        lines.append(
            "postfix func ^ (key: R.string) -> String {\n"
            '    return NSLocalizedString(key.rawValue, comment: "")\n'
            "}\n\n"
        )
    if surface.arrays:
        lines.append(
            "postfix func ^ (key: R.array) -> [String] {\n"
            "    return R.arrays[key.rawValue]!\n"
            "}\n\n"
        )
    return "".join(lines)


def write_swift(
    out_dir: Path, surface: AccessorSurface, file_name: str, arrays_file_name: str = ARRAYS_FILE_NAME
) -> Path:
    """Write the accessor source into ``out_dir`` (UTF-8, no byte-order mark)."""
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / file_name
    path.write_text(render_swift(surface, arrays_file_name), encoding="utf-8", newline="")
    logger.info("Wrote accessor %s", path)
    return path
