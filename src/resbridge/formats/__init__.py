"""Resource format adapters.

Submodules:
    android        - Android ``res/values*`` XML reader
    apple          - ``*.lproj`` writers and reader
    strings_syntax - ``.strings`` tokenizer
    report         - tabular (CSV) report writer and reader
    swift          - ``R.swift`` accessor surface

Python 3.13+.
"""

from resbridge.formats.android import read_android_resources
from resbridge.formats.apple import read_lproj_tree, write_lproj_tree
from resbridge.formats.report import read_report, write_report
from resbridge.formats.swift import AccessorSurface, build_accessor_surface, write_swift

__all__ = [
    "AccessorSurface",
    "build_accessor_surface",
    "read_android_resources",
    "read_lproj_tree",
    "read_report",
    "write_lproj_tree",
    "write_report",
    "write_swift",
]
