"""Value normalization between resource formats.

Pure functions rewrite format specifiers, parse string references and
apply per-format escaping. ValueNormalizer layers the per-format
post-processing on top of a shared reference-resolution pass that walks
``@string/<key>`` chains through the LocaleResolver.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass

from resbridge.constants import STRING_REFERENCE_PREFIX
from resbridge.diagnostics import Diagnostic, DiagnosticCode, UnresolvedReferenceError
from resbridge.enums import ResourceKind
from resbridge.model.types import LocaleCode, ResourceKey
from resbridge.runtime.resolver import LocaleResolver

__all__ = [
    "ANDROID_SPECIFIER_RULES",
    "PLURAL_SPECIFIER_RULES",
    "RewriteRule",
    "ValueNormalizer",
    "apply_rules",
    "escape_report_field",
    "escape_strings_value",
    "import_android_text",
    "parse_reference",
    "strip_wrapping_quotes",
    "unescape_android_quotes",
]


@dataclass(frozen=True, slots=True)
class RewriteRule:
    """One format-specifier rewrite.

    Attributes:
        name: Short identifier for diagnostics and tests
        pattern: Compiled pattern matching the source specifier
        replacement: ``re.sub`` replacement template
    """

    name: str
    pattern: re.Pattern[str]
    replacement: str


# Android -> Apple, applied when importing XML sources. The optional
# positional prefix (%N$) is captured and kept.
ANDROID_SPECIFIER_RULES: tuple[RewriteRule, ...] = (
    RewriteRule("string-object", re.compile(r"(%(?:\d+\$)?)s"), r"\1@"),
    RewriteRule("grouped-integer", re.compile(r"(%(?:\d+\$)?),d"), r"\1d"),
)

# Plural values come from any source, so grouped and positional integer
# specifiers are reduced to a bare %d unconditionally.
PLURAL_SPECIFIER_RULES: tuple[RewriteRule, ...] = (
    RewriteRule("plural-integer", re.compile(r"%(?:\d+\$)?,?d"), "%d"),
)

# Backslashes the strings scanner would otherwise read as an escape.
_STRINGS_BACKSLASH = re.compile(r'\\(?=["\\]|\Z)')


def apply_rules(value: str, rules: tuple[RewriteRule, ...]) -> str:
    """Apply rewrite rules in order.

    Example:
        >>> apply_rules("%s items, %,d total", ANDROID_SPECIFIER_RULES)
        '%@ items, %d total'
        >>> apply_rules("%1$s", ANDROID_SPECIFIER_RULES)
        '%1$@'
    """
    for rule in rules:
        value = rule.pattern.sub(rule.replacement, value)
    return value


def strip_wrapping_quotes(value: str) -> str:
    """Remove one pair of literal quotes wrapping the whole value.

    Example:
        >>> strip_wrapping_quotes('"  padded "')
        '  padded '
        >>> strip_wrapping_quotes('say "hi"')
        'say "hi"'
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def unescape_android_quotes(value: str) -> str:
    r"""Turn Android ``\"`` escapes into literal quotes."""
    return value.replace('\\"', '"')


def import_android_text(raw: str) -> str:
    r"""Normalize text read from an Android XML resource.

    Strips wrapping quotes, rewrites format specifiers, then unescapes
    quotes.

    Example:
        >>> import_android_text('"%1$s said \\"%,d\\""')
        '%1$@ said "%d"'
    """
    value = strip_wrapping_quotes(raw)
    value = apply_rules(value, ANDROID_SPECIFIER_RULES)
    return unescape_android_quotes(value)


def parse_reference(value: str) -> ResourceKey | None:
    """Return the target key if ``value`` is a ``@string/<key>`` reference.

    Example:
        >>> parse_reference("@string/app_name")
        'app_name'
        >>> parse_reference("Email: a@string/b") is None
        True
    """
    if value.startswith(STRING_REFERENCE_PREFIX):
        key = value.removeprefix(STRING_REFERENCE_PREFIX)
        if key and "\n" not in key:
            return key
    return None


def escape_strings_value(value: str) -> str:
    r"""Escape a value for a ``"key" = "value";`` line.

    A backslash is doubled only when it precedes a quote, another
    backslash or the end of the value; other sequences such as ``\n``
    pass through.

    Example:
        >>> escape_strings_value('say "hi"')
        'say \\"hi\\"'
        >>> escape_strings_value("C:\\")
        'C:\\\\'
        >>> escape_strings_value("line\\n")
        'line\\n'
    """
    value = _STRINGS_BACKSLASH.sub(r"\\\\", value)
    return value.replace('"', '\\"')


def escape_report_field(value: str) -> str:
    '''Quote a value as a tabular report field.

    Doubles embedded quotes and wraps the result in quotes.

    Example:
        >>> escape_report_field('say "hi"')
        '"say ""hi"""'
        >>> escape_report_field('"wrapped"')
        '"""wrapped"""'
        >>> escape_report_field("")
        '""'
    '''
    return '"' + value.replace('"', '""') + '"'


class ValueNormalizer:
    """Resolve references and apply per-format escaping.

    Stateless apart from the resolver it reads through; every method
    returns a new string.

    Example:
        >>> from resbridge.model import LocaleStore
        >>> store = LocaleStore()
        >>> base = store.ensure("Base")
        >>> base.strings.update({"app": "Demo", "title": "@string/app"})
        >>> normalizer = ValueNormalizer(LocaleResolver(store))
        >>> normalizer.resolve_references("fr", "@string/title")
        'Demo'
    """

    __slots__ = ("_resolver",)

    def __init__(self, resolver: LocaleResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> LocaleResolver:
        """The resolver used for reference lookups."""
        return self._resolver

    def resolve_references(self, locale: LocaleCode, value: str) -> str:
        """Follow ``@string/`` references until a literal value is reached.

        Each hop is a string lookup through the fallback chain of the
        originating ``locale``.

        Raises:
            UnresolvedReferenceError: If a referenced key is missing from the
                whole fallback chain, or the chain is cyclic
        """
        visited: list[ResourceKey] = []
        key = parse_reference(value)
        while key is not None:
            if key in visited:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.CYCLIC_REFERENCE,
                    message=f"Cyclic string reference '{STRING_REFERENCE_PREFIX}{key}'",
                    location=f"{locale}:{visited[0]}",
                    resolution_path=(*visited, key),
                    hint="Break the cycle by giving one of the keys a literal value",
                )
                raise UnresolvedReferenceError(
                    diagnostic, key=key, locale=locale, chain=tuple(visited)
                )
            visited.append(key)
            resolved = self._resolver.resolve(locale, ResourceKind.STRINGS, key)
            if resolved is None:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.UNRESOLVED_REFERENCE,
                    message=f"String reference '{STRING_REFERENCE_PREFIX}{key}' not found",
                    location=locale,
                    resolution_path=tuple(visited),
                    hint="Define the referenced key at least in the Base locale",
                )
                raise UnresolvedReferenceError(
                    diagnostic, key=key, locale=locale, chain=tuple(visited)
                )
            value = resolved
            key = parse_reference(value)
        return value

    def for_strings(self, locale: LocaleCode, value: str) -> str:
        """Normalize a value for a strings or list file."""
        return escape_strings_value(self.resolve_references(locale, value))

    def for_plural(self, locale: LocaleCode, value: str) -> str:
        """Normalize a value for a stringsdict ``<string>`` element."""
        value = self.resolve_references(locale, value)
        value = apply_rules(value, PLURAL_SPECIFIER_RULES)
        return html.escape(value, quote=False)

    def for_report(self, locale: LocaleCode, value: str | None) -> str:
        """Normalize a value (or a miss) as a quoted tabular field."""
        if value is None:
            return escape_report_field("")
        return escape_report_field(self.resolve_references(locale, value))

    def for_accessor(self, locale: LocaleCode, value: str) -> str:
        """Normalize a value for a one-line doc comment."""
        value = self.resolve_references(locale, value)
        return " ".join(value.splitlines())
