"""Tests for specifier rewrites, reference resolution and escaping."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from resbridge.diagnostics import DiagnosticCode, UnresolvedReferenceError
from resbridge.formats.strings_syntax import parse_strings_entries
from resbridge.model import LocaleStore
from resbridge.runtime import LocaleResolver, ValueNormalizer
from resbridge.runtime.normalizer import (
    ANDROID_SPECIFIER_RULES,
    PLURAL_SPECIFIER_RULES,
    apply_rules,
    escape_report_field,
    escape_strings_value,
    import_android_text,
    parse_reference,
    strip_wrapping_quotes,
)


def _normalizer(base: dict[str, str], **other: dict[str, str]) -> ValueNormalizer:
    store = LocaleStore()
    store.ensure("Base").strings.update(base)
    for locale, strings in other.items():
        store.ensure(locale).strings.update(strings)
    return ValueNormalizer(LocaleResolver(store))


class TestSpecifierRewrite:
    """Test the rewrite rule tables."""

    def test_object_and_grouped_integer(self) -> None:
        """%s becomes %@ and %,d becomes %d."""
        assert apply_rules("%s items, %,d total", ANDROID_SPECIFIER_RULES) == (
            "%@ items, %d total"
        )

    def test_positional_object(self) -> None:
        """Positional prefix is kept."""
        assert apply_rules("%1$s", ANDROID_SPECIFIER_RULES) == "%1$@"
        assert apply_rules("%2$,d of %1$s", ANDROID_SPECIFIER_RULES) == "%2$d of %1$@"

    def test_plain_text_untouched(self) -> None:
        """Text without specifiers passes through."""
        assert apply_rules("100% sure", ANDROID_SPECIFIER_RULES) == "100% sure"

    @pytest.mark.parametrize("source", ["%d", "%,d", "%1$d", "%2$,d"])
    def test_plural_integers_reduce_to_plain(self, source: str) -> None:
        """Plural values only carry a bare %d."""
        assert apply_rules(f"{source} files", PLURAL_SPECIFIER_RULES) == "%d files"


class TestAndroidImportText:
    """Test the combined Android text import."""

    def test_strips_wrapping_quotes_first(self) -> None:
        """Wrapping quotes go, embedded escaped quotes become literal."""
        assert import_android_text('"  %s says \\"hi\\" "') == '  %@ says "hi" '

    def test_strip_wrapping_quotes_only_whole_value(self) -> None:
        """Quotes inside the value are untouched."""
        assert strip_wrapping_quotes('say "hi"') == 'say "hi"'
        assert strip_wrapping_quotes('"') == '"'


class TestReferences:
    """Test @string/ reference resolution."""

    def test_parse_reference(self) -> None:
        """Only whole-value references count."""
        assert parse_reference("@string/app") == "app"
        assert parse_reference("@string/") is None
        assert parse_reference("mail me @string/app") is None

    def test_literal_passes_through(self) -> None:
        """Non-reference values are returned unchanged."""
        assert _normalizer({}).resolve_references("Base", "Hello") == "Hello"

    @pytest.mark.parametrize("depth", [1, 2, 3, 4, 5])
    def test_chain_terminates_at_literal(self, depth: int) -> None:
        """Chains of up to five hops reach the literal value."""
        base = {f"k{i}": f"@string/k{i + 1}" for i in range(depth)}
        base[f"k{depth}"] = "literal"

        assert _normalizer(base).resolve_references("Base", "@string/k0") == "literal"

    def test_each_hop_uses_fallback_chain(self) -> None:
        """References resolve through the originating locale's chain."""
        normalizer = _normalizer({"app": "Demo", "title": "@string/app"}, fr={"app": "Démo"})

        assert normalizer.resolve_references("fr-CA", "@string/title") == "Démo"
        assert normalizer.resolve_references("de", "@string/title") == "Demo"

    def test_self_reference_raises(self) -> None:
        """A key referring to itself is a cycle."""
        normalizer = _normalizer({"loop": "@string/loop"})

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            normalizer.resolve_references("Base", "@string/loop")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.CYCLIC_REFERENCE

    def test_two_step_cycle_raises(self) -> None:
        """Cycles longer than one hop are detected."""
        normalizer = _normalizer({"a": "@string/b", "b": "@string/a"})

        with pytest.raises(UnresolvedReferenceError):
            normalizer.resolve_references("Base", "@string/a")

    def test_missing_target_raises(self) -> None:
        """A target absent even at Base is fatal."""
        normalizer = _normalizer({"title": "@string/nowhere"})

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            normalizer.resolve_references("fr", "@string/title")
        error = exc_info.value
        assert error.key == "nowhere"
        assert error.locale == "fr"
        assert error.chain == ("title", "nowhere")
        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.UNRESOLVED_REFERENCE


class TestEscaping:
    """Test per-format escaping."""

    def test_strings_value_escapes_quotes(self) -> None:
        """Double quotes are backslash-escaped."""
        assert escape_strings_value('a "b"') == 'a \\"b\\"'

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("C:\\", "C:\\\\"),
            ('a\\"b', 'a\\\\\\"b'),
            ("a\\\\b", "a\\\\\\b"),
            ("line\\nnext", "line\\nnext"),
        ],
    )
    def test_strings_value_escapes_significant_backslashes(
        self, value: str, expected: str
    ) -> None:
        """Backslashes before a quote, a backslash or the end are doubled."""
        assert escape_strings_value(value) == expected

    @given(st.text(alphabet='ab"\\n', max_size=20))
    def test_strings_value_reads_back(self, value: str) -> None:
        """The strings scanner restores any escaped value."""
        source = f'"k" = "{escape_strings_value(value)}";'

        (entry,) = parse_strings_entries(source)

        assert entry.value == value

    def test_report_field(self) -> None:
        """Report fields double every quote and are wrapped."""
        assert escape_report_field('a "b"') == '"a ""b"""'
        assert escape_report_field('"wrapped"') == '"""wrapped"""'
        assert escape_report_field('""') == '""""""'

    def test_for_plural_escapes_markup(self) -> None:
        """Plural values are XML-escaped after specifier reduction."""
        normalizer = _normalizer({})

        assert normalizer.for_plural("Base", "<b>%,d</b> & more") == (
            "&lt;b&gt;%d&lt;/b&gt; &amp; more"
        )

    def test_for_report_missing_is_empty_field(self) -> None:
        """A miss renders as an empty quoted field."""
        assert _normalizer({}).for_report("fr", None) == '""'

    def test_for_accessor_joins_lines(self) -> None:
        """Doc comment annotations are single-line."""
        assert _normalizer({}).for_accessor("Base", "line one\nline two") == "line one line two"

    @given(st.text(alphabet=st.characters(exclude_characters="\\"), max_size=30))
    def test_strings_escape_leaves_no_bare_quote(self, value: str) -> None:
        """Every quote in the escaped value is preceded by a backslash."""
        escaped = escape_strings_value(value)

        assert escaped.count('\\"') == value.count('"')
        assert escaped.replace('\\"', "").count('"') == 0
