"""Tests for the tabular (CSV) report writer and reader."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from resbridge.enums import ResourceKind
from resbridge.formats.report import (
    ArrayKey,
    PlainKey,
    PluralKey,
    format_row_key,
    order_report_locales,
    parse_row_key,
    read_report,
    render_report,
    write_report,
)
from resbridge.model import KeyRegistry, LocaleStore
from resbridge.runtime import LocaleResolver, ValueNormalizer


def _finalize(store: LocaleStore) -> tuple[KeyRegistry, ValueNormalizer]:
    registry = KeyRegistry()
    for locale in store:
        registry.observe(store.bundle(locale))  # type: ignore[arg-type]
    registry.finalize()
    return registry, ValueNormalizer(LocaleResolver(store))


def _import(path) -> tuple[LocaleStore, KeyRegistry]:  # type: ignore[no-untyped-def]
    store = LocaleStore()
    registry = KeyRegistry()
    read_report(path, store, registry)
    registry.finalize()
    return store, registry


class TestRowKeys:
    """Test row-key classification."""

    @pytest.mark.parametrize(
        ("cell", "expected"),
        [
            ("planets.1", ArrayKey("planets", 0)),
            ("planets.12", ArrayKey("planets", 11)),
            ("files.one", PluralKey("files", "one")),
            ("files.few", PluralKey("files", "few")),
            ("app_name", PlainKey("app_name")),
            ("planets.0", PlainKey("planets.0")),
            ("version.2b", PlainKey("version.2b")),
            ("menu.File", PlainKey("menu.File")),
            (".5", PlainKey(".5")),
        ],
    )
    def test_parse_row_key(self, cell: str, expected: object) -> None:
        """Suffixes select the kind; anything else is a plain key."""
        assert parse_row_key(cell) == expected

    def test_format_row_key_is_one_based(self) -> None:
        """Array rows are written 1-based."""
        assert format_row_key(ArrayKey("planets", 0)) == "planets.1"
        assert format_row_key(PluralKey("files", "other")) == "files.other"
        assert format_row_key(PlainKey("ok")) == "ok"


class TestReportLocales:
    """Test column ordering."""

    def test_pinned_then_lexical(self) -> None:
        """Base and en lead, the rest is sorted."""
        assert order_report_locales(("zh-Hant", "fr", "en", "Base", "de")) == (
            "Base",
            "en",
            "de",
            "fr",
            "zh-Hant",
        )

    def test_pinned_only_when_present(self) -> None:
        """Absent pinned locales are not invented."""
        assert order_report_locales(("fr", "de")) == ("de", "fr")


class TestRenderReport:
    """Test the written layout."""

    def test_exact_layout(self) -> None:
        """Header, string, array and plural rows with trailing commas."""
        store = LocaleStore()
        base = store.ensure("Base")
        base.strings["app"] = 'The "App"'
        base.arrays["days"] = ["Mon"]
        base.plurals["files"] = {"other": "%d files", "one": "%d file"}
        store.ensure("fr").strings["app"] = "L'App"
        registry, normalizer = _finalize(store)

        text, blanks = render_report(store, registry, normalizer)

        assert text == (
            "ID,Base,fr,\n"
            'app,"The ""App""","L\'App",\n'
            'days.1,"Mon","Mon",\n'
            'files.one,"%d file","%d file",\n'
            'files.other,"%d files","%d files",\n'
        )
        assert blanks == 0

    def test_array_padding_to_longest(self) -> None:
        """Arrays of length 2 and 4 give 4 rows, the short one blank at 3-4."""
        store = LocaleStore()
        store.ensure("Base").arrays["planets"] = ["Mercury", "Venus", "Earth", "Mars"]
        store.ensure("fr").arrays["planets"] = ["Mercure", "Vénus"]
        registry, normalizer = _finalize(store)

        text, blanks = render_report(store, registry, normalizer)
        rows = text.splitlines()[1:]

        assert rows == [
            'planets.1,"Mercury","Mercure",',
            'planets.2,"Venus","Vénus",',
            'planets.3,"Earth","",',
            'planets.4,"Mars","",',
        ]
        assert blanks == 2

    def test_plural_canonical_order(self) -> None:
        """Tags {other, one, zero} are emitted zero, one, other."""
        store = LocaleStore()
        store.ensure("Base").plurals["n"] = {"other": "o", "one": "1", "zero": "0"}
        registry, normalizer = _finalize(store)

        text, _ = render_report(store, registry, normalizer)

        assert [row.split(",")[0] for row in text.splitlines()[1:]] == ["n.zero", "n.one", "n.other"]

    def test_plural_union_blanks_missing_tags(self) -> None:
        """Tags from any locale get a row; locales lacking them are blank."""
        store = LocaleStore()
        store.ensure("Base").plurals["n"] = {"one": "1", "other": "o"}
        store.ensure("ru").plurals["n"] = {"one": "1", "few": "f", "many": "m", "other": "o"}
        registry, normalizer = _finalize(store)

        text, blanks = render_report(store, registry, normalizer)

        assert 'n.few,"","f",' in text.splitlines()
        assert blanks == 2

    def test_references_resolved(self) -> None:
        """Fields carry resolved reference values."""
        store = LocaleStore()
        store.ensure("Base").strings.update({"app": "Demo", "title": "@string/app"})
        registry, normalizer = _finalize(store)

        text, _ = render_report(store, registry, normalizer)

        assert 'title,"Demo",' in text.splitlines()


class TestReadReport:
    """Test importing a report."""

    def test_reads_all_kinds(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        """Rows populate strings, sparse arrays and plurals."""
        path = tmp_path / "strings.csv"
        path.write_text(
            "\ufeffID,Base,fr,\n"
            'app,"Demo","Démo",\n'
            'days.2,"Tue","",\n'
            'files.one,"%d file","%d fichier",\n',
            encoding="utf-8",
        )

        store, registry = _import(path)

        assert store.locales == ("Base", "fr")
        assert store.lookup("fr", ResourceKind.STRINGS, "app") == "Démo"
        assert store.lookup("Base", ResourceKind.ARRAYS, "days") == [None, "Tue"]
        assert store.lookup("fr", ResourceKind.ARRAYS, "days") is None
        assert store.lookup("fr", ResourceKind.PLURALS, "files") == {"one": "%d fichier"}
        assert registry.keys(ResourceKind.ARRAYS) == ("days",)

    def test_header_without_trailing_comma(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        """Reports saved by spreadsheet tools may drop the trailing cell."""
        path = tmp_path / "strings.csv"
        path.write_text('ID,Base\nok,"OK"\n', encoding="utf-8")

        store, _ = _import(path)

        assert store.lookup("Base", ResourceKind.STRINGS, "ok") == "OK"

    def test_empty_file(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        """An empty report imports nothing."""
        path = tmp_path / "strings.csv"
        path.write_text("", encoding="utf-8")

        store, _ = _import(path)

        assert len(store) == 0


class TestRoundTrip:
    """Test export followed by import."""

    def test_write_then_read(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        """Registry and values survive a round trip."""
        store = LocaleStore()
        base = store.ensure("Base")
        base.strings.update({"app": "Demo", "quote": 'He said "no", twice'})
        base.arrays["planets"] = ["Mercury", "Venus", "Earth", "Mars"]
        base.plurals["files"] = {"one": "%d file", "other": "%d files"}
        fr = store.ensure("fr")
        fr.strings["app"] = "Démo\nlignes"
        fr.arrays["planets"] = ["Mercure", "Vénus"]
        fr.plurals["files"] = {"one": "%d fichier", "many": "%d fichiers", "other": "%d fichiers"}
        registry, normalizer = _finalize(store)
        path = tmp_path / "out" / "strings.csv"

        write_report(path, store, registry, normalizer)
        restored, restored_registry = _import(path)

        assert path.read_bytes().startswith(b"\xef\xbb\xbf")
        for kind in ResourceKind:
            assert restored_registry.keys(kind) == registry.keys(kind)
        for locale in store:
            bundle = store.bundle(locale)
            for kind in ResourceKind:
                for key, value in bundle.entries(kind).items():  # type: ignore[union-attr]
                    assert restored.lookup(locale, kind, key) == value

    @pytest.mark.parametrize("value", ['"Hello"', 'a ""b"" c', '""', '"', 'C:\\'])
    def test_quoted_values_survive(self, tmp_path, value: str) -> None:  # type: ignore[no-untyped-def]
        """Quotes wrapping or doubled inside a value are kept."""
        store = LocaleStore()
        store.ensure("Base").strings["greeting"] = value
        registry, normalizer = _finalize(store)
        path = tmp_path / "strings.csv"

        write_report(path, store, registry, normalizer)
        restored, _ = _import(path)

        assert restored.lookup("Base", ResourceKind.STRINGS, "greeting") == value


_KEYS = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=8)
_VALUES = st.text(
    alphabet=st.characters(
        exclude_categories=("Cs", "Cc"), exclude_characters="@"
    ),
    min_size=1,
    max_size=12,
)
_QUANTITIES = st.sampled_from(["zero", "one", "two", "few", "many", "other"])


@st.composite
def _stores(draw: st.DrawFn) -> LocaleStore:
    store = LocaleStore()
    locales = draw(st.lists(st.sampled_from(["en", "fr", "de", "zh-Hant"]), unique=True))
    for locale in ("Base", *locales):
        bundle = store.ensure(locale)
        bundle.strings.update(draw(st.dictionaries(_KEYS, _VALUES, max_size=4)))
        bundle.arrays.update(
            draw(st.dictionaries(_KEYS, st.lists(_VALUES, min_size=1, max_size=4), max_size=2))
        )
        bundle.plurals.update(
            draw(
                st.dictionaries(
                    _KEYS, st.dictionaries(_QUANTITIES, _VALUES, min_size=1), max_size=2
                )
            )
        )
    return store


@given(store=_stores())
def test_round_trip_property(tmp_path_factory, store: LocaleStore) -> None:  # type: ignore[no-untyped-def]
    """Any store without references or blank values survives a round trip."""
    registry, normalizer = _finalize(store)
    path = tmp_path_factory.mktemp("report") / "strings.csv"

    write_report(path, store, registry, normalizer)
    restored, restored_registry = _import(path)

    for kind in ResourceKind:
        assert restored_registry.keys(kind) == registry.keys(kind)
    for locale in store:
        bundle = store.bundle(locale)
        for kind in ResourceKind:
            for key, value in bundle.entries(kind).items():  # type: ignore[union-attr]
                assert restored.lookup(locale, kind, key) == value
