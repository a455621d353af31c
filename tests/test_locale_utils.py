"""Tests for locale identifier utilities.

Covers the fallback hierarchy and Android directory name mapping.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from resbridge.config import LocaleNameMap
from resbridge.locale_utils import (
    android_qualifier_locale,
    fallback_chain,
    normalize_locale,
    parent_locale,
)

_segment = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=4)


class TestParentLocale:
    """Test one step of the fallback hierarchy."""

    @pytest.mark.parametrize(
        ("locale", "expected"),
        [
            ("zh-Hant_HK", "zh-Hant"),
            ("zh-Hant", "zh"),
            ("pt-BR", "pt"),
            ("zh", "Base"),
            ("en", "Base"),
        ],
    )
    def test_strips_last_segment(self, locale: str, expected: str) -> None:
        """Last hyphen or underscore segment is removed."""
        assert parent_locale(locale) == expected

    def test_base_has_no_parent(self) -> None:
        """Base terminates the hierarchy."""
        assert parent_locale("Base") is None


class TestFallbackChain:
    """Test the full fallback chain."""

    def test_chain_for_region_variant(self) -> None:
        """zh-Hant_HK walks through script and language to Base."""
        assert fallback_chain("zh-Hant_HK") == ("zh-Hant_HK", "zh-Hant", "zh", "Base")

    def test_chain_for_base(self) -> None:
        """Base is its own single-element chain."""
        assert fallback_chain("Base") == ("Base",)

    @given(st.lists(_segment, min_size=1, max_size=4))
    def test_chain_always_ends_at_base(self, segments: list[str]) -> None:
        """Every chain starts at the locale and terminates at Base."""
        locale = "-".join(segments)
        chain = fallback_chain(locale)

        assert chain[0] == locale
        assert chain[-1] == "Base"
        assert len(chain) == len(segments) + 1


class TestAndroidQualifierLocale:
    """Test Android values directory mapping."""

    @pytest.mark.parametrize(
        ("dir_name", "expected"),
        [
            ("values", "Base"),
            ("values-fr", "fr"),
            ("values-pt-rBR", "pt-BR"),
            ("values-es-r419", "es-419"),
            ("values-zh-rTW", "zh-Hant"),
            ("values-zh-rHK", "zh-Hant_HK"),
            ("values-zh-rCN", "zh-Hans"),
            ("values-b+sr+Latn", "sr-Latn"),
        ],
    )
    def test_locale_directories(self, dir_name: str, expected: str) -> None:
        """Locale qualifiers collapse and pass through the override table."""
        assert android_qualifier_locale(dir_name, LocaleNameMap()) == expected

    @pytest.mark.parametrize(
        "dir_name", ["values-night", "values-v21", "values-sw600dp", "values-land", "drawable"]
    )
    def test_non_locale_directories_skipped(self, dir_name: str) -> None:
        """Non-locale qualifiers and other directories yield None."""
        assert android_qualifier_locale(dir_name, LocaleNameMap()) is None

    def test_override_changes_hong_kong_mapping(self) -> None:
        """zh-HK mapping is configurable."""
        names = LocaleNameMap().with_overrides({"zh-HK": "zh-Hant"})

        assert android_qualifier_locale("values-zh-rHK", names) == "zh-Hant"


def test_normalize_locale() -> None:
    """Hyphens become underscores for Babel."""
    assert normalize_locale("zh-Hant_HK") == "zh_Hant_HK"
