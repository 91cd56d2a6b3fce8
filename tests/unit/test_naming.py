"""Tests for token naming helpers."""

from __future__ import annotations

import pytest

from themetokens.naming import (
    camel_to_kebab,
    capitalize_first,
    css_var_path,
    css_var_ref,
    label,
    name_parts,
    slug,
)


class TestSlug:
    """Test slug derivation."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Body/Body MD", "body-md"),
            ("headingLarge", "heading-large"),
            ("Heading/H1", "heading-h1"),
            ("Heading 1", "heading-1"),
            ("  --Foo__Bar--  ", "foo-bar"),
            ("Display/2XL", "display-2xl"),
            ("text_xs", "text-xs"),
        ],
    )
    def test_slug(self, name, expected):
        assert slug(name) == expected

    def test_empty_name(self):
        assert slug("") == ""

    def test_only_adjacent_duplicates_are_dropped(self):
        assert slug("body/caption/body") == "body-caption-body"


class TestLabel:
    """Test display label derivation."""

    def test_title_cases_words(self):
        assert label("headingLarge") == "Heading Large"

    def test_size_tokens_upper_cased(self):
        assert label("text-xs") == "Text XS"
        assert label("Display/2XL") == "Display 2XL"
        assert label("body/md") == "Body MD"

    def test_duplicate_segment_collapsed(self):
        assert label("Body/Body MD") == "Body MD"


class TestCustomPropertyPath:
    """Test --wp--custom-- path building."""

    def test_basic_path(self):
        assert css_var_path(["color", "primary"]) == "--wp--custom--color--primary"

    def test_parts_lowercased(self):
        assert css_var_path(["Color", "Button", "Primary"]) == "--wp--custom--color--button--primary"

    def test_camel_case_parts_are_lowercased_first(self):
        assert css_var_path(["colorPalette", "brandAccent"]) == (
            "--wp--custom--colorpalette--brandaccent"
        )

    def test_empty_parts_yield_prefix(self):
        assert css_var_path([]) == "--wp--custom--"

    def test_reference(self):
        assert css_var_ref(["spacing", "large"]) == "var(--wp--custom--spacing--large)"


class TestSmallHelpers:
    """Test camel_to_kebab, capitalize_first and name_parts."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("camelCase", "camel-case"),
            ("anotherTestString", "another-test-string"),
            ("XMLHttpRequest", "xmlhttp-request"),
            ("HTMLParser", "htmlparser"),
            ("test123String", "test123-string"),
            ("test1A2B", "test1-a2-b"),
            ("UpperCase", "upper-case"),
            ("", ""),
        ],
    )
    def test_camel_to_kebab(self, value, expected):
        assert camel_to_kebab(value) == expected

    def test_capitalize_first(self):
        assert capitalize_first("secondary") == "Secondary"
        assert capitalize_first("ghost Button") == "Ghost Button"
        assert capitalize_first("") == ""

    def test_name_parts(self):
        assert name_parts("Button/Primary/Default") == ["button", "primary", "default"]
