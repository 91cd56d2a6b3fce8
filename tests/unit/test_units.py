"""Tests for px/rem value formatting."""

from __future__ import annotations

import pytest

from themetokens.models import ExportOptions
from themetokens.units import (
    convert_px_to_rem,
    format_value,
    number_to_str,
    round_to_max_3_decimals,
    should_use_pixel_unit,
    should_use_rem,
)


def rem_options(**toggles: bool) -> ExportOptions:
    return ExportOptions(use_rem=True, rem_collections=toggles)


class TestRounding:
    """Test round_to_max_3_decimals and convert_px_to_rem."""

    def test_rounds_to_three_decimals(self):
        assert round_to_max_3_decimals(1.23456) == "1.235"

    def test_integral_results_are_ints(self):
        result = round_to_max_3_decimals(2.0)
        assert result == 2
        assert isinstance(result, int)

    def test_tiny_values_round_to_zero(self):
        assert round_to_max_3_decimals(0.0001) == 0
        assert round_to_max_3_decimals(0.9999) == 1

    def test_no_trailing_zeros(self):
        assert round_to_max_3_decimals(1.5) == "1.5"
        assert round_to_max_3_decimals(1.2) == "1.2"

    def test_negative_values(self):
        assert round_to_max_3_decimals(-2.5) == "-2.5"
        assert round_to_max_3_decimals(-0.0004) == 0

    @pytest.mark.parametrize(
        ("px", "expected"),
        [(16, "1rem"), (0, "0rem"), (8, "0.5rem"), (24, "1.5rem"), (14, "0.875rem")],
    )
    def test_px_to_rem(self, px, expected):
        assert convert_px_to_rem(px) == expected

    def test_number_to_str(self):
        assert number_to_str(8.0) == "8"
        assert number_to_str(1.5) == "1.5"
        assert number_to_str(24) == "24"


class TestPixelUnit:
    """Test should_use_pixel_unit."""

    def test_sizing_category(self):
        assert should_use_pixel_unit(["spacing", "large"], 24)
        assert should_use_pixel_unit(["Border", "Radius", "sm"], 4)

    def test_unrelated_path(self):
        assert not should_use_pixel_unit(["base", "unit"], 8)

    def test_zero_and_non_numbers(self):
        assert not should_use_pixel_unit(["spacing", "none"], 0)
        assert not should_use_pixel_unit(["spacing", "auto"], "auto")
        assert not should_use_pixel_unit(["spacing", "flag"], True)


class TestRem:
    """Test should_use_rem."""

    def test_disabled_globally(self):
        options = ExportOptions(use_rem=False, rem_collections={"font": True})
        assert not should_use_rem(["font", "size"], options)
        assert not should_use_rem(["font", "size"], None)

    def test_matching_toggle(self):
        assert should_use_rem(["font", "size", "large"], rem_options(font=True))
        assert should_use_rem(["spacing", "large"], rem_options(spacing=True))

    def test_font_toggle_covers_typography_and_heading(self):
        assert should_use_rem(["typography", "body"], rem_options(font=True))
        assert should_use_rem(["heading", "h1"], rem_options(font=True))

    def test_toggle_off_or_missing(self):
        assert not should_use_rem(["spacing", "large"], rem_options(font=True, spacing=False))
        assert not should_use_rem(["radius", "sm"], rem_options(font=True))


class TestFormatValue:
    """Test format_value."""

    def test_px(self):
        assert format_value(["spacing", "large"], 24) == "24px"
        assert format_value(["spacing", "large"], 24.0) == "24px"

    def test_rem_takes_precedence(self):
        assert format_value(["spacing", "large"], 24, rem_options(spacing=True)) == "1.5rem"

    def test_passthrough(self):
        assert format_value(["base", "unit"], 8) == 8
        assert format_value(["spacing", "auto"], "auto") == "auto"
        assert format_value(["spacing", "none"], 0) == 0

    def test_scope_only_counts_for_rem(self):
        options = rem_options(primitives=True)
        assert format_value(["size", "unit"], 8, options, scope=["primitives"]) == "0.5rem"
        assert format_value(["opacity"], 50, None, scope=["spacing"]) == 50
