"""
Unit tests for value normalization and text helpers.
"""
from decimal import Decimal

import pytest

from ffmpeg_composer.enums import CpuFlag, Preset, VideoSize
from ffmpeg_composer.values import (
    decimal_digits,
    escape,
    expand_all,
    expand_flags,
    normalize,
    quotes,
    to_hex_color,
    wrap,
    wrap_all,
)


class TestNormalizeNumbers:
    """Tests for float and Decimal canonicalization."""

    def test_whole_float_snaps_to_integer(self):
        """A float with no fractional part renders without a decimal point."""
        assert normalize(4.0) == "4"

    def test_float_within_epsilon_snaps_to_integer(self):
        """Fractions below the epsilon are treated as integers."""
        assert normalize(4.00000000001) == "4"

    def test_negative_whole_float(self):
        assert normalize(-2.0) == "-2"

    def test_long_fraction_is_fixed_to_three_places(self):
        """More than three fractional digits are rounded to three."""
        assert normalize(1.23456) == "1.235"

    def test_short_fraction_keeps_natural_text(self):
        assert normalize(1.2) == "1.2"
        assert normalize(0.125) == "0.125"

    def test_decimal_rounds_half_up_to_two_places(self):
        assert normalize(Decimal("1.005")) == "1.01"

    def test_decimal_is_padded_to_two_places(self):
        assert normalize(Decimal("2")) == "2.00"

    def test_int_renders_as_text(self):
        assert normalize(1280) == "1280"

    def test_decimal_digits(self):
        assert decimal_digits(3.0) == 0
        assert decimal_digits(1.25) == 2
        assert decimal_digits(1.23456) == 5


class TestNormalizeOtherKinds:
    """Tests for None, strings, booleans and enum members."""

    def test_none_stays_none(self):
        assert normalize(None) is None

    def test_string_passes_through(self):
        assert normalize("main_w-overlay_w") == "main_w-overlay_w"

    def test_booleans_render_as_words(self):
        assert normalize(True) == "true"
        assert normalize(False) == "false"

    def test_enum_renders_declared_alias(self):
        assert normalize(Preset.VERY_FAST) == "veryfast"

    def test_enum_without_alias_renders_lowercase_name(self):
        assert normalize(Preset.MEDIUM) == "medium"
        assert normalize(VideoSize.HD720) == "hd720"

    @pytest.mark.parametrize("value", [
        None, "text", True, 7, 4.0, 1.23456, 1.2, Decimal("1.005"), Preset.SLOW,
    ])
    def test_normalization_is_idempotent(self, value):
        """Normalizing an already normalized value changes nothing."""
        once = normalize(value)
        assert normalize(once) == once


class TestTextHelpers:
    """Tests for escaping, quoting, label wrapping and joining."""

    def test_escape_prefixes_metacharacters(self):
        assert escape("a:b=c[d]") == "a\\:b\\=c\\[d\\]"

    def test_escape_doubles_backslashes(self):
        assert escape("C:\\logo.png") == "C\\:\\\\logo.png"

    def test_escape_with_quote_wraps_in_single_quotes(self):
        assert escape("test.jpg", quote=True) == "'test.jpg'"

    def test_quotes_wraps_in_double_quotes(self):
        assert quotes("my file.mp4") == '"my file.mp4"'

    def test_quotes_leaves_quoted_text_alone(self):
        assert quotes('"done"') == '"done"'

    def test_wrap_label(self):
        assert wrap("in") == "[in]"
        assert wrap(0) == "[0]"

    def test_wrap_none_is_empty(self):
        assert wrap(None) == ""

    def test_wrap_all_concatenates_and_skips_none(self):
        assert wrap_all(["in", None, "wm"]) == "[in][wm]"
        assert wrap_all([]) == ""

    def test_expand_all_skips_none(self):
        assert expand_all(",", [1, None, 2.5, "x"]) == "1,2.5,x"

    def test_expand_flags_joins_with_plus(self):
        assert expand_flags([CpuFlag.SSE4_1, CpuFlag.AVX]) == "sse4.1+avx"

    def test_hex_color(self):
        assert to_hex_color((255, 0, 16)) == "#FF0010"
        assert to_hex_color((1, 2, 3), prefix="0x") == "0x010203"
