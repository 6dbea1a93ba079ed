"""
Unit tests for color model conversion.

Covers hex parsing, the HSL/HSV/CMYK/YUV/Lab/RYB conversions, the generic
dispatcher and brightness helpers.
"""
import math

import pytest

from huepick.errors import HuePickError, UnsupportedFormatError
from huepick.services.colors.convert import (
    CMYK, HSL, HSV, Lab, RGB, RYB, YUV, cmyk_to_rgb, convert_color, get_brightness,
    get_contrast_color, hex_to_rgb, hex_to_rgba_string, hsl_to_rgb, hsv_to_rgb,
    rgb_obj_to_hex, rgb_to_cmyk, rgb_to_hex, rgb_to_hsl, rgb_to_hsv, rgb_to_lab,
    rgb_to_rgba_string, rgb_to_ryb, rgb_to_yuv, ryb_to_rgb, yuv_to_rgb
)


class TestHex:
    """Test hex parsing and formatting"""

    def test_hex_to_rgb_basic_colors(self):
        assert hex_to_rgb("#FF0000") == RGB(255, 0, 0)
        assert hex_to_rgb("00ff00") == RGB(0, 255, 0)
        assert hex_to_rgb("#0000ff") == RGB(0, 0, 255)

    def test_hex_to_rgb_shorthand(self):
        """3-digit shorthand expands each digit"""
        assert hex_to_rgb("#f00") == RGB(255, 0, 0)
        assert hex_to_rgb("abc") == RGB(170, 187, 204)

    def test_hex_to_rgb_malformed_resolves_to_black(self):
        assert hex_to_rgb("not-a-color") == RGB(0, 0, 0)
        assert hex_to_rgb("#12345") == RGB(0, 0, 0)
        assert hex_to_rgb("") == RGB(0, 0, 0)
        assert hex_to_rgb(None) == RGB(0, 0, 0)
        assert hex_to_rgb("##ff0000") == RGB(0, 0, 0)

    def test_hex_to_rgb_non_string_resolves_to_black(self):
        assert hex_to_rgb({"r": 1, "g": 2, "b": 3}) == RGB(0, 0, 0)
        assert hex_to_rgb([255, 0, 0]) == RGB(0, 0, 0)

    def test_rgb_to_hex_lowercase(self):
        assert rgb_to_hex(255, 0, 0) == "#ff0000"
        assert rgb_to_hex(31, 78, 121) == "#1f4e79"
        assert rgb_obj_to_hex((211, 181, 143)) == "#d3b58f"

    def test_rgb_to_hex_rounds_and_clamps(self):
        assert rgb_to_hex(300, -5, 127.6) == "#ff0080"
        assert rgb_to_hex(0.5, 1.49, 254.5) == "#0101ff"

    def test_hex_round_trip(self):
        """Every 6-digit hex survives a round trip up to case"""
        for r in range(0, 256, 17):
            for g in range(0, 256, 51):
                for b in (0, 1, 128, 254, 255):
                    hex_color = f"#{r:02X}{g:02X}{b:02X}"
                    assert rgb_to_hex(*hex_to_rgb(hex_color)) == hex_color.lower()


class TestHSL:
    """Test RGB <-> HSL"""

    def test_primary_colors(self):
        assert rgb_to_hsl(255, 0, 0) == HSL(0, 100, 50)
        assert rgb_to_hsl(0, 255, 0) == HSL(120, 100, 50)
        assert rgb_to_hsl(0, 0, 255) == HSL(240, 100, 50)

    def test_gray_has_no_hue(self):
        assert rgb_to_hsl(128, 128, 128) == HSL(0, 0, 50)
        assert rgb_to_hsl(0, 0, 0) == HSL(0, 0, 0)
        assert rgb_to_hsl(255, 255, 255) == HSL(0, 0, 100)

    def test_hue_stays_below_360(self):
        """Hues that round up to 360 wrap to 0"""
        h, _, _ = rgb_to_hsl(255, 0, 1)
        assert 0 <= h < 360
        assert h == 0

    @pytest.mark.parametrize("rgb", [
        (255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0),
        (0, 128, 0), (128, 128, 128), (255, 255, 255), (0, 0, 0), (200, 100, 50),
    ])
    def test_round_trip_within_one_for_reference_colors(self, rgb):
        """Primaries, mid-tones and grays survive integer-percent HSL"""
        back = hsl_to_rgb(*rgb_to_hsl(*rgb))
        for original, restored in zip(rgb, back):
            assert abs(original - restored) <= 1

    def test_integer_percent_quantization_near_black(self):
        """One lightness percent spans 2.55 RGB steps, so dark colors drift"""
        assert rgb_to_hsl(0, 0, 3) == HSL(240, 100, 1)
        assert hsl_to_rgb(*rgb_to_hsl(0, 0, 3)) == RGB(0, 0, 5)

    @pytest.mark.parametrize("hue", [0, 90, 359, 720, -30])
    @pytest.mark.parametrize("lightness", [0, 25, 50, 100])
    def test_zero_saturation_is_gray(self, hue, lightness):
        value = math.floor(lightness / 100 * 255 + 0.5)
        assert hsl_to_rgb(hue, 0, lightness) == RGB(value, value, value)

    def test_hsl_to_rgb_known_values(self):
        assert hsl_to_rgb(0, 100, 50) == RGB(255, 0, 0)
        assert hsl_to_rgb(240, 100, 50) == RGB(0, 0, 255)

    def test_hsl_to_rgb_clamps_out_of_range_input(self):
        assert hsl_to_rgb(0, 150, 50) == hsl_to_rgb(0, 100, 50)
        assert hsl_to_rgb(0, 0, 150) == RGB(255, 255, 255)


class TestHSV:
    """Test RGB <-> HSV"""

    def test_rgb_to_hsv(self):
        assert rgb_to_hsv(255, 0, 0) == HSV(0, 100, 100)
        assert rgb_to_hsv(0, 0, 0) == HSV(0, 0, 0)
        assert rgb_to_hsv(255, 255, 255) == HSV(0, 0, 100)

    def test_hsv_to_rgb(self):
        assert hsv_to_rgb(0, 100, 100) == RGB(255, 0, 0)
        assert hsv_to_rgb(120, 100, 100) == RGB(0, 255, 0)
        assert hsv_to_rgb(240, 100, 50) == RGB(0, 0, 128)


class TestCMYK:
    """Test RGB <-> CMYK"""

    def test_black_avoids_division_by_zero(self):
        assert rgb_to_cmyk(0, 0, 0) == CMYK(0, 0, 0, 1)

    def test_red(self):
        assert rgb_to_cmyk(255, 0, 0) == CMYK(0, 1, 1, 0)
        assert cmyk_to_rgb(0, 1, 1, 0) == RGB(255, 0, 0)

    def test_half_key_rounds_half_up(self):
        assert cmyk_to_rgb(0, 0, 0, 0.5) == RGB(128, 128, 128)

    def test_components_are_clamped(self):
        assert cmyk_to_rgb(-1, 2, 0, 0) == RGB(255, 0, 255)


class TestYUV:
    """Test RGB <-> YUV"""

    def test_white_and_black(self):
        assert rgb_to_yuv(255, 255, 255) == YUV(1.0, 0.0, 0.0)
        assert rgb_to_yuv(0, 0, 0) == YUV(0.0, 0.0, 0.0)

    def test_yuv_to_rgb(self):
        assert yuv_to_rgb(1, 0, 0) == RGB(255, 255, 255)
        assert yuv_to_rgb(0, 0, 0) == RGB(0, 0, 0)
        assert yuv_to_rgb(0.5, 0, 0) == RGB(128, 128, 128)

    def test_yuv_to_rgb_clamps(self):
        assert yuv_to_rgb(2, 0, 0) == RGB(255, 255, 255)


class TestLab:
    """Test one-way RGB -> Lab"""

    def test_reference_colors(self):
        assert rgb_to_lab(255, 255, 255) == Lab(100, 0, 0)
        assert rgb_to_lab(0, 0, 0) == Lab(0, 0, 0)
        assert rgb_to_lab(255, 0, 0) == Lab(53, 80, 67)


class TestRYB:
    """Test the approximate RGB <-> RYB mapping"""

    def test_extremes(self):
        assert rgb_to_ryb(255, 0, 0) == RYB(255, 0, 0)
        assert rgb_to_ryb(255, 255, 255) == RYB(255, 255, 255)
        assert rgb_to_ryb(0, 0, 0) == RYB(0, 0, 0)
        assert rgb_to_ryb(0, 0, 255) == RYB(0, 0, 255)

    def test_green_maps_to_yellow_axis(self):
        assert rgb_to_ryb(0, 255, 0) == RYB(0, 255, 0)

    def test_round_trip_is_not_lossless(self):
        ryb = rgb_to_ryb(255, 255, 0)
        assert ryb == RYB(0, 255, 0)
        assert ryb_to_rgb(*ryb) != RGB(255, 255, 0)

    def test_ryb_yellow_to_rgb(self):
        assert ryb_to_rgb(255, 255, 0) == RGB(0, 255, 0)


class TestConvertColor:
    """Test the generic dispatcher"""

    def test_hex_to_lab(self):
        assert convert_color("#ff0000", "hex", "lab") == Lab(53, 80, 67)

    def test_mapping_input(self):
        assert convert_color({"h": 0, "s": 100, "l": 50}, "hsl", "hex") == "#ff0000"

    def test_sequence_input(self):
        assert convert_color((255, 0, 0), "rgb", "cmyk") == CMYK(0, 1, 1, 0)
        assert convert_color([0, 1, 1, 0], "cmyk", "rgb") == RGB(255, 0, 0)

    def test_rgb_input_is_clamped_and_rounded(self):
        assert convert_color([300, -5, 0], "rgb", "rgb") == RGB(255, 0, 0)
        assert convert_color({"r": 255.7, "g": 0.4, "b": 127.5}, "rgb", "rgb") == RGB(255, 0, 128)

    def test_out_of_range_rgb_stays_in_target_domain(self):
        h, s, l = convert_color([300, -5, 0], "rgb", "hsl")
        assert 0 <= h < 360 and 0 <= s <= 100 and 0 <= l <= 100
        assert (h, s, l) == (0, 100, 50)
        assert convert_color([300, -5, 0], "rgb", "cmyk") == CMYK(0, 1, 1, 0)

    def test_tags_are_case_insensitive(self):
        assert convert_color("#00FF00", "HEX", "RGB") == RGB(0, 255, 0)

    def test_unknown_target(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            convert_color("#ff0000", "hex", "zzz")
        assert "zzz" in str(exc_info.value)
        assert exc_info.value.direction == "to"

    def test_lab_is_output_only(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            convert_color({"l": 53, "a": 80, "b": 67}, "lab", "hex")
        assert exc_info.value.direction == "from"

    def test_unsupported_format_is_value_error(self):
        with pytest.raises(ValueError):
            convert_color("#ff0000", "zzz", "hex")
        with pytest.raises(HuePickError):
            convert_color("#ff0000", "zzz", "hex")


class TestBrightness:
    """Test brightness and contrast helpers"""

    def test_brightness(self):
        assert get_brightness(255, 255, 255) == 255.0
        assert get_brightness(0, 0, 0) == 0.0

    def test_contrast_color(self):
        assert get_contrast_color(255, 255, 255) == "#000000"
        assert get_contrast_color(0, 0, 0) == "#ffffff"
        # Threshold is inclusive
        assert get_contrast_color(128, 128, 128) == "#000000"

    def test_rgba_strings(self):
        assert rgb_to_rgba_string(255, 0, 0, 0.5) == "rgba(255, 0, 0, 0.5)"
        assert hex_to_rgba_string("#00ff00") == "rgba(0, 255, 0, 1)"
