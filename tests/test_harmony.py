"""
Unit tests for harmony palettes, contrast and shade ladders.
"""
import re

import pytest

from huepick.services.colors.harmony import (
    SCHEMES, apply_contrast, dominant_channel_name, generate_palette, generate_shades
)

HEX_PATTERN = re.compile(r"^#[0-9a-f]{6}$")


class TestGeneratePalette:
    """Test color-wheel palettes"""

    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_every_scheme(self, scheme):
        colors = generate_palette("#3B82F6", scheme, 5)
        assert len(colors) == 5
        assert colors[0] == "#3b82f6"
        assert all(HEX_PATTERN.match(color) for color in colors)

    def test_unknown_scheme_uses_plain_complement(self):
        assert generate_palette("#ff0000", "nonsense", 2) == ["#ff0000", "#00ffff"]

    def test_count_edge_cases(self):
        assert generate_palette("#ff0000", "triadic", 1) == ["#ff0000"]
        assert generate_palette("#ff0000", "triadic", 0) == []

    def test_deterministic(self):
        assert generate_palette("#123456", "tetradic") == generate_palette("#123456", "tetradic")


class TestApplyContrast:
    """Test contrast scaling around mid-gray"""

    def test_identity(self):
        assert apply_contrast("#ff0000", 100) == "#ff0000"

    def test_collapse_to_gray(self):
        assert apply_contrast("#ff0000", 0) == "#808080"

    def test_half_contrast(self):
        assert apply_contrast("#ff0000", 50) == "#c04040"

    def test_high_contrast_clamps(self):
        assert apply_contrast("#ff0000", 200) == "#ff0000"


class TestShades:
    """Test darker/lighter shade ladders"""

    def test_dominant_channel_name(self):
        assert dominant_channel_name("#ff0000") == "Red"
        assert dominant_channel_name("#ffff00") == "Yellow"
        assert dominant_channel_name("#ff00ff") == "Magenta"
        assert dominant_channel_name("#00ffff") == "Cyan"
        assert dominant_channel_name("#808080") == "Gray"

    def test_ladder_layout(self):
        shades = generate_shades("#FF0000", 4)
        assert len(shades) == 9
        assert [s.brightness for s in shades] == ["darker"] * 4 + ["original"] + ["lighter"] * 4

        original = shades[4]
        assert original.hex == "#ff0000"
        assert original.name == "Red"

    def test_darkest_first(self):
        shades = generate_shades("#ff0000", 4)
        assert shades[0].hex == "#660000"
        assert shades[0].name == "Dark Red 4"
        assert shades[3].name == "Dark Red 1"

    def test_lighter_variants(self):
        shades = generate_shades("#ff0000", 4)
        assert shades[5].hex == "#ff2626"
        assert shades[5].name == "Light Red 1"
