"""
HuePick Color Harmony

Generates palettes from a base color using color-wheel rules (complementary,
analogous, monochromatic, triadic, tetradic), plus contrast adjustment and
darker/lighter shade ladders for a sampled color.
"""

from dataclasses import dataclass
from typing import List

from loguru import logger

from huepick.services.colors.convert import hex_to_rgb, hsl_to_rgb, rgb_to_hex, rgb_to_hsl

SCHEMES = ["complementary", "analogous", "monochromatic", "triadic", "tetradic"]


@dataclass
class ShadeVariant:
    """A darker or lighter variation of a base color."""
    hex: str
    name: str
    brightness: str  # "darker", "original", "lighter"


def _hsl_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def generate_palette(base_hex: str, scheme: str = "complementary", count: int = 4) -> List[str]:
    """
    Generate a palette of ``count`` hex colors starting with the base color.

    Args:
        base_hex: Base color in format #RRGGBB
        scheme: One of ``SCHEMES``; anything else yields plain complements
        count: Number of colors including the base

    Returns:
        List of lowercase hex colors
    """
    base_rgb = hex_to_rgb(base_hex)
    h, s, l = rgb_to_hsl(*base_rgb)
    colors = [rgb_to_hex(*base_rgb)]

    for i in range(1, count):
        if scheme == "complementary":
            colors.append(_hsl_hex(
                (h + 180) % 360,
                max(20, s - i * 10),
                max(20, min(80, l + (i - 1) * 15)),
            ))
        elif scheme == "analogous":
            colors.append(_hsl_hex(
                (h + i * 30) % 360,
                max(30, s - i * 5),
                max(25, min(75, l + (10 if i % 2 == 0 else -10))),
            ))
        elif scheme == "monochromatic":
            colors.append(_hsl_hex(
                h,
                max(20, s - i * 20),
                max(20, min(80, l + i * 20)),
            ))
        elif scheme == "triadic":
            colors.append(_hsl_hex(
                (h + i * 120) % 360,
                max(40, s - i * 5),
                max(30, min(70, l + (15 if i % 2 == 0 else -15))),
            ))
        elif scheme == "tetradic":
            colors.append(_hsl_hex(
                (h + i * 90) % 360,
                max(35, s - i * 8),
                max(25, min(75, l + (12 if i % 2 == 0 else -12))),
            ))
        else:
            colors.append(_hsl_hex((h + 180) % 360, s, l))

    if scheme not in SCHEMES:
        logger.debug(f"Unknown harmony scheme {scheme!r}, used plain complementary")

    return colors[:max(0, count)]


def apply_contrast(hex_color: str, contrast: float) -> str:
    """
    Scale each channel's distance from mid-gray by ``contrast / 100``.

    100 leaves the color unchanged, 0 collapses it to gray.
    """
    factor = contrast / 100
    return rgb_to_hex(*(
        (channel - 128) * factor + 128
        for channel in hex_to_rgb(hex_color)
    ))


def dominant_channel_name(hex_color: str) -> str:
    """Coarse hue family from the strongest RGB channel(s)."""
    r, g, b = hex_to_rgb(hex_color)

    if r > g and r > b:
        return "Red"
    if g > r and g > b:
        return "Green"
    if b > r and b > g:
        return "Blue"
    if r == g and r > b:
        return "Yellow"
    if r == b and r > g:
        return "Magenta"
    if g == b and g > r:
        return "Cyan"
    return "Gray"


def generate_shades(base_hex: str, steps: int = 4) -> List[ShadeVariant]:
    """
    Build a shade ladder around a base color.

    Darker variants scale every channel by ``1 - 0.15 * i``; lighter ones move
    each channel ``0.15 * i`` of the way to white. The result runs from the
    darkest variant through the original to the lightest.
    """
    r, g, b = hex_to_rgb(base_hex)
    base = rgb_to_hex(r, g, b)
    family = dominant_channel_name(base)

    darker = []
    for i in range(1, steps + 1):
        factor = 1 - i * 0.15
        shade = rgb_to_hex(*(max(0, channel * factor) for channel in (r, g, b)))
        darker.insert(0, ShadeVariant(shade, f"Dark {dominant_channel_name(shade)} {i}", "darker"))

    lighter = []
    for i in range(1, steps + 1):
        factor = i * 0.15
        tint = rgb_to_hex(*(min(255, channel + (255 - channel) * factor) for channel in (r, g, b)))
        lighter.append(ShadeVariant(tint, f"Light {dominant_channel_name(tint)} {i}", "lighter"))

    return darker + [ShadeVariant(base, family, "original")] + lighter
