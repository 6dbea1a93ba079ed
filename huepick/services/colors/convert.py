"""
Color Model Conversion

Pure numeric conversions between the color models exposed to callers:
HEX, RGB, HSL, HSV/HSB, CMYK, YUV, CIELAB and RYB.

Every function is total over its documented domain. Out-of-range inputs are
clamped or wrapped rather than rejected; the only raised condition is
``UnsupportedFormatError`` from ``convert_color`` for an unknown model tag.

Rounding follows the half-up convention (``floor(x + 0.5)``) so integer
outputs are stable for values that sit exactly on .5.
"""

import math
import re
from typing import Any, Literal, Mapping, NamedTuple, Sequence, Tuple, Union

from loguru import logger

from huepick.errors import UnsupportedFormatError


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    h: int  # degrees [0, 360)
    s: int  # percent [0, 100]
    l: int  # percent [0, 100]


class HSV(NamedTuple):
    h: int  # degrees [0, 360)
    s: int  # percent [0, 100]
    v: int  # percent [0, 100]


class CMYK(NamedTuple):
    c: float
    m: float
    y: float
    k: float


class YUV(NamedTuple):
    y: float  # [0, 1]
    u: float  # [-0.5, 0.5]
    v: float  # [-0.5, 0.5]


class Lab(NamedTuple):
    l: int
    a: int
    b: int


class RYB(NamedTuple):
    r: int
    y: int
    b: int


ColorFormat = Literal["rgb", "hex", "hsl", "hsv", "cmyk", "yuv", "lab", "ryb"]
ColorValue = Union[RGB, HSL, HSV, CMYK, YUV, Lab, RYB, str]

# D65 reference white
D65_WHITE = (0.95047, 1.0, 1.08883)

_HEX_RE = re.compile(r"^[0-9a-f]{6}$", re.IGNORECASE)


def _round(value: float) -> int:
    """Round half up to an integer."""
    return int(math.floor(value + 0.5))


def _round2(value: float) -> float:
    """Round half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _wrap_hue(h: float) -> float:
    return ((h % 360) + 360) % 360


# ============================================================================
# HEX
# ============================================================================

def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert a hex color string to RGB.

    Accepts ``#RRGGBB``, ``RRGGBB`` and the 3-digit shorthand ``#RGB`` in any
    case. Malformed input, including non-strings and a repeated ``#``,
    resolves to black instead of raising.

    Args:
        hex_color: Hex color string

    Returns:
        RGB tuple with channels in [0, 255]
    """
    if not isinstance(hex_color, str):
        logger.debug(f"Non-string hex color {hex_color!r}, using black")
        return RGB(0, 0, 0)

    hex_clean = hex_color.strip()
    if hex_clean.startswith("#"):
        hex_clean = hex_clean[1:]

    # Handle shorthand form (e.g. "#F00")
    if len(hex_clean) == 3:
        hex_clean = "".join(ch * 2 for ch in hex_clean)

    if not _HEX_RE.match(hex_clean):
        logger.debug(f"Malformed hex color {hex_color!r}, using black")
        return RGB(0, 0, 0)

    return RGB(int(hex_clean[0:2], 16), int(hex_clean[2:4], 16), int(hex_clean[4:6], 16))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert RGB channels to a lowercase ``#rrggbb`` string (rounded, clamped)."""
    return "#" + "".join(f"{int(_clamp(_round(c), 0, 255)):02x}" for c in (r, g, b))


def rgb_obj_to_hex(rgb: Sequence[float]) -> str:
    """Convert an RGB tuple to a hex string."""
    r, g, b = rgb[:3]
    return rgb_to_hex(r, g, b)


# ============================================================================
# CMYK
# ============================================================================

def rgb_to_cmyk(r: float, g: float, b: float) -> CMYK:
    """
    Convert RGB to CMYK.

    Args:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)

    Returns:
        CMYK tuple with components in [0, 1] rounded to two decimals
    """
    nr, ng, nb = r / 255, g / 255, b / 255

    k = 1 - max(nr, ng, nb)

    # Pure black: avoid dividing by (1 - k) == 0
    if k == 1:
        return CMYK(0, 0, 0, 1)

    c = (1 - nr - k) / (1 - k)
    m = (1 - ng - k) / (1 - k)
    y = (1 - nb - k) / (1 - k)

    return CMYK(_round2(c), _round2(m), _round2(y), _round2(k))


def cmyk_to_rgb(c: float, m: float, y: float, k: float) -> RGB:
    """Convert CMYK (components clamped to [0, 1]) to RGB."""
    c, m, y, k = (_clamp(v, 0, 1) for v in (c, m, y, k))

    return RGB(
        _round(255 * (1 - c) * (1 - k)),
        _round(255 * (1 - m) * (1 - k)),
        _round(255 * (1 - y) * (1 - k)),
    )


# ============================================================================
# HSL / HSV
# ============================================================================

def _hue_from_rgb(nr: float, ng: float, nb: float, mx: float, d: float) -> float:
    if mx == nr:
        return ((ng - nb) / d + (6 if ng < nb else 0)) * 60
    if mx == ng:
        return ((nb - nr) / d + 2) * 60
    return ((nr - ng) / d + 4) * 60


def rgb_to_hsl(r: float, g: float, b: float) -> HSL:
    """
    Convert RGB to HSL.

    Args:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)

    Returns:
        HSL tuple with h in degrees [0, 360) and s, l in percent
    """
    nr, ng, nb = r / 255, g / 255, b / 255
    mx = max(nr, ng, nb)
    mn = min(nr, ng, nb)

    l = (mx + mn) / 2

    # Shade of gray
    if mx == mn:
        return HSL(0, 0, _round(l * 100))

    d = mx - mn
    s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)
    h = _hue_from_rgb(nr, ng, nb, mx, d)

    return HSL(_round(h) % 360, _round(s * 100), _round(l * 100))


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """
    Convert HSL to RGB.

    Hue is wrapped into [0, 360); saturation and lightness are clamped to
    [0, 100] before use.
    """
    h = _wrap_hue(h)
    s = _clamp(s, 0, 100) / 100
    l = _clamp(l, 0, 100) / 100

    if s == 0:
        value = _round(l * 255)
        return RGB(value, value, value)

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    nh = h / 360
    return RGB(
        _round(_hue_to_rgb(p, q, nh + 1 / 3) * 255),
        _round(_hue_to_rgb(p, q, nh) * 255),
        _round(_hue_to_rgb(p, q, nh - 1 / 3) * 255),
    )


def rgb_to_hsv(r: float, g: float, b: float) -> HSV:
    """Convert RGB to HSV with h in degrees [0, 360) and s, v in percent."""
    nr, ng, nb = r / 255, g / 255, b / 255
    mx = max(nr, ng, nb)
    mn = min(nr, ng, nb)
    d = mx - mn

    h = 0.0
    s = 0 if mx == 0 else d / mx

    if mx != mn:
        h = _hue_from_rgb(nr, ng, nb, mx, d)

    return HSV(_round(h) % 360, _round(s * 100), _round(mx * 100))


def hsv_to_rgb(h: float, s: float, v: float) -> RGB:
    """Convert HSV to RGB using the six-sector chroma decomposition."""
    h = _wrap_hue(h)
    s = _clamp(s, 0, 100) / 100
    v = _clamp(v, 0, 100) / 100

    c = v * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = v - c

    if h < 60:
        r, g, b = c, x, 0
    elif h < 120:
        r, g, b = x, c, 0
    elif h < 180:
        r, g, b = 0, c, x
    elif h < 240:
        r, g, b = 0, x, c
    elif h < 300:
        r, g, b = x, 0, c
    else:
        r, g, b = c, 0, x

    return RGB(_round((r + m) * 255), _round((g + m) * 255), _round((b + m) * 255))


# ============================================================================
# YUV
# ============================================================================

def rgb_to_yuv(r: float, g: float, b: float) -> YUV:
    """
    Convert RGB to YUV.

    Luma uses the BT.709 weights; chroma is scaled with the analog
    0.492 / 0.877 factors. Components are rounded to two decimals.
    """
    nr, ng, nb = r / 255, g / 255, b / 255

    y = 0.2126 * nr + 0.7152 * ng + 0.0722 * nb
    u = 0.492 * (nb - y)
    v = 0.877 * (nr - y)

    return YUV(_round2(y), _round2(u), _round2(v))


def yuv_to_rgb(y: float, u: float, v: float) -> RGB:
    """Convert YUV to RGB; each channel is clamped to [0, 1] before scaling."""
    r = y + 1.13983 * v
    g = y - 0.39465 * u - 0.5806 * v
    b = y + 2.03211 * u

    return RGB(
        _round(_clamp(r, 0, 1) * 255),
        _round(_clamp(g, 0, 1) * 255),
        _round(_clamp(b, 0, 1) * 255),
    )


# ============================================================================
# CIELAB (one-way)
# ============================================================================

def _linearize(channel: float) -> float:
    if channel > 0.04045:
        return ((channel + 0.055) / 1.055) ** 2.4
    return channel / 12.92


def _lab_f(t: float) -> float:
    if t > 0.008856:
        return t ** (1 / 3)
    return 7.787 * t + 16 / 116


def rgb_to_lab(r: float, g: float, b: float) -> Lab:
    """
    Convert sRGB to CIELAB against the D65 white point.

    There is intentionally no inverse; Lab is an output-only model.
    """
    lr = _linearize(r / 255)
    lg = _linearize(g / 255)
    lb = _linearize(b / 255)

    x = lr * 0.4124 + lg * 0.3576 + lb * 0.1805
    y = lr * 0.2126 + lg * 0.7152 + lb * 0.0722
    z = lr * 0.0193 + lg * 0.1192 + lb * 0.9505

    x_ref, y_ref, z_ref = D65_WHITE
    fx = _lab_f(x / x_ref)
    fy = _lab_f(y / y_ref)
    fz = _lab_f(z / z_ref)

    return Lab(_round(116 * fy - 16), _round(500 * (fx - fy)), _round(200 * (fy - fz)))


# ============================================================================
# RYB (artist color wheel approximation)
# ============================================================================

def _redistribute(a: float, b: float, c: float) -> Tuple[float, float, float]:
    """
    Shared RGB <-> RYB mixing step.

    Strips the white component, remaps the remainder, rescales it to the
    original chromatic maximum and adds the white back.
    """
    w = min(a, b, c)
    a -= w
    b -= w
    c -= w

    peak = max(a, b, c)

    first = a - min(a, b)
    second = (b + min(a, b)) / 2
    third = (c + min(b, c)) / 2

    if peak > 0:
        n = max(first, second, third) / peak
        if n > 0:
            first /= n
            second /= n
            third /= n

    return first + w, second + w, third + w


def rgb_to_ryb(r: float, g: float, b: float) -> RYB:
    """
    Convert RGB to RYB.

    This is an approximate mapping; ``ryb_to_rgb(*rgb_to_ryb(...))`` is not
    guaranteed to reproduce the input.
    """
    ry, yy, by = _redistribute(r / 255, g / 255, b / 255)
    return RYB(
        _round(_clamp(ry, 0, 1) * 255),
        _round(_clamp(yy, 0, 1) * 255),
        _round(_clamp(by, 0, 1) * 255),
    )


def ryb_to_rgb(r: float, y: float, b: float) -> RGB:
    """Convert RYB back to RGB with the same approximate mixing step."""
    rr, gg, bb = _redistribute(r / 255, y / 255, b / 255)
    return RGB(
        _round(_clamp(rr, 0, 1) * 255),
        _round(_clamp(gg, 0, 1) * 255),
        _round(_clamp(bb, 0, 1) * 255),
    )


# ============================================================================
# Generic dispatcher
# ============================================================================

_COMPONENT_KEYS = {
    "rgb": ("r", "g", "b"),
    "hsl": ("h", "s", "l"),
    "hsv": ("h", "s", "v"),
    "cmyk": ("c", "m", "y", "k"),
    "yuv": ("y", "u", "v"),
    "ryb": ("r", "y", "b"),
}


def _components(value: Any, fmt: str) -> Tuple[float, ...]:
    keys = _COMPONENT_KEYS[fmt]
    if isinstance(value, Mapping):
        return tuple(value[k] for k in keys)
    return tuple(value)[:len(keys)]


def convert_color(value: Any, from_format: str, to_format: str) -> ColorValue:
    """
    Convert a color between models, routing through RGB.

    Args:
        value: Color in ``from_format`` (NamedTuple, plain tuple, mapping with
            the model's keys, or a string for ``hex``); RGB input is
            rounded and clamped to [0, 255]
        from_format: Source model tag (``lab`` is output-only)
        to_format: Target model tag

    Returns:
        Color in the target model

    Raises:
        UnsupportedFormatError: If either tag is not recognized
    """
    from_format = (from_format or "").lower()
    to_format = (to_format or "").lower()

    if from_format == "hex":
        rgb = hex_to_rgb(value)
    elif from_format == "rgb":
        rgb = RGB(*(int(_clamp(_round(c), 0, 255)) for c in _components(value, "rgb")))
    elif from_format == "hsl":
        rgb = hsl_to_rgb(*_components(value, "hsl"))
    elif from_format == "hsv":
        rgb = hsv_to_rgb(*_components(value, "hsv"))
    elif from_format == "cmyk":
        rgb = cmyk_to_rgb(*_components(value, "cmyk"))
    elif from_format == "yuv":
        rgb = yuv_to_rgb(*_components(value, "yuv"))
    elif from_format == "ryb":
        rgb = ryb_to_rgb(*_components(value, "ryb"))
    else:
        raise UnsupportedFormatError(from_format, "from")

    if to_format == "rgb":
        return rgb
    if to_format == "hex":
        return rgb_to_hex(*rgb)
    if to_format == "hsl":
        return rgb_to_hsl(*rgb)
    if to_format == "hsv":
        return rgb_to_hsv(*rgb)
    if to_format == "cmyk":
        return rgb_to_cmyk(*rgb)
    if to_format == "yuv":
        return rgb_to_yuv(*rgb)
    if to_format == "lab":
        return rgb_to_lab(*rgb)
    if to_format == "ryb":
        return rgb_to_ryb(*rgb)
    raise UnsupportedFormatError(to_format, "to")


# ============================================================================
# Brightness / CSS helpers
# ============================================================================

def get_brightness(r: float, g: float, b: float) -> float:
    """Perceived brightness: (299*R + 587*G + 114*B) / 1000."""
    return (299 * r + 587 * g + 114 * b) / 1000


def get_contrast_color(r: float, g: float, b: float) -> str:
    """Black text on bright backgrounds, white otherwise."""
    return "#000000" if get_brightness(r, g, b) >= 128 else "#ffffff"


def rgb_to_rgba_string(r: float, g: float, b: float, a: float = 1) -> str:
    return f"rgba({r}, {g}, {b}, {a})"


def hex_to_rgba_string(hex_color: str, alpha: float = 1) -> str:
    r, g, b = hex_to_rgb(hex_color)
    return rgb_to_rgba_string(r, g, b, alpha)
