"""
Nearest Color Naming

Labels an arbitrary color with the closest entry of a static reference table
(CSS named colors with English and Vietnamese names). Distance is Euclidean
in RGB space; when two entries are equally close the one listed first wins.
"""

import re
from typing import NamedTuple, Tuple

import numpy as np
from loguru import logger

from huepick.config import config


class NamedColor(NamedTuple):
    """Reference color with localized names."""
    hex: str
    en: str
    vi: str

    def name(self, language: str = "en") -> str:
        return self.vi if language == "vi" else self.en


# Duplicate hex values are intentional (e.g. Aqua/Cyan, Gray/Grey).
COLOR_TABLE: Tuple[NamedColor, ...] = (
    NamedColor("#F0F8FF", "AliceBlue", "Xanh da trời"),
    NamedColor("#FAEBD7", "AntiqueWhite", "Kem cổ"),
    NamedColor("#00FFFF", "Aqua", "Xanh ngọc"),
    NamedColor("#7FFFD4", "Aquamarine", "Xanh ngọc lam"),
    NamedColor("#F0FFFF", "Azure", "Xanh lam nhạt"),
    NamedColor("#F5F5DC", "Beige", "Be"),
    NamedColor("#FFE4C4", "Bisque", "Be hồng"),
    NamedColor("#000000", "Black", "Đen"),
    NamedColor("#FFEBCD", "BlanchedAlmond", "Vàng ngà"),
    NamedColor("#0000FF", "Blue", "Xanh da trời"),
    NamedColor("#8A2BE2", "BlueViolet", "Tím xanh"),
    NamedColor("#A52A2A", "Brown", "Nâu"),
    NamedColor("#DEB887", "Burlywood", "Vàng đất"),
    NamedColor("#5F9EA0", "CadetBlue", "Xanh da trời"),
    NamedColor("#7FFF00", "Chartreuse", "Xanh vàng"),
    NamedColor("#D2691E", "Chocolate", "Nâu sô cô la"),
    NamedColor("#FF7F50", "Coral", "Cam san hô"),
    NamedColor("#6495ED", "CornflowerBlue", "Xanh ngọc"),
    NamedColor("#FFF8DC", "Cornsilk", "Vàng ngô nhạt"),
    NamedColor("#DC143C", "Crimson", "Đỏ thẫm"),
    NamedColor("#00FFFF", "Cyan", "Xanh ngọc"),
    NamedColor("#00008B", "DarkBlue", "Xanh da trời đậm"),
    NamedColor("#008B8B", "DarkCyan", "Xanh lơ đậm"),
    NamedColor("#B8860B", "DarkGoldenrod", "Vàng hoe đậm"),
    NamedColor("#A9A9A9", "DarkGray", "Xám đậm"),
    NamedColor("#006400", "DarkGreen", "Xanh lá đậm"),
    NamedColor("#A9A9A9", "DarkGrey", "Xám đậm"),
    NamedColor("#BDB76B", "DarkKhaki", "Vàng kaki đậm"),
    NamedColor("#8B008B", "DarkMagenta", "Hồng thẫm"),
    NamedColor("#556B2F", "DarkOliveGreen", "Xanh ô liu đậm"),
    NamedColor("#FF8C00", "DarkOrange", "Cam đậm"),
    NamedColor("#9932CC", "DarkOrchid", "Tím ngọc đậm"),
    NamedColor("#8B0000", "DarkRed", "Đỏ đậm"),
    NamedColor("#E9967A", "DarkSalmon", "Cam đào đậm"),
    NamedColor("#8FBC8F", "DarkSeaGreen", "Xanh ngọc đậm"),
    NamedColor("#483D8B", "DarkSlateBlue", "Xanh đen đậm"),
    NamedColor("#2F4F4F", "DarkSlateGray", "Xám xanh đậm"),
    NamedColor("#2F4F4F", "DarkSlateGrey", "Xám xanh đậm"),
    NamedColor("#00CED1", "DarkTurquoise", "Xanh ngọc đậm"),
    NamedColor("#9400D3", "DarkViolet", "Tím đậm"),
    NamedColor("#FF1493", "DeepPink", "Hồng đậm"),
    NamedColor("#00BFFF", "DeepSkyBlue", "Xanh da trời đậm"),
    NamedColor("#696969", "DimGray", "Xám đậm"),
    NamedColor("#696969", "DimGrey", "Xám đậm"),
    NamedColor("#1E90FF", "DodgerBlue", "Xanh da trời"),
    NamedColor("#B22222", "FireBrick", "Đỏ gạch"),
    NamedColor("#FFFAF0", "FloralWhite", "Trắng hoa"),
    NamedColor("#228B22", "ForestGreen", "Xanh lục"),
    NamedColor("#FF00FF", "Fuchsia", "Hồng cánh sen"),
    NamedColor("#DCDCDC", "Gainsboro", "Xám nhạt"),
    NamedColor("#F8F8FF", "GhostWhite", "Trắng ma"),
    NamedColor("#FFD700", "Gold", "Vàng"),
    NamedColor("#DAA520", "Goldenrod", "Vàng hoe"),
    NamedColor("#808080", "Gray", "Xám"),
    NamedColor("#008000", "Green", "Xanh lá cây"),
    NamedColor("#ADFF2F", "GreenYellow", "Vàng lục"),
    NamedColor("#808080", "Grey", "Xám"),
    NamedColor("#F0FFF0", "HoneyDew", "Trắng ngọc nhạt"),
    NamedColor("#FF69B4", "HotPink", "Hồng nóng"),
    NamedColor("#CD5C5C", "IndianRed", "Đỏ đất"),
    NamedColor("#4B0082", "Indigo", "Chàm"),
    NamedColor("#FFFFF0", "Ivory", "Ngà"),
    NamedColor("#F0E68C", "Khaki", "Vàng nhạt"),
    NamedColor("#E6E6FA", "Lavender", "Tím oải hương"),
    NamedColor("#FFF0F5", "LavenderBlush", "Tím oải hương nhạt"),
    NamedColor("#7CFC00", "LawnGreen", "Xanh cỏ"),
    NamedColor("#FFFACD", "LemonChiffon", "Vàng chanh nhạt"),
    NamedColor("#ADD8E6", "LightBlue", "Xanh da trời nhạt"),
    NamedColor("#F08080", "LightCoral", "Hồng san hô nhạt"),
    NamedColor("#E0FFFF", "LightCyan", "Xanh ngọc nhạt"),
    NamedColor("#FAFAD2", "LightGoldenrodYellow", "Vàng hoe nhạt"),
    NamedColor("#D3D3D3", "LightGray", "Xám nhạt"),
    NamedColor("#90EE90", "LightGreen", "Xanh lá nhạt"),
    NamedColor("#D3D3D3", "LightGrey", "Xám nhạt"),
    NamedColor("#FFB6C1", "LightPink", "Hồng nhạt"),
    NamedColor("#FFA07A", "LightSalmon", "Cam nhạt"),
    NamedColor("#20B2AA", "LightSeaGreen", "Xanh nước biển nhạt"),
    NamedColor("#87CEFA", "LightSkyBlue", "Xanh da trời nhạt"),
    NamedColor("#778899", "LightSlateGray", "Xám xanh nhạt"),
    NamedColor("#778899", "LightSlateGrey", "Xám xanh nhạt"),
    NamedColor("#B0C4DE", "LightSteelBlue", "Xanh thép nhạt"),
    NamedColor("#FFFFE0", "LightYellow", "Vàng nhạt"),
    NamedColor("#00FF00", "Lime", "Xanh chanh"),
    NamedColor("#32CD32", "LimeGreen", "Xanh lá chanh"),
    NamedColor("#FAF0E6", "Linen", "Kem"),
    NamedColor("#FF00FF", "Magenta", "Hồng tươi"),
    NamedColor("#800000", "Maroon", "Đỏ hạt dẻ"),
    NamedColor("#66CDAA", "MediumAquaMarine", "Xanh ngọc vừa"),
    NamedColor("#0000CD", "MediumBlue", "Xanh dương"),
    NamedColor("#BA55D3", "MediumOrchid", "Tím hoa lan vừa"),
    NamedColor("#9370DB", "MediumPurple", "Tím nhạt"),
    NamedColor("#3CB371", "MediumSeaGreen", "Xanh ngọc"),
    NamedColor("#7B68EE", "MediumSlateBlue", "Xanh đen vừa"),
    NamedColor("#00FA9A", "MediumSpringGreen", "Xanh lục sáng vừa"),
    NamedColor("#48D1CC", "MediumTurquoise", "Xanh ngọc vừa"),
    NamedColor("#C71585", "MediumVioletRed", "Hồng tím trung bình"),
    NamedColor("#191970", "MidnightBlue", "Xanh đen"),
    NamedColor("#F5FFFA", "MintCream", "Trắng mint"),
    NamedColor("#FFE4E1", "MistyRose", "Hồng phấn nhạt"),
    NamedColor("#FFE4B5", "Moccasin", "Vàng kem"),
    NamedColor("#FFDEAD", "NavajoWhite", "Da"),
    NamedColor("#000080", "Navy", "Xanh dương đậm"),
    NamedColor("#FDF5E6", "OldLace", "Kem cổ"),
    NamedColor("#808000", "Olive", "Xanh ô liu"),
    NamedColor("#6B8E23", "OliveDrab", "Xanh ô liu sẫm"),
    NamedColor("#FFA500", "Orange", "Cam"),
    NamedColor("#FF4500", "OrangeRed", "Cam đỏ"),
    NamedColor("#DA70D6", "Orchid", "Tím lan"),
    NamedColor("#EEE8AA", "PaleGoldenrod", "Vàng hoe nhạt"),
    NamedColor("#98FB98", "PaleGreen", "Xanh lục nhạt"),
    NamedColor("#AFEEEE", "PaleTurquoise", "Xanh ngọc nhạt"),
    NamedColor("#DB7093", "PaleVioletRed", "Hồng tím nhạt"),
    NamedColor("#FFEFD5", "PapayaWhip", "Vàng da cam nhạt"),
    NamedColor("#FFDAB9", "PeachPuff", "Hồng đào nhạt"),
    NamedColor("#CD853F", "Peru", "Nâu đỏ"),
    NamedColor("#FFC0CB", "Pink", "Hồng"),
    NamedColor("#DDA0DD", "Plum", "Mận"),
    NamedColor("#B0E0E6", "PowderBlue", "Xanh nhạt"),
    NamedColor("#800080", "Purple", "Tím"),
    NamedColor("#663399", "RebeccaPurple", "Tím Rebecca"),
    NamedColor("#FF0000", "Red", "Đỏ"),
    NamedColor("#BC8F8F", "RosyBrown", "Nâu hồng"),
    NamedColor("#4169E1", "RoyalBlue", "Xanh chàm"),
    NamedColor("#8B4513", "SaddleBrown", "Nâu yên ngựa"),
    NamedColor("#FA8072", "Salmon", "Cam"),
    NamedColor("#F4A460", "SandyBrown", "Nâu cát"),
    NamedColor("#2E8B57", "SeaGreen", "Xanh ngọc"),
    NamedColor("#FFF5EE", "SeaShell", "Trắng ngọc trai"),
    NamedColor("#A0522D", "Sienna", "Nâu đỏ"),
    NamedColor("#C0C0C0", "Silver", "Bạc"),
    NamedColor("#87CEEB", "SkyBlue", "Xanh da trời"),
    NamedColor("#6A5ACD", "SlateBlue", "Xanh đen"),
    NamedColor("#708090", "SlateGray", "Xám xanh"),
    NamedColor("#708090", "SlateGrey", "Xám xanh"),
    NamedColor("#FFFAFA", "Snow", "Trắng tuyết"),
    NamedColor("#00FF7F", "SpringGreen", "Xanh lục sáng"),
    NamedColor("#4682B4", "SteelBlue", "Xanh thép"),
    NamedColor("#D2B48C", "Tan", "Vàng bò"),
    NamedColor("#008080", "Teal", "Xanh lơ đậm"),
    NamedColor("#D8BFD8", "Thistle", "Tím thạch thảo"),
    NamedColor("#FF6347", "Tomato", "Đỏ cà chua"),
    NamedColor("#40E0D0", "Turquoise", "Xanh ngọc"),
    NamedColor("#EE82EE", "Violet", "Tím"),
    NamedColor("#F5DEB3", "Wheat", "Vàng lúa"),
    NamedColor("#FFFFFF", "White", "Trắng"),
    NamedColor("#F5F5F5", "WhiteSmoke", "Trắng khói"),
    NamedColor("#FFFF00", "Yellow", "Vàng"),
    NamedColor("#9ACD32", "YellowGreen", "Vàng lục"),
)

_STRICT_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def parse_hex_strict(hex_color: str) -> Tuple[int, int, int]:
    """
    Parse a 6-digit hex color; anything else resolves to black.

    The shorthand ``#RGB`` form is not accepted here.
    """
    match = _STRICT_HEX_RE.match(hex_color) if isinstance(hex_color, str) else None
    if match is None:
        logger.debug(f"Unparseable hex {hex_color!r} treated as #000000")
        return 0, 0, 0
    return tuple(int(part, 16) for part in match.groups())


_TABLE_RGB = np.array([parse_hex_strict(entry.hex) for entry in COLOR_TABLE], dtype=np.float64)


def color_distance(rgb1: Tuple[int, int, int], rgb2: Tuple[int, int, int]) -> float:
    """Euclidean distance between two RGB colors."""
    return float(np.sqrt(sum((float(a) - float(b)) ** 2 for a, b in zip(rgb1[:3], rgb2[:3]))))


def find_nearest_color(hex_color: str) -> NamedColor:
    """
    Find the table entry nearest to a hex color.

    Args:
        hex_color: Color in format #RRGGBB (the ``#`` is optional)

    Returns:
        Closest NamedColor; ties resolve to the earliest table entry
    """
    target = np.array(parse_hex_strict(hex_color), dtype=np.float64)
    distances = np.sqrt(np.sum((_TABLE_RGB - target) ** 2, axis=1))
    # argmin returns the first occurrence of the minimum
    return COLOR_TABLE[int(np.argmin(distances))]


def find_nearest_color_name(hex_color: str, language: str = None) -> str:
    """
    Name the color nearest to ``hex_color``.

    Args:
        hex_color: Color in format #RRGGBB
        language: ``"en"`` or ``"vi"`` (defaults to the configured language)

    Returns:
        Localized color name
    """
    if language is None:
        language = config.DEFAULT_LANGUAGE
    return find_nearest_color(hex_color).name(language)
