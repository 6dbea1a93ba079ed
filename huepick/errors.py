"""
HuePick Errors
Exception types raised by the color engine.
"""


class HuePickError(Exception):
    """Base exception for HuePick."""
    pass


class UnsupportedFormatError(HuePickError, ValueError):
    """Color model tag not recognized by the converter."""

    def __init__(self, format_tag: str, direction: str = "from"):
        self.format_tag = format_tag
        self.direction = direction
        super().__init__(f"Unsupported format conversion {direction}: {format_tag}")


class ImageDecodeError(HuePickError):
    """Image bytes could not be read or decoded into a pixel buffer."""
    pass
