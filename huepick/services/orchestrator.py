"""
HuePick Color Analyzer
Coordinates buffer loading, sampling/clustering, model conversion and naming.
"""
import time
from typing import List, Optional, Sequence, Union

from loguru import logger

from huepick.config import config
from huepick.schemas import ColorDescription
from huepick.services.cache import PixelBufferCache
from huepick.services.colors import clustering
from huepick.services.colors.convert import (
    get_brightness, get_contrast_color, hex_to_rgb, rgb_to_cmyk, rgb_to_hex,
    rgb_to_hsl, rgb_to_hsv, rgb_to_lab, rgb_to_ryb, rgb_to_yuv
)
from huepick.services.colors.extraction import ColorExtractor, DirectPixelExtractor, select_extractor
from huepick.services.colors.naming import find_nearest_color_name
from huepick.services.imaging import ColorSample
from huepick.utils.logging import get_logger


def describe_color(color: Union[str, Sequence[int]], language: str = None, alpha: int = 255) -> ColorDescription:
    """
    Expand a color into every supported model and name it.

    Args:
        color: Hex string or RGB(A) sequence
        language: Naming language (default from config)
        alpha: Alpha reported when ``color`` carries none

    Returns:
        ColorDescription
    """
    if language is None:
        language = config.DEFAULT_LANGUAGE

    if isinstance(color, str):
        r, g, b = hex_to_rgb(color)
    else:
        r, g, b = (int(v) for v in color[:3])
        if len(color) > 3:
            alpha = int(color[3])

    hex_color = rgb_to_hex(r, g, b)

    return ColorDescription(
        hex=hex_color,
        alpha=alpha,
        rgb={"r": r, "g": g, "b": b},
        hsl=rgb_to_hsl(r, g, b)._asdict(),
        hsv=rgb_to_hsv(r, g, b)._asdict(),
        cmyk=rgb_to_cmyk(r, g, b)._asdict(),
        yuv=rgb_to_yuv(r, g, b)._asdict(),
        lab=rgb_to_lab(r, g, b)._asdict(),
        ryb=rgb_to_ryb(r, g, b)._asdict(),
        name=find_nearest_color_name(hex_color, language),
        brightness=get_brightness(r, g, b),
        contrast_color=get_contrast_color(r, g, b),
    )


class ColorAnalyzer:
    """
    Entry point for callers sampling colors from images.

    The analyzer owns neither the cache nor the extractor lifecycle beyond
    ``close()``; both can be injected so several analyzers share one cache.
    """

    STRATEGIES = tuple(config.SUPPORTED_STRATEGIES)

    def __init__(self,
                 cache: Optional[PixelBufferCache] = None,
                 extractor: Optional[ColorExtractor] = None,
                 language: Optional[str] = None):
        self.cache = cache if cache is not None else PixelBufferCache()
        self.extractor = extractor if extractor is not None else select_extractor(self.cache)
        self.language = language or config.DEFAULT_LANGUAGE
        if not config.validate_language(self.language):
            raise ValueError(f"Unsupported language: {self.language}")

    def describe(self, color: Union[str, Sequence[int]], language: Optional[str] = None) -> ColorDescription:
        return describe_color(color, language or self.language)

    def _describe_sample(self, sample: Optional[ColorSample], language: Optional[str]) -> Optional[ColorDescription]:
        if sample is None:
            return None
        return describe_color(sample, language or self.language)

    async def sample_point(self, uri: str, x: int, y: int,
                           language: Optional[str] = None) -> Optional[ColorDescription]:
        """Describe the color at (x, y); None if nothing could be extracted."""
        sample = await self.extractor.point_color(uri, x, y)
        return self._describe_sample(sample, language)

    async def sample_region(self, uri: str, x: int, y: int, radius: int = None,
                            language: Optional[str] = None) -> Optional[ColorDescription]:
        """Describe the average color of the square around (x, y)."""
        if radius is not None and not config.validate_radius(radius):
            raise ValueError(f"radius out of range: {radius}")
        sample = await self.extractor.region_average(uri, x, y, radius)
        return self._describe_sample(sample, language)

    async def sample_center(self, uri: str, language: Optional[str] = None) -> Optional[ColorDescription]:
        """Describe the color at the image center."""
        sample = await self.extractor.center_color(uri)
        return self._describe_sample(sample, language)

    async def sample_grid(self, uri: str, grid_size: int = None,
                          language: Optional[str] = None) -> List[ColorDescription]:
        """Describe colors on an evenly spaced grid."""
        if grid_size is not None and not config.validate_grid_size(grid_size):
            raise ValueError(f"grid_size out of range: {grid_size}")
        samples = await self.extractor.grid_sample(uri, grid_size)
        return [describe_color(sample, language or self.language) for sample in samples]

    async def extract_palette(self, uri: str, strategy: str = "dominant", max_colors: int = None,
                              sample_rate: int = 1, quality_level: int = 3,
                              language: Optional[str] = None) -> List[ColorDescription]:
        """
        Extract a ranked palette from the whole image.

        Args:
            uri: Image URI
            strategy: ``dominant``, ``adaptive`` or ``perceptual``
            max_colors: Maximum palette size
            sample_rate: Pixel stride for the dominant strategy
            quality_level: Sampling density (1-5) for the adaptive strategy
            language: Naming language

        Returns:
            Palette entries in descending significance; empty if the image
            can't be decoded

        Raises:
            ValueError: For an unknown strategy or an out-of-range size/quality
        """
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown palette strategy: {strategy}")
        if max_colors is not None and not config.validate_max_colors(max_colors):
            raise ValueError(f"max_colors out of range: {max_colors}")
        if not config.validate_quality_level(quality_level):
            raise ValueError(f"quality_level out of range: {quality_level}")

        if not isinstance(self.extractor, DirectPixelExtractor):
            logger.warning("Palette extraction requires decoded pixels; trying direct decode")

        start_time = time.time()
        buffer = await self.cache.load(uri)
        if buffer is None:
            return []

        if strategy == "dominant":
            colors = clustering.extract_dominant_colors(buffer, max_colors, sample_rate)
        elif strategy == "adaptive":
            colors = clustering.extract_adaptive_colors(buffer, max_colors, quality_level)
        else:
            colors = clustering.extract_perceptual_colors(buffer, max_colors)

        duration_ms = (time.time() - start_time) * 1000
        get_logger().log_palette(uri, strategy, len(colors), duration_ms)

        return [describe_color(color, language or self.language) for color in colors]

    def close(self) -> None:
        """Release cached buffers."""
        self.cache.clear()
