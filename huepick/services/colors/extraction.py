"""
Color Extraction Strategies

One capability interface for reading colors out of an image URI, with two
interchangeable implementations:

- ``DirectPixelExtractor`` decodes the image into a cached PixelBuffer and
  samples exact pixels.
- ``HeuristicFallbackExtractor`` estimates colors from re-encoded
  micro-crops when direct decoding is unavailable. It trades accuracy for
  robustness and should not be treated as equally precise.

``select_extractor`` picks the strategy at call time.
"""

import asyncio
import math
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from loguru import logger

from huepick.config import config
from huepick.errors import ImageDecodeError
from huepick.services.cache import PixelBufferCache
from huepick.services.colors import sampler
from huepick.services.colors.fallback import decode_image, extract_color_from_image
from huepick.services.imaging import ColorSample, native_decode_available, read_uri_bytes


class ColorExtractor(ABC):
    """Reads colors from an image URI."""

    name: str = "abstract"

    @abstractmethod
    async def dimensions(self, uri: str) -> Optional[Tuple[int, int]]:
        """Image (width, height), or None if unreadable."""
        pass

    @abstractmethod
    async def point_color(self, uri: str, x: int, y: int) -> Optional[ColorSample]:
        """Color at (x, y), or None if unreadable or out of bounds."""
        pass

    @abstractmethod
    async def region_average(self, uri: str, x: int, y: int, radius: int = None) -> Optional[ColorSample]:
        """Average color around (x, y)."""
        pass

    @abstractmethod
    async def grid_sample(self, uri: str, grid_size: int = None) -> List[ColorSample]:
        """Colors on an evenly spaced interior grid."""
        pass

    async def center_color(self, uri: str) -> Optional[ColorSample]:
        """Color at the image center."""
        size = await self.dimensions(uri)
        if size is None:
            return None
        width, height = size
        return await self.point_color(uri, width // 2, height // 2)


class DirectPixelExtractor(ColorExtractor):
    """Exact sampling over decoded, cached pixel buffers."""

    name = "direct"

    def __init__(self, cache: Optional[PixelBufferCache] = None):
        self.cache = cache if cache is not None else PixelBufferCache()

    async def dimensions(self, uri: str) -> Optional[Tuple[int, int]]:
        return await self.cache.dimensions(uri)

    async def point_color(self, uri: str, x: int, y: int) -> Optional[ColorSample]:
        return sampler.point_color(await self.cache.load(uri), x, y)

    async def region_average(self, uri: str, x: int, y: int, radius: int = None) -> Optional[ColorSample]:
        return sampler.region_average(await self.cache.load(uri), x, y, radius)

    async def grid_sample(self, uri: str, grid_size: int = None) -> List[ColorSample]:
        return sampler.grid_sample(await self.cache.load(uri), grid_size)

    async def center_color(self, uri: str) -> Optional[ColorSample]:
        return sampler.center_color(await self.cache.load(uri))


class HeuristicFallbackExtractor(ColorExtractor):
    """
    Approximate sampling through re-encoded micro-crops.

    Every call re-reads the image; nothing is cached. Region averages reuse
    the point estimate, which already blends a 3×3 neighbourhood.
    """

    name = "heuristic"

    async def _decode(self, uri: str):
        try:
            file_bytes = await read_uri_bytes(uri)
        except ImageDecodeError as e:
            logger.warning(f"Fallback extractor failed to read {uri}: {e}")
            return None
        image = await asyncio.to_thread(decode_image, file_bytes)
        if image is None:
            logger.warning(f"Fallback extractor could not decode {uri}")
        return image

    @staticmethod
    def _in_bounds(image, x: int, y: int) -> bool:
        height, width = image.shape[:2]
        return 0 <= math.floor(x) < width and 0 <= math.floor(y) < height

    async def dimensions(self, uri: str) -> Optional[Tuple[int, int]]:
        image = await self._decode(uri)
        if image is None:
            return None
        height, width = image.shape[:2]
        return width, height

    async def point_color(self, uri: str, x: int, y: int) -> Optional[ColorSample]:
        image = await self._decode(uri)
        if image is None or not self._in_bounds(image, x, y):
            return None
        return await asyncio.to_thread(extract_color_from_image, image, x, y)

    async def region_average(self, uri: str, x: int, y: int, radius: int = None) -> Optional[ColorSample]:
        return await self.point_color(uri, x, y)

    async def grid_sample(self, uri: str, grid_size: int = None) -> List[ColorSample]:
        if grid_size is None:
            grid_size = config.DEFAULT_GRID_SIZE
        image = await self._decode(uri)
        if image is None or grid_size < 1:
            return []

        height, width = image.shape[:2]
        step_x = width // (grid_size + 1)
        step_y = height // (grid_size + 1)

        colors = []
        for i in range(1, grid_size + 1):
            for j in range(1, grid_size + 1):
                x, y = i * step_x, j * step_y
                if self._in_bounds(image, x, y):
                    colors.append(await asyncio.to_thread(extract_color_from_image, image, x, y))

        logger.debug(f"Fallback extracted {len(colors)} colors from {grid_size}x{grid_size} grid")
        return colors


def select_extractor(cache: Optional[PixelBufferCache] = None,
                     prefer_direct: Optional[bool] = None) -> ColorExtractor:
    """
    Choose the extraction strategy.

    Args:
        cache: Buffer cache injected into the direct extractor
        prefer_direct: Force a strategy; defaults to whether the native
            decode path is available

    Returns:
        DirectPixelExtractor or HeuristicFallbackExtractor
    """
    if prefer_direct is None:
        prefer_direct = native_decode_available()

    if prefer_direct:
        return DirectPixelExtractor(cache)

    logger.info("Direct pixel decoding unavailable, using heuristic fallback extractor")
    return HeuristicFallbackExtractor()
