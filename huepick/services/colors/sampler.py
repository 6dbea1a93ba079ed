"""
Pixel Sampling

Reads colors out of a decoded PixelBuffer: a single pixel, the average of a
square region, an evenly spaced grid, or the center pixel. Every sampler
returns None (or an empty list) for coordinates outside the buffer instead
of raising.
"""

import math
from typing import List, Optional

import numpy as np
from loguru import logger

from huepick.config import config
from huepick.services.imaging import ColorSample, PixelBuffer


def _in_bounds(buffer: PixelBuffer, x: int, y: int) -> bool:
    return 0 <= x < buffer.width and 0 <= y < buffer.height


def point_color(buffer: Optional[PixelBuffer], x: int, y: int) -> Optional[ColorSample]:
    """
    Get the RGBA color of a single pixel.

    Args:
        buffer: Decoded pixel buffer
        x: Column (0-based)
        y: Row (0-based)

    Returns:
        ColorSample, or None if the buffer is missing or (x, y) is out of bounds
    """
    if buffer is None:
        return None

    # Floor so fractional coordinates left of or above the buffer stay out of bounds
    x, y = math.floor(x), math.floor(y)
    if not _in_bounds(buffer, x, y):
        logger.debug(f"Coordinates out of bounds: ({x}, {y}) for {buffer.width}×{buffer.height}")
        return None

    index = (y * buffer.width + x) * 4
    if index + 3 >= len(buffer.data):
        logger.debug(f"Pixel index {index} out of range")
        return None

    r, g, b, a = buffer.data[index:index + 4]
    return ColorSample(r, g, b, a)


def region_average(buffer: Optional[PixelBuffer], center_x: int, center_y: int,
                   radius: int = None) -> Optional[ColorSample]:
    """
    Average the square region ``[center - radius, center + radius]``.

    The square is clipped to the buffer. Channel means (alpha included) are
    rounded half up.

    Args:
        buffer: Decoded pixel buffer
        center_x: Region center column
        center_y: Region center row
        radius: Half-width of the square (default from config)

    Returns:
        Averaged ColorSample, or None if the center is out of bounds
    """
    if buffer is None:
        return None
    if radius is None:
        radius = config.DEFAULT_REGION_RADIUS

    center_x, center_y, radius = math.floor(center_x), math.floor(center_y), max(0, int(radius))
    if not _in_bounds(buffer, center_x, center_y):
        logger.debug(f"Region center out of bounds: ({center_x}, {center_y})")
        return None

    start_x = max(0, center_x - radius)
    end_x = min(buffer.width - 1, center_x + radius)
    start_y = max(0, center_y - radius)
    end_y = min(buffer.height - 1, center_y + radius)

    region = buffer.as_array()[start_y:end_y + 1, start_x:end_x + 1].reshape(-1, 4)
    if region.shape[0] == 0:
        return None

    means = np.floor(region.astype(np.float64).mean(axis=0) + 0.5).astype(int)
    logger.debug(
        f"Average color from {region.shape[0]} pixels around ({center_x}, {center_y}): "
        f"RGB({means[0]}, {means[1]}, {means[2]})"
    )
    return ColorSample(*(int(v) for v in means))


def grid_sample(buffer: Optional[PixelBuffer], grid_size: int = None) -> List[ColorSample]:
    """
    Sample a ``grid_size × grid_size`` lattice of interior points.

    Points sit at ``(i * step_x, j * step_y)`` for ``i, j`` in
    ``1..grid_size`` with ``step = dimension // (grid_size + 1)``; columns are
    the outer loop.
    """
    if buffer is None:
        return []
    if grid_size is None:
        grid_size = config.DEFAULT_GRID_SIZE
    if grid_size < 1:
        return []

    step_x = buffer.width // (grid_size + 1)
    step_y = buffer.height // (grid_size + 1)

    colors = []
    for i in range(1, grid_size + 1):
        for j in range(1, grid_size + 1):
            color = point_color(buffer, i * step_x, j * step_y)
            if color is not None:
                colors.append(color)

    logger.debug(f"Sampled {len(colors)} colors from {grid_size}x{grid_size} grid")
    return colors


def center_color(buffer: Optional[PixelBuffer]) -> Optional[ColorSample]:
    """Color of the pixel at ``(width // 2, height // 2)``."""
    if buffer is None:
        return None
    return point_color(buffer, buffer.width // 2, buffer.height // 2)

