"""
Heuristic Fallback Color Extraction

Degraded-accuracy path for environments where images can't be decoded into
a pixel buffer directly. A 3×3 micro-region around the requested point is
cropped, re-encoded as PNG, upscaled, and re-encoded again; the resulting
byte stream is then scanned for triplets that look like plausible RGB
values, and the accepted triplets are averaged.

The scan reads the encoded (compressed) stream, so results are an
approximation of the local color and can be noticeably off for detailed or
low-contrast regions. Use the direct pixel path whenever it is available.
"""

import math
from typing import Optional

import cv2
import numpy as np
from loguru import logger

from huepick.config import config
from huepick.services.imaging import ColorSample

DEFAULT_GRAY = ColorSample(128, 128, 128, 255)


def is_plausible_rgb(r: int, g: int, b: int) -> bool:
    """
    Check whether a byte triplet plausibly encodes a pixel color.

    Rejects padding-like values (pure black or white, gray extremes) and
    printable-ASCII triplets without meaningful color variation, which are
    usually chunk names or text metadata.
    """
    if not (0 <= r <= 255 and 0 <= g <= 255 and 0 <= b <= 255):
        return False

    if r == g == b and r in (0, 255):
        return False

    if 32 <= r <= 126 and 32 <= g <= 126 and 32 <= b <= 126:
        variance = abs(r - g) + abs(g - b) + abs(r - b)
        return variance > 30

    return True


def scan_rgb_triplets(data: bytes, max_triplets: int = None) -> np.ndarray:
    """
    Collect plausible RGB triplets from a byte stream.

    Triplets overlap (every byte offset starts a candidate) and the first
    ``max_triplets`` accepted ones are returned as an (N, 3) int array.
    """
    if max_triplets is None:
        max_triplets = config.FALLBACK_MAX_TRIPLETS

    triplets = []
    for i in range(len(data) - 2):
        if len(triplets) >= max_triplets:
            break
        r, g, b = data[i], data[i + 1], data[i + 2]
        if is_plausible_rgb(r, g, b):
            triplets.append((r, g, b))

    return np.array(triplets, dtype=np.int32).reshape(-1, 3)


def average_triplets(triplets: np.ndarray) -> ColorSample:
    """Average accepted triplets (half-up rounding); neutral gray if none."""
    if triplets.shape[0] == 0:
        return DEFAULT_GRAY
    mean = np.floor(triplets.astype(np.float64).mean(axis=0) + 0.5).astype(int)
    return ColorSample(int(mean[0]), int(mean[1]), int(mean[2]), 255)


def _encode_png(image_bgr: np.ndarray) -> bytes:
    success, encoded = cv2.imencode(".png", image_bgr)
    if not success:
        raise ValueError("Failed to encode PNG")
    return encoded.tobytes()


def decode_image(file_bytes: bytes) -> Optional[np.ndarray]:
    """Decode encoded image bytes to a BGR array with OpenCV; None on failure."""
    if not file_bytes:
        return None
    image = cv2.imdecode(np.frombuffer(file_bytes, np.uint8), cv2.IMREAD_COLOR)
    if image is None or image.size == 0:
        return None
    return image


def extract_color_from_image(image_bgr: np.ndarray, x: int, y: int) -> ColorSample:
    """
    Heuristically estimate the color around (x, y) of a BGR image.

    Args:
        image_bgr: Decoded image (OpenCV channel order)
        x: Column of the requested point
        y: Row of the requested point

    Returns:
        Estimated color; neutral gray if no plausible triplet was found
    """
    height, width = image_bgr.shape[:2]
    crop_size = config.FALLBACK_CROP_SIZE
    half = crop_size // 2

    # Keep the micro-region inside the image
    crop_x = max(0, min(width - crop_size, math.floor(x) - half))
    crop_y = max(0, min(height - crop_size, math.floor(y) - half))
    crop = image_bgr[crop_y:crop_y + crop_size, crop_x:crop_x + crop_size]

    # Round-trip through PNG, then upscale so the sampled color dominates the stream
    cropped = cv2.imdecode(np.frombuffer(_encode_png(crop), np.uint8), cv2.IMREAD_COLOR)
    size = config.FALLBACK_UPSCALE_SIZE
    scaled = cv2.resize(cropped, (size, size), interpolation=cv2.INTER_LINEAR)

    triplets = scan_rgb_triplets(_encode_png(scaled))
    color = average_triplets(triplets)

    logger.debug(
        f"Fallback extraction at ({x}, {y}) from {crop_size}x{crop_size} crop at ({crop_x}, {crop_y}): "
        f"{triplets.shape[0]} triplets -> RGB({color.r}, {color.g}, {color.b})"
    )
    return color


def extract_color_fallback(file_bytes: bytes, x: int, y: int) -> Optional[ColorSample]:
    """
    Heuristic color estimate straight from encoded image bytes.

    Returns:
        ColorSample, or None if the image can't be decoded or (x, y) is
        outside it
    """
    image = decode_image(file_bytes)
    if image is None:
        logger.warning("Fallback extractor could not decode image bytes")
        return None

    height, width = image.shape[:2]
    if not (0 <= math.floor(x) < width and 0 <= math.floor(y) < height):
        logger.debug(f"Coordinates out of bounds: ({x}, {y}) for {width}×{height}")
        return None

    return extract_color_from_image(image, x, y)
