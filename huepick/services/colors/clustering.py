"""
Palette Clustering

Ranks representative colors of a whole image with one of three strategies:

- dominant: fixed 32-wide channel quantization and a frequency histogram
- adaptive: grid seeds plus one nearest-seed assignment pass
- perceptual: channel-specific quantization weighted by luminance

All strategies skip pixels with alpha < 128, return at most the requested
number of colors in descending significance, keep first-seen order among
ties, and return an empty list for a missing or empty buffer.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from loguru import logger
from sklearn.metrics import pairwise_distances_argmin

from huepick.config import config
from huepick.services.imaging import ColorSample, PixelBuffer

ALPHA_THRESHOLD = 128
DOMINANT_BUCKET = 32
# Green gets the finest buckets, the eye is most sensitive to it
PERCEPTUAL_BUCKETS = (24, 16, 32)


@dataclass
class ColorCluster:
    """A representative color and the number of sampled pixels behind it."""
    color: ColorSample
    member_count: int
    score: float = 0.0


def _flat_pixels(buffer: Optional[PixelBuffer]) -> Optional[np.ndarray]:
    if buffer is None or buffer.pixel_count == 0:
        return None
    return buffer.as_array().reshape(-1, 4)


def _opaque(pixels: np.ndarray) -> np.ndarray:
    return pixels[pixels[:, 3] >= ALPHA_THRESHOLD]


def _pack_keys(channels: np.ndarray) -> np.ndarray:
    channels = channels.astype(np.int64)
    return (channels[:, 0] << 16) | (channels[:, 1] << 8) | channels[:, 2]


def _rank_buckets(keys: np.ndarray, scores_for):
    """
    Group pixels by key and order groups by descending score.

    Returns (first_index, counts, scores) arrays in ranked order; ties keep
    the order in which the key was first seen.
    """
    unique_keys, first_index, inverse, counts = np.unique(
        keys, return_index=True, return_inverse=True, return_counts=True
    )
    scores = scores_for(inverse.reshape(-1), counts, len(unique_keys))
    order = np.lexsort((first_index, -scores))
    return first_index[order], counts[order], scores[order]


def dominant_clusters(buffer: Optional[PixelBuffer], max_colors: int = None,
                      sample_rate: int = 1) -> List[ColorCluster]:
    """Frequency-quantization clusters; see ``extract_dominant_colors``."""
    if max_colors is None:
        max_colors = config.DEFAULT_MAX_COLORS
    pixels = _flat_pixels(buffer)
    if pixels is None or max_colors < 1:
        return []

    sampled = _opaque(pixels[::max(1, int(sample_rate))])
    if sampled.shape[0] == 0:
        logger.debug("No opaque pixels survived sampling")
        return []

    quantized = (sampled[:, :3] // DOMINANT_BUCKET) * DOMINANT_BUCKET
    first_index, counts, _ = _rank_buckets(
        _pack_keys(quantized),
        lambda inverse, counts, n: counts.astype(np.float64),
    )

    clusters = []
    for idx, count in zip(first_index[:max_colors], counts[:max_colors]):
        r, g, b = (int(v) for v in quantized[idx])
        clusters.append(ColorCluster(ColorSample(r, g, b, int(sampled[idx, 3])), int(count), float(count)))

    logger.debug(f"Extracted {len(clusters)} dominant colors from {sampled.shape[0]} pixels")
    return clusters


def extract_dominant_colors(buffer: Optional[PixelBuffer], max_colors: int = None,
                            sample_rate: int = 1) -> List[ColorSample]:
    """
    Most frequent colors after 32-wide channel quantization.

    Args:
        buffer: Decoded pixel buffer
        max_colors: Maximum number of colors returned
        sample_rate: Visit every ``sample_rate``-th pixel

    Returns:
        Quantized colors ordered by pixel count, descending
    """
    return [cluster.color for cluster in dominant_clusters(buffer, max_colors, sample_rate)]


def _grid_seeds(buffer: PixelBuffer, pixels: np.ndarray, target_colors: int) -> np.ndarray:
    grid = math.ceil(math.sqrt(target_colors * 2))
    max_seeds = target_colors * 2

    seeds = []
    for j in range(grid):
        for i in range(grid):
            if len(seeds) >= max_seeds:
                break
            x = min(buffer.width - 1, int((i + 0.5) * buffer.width / grid))
            y = min(buffer.height - 1, int((j + 0.5) * buffer.height / grid))
            pixel = pixels[y * buffer.width + x]
            if pixel[3] < ALPHA_THRESHOLD:
                continue
            seeds.append(pixel[:3])

    return np.array(seeds, dtype=np.float64).reshape(-1, 3)


def adaptive_clusters(buffer: Optional[PixelBuffer], target_colors: int = None,
                      quality_level: int = 3) -> List[ColorCluster]:
    """Seed-and-assign clusters; see ``extract_adaptive_colors``."""
    if target_colors is None:
        target_colors = config.DEFAULT_MAX_COLORS
    pixels = _flat_pixels(buffer)
    if pixels is None or target_colors < 1:
        return []

    seeds = _grid_seeds(buffer, pixels, target_colors)
    if seeds.shape[0] == 0:
        logger.debug("No opaque seed pixels found")
        return []

    step = max(1, 6 - int(quality_level))
    sampled = _opaque(pixels[::step])
    if sampled.shape[0] == 0:
        return []

    samples = sampled.astype(np.float64)
    # Single assignment pass; the seeds are never re-estimated
    labels = pairwise_distances_argmin(samples[:, :3], seeds, metric="euclidean")

    n_seeds = seeds.shape[0]
    counts = np.bincount(labels, minlength=n_seeds)
    sums = np.stack([np.bincount(labels, weights=samples[:, c], minlength=n_seeds) for c in range(4)], axis=1)

    populated = np.flatnonzero(counts)
    order = populated[np.argsort(-counts[populated], kind="stable")]

    clusters = []
    for seed_index in order[:target_colors]:
        count = int(counts[seed_index])
        mean = np.floor(sums[seed_index] / count + 0.5).astype(int)
        clusters.append(ColorCluster(ColorSample(*(int(v) for v in mean)), count, float(count)))

    logger.debug(f"Adaptive clustering: {n_seeds} seeds, {len(clusters)} clusters from {sampled.shape[0]} pixels")
    return clusters


def extract_adaptive_colors(buffer: Optional[PixelBuffer], target_colors: int = None,
                            quality_level: int = 3) -> List[ColorSample]:
    """
    Representative colors from grid seeds refined by one assignment pass.

    Up to ``2 * target_colors`` opaque seeds are read from a
    ``ceil(sqrt(2 * target_colors))`` square grid. Every
    ``max(1, 6 - quality_level)``-th opaque pixel is assigned to its nearest
    seed in RGB space and each seed's members are averaged. This is a
    one-shot approximation of k-means; there is no convergence loop.

    Args:
        buffer: Decoded pixel buffer
        target_colors: Maximum number of colors returned
        quality_level: 1 (fast) to 5 (every pixel)

    Returns:
        Mean colors ordered by membership count, descending
    """
    return [cluster.color for cluster in adaptive_clusters(buffer, target_colors, quality_level)]


def perceptual_clusters(buffer: Optional[PixelBuffer], max_colors: int = None) -> List[ColorCluster]:
    """Luminance-weighted clusters; see ``extract_perceptual_colors``."""
    if max_colors is None:
        max_colors = config.DEFAULT_MAX_COLORS
    pixels = _flat_pixels(buffer)
    if pixels is None or max_colors < 1:
        return []

    step = max(1, pixels.shape[0] // config.PERCEPTUAL_MAX_SAMPLES)
    sampled = _opaque(pixels[::step])
    if sampled.shape[0] == 0:
        return []

    rgb = sampled[:, :3].astype(np.float64)
    luminance = 0.299 * rgb[:, 0] + 0.587 * rgb[:, 1] + 0.114 * rgb[:, 2]
    weights = np.maximum(0.1, luminance / 255)

    quantized = np.stack(
        [(sampled[:, c].astype(np.int64) // width) * width for c, width in enumerate(PERCEPTUAL_BUCKETS)],
        axis=1,
    )

    first_index, counts, scores = _rank_buckets(
        _pack_keys(quantized),
        lambda inverse, counts, n: counts * np.bincount(inverse, weights=weights, minlength=n),
    )

    clusters = []
    for idx, count, score in zip(first_index[:max_colors], counts[:max_colors], scores[:max_colors]):
        r, g, b = (int(v) for v in quantized[idx])
        clusters.append(ColorCluster(ColorSample(r, g, b, int(sampled[idx, 3])), int(count), float(score)))

    logger.debug(f"Extracted {len(clusters)} perceptual colors from {sampled.shape[0]} pixels")
    return clusters


def extract_perceptual_colors(buffer: Optional[PixelBuffer], max_colors: int = None) -> List[ColorSample]:
    """
    Colors ranked by frequency times accumulated luminance weight.

    About 10,000 pixels are sampled. Channels are quantized to 24 (R),
    16 (G) and 32 (B) wide buckets and each pixel is weighted by
    ``max(0.1, luminance / 255)``.
    """
    return [cluster.color for cluster in perceptual_clusters(buffer, max_colors)]
