"""
HuePick Configuration
Manages environment variables and defaults for the color engine and its HTTP surface.
"""
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration class for HuePick services."""

    # Pixel buffer cache
    MAX_CACHE_SIZE: int = int(os.environ.get("HUEPICK_MAX_CACHE_SIZE", "10"))
    MAX_FILE_MB: int = int(os.environ.get("HUEPICK_MAX_FILE_MB", "20"))

    # Logging
    LOG_LEVEL: str = os.environ.get("HUEPICK_LOG_LEVEL", "INFO")

    # Naming
    DEFAULT_LANGUAGE: str = os.environ.get("HUEPICK_DEFAULT_LANGUAGE", "en")

    # Sampling defaults
    DEFAULT_REGION_RADIUS: int = int(os.environ.get("HUEPICK_DEFAULT_REGION_RADIUS", "2"))
    DEFAULT_GRID_SIZE: int = int(os.environ.get("HUEPICK_DEFAULT_GRID_SIZE", "3"))
    DEFAULT_MAX_COLORS: int = int(os.environ.get("HUEPICK_DEFAULT_MAX_COLORS", "5"))

    # Clustering
    PERCEPTUAL_MAX_SAMPLES: int = int(os.environ.get("HUEPICK_PERCEPTUAL_MAX_SAMPLES", "10000"))

    # Heuristic fallback extractor
    FALLBACK_CROP_SIZE: int = int(os.environ.get("HUEPICK_FALLBACK_CROP_SIZE", "3"))
    FALLBACK_UPSCALE_SIZE: int = int(os.environ.get("HUEPICK_FALLBACK_UPSCALE_SIZE", "100"))
    FALLBACK_MAX_TRIPLETS: int = int(os.environ.get("HUEPICK_FALLBACK_MAX_TRIPLETS", "100"))

    # Feature flags
    ENABLE_DIRECT_DECODE: bool = bool(int(os.environ.get("HUEPICK_ENABLE_DIRECT_DECODE", "1")))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("HUEPICK_ALLOWED_ORIGINS", "")

    # Optional root that relative image paths are resolved against
    IMAGE_ROOT: Optional[str] = os.environ.get("HUEPICK_IMAGE_ROOT")

    SUPPORTED_LANGUAGES = ["en", "vi"]
    SUPPORTED_STRATEGIES = ["dominant", "adaptive", "perceptual"]

    @classmethod
    def validate_language(cls, language: str) -> bool:
        """Validate naming language tag."""
        return language in cls.SUPPORTED_LANGUAGES

    @classmethod
    def validate_grid_size(cls, grid_size: int) -> bool:
        """Validate sampling grid size."""
        return 1 <= grid_size <= 16

    @classmethod
    def validate_max_colors(cls, max_colors: int) -> bool:
        """Validate palette size."""
        return 1 <= max_colors <= 32

    @classmethod
    def validate_quality_level(cls, quality_level: int) -> bool:
        """Validate adaptive clustering quality level."""
        return 1 <= quality_level <= 5

    @classmethod
    def validate_radius(cls, radius: int) -> bool:
        """Validate region sampling radius."""
        return 0 <= radius <= 50


# Global config instance
config = Config()
