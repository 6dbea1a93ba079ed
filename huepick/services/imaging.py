"""
HuePick Imaging Utilities
Handles image I/O, validation and decoding into RGBA8888 pixel buffers.
"""
import asyncio
import base64
import binascii
import io
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Tuple
from urllib.parse import unquote, urlparse

import numpy as np
from PIL import Image, UnidentifiedImageError

from huepick.config import config
from huepick.errors import ImageDecodeError


class ColorSample(NamedTuple):
    """A sampled color; alpha defaults to fully opaque."""
    r: int
    g: int
    b: int
    a: int = 255

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


@dataclass(frozen=True)
class PixelBuffer:
    """
    Decoded image as tightly packed RGBA8888 bytes.

    Row-major; pixel (x, y) starts at byte offset ``(y * width + x) * 4``.
    """
    data: bytes
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid buffer dimensions: {self.width}×{self.height}")
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise ValueError(
                f"Buffer length mismatch: got {len(self.data)} bytes, "
                f"expected {expected} for {self.width}×{self.height} RGBA"
            )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view over the buffer."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, 4)

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (H, W, 4) uint8 array."""
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) RGBA array, got shape {rgba.shape}")
        height, width = rgba.shape[:2]
        return cls(np.ascontiguousarray(rgba, dtype=np.uint8).tobytes(), width, height)

    @classmethod
    def from_image(cls, pil_image: Image.Image) -> "PixelBuffer":
        """Build a buffer from a PIL image, converting to RGBA if necessary."""
        if pil_image.mode != "RGBA":
            pil_image = pil_image.convert("RGBA")
        width, height = pil_image.size
        return cls(pil_image.tobytes(), width, height)


def detect_image_type(file_bytes: bytes) -> str:
    """
    Detect image MIME type from magic bytes.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        ImageDecodeError: If the bytes don't match a supported format
    """
    if len(file_bytes) < 8:
        raise ImageDecodeError("File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    elif file_bytes[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    elif file_bytes.startswith(b'RIFF') and file_bytes[8:12] == b'WEBP':
        return "image/webp"
    elif file_bytes.startswith(b'BM'):
        return "image/bmp"
    else:
        raise ImageDecodeError("Invalid image file. Magic bytes don't match supported formats.")


def resolve_path(uri: str) -> Path:
    """Map a plain path or ``file://`` URI to a filesystem path."""
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))

    path = Path(uri)
    if not path.is_absolute() and config.IMAGE_ROOT:
        path = Path(config.IMAGE_ROOT) / path
    return path


def decode_data_uri(uri: str) -> bytes:
    """Decode a ``data:image/...;base64,`` URI (or bare base64) to bytes."""
    payload = uri.split(",", 1)[1] if "," in uri else uri
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {str(e)}") from e

    _check_size(len(data))
    return data


def _check_size(size: int) -> None:
    if size > config.MAX_FILE_MB * 1024 * 1024:
        raise ImageDecodeError(f"File too large. Maximum size: {config.MAX_FILE_MB}MB")


def _read_file(path: Path) -> bytes:
    if not path.exists() or not path.is_file():
        raise ImageDecodeError(f"File not found: {path}")

    _check_size(path.stat().st_size)

    return path.read_bytes()


async def read_uri_bytes(uri: str) -> bytes:
    """
    Read the raw encoded bytes behind an image URI.

    Supports data URIs, ``file://`` URIs and plain filesystem paths. File
    reads run in a worker thread so the event loop is not blocked.

    Raises:
        ImageDecodeError: If the URI cannot be read
    """
    if not uri:
        raise ImageDecodeError("Empty image URI")

    if uri.startswith("data:"):
        return decode_data_uri(uri)

    try:
        return await asyncio.to_thread(_read_file, resolve_path(uri))
    except OSError as e:
        raise ImageDecodeError(f"Failed to read file: {str(e)}") from e


def open_image(file_bytes: bytes) -> Image.Image:
    """
    Open encoded bytes as a fully loaded PIL image.

    Raises:
        ImageDecodeError: If the bytes can't be decoded
    """
    detect_image_type(file_bytes)

    try:
        pil_image = Image.open(io.BytesIO(file_bytes))
        pil_image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Failed to decode image: {str(e)}") from e

    return pil_image


def decode_image_bytes(file_bytes: bytes) -> PixelBuffer:
    """Decode encoded image bytes into an RGBA8888 PixelBuffer."""
    return PixelBuffer.from_image(open_image(file_bytes))


async def load_pixel_buffer(uri: str) -> PixelBuffer:
    """
    Read and decode an image URI.

    Raises:
        ImageDecodeError: If reading or decoding fails
    """
    file_bytes = await read_uri_bytes(uri)
    return await asyncio.to_thread(decode_image_bytes, file_bytes)


def native_decode_available() -> bool:
    """Whether the direct pixel decode path may be used."""
    return config.ENABLE_DIRECT_DECODE


def get_buffer_dimensions(buffer: PixelBuffer) -> Tuple[int, int]:
    """
    Get buffer width and height.

    Returns:
        Tuple of (width, height)
    """
    return buffer.width, buffer.height
