"""
Unit tests for image I/O and pixel buffers.
"""
import base64

import numpy as np
import pytest

from huepick.config import Config
from huepick.errors import ImageDecodeError
from huepick.services.imaging import (
    PixelBuffer, decode_data_uri, decode_image_bytes, detect_image_type, read_uri_bytes, resolve_path
)


class TestPixelBuffer:
    """Test buffer validation and views"""

    def test_length_must_match_dimensions(self):
        with pytest.raises(ValueError):
            PixelBuffer(bytes(15), 2, 2)

    def test_as_array_is_read_only(self, red_buffer):
        array = red_buffer.as_array()
        assert array.shape == (10, 10, 4)
        assert not array.flags.writeable

    def test_from_array_requires_rgba(self):
        with pytest.raises(ValueError):
            PixelBuffer.from_array(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_pixel_count(self, red_buffer):
        assert red_buffer.pixel_count == 100


class TestDecoding:
    """Test magic-byte detection and decoding"""

    def test_detect_png(self, solid_png):
        with open(solid_png, "rb") as f:
            assert detect_image_type(f.read()) == "image/png"

    def test_detect_rejects_unknown(self):
        with pytest.raises(ImageDecodeError):
            detect_image_type(b"plain text, no image here")
        with pytest.raises(ImageDecodeError):
            detect_image_type(b"tiny")

    def test_rgb_image_gets_opaque_alpha(self, solid_png):
        with open(solid_png, "rb") as f:
            buffer = decode_image_bytes(f.read())
        assert (buffer.width, buffer.height) == (20, 20)
        assert set(buffer.as_array()[:, :, 3].ravel().tolist()) == {255}

    def test_truncated_png(self, solid_png):
        with open(solid_png, "rb") as f:
            data = f.read()
        with pytest.raises(ImageDecodeError):
            decode_image_bytes(data[:40])


class TestUris:
    """Test URI resolution and reading"""

    def test_data_uri(self):
        assert decode_data_uri("data:image/png;base64," + base64.b64encode(b"abc").decode()) == b"abc"

    def test_data_uri_size_limit(self, monkeypatch):
        from huepick.config import config
        monkeypatch.setattr(config, "MAX_FILE_MB", 0)
        with pytest.raises(ImageDecodeError):
            decode_data_uri("data:image/png;base64," + base64.b64encode(b"abc").decode())

    @pytest.mark.asyncio
    async def test_file_size_limit(self, monkeypatch, solid_png):
        from huepick.config import config
        monkeypatch.setattr(config, "MAX_FILE_MB", 0)
        with pytest.raises(ImageDecodeError):
            await read_uri_bytes(solid_png)

    def test_invalid_base64(self):
        with pytest.raises(ImageDecodeError):
            decode_data_uri("data:image/png;base64,@@@")

    def test_file_uri(self, tmp_path):
        path = tmp_path / "a b.png"
        assert resolve_path(path.as_uri()) == path

    def test_image_root(self, monkeypatch, tmp_path):
        from huepick.config import config
        monkeypatch.setattr(config, "IMAGE_ROOT", str(tmp_path))
        assert resolve_path("shots/a.png") == tmp_path / "shots" / "a.png"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(ImageDecodeError):
            await read_uri_bytes(str(tmp_path / "missing.png"))

    @pytest.mark.asyncio
    async def test_empty_uri(self):
        with pytest.raises(ImageDecodeError):
            await read_uri_bytes("")


class TestConfigValidation:
    """Test configuration validators"""

    def test_language(self):
        assert Config.validate_language("en")
        assert Config.validate_language("vi")
        assert not Config.validate_language("fr")

    def test_ranges(self):
        assert Config.validate_grid_size(1) and Config.validate_grid_size(16)
        assert not Config.validate_grid_size(0)
        assert Config.validate_max_colors(32) and not Config.validate_max_colors(33)
        assert Config.validate_quality_level(5) and not Config.validate_quality_level(6)
        assert Config.validate_radius(0) and not Config.validate_radius(-1)
