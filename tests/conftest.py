"""
Test configuration and fixtures for HuePick.
"""
import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app
from huepick.api import v1
from huepick.services.imaging import PixelBuffer


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_analyzer():
    """Give every test a fresh shared analyzer."""
    v1._analyzer = None
    yield
    if v1._analyzer is not None:
        v1._analyzer.close()
    v1._analyzer = None


@pytest.fixture
def buffer_factory():
    """Build solid-color PixelBuffers."""
    def make_buffer(width, height, rgba):
        pixels = np.zeros((height, width, 4), dtype=np.uint8)
        pixels[:, :] = rgba
        return PixelBuffer.from_array(pixels)
    return make_buffer


@pytest.fixture
def red_buffer(buffer_factory):
    """10×10 opaque red buffer."""
    return buffer_factory(10, 10, (255, 0, 0, 255))


@pytest.fixture
def two_tone_buffer():
    """10×10 buffer: top 7 rows blue, bottom 3 rows yellow."""
    pixels = np.zeros((10, 10, 4), dtype=np.uint8)
    pixels[:7, :] = (0, 0, 255, 255)
    pixels[7:, :] = (255, 255, 0, 255)
    return PixelBuffer.from_array(pixels)


@pytest.fixture
def solid_png(tmp_path):
    """20×20 PNG filled with (40, 160, 90) written to a temp file."""
    path = tmp_path / "solid.png"
    Image.new("RGB", (20, 20), (40, 160, 90)).save(path, format="PNG")
    return str(path)


@pytest.fixture
def quadrant_png(tmp_path):
    """
    16×16 RGBA PNG with four solid quadrants.

    Top-left red, top-right green, bottom-left blue, bottom-right white.
    """
    pixels = np.zeros((16, 16, 4), dtype=np.uint8)
    pixels[:8, :8] = (255, 0, 0, 255)
    pixels[:8, 8:] = (0, 255, 0, 255)
    pixels[8:, :8] = (0, 0, 255, 255)
    pixels[8:, 8:] = (255, 255, 255, 255)
    path = tmp_path / "quadrants.png"
    Image.fromarray(pixels).save(path, format="PNG")
    return str(path)
