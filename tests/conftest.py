"""
Pytest configuration and fixtures for conversion tests
"""
import pytest
import sys
from pathlib import Path

import numpy as np
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def _cairo_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


requires_cairo = pytest.mark.skipif(
    not _cairo_available(), reason="CairoSVG / libcairo not available"
)


SQUARE_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="300" height="300" viewBox="0 0 300 300">
  <rect x="50" y="50" width="200" height="200" fill="#ff0000"/>
</svg>
"""


@pytest.fixture
def png_1000x500(tmp_path):
    """Opaque 1000x500 PNG with a gradient"""
    x = np.linspace(0, 255, 1000, dtype=np.uint8)
    pixels = np.zeros((500, 1000, 3), dtype=np.uint8)
    pixels[:, :, 0] = x
    pixels[:, :, 2] = x[::-1]
    path = tmp_path / "wide.png"
    Image.fromarray(pixels).save(path)
    return path


@pytest.fixture
def noisy_image():
    """Random RGB content, poorly compressible"""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(256, 256, 3), dtype=np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def flat_image():
    """Single-color RGB content, highly compressible"""
    return Image.new("RGB", (64, 64), (120, 160, 200))


@pytest.fixture
def rgba_png(tmp_path):
    """Half-transparent PNG"""
    image = Image.new("RGBA", (40, 20), (0, 0, 255, 128))
    path = tmp_path / "alpha.png"
    image.save(path)
    return path


@pytest.fixture
def square_svg(tmp_path):
    """300x300 vector document"""
    path = tmp_path / "square.svg"
    path.write_text(SQUARE_SVG)
    return path


@pytest.fixture
def output_dir(tmp_path):
    """Temporary output directory for tests"""
    output = tmp_path / "output"
    output.mkdir()
    return output
