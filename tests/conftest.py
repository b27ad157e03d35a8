import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from visdist.comparer import StringComparer
from visdist.pixel_buffer import PixelBuffer
from visdist.rasterizer import RenderConfig


@pytest.fixture
def make_buffer():
    """Build a buffer whose columns are flat gray levels, e.g. make_buffer(0, 255)."""

    def _make(*levels, height=2):
        pixels = np.zeros((height, len(levels), 3), dtype=np.uint8)
        for x, level in enumerate(levels):
            pixels[:, x] = level
        return PixelBuffer(pixels)

    return _make


@pytest.fixture
def render_config():
    # Pillow's bundled FreeType font, black on white, 14px
    return RenderConfig(font_size=14, antialias=True)


@pytest.fixture
def comparer(render_config):
    return StringComparer(render_config)
