"""Shared fixtures and buffer builders for the test suite."""

import numpy as np
import pytest

from colorpage.image_processing.buffer import PixelBuffer
from colorpage.models import ComplexityLevel, ProcessingSettings


def make_binary_buffer(width, height, ink_pixels=(), ink_rects=()):
    """White buffer with ink at the given (x, y) pixels and (x0, y0, x1, y1) rects.

    Rect bounds are inclusive.
    """
    buffer = np.full((height, width, 4), 255, dtype=np.uint8)
    for x, y in ink_pixels:
        buffer[y, x, :3] = 0
    for x0, y0, x1, y1 in ink_rects:
        buffer[y0:y1 + 1, x0:x1 + 1, :3] = 0
    return PixelBuffer.from_array(buffer)


def make_disc_image(size=60, radius=12, ink=0, paper=255):
    """RGB photo stand-in: a dark disc centered on a light background."""
    yy, xx = np.mgrid[0:size, 0:size]
    center = (size - 1) / 2
    inside = (xx - center) ** 2 + (yy - center) ** 2 <= radius ** 2
    gray = np.where(inside, ink, paper).astype(np.uint8)
    return PixelBuffer.from_array(np.stack([gray, gray, gray], axis=-1))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_buffer(rng):
    """32x24 buffer of random RGBA noise."""
    data = rng.integers(0, 256, size=(24, 32, 4), dtype=np.uint8)
    return PixelBuffer.from_array(data)


@pytest.fixture
def default_settings():
    return ProcessingSettings()


@pytest.fixture
def detailed_settings():
    """Settings that keep thin edge lines (no opening)."""
    return ProcessingSettings(complexity_level=ComplexityLevel.COMPLEX)


@pytest.fixture
def square_buffer():
    """10x10 white buffer with a 4x4 black square at (3,3)-(6,6)."""
    return make_binary_buffer(10, 10, ink_rects=[(3, 3, 6, 6)])


@pytest.fixture
def disc_buffer():
    return make_disc_image()
