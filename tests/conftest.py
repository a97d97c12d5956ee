import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest

from mandelbrot_explorer.camera import Camera


def _coverage_counts(rects, width, height):
    for rect in rects:
        assert rect.width > 0 and rect.height > 0
        assert 0 <= rect.x and rect.x + rect.width <= width
        assert 0 <= rect.y and rect.y + rect.height <= height
    counts = np.zeros((height, width), dtype=np.int32)
    for rect in rects:
        counts[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width] += 1
    return counts


@pytest.fixture
def coverage_counts():
    """Per-pixel count of how many rectangles cover each pixel."""
    return _coverage_counts


@pytest.fixture
def camera():
    return Camera.initial(48, 32)
