import os
import shutil
import subprocess

import numpy as np
import pytest

from asciishade.cache import BrightnessCache
from asciishade.image import ArrayImage

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if os.path.exists(path):
            return path
    if shutil.which("fc-match"):
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if out.returncode == 0 and out.stdout.strip():
            return out.stdout.strip()
    return None


FONT_PATH = _find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")

# Ink cell counts for the fake rasterizer
INK = {" ": 0, ".": 4, ":": 16, "o": 64, "#": 160, "@": 200}


class FakeRasterizer:
    """Rasterizer returning masks with a fixed ink count per character; counts calls."""

    def __init__(self, ink=None):
        self.ink = INK if ink is None else ink
        self.calls = []

    def __call__(self, char, height, font):
        self.calls.append((char, height, font))
        mask = np.zeros((height, height), dtype=bool)
        mask.flat[: self.ink[char]] = True
        return mask


def solid(width, height, value):
    return ArrayImage(np.full((height, width, 3), value, dtype=np.uint8))


@pytest.fixture
def font_path():
    if FONT_PATH is None:
        pytest.skip("No monospace font found on system")
    return FONT_PATH


@pytest.fixture
def rasterizer():
    return FakeRasterizer()


@pytest.fixture
def cache(rasterizer):
    return BrightnessCache(rasterizer=rasterizer)
