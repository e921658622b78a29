"""Memoised brightness values for characters and image tiles.

A BrightnessCache is created once by the caller and handed to every matcher
that should share it. Entries are never evicted. Tile entries are keyed by
tile geometry only, so a cache must not be shared between different images.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from asciishade.glyphs import GLYPH_HEIGHT, render_glyph
from asciishade.image import Color, PixelSource, Tile, pixels

logger = logging.getLogger(__name__)

# ITU-R BT.709 luma weights
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

Rasterizer = Callable[[str, int, str], np.ndarray]


def luminance(colour: Color) -> float:
    r, g, b = colour
    return LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b


def region_brightness(region: PixelSource) -> float:
    """Mean luminance of a region scaled to 0-1."""
    to_array = getattr(region, "to_array", None)
    array = to_array() if to_array is not None else None
    if array is not None:
        total = float((array.astype(np.float64) @ np.array(LUMA_WEIGHTS)).sum())
    else:
        total = sum(luminance(p) for p in pixels(region))
    return total / (255 * region.width * region.height)


@dataclass
class CacheStats:
    char_hits: int = 0
    char_misses: int = 0
    tile_hits: int = 0
    tile_misses: int = 0


class BrightnessCache:
    def __init__(self, rasterizer: Rasterizer = render_glyph, glyph_height: int = GLYPH_HEIGHT):
        self.rasterizer = rasterizer
        self.glyph_height = glyph_height
        self._chars: dict[tuple[str, str], float] = {}
        self._tiles: dict[tuple[int, int, int, int], float] = {}
        self.stats = CacheStats()

    def char_brightness(self, char: str, font: str) -> float:
        """Raw ink count of a character. Not normalised."""
        key = (char, font)
        if key in self._chars:
            self.stats.char_hits += 1
            return self._chars[key]
        self.stats.char_misses += 1
        mask = self.rasterizer(char, self.glyph_height, font)
        value = float(np.count_nonzero(mask))
        logger.debug("Rasterized %r in %s: %d ink cells", char, font, value)
        self._chars[key] = value
        return value

    def tile_brightness(self, tile: Tile, rows: int, cols: int) -> float:
        """Brightness of a tile in a rows x cols grid, computed on first request."""
        key = (tile.size, rows, cols, tile.row * cols + tile.col)
        if key in self._tiles:
            self.stats.tile_hits += 1
            return self._tiles[key]
        self.stats.tile_misses += 1
        value = region_brightness(tile)
        self._tiles[key] = value
        return value

    def clear(self) -> None:
        self._chars.clear()
        self._tiles.clear()
        self.stats = CacheStats()

    def __len__(self) -> int:
        return len(self._chars) + len(self._tiles)
