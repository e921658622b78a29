import numpy as np
import pytest

from asciishade.cache import BrightnessCache, luminance, region_brightness
from asciishade.image import ArrayImage, Color, tiles
from tests.conftest import FakeRasterizer, solid


class CountingSource:
    """Pixel source without an array view that counts reads."""

    def __init__(self, width, height, colour):
        self.width = width
        self.height = height
        self.colour = colour
        self.reads = 0

    def get_pixel(self, x, y):
        self.reads += 1
        return self.colour


def test_luminance_weights():
    assert luminance(Color(255, 0, 0)) == pytest.approx(0.2126 * 255)
    assert luminance(Color(0, 255, 0)) == pytest.approx(0.7152 * 255)
    assert luminance(Color(0, 0, 255)) == pytest.approx(0.0722 * 255)


def test_region_brightness_extremes():
    assert region_brightness(solid(4, 4, 0)) == pytest.approx(0.0)
    assert region_brightness(solid(4, 4, 255)) == pytest.approx(1.0)


def test_array_and_pixel_paths_agree():
    rng = np.random.default_rng(7)
    img = ArrayImage(rng.integers(0, 256, (8, 8, 3), dtype=np.uint8))
    for tile in tiles(img, 4):
        by_pixel = sum(luminance(img.get_pixel(tile.col * 4 + x, tile.row * 4 + y)) for y in range(4) for x in range(4))
        assert region_brightness(tile) == pytest.approx(by_pixel / (255 * 16))


def test_char_brightness_counts_ink(cache):
    assert cache.char_brightness("o", "mono") == 64
    assert cache.char_brightness(" ", "mono") == 0


def test_char_cache_hit_skips_rasterizer():
    rasterizer = FakeRasterizer()
    cache = BrightnessCache(rasterizer=rasterizer)
    first = cache.char_brightness("#", "mono")
    second = cache.char_brightness("#", "mono")
    assert first == second
    assert len(rasterizer.calls) == 1
    assert (cache.stats.char_misses, cache.stats.char_hits) == (1, 1)


def test_char_cache_keyed_by_font():
    rasterizer = FakeRasterizer()
    cache = BrightnessCache(rasterizer=rasterizer)
    cache.char_brightness("#", "a")
    cache.char_brightness("#", "b")
    assert [c[2] for c in rasterizer.calls] == ["a", "b"]


def test_rasterizer_called_at_glyph_height():
    rasterizer = FakeRasterizer()
    BrightnessCache(rasterizer=rasterizer, glyph_height=20).char_brightness(".", "mono")
    assert rasterizer.calls == [(".", 20, "mono")]


def test_tile_cache_hit_reads_no_pixels(cache):
    source = CountingSource(4, 4, Color(255, 255, 255))
    view = tiles(source, 2)
    tile = view.tile(1, 1)
    first = cache.tile_brightness(tile, view.rows, view.cols)
    reads = source.reads
    assert reads == 4
    second = cache.tile_brightness(view.tile(1, 1), view.rows, view.cols)
    assert second == first
    assert source.reads == reads
    assert (cache.stats.tile_misses, cache.stats.tile_hits) == (1, 1)


def test_tile_cache_distinguishes_grid_width(cache):
    # Same tile size, row count and linear index, different column count
    wide = tiles(solid(4, 2, 0), 2)
    narrow = tiles(solid(2, 2, 255), 2)
    dark = cache.tile_brightness(wide.tile(0, 0), wide.rows, wide.cols)
    light = cache.tile_brightness(narrow.tile(0, 0), narrow.rows, narrow.cols)
    assert dark == pytest.approx(0.0)
    assert light == pytest.approx(1.0)


def test_clear_resets(cache):
    cache.char_brightness("#", "mono")
    view = tiles(solid(2, 2, 0), 2)
    cache.tile_brightness(view.tile(0, 0), 1, 1)
    assert len(cache) == 2
    cache.clear()
    assert len(cache) == 0
    assert cache.stats.char_misses == 0
