import logging
from collections.abc import Iterable, Sequence

from asciishade.cache import BrightnessCache
from asciishade.errors import EmptyRepertoire, InvalidResolution
from asciishade.glyphs import DEFAULT_FONT
from asciishade.image import PixelSource, tiles

logger = logging.getLogger(__name__)


def normalize(values: Sequence[float]) -> list[float]:
    """Rescale values to 0-1 by their own min and max. Uniform input maps to all zeros."""
    low = min(values)
    high = max(values)
    if high == low:
        return [0.0] * len(values)
    span = high - low
    return [(v - low) / span for v in values]


def nearest_char(chars: Sequence[str], brightness: Sequence[float], target: float) -> str:
    """Character whose brightness is closest to target; the earliest one wins ties."""
    best_index = min(range(len(chars)), key=lambda i: abs(brightness[i] - target))
    return chars[best_index]


class BrightnessMatcher:
    """Matches square tiles of an image with characters of similar ink density."""

    def __init__(self, image: PixelSource, font: str = DEFAULT_FONT, cache: BrightnessCache | None = None):
        self.image = image
        self.font = font
        self.cache = cache if cache is not None else BrightnessCache()

    def char_brightness(self, chars: Sequence[str]) -> list[float]:
        return normalize([self.cache.char_brightness(c, self.font) for c in chars])

    def choose_chars(self, num_chars_in_row: int, charset: Iterable[str]) -> list[list[str]]:
        """Build a grid of characters, num_chars_in_row wide, approximating the image.

        charset is consumed in iteration order, which decides ties; pass an
        ordered sequence for reproducible output.
        """
        if num_chars_in_row < 1 or self.image.width // num_chars_in_row < 1:
            raise InvalidResolution(
                f"Cannot fit {num_chars_in_row} characters across an image {self.image.width} pixels wide"
            )
        chars = list(dict.fromkeys(charset))
        if not chars:
            raise EmptyRepertoire("Character set is empty")

        char_values = self.char_brightness(chars)
        grid = tiles(self.image, self.image.width // num_chars_in_row)
        rows, cols = grid.rows, grid.cols
        logger.debug("Matching %dx%d tiles of %dpx against %d characters", rows, cols, grid.size, len(chars))

        result: list[list[str]] = [[] for _ in range(rows)]
        for tile in grid:
            # Widths that don't divide the image leave extra columns on the right
            if tile.col >= num_chars_in_row:
                continue
            value = self.cache.tile_brightness(tile, rows, cols)
            result[tile.row].append(nearest_char(chars, char_values, value))
        return result
