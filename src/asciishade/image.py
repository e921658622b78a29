from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import NamedTuple, Protocol

import numpy as np
from PIL import Image

from asciishade.errors import InvalidResolution, OutOfBounds

logger = logging.getLogger(__name__)

BORDER_COLOUR = (255, 255, 255)


class Color(NamedTuple):
    red: int
    green: int
    blue: int


class PixelSource(Protocol):
    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> Color:
        """Colour at (x, y). Raises OutOfBounds outside the image."""
        ...


class ArrayImage:
    """PixelSource backed by an (H, W, 3) uint8 array."""

    def __init__(self, array: np.ndarray):
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) array, got shape {array.shape}")
        self._array = array

    @classmethod
    def from_pil(cls, image: Image.Image) -> "ArrayImage":
        return cls(np.array(image.convert("RGB"), dtype=np.uint8))

    @property
    def width(self) -> int:
        return self._array.shape[1]

    @property
    def height(self) -> int:
        return self._array.shape[0]

    def get_pixel(self, x: int, y: int) -> Color:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b = self._array[y, x]
        return Color(int(r), int(g), int(b))

    def to_array(self) -> np.ndarray:
        return self._array


def pixels(source: PixelSource) -> Iterator[Color]:
    """Yield every pixel colour, first row left to right, then the next row."""
    for y in range(source.height):
        for x in range(source.width):
            yield source.get_pixel(x, y)


class Tile:
    """A size x size window onto a backing source. Holds no pixel data."""

    def __init__(self, source: PixelSource, row: int, col: int, size: int):
        self.source = source
        self.row = row
        self.col = col
        self.size = size

    @property
    def width(self) -> int:
        return self.size

    @property
    def height(self) -> int:
        return self.size

    def get_pixel(self, x: int, y: int) -> Color:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise OutOfBounds(f"Pixel ({x}, {y}) outside {self.size}x{self.size} tile")
        return self.source.get_pixel(self.col * self.size + x, self.row * self.size + y)

    def to_array(self) -> np.ndarray | None:
        """Numpy view of the tile region, or None if the source has no array."""
        to_array = getattr(self.source, "to_array", None)
        if to_array is None:
            return None
        array = to_array()
        if array is None:
            return None
        y0 = self.row * self.size
        x0 = self.col * self.size
        return array[y0 : y0 + self.size, x0 : x0 + self.size]

    def __repr__(self) -> str:
        return f"Tile(row={self.row}, col={self.col}, size={self.size})"


class TiledView:
    """Grid of square tiles over a PixelSource, iterated in row-major order.

    Partial tiles along the right and bottom edges are dropped. Iterating the
    view again starts over from the top-left tile.
    """

    def __init__(self, source: PixelSource, size: int):
        if size < 1:
            raise InvalidResolution(f"Tile size must be at least 1, got {size}")
        self.source = source
        self.size = size

    @property
    def cols(self) -> int:
        return self.source.width // self.size

    @property
    def rows(self) -> int:
        return self.source.height // self.size

    def __len__(self) -> int:
        return self.rows * self.cols

    def tile(self, row: int, col: int) -> Tile:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise OutOfBounds(f"Tile ({row}, {col}) outside {self.rows}x{self.cols} grid")
        return Tile(self.source, row, col, self.size)

    def __iter__(self) -> Iterator[Tile]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield Tile(self.source, row, col, self.size)


def tiles(source: PixelSource, size: int) -> TiledView:
    return TiledView(source, size)


def _next_power_of_two(n: int) -> int:
    return 1 << (n - 1).bit_length()


def pad_to_power_of_two(image: Image.Image) -> Image.Image:
    """Centre the image on a white canvas whose sides are powers of two."""
    width, height = image.size
    padded_width = _next_power_of_two(width)
    padded_height = _next_power_of_two(height)
    if (padded_width, padded_height) == (width, height):
        return image
    canvas = Image.new("RGB", (padded_width, padded_height), BORDER_COLOUR)
    canvas.paste(image, ((padded_width - width) // 2, (padded_height - height) // 2))
    return canvas


def load_image(path: str | Path) -> ArrayImage | None:
    """Decode an image file, padded to power-of-two sides. None if it can't be read."""
    try:
        with Image.open(path) as im:
            image = im.convert("RGB")
    except OSError as exc:
        logger.warning("Could not load image %s: %s", path, exc)
        return None
    padded = pad_to_power_of_two(image)
    logger.debug("Loaded %s: %dx%d padded to %dx%d", path, *image.size, *padded.size)
    return ArrayImage.from_pil(padded)
