import logging
from functools import lru_cache

import numpy as np
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

GLYPH_HEIGHT = 16
DEFAULT_FONT = "DejaVuSansMono.ttf"
INK_THRESHOLD = 128


@lru_cache(maxsize=None)
def _load_font(font: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype(font, size)
    except OSError:
        logger.warning("Font %r not found, using Pillow's default font", font)
        return ImageFont.load_default(size)


def render_glyph(char: str, height: int = GLYPH_HEIGHT, font: str = DEFAULT_FONT) -> np.ndarray:
    """Rasterize a character to a boolean ink mask of shape (height, width).

    The cell is as wide as "M" in the given font. Glyphs are vertically
    centred on the bounding box of "M" so that every character of a font
    shares the same baseline.
    """
    face = _load_font(font, height)
    left, top, right, bottom = face.getbbox("M")
    cell_width = max(1, right - left)
    y_offset = (height - (bottom - top)) // 2 - top

    img = Image.new("L", (cell_width, height), 0)
    draw = ImageDraw.Draw(img)
    draw.text((-left, y_offset), char, fill=255, font=face)
    return np.asarray(img) >= INK_THRESHOLD
