from dataclasses import dataclass

from asciishade.charsets import DIGITS
from asciishade.glyphs import DEFAULT_FONT, GLYPH_HEIGHT


@dataclass
class Settings:
    font: str = DEFAULT_FONT
    glyph_height: int = GLYPH_HEIGHT
    chars_in_row: int = 64
    min_pixels_per_char: int = 2
    output_filename: str = "out.html"
    charset: str = DIGITS
