from collections.abc import Iterable

DIGITS = "0123456789"

ASCII_PRINTABLE = "".join(chr(i) for i in range(32, 127))

ASCII_SYMBOLS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789 .,:;!?@#$%&*+-=/<>()[]{}|\\\"'`~^_"

# Block elements: U+2580-U+259F (fills, eighths, halves, quadrants, shades)
BLOCKS = " " + "".join(chr(i) for i in range(0x2580, 0x25A0))

# ASCII characters useful for texture and edges
TEXTURE_ASCII = " .,:;!'-/\\xX*+=#@"

NAMED = {
    "digits": DIGITS,
    "ascii": ASCII_PRINTABLE,
    "symbols": ASCII_SYMBOLS,
    "blocks": BLOCKS,
    "texture": TEXTURE_ASCII,
}


def ordered(chars: Iterable[str]) -> list[str]:
    """Deduplicated, code point ordered sequence of characters."""
    return sorted(set(chars))


def parse_chars_arg(arg: str) -> str:
    """Expand a charset edit argument into the characters it names.

    Accepts a single character, an inclusive range such as ``a-z`` (endpoints
    in either order), ``all`` for printable ASCII, or ``space``.
    """
    if len(arg) == 1:
        return arg
    if len(arg) == 3 and arg[1] == "-":
        low, high = sorted((ord(arg[0]), ord(arg[2])))
        return "".join(chr(i) for i in range(low, high + 1))
    if arg == "all":
        return ASCII_PRINTABLE
    if arg == "space":
        return " "
    raise ValueError(f"Not a character, range or keyword: {arg!r}")
