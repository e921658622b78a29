class AsciiShadeError(Exception):
    """Base class for errors raised while converting an image to characters."""


class InvalidResolution(AsciiShadeError, ValueError):
    """Requested characters per row leave tiles smaller than one pixel."""


class EmptyRepertoire(AsciiShadeError, ValueError):
    """No characters were supplied to match against."""


class OutOfBounds(AsciiShadeError, IndexError):
    """Pixel coordinate outside the image."""
