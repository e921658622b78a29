import argparse
import logging
import sys
from pathlib import Path

from asciishade.charsets import NAMED, ordered
from asciishade.errors import AsciiShadeError
from asciishade.image import load_image
from asciishade.matcher import BrightnessMatcher
from asciishade.output import ConsoleOutput, HtmlOutput
from asciishade.settings import Settings
from asciishade.shell import Shell

logger = logging.getLogger("asciishade")


def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def main(argv: list[str] | None = None) -> int:
    defaults = Settings()
    parser = argparse.ArgumentParser(description="Render an image as characters matched by brightness")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-s", "--size", type=int, default=defaults.chars_in_row, help="Characters per row (default: %(default)s)"
    )
    parser.add_argument("-f", "--font", default=defaults.font, help="Font file or name (default: %(default)s)")
    parser.add_argument(
        "-c",
        "--chars",
        default="digits",
        help=f"Characters to draw with, or one of: {', '.join(sorted(NAMED))} (default: digits)",
    )
    parser.add_argument("-o", "--output", default=defaults.output_filename, help="HTML output path")
    parser.add_argument("--console", action="store_true", default=False, help="Print to the terminal instead")
    parser.add_argument("-i", "--interactive", action="store_true", default=False, help="Start the command shell")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        return 1
    image = load_image(image_path)
    if image is None:
        print(f"Could not read image: {image_path}", file=sys.stderr)
        return 1

    settings = Settings(
        font=args.font,
        chars_in_row=args.size,
        output_filename=args.output,
        charset=NAMED.get(args.chars, args.chars),
    )

    if args.interactive:
        Shell(image, settings).run()
        return 0

    matcher = BrightnessMatcher(image, settings.font)
    try:
        grid = matcher.choose_chars(settings.chars_in_row, ordered(settings.charset))
    except AsciiShadeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if not grid:
        print("Image is too small for the requested width", file=sys.stderr)
        return 1
    output = ConsoleOutput() if args.console else HtmlOutput(settings.output_filename, settings.font)
    output.write(grid)
    return 0
