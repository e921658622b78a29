import logging
import sys
from typing import TextIO

from asciishade.cache import BrightnessCache
from asciishade.charsets import ordered, parse_chars_arg
from asciishade.errors import AsciiShadeError
from asciishade.image import PixelSource
from asciishade.matcher import BrightnessMatcher
from asciishade.output import ConsoleOutput, HtmlOutput, Output
from asciishade.settings import Settings

logger = logging.getLogger(__name__)

PROMPT = ">>> "
INCORRECT_COMMAND = "Did not execute due to incorrect command"
EXCEEDING_BOUNDARIES = "Did not change due to exceeding boundaries"
INCORRECT_FORMAT = "Did not {op} due to incorrect format"
UPDATED_WIDTH = "Width set to {width}"


class Shell:
    """Interactive loop for editing the character set and resolution, then rendering."""

    def __init__(
        self,
        image: PixelSource,
        settings: Settings | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        cache: BrightnessCache | None = None,
    ):
        self.image = image
        self.settings = settings or Settings()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.charset: set[str] = set(self.settings.charset)
        if cache is None:
            cache = BrightnessCache(glyph_height=self.settings.glyph_height)
        self.matcher = BrightnessMatcher(image, self.settings.font, cache)
        self.output: Output = HtmlOutput(self.settings.output_filename, self.settings.font)
        self.chars_in_row = self._clamp_width(self.settings.chars_in_row)

    def _print(self, message: str = "") -> None:
        self.stdout.write(message + "\n")

    @property
    def min_chars_in_row(self) -> int:
        return max(1, self.image.width // self.image.height)

    @property
    def max_chars_in_row(self) -> int:
        return self.image.width // self.settings.min_pixels_per_char

    def _clamp_width(self, width: int) -> int:
        return max(min(width, self.max_chars_in_row), self.min_chars_in_row)

    def run(self) -> None:
        while True:
            self.stdout.write(PROMPT)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                return
            line = line.rstrip("\r\n")
            if not line:
                continue
            if line.endswith(" "):
                self._print(INCORRECT_COMMAND)
                continue
            if not self.execute(line.split(" ")):
                return

    def execute(self, args: list[str]) -> bool:
        """Run one command. Returns False when the loop should stop."""
        command, rest = args[0], args[1:]
        logger.debug("Command %s %s", command, rest)
        if command == "exit" and not rest:
            return False
        if command in ("add", "remove"):
            self.edit_charset(command, rest)
        elif command == "res":
            self.change_resolution(rest)
        elif command == "chars" and not rest:
            self._print(" ".join(ordered(self.charset)))
        elif command == "console" and not rest:
            self.output = ConsoleOutput(self.stdout)
        elif command == "render" and not rest:
            self.render()
        else:
            self._print(INCORRECT_COMMAND)
        return True

    def edit_charset(self, op: str, args: list[str]) -> None:
        try:
            if len(args) != 1:
                raise ValueError(f"{op} takes exactly one argument")
            chars = parse_chars_arg(args[0])
        except ValueError:
            self._print(INCORRECT_FORMAT.format(op=op))
            return
        if op == "add":
            self.charset.update(chars)
        else:
            self.charset.difference_update(chars)

    def change_resolution(self, args: list[str]) -> None:
        if len(args) != 1 or args[0] not in ("up", "down"):
            self._print(INCORRECT_COMMAND)
            return
        old = self.chars_in_row
        requested = old * 2 if args[0] == "up" else old // 2
        self.chars_in_row = self._clamp_width(requested)
        if self.chars_in_row == old:
            self._print(EXCEEDING_BOUNDARIES)
        else:
            self._print(UPDATED_WIDTH.format(width=self.chars_in_row))

    def render(self) -> None:
        try:
            grid = self.matcher.choose_chars(self.chars_in_row, ordered(self.charset))
        except AsciiShadeError as exc:
            self._print(f"Did not render: {exc}")
            return
        if grid:
            self.output.write(grid)
