import html
import logging
import sys
from pathlib import Path
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>ASCII Art</title>
</head>
<body style="background: white; color: black">
<pre style="font-family: '{font}', monospace; font-size: 8px; line-height: 1">
{body}
</pre>
</body>
</html>
"""


class Output(Protocol):
    def write(self, grid: list[list[str]]) -> None:
        """Serialize a character grid."""
        ...


def grid_to_lines(grid: list[list[str]]) -> list[str]:
    return ["".join(row) for row in grid]


class ConsoleOutput:
    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def write(self, grid: list[list[str]]) -> None:
        if not grid:
            return
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write("\n".join(grid_to_lines(grid)) + "\n")


class HtmlOutput:
    def __init__(self, path: str | Path, font: str):
        self.path = Path(path)
        self.font = font

    def write(self, grid: list[list[str]]) -> None:
        if not grid:
            return
        body = "\n".join(html.escape(line) for line in grid_to_lines(grid))
        # Font paths are reduced to their family name for CSS
        family = Path(self.font).stem
        self.path.write_text(HTML_TEMPLATE.format(font=html.escape(family), body=body), encoding="utf-8")
        logger.info("Wrote %d rows to %s", len(grid), self.path)
