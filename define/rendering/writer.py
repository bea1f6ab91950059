"""
Indenting text writer used by the renderer.

Indentation is scoped: ``with writer.indented() as inner:`` hands out a
writer whose lines sit one step deeper, and the outer writer is left as it
was. Write failures are never swallowed; they surface as OutputWriteError.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from define.core.errors import OutputWriteError

DEFAULT_INDENT_SIZE = 2


class IndentedWriter:
    """Writes lines to a text stream, each prefixed with its indentation.

    Blank lines are written bare, without indentation.

    Args:
        stream: Destination text stream (stdout, a file, a StringIO, ...)
        indent_size: Number of spaces one indentation step adds
        spaces: Current indentation, in spaces
    """

    def __init__(self, stream: TextIO, indent_size: int = DEFAULT_INDENT_SIZE, spaces: int = 0) -> None:
        if indent_size < 0 or spaces < 0:
            raise ValueError("indentation can't be negative")

        self.stream = stream
        self.indent_size = indent_size
        self.spaces = spaces

    def write(self, text: str) -> None:
        """Write text as-is, with no indentation or line ending."""
        try:
            self.stream.write(text)
        except OSError as exc:
            raise OutputWriteError(f"failed to write output: {exc}") from exc

    def write_line(self, text: str) -> None:
        self.write(" " * self.spaces + text + "\n")

    def write_new_line(self, count: int = 1) -> None:
        # Unindented on purpose: older versions left trailing spaces on blank lines
        self.write("\n" * count)

    def write_padded_line(self, text: str, padding: int = 1) -> None:
        """Write a line with ``padding`` blank lines above and below it."""
        self.write_new_line(padding)
        self.write_line(text)
        self.write_new_line(padding)

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as exc:
            raise OutputWriteError(f"failed to flush output: {exc}") from exc

    @contextmanager
    def indented(self, spaces: Optional[int] = None) -> Iterator[IndentedWriter]:
        """Yield a writer indented further than this one.

        Args:
            spaces: Extra spaces to indent by; defaults to one indentation step
        """
        extra = self.indent_size if spaces is None else spaces
        yield IndentedWriter(self.stream, self.indent_size, self.spaces + extra)
