"""Line input sources consumed by the menu loop.

The menu system only needs two things from its input: a blocking read of
one line, and a way to wait until the user has read some output. A None
line means the stream has ended; every later read returns None as well.
"""

from __future__ import annotations

from typing import Iterable, Protocol

import readchar
from rich.console import Console

from .keys import is_continue


class InputSource(Protocol):
    """What a MenuSystem reads user input from."""

    def read_line(self) -> str | None:
        """Block for one line of input, without its newline; None at end of stream."""
        ...

    def wait_for_continue(self) -> None:
        """Block until the user acknowledges the output above."""
        ...


class TerminalInput:
    """Reads lines from stdin and waits for a key press with readchar."""

    def __init__(self) -> None:
        self.closed = False

    def read_line(self) -> str | None:
        """Read one line from stdin. Ctrl+C propagates as KeyboardInterrupt."""
        if self.closed:
            return None
        try:
            return input()
        except EOFError:
            self.closed = True
            return None

    def wait_for_continue(self) -> None:
        """Wait for Enter, q, or Ctrl+C before returning."""
        if self.closed:
            return
        while True:
            try:
                key = readchar.readkey()
            except (KeyboardInterrupt, EOFError):
                return
            if is_continue(key):
                return


class ScriptedInput:
    """Replays a fixed sequence of lines.

    Used by tests and by `menutree demo --script`. A pause consumes one
    line, the same as pressing <RET> at a terminal would.

    Args:
        lines: Lines to replay, in order.
        echo: Optional console that each consumed line is printed to, so a
            replayed session reads like a typed one.
    """

    def __init__(self, lines: Iterable[str], echo: Console | None = None):
        self._lines = list(lines)
        self._echo = echo
        self.consumed = 0

    @property
    def remaining(self) -> list[str]:
        return self._lines[self.consumed :]

    def read_line(self) -> str | None:
        if self.consumed >= len(self._lines):
            return None
        line = self._lines[self.consumed]
        self.consumed += 1
        if self._echo is not None:
            self._echo.print(line, markup=False, highlight=False)
        return line

    def wait_for_continue(self) -> None:
        self.read_line()
