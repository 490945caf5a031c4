"""Text rendering and terminal control for the frame loop."""

import os
import select
import sys
from typing import Optional, TextIO

from ..core.grid import Grid

ALIVE_GLYPH = "█"
DEAD_GLYPH = " "

ENTER_ALTERNATE_SCREEN = "\x1b[?1049h"
LEAVE_ALTERNATE_SCREEN = "\x1b[?1049l"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"
CLEAR_TO_EOL = "\x1b[K"

ESCAPE = "esc"


def render_frame(grid: Grid, alive: str = ALIVE_GLYPH, dead: str = DEAD_GLYPH) -> str:
    """Render a grid as text, one line per grid row.

    Args:
        grid: Grid to render
        alive: Glyph for living cells
        dead: Glyph for dead cells

    Returns:
        Frame text without a trailing newline
    """
    cells = grid.cells
    return "\n".join(
        "".join(alive if cells[x, y] else dead for x in range(grid.width)) for y in range(grid.height)
    )


class TerminalSession:
    """Context manager owning the terminal while frames are drawn.

    Entering switches to the alternate screen and hides the cursor; leaving
    always restores both, including when the loop is interrupted.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def __enter__(self) -> "TerminalSession":
        self.stream.write(ENTER_ALTERNATE_SCREEN + HIDE_CURSOR + CLEAR_SCREEN)
        self.stream.flush()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stream.write(SHOW_CURSOR + LEAVE_ALTERNATE_SCREEN)
        self.stream.flush()

    def draw(self, frame: str, status: str = "") -> None:
        """Redraw the screen in place from the top-left corner.

        Every line is followed by an erase-to-end-of-line so nothing from a
        longer previous frame is left behind.
        """
        lines = frame.split("\n")
        if status:
            lines.append(status)
        self.stream.write(CURSOR_HOME + "\n".join(line + CLEAR_TO_EOL for line in lines))
        self.stream.flush()


class KeyReader:
    """Non-blocking single key reader for POSIX terminals.

    When stdin is not a TTY (pipes, tests, non-POSIX platforms) the reader
    is inactive and :meth:`read_key` always returns None.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdin
        self._fd: Optional[int] = None
        self._saved_attrs = None

    @property
    def active(self) -> bool:
        return self._fd is not None

    def __enter__(self) -> "KeyReader":
        if os.name != "posix" or not self.stream.isatty():
            return self

        import termios
        import tty

        self._fd = self.stream.fileno()
        self._saved_attrs = termios.tcgetattr(self._fd)
        # cbreak keeps ISIG, so Ctrl-C still raises KeyboardInterrupt
        tty.setcbreak(self._fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._fd is None:
            return

        import termios

        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
        self._fd = None
        self._saved_attrs = None

    def read_key(self) -> Optional[str]:
        """Return the pending key, lowercased, or None if nothing was typed.

        A lone escape byte is reported as ``"esc"``; escape sequences such as
        arrow keys are ignored.
        """
        if self._fd is None:
            return None

        ready, _, _ = select.select([self._fd], [], [], 0)
        if not ready:
            return None

        data = os.read(self._fd, 32).decode("utf-8", errors="ignore")
        if not data:
            return None
        if data == "\x1b":
            return ESCAPE
        if data.startswith("\x1b"):
            return None
        return data[0].lower()
