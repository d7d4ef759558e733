"""Terminal output with cursor addressing and non-blocking key input."""

import os
import sys
from collections import deque
from contextlib import contextmanager

try:
    import msvcrt
except ImportError:
    msvcrt = None

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None

import select


class Console:
    """Writes to a text stream with ANSI cursor control and reads single keys.

    When ``keys`` is given it is used as a scripted key source instead of
    the real keyboard.
    """

    def __init__(self, stream=None, keys=None):
        self._stream = stream if stream is not None else sys.stdout
        self._scripted = None if keys is None else deque(keys)

    def goto(self, x, y):
        """Move the cursor to column ``x``, row ``y`` (both counted from 0)."""
        self.write(f"\x1b[{y + 1};{x + 1}H")

    def put(self, x, y, text):
        """Write ``text`` starting at column ``x``, row ``y``."""
        self.goto(x, y)
        self.write(text)

    def write(self, text):
        """Write ``text`` at the current cursor position."""
        self._stream.write(text)
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()

    def clear(self):
        """Clear the screen and home the cursor."""
        self.write("\x1b[2J\x1b[H")

    def show_cursor(self, visible):
        """Show or hide the text cursor."""
        self.write("\x1b[?25h" if visible else "\x1b[?25l")

    def key_pressed(self):
        """Whether a key is waiting to be read."""
        if self._scripted is not None:
            return bool(self._scripted)
        if msvcrt is not None:
            return bool(msvcrt.kbhit())
        ready, _, _ = select.select([sys.stdin], [], [], 0)
        return bool(ready)

    def read_key(self):
        """Block until a key is available and return it as a one-character string."""
        if self._scripted is not None:
            if not self._scripted:
                raise EOFError("no more keys")
            return self._scripted.popleft()
        if msvcrt is not None:
            return msvcrt.getwch()
        data = os.read(sys.stdin.fileno(), 1)
        if not data:
            raise EOFError("keyboard input closed")
        return data.decode(errors="replace")

    @contextmanager
    def raw_mode(self):
        """Deliver keys one at a time without echo while the block runs."""
        if (
            self._scripted is not None
            or msvcrt is not None
            or termios is None
            or not sys.stdin.isatty()
        ):
            yield self
            return
        fd = sys.stdin.fileno()
        saved = termios.tcgetattr(fd)
        try:
            tty.setcbreak(fd)
            yield self
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)