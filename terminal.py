"""Raw terminal port: ANSI codes, line/key input and raw-mode ownership."""

from __future__ import annotations

import atexit
import os
import sys
from typing import TextIO

import readchar

if os.name == "posix":
    import termios
    import tty

# --- ANSI styles ---
RED = "\x1b[0;31m"
GREEN = "\x1b[0;32m"
YELLOW = "\x1b[1;33m"
CYAN = "\x1b[1;36m"
DIM = "\x1b[2m"
UNDERLINE = "\x1b[4m"
NC = "\x1b[0m"

# --- Cursor control ---
CLEAR_SCREEN = "\x1bc"
CURSOR_UP_ONE = "\x1b[1A"
ERASE_LINE = "\x1b[2K"
ERASE_TO_LINE_END = "\x1b[K"
ERASE_DOWN = "\x1b[J"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def cursor_up(lines: int) -> str:
    return f"\x1b[{lines}A"


class Terminal:
    """Process terminal (stdin/stdout) used by prompts and spinners."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._raw = False
        self._saved_attrs: list | None = None

    @property
    def is_tty(self) -> bool:
        try:
            return self.stdin.isatty()
        except (AttributeError, ValueError):
            return False

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_line(self) -> str:
        """Read one line; raises EOFError when input is closed."""
        line = self.stdin.readline()
        if line == "":
            raise EOFError("stdin closed")
        return line.rstrip("\r\n")

    def read_key(self) -> str:
        """
        Read a single keypress (escape sequences decoded by readchar).

        readchar only reads the process stdin. Any other input stream is read
        a line at a time, an empty line counting as Enter and end of input as "".
        """
        if self.stdin is not sys.stdin:
            line = self.stdin.readline()
            if line == "":
                return ""
            return line.rstrip("\r\n") or readchar.key.ENTER
        return readchar.readkey()

    def is_raw(self) -> bool:
        return self._raw

    def set_raw(self, enabled: bool) -> None:
        """Switch echo/line buffering off (raw) or back to the saved mode."""
        if enabled == self._raw:
            return
        if self.is_tty and os.name == "posix":
            fd = self.stdin.fileno()
            if enabled:
                self._saved_attrs = termios.tcgetattr(fd)
                tty.setcbreak(fd)
            elif self._saved_attrs is not None:
                termios.tcsetattr(fd, termios.TCSADRAIN, self._saved_attrs)
                self._saved_attrs = None
        self._raw = enabled


class RawModeGuard:
    """
    Exclusive ownership of the terminal's raw mode for one select prompt.

    acquire() records the current mode, enables raw mode and hides the
    cursor. release() puts back exactly what was recorded and shows the
    cursor; it is idempotent and also runs at interpreter exit if the
    owner never got to call it.
    """

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._saved_raw: bool | None = None
        self._released = False

    def acquire(self) -> "RawModeGuard":
        self._saved_raw = self.terminal.is_raw()
        self.terminal.set_raw(True)
        self.terminal.write(HIDE_CURSOR)
        atexit.register(self.release)
        return self

    def release(self) -> None:
        if self._released or self._saved_raw is None:
            return
        self._released = True
        atexit.unregister(self.release)
        if self.terminal.is_raw() != self._saved_raw:
            self.terminal.set_raw(self._saved_raw)
        self.terminal.write(SHOW_CURSOR)

    def __enter__(self) -> "RawModeGuard":
        return self.acquire()

    def __exit__(self, *exc_info: object) -> None:
        self.release()
