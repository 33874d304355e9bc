"""Animated elapsed-time status line for a running setup task."""

from __future__ import annotations

import asyncio
import time
from typing import Callable

from terminal import DIM, GREEN, NC, RED, YELLOW, Terminal

FRAMES = ("◐", "◓", "◑", "◒")


class Spinner:
    """
    Status line that redraws every *interval* seconds while a task runs.

    start() must run inside an event loop. Exactly one of stop()/fail()
    ends the spinner; later calls are ignored.
    """

    def __init__(
        self,
        terminal: Terminal,
        text: str,
        interval: float = 0.08,
        color: str = YELLOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.terminal = terminal
        self.text = text
        self.interval = interval
        self.color = color
        self._clock = clock
        self._index = 0
        self._started_at = clock()
        self._ticker: asyncio.Task | None = None
        self._finished = False

    @property
    def elapsed(self) -> int:
        return int(self._clock() - self._started_at)

    def render_frame(self) -> str:
        self._index = (self._index + 1) % len(FRAMES)
        frame = FRAMES[self._index]
        return f"\r   {self.color}{frame} {self.text}... {DIM}({self.elapsed}s){NC}      "

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.terminal.write(self.render_frame())

    def start(self) -> "Spinner":
        self._started_at = self._clock()
        self._ticker = asyncio.get_running_loop().create_task(self._tick())
        return self

    def _halt(self) -> bool:
        if self._finished:
            return False
        self._finished = True
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        return True

    def stop(self, final_message: str) -> None:
        if self._halt():
            self.terminal.write(
                f"\r   {GREEN}✔{NC} {final_message} {DIM}({self.elapsed}s){NC}     \n"
            )

    def fail(self, error_message: str) -> None:
        if self._halt():
            self.terminal.write(
                f"\r   {RED}! {error_message} {DIM}({self.elapsed}s){NC}      \n"
            )

    def cancel(self) -> None:
        """Stop ticking without printing a final line."""
        if self._halt():
            self.terminal.write("\n")
