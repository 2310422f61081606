"""Terminal session: cbreak input, alternate screen, key polling, redraws.

Key waits select on stdin and on a signal wakeup pipe, so a SIGWINCH
delivered mid-wait returns control to the loop immediately. The Python-level
handler itself only sets a flag (see monitor.py).
"""

from __future__ import annotations

import os
import select
import signal
import sys
import termios
import tty
from collections import deque
from typing import TextIO

from rich.console import Console
from rich.text import Text

from ifgraph.exceptions import IfgraphError

ENTER_SCREEN = "\033[?1049h\033[?25l"   # alternate screen, hide cursor
LEAVE_SCREEN = "\033[?25h\033[?1049l"
ESC = "\033"


def split_keys(data: str) -> list[str]:
    """Split one read from the tty into separate key presses.

    CSI (``ESC [ ... final``) and SS3 (``ESC O x``) sequences stay whole, as
    does ``ESC`` plus one character (Alt+key). A lone trailing ``ESC`` is a key
    of its own.
    """
    keys = []
    i = 0
    while i < len(data):
        if data[i] != ESC or i + 1 == len(data):
            keys.append(data[i])
            i += 1
            continue
        end = i + 2
        if data[i + 1] == "[":
            # parameters and intermediates run until a final byte in @..~
            while end < len(data) and not "\x40" <= data[end] <= "\x7e":
                end += 1
            end = min(end + 1, len(data))
        elif data[i + 1] == "O":
            end = min(i + 3, len(data))
        keys.append(data[i:end])
        i = end
    return keys


class Terminal:
    """Context manager owning the tty for the lifetime of the dashboard."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._console = Console(file=self._stdout, force_terminal=True, highlight=False)
        self._fd: int | None = None
        self._saved_attrs = None
        self._pending: deque[str] = deque()
        self._wake_r: int | None = None
        self._wake_w: int | None = None
        self._prev_wakeup_fd = -1

    def __enter__(self) -> Terminal:
        try:
            self._fd = self._stdin.fileno()
            self._saved_attrs = termios.tcgetattr(self._fd)
        except (termios.error, OSError, ValueError) as exc:
            raise IfgraphError("stdin is not a terminal") from exc
        tty.setcbreak(self._fd)

        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_r, False)
        os.set_blocking(self._wake_w, False)
        self._prev_wakeup_fd = signal.set_wakeup_fd(self._wake_w)

        self._stdout.write(ENTER_SCREEN)
        self._stdout.flush()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        signal.set_wakeup_fd(self._prev_wakeup_fd)
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                os.close(fd)
        self._wake_r = self._wake_w = None

        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
        self._stdout.write(LEAVE_SCREEN)
        self._stdout.flush()

    def size(self) -> tuple[int, int]:
        """Return ``(cols, lines)``."""
        cols, lines = self._console.size
        return cols, lines

    def wait_key(self, timeout: float) -> str | None:
        """Block up to ``timeout`` seconds for a key press.

        Returns one key per call (escape sequences come back whole), or None
        when the timeout expired or a signal woke the wait. Keys that arrived
        together in one read are handed out on the following calls without
        waiting.
        """
        if self._pending:
            return self._pending.popleft()
        watched = [self._fd] + ([self._wake_r] if self._wake_r is not None else [])
        ready, _, _ = select.select(watched, [], [], max(0.0, timeout))
        if self._wake_r is not None and self._wake_r in ready:
            self._drain_wakeup()
        if self._fd in ready:
            self._pending.extend(split_keys(os.read(self._fd, 32).decode(errors="replace")))
            if self._pending:
                return self._pending.popleft()
        return None

    def draw(self, lines: list[Text]) -> None:
        with self._console.capture() as capture:
            for i, line in enumerate(lines):
                self._console.print(line, end="" if i == len(lines) - 1 else "\n",
                                    no_wrap=True, overflow="crop")
        # cursor-home double-buffering: overwrite in place, clear the rest
        self._stdout.write("\033[H" + capture.get() + "\033[J")
        self._stdout.flush()

    def _drain_wakeup(self) -> None:
        while True:
            try:
                if not os.read(self._wake_r, 64):
                    return
            except BlockingIOError:
                return
