"""Monitor: the driving loop.

Lifecycle:
    1. setup() resolves the interface, primes counters, sizes the buffers
    2. run() installs the SIGWINCH handler and loops over step()
    3. step() waits for a key until the next tick deadline, then applies any
       pending resize, samples if the deadline passed, and redraws
"""

from __future__ import annotations

import signal
import time
from typing import Callable, Protocol

from loguru import logger
from rich.text import Text

from ifgraph.config import Config
from ifgraph.exceptions import CounterReadError, InterfaceNotFoundError
from ifgraph.iface import Iface
from ifgraph.sources.base import SampleSource
from ifgraph.view import Layout, compose_frame, compute_layout

QUIT_KEYS = {"q", "Q"}


class Screen(Protocol):
    def size(self) -> tuple[int, int]: ...

    def wait_key(self, timeout: float) -> str | None: ...

    def draw(self, lines: list[Text]) -> None: ...


class Monitor:
    def __init__(self, config: Config, source: SampleSource, screen: Screen,
                 clock: Callable[[], float] = time.monotonic):
        self.config = config
        self.source = source
        self.screen = screen
        self._clock = clock

        self.iface: Iface | None = None
        self.layout: Layout | None = None
        self._resized = False
        self._last_sample = 0.0
        self._next_tick = 0.0

    # ---- setup ----

    def resolve_interface(self) -> str:
        ifname = self.config.interface or self.source.detect_default_iface()
        if not ifname:
            raise InterfaceNotFoundError("can't detect network interface")
        return ifname

    def setup(self) -> Iface:
        ifname = self.resolve_interface()
        try:
            counters = self.source.read_counters(ifname)
        except CounterReadError as exc:
            raise InterfaceNotFoundError(f"interface {ifname} not found: {exc}") from exc

        cols, lines = self.screen.size()
        self.layout = compute_layout(cols, lines, self.config.lines)
        self.iface = Iface(ifname, counters, capacity=cols, running_max=self.config.running_peak)

        now = self._clock()
        self._last_sample = now
        self._next_tick = now + self.config.delay
        logger.info(f"monitoring {ifname} via {self.source.name}: {cols}x{lines}, delay {self.config.delay}s")
        return self.iface

    # ---- events ----

    def on_resize(self, signum, frame) -> None:
        # only record it; the loop applies it at its next poll point
        self._resized = True

    def apply_resize(self) -> None:
        self._resized = False
        cols, lines = self.screen.size()
        self.layout = compute_layout(cols, lines, self.config.lines)
        self.iface.resize(cols)
        logger.debug(f"resized to {cols}x{lines}, panel rows {self.layout.panel_rows}")

    def handle_key(self, key: str) -> bool:
        """Apply a key press. Returns False when the user asked to quit."""
        if key in QUIT_KEYS:
            return False
        if key == "s":
            self.config.scale_mode = self.config.scale_mode.next()
            logger.info(f"scale mode -> {self.config.scale_mode.value}")
        elif key == "p":
            self.config.running_peak = not self.config.running_peak
            self.iface.set_running_peak(self.config.running_peak)
            logger.info(f"running peak -> {self.config.running_peak}")
        elif key == "u":
            self.config.units = self.config.units.toggled()
            logger.info(f"units -> {self.config.units.name.lower()}")
        else:
            # any other key forces a full relayout
            self._resized = True
        return True

    def sample(self) -> None:
        now = self._clock()
        counters = self.source.read_counters(self.iface.name)
        self.iface.update(counters, now - self._last_sample)
        self._last_sample = now

    def redraw(self) -> None:
        self.screen.draw(compose_frame(self.iface, self.config, self.layout))

    # ---- main loop ----

    def step(self) -> bool:
        """Run one loop iteration. Returns False when the loop should stop."""
        key = self.screen.wait_key(self._next_tick - self._clock())
        if key is not None and not self.handle_key(key):
            return False

        if self._resized:
            self.apply_resize()

        now = self._clock()
        if key is None and now >= self._next_tick:
            self.sample()
            self._next_tick += self.config.delay
            if self._next_tick <= now:
                # fell behind (suspended, slow draw): restart the cadence
                self._next_tick = now + self.config.delay

        self.redraw()
        return True

    def run(self) -> None:
        """Blocking main loop. 'q' or Ctrl+C to exit."""
        if self.iface is None:
            self.setup()
        previous = signal.signal(signal.SIGWINCH, self.on_resize)
        try:
            self.redraw()
            while self.step():
                pass
        finally:
            signal.signal(signal.SIGWINCH, previous)
