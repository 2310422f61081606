"""Interface state: cumulative counters, per-direction series and stats."""

from __future__ import annotations

from typing import NamedTuple

from loguru import logger

from ifgraph.series import SeriesBuffer
from ifgraph.stats import Stats, StatsEngine


class Counters(NamedTuple):
    rx: int
    tx: int


class Channel:
    """One traffic direction: last cumulative total, rate history and stats."""

    def __init__(self, name: str, color: str, total: int, capacity: int,
                 running_max: bool = False):
        self.name = name
        self.color = color
        self.total = total
        self.series = SeriesBuffer(capacity)
        self.engine = StatsEngine(running_max=running_max)
        self.stats = Stats()

    @property
    def current(self) -> float:
        return self.series.newest

    def advance(self, total: int, elapsed: float) -> float:
        """Push the rate since the previous total and return it."""
        delta = total - self.total
        if delta < 0:
            # counter reset or wrap: never feed an underflowed delta into the series
            logger.warning(f"{self.name} counter went backwards ({self.total} -> {total}), recording 0")
            rate = 0.0
        else:
            rate = delta / max(1e-6, elapsed)
        self.total = total
        self.series.push(rate)
        self.refresh()
        return rate

    def refresh(self) -> None:
        self.stats = self.engine.update(self.series)


class Iface:
    """A monitored interface with independent RX and TX channels of equal capacity."""

    def __init__(self, name: str, counters: Counters, capacity: int,
                 running_max: bool = False):
        self.name = name
        self.rx = Channel("RX", "green", counters.rx, capacity, running_max)
        self.tx = Channel("TX", "red", counters.tx, capacity, running_max)

    @property
    def channels(self) -> tuple[Channel, Channel]:
        return self.rx, self.tx

    @property
    def capacity(self) -> int:
        return self.rx.series.capacity

    def update(self, counters: Counters, elapsed: float) -> None:
        self.rx.advance(counters.rx, elapsed)
        self.tx.advance(counters.tx, elapsed)

    def resize(self, capacity: int) -> None:
        if capacity == self.capacity:
            return
        logger.debug(f"{self.name}: reflowing series {self.capacity} -> {capacity} columns")
        for channel in self.channels:
            channel.series.resize(capacity)
            channel.refresh()

    def set_running_peak(self, enabled: bool) -> None:
        for channel in self.channels:
            channel.engine.running_max_mode = enabled
            channel.refresh()
