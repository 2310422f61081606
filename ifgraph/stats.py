"""Window statistics and graph scale selection."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ifgraph.series import SeriesBuffer


class ScaleMode(enum.Enum):
    ZERO_TO_MAX = "max"
    MIN_TO_MAX = "minmax"
    SYNCHRONIZED = "sync"

    @property
    def label(self) -> str:
        return {"max": "0-max", "minmax": "min-max", "sync": "sync"}[self.value]

    def next(self) -> ScaleMode:
        modes = list(ScaleMode)
        return modes[(modes.index(self) + 1) % len(modes)]


# ---- window aggregates ----

def window_max(buffer: SeriesBuffer, previous_running_max: float | None = None) -> float:
    """Exact maximum of the window, floored at ``previous_running_max`` if given."""
    peak = max(buffer, default=0.0)
    if previous_running_max is not None:
        peak = max(peak, previous_running_max)
    return peak


def window_min(buffer: SeriesBuffer) -> float:
    return min(buffer, default=0.0)


def window_avg(buffer: SeriesBuffer) -> float:
    """Mean over every slot, zero-filled ones included."""
    if not len(buffer):
        return 0.0
    avg = sum(buffer) / len(buffer)
    # float summation can land a hair outside the window bounds
    return min(max(avg, window_min(buffer)), window_max(buffer))


@dataclass(frozen=True)
class Stats:
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0
    peak: float = 0.0


class StatsEngine:
    """Per-channel statistics with an optional running peak.

    ``peak`` is the all-time maximum and is tracked in every mode. With
    ``running_max`` enabled the reported ``max`` never decreases, even after
    the sample that produced it scrolls out of the window.
    """

    def __init__(self, running_max: bool = False):
        self._running_max_mode = running_max
        self._running_max = 0.0
        self.peak = 0.0

    @property
    def running_max_mode(self) -> bool:
        return self._running_max_mode

    @running_max_mode.setter
    def running_max_mode(self, enabled: bool) -> None:
        if enabled and not self._running_max_mode:
            self._running_max = self.peak
        self._running_max_mode = enabled

    def update(self, buffer: SeriesBuffer) -> Stats:
        current = window_max(buffer)
        self.peak = max(self.peak, current)
        if self._running_max_mode:
            self._running_max = window_max(buffer, self._running_max)
            top = self._running_max
        else:
            top = current
        return Stats(
            min=window_min(buffer),
            max=top,
            avg=window_avg(buffer),
            peak=self.peak,
        )


def scale_bounds(
    mode: ScaleMode, rx: Stats, tx: Stats
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Return ``((rx_lo, rx_hi), (tx_lo, tx_hi))`` for the given scale mode."""
    if mode is ScaleMode.SYNCHRONIZED:
        shared = max(rx.max, tx.max)
        return (0.0, shared), (0.0, shared)
    if mode is ScaleMode.MIN_TO_MAX:
        return (rx.min, rx.max), (tx.min, tx.max)
    return (0.0, rx.max), (0.0, tx.max)
