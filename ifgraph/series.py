"""Fixed-capacity rolling buffer of throughput samples.

Index 0 is the oldest retained sample, index ``capacity - 1`` the newest.
The newest sample stays pinned to the right edge through resizes.
"""

from __future__ import annotations

from collections import deque
from typing import Iterator


class SeriesBuffer:
    """Rolling window of per-tick samples, backed by a bounded deque."""

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self._data: deque[float] = deque([0.0] * capacity, maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._data.maxlen or 0

    @property
    def newest(self) -> float:
        return self._data[-1] if self._data else 0.0

    def push(self, sample: float) -> None:
        """Append ``sample`` at the right edge, evicting the oldest one."""
        # maxlen=0 deques silently drop appends
        self._data.append(float(sample))

    def resize(self, new_capacity: int) -> None:
        """Reflow to ``new_capacity`` slots, keeping the newest samples right-aligned."""
        if new_capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {new_capacity}")
        if new_capacity == self.capacity:
            return
        kept = list(self._data)[-new_capacity:] if new_capacity else []
        padding = [0.0] * (new_capacity - len(kept))
        self._data = deque(padding + kept, maxlen=new_capacity)

    def values(self) -> list[float]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def __getitem__(self, index: int) -> float:
        return self._data[index]

    def __repr__(self) -> str:
        return f"SeriesBuffer({self.values()!r})"
