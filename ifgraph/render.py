"""Map a series onto a grid of filled/empty cells.

The output is terminal-agnostic: ``Panel.cells[r][c]`` with ``r`` counted
from the bottom, plus the two numeric labels a drawing layer overlays on the
panel edges.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ifgraph.series import SeriesBuffer
from ifgraph.stats import ScaleMode


@dataclass
class Panel:
    rows: int
    cols: int
    top: float = 0.0
    baseline: float = 0.0
    cells: list[list[bool]] = field(default_factory=list, repr=False)

    def height(self, col: int) -> int:
        """Number of filled cells in column ``col``."""
        return sum(1 for row in self.cells if row[col])


def column_height(sample: float, lo: float, hi: float, rows: int,
                  mode: ScaleMode = ScaleMode.ZERO_TO_MAX) -> int:
    """Scaled bar height for one sample, clamped to ``[0, rows]``."""
    if rows <= 0 or hi <= 0 or sample <= 0:
        return 0
    if mode is ScaleMode.MIN_TO_MAX and hi != lo:
        ratio = (sample - lo) / (hi - lo)
    else:
        # flat series in min-max mode falls back to zero-to-max
        ratio = sample / hi
    return max(0, min(rows, math.floor(ratio * rows)))


def render(buffer: SeriesBuffer, lo: float, hi: float, rows: int, cols: int,
           mode: ScaleMode = ScaleMode.ZERO_TO_MAX) -> Panel:
    """Render ``buffer`` right-aligned into a ``rows x cols`` panel."""
    baseline = lo if mode is ScaleMode.MIN_TO_MAX else 0.0
    panel = Panel(rows=max(rows, 0), cols=max(cols, 0), top=hi, baseline=baseline)
    if panel.rows == 0 or panel.cols == 0:
        panel.cells = [[] for _ in range(panel.rows)]
        return panel

    samples = buffer.values()[-panel.cols:] if len(buffer) else []
    offset = panel.cols - len(samples)
    heights = [0] * offset + [column_height(s, lo, hi, panel.rows, mode) for s in samples]

    panel.cells = [[r < h for h in heights] for r in range(panel.rows)]
    return panel
