"""Screen layout and frame composition.

Turns the abstract panels from ``render`` into text lines: ``*`` for filled
cells, styled per direction as rich Text, labels overlaid on the panel edge.
RX grows upward from the middle of the screen, TX hangs downward from it.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from ifgraph.config import MIN_GRAPH_LINES, Config
from ifgraph.iface import Channel, Iface
from ifgraph.render import Panel, render
from ifgraph.stats import scale_bounds
from ifgraph.units import UnitSystem, format_rate, format_size

TITLE_LINES = 1
STATS_LINES = 4
FILL = "*"
EMPTY = " "


@dataclass(frozen=True)
class Layout:
    cols: int
    lines: int
    panel_rows: int

    @property
    def height(self) -> int:
        return TITLE_LINES + 2 * self.panel_rows + STATS_LINES

    @property
    def too_small(self) -> bool:
        return self.cols < 1 or self.panel_rows < MIN_GRAPH_LINES or self.height > self.lines


def compute_layout(cols: int, lines: int, fixed_rows: int | None = None) -> Layout:
    if fixed_rows is not None:
        rows = fixed_rows
    else:
        rows = (lines - TITLE_LINES - STATS_LINES) // 2
    return Layout(cols=max(cols, 0), lines=max(lines, 0), panel_rows=max(rows, 0))


# ---- text helpers ----

def _fit(text: str, width: int) -> str:
    return text[:width].ljust(width)


def _place(line: str, col: int, text: str) -> str:
    """Overwrite ``line`` at ``col`` with ``text``, clipped to the line width."""
    if col >= len(line):
        return line
    text = text[: len(line) - col]
    return line[:col] + text + line[col + len(text):]


def _paint(line: Text, text: str, color: str, colors: bool) -> Text:
    line.append(text, style=color if colors and text.strip() else None)
    return line


# ---- frame sections ----

def title_line(iface: Iface, config: Config, cols: int) -> str:
    line = _fit(f"interface: {iface.name}".center(cols), cols)
    units = "SI" if config.units is UnitSystem.DECIMAL else "IEC"
    tag = f"[{config.scale_mode.label}{' peak' if config.running_peak else ''} {units}]"
    title_end = len(line.rstrip())
    if cols - len(tag) > title_end:
        line = _place(line, cols - len(tag), tag)
    return line


def panel_lines(panel: Panel, channel: Channel, config: Config, mirrored: bool = False) -> list[Text]:
    """Render a panel top-to-bottom; mirrored panels hang from their top edge."""
    order = range(panel.rows) if mirrored else range(panel.rows - 1, -1, -1)
    top = format_rate(panel.top, config.units)
    base = format_rate(panel.baseline, config.units)
    edge_first, edge_last = (base, top) if mirrored else (top, base)

    out = []
    last = panel.rows - 1
    for i, r in enumerate(order):
        glyphs = "".join(FILL if cell else EMPTY for cell in panel.cells[r])
        label = edge_first if i == 0 else edge_last if i == last else ""
        label = label[: panel.cols]
        out.append(_paint(Text(label), glyphs[len(label):], channel.color, config.colors))
    return out


def stats_lines(iface: Iface, config: Config, cols: int) -> list[str]:
    left = max(0, cols // 4 - 8)
    right = left + cols // 2 + 1
    rows = [
        (lambda ch: f"{ch.name + ':':>6} {format_rate(ch.current, config.units)}"),
        (lambda ch: f"{'avg:':>6} {format_rate(ch.stats.avg, config.units)}"),
        (lambda ch: f"{'peak:':>6} {format_rate(ch.stats.peak, config.units)}"),
        (lambda ch: f"{'total:':>6} {format_size(ch.total, config.units)}"),
    ]
    out = []
    for fmt in rows:
        line = " " * cols
        line = _place(line, left, fmt(iface.rx))
        line = _place(line, right, fmt(iface.tx))
        out.append(line)
    return out


def compose_frame(iface: Iface, config: Config, layout: Layout) -> list[Text]:
    """Build every screen line for the current state of ``iface``."""
    if layout.too_small:
        return [Text(_fit(f"terminal too small ({layout.cols}x{layout.lines})", layout.cols))]

    (rx_lo, rx_hi), (tx_lo, tx_hi) = scale_bounds(config.scale_mode, iface.rx.stats, iface.tx.stats)
    rows, cols = layout.panel_rows, layout.cols
    rx_panel = render(iface.rx.series, rx_lo, rx_hi, rows, cols, config.scale_mode)
    tx_panel = render(iface.tx.series, tx_lo, tx_hi, rows, cols, config.scale_mode)

    lines = [Text(title_line(iface, config, cols))]
    lines += panel_lines(rx_panel, iface.rx, config)
    lines += panel_lines(tx_panel, iface.tx, config, mirrored=True)
    lines += [Text(line) for line in stats_lines(iface, config, cols)]
    return lines
