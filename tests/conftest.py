"""Shared fixtures for the ifgraph test suite."""

from __future__ import annotations

import pytest
from loguru import logger

from ifgraph.config import Config
from ifgraph.exceptions import CounterReadError
from ifgraph.iface import Counters
from ifgraph.series import SeriesBuffer
from ifgraph.sources.base import SampleSource

# ── fakes ─────────────────────────────────────────────────────────────


class FakeSource(SampleSource):
    """Replays a scripted sequence of counters per interface."""

    name = "fake"

    def __init__(self, readings: dict[str, list[tuple[int, int]]], default: str | None = None):
        self.readings = {k: list(v) for k, v in readings.items()}
        self.default = default
        self.reads = 0

    def read_counters(self, ifname: str) -> Counters:
        queue = self.readings.get(ifname)
        if not queue:
            raise CounterReadError(f"can't read rx and tx bytes for {ifname}", ifname)
        self.reads += 1
        return Counters(*queue.pop(0))

    def detect_default_iface(self) -> str | None:
        return self.default


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += max(0.0, seconds)


class FakeScreen:
    """Scripted screen: ``None`` events are timeouts that advance the clock."""

    def __init__(self, clock: FakeClock, events: list[str | None] | None = None,
                 size: tuple[int, int] = (80, 15)):
        self.clock = clock
        self.events = list(events or [])
        self.cols, self.lines = size
        self.frames: list[list[str]] = []
        self.timeouts: list[float] = []

    def size(self) -> tuple[int, int]:
        return self.cols, self.lines

    def wait_key(self, timeout: float) -> str | None:
        self.timeouts.append(timeout)
        event = self.events.pop(0) if self.events else None
        if event is None:
            self.clock.advance(timeout)
        return event

    def draw(self, lines: list[str]) -> None:
        self.frames.append(lines)


# ── fixtures ──────────────────────────────────────────────────────────


@pytest.fixture()
def make_buffer():
    """Factory fixture returning a SeriesBuffer holding ``values``."""

    def _make(values):
        buf = SeriesBuffer(len(values))
        for v in values:
            buf.push(v)
        return buf

    return _make


@pytest.fixture()
def config():
    return Config(colors=False)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def fake_source():
    """Factory fixture for FakeSource."""

    def _make(readings, default=None):
        return FakeSource(readings, default=default)

    return _make


@pytest.fixture()
def fake_screen(clock):
    """Factory fixture for FakeScreen bound to the shared clock."""

    def _make(events=None, size=(80, 15)):
        return FakeScreen(clock, events, size)

    return _make


@pytest.fixture()
def log_records():
    """Enable ifgraph logging and collect emitted messages."""
    records: list[str] = []
    logger.enable("ifgraph")
    sink_id = logger.add(lambda msg: records.append(msg.record["message"]), level="DEBUG")
    yield records
    logger.remove(sink_id)
    logger.disable("ifgraph")


PROC_NET_DEV = """\
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:    1000      10    0    0    0     0          0         0     1000      10    0    0    0     0       0          0
  eth0:  123456     100    0    0    0     0          0         0   654321      90    0    0    0     0       0          0
 wlan0:       5       1    0    0    0     0          0         0        7       1    0    0    0     0       0          0
"""


@pytest.fixture()
def proc_tree(tmp_path):
    """Fake /proc/net/dev plus /sys/class/net/<if>/flags; eth0 is up but not running."""
    proc = tmp_path / "net_dev"
    proc.write_text(PROC_NET_DEV)
    sys_net = tmp_path / "class_net"
    for ifname, flags in {"lo": "0x9", "eth0": "0x1003", "wlan0": "0x1043"}.items():
        (sys_net / ifname).mkdir(parents=True)
        (sys_net / ifname / "flags").write_text(flags + "\n")
    return proc, sys_net
