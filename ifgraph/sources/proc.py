"""Linux counter source: reads /proc/net/dev and /sys/class/net/*/flags."""

from __future__ import annotations

import os

from ifgraph.exceptions import CounterReadError
from ifgraph.iface import Counters
from ifgraph.sources import register
from ifgraph.sources.base import SampleSource

# <linux/if.h>
IFF_UP = 0x1
IFF_LOOPBACK = 0x8
IFF_RUNNING = 0x40


@register
class ProcNetDevSource(SampleSource):
    name = "proc"

    def __init__(self, proc_path: str = "/proc/net/dev", sys_path: str = "/sys/class/net"):
        self._proc_path = proc_path
        self._sys_path = sys_path

    def read_counters(self, ifname: str) -> Counters:
        try:
            table = self._read_table()
        except OSError as exc:
            raise CounterReadError(f"can't read {self._proc_path}: {exc.strerror}", ifname) from exc
        if ifname not in table:
            raise CounterReadError(f"can't read rx and tx bytes for {ifname}", ifname)
        return table[ifname]

    def detect_default_iface(self) -> str | None:
        try:
            names = list(self._read_table())
        except OSError:
            return None
        for ifname in names:
            flags = self._read_flags(ifname)
            if flags is None or flags & IFF_LOOPBACK:
                continue
            if flags & IFF_UP and flags & IFF_RUNNING:
                return ifname
        return None

    def interfaces(self) -> list[str]:
        return list(self._read_table())

    def _read_table(self) -> dict[str, Counters]:
        """Parse /proc/net/dev -> {ifname: Counters} in file order."""
        table: dict[str, Counters] = {}
        with open(self._proc_path) as f:
            for line in f:
                if ":" not in line:
                    continue
                ifname, data = line.split(":", 1)
                parts = data.split()
                if len(parts) < 9:
                    continue
                table[ifname.strip()] = Counters(
                    rx=int(parts[0]),   # receive bytes
                    tx=int(parts[8]),   # transmit bytes
                )
        return table

    def _read_flags(self, ifname: str) -> int | None:
        try:
            with open(os.path.join(self._sys_path, ifname, "flags")) as f:
                return int(f.read().strip(), 16)
        except (OSError, ValueError):
            return None

    @classmethod
    def is_available(cls) -> bool:
        return os.path.exists("/proc/net/dev")
