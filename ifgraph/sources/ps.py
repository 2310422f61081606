"""Portable counter source backed by psutil."""

from __future__ import annotations

import psutil

from ifgraph.exceptions import CounterReadError
from ifgraph.iface import Counters
from ifgraph.sources import register
from ifgraph.sources.base import SampleSource

LOOPBACK_NAMES = {"lo", "lo0", "loopback"}


@register
class PsutilSource(SampleSource):
    name = "psutil"

    def read_counters(self, ifname: str) -> Counters:
        try:
            pernic = psutil.net_io_counters(pernic=True)
        except (OSError, RuntimeError) as exc:
            raise CounterReadError(f"can't read interface counters: {exc}", ifname) from exc
        stats = pernic.get(ifname)
        if stats is None:
            raise CounterReadError(f"can't read rx and tx bytes for {ifname}", ifname)
        return Counters(rx=stats.bytes_recv, tx=stats.bytes_sent)

    def detect_default_iface(self) -> str | None:
        for ifname, stats in psutil.net_if_stats().items():
            # flags is only populated on POSIX with recent psutil
            flags = set(filter(None, getattr(stats, "flags", "").split(",")))
            if "loopback" in flags or ifname.lower() in LOOPBACK_NAMES:
                continue
            if not stats.isup:
                continue
            if flags and "running" not in flags:
                continue
            return ifname
        return None

    def interfaces(self) -> list[str]:
        return list(psutil.net_io_counters(pernic=True))
