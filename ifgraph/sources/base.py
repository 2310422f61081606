"""SampleSource: the boundary between the dashboard and the host's counters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ifgraph.iface import Counters


class SampleSource(ABC):
    """Supplies cumulative byte counters for a named interface.

    Subclasses implement: name, read_counters(), detect_default_iface().
    """

    name: str = ""          # e.g. "proc": used by the registry and --source

    @abstractmethod
    def read_counters(self, ifname: str) -> Counters:
        """Return current ``(rx, tx)`` byte totals.

        Raises CounterReadError if the interface is absent or unreadable;
        never returns partial data.
        """

    @abstractmethod
    def detect_default_iface(self) -> str | None:
        """Return the first interface that is up, running and not loopback."""

    def interfaces(self) -> list[str]:
        """Names this source can read counters for."""
        return []

    @classmethod
    def is_available(cls) -> bool:
        """Return True if this source can run on the current system."""
        return True
