"""Exception hierarchy for ifgraph."""


class IfgraphError(Exception):
    """Base exception for all ifgraph errors."""


class InterfaceNotFoundError(IfgraphError):
    """No interface given and none could be detected, or the named one is absent."""


class CounterReadError(IfgraphError):
    """Cumulative counters for an interface could not be read."""

    def __init__(self, message: str, ifname: str | None = None):
        self.ifname = ifname
        super().__init__(message)


class ConfigError(IfgraphError):
    """A command-line value failed validation."""
