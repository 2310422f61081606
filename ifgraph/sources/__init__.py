"""Counter sources.

Each source is a SampleSource subclass that lives in its own module.
Importing a source module registers it in REGISTRY.
"""

from __future__ import annotations

from ifgraph.exceptions import IfgraphError
from ifgraph.sources.base import SampleSource

REGISTRY: dict[str, type[SampleSource]] = {}

# Short aliases -> canonical name
ALIASES: dict[str, str] = {
    "procfs": "proc",
    "linux": "proc",
    "ps": "psutil",
}

# Order in which "auto" tries sources
PREFERENCE = ["proc", "psutil"]


def register(cls: type[SampleSource]) -> type[SampleSource]:
    """Decorator that adds a source class to the registry."""
    REGISTRY[cls.name] = cls
    return cls


def resolve(name: str) -> str:
    """Resolve a source name, supporting aliases."""
    return ALIASES.get(name, name)


def create_source(name: str = "auto") -> SampleSource:
    """Instantiate a source by name; ``auto`` picks the first available one."""
    if name == "auto":
        for candidate in PREFERENCE:
            cls = REGISTRY.get(candidate)
            if cls is not None and cls.is_available():
                return cls()
        raise IfgraphError("no counter source is available on this system")

    canonical = resolve(name)
    if canonical not in REGISTRY:
        raise IfgraphError(f"unknown source: {name} (available: {', '.join(sorted(REGISTRY))})")
    cls = REGISTRY[canonical]
    if not cls.is_available():
        raise IfgraphError(f"source '{canonical}' is not available on this system")
    return cls()


# Import source modules so they register themselves.
import ifgraph.sources.proc  # noqa: F401, E402
import ifgraph.sources.ps  # noqa: F401, E402

__all__ = ["REGISTRY", "ALIASES", "SampleSource", "create_source", "register", "resolve"]
