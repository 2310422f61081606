"""ifgraph: live terminal bandwidth graph for a single network interface.

Samples an interface's cumulative RX/TX byte counters every tick and renders
the derived throughput as two scrolling bar graphs with summary statistics.
"""

__version__ = "0.1.0"

from loguru import logger

# The dashboard owns the terminal, so logging stays off until a file sink is configured.
logger.disable(__name__)

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {module}:{function}:{line} - {message}"


def configure_logging(log_file: str | None, level: str = "INFO") -> None:
    """Route ifgraph's loguru records to ``log_file``; no-op when it is None."""
    logger.remove()
    if log_file is None:
        logger.disable(__name__)
        return
    logger.add(log_file, level=level.upper(), format=LOG_FORMAT)
    logger.enable(__name__)


__all__ = ["__version__", "configure_logging", "logger"]
