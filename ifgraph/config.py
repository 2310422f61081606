"""Command-line configuration."""

from __future__ import annotations

import argparse
import math
from argparse import ArgumentParser
from dataclasses import dataclass

from ifgraph import __version__
from ifgraph.exceptions import ConfigError
from ifgraph.sources import ALIASES, REGISTRY
from ifgraph.stats import ScaleMode
from ifgraph.units import UnitSystem

MIN_DELAY = 0.1
MAX_DELAY = 3600.0
MIN_GRAPH_LINES = 3
DEFAULT_DELAY = 1.0


@dataclass
class Config:
    interface: str | None = None
    delay: float = DEFAULT_DELAY
    lines: int | None = None          # fixed panel height; None follows the terminal
    units: UnitSystem = UnitSystem.BINARY
    colors: bool = True
    scale_mode: ScaleMode = ScaleMode.SYNCHRONIZED
    running_peak: bool = False
    source: str = "auto"
    log_file: str | None = None
    log_level: str = "INFO"


def parse_delay(raw: str) -> float:
    try:
        delay = float(raw)
    except ValueError:
        raise ConfigError(f"invalid number: {raw}") from None
    if not delay > 0 or delay < MIN_DELAY:
        raise ConfigError(f"minimum delay: {MIN_DELAY}")
    if not math.isfinite(delay) or delay > MAX_DELAY:
        raise ConfigError(f"maximum delay: {MAX_DELAY:g}")
    return delay


def parse_lines(raw: str) -> int:
    try:
        lines = int(raw)
    except ValueError:
        raise ConfigError(f"invalid number: {raw}") from None
    if lines < MIN_GRAPH_LINES:
        raise ConfigError(f"minimum graph height: {MIN_GRAPH_LINES}")
    return lines


def _checked(fn):
    """Adapt a ConfigError-raising parser into an argparse ``type=`` callable."""

    def wrapper(raw: str):
        try:
            return fn(raw)
        except ConfigError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    wrapper.__name__ = fn.__name__
    return wrapper


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="ifgraph",
        description="Live terminal bandwidth graph for one network interface.",
        epilog="Keys: q quit, s cycle scale mode, p toggle running peak, u toggle units.",
    )
    parser.add_argument("-i", "--interface", default=None,
                        help="Network interface (default: first up, running, non-loopback)")
    parser.add_argument("-d", "--delay", type=_checked(parse_delay), default=DEFAULT_DELAY,
                        help=f"Redraw delay in seconds, {MIN_DELAY} to {MAX_DELAY:g} (default: {DEFAULT_DELAY})")
    parser.add_argument("-l", "--lines", type=_checked(parse_lines), default=None,
                        help=f"Fixed graph height per direction, minimum {MIN_GRAPH_LINES} "
                             "(default: follow terminal)")
    parser.add_argument("-s", "--si", action="store_true",
                        help="Use SI (decimal) units instead of binary")
    parser.add_argument("-n", "--no-colors", action="store_true",
                        help="Disable colors")
    parser.add_argument("--scale", choices=[m.value for m in ScaleMode], default=ScaleMode.SYNCHRONIZED.value,
                        help="Graph scaling: per-direction max, min-max range, or shared max (default: sync)")
    parser.add_argument(
        "--peak",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Keep the graph max at the running peak instead of the window max (default: off)",
    )
    parser.add_argument("--source", default="auto",
                        choices=["auto", *sorted(REGISTRY), *sorted(ALIASES)],
                        help="Counter source (default: auto)")
    parser.add_argument("--log-file", default=None,
                        help="Write a debug log to this file")
    parser.add_argument("--log-level", default="INFO",
                        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"],
                        help="Log level for --log-file (default: INFO)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: list[str] | None = None) -> Config:
    """Parse ``argv`` into a Config. Invalid input exits via the parser's usage error."""
    args = build_parser().parse_args(argv)
    return Config(
        interface=args.interface,
        delay=args.delay,
        lines=args.lines,
        units=UnitSystem.DECIMAL if args.si else UnitSystem.BINARY,
        colors=not args.no_colors,
        scale_mode=ScaleMode(args.scale),
        running_peak=args.peak,
        source=args.source,
        log_file=args.log_file,
        log_level=args.log_level,
    )
