"""Entry point: ``python -m ifgraph`` or the ``ifgraph`` console script."""

from __future__ import annotations

import sys

from ifgraph import configure_logging, logger
from ifgraph.config import parse_args
from ifgraph.exceptions import IfgraphError
from ifgraph.monitor import Monitor
from ifgraph.sources import create_source
from ifgraph.terminal import Terminal


def main(argv: list[str] | None = None) -> None:
    config = parse_args(argv)
    configure_logging(config.log_file, config.log_level)

    try:
        source = create_source(config.source)
        terminal = Terminal()
        monitor = Monitor(config, source, terminal)
        monitor.setup()
        with terminal:
            monitor.run()
    except KeyboardInterrupt:
        pass
    except IfgraphError as exc:
        # the terminal is already restored once the with-block has unwound
        logger.error(f"fatal: {exc}")
        print(f"ifgraph: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
