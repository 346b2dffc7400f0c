"""Entry point for sysboard CLI."""

import logging
import sys

from sysboard.cli import build_parser
from sysboard.config import load_settings

LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def configure_logging(verbose: int) -> None:
    """Log to stderr at the configured level, raised by each -v."""
    if verbose:
        level = LEVELS[min(verbose, len(LEVELS) - 1)]
    else:
        level = logging.getLevelName(load_settings().log_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=level,
    )


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
