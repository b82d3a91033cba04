"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from metrix.router import serve

DEFAULT_ADDR = ":8080"

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its "serve" sub-command."""
    parser = argparse.ArgumentParser(
        prog="metrix2",
        description="Track personal metrics and their values through a small web site.",
    )
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    commands = parser.add_subparsers(dest="command", metavar="command")
    serve_parser = commands.add_parser("serve", help="Start the web server")
    serve_parser.add_argument(
        "--addr",
        default=DEFAULT_ADDR,
        help=f"address to listen on (default {DEFAULT_ADDR})",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exit_:
        return 0 if exit_.code in (0, None) else 1
    if args.command is None:
        parser.print_help()
        return 0
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    try:
        serve(args.addr)
    except (OSError, ValueError) as error:
        log.error("ListenAndServe(): %s", error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())