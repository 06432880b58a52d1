"""CLI entry point for slotfs — in-memory namespace driven by a line protocol."""

import argparse
import logging
import os
import sys

from namespace import Namespace
from protocol import Session


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="slotfs — in-memory namespace driven by a line protocol"
    )
    parser.add_argument("script", nargs="?", help="File of commands (default: stdin)")
    parser.add_argument(
        "--skip-dead", action="store_true",
        help="Leave deleted entries out of find results",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every operation")
    parser.add_argument(
        "--log-level", type=str.upper, default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    level = args.log_level or ("DEBUG" if args.verbose else "WARNING")
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    session = Session(sys.stdout, Namespace(find_skips_dead=args.skip_dead))

    if args.script is None:
        sys.exit(session.run(sys.stdin))

    if not os.path.exists(args.script):
        print(f"Error: {args.script} not found", file=sys.stderr)
        sys.exit(1)

    with open(args.script, "r", encoding="utf-8") as f:
        sys.exit(session.run(f))


if __name__ == "__main__":
    main()
