"""Command-line front end: graph-link INPUT... -c CONFIG [-o OUTPUT] [--link]."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from api.linker_api.errors import GraphInvariantViolation, GraphLinkError
from .engine import GraphEngine

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INTERNAL = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graph-link",
        description="Link graphs and transform them with an ordered list of passes.",
    )
    parser.add_argument("inputs", nargs="+", help="input graph files (.dot, .gv, .json)")
    parser.add_argument("-c", "--config", required=True, help="pipeline file, one pass per line")
    parser.add_argument("-o", "--output", help="write the resulting DOT graph here instead of stdout")
    parser.add_argument(
        "--link", action="store_true",
        help="link all inputs before the first pass even if the pipeline has no 'link'",
    )
    parser.add_argument("--name", help="graph name written to the output")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)")
    parser.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    return parser


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    engine = GraphEngine()
    options = {"name": args.name} if args.name is not None else {}
    try:
        text = engine.process(
            args.inputs,
            args.config,
            output=args.output,
            force_link=args.link,
            **options,
        )
    except GraphInvariantViolation:
        LOGGER.exception("Internal error while transforming the graph.")
        return EXIT_INTERNAL
    except GraphLinkError as exc:
        print(f"graph-link: error: {exc}", file=sys.stderr)
        return EXIT_CONFIG
    except OSError as exc:
        print(f"graph-link: error: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    if args.output is None:
        sys.stdout.write(text)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
