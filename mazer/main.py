# main.py
import argparse
import logging
import sys
from typing import List, Optional

from . import constants as const
from .errors import MazeError
from .request import MazeRequest, build_from_request
from .visualization import render_ascii

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mazer",
        description="Generate a perfect maze from a JSON request.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("request", nargs="?", help="Path to a JSON request file ('-' for stdin)")
    source.add_argument("--json", dest="request_json", help="Inline JSON request")
    parser.add_argument(
        "--format",
        choices=("ascii", "json"),
        default="json",
        help="Output format; ascii is only available for Orthogonal mazes",
    )
    parser.add_argument("--indent", type=int, default=None, help="Indentation for JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def read_request(args: argparse.Namespace) -> str:
    if args.request_json is not None:
        return args.request_json
    if args.request == "-":
        return sys.stdin.read()
    with open(args.request, encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=const.LOG_FORMAT,
    )

    try:
        request = MazeRequest.from_json(read_request(args))
        grid = build_from_request(request)
        if args.format == "ascii":
            output = render_ascii(grid)
        else:
            output = grid.to_json(indent=args.indent) + "\n"
    except OSError as e:
        logger.error("Could not read request: %s", e)
        return 1
    except (MazeError, ValueError) as e:
        logger.error("%s", e)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
