"""Command-line interface for petragrid."""

from __future__ import annotations

import argparse
import json
import logging
import sys

import numpy as np

from petragrid.config import default_layout, load_config
from petragrid.errors import GridError
from petragrid.logging_config import setup_logging
from petragrid.model import Grid
from petragrid.reader import read_file

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="petragrid",
        description="Decode Petra binary grid (.grd) files.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE",
                        help="Grid files to read")
    parser.add_argument("-c", "--config", default=None,
                        help="Path to a YAML layout file (first layout is used)")
    parser.add_argument("--json", dest="output_json", action="store_true",
                        help="Output results as JSON")
    parser.add_argument("--data", dest="include_data", action="store_true",
                        help="Include the grid values in the output")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log decoding steps to stderr")
    return parser


def _grid_to_dict(path: str, grid: Grid, include_data: bool = False) -> dict:
    """Convert a decoded grid to a JSON-serialisable dict."""
    d: dict = {"path": path, "header": grid.header(), "error": None}
    if include_data:
        d["data"] = grid.data.values.tolist()
    return d


def _print_grid(path: str, grid: Grid, include_data: bool = False) -> None:
    """Pretty-print a decoded grid to stdout."""
    print(f"{path}:")
    for k, v in grid.header().items():
        print(f"  {k}: {v}")
    if include_data:
        with np.printoptions(threshold=sys.maxsize):
            print(grid.data.values)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI.

    Returns 0 when every file decoded, 1 when any failed and 2 on a
    usage error.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.files:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: no grid files given", file=sys.stderr)
        return 2

    setup_logging(args.verbose)

    if args.config:
        try:
            layouts = load_config(args.config)
        except (OSError, ValueError) as exc:
            print(f"Error: cannot load layout {args.config}: {exc}", file=sys.stderr)
            return 2
        if not layouts:
            print(f"Error: no layouts in {args.config}", file=sys.stderr)
            return 2
        layout = layouts[0]
    else:
        layout = default_layout()

    any_error = False
    results = []
    for path in args.files:
        try:
            grid = read_file(path, layout)
        except (GridError, ValueError) as exc:
            logger.debug("failed to read %s", path, exc_info=True)
            print(f"Error: {path}: {exc}", file=sys.stderr)
            any_error = True
            if args.output_json:
                results.append({"path": path, "header": None, "error": str(exc)})
            continue

        if args.output_json:
            results.append(_grid_to_dict(path, grid, args.include_data))
        else:
            _print_grid(path, grid, args.include_data)

    if args.output_json:
        print(json.dumps(results, indent=2))

    return 1 if any_error else 0


if __name__ == "__main__":
    sys.exit(main())
