"""Command-line interface for plotfile.

Renders the demonstration sheet into the given file (the suffix selects the
format) and offers a few diagnostics::

    plotfile                    # writes testgraphics.eps
    plotfile sheet.png
    plotfile --list-formats
    plotfile --list-fonts
"""

from __future__ import annotations

import argparse
import logging

from plotfile import __version__
from plotfile.app import demo_sheet
from plotfile.config import get_runtime
from plotfile.plotter import finish_graphics, init_graphics, known_formats
from plotfile.render.fonts import find_font_candidates

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "testgraphics.eps"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Accepting an ``argv`` list makes the parser testable programmatically.
    """
    p = argparse.ArgumentParser(
        prog="plotfile",
        description="Draw the plotfile demonstration sheet into an EPS, SVG or PNG file",
    )
    p.add_argument(
        "output",
        nargs="?",
        default=DEFAULT_OUTPUT,
        help=f"Output file; its suffix selects the format (default: {DEFAULT_OUTPUT})",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    p.add_argument(
        "--list-formats",
        action="store_true",
        help="List the supported file suffixes and exit",
    )
    p.add_argument(
        "--list-fonts",
        action="store_true",
        help="List the TrueType fonts usable for PNG text, best first, and exit",
    )
    p.add_argument(
        "--version",
        action="store_true",
        help="Print the plotfile version and exit",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.version:
        print(f"plotfile {__version__}")
        return 0

    if args.list_formats:
        for fmt in known_formats():
            print(f"{fmt.suffix}: {fmt.name}")
        return 0

    if args.list_fonts:
        rc = get_runtime()
        cands = find_font_candidates(
            rc.font_dirs,
            fd_limit=rc.settings.font_fd_limit,
            max_candidates=rc.settings.font_max_candidates,
        )
        if not cands:
            print("no usable fonts found")
        for cand in cands:
            print(f"{cand.priority} {cand.name} ({cand.path})")
        return 0

    plot = init_graphics(demo_sheet.SHEET_WIDTH, demo_sheet.SHEET_HEIGHT, args.output)
    if plot is None:
        logger.error("can't initialize plot '%s', abort", args.output)
        return 1
    try:
        demo_sheet.draw_demo_sheet(plot)
    finally:
        finish_graphics(plot)
    print(f"Done, demo sheet written to '{args.output}'.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
