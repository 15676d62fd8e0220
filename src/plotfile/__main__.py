"""Console entrypoint for plotfile.

This module delegates to :mod:`plotfile.cli` so that running
``python -m plotfile`` or the installed ``plotfile`` console script
executes the same code.
"""

from __future__ import annotations

import sys

from plotfile.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`plotfile.cli.main`)."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
