"""Application modules behind the ``plotfile`` command line tool."""

from . import demo_sheet

__all__ = ["demo_sheet"]
