"""Output backends, one per supported file format."""

from .eps_backend import EPSPlotter
from .png_backend import PNGPlotter
from .svg_backend import SVGPlotter

__all__ = ["EPSPlotter", "PNGPlotter", "SVGPlotter"]
