"""Pydantic model for user settings."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .values import FONT_FD_LIMIT, FONT_MAX_CANDIDATES, FONT_SEARCH_DIRS


class Settings(BaseModel):
    """Tunables persisted to ``settings.json``.

    Parameters
    ----------
    font_dirs: Start directories searched recursively for a TrueType font by
        the PNG backend.
    font_fd_limit: Maximum directory depth (one open handle per level) of
        the font search.
    font_max_candidates: Stop collecting font files after this many hits.
    bezier_tolerance: Flatness tolerance in native units for curve
        flattening on the raster backend.
    bezier_max_depth: Subdivision depth after which a curve piece is drawn
        as its chord.
    raster_supersample: Linear oversampling factor used for antialiasing
        PNG output. 1 disables antialiasing.
    eps_font: PostScript font name used by the EPS backend.
    svg_font: ``font-family`` written by the SVG backend.
    default_font_size: Initial font size of every new plot.
    """

    font_dirs: list[str] = Field(default_factory=lambda: list(FONT_SEARCH_DIRS))
    font_fd_limit: int = Field(default=FONT_FD_LIMIT)
    font_max_candidates: int = Field(default=FONT_MAX_CANDIDATES)
    bezier_tolerance: float = Field(default=1.0)
    bezier_max_depth: int = Field(default=16)
    raster_supersample: int = Field(default=2)
    eps_font: str = Field(default="Helvetica")
    svg_font: str = Field(default="Verdana")
    default_font_size: float = Field(default=12.0)

    @field_validator("font_fd_limit", "font_max_candidates", "bezier_max_depth")
    @classmethod
    def _chk_positive_int(cls, v: int) -> int:  # pragma: no cover - trivial
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("bezier_tolerance")
    @classmethod
    def _chk_tol(cls, v: float) -> float:  # pragma: no cover - trivial
        if not v > 0:
            raise ValueError("bezier_tolerance must be > 0")
        return v

    @field_validator("raster_supersample")
    @classmethod
    def _chk_ss(cls, v: int) -> int:
        if not 1 <= v <= 8:
            raise ValueError("raster_supersample must be between 1 and 8")
        return v

    @field_validator("eps_font")
    @classmethod
    def _chk_eps_font(cls, v: str) -> str:
        # Written as a PostScript name literal, so no delimiters or blanks
        if not v or any(ch in v for ch in " ()<>[]{}/%"):
            raise ValueError("eps_font must be a plain PostScript font name")
        return v

    @field_validator("default_font_size")
    @classmethod
    def _chk_font_size(cls, v: float) -> float:  # pragma: no cover - trivial
        if not v > 0:
            raise ValueError("default_font_size must be > 0")
        return v
