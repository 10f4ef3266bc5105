"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from photo_collage.layout import GridConfig


@dataclass(frozen=True)
class CollageConfig:
    """All tuneable parameters for a collage run.

    Attributes:
        columns:         Number of cells per row.
        cell_size:       Side of each square cell in pixels.
        output:          Output file; ``.jpg`` selects JPEG, anything else PNG.
        jpeg_quality:    Quality passed to the JPEG encoder (1-95).
        min_side:        Images with a side at or below this are dropped.
        background:      RGB fill for empty canvas areas.
        resample:        Pillow filter name used when scaling into a cell.
        eager:           Decode every image up front (False = stream on render).
        skip_unreadable: Skip undecodable files with a warning instead of aborting.
    """

    # Grid
    columns: int = 8
    cell_size: int = 128

    # Output
    output: Path = field(default_factory=lambda: Path("collage.png"))
    jpeg_quality: int = 85
    background: tuple[int, int, int] = (0, 0, 0)
    resample: str = "lanczos"

    # Selection
    min_side: int = 32
    eager: bool = True
    skip_unreadable: bool = False

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".jfif"}
    )

    @property
    def grid(self) -> GridConfig:
        """Validated grid parameters for :func:`compute_layout`."""
        return GridConfig(columns=self.columns, cell_size=self.cell_size)
