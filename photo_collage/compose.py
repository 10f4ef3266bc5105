"""Glue between layout and rendering, shared by the CLI and the web app."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from PIL import Image

from photo_collage.config import CollageConfig
from photo_collage.layout import CanvasSpec, ImageRef, compute_layout
from photo_collage.render import render

logger = logging.getLogger(__name__)


def compose(
    images: Sequence[ImageRef],
    cfg: CollageConfig,
) -> tuple[CanvasSpec, Image.Image]:
    """Lay out *images* on the grid from *cfg* and draw them."""
    grid = cfg.grid
    canvas, placements = compute_layout(images, grid.columns, grid.cell_size)
    logger.info(
        "Canvas %dx%d (%d cols x %d rows of %d px)",
        canvas.width, canvas.height, canvas.columns, canvas.rows, canvas.cell_size,
    )

    t0 = time.perf_counter()
    target = render(
        canvas, placements, background=cfg.background, resample=cfg.resample,
    )
    logger.info("Rendered %d images  (%.1f s)", len(placements), time.perf_counter() - t0)
    return canvas, target
