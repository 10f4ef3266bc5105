"""
Photo Collage
=============

Tile a folder of images into one fixed-column collage. Every image gets a
square cell; it is scaled so its longer side fills the cell and centred
along the shorter one, aspect ratio preserved.

- :func:`compute_layout` decides where each image goes (pure, no pixels).
- :func:`select_images` scans, decodes, filters and orders a folder.
- :func:`render` / :func:`save_collage` draw and encode the result.
"""

__version__ = "1.0.0"

from photo_collage.compose import compose
from photo_collage.config import CollageConfig
from photo_collage.errors import (
    CollageError,
    DecodeFailure,
    DirectoryNotFound,
    EncodeFailure,
    InvalidArgument,
)
from photo_collage.layout import (
    CanvasSpec,
    GridConfig,
    ImageRef,
    Placement,
    Rect,
    cell_origin,
    compute_layout,
    fit_within,
)
from photo_collage.render import encode, output_format_for, render, save_collage
from photo_collage.selector import creation_time, select_images

__all__ = [
    "CanvasSpec",
    "CollageConfig",
    "CollageError",
    "DecodeFailure",
    "DirectoryNotFound",
    "EncodeFailure",
    "GridConfig",
    "ImageRef",
    "InvalidArgument",
    "Placement",
    "Rect",
    "cell_origin",
    "compose",
    "compute_layout",
    "creation_time",
    "encode",
    "fit_within",
    "output_format_for",
    "render",
    "save_collage",
    "select_images",
]
