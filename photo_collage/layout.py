"""Grid layout: where each image goes and how large it is drawn.

Images are assigned to square cells in row-major order (image *i* lands in
column ``i % columns`` of row ``i // columns``) and scaled with a
*fit-within* policy: the longer side touches the cell edge, the shorter side
is scaled proportionally and centred. Nothing here touches pixels; the
output is a list of draw instructions for :mod:`photo_collage.render`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from photo_collage.errors import InvalidArgument


@dataclass(frozen=True)
class ImageRef:
    """A source image and its intrinsic pixel dimensions.

    ``image`` holds the decoded Pillow image when selection ran eagerly;
    otherwise it is ``None`` and the renderer reopens ``path``.
    """

    width: int
    height: int
    path: Path | None = None
    image: Any = None

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class GridConfig:
    """Column count and square cell size for one run."""

    columns: int
    cell_size: int

    def __post_init__(self) -> None:
        _require_positive("columns", self.columns)
        _require_positive("cell_size", self.cell_size)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def offset(self, dx: int, dy: int) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def contains(self, other: Rect) -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


@dataclass(frozen=True)
class CanvasSpec:
    """Output canvas size derived from image count and grid parameters."""

    width: int
    height: int
    columns: int
    rows: int
    cell_size: int

    @classmethod
    def for_count(cls, count: int, columns: int, cell_size: int) -> CanvasSpec:
        rows = math.ceil(count / columns)
        return cls(
            width=columns * cell_size,
            height=rows * cell_size,
            columns=columns,
            rows=rows,
            cell_size=cell_size,
        )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def cell(self, index: int) -> Rect:
        x, y = cell_origin(index, self.columns, self.cell_size)
        return Rect(x, y, self.cell_size, self.cell_size)


@dataclass(frozen=True)
class Placement:
    """Draw *image* scaled into *dest*; *dest* sits inside cell (column, row)."""

    image: ImageRef
    dest: Rect
    index: int
    column: int
    row: int


def _require_positive(name: str, value: int) -> None:
    if value <= 0:
        raise InvalidArgument(f"{name} must be a positive integer, got {value}")


def cell_origin(index: int, columns: int, cell_size: int) -> tuple[int, int]:
    """Top-left corner of the cell holding image *index* (row-major fill)."""
    row, column = divmod(index, columns)
    return column * cell_size, row * cell_size


def fit_within(width: int, height: int, cell_size: int) -> Rect:
    """Fit a ``width x height`` image into a square cell at the origin.

    The longer side becomes *cell_size*; the shorter one is scaled with
    integer division and centred. A square image takes the portrait branch,
    which only matters for rounding.

    Returns:
        The destination rectangle relative to the cell's top-left corner.
    """
    _require_positive("width", width)
    _require_positive("height", height)
    _require_positive("cell_size", cell_size)

    if width > height:
        dest_h = cell_size * height // width
        return Rect(0, (cell_size - dest_h) // 2, cell_size, dest_h)

    dest_w = cell_size * width // height
    return Rect((cell_size - dest_w) // 2, 0, dest_w, cell_size)


def compute_layout(
    images: Sequence[ImageRef],
    columns: int,
    cell_size: int,
) -> tuple[CanvasSpec, list[Placement]]:
    """Lay out *images* on a ``columns``-wide grid of square cells.

    Args:
        images:    Ordered images; anything with ``width`` and ``height``.
        columns:   Cells per row (> 0).
        cell_size: Cell side in pixels (> 0).

    Returns:
        The canvas size and one :class:`Placement` per image, in input
        order. An empty input yields a zero-height canvas and no
        placements.

    Raises:
        InvalidArgument: if *columns* or *cell_size* is not positive, or
            an image has a non-positive dimension.
    """
    grid = GridConfig(columns=columns, cell_size=cell_size)
    canvas = CanvasSpec.for_count(len(images), grid.columns, grid.cell_size)

    placements = []
    for index, ref in enumerate(images):
        row, column = divmod(index, grid.columns)
        x, y = column * grid.cell_size, row * grid.cell_size
        dest = fit_within(ref.width, ref.height, grid.cell_size).offset(x, y)
        placements.append(
            Placement(image=ref, dest=dest, index=index, column=column, row=row)
        )
    return canvas, placements
