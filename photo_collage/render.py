"""Canvas rendering and PNG / JPEG encoding."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from pathlib import Path

from PIL import Image

from photo_collage.errors import DecodeFailure, EncodeFailure, InvalidArgument
from photo_collage.layout import CanvasSpec, ImageRef, Placement

logger = logging.getLogger(__name__)

RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "box": Image.Resampling.BOX,
    "bilinear": Image.Resampling.BILINEAR,
    "hamming": Image.Resampling.HAMMING,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

JPEG_SUFFIXES = frozenset({".jpg", ".jpeg"})


def output_format_for(path: str | Path) -> str:
    """``"JPEG"`` for a ``.jpg`` / ``.jpeg`` path, ``"PNG"`` otherwise."""
    return "JPEG" if Path(path).suffix.lower() in JPEG_SUFFIXES else "PNG"


def resample_filter(name: str) -> Image.Resampling:
    try:
        return RESAMPLE_FILTERS[name.lower()]
    except KeyError:
        raise InvalidArgument(
            f"Unknown resample filter {name!r}; choose from {', '.join(RESAMPLE_FILTERS)}"
        ) from None


def _open_source(ref: ImageRef) -> tuple[Image.Image, bool]:
    """Return the pixels for *ref* and whether the caller must close them."""
    if ref.image is not None:
        return ref.image, False
    if ref.path is None:
        raise InvalidArgument("ImageRef has neither a decoded image nor a path")
    try:
        img = Image.open(ref.path)
    except (OSError, Image.DecompressionBombError) as exc:
        raise DecodeFailure(ref.path, str(exc)) from exc
    try:
        img.load()
    except (OSError, Image.DecompressionBombError) as exc:
        img.close()
        raise DecodeFailure(ref.path, str(exc)) from exc
    return img, True


def _normalise_mode(img: Image.Image) -> Image.Image:
    if img.mode in ("RGB", "RGBA"):
        return img
    if img.mode in ("LA", "PA") or (img.mode == "P" and "transparency" in img.info):
        return img.convert("RGBA")
    return img.convert("RGB")


def render(
    canvas: CanvasSpec,
    placements: Iterable[Placement],
    *,
    background: tuple[int, int, int] = (0, 0, 0),
    resample: str = "lanczos",
) -> Image.Image:
    """Scale each placement's source into its ``dest`` and paste it.

    Sources that came from a lazy selection are opened, drawn and closed
    one at a time, so at most one decoded source is held at once.

    Returns:
        An RGB image of ``canvas.size``.
    """
    method = resample_filter(resample)
    target = Image.new("RGB", canvas.size, background)

    for placement in placements:
        dest = placement.dest
        if dest.width <= 0 or dest.height <= 0:
            # An extreme aspect ratio can round the short side to zero.
            logger.debug("Nothing to draw for image %d (%dx%d)", placement.index, *dest.size)
            continue

        source, owned = _open_source(placement.image)
        try:
            tile = _normalise_mode(source).resize(dest.size, method)
            mask = tile if tile.mode == "RGBA" else None
            target.paste(tile, (dest.x, dest.y), mask)
        finally:
            if owned:
                source.close()
        logger.debug(
            "Placed image %d at col %d, row %d -> %s",
            placement.index, placement.column, placement.row, dest,
        )

    return target


def encode(image: Image.Image, fmt: str = "PNG", *, quality: int = 85) -> bytes:
    """Encode *image* as PNG or JPEG bytes."""
    buf = io.BytesIO()
    if fmt == "JPEG":
        image.convert("RGB").save(buf, format="JPEG", quality=quality)
    else:
        image.save(buf, format="PNG")
    return buf.getvalue()


def save_collage(image: Image.Image, path: str | Path, *, quality: int = 85) -> Path:
    """Encode *image* according to the suffix of *path* and write it.

    Raises:
        EncodeFailure: if encoding fails or the file cannot be written.
    """
    path = Path(path)
    fmt = output_format_for(path)
    try:
        data = encode(image, fmt, quality=quality)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except (OSError, ValueError) as exc:
        raise EncodeFailure(path, str(exc)) from exc
    logger.info("Wrote %s (%s, %dx%d)", path, fmt, *image.size)
    return path
