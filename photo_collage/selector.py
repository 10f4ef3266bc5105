"""Source selection: scan a folder, decode, filter by size, and order."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

from photo_collage.errors import DecodeFailure, DirectoryNotFound
from photo_collage.layout import ImageRef

logger = logging.getLogger(__name__)

SortKey = Callable[[Path], Any]


def creation_time(path: Path) -> float:
    """File creation time where the platform records it, else ``st_ctime``."""
    st = path.stat()
    return getattr(st, "st_birthtime", st.st_ctime)


def collect_candidates(directory: str | Path, extensions: Iterable[str]) -> list[Path]:
    """Regular files directly inside *directory* with a supported suffix.

    Raises:
        DirectoryNotFound: if *directory* is missing or not a directory.
    """
    folder = Path(directory)
    if not folder.is_dir():
        raise DirectoryNotFound(folder)
    wanted = {ext.lower() for ext in extensions}
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in wanted
    )


_DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError)


def decode_image(path: Path, eager: bool = True) -> ImageRef:
    """Open *path*, decode it fully, and return an :class:`ImageRef`.

    With *eager* the pixel data is kept on the ref. Without it the pixels
    are decoded once to validate the file, then dropped and the file
    closed; the renderer reopens it later.
    """
    try:
        img = Image.open(path)
    except _DECODE_ERRORS as exc:
        raise DecodeFailure(path, str(exc)) from exc

    try:
        img.load()
    except _DECODE_ERRORS as exc:
        img.close()
        raise DecodeFailure(path, str(exc)) from exc

    if eager:
        return ImageRef(width=img.width, height=img.height, path=path, image=img)
    with img:
        return ImageRef(width=img.width, height=img.height, path=path)


def select_images(
    directory: str | Path,
    *,
    extensions: Iterable[str],
    min_side: int = 32,
    sort_key: SortKey = creation_time,
    eager: bool = True,
    skip_unreadable: bool = False,
) -> list[ImageRef]:
    """Decode every supported image in *directory* and order them.

    Images with either side ``<= min_side`` are dropped. The rest are
    sorted ascending by ``sort_key(path)`` with the file name as tie-break.

    Args:
        directory:       Folder to scan (not recursive).
        extensions:      Lower-case suffixes to accept, e.g. ``{".png"}``.
        min_side:        Size threshold; both sides must exceed it.
        sort_key:        Ordering key per path; creation time by default.
        eager:           Load pixel data now instead of at render time.
        skip_unreadable: Log and skip files that fail to decode.

    Raises:
        DirectoryNotFound: if *directory* does not exist.
        DecodeFailure:     if a file cannot be decoded and
            *skip_unreadable* is false.
    """
    candidates = collect_candidates(directory, extensions)
    logger.debug("Found %d candidate files in %s", len(candidates), directory)

    keyed: list[tuple[Any, str, ImageRef]] = []
    for path in candidates:
        try:
            ref = decode_image(path, eager=eager)
        except DecodeFailure as exc:
            if not skip_unreadable:
                release(kept for _, _, kept in keyed)
                raise
            logger.warning("Skipping %s (%s)", path.name, exc.reason)
            continue

        if ref.width <= min_side or ref.height <= min_side:
            logger.debug("Dropping %s: %dx%d is too small", path.name, *ref.size)
            if ref.image is not None:
                ref.image.close()
            continue
        keyed.append((sort_key(path), path.name, ref))

    keyed.sort(key=lambda item: (item[0], item[1]))
    selected = [ref for _, _, ref in keyed]
    logger.info("Selected %d of %d images", len(selected), len(candidates))
    return selected


def release(images: Iterable[ImageRef]) -> None:
    """Close any decoded images still held by *images*."""
    for ref in images:
        if ref.image is not None:
            ref.image.close()
