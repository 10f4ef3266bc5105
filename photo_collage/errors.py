"""Exception types raised while building a collage."""

from __future__ import annotations

from pathlib import Path


class CollageError(Exception):
    """Base class for every error that ends a collage run."""


class InvalidArgument(CollageError, ValueError):
    """A grid parameter or image dimension is not a positive integer."""


class DirectoryNotFound(CollageError, FileNotFoundError):
    """The source directory does not exist or is not a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        super().__init__(f"Could not find a part of the path '{self.directory}'.")


class DecodeFailure(CollageError):
    """A candidate file could not be decoded as an image."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot decode {self.path}: {reason}")


class EncodeFailure(CollageError):
    """The collage could not be encoded or written to *path*."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot write {self.path}: {reason}")
