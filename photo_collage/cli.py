"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from PIL import ImageColor
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from photo_collage.compose import compose
from photo_collage.config import CollageConfig
from photo_collage.errors import CollageError, DirectoryNotFound
from photo_collage.render import RESAMPLE_FILTERS, save_collage
from photo_collage.selector import release, select_images

app = typer.Typer(
    name="photo-collage",
    help="Tile a folder of images into a fixed-column collage.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)

_HELP_OPTIONS = {"help_option_names": ["-h", "-?", "--help"]}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
    )
    logging.getLogger("photo_collage").setLevel(level)


def _parse_colour(value: str) -> tuple[int, int, int]:
    try:
        return ImageColor.getrgb(value)[:3]
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _check_resample(value: str) -> str:
    if value.lower() not in RESAMPLE_FILTERS:
        raise typer.BadParameter(f"choose from {', '.join(RESAMPLE_FILTERS)}")
    return value.lower()


# Defaults come from CollageConfig - single source of truth
_DEFAULTS = CollageConfig()


@app.command(no_args_is_help=True, context_settings=_HELP_OPTIONS)
def collage(
    directory: Path = typer.Argument(..., help="Folder with source images"),
    columns: int = typer.Option(
        _DEFAULTS.columns, "--cols", min=1, help="Number of columns",
    ),
    cell_size: int = typer.Option(
        _DEFAULTS.cell_size, "--cellsize", min=1, help="Cell size in pixels",
    ),
    output: Path = typer.Option(
        _DEFAULTS.output, "--output", "-o",
        help="Output file; .jpg writes JPEG, anything else PNG",
    ),
    quality: int = typer.Option(
        _DEFAULTS.jpeg_quality, "--quality", "-q", min=1, max=95, help="JPEG quality",
    ),
    min_side: int = typer.Option(
        _DEFAULTS.min_side, "--min-side",
        help="Skip images whose width or height is at most this",
    ),
    background: str = typer.Option(
        "#%02x%02x%02x" % _DEFAULTS.background, "--background",
        help="Canvas colour, e.g. '#202020' or 'white'",
    ),
    resample: str = typer.Option(
        _DEFAULTS.resample, "--resample", callback=_check_resample,
        help=f"Scaling filter: {', '.join(RESAMPLE_FILTERS)}",
    ),
    streaming: bool = typer.Option(
        not _DEFAULTS.eager, "--streaming/--eager",
        help="Decode each image only while drawing it (lower memory)",
    ),
    skip_unreadable: bool = typer.Option(
        _DEFAULTS.skip_unreadable, "--skip-unreadable/--strict",
        help="Warn and skip files that cannot be decoded",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Build a collage from the images in DIRECTORY, oldest first."""
    _setup_logging(verbose)
    logger = logging.getLogger("photo_collage")

    cfg = CollageConfig(
        columns=columns,
        cell_size=cell_size,
        output=output,
        jpeg_quality=quality,
        min_side=min_side,
        background=_parse_colour(background),
        resample=resample,
        eager=not streaming,
        skip_unreadable=skip_unreadable,
    )

    t0 = time.perf_counter()
    images = []
    try:
        images = select_images(
            directory,
            extensions=cfg.SUPPORTED_EXTENSIONS,
            min_side=cfg.min_side,
            eager=cfg.eager,
            skip_unreadable=cfg.skip_unreadable,
        )
        if not images:
            console.print(f"\n[yellow]No usable images found in {escape(str(directory))}[/yellow]")
            console.print(
                f"Images must be larger than {cfg.min_side}x{cfg.min_side} px.\n"
            )
            raise typer.Exit(0)

        console.print(
            f"Creating collage with {len(images)} images in {escape(str(cfg.output))}",
            soft_wrap=True,
        )
        canvas, target = compose(images, cfg)
        written = save_collage(target, cfg.output, quality=cfg.jpeg_quality)
    except DirectoryNotFound as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(1) from exc
    except CollageError as exc:
        logger.debug("Run aborted", exc_info=exc)
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(1) from exc
    finally:
        release(images)

    elapsed = time.perf_counter() - t0
    console.print(Panel.fit(
        f"[bold green]DONE[/bold green] - {escape(str(written))}\n"
        f"[dim]{canvas.columns} x {canvas.rows} cells of {canvas.cell_size} px"
        f"  =  {canvas.width}x{canvas.height}  time={elapsed:.1f}s[/dim]",
        border_style="green",
    ))


if __name__ == "__main__":
    app()
