from pathlib import Path
import re
from typing import Optional

import typer

from .config import Settings
from .logging import get_logger
from .codec import DecodeError, EncodeError, InvalidImageError
from .pipeline import separate_objects

app = typer.Typer(help="Image Separator – cut foreground objects out of an image", no_args_is_help=True)

DEFAULT_MIN_PIXELS = 150

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_min_pixels(value: Optional[str], default: int = DEFAULT_MIN_PIXELS) -> int:
    """
    Read a minimum pixel count leniently.

    A leading integer is accepted ("200px" -> 200); missing, non-numeric,
    zero or negative values fall back to ``default``.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if match is None:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def safe_echo(message: str) -> None:
    """Echo message with ASCII fallback for consoles without Unicode support."""
    try:
        typer.echo(message)
    except UnicodeEncodeError:
        fallback_message = (
            message.replace("✅", "[OK]")
            .replace("❌", "[FAIL]")
            .replace("📁", "[DIR]")
            .replace("📋", "[LIST]")
        )
        typer.echo(fallback_message)


@app.command()
def separate(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Image file to separate"),
    output_dir: Path = typer.Argument(Path("output"), help="Directory for object_<n>.png files"),
    min_pixels: str = typer.Argument(str(DEFAULT_MIN_PIXELS), help="Objects must have more than this many pixels"),
    max_dimension: int = typer.Option(2000, min=1, help="Downscale so the larger side is at most this many pixels"),
    threshold: int = typer.Option(240, min=0, max=255, help="Gray level at or above which a pixel is background"),
    workers: Optional[int] = typer.Option(None, min=1, help="Parallel extraction workers (default: executor default)"),
    compression_level: int = typer.Option(6, min=0, max=9, help="PNG compression level"),
    write_manifest: bool = typer.Option(False, "--write-manifest/--no-write-manifest", help="Write manifest.json describing each object"),
) -> None:
    """
    Separate each foreground object of an image into its own PNG file.

    Dark regions (gray below the threshold) that are 4-connected form one
    object. Every object is cropped to its bounding box and written with the
    surrounding background made transparent.
    """
    logger = get_logger(__name__)

    settings = Settings(
        output_dir=output_dir,
        min_pixels=parse_min_pixels(min_pixels),
        max_dimension=max_dimension,
        threshold=threshold,
        workers=workers,
        png_compression_level=compression_level,
        write_manifest=write_manifest,
    )

    try:
        result = separate_objects(input_path, output_dir, settings)
    except InvalidImageError as exc:
        logger.error(f"Invalid image: {exc}")
        safe_echo(f"❌ Failed to process image: {exc}")
        raise typer.Exit(code=1) from exc
    except DecodeError as exc:
        logger.error(f"Failed to read image: {exc}")
        safe_echo(f"❌ Failed to process image: {exc}")
        raise typer.Exit(code=1) from exc
    except EncodeError as exc:
        logger.error(f"Failed to write objects: {exc}")
        safe_echo(f"❌ Failed to process image: {exc}")
        raise typer.Exit(code=1) from exc

    safe_echo(f"✅ Successfully processed {result.object_count} objects")
    safe_echo(f"📁 Output directory: {output_dir}")
    if result.manifest_path is not None:
        safe_echo(f"📋 Manifest: {result.manifest_path.name}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
