from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from ..logging import get_logger

logger = get_logger(__name__)


class ImageCodecError(Exception):
    """Base class for failures of the image codec."""


class DecodeError(ImageCodecError):
    """Raised when an image file cannot be read or decoded."""


class InvalidImageError(DecodeError):
    """Raised when an image has no usable width or height."""


class SourceImage:
    """A decoded, orientation-normalized input image."""

    def __init__(self, image: Image.Image, path: Path) -> None:
        self._image = image
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def image(self) -> Image.Image:
        """Return the underlying Pillow image."""
        return self._image

    def close(self) -> None:
        """Release the decoded pixel data."""
        if self._image is not None:
            self._image.close()

    def __enter__(self) -> SourceImage:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def load_and_normalize(source: Path | str) -> SourceImage:
    """
    Decode an image file and apply its stored EXIF orientation.

    Raises:
        DecodeError: If the file is missing or is not a readable image
        InvalidImageError: If the decoded image has a zero dimension
    """
    path = Path(source)
    if not path.exists():
        raise DecodeError(f"Image file does not exist: {path}")

    try:
        with Image.open(path) as raw:
            raw.load()
            # exif_transpose returns a copy even when no rotation is needed
            image = ImageOps.exif_transpose(raw)
    except UnidentifiedImageError as exc:
        raise DecodeError(f"Unrecognized image format: {path}") from exc
    except (OSError, SyntaxError, ValueError) as exc:
        # Pillow reports some corrupt files as SyntaxError
        raise DecodeError(f"Failed to decode image: {path}") from exc

    if not image.width or not image.height:
        image.close()
        raise InvalidImageError(f"Invalid image dimensions for {path}: {image.width}x{image.height}")

    logger.debug(f"Decoded {path} as {image.mode} {image.width}x{image.height}")
    return SourceImage(image, path)
