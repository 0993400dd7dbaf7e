from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from .ingestion import ImageCodecError
from ..logging import get_logger

logger = get_logger(__name__)


class EncodeError(ImageCodecError):
    """Raised when an object raster cannot be encoded or written."""


def encode_png(rgba: bytes, width: int, height: int, compression_level: int = 6) -> bytes:
    """
    Encode a raw RGBA buffer as PNG bytes.

    Raises:
        EncodeError: If the buffer does not match the dimensions or encoding fails
    """
    expected = width * height * 4
    if len(rgba) != expected:
        raise EncodeError(
            f"RGBA buffer has {len(rgba)} bytes, expected {expected} for {width}x{height}"
        )

    try:
        image = Image.frombytes("RGBA", (width, height), rgba)
        out = io.BytesIO()
        image.save(out, format="PNG", compress_level=compression_level)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Failed to encode {width}x{height} PNG: {exc}") from exc

    return out.getvalue()


def write_file(path: Path, data: bytes) -> Path:
    """Write encoded bytes to ``path``, wrapping I/O failures as EncodeError."""
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise EncodeError(f"Failed to write {path}: {exc}") from exc

    logger.debug(f"Wrote {len(data)} bytes to {path}")
    return path
