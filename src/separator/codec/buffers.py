"""
Raster buffer derivation for the segmentation core.

Turns a decoded Pillow image into the flat byte buffers the flood fill and
extractor operate on: a thresholded single-channel mask and an RGBA
composite, both in row-major order at the image's resolution.
"""

from __future__ import annotations

import cv2
import numpy as np
from PIL import Image

from ..logging import get_logger

logger = get_logger(__name__)


def derive_mask_buffer(image: Image.Image, threshold: int) -> bytes:
    """
    Grayscale then binary-threshold an image, one byte per pixel.

    Pixels whose luma is at or above ``threshold`` become 255, all others 0,
    so comparing the mask with ``< threshold`` selects the dark foreground.
    Alpha is dropped by the RGB conversion, so a fully transparent pixel
    stored as black counts as foreground.

    Args:
        image: Decoded Pillow image in any mode
        threshold: Threshold in the range 0-255

    Returns:
        Mask bytes of length width*height
    """
    rgb = np.asarray(image.convert("RGB"))
    gray = cv2.cvtColor(rgb, cv2.COLOR_RGB2GRAY)

    # cv2.THRESH_BINARY keeps values strictly above thresh
    _, binary = cv2.threshold(gray, threshold - 1, 255, cv2.THRESH_BINARY)

    logger.debug(f"Derived {binary.shape[1]}x{binary.shape[0]} mask at threshold {threshold}")
    return binary.astype(np.uint8).tobytes()


def derive_composite_buffer(image: Image.Image) -> bytes:
    """Return RGBA bytes, with an opaque alpha channel added when the source has none."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    return rgba.tobytes()


def resample(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resize an image to exactly ``width`` x ``height`` with a Lanczos filter."""
    logger.debug(f"Resampling {image.width}x{image.height} -> {width}x{height}")
    return image.resize((width, height), Image.Resampling.LANCZOS)
